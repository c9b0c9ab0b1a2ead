#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Edinburgh Antiques Trail (SQLite + FastAPI)

Commands:
  init                Create/upgrade the schema and seed default place types and specialties
  migrate             Apply pending schema migrations only
  seed                Insert default place types and specialties (idempotent)
  import-csv          Import places from a CSV file
  stats               Print place counts by type, price range and specialty (optionally export CSV)

Notes:
- The database path comes from --db, then env ANTIQUES_DB_PATH, then config.yaml.
- Serve the API with `uvicorn antiques_trail.api:app`.
"""

import argparse
import os

import pandas as pd

from antiques_trail.config import get_settings
from antiques_trail.db import get_conn, get_db_path
from antiques_trail.logs import LogContext, setup_logging
from antiques_trail.migrations import apply_migrations, current_version
from antiques_trail.services.import_svc import import_places_csv
from antiques_trail.services.seed_svc import seed_defaults


# ---------------- Commands ----------------

def cmd_init(args):
    with get_conn() as conn:
        applied = apply_migrations(conn)
    res = seed_defaults()
    print(f"DB initialized at {get_db_path()} (migrations applied: {len(applied)}).")
    print(f"Seeded {res['created_place_types']} place types, {res['created_specialties']} specialties.")


def cmd_migrate(args):
    with get_conn() as conn:
        applied = apply_migrations(conn)
        version = current_version(conn)
    if applied:
        print("Applied:", ", ".join(applied))
    print(f"Schema version: {version}")


def cmd_seed(args):
    print(seed_defaults())


def cmd_import_csv(args):
    with get_conn() as conn:
        apply_migrations(conn)
    log = LogContext("IMPORT_CSV", user="cli")
    try:
        res = import_places_csv(args.file, log)
    except Exception as e:
        log.write("ERROR", str(e))
        raise
    log.write("OK")
    print({"message": "ok", **res})


def cmd_stats(args):
    with get_conn() as conn:
        by_type = pd.read_sql_query(
            """
            SELECT pt.name AS type, COUNT(p.id) AS places
            FROM place_types pt LEFT JOIN places p ON p.type_id = pt.id
            GROUP BY pt.id ORDER BY places DESC, pt.name
            """,
            conn,
        )
        by_price = pd.read_sql_query(
            "SELECT COALESCE(price_range, '-') AS price_range, COUNT(*) AS places "
            "FROM places GROUP BY price_range ORDER BY price_range",
            conn,
        )
        by_specialty = pd.read_sql_query(
            """
            SELECT s.name, COUNT(DISTINCT ps.place_id) AS places
            FROM specialties s LEFT JOIN place_specialties ps ON s.id = ps.specialty_id
            GROUP BY s.id ORDER BY s.name
            """,
            conn,
        )

    pd.set_option("display.max_rows", 200)
    pd.set_option("display.width", 160)

    for title, df in (("Places by Type", by_type), ("Places by Price Range", by_price), ("Places by Specialty", by_specialty)):
        print(f"\n=== {title} ===")
        print(df if not df.empty else "(empty)")

    if args.export:
        out_dir = args.export
        os.makedirs(out_dir, exist_ok=True)
        by_type.to_csv(os.path.join(out_dir, "places_by_type.csv"), index=False, encoding="utf-8-sig")
        by_price.to_csv(os.path.join(out_dir, "places_by_price_range.csv"), index=False, encoding="utf-8-sig")
        by_specialty.to_csv(os.path.join(out_dir, "places_by_specialty.csv"), index=False, encoding="utf-8-sig")
        print(f"\nCSV exported to {out_dir}")


# ---------------- Entry ----------------

def main(argv=None):
    parser = argparse.ArgumentParser(description="Edinburgh Antiques Trail (SQLite + FastAPI)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    parser.add_argument("--db", default=None, help="SQLite file (overrides config)")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="migrate and seed defaults")
    p_init.set_defaults(func=cmd_init)

    p_mig = sub.add_parser("migrate", help="apply pending migrations")
    p_mig.set_defaults(func=cmd_migrate)

    p_seed = sub.add_parser("seed", help="seed default place types and specialties")
    p_seed.set_defaults(func=cmd_seed)

    p_imp = sub.add_parser("import-csv", help="import places from CSV")
    p_imp.add_argument("file")
    p_imp.set_defaults(func=cmd_import_csv)

    p_stats = sub.add_parser("stats", help="print directory statistics")
    p_stats.add_argument("--export", default=None, help="directory to write CSV files into")
    p_stats.set_defaults(func=cmd_stats)

    args = parser.parse_args(argv)
    settings = get_settings(args.config)
    setup_logging(settings["log_level"], settings["log_file"])
    if args.db:
        os.environ["ANTIQUES_DB_PATH"] = args.db
    elif args.config and settings.get("db_path") and not os.environ.get("ANTIQUES_DB_PATH"):
        os.environ["ANTIQUES_DB_PATH"] = settings["db_path"]

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
