#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rebuild place_specialties from the legacy comma-separated places.specialties text.
Specialties missing from the specialties table are created (name match ignores case).

Usage:
  python -m antiques_trail.scripts.sync_specialties [--dry-run] [--db path/to.db]
"""

from __future__ import annotations
import argparse
import logging
import os

from antiques_trail.db import get_conn, transaction
from antiques_trail.logs import LogContext, setup_logging
from antiques_trail.repository import place_repo, specialty_repo
from antiques_trail.services.specialty_svc import link_specialties_by_name, split_specialty_text

logger = logging.getLogger(__name__)


def plan_sync() -> list[dict]:
    """Per place: the names in its text and which of them do not exist yet."""
    plan = []
    with get_conn() as conn:
        for r in place_repo.list_with_specialties_text(conn):
            names = split_specialty_text(r["specialties"])
            missing = [n for n in names if specialty_repo.find_by_name(conn, n) is None]
            plan.append({"id": r["id"], "name": r["name"], "names": names, "missing": missing})
    return plan


def sync_all(dry_run: bool = False) -> dict:
    plan = plan_sync()
    first_spelling: dict[str, str] = {}
    for p in plan:
        for n in p["missing"]:
            first_spelling.setdefault(n.lower(), n)
    created = sorted(first_spelling.values())
    if not dry_run:
        with get_conn() as conn:
            with transaction(conn):
                for p in plan:
                    link_specialties_by_name(conn, p["id"], ", ".join(p["names"]))
    return {"places": len(plan), "new_specialties": created}


def main(argv=None):
    ap = argparse.ArgumentParser(description="Sync place_specialties from places.specialties text")
    ap.add_argument("--dry-run", action="store_true")
    ap.add_argument("--db", default=None)
    args = ap.parse_args(argv)

    setup_logging("INFO")
    if args.db:
        os.environ["ANTIQUES_DB_PATH"] = args.db

    log = LogContext("SYNC_SPECIALTIES", user="cli")
    log.set_payload({"dry_run": args.dry_run})
    res = sync_all(dry_run=args.dry_run)
    for n in res["new_specialties"]:
        logger.info("%s specialty: %s", "Would create" if args.dry_run else "Created", n)
    log.set_after(res)
    log.write("OK")
    print({"message": "ok", "dry_run": args.dry_run, **res})


if __name__ == "__main__":
    main()
