#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Clean opening-hours text stored on places.
- Strip leading zeros from hours: "09:00-17:30" -> "9:00-17:30", "07.30am" -> "7.30am"
- Drop stray zeros glued to words: "0By appointment" -> "By appointment", "0Closed" -> "Closed"

Usage:
  python -m antiques_trail.scripts.clean_opening_hours [--dry-run] [--db path/to.db]
"""

from __future__ import annotations
import argparse
import logging
import os
import re

from antiques_trail.db import get_conn, transaction
from antiques_trail.logs import LogContext, setup_logging
from antiques_trail.repository import place_repo

logger = logging.getLogger(__name__)

_STRAY_ZERO = re.compile(r"\b0+(?=(by appointment|closed))", re.IGNORECASE)
# hour part only; minutes (after ':' or '.') keep their zeros
_LEADING_ZERO = re.compile(r"(?<![\d:.])0(\d)(?=[:.]\d|\s*[ap]\.?m)", re.IGNORECASE)


def clean_hours_text(text: str | None) -> str | None:
    if not text:
        return text
    text = _STRAY_ZERO.sub("", text)
    return _LEADING_ZERO.sub(r"\1", text)


def clean_all(dry_run: bool = False) -> list[dict]:
    """Returns one {id, name, before, after} per place whose text changes."""
    changes = []
    with get_conn() as conn:
        for r in place_repo.list_opening_hours(conn):
            fixed = clean_hours_text(r["opening_hours"])
            if fixed != r["opening_hours"]:
                changes.append({"id": r["id"], "name": r["name"], "before": r["opening_hours"], "after": fixed})
        if not dry_run and changes:
            with transaction(conn):
                for c in changes:
                    place_repo.set_opening_hours(conn, c["id"], c["after"])
    return changes


def main(argv=None):
    ap = argparse.ArgumentParser(description="Remove leading zeros from opening hours")
    ap.add_argument("--dry-run", action="store_true", help="report changes without writing")
    ap.add_argument("--db", default=None)
    args = ap.parse_args(argv)

    setup_logging("INFO")
    if args.db:
        os.environ["ANTIQUES_DB_PATH"] = args.db

    log = LogContext("CLEAN_OPENING_HOURS", user="cli")
    log.set_payload({"dry_run": args.dry_run})
    changes = clean_all(dry_run=args.dry_run)
    for c in changes:
        logger.info("%s (id=%s): %r -> %r", c["name"], c["id"], c["before"], c["after"])
    log.set_after({"changed": len(changes)})
    log.write("OK")
    verb = "Would update" if args.dry_run else "Updated"
    print(f"{verb} {len(changes)} place(s).")


if __name__ == "__main__":
    main()
