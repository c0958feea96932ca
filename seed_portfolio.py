#!/usr/bin/env python3
"""
Seed a portfolio SQLite database from a JSON document.

This performs the same one-time import the server runs at startup:
if the database already holds items nothing is changed.  Useful for
preparing a database file before deploying it.

Usage:
    python seed_portfolio.py --db ./server.db --source ./site/assets/data/portfolio.json
"""

import argparse
import logging
import sys

from portfolio_server.app.core.config import settings
from portfolio_server.app.core.errors import StoreError
from portfolio_server.app.core.logging_config import setup_logging
from portfolio_server.app.services.portfolio_store import PortfolioStore


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Import portfolio items from JSON into an empty SQLite database.")
    ap.add_argument("--db", default=str(settings.database_path), help="Path to SQLite DB file (created if missing)")
    ap.add_argument("--source", default=str(settings.seed_file), help="Path to the JSON seed document")
    ap.add_argument("--verbose", action="store_true", help="Log debug messages")
    args = ap.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else "WARNING")
    logger = logging.getLogger("seed_portfolio")

    try:
        store = PortfolioStore(args.db)
        imported = store.seed_from_source(args.source)
        total = store.count()
    except StoreError as exc:
        logger.debug("Seeding failed", exc_info=exc)
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    if imported == total:
        print(f"[+] Imported {imported} items into {args.db}")
    else:
        print(f"[=] {args.db} already holds {total} items, nothing imported")
    return 0


if __name__ == "__main__":
    sys.exit(main())
