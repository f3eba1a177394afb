#!/usr/bin/env python3
"""
Load movies and customers into the Video Store SQLite database.

The seed file is JSON with two optional lists::

    {
      "movies": [{"title": "Alien", "overview": "...", "release_date": "1979-05-25",
                  "inventory": 3}],
      "customers": [{"name": "Ada", "postal_code": "98101", "phone": "(206) 555-0100"}]
    }

Movies whose title already exists are skipped.  Migrations are applied
first, so the script can be pointed at a fresh database.

Usage:
    python seed_db.py --db ./video_store.db --file seeds.json
"""

import argparse
import json
import logging
import os
import sys

from video_store_api.app.core.config import settings
from video_store_api.app.core.db import get_cursor, init_db
from video_store_api.app.core.logging_config import setup_logging


def main():
    ap = argparse.ArgumentParser(description="Seed the Video Store database (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file; defaults to DATABASE_URL")
    ap.add_argument("--file", required=True, help="JSON seed file with 'movies' and 'customers'")
    args = ap.parse_args()

    setup_logging(settings.log_level)
    logger = logging.getLogger("seed_db")

    if not os.path.exists(args.file):
        print(f"[!] Seed file not found: {args.file}", file=sys.stderr)
        sys.exit(1)
    with open(args.file, encoding="utf-8") as fh:
        data = json.load(fh)

    if args.db:
        settings.database_url = os.path.abspath(args.db)

    init_db()
    movies_added = customers_added = 0
    with get_cursor() as cur:
        for movie in data.get("movies", []):
            cur.execute(
                """
                INSERT OR IGNORE INTO movies (title, external_id, overview, release_date, image_url, inventory)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    movie["title"],
                    movie.get("external_id"),
                    movie.get("overview"),
                    movie.get("release_date"),
                    movie.get("image_url"),
                    int(movie.get("inventory", 0)),
                ),
            )
            movies_added += cur.rowcount
        for customer in data.get("customers", []):
            cur.execute(
                "INSERT INTO customers (name, postal_code, phone) VALUES (?, ?, ?)",
                (customer["name"], customer.get("postal_code"), customer.get("phone")),
            )
            customers_added += 1

    logger.info("Seeded %s movies and %s customers", movies_added, customers_added)
    print(f"[+] Added {movies_added} movies and {customers_added} customers")


if __name__ == "__main__":
    main()
