#!/usr/bin/env python3
"""
Seed the registration database with the default events.

Events that already exist (same name or slug) are left untouched, so
the script can be run repeatedly.  Migrations are applied first, which
also creates the database file if needed.

Usage:
    python seed_events.py --db ./event_registration.db
    python seed_events.py --db ./event_registration.db --inactive "Innovation Workshop"
"""

import argparse
import sys

from event_registration_api.app.core import db
from event_registration_api.app.core.config import settings
from event_registration_api.app.core.exceptions import StoreUnavailable


DEFAULT_EVENTS = [
    {
        "name": "Hackathon 2025",
        "slug": "hackathon-2025",
        "description": "Code, Build, and Win! 48-hour coding marathon",
        "date": "January 15-17, 2025",
        "max_team_size": 4,
        "min_team_size": 1,
    },
    {
        "name": "Startup Pitch Competition",
        "slug": "startup-pitch-2025",
        "description": "Present your innovative startup idea to investors",
        "date": "February 5, 2025",
        "max_team_size": 5,
        "min_team_size": 1,
    },
    {
        "name": "Innovation Workshop",
        "slug": "innovation-workshop",
        "description": "Learn about latest tech trends and innovations",
        "date": "March 10, 2025",
        "max_team_size": 1,
        "min_team_size": 1,
    },
]


def seed(events=DEFAULT_EVENTS, inactive=()) -> int:
    """Insert ``events`` that are not present yet and return how many were added."""
    db.init_db()
    added = 0
    with db.translate_store_errors(), db.get_cursor() as cursor:
        for event in events:
            cursor.execute(
                """
                INSERT OR IGNORE INTO events (name, slug, description, date, min_team_size, max_team_size, is_active)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event["name"],
                    event["slug"],
                    event["description"],
                    event["date"],
                    event["min_team_size"],
                    event["max_team_size"],
                    0 if event["name"] in inactive else 1,
                ),
            )
            added += cursor.rowcount
    return added


def main():
    ap = argparse.ArgumentParser(description="Seed default events into the registration database.")
    ap.add_argument("--db", help="Path to the SQLite DB file (defaults to DATABASE_URL)")
    ap.add_argument("--inactive", action="append", default=[], help="Event name to seed as inactive")
    args = ap.parse_args()

    if args.db:
        settings.database_url = args.db

    try:
        added = seed(inactive=set(args.inactive))
    except StoreUnavailable as e:
        print(f"[!] {e.message}: {e.details}", file=sys.stderr)
        sys.exit(1)
    print(f"[+] {added} event(s) added, {len(DEFAULT_EVENTS) - added} already present")


if __name__ == "__main__":
    main()
