"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and translating driver errors into the domain
exceptions understood by the API layer (``translate_store_errors``).

Uniqueness and cardinality rules of the registration domain are
declared here as UNIQUE indexes and CHECK constraints so the store
rejects invalid rows even if a caller bypasses the service layer.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings
from .exceptions import StoreUnavailable


# ISO‑8601 with milliseconds so ordering by creation time is stable
# and values parse directly into ``datetime`` fields.
_NOW = "(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: events, registrations and participants
    (
        1,
        f"""
        CREATE TABLE IF NOT EXISTS events (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            slug TEXT NOT NULL UNIQUE CHECK (slug <> '' AND slug NOT GLOB '*[^a-z0-9-]*'),
            description TEXT NOT NULL,
            date TEXT NOT NULL,
            min_team_size INTEGER NOT NULL DEFAULT 1 CHECK (min_team_size >= 1),
            max_team_size INTEGER NOT NULL DEFAULT 4 CHECK (max_team_size >= 1),
            is_active INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMP NOT NULL DEFAULT {_NOW},
            updated_at TIMESTAMP NOT NULL DEFAULT {_NOW}
        );

        CREATE TABLE IF NOT EXISTS registrations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            event_name TEXT NOT NULL,
            is_team INTEGER NOT NULL DEFAULT 0,
            team_name TEXT,
            leader_email TEXT NOT NULL,
            total_participants INTEGER NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT {_NOW},
            updated_at TIMESTAMP NOT NULL DEFAULT {_NOW},
            CHECK (
                (is_team = 0 AND total_participants = 1 AND (team_name IS NULL OR team_name = ''))
                OR (is_team = 1 AND total_participants BETWEEN 2 AND 4 AND length(trim(team_name)) > 0)
            )
        );

        CREATE TABLE IF NOT EXISTS participants (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            registration_id INTEGER NOT NULL,
            name TEXT NOT NULL CHECK (length(name) BETWEEN 2 AND 100),
            gender TEXT NOT NULL CHECK (gender IN ('Male', 'Female', 'Other')),
            roll_number TEXT NOT NULL,
            contact_number TEXT NOT NULL
                CHECK (length(contact_number) = 10 AND contact_number NOT GLOB '*[^0-9]*'),
            email TEXT NOT NULL,
            is_leader INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP NOT NULL DEFAULT {_NOW},
            updated_at TIMESTAMP NOT NULL DEFAULT {_NOW},
            FOREIGN KEY(registration_id) REFERENCES registrations(id) ON DELETE CASCADE
        );

        CREATE UNIQUE INDEX IF NOT EXISTS ux_registrations_event_leader
            ON registrations(event_name, leader_email);
        CREATE UNIQUE INDEX IF NOT EXISTS ux_participants_registration_email
            ON participants(registration_id, email);
        CREATE INDEX IF NOT EXISTS idx_registrations_event_name ON registrations(event_name);
        CREATE INDEX IF NOT EXISTS idx_participants_registration_id ON participants(registration_id);
        CREATE INDEX IF NOT EXISTS idx_participants_roll_number ON participants(roll_number);
        CREATE INDEX IF NOT EXISTS idx_events_is_active ON events(is_active);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name, and foreign key enforcement is switched on for the lifetime
    of the connection (SQLite disables it by default).  Raises
    ``StoreUnavailable`` when the database file cannot be opened.
    """
    try:
        conn = sqlite3.connect(get_database_path())
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as e:
        logging.getLogger(__name__).error("Cannot open database %s: %s", settings.database_url, e)
        raise StoreUnavailable("Database is unavailable", details=str(e)) from e
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """Turn driver failures into ``StoreUnavailable``.

    ``sqlite3.IntegrityError`` passes through untouched: constraint
    violations carry meaning (duplicates, invalid rows) and the calling
    service decides which domain error they map to.
    """
    try:
        yield
    except sqlite3.IntegrityError:
        raise
    except sqlite3.Error as e:
        logging.getLogger(__name__).exception("Database operation failed")
        raise StoreUnavailable("Database operation failed", details=str(e)) from e


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies every migration in
    ``MIGRATIONS`` with a higher version number.
    """
    logger = logging.getLogger(__name__)
    with translate_store_errors(), get_cursor() as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version
                logger.info("Applied migration %s", version)
