"""
Business logic for events.

Events are created by the administrator and never deleted.  Name and
slug are unique; the store's UNIQUE constraints are the final word and
a violation surfaces as ``DuplicateEvent``.
"""

import logging
import re
import sqlite3
from typing import List

from event_registration_api.app.core.db import get_connection, translate_store_errors
from event_registration_api.app.core.exceptions import DuplicateEvent, NotFound, ValidationFailed
from event_registration_api.app.schemas.event import (
    DEFAULT_MAX_TEAM_SIZE,
    DEFAULT_MIN_TEAM_SIZE,
    EventCreate,
    EventRead,
)


SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")

EVENT_COLUMNS = (
    "id, name, slug, description, date, min_team_size, max_team_size, is_active, created_at, updated_at"
)


def event_from_row(row: sqlite3.Row) -> EventRead:
    return EventRead(
        id=row["id"],
        name=row["name"],
        slug=row["slug"],
        description=row["description"],
        date=row["date"],
        min_team_size=row["min_team_size"],
        max_team_size=row["max_team_size"],
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class EventService:
    """Service for creating and listing events."""

    @classmethod
    def normalise(cls, data: EventCreate) -> dict:
        """Check an event form and return the column values to insert.

        Raises ``ValidationFailed`` when a required field is missing,
        the slug is malformed or the team size bounds are inconsistent.
        """
        fields = {
            key: (getattr(data, key) or "").strip()
            for key in ("name", "slug", "description", "date")
        }
        if not all(fields.values()):
            raise ValidationFailed("All required fields must be provided")

        fields["slug"] = fields["slug"].lower()
        if not SLUG_PATTERN.match(fields["slug"]):
            raise ValidationFailed("Slug can only contain lowercase letters, numbers, and hyphens")

        min_size = data.min_team_size if data.min_team_size is not None else DEFAULT_MIN_TEAM_SIZE
        max_size = data.max_team_size if data.max_team_size is not None else DEFAULT_MAX_TEAM_SIZE
        if min_size < 1 or max_size < 1:
            raise ValidationFailed("Team sizes must be at least 1")
        if min_size > max_size:
            raise ValidationFailed("Minimum team size cannot exceed maximum team size")

        fields["min_team_size"] = min_size
        fields["max_team_size"] = max_size
        return fields

    @classmethod
    async def create_event(cls, data: EventCreate) -> EventRead:
        """Insert a new active event and return it."""
        logger = logging.getLogger(__name__)
        fields = cls.normalise(data)
        conn = get_connection()
        try:
            with translate_store_errors(), conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO events (name, slug, description, date, min_team_size, max_team_size, is_active)
                    VALUES (?, ?, ?, ?, ?, ?, 1)
                    """,
                    (
                        fields["name"],
                        fields["slug"],
                        fields["description"],
                        fields["date"],
                        fields["min_team_size"],
                        fields["max_team_size"],
                    ),
                )
                row = cursor.execute(
                    f"SELECT {EVENT_COLUMNS} FROM events WHERE id = ?", (cursor.lastrowid,)
                ).fetchone()
        except sqlite3.IntegrityError as e:
            if "UNIQUE constraint failed" in str(e):
                logger.warning("Event '%s' (%s) already exists", fields["name"], fields["slug"])
                raise DuplicateEvent("Event with this name or slug already exists") from e
            raise ValidationFailed("Validation failed", details=str(e)) from e
        finally:
            conn.close()
        logger.info("Event '%s' created with slug %s", fields["name"], fields["slug"])
        return event_from_row(row)

    @classmethod
    async def list_events(cls, active_only: bool = False) -> List[EventRead]:
        """Return events, most recently created first."""
        query = f"SELECT {EVENT_COLUMNS} FROM events"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY created_at DESC, id DESC"
        conn = get_connection()
        try:
            with translate_store_errors():
                rows = conn.execute(query).fetchall()
            return [event_from_row(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_event_by_slug(cls, slug: str) -> EventRead:
        """Return an active event by slug or raise ``NotFound``."""
        conn = get_connection()
        try:
            with translate_store_errors():
                row = conn.execute(
                    f"SELECT {EVENT_COLUMNS} FROM events WHERE slug = ? AND is_active = 1",
                    (slug.strip().lower(),),
                ).fetchone()
        finally:
            conn.close()
        if not row:
            raise NotFound(f"Event '{slug}' not found")
        return event_from_row(row)
