"""
Aggregated views for the admin dashboard.

All numbers are recomputed from the registration rows on every call;
nothing is cached.  Counting happens in Python over the fetched rows
so the dashboard list and the per‑event detail share one summary
function and always agree with each other.

Participants are attached to registrations through the explicit
``participants_of`` lookup or, for a whole event, one batched
``IN (...)`` query grouped in memory by registration id.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from event_registration_api.app.core.db import get_connection, translate_store_errors
from event_registration_api.app.schemas.event import EventDetail, EventStat, EventStats
from event_registration_api.app.schemas.participant import ParticipantRead
from event_registration_api.app.schemas.registration import RegistrationDetail, RegistrationRead
from event_registration_api.app.services.registration_service import (
    PARTICIPANT_COLUMNS,
    REGISTRATION_COLUMNS,
    participant_from_row,
    registration_from_row,
)


# SQLite's default limit on bound parameters is 999 on older builds.
_IN_CHUNK = 500


def summarise(registrations: Iterable[RegistrationRead]) -> EventStats:
    """Partition registrations on ``is_team`` and sum their participants."""
    stats = EventStats()
    for registration in registrations:
        stats.total_registrations += 1
        if registration.is_team:
            stats.team_count += 1
        else:
            stats.individual_count += 1
        stats.total_participants += registration.total_participants
    return stats


class AdminService:
    """Service providing statistics and registration detail for administrators."""

    @classmethod
    async def compute_stats(cls) -> List[EventStat]:
        """Return one statistics row per active event, in creation order."""
        conn = get_connection()
        try:
            with translate_store_errors():
                events = conn.execute(
                    "SELECT name FROM events WHERE is_active = 1 ORDER BY id"
                ).fetchall()
                rows = conn.execute(
                    f"SELECT {REGISTRATION_COLUMNS} FROM registrations "
                    "WHERE event_name IN (SELECT name FROM events WHERE is_active = 1)"
                ).fetchall()
        finally:
            conn.close()

        by_event: Dict[str, List[RegistrationRead]] = defaultdict(list)
        for row in rows:
            by_event[row["event_name"]].append(registration_from_row(row))

        return [
            EventStat(event_name=event["name"], **summarise(by_event[event["name"]]).model_dump())
            for event in events
        ]

    @classmethod
    async def participants_of(cls, registration_id: int) -> List[ParticipantRead]:
        """Return the participants of one registration, leader first."""
        conn = get_connection()
        try:
            with translate_store_errors():
                rows = conn.execute(
                    f"SELECT {PARTICIPANT_COLUMNS} FROM participants "
                    "WHERE registration_id = ? ORDER BY is_leader DESC, id",
                    (registration_id,),
                ).fetchall()
            return [participant_from_row(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def event_detail(cls, event_name: str) -> EventDetail:
        """Return statistics and the expanded registrations of one event.

        An unknown event name yields zero counts and an empty list.
        """
        event_name = event_name.strip()
        conn = get_connection()
        try:
            with translate_store_errors():
                registration_rows = conn.execute(
                    f"SELECT {REGISTRATION_COLUMNS} FROM registrations "
                    "WHERE event_name = ? ORDER BY created_at DESC, id DESC",
                    (event_name,),
                ).fetchall()
                registrations = [registration_from_row(row) for row in registration_rows]

                participant_rows = []
                ids = [registration.id for registration in registrations]
                for start in range(0, len(ids), _IN_CHUNK):
                    chunk = ids[start:start + _IN_CHUNK]
                    placeholders = ", ".join("?" for _ in chunk)
                    participant_rows.extend(
                        conn.execute(
                            f"SELECT {PARTICIPANT_COLUMNS} FROM participants "
                            f"WHERE registration_id IN ({placeholders}) ORDER BY is_leader DESC, id",
                            tuple(chunk),
                        ).fetchall()
                    )
        finally:
            conn.close()

        grouped: Dict[int, List[ParticipantRead]] = defaultdict(list)
        for row in participant_rows:
            grouped[row["registration_id"]].append(participant_from_row(row))

        detailed = [
            RegistrationDetail(**registration.model_dump(), participants=grouped[registration.id])
            for registration in registrations
        ]
        return EventDetail(stats=summarise(registrations), registrations=detailed)
