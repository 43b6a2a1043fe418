"""
Pydantic models for events and per‑event statistics.

``EventCreate`` accepts the admin form as posted; required fields are
checked by ``EventService`` so that a missing field produces the same
400 response as any other rule violation.
"""

from datetime import datetime
from typing import List, Optional

from .common import CamelModel
from .registration import RegistrationDetail


DEFAULT_MIN_TEAM_SIZE = 1
DEFAULT_MAX_TEAM_SIZE = 4


class EventCreate(CamelModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    min_team_size: Optional[int] = None
    max_team_size: Optional[int] = None


class EventRead(CamelModel):
    id: int
    name: str
    slug: str
    description: str
    date: str
    min_team_size: int = DEFAULT_MIN_TEAM_SIZE
    max_team_size: int = DEFAULT_MAX_TEAM_SIZE
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EventStats(CamelModel):
    total_registrations: int = 0
    individual_count: int = 0
    team_count: int = 0
    total_participants: int = 0


class EventStat(EventStats):
    """Statistics row of the admin dashboard for one active event."""

    event_name: str


class EventDetail(CamelModel):
    stats: EventStats
    registrations: List[RegistrationDetail]
