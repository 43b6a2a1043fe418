"""
Pydantic models for registrations.

``RegistrationSubmit`` mirrors the public form and is deliberately
lenient: every field is optional so that the ordered business rules in
``RegistrationService`` decide which message the submitter sees.
``RegistrationCreate`` is the validated row written to the store, and
the ``*Read``/``RegistrationResult`` models are what the API returns.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from .common import CamelModel
from .participant import ParticipantRead, normalise_email


PARTICIPATION_TYPES = ("solo", "team")
MIN_TEAM_MEMBERS = 1
MAX_TEAM_MEMBERS = 3
TEAM_NAME_MIN_LENGTH = 3
TEAM_NAME_MAX_LENGTH = 100


class TeamMemberIn(CamelModel):
    name: Optional[str] = None
    gender: Optional[str] = None
    roll_number: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None


class RegistrationSubmit(CamelModel):
    """Registration form as posted by the browser.

    The participation kind is given either as ``participationType``
    (``"solo"``/``"team"``) or as the boolean ``isTeam``.
    """

    participation_type: Optional[str] = None
    is_team: Optional[bool] = None
    team_name: Optional[str] = None
    leader_name: Optional[str] = None
    leader_gender: Optional[str] = None
    leader_roll_number: Optional[str] = None
    leader_contact_number: Optional[str] = None
    leader_email: Optional[str] = None
    team_members: List[TeamMemberIn] = Field(default_factory=list)

    @field_validator("team_members", mode="before")
    @classmethod
    def none_means_no_members(cls, v):
        return [] if v is None else v


class RegistrationCreate(CamelModel):
    """A registration row that satisfies the solo/team cardinality rules."""

    event_name: str
    is_team: bool
    team_name: Optional[str] = None
    leader_email: str
    total_participants: int

    @field_validator("event_name")
    @classmethod
    def check_event_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Event name is required")
        return v

    @field_validator("team_name")
    @classmethod
    def check_team_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        if len(v) < TEAM_NAME_MIN_LENGTH:
            raise ValueError("Team name must be at least 3 characters long")
        if len(v) > TEAM_NAME_MAX_LENGTH:
            raise ValueError("Team name must not exceed 100 characters")
        return v

    @field_validator("leader_email")
    @classmethod
    def check_leader_email(cls, v: str) -> str:
        return normalise_email(v)

    @model_validator(mode="after")
    def check_cardinality(self) -> "RegistrationCreate":
        if self.is_team:
            if not self.team_name:
                raise ValueError(
                    "Team name is required for team registrations and should be empty for individual registrations"
                )
            if not 2 <= self.total_participants <= MAX_TEAM_MEMBERS + 1:
                raise ValueError(
                    "Individual registration must have 1 participant, team registration must have 2-4 participants"
                )
        else:
            if self.team_name:
                raise ValueError(
                    "Team name is required for team registrations and should be empty for individual registrations"
                )
            if self.total_participants != 1:
                raise ValueError(
                    "Individual registration must have 1 participant, team registration must have 2-4 participants"
                )
        return self


class RegistrationResult(CamelModel):
    """Summary returned after a successful submission."""

    registration_id: int
    event_name: str
    is_team: bool
    team_name: Optional[str] = None
    leader_name: str
    total_participants: int
    participants_created: int


class RegistrationRead(CamelModel):
    id: int
    event_name: str
    is_team: bool
    team_name: Optional[str] = None
    leader_email: str
    total_participants: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class RegistrationDetail(RegistrationRead):
    """A registration expanded with its participants, leader first."""

    participants: List[ParticipantRead] = Field(default_factory=list)
