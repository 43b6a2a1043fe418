"""
Business logic for event registrations.

``RegistrationService.submit`` turns a posted form into one
registration row plus one participant row per person.  Validation is
fail‑fast: the ordered rules below are checked before anything touches
the database and the first violated rule is reported.

1. the participation type is ``solo`` or ``team``;
2. every leader field is present;
3. a team has a non‑blank team name;
4. a team has 1 to 3 additional members, each with all five fields;
5. a solo registration has no members and no team name.

Field formats (email syntax, 10‑digit contact numbers, name lengths,
gender) are then checked by building the validated models, and all
participant emails must be distinct.

The registration and its participants are written in one SQLite
transaction.  Any failure, including a duplicate detected by the unique
indexes, rolls the whole submission back, so a registration never
exists without its participants.
"""

import logging
import sqlite3
from typing import Iterable, List, Optional

from pydantic import ValidationError

from event_registration_api.app.core.db import get_connection, translate_store_errors
from event_registration_api.app.core.exceptions import (
    DuplicateParticipantEmail,
    DuplicateRegistration,
    StoreUnavailable,
    ValidationFailed,
)
from event_registration_api.app.schemas.common import error_messages
from event_registration_api.app.schemas.participant import ParticipantCreate, ParticipantRead
from event_registration_api.app.schemas.registration import (
    MAX_TEAM_MEMBERS,
    MIN_TEAM_MEMBERS,
    PARTICIPATION_TYPES,
    RegistrationCreate,
    RegistrationRead,
    RegistrationResult,
    RegistrationSubmit,
    TeamMemberIn,
)


MEMBER_FIELDS = ("name", "gender", "roll_number", "contact_number", "email")

REGISTRATION_COLUMNS = (
    "id, event_name, is_team, team_name, leader_email, total_participants, created_at, updated_at"
)
PARTICIPANT_COLUMNS = (
    "id, registration_id, name, gender, roll_number, contact_number, email, is_leader, created_at"
)


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def registration_from_row(row: sqlite3.Row) -> RegistrationRead:
    return RegistrationRead(
        id=row["id"],
        event_name=row["event_name"],
        is_team=bool(row["is_team"]),
        team_name=row["team_name"] or None,
        leader_email=row["leader_email"],
        total_participants=row["total_participants"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def participant_from_row(row: sqlite3.Row) -> ParticipantRead:
    return ParticipantRead(
        id=row["id"],
        registration_id=row["registration_id"],
        name=row["name"],
        gender=row["gender"],
        roll_number=row["roll_number"],
        contact_number=row["contact_number"],
        email=row["email"],
        is_leader=bool(row["is_leader"]),
        created_at=row["created_at"],
    )


class RegistrationService:
    """Service for submitting and listing registrations."""

    @classmethod
    def resolve_participation(cls, payload: RegistrationSubmit) -> bool:
        """Return ``True`` for a team submission, ``False`` for solo.

        ``participationType`` wins over ``isTeam`` when both are sent and
        must be exactly ``"solo"`` or ``"team"``.
        """
        if payload.participation_type is not None:
            if payload.participation_type in PARTICIPATION_TYPES:
                return payload.participation_type == "team"
        elif payload.is_team is not None:
            return payload.is_team
        raise ValidationFailed('Invalid participation type. Must be "solo" or "team".')

    @classmethod
    def check_rules(cls, payload: RegistrationSubmit) -> bool:
        """Apply the ordered submission rules and return the team flag.

        Raises ``ValidationFailed`` with the message of the first rule
        that is violated.
        """
        is_team = cls.resolve_participation(payload)

        leader_fields = (
            payload.leader_name,
            payload.leader_gender,
            payload.leader_roll_number,
            payload.leader_contact_number,
            payload.leader_email,
        )
        if any(_blank(value) for value in leader_fields):
            raise ValidationFailed("All leader fields are required.")

        if is_team:
            if _blank(payload.team_name):
                raise ValidationFailed("Team name is required for team participation.")
            if not MIN_TEAM_MEMBERS <= len(payload.team_members) <= MAX_TEAM_MEMBERS:
                raise ValidationFailed(
                    "Team participation requires 1 to 3 additional members (2-4 total including leader)."
                )
            for member in payload.team_members:
                if any(_blank(getattr(member, field)) for field in MEMBER_FIELDS):
                    raise ValidationFailed("All fields are required for each team member.")
        else:
            if payload.team_members:
                raise ValidationFailed("Solo participation cannot have team members.")
            if not _blank(payload.team_name):
                raise ValidationFailed("Solo participation cannot have a team name.")
        return is_team

    @classmethod
    def build(
        cls, event_name: str, payload: RegistrationSubmit, is_team: bool
    ) -> tuple[RegistrationCreate, List[ParticipantCreate]]:
        """Construct the validated registration and participant models.

        Every format problem of every participant is collected so the
        submitter can fix the whole form at once.
        """
        errors: List[str] = []
        participants: List[ParticipantCreate] = []

        def add(prefix: str, **fields) -> None:
            try:
                participants.append(ParticipantCreate(**fields))
            except ValidationError as e:
                errors.extend(error_messages(e, prefix))

        add(
            "Leader: ",
            name=payload.leader_name,
            gender=payload.leader_gender,
            roll_number=payload.leader_roll_number,
            contact_number=payload.leader_contact_number,
            email=payload.leader_email,
        )
        members: Iterable[TeamMemberIn] = payload.team_members if is_team else ()
        for position, member in enumerate(members, start=1):
            add(f"Team member {position}: ", **member.model_dump(include=set(MEMBER_FIELDS)))

        registration = None
        try:
            registration = RegistrationCreate(
                event_name=event_name,
                is_team=is_team,
                team_name=payload.team_name if is_team else None,
                leader_email=payload.leader_email,
                total_participants=len(payload.team_members) + 1 if is_team else 1,
            )
        except ValidationError as e:
            # The leader participant already reports a bad leader email.
            errors.extend(error_messages(e, exclude=("leader_email", "leaderEmail")))

        if errors or registration is None:
            raise ValidationFailed("Validation failed", details=errors)

        seen = set()
        for participant in participants:
            if participant.email in seen:
                raise DuplicateParticipantEmail(
                    "Each participant must use a different email address.",
                    details=participant.email,
                )
            seen.add(participant.email)

        return registration, participants

    @classmethod
    async def submit(cls, event_name: str, payload: RegistrationSubmit) -> RegistrationResult:
        """Validate a submission and persist it atomically.

        Returns a ``RegistrationResult`` describing the new
        registration.  Raises ``ValidationFailed``,
        ``DuplicateRegistration``, ``DuplicateParticipantEmail`` or
        ``StoreUnavailable``; no rows remain after any of them.
        """
        logger = logging.getLogger(__name__)
        is_team = cls.check_rules(payload)
        registration, participants = cls.build(event_name, payload, is_team)

        conn = get_connection()
        try:
            with translate_store_errors(), conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    INSERT INTO registrations (event_name, is_team, team_name, leader_email, total_participants)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        registration.event_name,
                        int(registration.is_team),
                        registration.team_name,
                        registration.leader_email,
                        registration.total_participants,
                    ),
                )
                registration_id = cursor.lastrowid
                cursor.executemany(
                    """
                    INSERT INTO participants
                        (registration_id, name, gender, roll_number, contact_number, email, is_leader)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (
                            registration_id,
                            p.name,
                            p.gender.value,
                            p.roll_number,
                            p.contact_number,
                            p.email,
                            int(index == 0),
                        )
                        for index, p in enumerate(participants)
                    ],
                )
        except sqlite3.IntegrityError as e:
            raise cls._conflict(e, registration) from e
        finally:
            conn.close()

        logger.info(
            "Registration %s created for event '%s' by %s (%s participants)",
            registration_id,
            registration.event_name,
            registration.leader_email,
            len(participants),
        )
        return RegistrationResult(
            registration_id=registration_id,
            event_name=registration.event_name,
            is_team=registration.is_team,
            team_name=registration.team_name,
            leader_name=participants[0].name,
            total_participants=registration.total_participants,
            participants_created=len(participants),
        )

    @classmethod
    def _conflict(cls, error: sqlite3.IntegrityError, registration: RegistrationCreate) -> Exception:
        """Map a constraint violation to the matching domain error."""
        logger = logging.getLogger(__name__)
        message = str(error)
        if "registrations.event_name" in message and "registrations.leader_email" in message:
            logger.warning(
                "Duplicate registration for event '%s' by %s",
                registration.event_name,
                registration.leader_email,
            )
            return DuplicateRegistration("You have already registered for this event.")
        if "participants.registration_id" in message and "participants.email" in message:
            return DuplicateParticipantEmail("Each participant must use a different email address.")
        if "CHECK constraint failed" in message:
            return ValidationFailed("Validation failed", details=message)
        logger.error("Unexpected constraint violation: %s", message)
        return StoreUnavailable("Registration could not be saved", details=message)

    @classmethod
    async def list_registrations(cls, event_name: str) -> List[RegistrationRead]:
        """Return the registrations of an event, newest first."""
        conn = get_connection()
        try:
            with translate_store_errors():
                rows = conn.execute(
                    f"SELECT {REGISTRATION_COLUMNS} FROM registrations "
                    "WHERE event_name = ? ORDER BY created_at DESC, id DESC",
                    (event_name.strip(),),
                ).fetchall()
            return [registration_from_row(row) for row in rows]
        finally:
            conn.close()
