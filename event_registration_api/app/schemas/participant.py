"""
Pydantic models for participants.

``ParticipantCreate`` is the validated value object for one person on
a registration: once an instance exists its name, gender, roll number,
contact number and email are known to be well formed and normalised
(roll number upper‑cased, email lower‑cased, whitespace trimmed).
"""

import enum
import re
from datetime import datetime
from typing import Optional

from pydantic import field_validator

from .common import CamelModel


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
CONTACT_NUMBER_PATTERN = re.compile(r"^[0-9]{10}$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


class Gender(str, enum.Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


def normalise_email(value: str) -> str:
    """Trim and lower‑case ``value`` and check its syntax."""
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please provide a valid email address")
    return value


class ParticipantCreate(CamelModel):
    """A single validated participant, leader or team member."""

    name: str
    gender: Gender
    roll_number: str
    contact_number: str
    email: str

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < NAME_MIN_LENGTH:
            raise ValueError("Name must be at least 2 characters long")
        if len(v) > NAME_MAX_LENGTH:
            raise ValueError("Name must not exceed 100 characters")
        return v

    @field_validator("gender", mode="before")
    @classmethod
    def check_gender(cls, v):
        if isinstance(v, Gender):
            return v
        if isinstance(v, str) and v.strip() in {g.value for g in Gender}:
            return Gender(v.strip())
        raise ValueError("Gender must be Male, Female, or Other")

    @field_validator("roll_number")
    @classmethod
    def check_roll_number(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Roll number is required")
        return v

    @field_validator("contact_number")
    @classmethod
    def check_contact_number(cls, v: str) -> str:
        v = v.strip()
        if not CONTACT_NUMBER_PATTERN.match(v):
            raise ValueError("Contact number must be exactly 10 digits")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return normalise_email(v)


class ParticipantRead(CamelModel):
    id: int
    registration_id: int
    name: str
    gender: Gender
    roll_number: str
    contact_number: str
    email: str
    is_leader: bool
    created_at: Optional[datetime] = None
