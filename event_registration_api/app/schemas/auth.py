"""Pydantic models for the admin session endpoints."""

from typing import Optional

from pydantic import BaseModel


class AdminLogin(BaseModel):
    password: Optional[str] = None
