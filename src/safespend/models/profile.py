"""Household member profile."""

from __future__ import annotations

from typing import ClassVar, Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


class Profile(SQLModel, table=True):
    """A signed-in person, optionally grouped into a household."""

    __tablename__: ClassVar[str] = "profiles"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True, max_length=36)
    display_name: str = Field(default="", max_length=80)
    household_id: Optional[str] = Field(default=None, index=True, max_length=36)
