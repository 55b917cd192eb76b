"""Money accounts owned by a profile."""

from __future__ import annotations

from typing import ClassVar
from uuid import uuid4

from sqlmodel import Field, SQLModel

DEBT_ACCOUNT_TYPES = ("loan", "credit")


class Account(SQLModel, table=True):
    """Bank, wallet, card or loan account.

    Liabilities carry a negative ``balance``.
    """

    __tablename__: ClassVar[str] = "accounts"

    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True, max_length=36)
    owner_id: str = Field(foreign_key="profiles.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=128)
    type: str = Field(nullable=False, max_length=16)
    balance: float = Field(default=0.0, nullable=False)
    is_liquid: bool = Field(default=True, nullable=False)
    is_shared: bool = Field(default=False, nullable=False)
