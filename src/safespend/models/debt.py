"""Loan and card terms attached to a debt account."""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class DebtTerms(SQLModel, table=True):
    """Interest and repayment terms for a ``loan`` or ``credit`` account."""

    __tablename__: ClassVar[str] = "debts"

    account_id: str = Field(foreign_key="accounts.id", primary_key=True, max_length=36)
    interest_rate: float = Field(default=0.0, nullable=False)
    interest_type: str = Field(default="reducing_balance", nullable=False, max_length=24)
    min_payment_amount: Optional[float] = Field(default=None)
    # Flat-rate loans only; Rule-of-78 quotes need all three.
    original_amount: Optional[float] = Field(default=None)
    start_date: Optional[date] = Field(default=None)
    tenure_months: Optional[int] = Field(default=None)
