"""Debt account repository protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ...models.account import Account
from ...models.debt import DebtTerms


@dataclass(frozen=True, slots=True)
class DebtAccountRecord:
    """A debt account joined with its terms row."""

    account: Account
    terms: DebtTerms


class DebtAccountRepository(Protocol):
    """Source of the debt accounts visible to a user."""

    def list_debt_accounts(self, *, user_id: str) -> list[DebtAccountRecord]:
        """Loan and credit accounts for the user's household, largest balance first."""
        ...
