"""Turns stored debt accounts into calculation snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..domain.repositories.debt import DebtAccountRecord, DebtAccountRepository
from ..logging_config import get_logger
from .amortization import CreditCardEstimate, RuleOf78Result, interest_estimate_for, settlement_for
from .debts import Debt

logger = get_logger("services.aggregation")


@dataclass(frozen=True, slots=True)
class DebtInsight:
    """Per-debt cost figures shown next to the payoff plan."""

    debt: Debt
    settlement: Optional[RuleOf78Result] = None
    interest_estimate: Optional[CreditCardEstimate] = None


def to_debt(record: DebtAccountRecord) -> Debt:
    """Build a snapshot from an account row and its terms."""

    account, terms = record.account, record.terms
    return Debt(
        id=account.id,
        name=account.name,
        balance=account.balance,
        interest_rate=float(terms.interest_rate or 0.0),
        interest_type=terms.interest_type,
        min_payment=terms.min_payment_amount or None,
        original_amount=terms.original_amount,
        tenure_months=terms.tenure_months,
        start_date=terms.start_date,
    )


def build_debts(records: Iterable[DebtAccountRecord]) -> list[Debt]:
    """Snapshots for every usable record; rows with bad terms are skipped."""

    debts: list[Debt] = []
    for record in records:
        try:
            debts.append(to_debt(record))
        except ValueError as exc:
            logger.warning(
                "Debt account has unusable terms; skipping",
                extra={"account_id": record.account.id, "reason": str(exc)},
            )
    return debts


def load_debts(*, repository: DebtAccountRepository, user_id: str) -> list[Debt]:
    """Fetch the user's household debts as fresh snapshots."""

    return build_debts(repository.list_debt_accounts(user_id=user_id))


def debt_insights(debts: Iterable[Debt], *, as_of: date) -> list[DebtInsight]:
    """Settlement quotes for flat-rate loans, next-cycle interest for cards."""

    return [
        DebtInsight(
            debt=debt,
            settlement=settlement_for(debt, as_of=as_of),
            interest_estimate=interest_estimate_for(debt),
        )
        for debt in debts
    ]


__all__ = ["DebtInsight", "build_debts", "debt_insights", "load_debts", "to_debt"]
