"""Debt payoff simulator (snowball and avalanche)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..logging_config import get_logger
from .amortization import INTEREST_TYPES, REDUCING_BALANCE, default_min_payment

logger = get_logger("services.debts")

SNOWBALL = "snowball"
AVALANCHE = "avalanche"
STRATEGIES = (AVALANCHE, SNOWBALL)

STRATEGY_DESCRIPTIONS = {
    AVALANCHE: "Pay off highest interest rate first (saves money)",
    SNOWBALL: "Pay off smallest balance first (quick wins)",
}

# 30 years; a plan that has not cleared by then is reported as unresolved.
MAX_SIMULATION_MONTHS = 360


@dataclass(frozen=True, slots=True)
class Debt:
    """Snapshot of one debt as fed into the payoff calculations.

    ``balance`` is always held as a magnitude; liabilities stored as negative
    account balances are normalized on construction. The flat-rate terms
    (``original_amount``, ``tenure_months``, ``start_date``) are optional and
    only used for settlement quotes.
    """

    id: str
    name: str
    balance: float
    interest_rate: float
    interest_type: str = REDUCING_BALANCE
    min_payment: Optional[float] = None
    original_amount: Optional[float] = None
    tenure_months: Optional[int] = None
    start_date: Optional[date] = None

    def __post_init__(self) -> None:
        if self.interest_type not in INTEREST_TYPES:
            raise ValueError(f"Unknown interest type: {self.interest_type!r}")
        object.__setattr__(self, "balance", abs(float(self.balance)))


@dataclass(frozen=True, slots=True)
class PriorityEntry:
    """One row of the payoff priority list."""

    id: str
    name: str
    balance: float
    interest_rate: float
    min_payment: float
    is_focus: bool


@dataclass(frozen=True, slots=True)
class SimulationResult:
    """Outcome of a payoff simulation run."""

    total_months: int
    total_interest_paid: float
    priority_order: list[PriorityEntry]
    strategy: str = AVALANCHE
    extra_payment: float = 0.0
    timeline: list[float] = field(default_factory=list)
    debt_free: bool = True

    @property
    def focus(self) -> Optional[PriorityEntry]:
        return self.priority_order[0] if self.priority_order else None


@dataclass(slots=True)
class _WorkingDebt:
    """Mutable balance owned by a single simulation run."""

    id: str
    balance: float
    interest_rate: float
    interest_type: str
    min_payment: float


def effective_min_payment(debt: Debt) -> float:
    """Stored minimum payment, or 5% of balance with a floor of 50 when unset."""

    # A zero minimum on file means nobody filled it in.
    if debt.min_payment:
        return debt.min_payment
    return default_min_payment(debt.balance)


def sort_debts(debts: Iterable[Debt], strategy: str) -> list[Debt]:
    """Return debts in payoff priority order for ``strategy``.

    Both orders are stable, so ties keep their input order.
    """

    if strategy == SNOWBALL:
        return sorted(debts, key=lambda d: d.balance)
    if strategy == AVALANCHE:
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)
    raise ValueError("Invalid debt payoff strategy.")


def simulate(
    debts: Iterable[Debt], strategy: str, extra_payment: float = 0.0
) -> SimulationResult:
    """Project month-by-month payoff of ``debts`` under ``strategy``.

    Each month every active debt accrues interest (reducing balance only) and
    receives its minimum payment; the extra payment then goes to the first
    debt in the fixed priority order that still has a balance. It does not
    spill over to the next debt. The loop stops in the first month that finds
    nothing left to pay, or after ``MAX_SIMULATION_MONTHS``.
    """

    if extra_payment < 0:
        raise ValueError("extra_payment cannot be negative.")
    extra_payment = float(extra_payment)

    source = list(debts)
    ordered = sort_debts(source, strategy)
    if not source:
        return SimulationResult(
            total_months=0,
            total_interest_paid=0.0,
            priority_order=[],
            strategy=strategy,
            extra_payment=extra_payment,
        )

    working = [
        _WorkingDebt(
            id=debt.id,
            balance=debt.balance,
            interest_rate=debt.interest_rate,
            interest_type=debt.interest_type,
            min_payment=effective_min_payment(debt),
        )
        for debt in ordered
    ]

    month = 0
    total_interest = 0.0
    timeline: list[float] = []

    while month < MAX_SIMULATION_MONTHS:
        month += 1
        has_active_debt = False

        for item in working:
            if item.balance <= 0:
                continue
            has_active_debt = True

            if item.interest_type == REDUCING_BALANCE:
                monthly_interest = item.balance * item.interest_rate / 100 / 12
                item.balance += monthly_interest
                total_interest += monthly_interest

            item.balance -= min(item.min_payment, item.balance)

        if extra_payment > 0:
            focus = next((item for item in working if item.balance > 0), None)
            if focus is not None:
                focus.balance -= min(extra_payment, focus.balance)

        timeline.append(sum(item.balance for item in working))

        if not has_active_debt:
            break

    debt_free = not any(item.balance > 0 for item in working)

    original_balances: dict[str, float] = {}
    for debt in source:
        original_balances.setdefault(debt.id, debt.balance)

    priority_order = [
        PriorityEntry(
            id=debt.id,
            name=debt.name,
            balance=original_balances.get(debt.id, 0.0),
            interest_rate=debt.interest_rate,
            min_payment=item.min_payment,
            is_focus=index == 0,
        )
        for index, (debt, item) in enumerate(zip(ordered, working))
    ]

    logger.info(
        "Payoff simulation finished",
        extra={
            "strategy": strategy,
            "debt_count": len(source),
            "extra_payment": extra_payment,
            "total_months": month,
            "total_interest": total_interest,
        },
    )
    if not debt_free:
        logger.warning(
            "Debts not cleared within %d months; minimum payments may not cover interest",
            MAX_SIMULATION_MONTHS,
            extra={"strategy": strategy, "remaining": timeline[-1]},
        )

    return SimulationResult(
        total_months=month,
        total_interest_paid=total_interest,
        priority_order=priority_order,
        strategy=strategy,
        extra_payment=extra_payment,
        timeline=timeline,
        debt_free=debt_free,
    )


def compare_strategies(
    debts: Iterable[Debt], extra_payment: float = 0.0
) -> dict[str, SimulationResult]:
    """Run every strategy against the same debts."""

    snapshot = list(debts)
    return {strategy: simulate(snapshot, strategy, extra_payment) for strategy in STRATEGIES}


def debt_free_date(result: SimulationResult, *, as_of: date) -> Optional[date]:
    """First day of the month the plan reports as done, or None if unresolved."""

    if not result.debt_free:
        return None
    month = as_of.month + result.total_months
    year = as_of.year + (month - 1) // 12
    month = ((month - 1) % 12) + 1
    return date(year, month, 1)


__all__ = [
    "AVALANCHE",
    "MAX_SIMULATION_MONTHS",
    "SNOWBALL",
    "STRATEGIES",
    "STRATEGY_DESCRIPTIONS",
    "Debt",
    "PriorityEntry",
    "SimulationResult",
    "compare_strategies",
    "debt_free_date",
    "effective_min_payment",
    "simulate",
    "sort_debts",
]
