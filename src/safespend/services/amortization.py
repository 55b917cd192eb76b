"""Flat-rate and revolving debt arithmetic.

Two loan families show up in a household's debt list:

* Flat-rate installment loans (hire purchase, car loans). Interest is fixed at
  origination on the original principal and an early settlement earns a
  rebate computed with the Rule of 78 (sum of digits): the rebate is the
  share of total interest weighted by the triangular number of the remaining
  term over the triangular number of the full term.
* Reducing-balance revolving debt (credit cards). Interest accrues monthly on
  whatever is outstanding.

Everything here is plain float arithmetic with no rounding; formatting to
cents is left to whoever displays the numbers.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .debts import Debt

REDUCING_BALANCE = "reducing_balance"
FLAT_RATE = "flat_rate"
NO_INTEREST = "none"
INTEREST_TYPES = (REDUCING_BALANCE, FLAT_RATE, NO_INTEREST)

DEFAULT_CARD_RATE = 15.0
MIN_PAYMENT_FLOOR = 50.0
MIN_PAYMENT_RATE = 0.05


@dataclass(frozen=True, slots=True)
class RuleOf78Result:
    """Early-settlement quote for a flat-rate loan."""

    total_interest: float
    monthly_installment: float
    rebate: float
    settlement_amount: float
    months_remaining: int


@dataclass(frozen=True, slots=True)
class CreditCardEstimate:
    """Next billing cycle cost when only the minimum is paid."""

    estimated_interest: float
    min_payment: float


def default_min_payment(balance: float) -> float:
    """Usual card minimum: 5% of the balance with a floor of 50."""

    return max(MIN_PAYMENT_FLOOR, abs(balance) * MIN_PAYMENT_RATE)


def calculate_rule_of_78(
    principal: float, flat_rate: float, tenure_months: int, months_paid: int
) -> RuleOf78Result:
    """Return the Rule-of-78 rebate and settlement figure for a flat-rate loan.

    ``flat_rate`` is the nominal annual percentage (3.5 means 3.5% a year).
    ``months_paid`` beyond the tenure is accepted and means nothing is left
    to settle.
    """

    if tenure_months <= 0:
        raise ValueError("tenure_months must be greater than zero.")
    if months_paid < 0:
        raise ValueError("months_paid cannot be negative.")

    total_interest = principal * (flat_rate / 100) * (tenure_months / 12)
    monthly_installment = (principal + total_interest) / tenure_months

    months_remaining = max(0, tenure_months - months_paid)

    # Sum of digits for the remaining term over the full term.
    numerator = months_remaining * (months_remaining + 1)
    denominator = tenure_months * (tenure_months + 1)
    rebate = (numerator / denominator) * total_interest

    settlement_amount = monthly_installment * months_remaining - rebate

    return RuleOf78Result(
        total_interest=total_interest,
        monthly_installment=monthly_installment,
        rebate=rebate,
        settlement_amount=settlement_amount,
        months_remaining=months_remaining,
    )


def calculate_credit_card_interest(
    balance: float, annual_rate: float = DEFAULT_CARD_RATE
) -> CreditCardEstimate:
    """Estimate next month's interest and minimum payment on a card balance."""

    magnitude = abs(balance)
    monthly_rate = annual_rate / 100 / 12
    return CreditCardEstimate(
        estimated_interest=magnitude * monthly_rate,
        min_payment=default_min_payment(magnitude),
    )


def months_elapsed(start_date: date, as_of: date) -> int:
    """Whole calendar months from ``start_date`` up to ``as_of``.

    A month only counts once its anniversary day has been reached; a start on
    the 29th to 31st falls due on the last day of shorter months. Start dates
    in the future give zero.
    """

    months = (as_of.year - start_date.year) * 12 + (as_of.month - start_date.month)
    anniversary = min(start_date.day, monthrange(as_of.year, as_of.month)[1])
    if as_of.day < anniversary:
        months -= 1
    return max(0, months)


def settlement_for(debt: "Debt", *, as_of: date) -> RuleOf78Result | None:
    """Rule-of-78 quote for a flat-rate debt, or None when terms are incomplete."""

    if debt.interest_type != FLAT_RATE:
        return None
    if debt.original_amount is None or debt.start_date is None:
        return None
    if not debt.tenure_months or debt.tenure_months <= 0:
        return None

    return calculate_rule_of_78(
        debt.original_amount,
        debt.interest_rate,
        debt.tenure_months,
        months_elapsed(debt.start_date, as_of),
    )


def interest_estimate_for(debt: "Debt") -> CreditCardEstimate | None:
    """Next-cycle interest for a reducing-balance debt."""

    if debt.interest_type != REDUCING_BALANCE:
        return None
    return calculate_credit_card_interest(debt.balance, debt.interest_rate)


__all__ = [
    "CreditCardEstimate",
    "RuleOf78Result",
    "calculate_credit_card_interest",
    "calculate_rule_of_78",
    "default_min_payment",
    "interest_estimate_for",
    "months_elapsed",
    "settlement_for",
]
