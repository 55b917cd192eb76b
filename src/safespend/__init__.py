"""SafeSpend household debt analytics package."""

from __future__ import annotations

from .config import BaseConfig, TestConfig
from .services.amortization import calculate_credit_card_interest, calculate_rule_of_78
from .services.debts import Debt, SimulationResult, simulate

__all__ = [
    "BaseConfig",
    "TestConfig",
    "Debt",
    "SimulationResult",
    "calculate_credit_card_interest",
    "calculate_rule_of_78",
    "simulate",
]
