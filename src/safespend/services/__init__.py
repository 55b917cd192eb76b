"""Service module exports."""

from . import aggregation, amortization, debts

__all__ = [
    "aggregation",
    "amortization",
    "debts",
]
