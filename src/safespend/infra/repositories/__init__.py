"""Concrete repository implementations using SQLModel."""

from .debt import SQLModelDebtAccountRepository

__all__ = [
    "SQLModelDebtAccountRepository",
]
