"""Repository protocol definitions for domain layer."""

from .debt import DebtAccountRecord, DebtAccountRepository

__all__ = [
    "DebtAccountRecord",
    "DebtAccountRepository",
]
