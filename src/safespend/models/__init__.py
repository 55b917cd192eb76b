"""SQLModel table exports."""

from .account import Account
from .debt import DebtTerms
from .profile import Profile

__all__ = [
    "Account",
    "DebtTerms",
    "Profile",
]
