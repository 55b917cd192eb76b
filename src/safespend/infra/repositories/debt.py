"""SQLModel implementation of the debt account repository."""

from __future__ import annotations

from sqlmodel import select

from ...domain.repositories.debt import DebtAccountRecord
from ...logging_config import get_logger
from ...models.account import DEBT_ACCOUNT_TYPES, Account
from ...models.debt import DebtTerms
from ...models.profile import Profile
from ..database import SessionFactory

logger = get_logger("infra.repositories.debt")


class SQLModelDebtAccountRepository:
    """Reads household-scoped debt accounts and their terms."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def owner_ids(self, *, user_id: str) -> list[str]:
        """The user alone, or every member of the user's household."""
        with self.session_factory() as session:
            profile = session.get(Profile, user_id)
            if profile is None:
                raise LookupError(f"No profile found for user {user_id!r}")
            if not profile.household_id:
                return [profile.id]
            members = session.exec(
                select(Profile.id).where(Profile.household_id == profile.household_id)
            ).all()
            return list(members) or [profile.id]

    def list_debt_accounts(self, *, user_id: str) -> list[DebtAccountRecord]:
        """Loan and credit accounts with terms, ordered by balance descending.

        Accounts without a terms row are skipped.
        """
        owners = self.owner_ids(user_id=user_id)
        with self.session_factory() as session:
            accounts = session.exec(
                select(Account)
                .where(Account.owner_id.in_(owners))  # type: ignore[attr-defined]
                .where(Account.type.in_(DEBT_ACCOUNT_TYPES))  # type: ignore[attr-defined]
                .order_by(Account.balance.desc())  # type: ignore[attr-defined]
            ).all()
            if not accounts:
                return []

            terms_rows = session.exec(
                select(DebtTerms).where(
                    DebtTerms.account_id.in_([a.id for a in accounts])  # type: ignore[attr-defined]
                )
            ).all()

        terms_by_account = {terms.account_id: terms for terms in terms_rows}
        records: list[DebtAccountRecord] = []
        for account in accounts:
            terms = terms_by_account.get(account.id)
            if terms is None:
                logger.warning(
                    "Debt account has no terms row; skipping",
                    extra={"account_id": account.id},
                )
                continue
            records.append(DebtAccountRecord(account=account, terms=terms))
        return records
