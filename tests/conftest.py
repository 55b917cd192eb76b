"""Pytest configuration and shared fixtures for SafeSpend tests.

Provides an isolated database per test, row factories for profiles, accounts
and debt terms, and float comparison helpers for money values.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from safespend.infra.database import create_session_factory
from safespend.models import Account, DebtTerms, Profile
from safespend.services.debts import Debt

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(autouse=True)
def isolated_data_dir(monkeypatch, tmp_path):
    """Keep config-driven paths (logs, default SQLite file) inside tmp_path."""
    monkeypatch.setenv("SAFESPEND_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("SAFESPEND_DATABASE_URL", raising=False)
    monkeypatch.delenv("SAFESPEND_MAX_EXTRA_PAYMENT", raising=False)
    monkeypatch.delenv("SAFESPEND_DEV_MODE", raising=False)
    monkeypatch.delenv("SAFESPEND_CURRENCY", raising=False)
    return tmp_path / "instance"


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session for seeding rows; committed at teardown."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect."""
    return create_session_factory(db_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def profile_factory(db_session):
    """Factory for creating profiles, optionally in a household."""

    def _create_profile(name: str = "Aisha", household_id: str | None = None) -> Profile:
        profile = Profile(display_name=name, household_id=household_id)
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile

    return _create_profile


@pytest.fixture
def account_factory(db_session):
    """Factory for creating accounts.

    Liability balances are passed the way the app stores them (negative).
    """

    def _create_account(
        owner: Profile,
        name: str = "Card",
        type: str = "credit",
        balance: float = -1000.0,
    ) -> Account:
        account = Account(owner_id=owner.id, name=name, type=type, balance=balance)
        db_session.add(account)
        db_session.commit()
        db_session.refresh(account)
        return account

    return _create_account


@pytest.fixture
def terms_factory(db_session):
    """Factory for attaching debt terms to an account."""

    def _create_terms(account: Account, **overrides) -> DebtTerms:
        values = {"interest_rate": 18.0, "interest_type": "reducing_balance"}
        values.update(overrides)
        terms = DebtTerms(account_id=account.id, **values)
        db_session.add(terms)
        db_session.commit()
        db_session.refresh(terms)
        return terms

    return _create_terms


@pytest.fixture
def make_debt():
    """Build in-memory Debt snapshots with sensible defaults."""

    def _make(
        id: str,
        balance: float,
        interest_rate: float = 0.0,
        interest_type: str = "reducing_balance",
        min_payment: float | None = None,
        **kwargs,
    ) -> Debt:
        return Debt(
            id=id,
            name=kwargs.pop("name", id.upper()),
            balance=balance,
            interest_rate=interest_rate,
            interest_type=interest_type,
            min_payment=min_payment,
            **kwargs,
        )

    return _make


# =============================================================================
# Test Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance (default one cent).

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
