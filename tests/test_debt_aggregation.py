"""Tests for loading household debt accounts into calculation snapshots."""

from __future__ import annotations

from datetime import date

import pytest

from safespend.domain.repositories.debt import DebtAccountRecord
from safespend.infra.repositories.debt import SQLModelDebtAccountRepository
from safespend.models import Account, DebtTerms
from safespend.services.aggregation import build_debts, debt_insights, load_debts, to_debt
from safespend.services.debts import simulate


@pytest.fixture
def repository(session_factory):
    return SQLModelDebtAccountRepository(session_factory)


def test_solo_user_sees_only_own_debts(
    repository, profile_factory, account_factory, terms_factory
):
    me = profile_factory("Aisha")
    stranger = profile_factory("Ben")
    mine = account_factory(me, name="Visa", balance=-1200.0)
    theirs = account_factory(stranger, name="Amex", balance=-800.0)
    terms_factory(mine)
    terms_factory(theirs)

    records = repository.list_debt_accounts(user_id=me.id)

    assert [r.account.name for r in records] == ["Visa"]


def test_household_members_are_pooled(
    repository, profile_factory, account_factory, terms_factory
):
    me = profile_factory("Aisha", household_id="home-1")
    partner = profile_factory("Daniel", household_id="home-1")
    outsider = profile_factory("Chen", household_id="home-2")
    for owner, name, balance in [
        (me, "Visa", -1200.0),
        (partner, "Car loan", -15000.0),
        (outsider, "Other", -300.0),
    ]:
        terms_factory(account_factory(owner, name=name, balance=balance))

    records = repository.list_debt_accounts(user_id=partner.id)

    # Ordered by stored balance descending.
    assert [r.account.name for r in records] == ["Visa", "Car loan"]


def test_only_loan_and_credit_accounts_with_terms(
    repository, profile_factory, account_factory, terms_factory
):
    me = profile_factory()
    account_factory(me, name="Savings", type="bank", balance=5000.0)
    terms_factory(account_factory(me, name="Card", type="credit", balance=-900.0))
    terms_factory(
        account_factory(me, name="Motorbike", type="loan", balance=-4000.0),
        interest_type="flat_rate",
        interest_rate=4.5,
    )
    account_factory(me, name="Orphan card", type="credit", balance=-50.0)

    records = repository.list_debt_accounts(user_id=me.id)

    assert {r.account.name for r in records} == {"Card", "Motorbike"}


def test_user_without_debts_gets_empty_list(repository, profile_factory):
    me = profile_factory()

    assert repository.list_debt_accounts(user_id=me.id) == []


def test_unknown_user_raises(repository):
    with pytest.raises(LookupError):
        repository.list_debt_accounts(user_id="missing")


def test_load_debts_feeds_simulator(
    repository, profile_factory, account_factory, terms_factory
):
    me = profile_factory()
    terms_factory(account_factory(me, name="Card", balance=-2000.0), interest_rate=18.0)
    terms_factory(
        account_factory(me, name="Store card", balance=-400.0),
        interest_rate=24.0,
        min_payment_amount=60.0,
    )

    debts = load_debts(repository=repository, user_id=me.id)
    result = simulate(debts, "snowball", 100)

    assert all(d.balance > 0 for d in debts)
    assert result.priority_order[0].name == "Store card"
    assert result.priority_order[0].min_payment == 60.0
    assert result.debt_free


def test_to_debt_maps_terms():
    account = Account(id="acc-1", owner_id="p-1", name="Myvi", type="loan", balance=-30000.0)
    terms = DebtTerms(
        account_id="acc-1",
        interest_rate=3.1,
        interest_type="flat_rate",
        min_payment_amount=0.0,
        original_amount=45000.0,
        start_date=date(2022, 5, 1),
        tenure_months=108,
    )

    debt = to_debt(DebtAccountRecord(account=account, terms=terms))

    assert debt.id == "acc-1"
    assert debt.balance == 30000.0
    assert debt.min_payment is None
    assert debt.tenure_months == 108
    assert debt.start_date == date(2022, 5, 1)


def test_debt_insights_by_interest_type():
    records = [
        DebtAccountRecord(
            account=Account(id="loan", owner_id="p", name="Myvi", type="loan", balance=-30000.0),
            terms=DebtTerms(
                account_id="loan",
                interest_rate=3.1,
                interest_type="flat_rate",
                original_amount=45000.0,
                start_date=date(2022, 5, 1),
                tenure_months=108,
            ),
        ),
        DebtAccountRecord(
            account=Account(id="card", owner_id="p", name="Visa", type="credit", balance=-1000.0),
            terms=DebtTerms(account_id="card", interest_rate=18.0),
        ),
    ]

    loan, card = debt_insights(build_debts(records), as_of=date(2025, 5, 1))

    assert loan.settlement is not None
    assert loan.settlement.months_remaining == 108 - 36
    assert loan.interest_estimate is None
    assert card.settlement is None
    assert card.interest_estimate.estimated_interest == pytest.approx(15.0)


def test_build_debts_skips_unknown_interest_type(caplog):
    records = [
        DebtAccountRecord(
            account=Account(id="odd", owner_id="p", name="Legacy", type="credit", balance=-700.0),
            terms=DebtTerms(account_id="odd", interest_rate=12.0, interest_type="flat"),
        ),
        DebtAccountRecord(
            account=Account(id="card", owner_id="p", name="Visa", type="credit", balance=-1000.0),
            terms=DebtTerms(account_id="card", interest_rate=18.0),
        ),
    ]

    with caplog.at_level("WARNING", logger="safespend.services.aggregation"):
        debts = build_debts(records)

    assert [d.id for d in debts] == ["card"]
    assert any(getattr(r, "account_id", None) == "odd" for r in caplog.records)
