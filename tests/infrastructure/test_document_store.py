"""Tests for the SQLAlchemy document store."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from cosmic_ledger.domain.errors import UserNotFoundError
from cosmic_ledger.domain.models import (
    Account,
    AccountType,
    Asset,
    ExpenseShare,
    FinancialStatement,
    LedgerMutation,
    PaymentShare,
    Team,
    TeamEqualSplit,
    Transaction,
    TransactionType,
    User,
)
from cosmic_ledger.infrastructure import document_store as document_store_module
from cosmic_ledger.infrastructure.document_store import SqlAlchemyDocumentStore


def _build_store() -> tuple[SqlAlchemyDocumentStore, MagicMock]:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db_port = MagicMock()
    db_port.get_ledger_engine.return_value = engine
    logger = MagicMock()
    store = SqlAlchemyDocumentStore(db_port, logger=logger)
    store.prepare()
    return store, logger


def _dinner() -> Transaction:
    return Transaction(
        id="tx-1",
        description="Dinner",
        amount=Decimal("100.10"),
        type=TransactionType.EXPENSE,
        category="Food",
        date=date(2024, 5, 2),
        payment_shares=(PaymentShare("alice", "chk", Decimal("100.10")),),
        expense_shares=(
            ExpenseShare("alice", Decimal("50.05")),
            ExpenseShare("bob", Decimal("50.05")),
        ),
    )


def _seed_mutation() -> LedgerMutation:
    alice = User(
        id="alice",
        name="Alice",
        team_ids=("team-1",),
        statement=FinancialStatement(transactions=(_dinner(),)),
    )
    bob = User(id="bob", name="Bob")
    carol = User(id="carol", name="Carol")
    team = Team(
        id="team-1",
        name="Crew",
        member_ids=("alice", "bob"),
        statement=FinancialStatement(
            assets=(
                Asset(
                    id="ship",
                    name="Ship",
                    value=Decimal("3000"),
                    ownership=TeamEqualSplit("team-1"),
                    team_id="team-1",
                ),
            )
        ),
    )
    other_team = Team(id="team-2", name="Others", member_ids=("carol",))
    accounts = (
        Account("chk", "Checking", AccountType.CHECKING, Decimal("900"), ("alice",)),
        Account("bob-chk", "Bob", AccountType.CHECKING, Decimal("20"), ("bob",)),
        Account(
            "team-chk", "Team", AccountType.CHECKING, Decimal("5"), (), "team-1"
        ),
    )
    return LedgerMutation(
        accounts=accounts,
        users=(alice, bob, carol),
        teams=(team, other_team),
    )


def test_snapshot_joins_teams_members_and_accounts() -> None:
    """A snapshot holds the user's teams, fellow members and their accounts."""
    store, _ = _build_store()
    store.apply_mutation(_seed_mutation())

    snapshot = store.fetch_snapshot("alice")

    assert snapshot.user.statement.transactions == (_dinner(),)
    assert [a.id for a in snapshot.user.accounts] == ["chk"]
    assert [t.id for t in snapshot.teams] == ["team-1"]
    assert [a.id for a in snapshot.teams[0].accounts] == ["team-chk"]
    assert [u.id for u in snapshot.members] == ["bob"]
    assert snapshot.members[0].accounts[0].balance == Decimal("20")
    assert snapshot.teams[0].statement.assets[0].ownership == TeamEqualSplit(
        "team-1"
    )


def test_snapshot_decodes_only_accounts_of_loaded_parties(monkeypatch) -> None:
    """Accounts of users and teams outside the snapshot are never decoded."""
    store, _ = _build_store()
    seed = _seed_mutation()
    store.apply_mutation(
        LedgerMutation(
            accounts=(
                *seed.accounts,
                Account(
                    "carol-chk", "Carol", AccountType.CASH, Decimal("7"), ("carol",)
                ),
                Account(
                    "others-chk",
                    "Others",
                    AccountType.CHECKING,
                    Decimal("3"),
                    (),
                    "team-2",
                ),
            ),
            users=seed.users,
            teams=seed.teams,
        )
    )
    decoded = []
    real_decode = document_store_module.decode_account

    def _tracking_decode(document):
        decoded.append(document["id"])
        return real_decode(document)

    monkeypatch.setattr(document_store_module, "decode_account", _tracking_decode)

    store.fetch_snapshot("alice")

    assert sorted(decoded) == ["bob-chk", "chk", "team-chk"]


def test_extra_users_are_loaded_on_request() -> None:
    """Participants outside the user's teams can be requested explicitly."""
    store, _ = _build_store()
    store.apply_mutation(_seed_mutation())

    snapshot = store.fetch_snapshot("alice", extra_user_ids=("carol", "alice"))

    assert [u.id for u in snapshot.members] == ["bob", "carol"]


def test_missing_users_raise() -> None:
    """Unknown users, requested or extra, are reported."""
    store, _ = _build_store()
    store.apply_mutation(_seed_mutation())

    with pytest.raises(UserNotFoundError):
        store.fetch_snapshot("zed")
    with pytest.raises(UserNotFoundError):
        store.fetch_snapshot("alice", extra_user_ids=("zed",))


def test_dangling_team_members_are_logged() -> None:
    """Members without a document are skipped with a warning."""
    store, logger = _build_store()
    store.apply_mutation(
        LedgerMutation(
            users=(User(id="alice", name="Alice"),),
            teams=(Team(id="t", name="T", member_ids=("alice", "ghost")),),
        )
    )

    snapshot = store.fetch_snapshot("alice")

    assert snapshot.members == ()
    logger.warning.assert_called_once()


def test_apply_mutation_replaces_documents() -> None:
    """Writing a document again replaces the stored version."""
    store, _ = _build_store()
    store.apply_mutation(_seed_mutation())

    store.apply_mutation(
        LedgerMutation(
            accounts=(
                Account(
                    "chk", "Checking", AccountType.CHECKING, Decimal("1"), ("alice",)
                ),
            )
        )
    )

    snapshot = store.fetch_snapshot("alice")
    assert snapshot.user.accounts[0].balance == Decimal("1")
    engine = store._db_port.get_ledger_engine()
    with engine.connect() as conn:
        count = conn.execute(
            text("SELECT COUNT(*) FROM ledger_documents WHERE collection = 'accounts'")
        ).scalar_one()
    assert count == 3


def test_empty_mutation_does_not_touch_the_database() -> None:
    """Nothing is written for an empty mutation."""
    db_port = MagicMock()
    store = SqlAlchemyDocumentStore(db_port, logger=MagicMock())

    store.apply_mutation(LedgerMutation())

    db_port.get_ledger_engine.assert_not_called()
