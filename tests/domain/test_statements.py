"""Tests for statement merging and transaction placement."""

from datetime import date
from decimal import Decimal

import pytest

from cosmic_ledger.domain.errors import TeamNotFoundError, UserNotFoundError
from cosmic_ledger.domain.models import (
    Asset,
    ExpenseShare,
    ExplicitShares,
    FinancialStatement,
    Liability,
    PaymentShare,
    SoleOwnership,
    Team,
    TeamEqualSplit,
    Transaction,
    TransactionType,
    User,
)
from cosmic_ledger.domain.services.metrics import compute_metrics
from cosmic_ledger.domain.services.statements import (
    find_transaction,
    merge_effective_statement,
    place_holding,
    place_transaction,
    remove_transaction,
)


def _build_transaction(tx_id="tx-1", team_id=None, **overrides) -> Transaction:
    values = {
        "id": tx_id,
        "description": "Groceries",
        "amount": Decimal("60"),
        "type": TransactionType.EXPENSE,
        "category": "Food",
        "date": date(2024, 3, 10),
        "payment_shares": (PaymentShare("alice", "acc-a", Decimal("60")),),
        "expense_shares": (
            ExpenseShare("alice", Decimal("30")),
            ExpenseShare("bob", Decimal("30")),
        ),
        "team_id": team_id,
    }
    values.update(overrides)
    return Transaction(**values)


def _build_team() -> Team:
    house = Asset(
        id="house",
        name="House",
        value=Decimal("1000"),
        ownership=TeamEqualSplit("team-1"),
        team_id="team-1",
    )
    loan = Liability(
        id="loan",
        name="Mortgage",
        balance=Decimal("400"),
        ownership=TeamEqualSplit("team-1"),
        team_id="team-1",
    )
    return Team(
        id="team-1",
        name="Casita",
        member_ids=("alice", "bob"),
        statement=FinancialStatement(
            transactions=(_build_transaction("tx-team", team_id="team-1"),),
            assets=(house,),
            liabilities=(loan,),
        ),
    )


def _build_user(user_id="alice", statement=None) -> User:
    return User(
        id=user_id,
        name=user_id.title(),
        statement=statement or FinancialStatement(),
    )


def test_merge_scales_team_holdings_to_user_share() -> None:
    """A 1000 team house shows as 500 for one of two members."""
    merged = merge_effective_statement(_build_user(), [_build_team()])

    house = merged.find_asset("house")
    assert house.value == Decimal("500")
    assert isinstance(house.ownership, ExplicitShares)
    assert house.ownership.prorated is True

    metrics = compute_metrics(merged, "alice", [_build_team()], period="")
    assert metrics.total_assets == Decimal("500")
    assert metrics.total_liabilities == Decimal("200")
    assert metrics.net_worth == Decimal("300")


def test_merge_is_idempotent_and_pure() -> None:
    """Merging twice yields the same view and leaves inputs untouched."""
    user = _build_user(
        statement=FinancialStatement(transactions=(_build_transaction(),))
    )
    team = _build_team()

    first = merge_effective_statement(user, [team])
    second = merge_effective_statement(user, [team])

    assert first == second
    assert team.statement.assets[0].value == Decimal("1000")
    assert {t.id for t in first.transactions} == {"tx-1", "tx-team"}


def test_merge_skips_teams_without_the_user() -> None:
    """Teams that do not list the user are ignored."""
    merged = merge_effective_statement(_build_user("carol"), [_build_team()])

    assert merged == FinancialStatement()


def test_merge_keeps_last_record_for_duplicate_ids() -> None:
    """A transaction duplicated into a team statement appears once."""
    user = _build_user(
        statement=FinancialStatement(
            transactions=(_build_transaction("tx-team", description="Old"),)
        )
    )

    merged = merge_effective_statement(user, [_build_team()])

    matches = [t for t in merged.transactions if t.id == "tx-team"]
    assert len(matches) == 1
    assert matches[0].description == "Groceries"


def test_place_personal_transaction_copies_to_participants() -> None:
    """Every participant of a personal record gets a copy."""
    users = {"alice": _build_user("alice"), "bob": _build_user("bob")}

    changed_users, changed_teams = place_transaction(
        _build_transaction(), "alice", users, {}
    )

    assert changed_teams == {}
    assert set(changed_users) == {"alice", "bob"}
    assert changed_users["bob"].statement.find_transaction("tx-1") is not None


def test_place_transaction_raises_for_unknown_holders() -> None:
    """Missing participants or teams abort the placement."""
    with pytest.raises(UserNotFoundError):
        place_transaction(
            _build_transaction(), "alice", {"alice": _build_user()}, {}
        )
    with pytest.raises(TeamNotFoundError):
        place_transaction(
            _build_transaction(team_id="team-9"), "alice", {}, {}
        )


def test_place_team_transaction_goes_to_team_only() -> None:
    """Team records live in the team statement."""
    team = _build_team()
    users = {"alice": _build_user()}

    changed_users, changed_teams = place_transaction(
        _build_transaction("tx-new", team_id="team-1"),
        "alice",
        users,
        {"team-1": team},
    )

    assert changed_users == {}
    statement = changed_teams["team-1"].statement
    assert statement.find_transaction("tx-new") is not None


def test_find_and_remove_transaction_across_statements() -> None:
    """Removal reports every statement that held the record."""
    users = {
        "alice": _build_user(
            statement=FinancialStatement(transactions=(_build_transaction(),))
        ),
        "bob": _build_user(
            "bob",
            statement=FinancialStatement(transactions=(_build_transaction(),)),
        ),
    }
    teams = {"team-1": _build_team()}

    assert find_transaction("tx-1", users, teams).id == "tx-1"
    changed_users, changed_teams = remove_transaction("tx-1", users, teams)

    assert set(changed_users) == {"alice", "bob"}
    assert changed_teams == {}
    assert changed_users["alice"].statement.transactions == ()


def test_place_holding_converts_team_items_to_equal_split() -> None:
    """A solely owned holding tagged with a team becomes a team split."""
    item = Asset(
        id="car",
        name="Car",
        value=Decimal("9000"),
        ownership=SoleOwnership(),
        team_id="team-1",
    )

    changed_users, changed_teams = place_holding(
        item, "alice", {"alice": _build_user()}, {"team-1": _build_team()}
    )

    stored = changed_teams["team-1"].statement.find_asset("car")
    assert changed_users == {}
    assert stored.ownership == TeamEqualSplit("team-1")


def test_place_holding_replaces_personal_item() -> None:
    """Saving an existing id replaces the stored holding."""
    user = _build_user(
        statement=FinancialStatement(
            liabilities=(Liability(id="l1", name="Card", balance=Decimal("50")),)
        )
    )

    changed_users, _ = place_holding(
        Liability(id="l1", name="Card", balance=Decimal("0")),
        "alice",
        {"alice": user},
        {},
    )

    liabilities = changed_users["alice"].statement.liabilities
    assert len(liabilities) == 1
    assert liabilities[0].balance == Decimal("0")
