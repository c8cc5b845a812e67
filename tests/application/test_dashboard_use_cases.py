"""Tests for the overview, balances and team dashboard use cases."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from cosmic_ledger.application.ports.snapshot_repository import LedgerSnapshot
from cosmic_ledger.application.use_cases.get_balances import GetBalancesUseCase
from cosmic_ledger.application.use_cases.get_financial_overview import (
    GetFinancialOverviewUseCase,
)
from cosmic_ledger.application.use_cases.get_team_dashboard import (
    GetTeamDashboardUseCase,
)
from cosmic_ledger.domain.errors import TeamNotFoundError
from cosmic_ledger.domain.models import (
    Asset,
    ExpenseShare,
    FinancialStatement,
    NetBalance,
    PaymentShare,
    Team,
    TeamEqualSplit,
    Transaction,
    TransactionType,
    User,
)


def _team_expense() -> Transaction:
    return Transaction(
        id="tx-team",
        description="Fuel",
        amount=Decimal("90"),
        type=TransactionType.EXPENSE,
        category="Travel",
        date=date(2024, 3, 12),
        payment_shares=(PaymentShare("bob", "team-chk", Decimal("90")),),
        team_id="team-1",
    )


def _dinner() -> Transaction:
    return Transaction(
        id="tx-dinner",
        description="Dinner",
        amount=Decimal("100"),
        type=TransactionType.EXPENSE,
        category="Food",
        date=date(2024, 3, 20),
        payment_shares=(PaymentShare("alice", "chk", Decimal("100")),),
        expense_shares=(
            ExpenseShare("alice", Decimal("50")),
            ExpenseShare("bob", Decimal("50")),
        ),
    )


def _build_snapshot() -> LedgerSnapshot:
    team = Team(
        id="team-1",
        name="Crew",
        member_ids=("alice", "bob", "carol"),
        statement=FinancialStatement(
            transactions=(_team_expense(),),
            assets=(
                Asset(
                    id="ship",
                    name="Ship",
                    value=Decimal("3000"),
                    ownership=TeamEqualSplit("team-1"),
                    team_id="team-1",
                ),
            ),
        ),
    )
    alice = User(
        id="alice",
        name="Alice",
        statement=FinancialStatement(transactions=(_dinner(),)),
    )
    bob = User(
        id="bob",
        name="Bob",
        statement=FinancialStatement(transactions=(_dinner(),)),
    )
    carol = User(id="carol", name="Carol")
    return LedgerSnapshot(user=alice, teams=(team,), members=(bob, carol))


def _build_repository() -> MagicMock:
    repository = MagicMock()
    repository.fetch_snapshot.return_value = _build_snapshot()
    return repository


def test_overview_combines_personal_and_team_figures() -> None:
    """Metrics, history and breakdown come from the same snapshot."""
    overview = GetFinancialOverviewUseCase(
        _build_repository(), logger=MagicMock()
    ).execute("alice", period="2024-03")

    assert overview.metrics.total_assets == Decimal("1000")
    assert overview.metrics.total_expenses == Decimal("80")
    assert overview.breakdown.assets[0].source == "Crew"
    assert [point.date for point in overview.history] == [
        date(2024, 3, 12),
        date(2024, 3, 20),
        date(2024, 3, 31),
    ]
    assert overview.history[-1].expenses == Decimal("80")


def test_balances_are_sorted_and_summarized() -> None:
    """The group view lists creditors first and the user's position."""
    view = GetBalancesUseCase(_build_repository(), logger=MagicMock()).execute(
        "alice"
    )

    assert view.balances == [
        NetBalance("alice", Decimal("50")),
        NetBalance("bob", Decimal("-50")),
    ]
    assert view.owed_to_user == Decimal("50")
    assert view.owed_by_user == Decimal("0")


def test_team_dashboard_counts_in_full_with_default_range() -> None:
    """Team metrics use full amounts and the report spans the month."""
    dashboard = GetTeamDashboardUseCase(
        _build_repository(), logger=MagicMock()
    ).execute("alice", "team-1", today=date(2024, 3, 25))

    assert dashboard.metrics.total_expenses == Decimal("90")
    assert dashboard.metrics.total_assets == Decimal("3000")
    assert dashboard.report.start_date == date(2024, 3, 1)
    assert dashboard.report.end_date == date(2024, 3, 25)
    assert dashboard.report.profit == Decimal("-90")


def test_team_dashboard_for_unknown_team_raises() -> None:
    """Teams the user does not belong to are not found."""
    logger = MagicMock()

    with pytest.raises(TeamNotFoundError):
        GetTeamDashboardUseCase(_build_repository(), logger=logger).execute(
            "alice", "team-9"
        )

    logger.warning.assert_called_once()
