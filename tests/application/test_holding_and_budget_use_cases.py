"""Tests for holding, budget and achievement use cases."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from cosmic_ledger.application.ports.snapshot_repository import LedgerSnapshot
from cosmic_ledger.application.use_cases.get_budget_progress import (
    GetBudgetProgressUseCase,
)
from cosmic_ledger.application.use_cases.refresh_achievements import (
    RefreshAchievementsUseCase,
)
from cosmic_ledger.application.use_cases.save_budget import SaveBudgetUseCase
from cosmic_ledger.application.use_cases.save_holding import SaveHoldingUseCase
from cosmic_ledger.domain.constants import (
    ACHIEVEMENT_FIRST_INVESTMENT,
    ACHIEVEMENT_FIRST_TEAM,
)
from cosmic_ledger.domain.errors import (
    LedgerValidationError,
    OwnershipSharesError,
    TeamNotFoundError,
)
from cosmic_ledger.domain.models import (
    Asset,
    AssetType,
    Budget,
    ExpenseShare,
    ExplicitShares,
    FinancialStatement,
    Liability,
    LedgerMutation,
    OwnershipShare,
    PaymentShare,
    Team,
    TeamEqualSplit,
    Transaction,
    TransactionType,
    User,
)


def _build_repository(user: User | None = None, teams=()) -> MagicMock:
    repository = MagicMock()
    repository.fetch_snapshot.return_value = LedgerSnapshot(
        user=user or User(id="alice", name="Alice"),
        teams=tuple(teams),
    )
    return repository


def _team() -> Team:
    return Team(id="team-1", name="Crew", member_ids=("alice", "bob"))


def test_new_stock_gets_id_and_unlocks_investment() -> None:
    """Saving a first stock assigns an id and unlocks the achievement."""
    repository = _build_repository()
    stock = Asset(
        id="", name="Acme", value=Decimal("10"), asset_type=AssetType.STOCK
    )

    saved = SaveHoldingUseCase(
        repository, logger=MagicMock(), id_factory=lambda p: f"{p}-1"
    ).execute("alice", stock)

    assert saved.id == "asset-1"
    mutation = repository.apply_mutation.call_args.args[0]
    user = mutation.users[0]
    assert user.statement.find_asset("asset-1") == saved
    assert ACHIEVEMENT_FIRST_INVESTMENT in user.achievements
    assert mutation.accounts == ()


def test_team_holding_is_stored_on_the_team() -> None:
    """A team-tagged liability is split equally on the team statement."""
    repository = _build_repository(teams=[_team()])
    loan = Liability(
        id="loan", name="Van loan", balance=Decimal("900"), team_id="team-1"
    )

    SaveHoldingUseCase(repository, logger=MagicMock()).execute("alice", loan)

    mutation = repository.apply_mutation.call_args.args[0]
    stored = mutation.teams[0].statement.liabilities[0]
    assert stored.ownership == TeamEqualSplit("team-1")
    assert ACHIEVEMENT_FIRST_TEAM in mutation.users[0].achievements


@pytest.mark.parametrize(
    ("item", "error"),
    [
        (
            Asset(
                id="a1",
                name="Boat",
                value=Decimal("10"),
                ownership=ExplicitShares(
                    shares=(OwnershipShare("alice", Decimal("50")),)
                ),
            ),
            OwnershipSharesError,
        ),
        (
            Asset(id="a2", name="Hut", value=Decimal("10"), team_id="team-9"),
            TeamNotFoundError,
        ),
    ],
)
def test_invalid_holdings_are_rejected(item, error) -> None:
    """Bad shares and unknown teams abort the save."""
    repository = _build_repository(teams=[_team()])
    logger = MagicMock()

    with pytest.raises(error):
        SaveHoldingUseCase(repository, logger=logger).execute("alice", item)

    repository.apply_mutation.assert_not_called()
    logger.warning.assert_called_once()


def test_save_budget_writes_only_the_user() -> None:
    """A budget is stored on the user document."""
    repository = _build_repository()
    budget = Budget("2024-07", {"Food": Decimal("300")})

    user = SaveBudgetUseCase(repository, logger=MagicMock()).execute(
        "alice", budget
    )

    assert user.budgets == (budget,)
    repository.apply_mutation.assert_called_once_with(LedgerMutation(users=(user,)))


def test_save_budget_rejects_bad_month() -> None:
    """Malformed months are refused."""
    repository = _build_repository()

    with pytest.raises(LedgerValidationError):
        SaveBudgetUseCase(repository, logger=MagicMock()).execute(
            "alice", Budget("07/2024")
        )

    repository.apply_mutation.assert_not_called()


def test_budget_progress_warns_when_over_budget() -> None:
    """Overspending is reported through a warning."""
    groceries = Transaction(
        id="tx-1",
        description="Groceries",
        amount=Decimal("150"),
        type=TransactionType.EXPENSE,
        category="Food",
        date=date(2024, 7, 3),
        payment_shares=(PaymentShare("alice", "chk", Decimal("150")),),
        expense_shares=(ExpenseShare("alice", Decimal("150")),),
    )
    user = User(
        id="alice",
        name="Alice",
        statement=FinancialStatement(transactions=(groceries,)),
        budgets=(Budget("2024-07", {"Food": Decimal("100")}),),
    )
    logger = MagicMock()

    progress = GetBudgetProgressUseCase(
        _build_repository(user), logger=logger
    ).execute("alice", today=date(2024, 7, 20))

    assert progress.month == "2024-07"
    assert progress.lines[0].spent == Decimal("150")
    logger.warning.assert_called_once()


def test_budget_progress_without_budget_lists_spending() -> None:
    """A month without a budget still reports spending at limit zero."""
    progress = GetBudgetProgressUseCase(
        _build_repository(), logger=MagicMock()
    ).execute("alice", month="2024-01")

    assert progress.lines == []
    assert progress.total_budgeted == Decimal("0")


def test_refresh_achievements_persists_new_ids_once() -> None:
    """Only newly detected ids are persisted and returned."""
    repository = _build_repository(teams=[_team()])

    unlocked = RefreshAchievementsUseCase(repository, logger=MagicMock()).execute(
        "alice"
    )

    assert unlocked == frozenset({ACHIEVEMENT_FIRST_TEAM})
    repository.apply_mutation.assert_called_once()

    already = User(
        id="alice",
        name="Alice",
        achievements=frozenset({ACHIEVEMENT_FIRST_TEAM}),
    )
    repository = _build_repository(already, teams=[_team()])
    assert (
        RefreshAchievementsUseCase(repository, logger=MagicMock()).execute("alice")
        == frozenset()
    )
    repository.apply_mutation.assert_not_called()
