"""Use case to compare a month's spending with its budget."""

from datetime import date

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.models import Budget, BudgetProgress
from cosmic_ledger.domain.services.budgets import (
    compute_budget_progress,
    find_budget,
)
from cosmic_ledger.domain.services.metrics import current_period
from cosmic_ledger.domain.services.statements import merge_effective_statement
from cosmic_ledger.infrastructure.logging.logger import get_app_logger


class GetBudgetProgressUseCase:
    """Report budget progress for one month of the user's effective statement."""

    def __init__(self, repository: SnapshotRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        month: str | None = None,
        today: date | None = None,
    ) -> BudgetProgress:
        """Return the progress; a month without a budget has no limits."""
        month = month or current_period(today)
        snapshot = self._repository.fetch_snapshot(user_id)
        budget = find_budget(snapshot.user, month) or Budget(month=month)
        statement = merge_effective_statement(snapshot.user, snapshot.teams)
        progress = compute_budget_progress(
            statement,
            user_id,
            snapshot.teams,
            budget,
        )
        over = [line.category for line in progress.lines if line.is_over_budget]
        if over:
            self._logger.warning(
                f"User {user_id} is over budget in {month}: {', '.join(over)}"
            )
        self._logger.info(
            f"Budget {month} for user {user_id}: spent "
            f"{progress.total_spent} of {progress.total_budgeted}"
        )
        return progress


__all__ = ["GetBudgetProgressUseCase"]
