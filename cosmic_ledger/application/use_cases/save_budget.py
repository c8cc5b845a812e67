"""Use case to save a monthly budget."""

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.errors import LedgerError
from cosmic_ledger.domain.models import Budget, LedgerMutation, User
from cosmic_ledger.domain.services.budgets import upsert_budget
from cosmic_ledger.infrastructure.logging.logger import get_app_logger


class SaveBudgetUseCase:
    """Replace the user's budget for the budget's month."""

    def __init__(self, repository: SnapshotRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, budget: Budget) -> User:
        try:
            snapshot = self._repository.fetch_snapshot(user_id)
            user = upsert_budget(snapshot.user, budget)
        except LedgerError as exc:
            self._logger.warning(
                f"Budget for {budget.month} rejected for user {user_id}: {exc}"
            )
            raise
        self._repository.apply_mutation(LedgerMutation(users=(user,)))
        self._logger.info(
            f"Saved budget {budget.month} with {len(budget.limits)} "
            f"categories for user {user_id}"
        )
        return user


__all__ = ["SaveBudgetUseCase"]
