"""Use case to pay into a savings goal."""

from datetime import date

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases.ledger_writes import build_mutation
from cosmic_ledger.domain.errors import LedgerError
from cosmic_ledger.domain.services.goals import (
    GoalContribution,
    contribute_to_goal,
)
from cosmic_ledger.infrastructure.logging.logger import get_app_logger
from cosmic_ledger.utils.decimal_utils import coerce_decimal
from cosmic_ledger.utils.identifiers import new_document_id


class ContributeToGoalUseCase:
    """Record a goal contribution paid from one of the user's accounts."""

    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        logger=None,
        id_factory=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or new_document_id

    def execute(
        self,
        user_id: str,
        goal_id: str,
        amount,
        from_account_id: str,
        on: date | None = None,
    ) -> GoalContribution:
        try:
            snapshot = self._repository.fetch_snapshot(user_id)
            accounts = snapshot.accounts_by_id()
            contribution = contribute_to_goal(
                snapshot.user,
                goal_id,
                coerce_decimal(amount),
                from_account_id,
                accounts,
                on=on or date.today(),
                transaction_id=self._id_factory("tx-goal"),
            )
        except LedgerError as exc:
            self._logger.warning(
                f"Contribution to goal {goal_id} rejected for user "
                f"{user_id}: {exc}"
            )
            raise

        self._repository.apply_mutation(
            build_mutation(
                accounts,
                contribution.accounts,
                {user_id: contribution.user},
            )
        )
        self._logger.info(
            f"Contributed {contribution.transaction.amount} to goal {goal_id} "
            f"for user {user_id}"
        )
        return contribution


__all__ = ["ContributeToGoalUseCase"]
