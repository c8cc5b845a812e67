"""Use case to apply the outcome of a cosmic event."""

from datetime import date

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases.ledger_writes import build_mutation
from cosmic_ledger.domain.errors import LedgerError
from cosmic_ledger.domain.models import EventOutcome
from cosmic_ledger.domain.services.events import EventResult, apply_event_outcome
from cosmic_ledger.infrastructure.logging.logger import get_app_logger
from cosmic_ledger.utils.identifiers import new_document_id


class ApplyEventOutcomeUseCase:
    """Apply an event's cash change and granted asset to a user."""

    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        logger=None,
        id_factory=None,
    ) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing snapshots and atomic writes.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional callable building ids from a prefix.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or new_document_id

    def execute(
        self,
        user_id: str,
        outcome: EventOutcome,
        on: date | None = None,
    ) -> EventResult:
        """Apply the outcome and persist the user and cash account."""
        try:
            snapshot = self._repository.fetch_snapshot(user_id)
            accounts = snapshot.accounts_by_id()
            result = apply_event_outcome(
                snapshot.user,
                outcome,
                accounts,
                on=on or date.today(),
                transaction_id=self._id_factory("tx-event"),
                asset_id=self._id_factory("asset"),
            )
        except LedgerError as exc:
            self._logger.warning(
                f"Event outcome rejected for user {user_id}: {exc}"
            )
            raise

        self._repository.apply_mutation(
            build_mutation(accounts, result.accounts, {user_id: result.user})
        )
        self._logger.info(
            f"Applied event for user {user_id}: "
            f"cash change {outcome.cash_change or 0}, "
            f"new asset {'yes' if outcome.new_asset else 'no'}"
        )
        return result


__all__ = ["ApplyEventOutcomeUseCase"]
