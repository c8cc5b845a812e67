"""Use case to delete a transaction."""

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases.ledger_writes import (
    build_mutation,
    fetch_for_transactions,
)
from cosmic_ledger.domain.errors import LedgerError, TransactionNotFoundError
from cosmic_ledger.domain.models import Transaction
from cosmic_ledger.domain.services.posting import reverse_transaction
from cosmic_ledger.domain.services.statements import (
    find_transaction,
    remove_transaction,
)
from cosmic_ledger.infrastructure.logging.logger import get_app_logger


class DeleteTransactionUseCase:
    """Reverse a transaction's posting and remove it from every statement.

    Each leg of a transfer is an independent record; deleting one leg only
    reverses that leg.
    """

    def __init__(self, repository: SnapshotRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing snapshots and atomic writes.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str, transaction_id: str) -> Transaction:
        """Delete the transaction and return the removed record.

        Raises:
            TransactionNotFoundError: When no loaded statement holds the id.
        """
        try:
            return self._delete(user_id, transaction_id)
        except LedgerError as exc:
            self._logger.warning(
                f"Delete of transaction {transaction_id} rejected "
                f"for user {user_id}: {exc}"
            )
            raise

    def _delete(self, user_id: str, transaction_id: str) -> Transaction:
        snapshot = self._repository.fetch_snapshot(user_id)
        stored = find_transaction(
            transaction_id,
            snapshot.users_by_id(),
            snapshot.teams_by_id(),
        )
        if stored is None:
            raise TransactionNotFoundError(transaction_id)
        snapshot = fetch_for_transactions(
            self._repository,
            user_id,
            [stored],
            snapshot,
        )

        accounts = snapshot.accounts_by_id()
        reversed_book = reverse_transaction(stored, accounts)
        changed_users, changed_teams = remove_transaction(
            transaction_id,
            snapshot.users_by_id(),
            snapshot.teams_by_id(),
        )
        self._repository.apply_mutation(
            build_mutation(accounts, reversed_book, changed_users, changed_teams)
        )
        self._logger.info(
            f"Deleted transaction {transaction_id} from "
            f"{len(changed_users) + len(changed_teams)} statements"
        )
        return stored


__all__ = ["DeleteTransactionUseCase"]
