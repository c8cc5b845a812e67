"""Use case to create or edit a transaction."""

from dataclasses import replace

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases.ledger_writes import (
    build_mutation,
    fetch_for_transactions,
)
from cosmic_ledger.domain.constants import ACHIEVEMENT_FIRST_TRANSACTION
from cosmic_ledger.domain.errors import LedgerError
from cosmic_ledger.domain.models import Transaction
from cosmic_ledger.domain.services.achievements import unlock_achievement
from cosmic_ledger.domain.services.posting import (
    post_transaction,
    repost_transaction,
)
from cosmic_ledger.domain.services.statements import (
    find_transaction,
    place_transaction,
    remove_transaction,
)
from cosmic_ledger.domain.services.validation import validate_transaction
from cosmic_ledger.infrastructure.logging.logger import get_app_logger
from cosmic_ledger.utils.identifiers import new_document_id


class SaveTransactionUseCase:
    """Post a new transaction, or reverse and repost an edited one.

    The whole operation is persisted as one mutation: changed account
    balances plus every statement that lost or gained the record.
    """

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

    def execute(self, user_id: str, transaction: Transaction) -> Transaction:
        """Save the transaction on behalf of a user.

        Args:
            user_id: User saving the record.
            transaction: Record to save; a None id creates a new record.

        Returns:
            Transaction: The saved record, with its id assigned.

        Raises:
            LedgerError: When validation or a reference lookup fails. No
                document is written in that case.
        """
        try:
            return self._save(user_id, transaction)
        except LedgerError as exc:
            self._logger.warning(
                f"Transaction rejected for user {user_id}: {exc}"
            )
            raise

    def _save(self, user_id: str, transaction: Transaction) -> Transaction:
        validate_transaction(transaction)
        snapshot = fetch_for_transactions(
            self._repository,
            user_id,
            [transaction],
        )

        previous = None
        if transaction.id is None:
            transaction = replace(transaction, id=self._id_factory("tx"))
        else:
            previous = find_transaction(
                transaction.id,
                snapshot.users_by_id(),
                snapshot.teams_by_id(),
            )
            if previous is not None:
                snapshot = fetch_for_transactions(
                    self._repository,
                    user_id,
                    [transaction, previous],
                    snapshot,
                )

        users = snapshot.users_by_id()
        teams = snapshot.teams_by_id()
        accounts = snapshot.accounts_by_id()
        if previous is None:
            posted = post_transaction(transaction, accounts)
            changed_users, changed_teams = {}, {}
        else:
            posted = repost_transaction(previous, transaction, accounts)
            changed_users, changed_teams = remove_transaction(
                transaction.id,
                users,
                teams,
            )

        placed_users, placed_teams = place_transaction(
            transaction,
            user_id,
            {**users, **changed_users},
            {**teams, **changed_teams},
        )
        changed_users.update(placed_users)
        changed_teams.update(placed_teams)

        acting_user = changed_users.get(user_id, snapshot.user)
        unlocked = unlock_achievement(acting_user, ACHIEVEMENT_FIRST_TRANSACTION)
        if unlocked is not None:
            changed_users[user_id] = unlocked
            self._logger.info(
                f"Unlocked {ACHIEVEMENT_FIRST_TRANSACTION} for user {user_id}"
            )

        mutation = build_mutation(accounts, posted, changed_users, changed_teams)
        self._repository.apply_mutation(mutation)
        action = "Updated" if previous is not None else "Posted"
        self._logger.info(
            f"{action} transaction {transaction.id} "
            f"({transaction.type.value} {transaction.amount}) for user {user_id}"
        )
        return transaction


__all__ = ["SaveTransactionUseCase"]
