"""Use case to move money between a user's own accounts."""

from datetime import date
from decimal import Decimal

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases.ledger_writes import build_mutation
from cosmic_ledger.domain.errors import LedgerError
from cosmic_ledger.domain.services.posting import TransferResult, transfer_funds
from cosmic_ledger.infrastructure.logging.logger import get_app_logger
from cosmic_ledger.utils.decimal_utils import coerce_decimal
from cosmic_ledger.utils.identifiers import new_document_id


class TransferFundsUseCase:
    """Transfer funds, recording an OUT/IN pair unless settling up."""

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
        from_account_id: str,
        to_account_id: str,
        amount,
        settle_up: bool = False,
        on: date | None = None,
    ) -> TransferResult:
        """Move the amount and persist balances and generated records.

        Args:
            user_id: User owning both accounts.
            from_account_id: Source account.
            to_account_id: Destination account.
            amount: Amount to move.
            settle_up: Move balances without generating records.
            on: Booking date, defaults to today.

        Returns:
            TransferResult: Updated accounts and generated records.
        """
        value: Decimal = coerce_decimal(amount)
        try:
            snapshot = self._repository.fetch_snapshot(user_id)
            accounts = snapshot.accounts_by_id()
            result = transfer_funds(
                accounts,
                user_id,
                from_account_id,
                to_account_id,
                value,
                on=on or date.today(),
                transaction_ids=(
                    self._id_factory("tx-out"),
                    self._id_factory("tx-in"),
                ),
                settle_up=settle_up,
            )
        except LedgerError as exc:
            self._logger.warning(
                f"Transfer of {value} from {from_account_id} to "
                f"{to_account_id} rejected for user {user_id}: {exc}"
            )
            raise

        users = {}
        if result.transactions:
            statement = snapshot.user.statement
            for transaction in result.transactions:
                statement = statement.with_transaction(transaction)
            users[user_id] = snapshot.user.with_statement(statement)
        self._repository.apply_mutation(
            build_mutation(accounts, result.accounts, users)
        )
        kind = "Settled up" if settle_up else "Transferred"
        self._logger.info(
            f"{kind} {value} from {from_account_id} to {to_account_id} "
            f"for user {user_id}"
        )
        return result


__all__ = ["TransferFundsUseCase"]
