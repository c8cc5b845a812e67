"""Use case to record a dividend paid by a stock."""

from datetime import date

from cosmic_ledger.application.ports.snapshot_repository import (
    LedgerSnapshot,
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases.ledger_writes import build_mutation
from cosmic_ledger.domain.errors import AssetNotFoundError, LedgerError
from cosmic_ledger.domain.models import Asset, Transaction
from cosmic_ledger.domain.services.posting import log_dividend
from cosmic_ledger.domain.services.statements import place_transaction
from cosmic_ledger.infrastructure.logging.logger import get_app_logger
from cosmic_ledger.utils.decimal_utils import coerce_decimal
from cosmic_ledger.utils.identifiers import new_document_id


class LogDividendUseCase:
    """Credit a dividend and record it as passive investment income."""

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
        asset_id: str,
        amount,
        account_id: str,
        on: date | None = None,
    ) -> Transaction:
        """Log the dividend of a personal or team stock.

        Returns:
            Transaction: The generated passive income record.

        Raises:
            AssetNotFoundError: When neither the user nor their teams hold
                the stock.
        """
        try:
            snapshot = self._repository.fetch_snapshot(user_id)
            stock = self._find_stock(snapshot, asset_id)
            accounts = snapshot.accounts_by_id()
            posted, transaction = log_dividend(
                stock,
                coerce_decimal(amount),
                account_id,
                user_id,
                accounts,
                on=on or date.today(),
                transaction_id=self._id_factory("tx-div"),
            )
            users, teams = place_transaction(
                transaction,
                user_id,
                snapshot.users_by_id(),
                snapshot.teams_by_id(),
            )
        except LedgerError as exc:
            self._logger.warning(
                f"Dividend for asset {asset_id} rejected for user "
                f"{user_id}: {exc}"
            )
            raise

        self._repository.apply_mutation(
            build_mutation(accounts, posted, users, teams)
        )
        self._logger.info(
            f"Logged dividend {transaction.amount} from {stock.name} "
            f"into account {account_id}"
        )
        return transaction

    @staticmethod
    def _find_stock(snapshot: LedgerSnapshot, asset_id: str) -> Asset:
        statements = [snapshot.user.statement]
        statements.extend(team.statement for team in snapshot.teams)
        for statement in statements:
            asset = statement.find_asset(asset_id)
            if asset is not None:
                return asset
        raise AssetNotFoundError(asset_id)


__all__ = ["LogDividendUseCase"]
