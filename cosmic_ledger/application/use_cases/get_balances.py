"""Use case to compute who owes whom across shared expenses."""

from dataclasses import dataclass
from decimal import Decimal

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.models import NetBalance
from cosmic_ledger.domain.services.settlement import (
    compute_net_balances,
    summarize_position,
)
from cosmic_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class BalancesView:
    """Net balances of the user's group.

    Attributes:
        balances: Net position per user, largest creditor first.
        owed_to_user: What the group owes the requesting user.
        owed_by_user: What the requesting user owes the group.
    """

    balances: list[NetBalance]
    owed_to_user: Decimal
    owed_by_user: Decimal


class GetBalancesUseCase:
    """Net shared expenses across the user, their teams and team members."""

    def __init__(self, repository: SnapshotRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing ledger snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str) -> BalancesView:
        """Return the group's open balances and the user's own position."""
        snapshot = self._repository.fetch_snapshot(user_id)
        balances = compute_net_balances(snapshot.all_users, snapshot.teams)
        balances = sorted(balances, key=lambda b: b.amount, reverse=True)
        owed_to_user, owed_by_user = summarize_position(balances, user_id)
        self._logger.info(
            f"Computed {len(balances)} open balances for user {user_id}"
        )
        return BalancesView(
            balances=balances,
            owed_to_user=owed_to_user,
            owed_by_user=owed_by_user,
        )


__all__ = ["GetBalancesUseCase", "BalancesView"]
