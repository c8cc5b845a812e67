"""Use case to compute a user's dashboard figures."""

from dataclasses import dataclass
from datetime import date

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.models import (
    FinancialMetrics,
    FinancialStatement,
    HistoricalDataPoint,
    NetWorthBreakdown,
)
from cosmic_ledger.domain.services.history import build_net_worth_history
from cosmic_ledger.domain.services.metrics import (
    compute_metrics,
    compute_net_worth_breakdown,
)
from cosmic_ledger.domain.services.statements import merge_effective_statement
from cosmic_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class FinancialOverview:
    """Everything the dashboard shows for one user.

    Attributes:
        statement: Effective statement (personal merged with teams).
        metrics: Metrics for the requested period.
        history: Net worth series for charting.
        breakdown: Net worth itemized by holding.
    """

    statement: FinancialStatement
    metrics: FinancialMetrics
    history: list[HistoricalDataPoint]
    breakdown: NetWorthBreakdown


class GetFinancialOverviewUseCase:
    """Compute metrics, history and breakdown from one snapshot."""

    def __init__(self, repository: SnapshotRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            repository: Port providing ledger snapshots.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        period: str | None = None,
        today: date | None = None,
    ) -> FinancialOverview:
        """Return the user's overview.

        Args:
            user_id: User to report for.
            period: Date prefix for flow metrics; None means this month.
            today: Reference date for the default period.

        Returns:
            FinancialOverview: Figures computed from a single snapshot.
        """
        snapshot = self._repository.fetch_snapshot(user_id)
        statement = merge_effective_statement(snapshot.user, snapshot.teams)
        metrics = compute_metrics(
            statement,
            user_id,
            snapshot.teams,
            period,
            today=today,
        )
        history = build_net_worth_history(snapshot.user, snapshot.teams)
        breakdown = compute_net_worth_breakdown(snapshot.user, snapshot.teams)
        self._logger.info(
            f"Overview computed for user {user_id}: "
            f"net_worth={metrics.net_worth}, cash_flow={metrics.cash_flow}, "
            f"history_points={len(history)}"
        )
        return FinancialOverview(
            statement=statement,
            metrics=metrics,
            history=history,
            breakdown=breakdown,
        )


__all__ = ["GetFinancialOverviewUseCase", "FinancialOverview"]
