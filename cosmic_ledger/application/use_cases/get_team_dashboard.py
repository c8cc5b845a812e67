"""Use case to compute a team's dashboard and report."""

from dataclasses import dataclass
from datetime import date

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.errors import TeamNotFoundError
from cosmic_ledger.domain.models import FinancialMetrics, Team, TeamReport
from cosmic_ledger.domain.services.metrics import (
    compute_metrics,
    compute_team_report,
)
from cosmic_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class TeamDashboard:
    """Team-wide figures, every item counted in full.

    Attributes:
        team: Team reported on.
        metrics: Team view metrics for the requested period.
        report: Income and expenses over the requested date range.
    """

    team: Team
    metrics: FinancialMetrics
    report: TeamReport


class GetTeamDashboardUseCase:
    """Report on a team the requesting user belongs to."""

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
        team_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
        period: str | None = None,
        today: date | None = None,
    ) -> TeamDashboard:
        """Return the team dashboard.

        Args:
            user_id: Member requesting the dashboard.
            team_id: Team to report on.
            start_date: First day of the report, defaults to the first day
                of the current month.
            end_date: Last day of the report, defaults to today.
            period: Date prefix for the metrics; None means this month.
            today: Reference date for the defaults.

        Raises:
            TeamNotFoundError: When the user is not a member of the team.
        """
        snapshot = self._repository.fetch_snapshot(user_id)
        team = snapshot.find_team(team_id)
        if team is None or not team.has_member(user_id):
            self._logger.warning(
                f"Team {team_id} not available to user {user_id}"
            )
            raise TeamNotFoundError(team_id)

        reference = today or date.today()
        start = start_date or reference.replace(day=1)
        end = end_date or reference
        metrics = compute_metrics(
            team.statement,
            None,
            snapshot.teams,
            period,
            team_view=True,
            today=reference,
        )
        report = compute_team_report(team, start, end)
        self._logger.info(
            f"Team report for {team.name}: {start} to {end}, "
            f"profit={report.profit}"
        )
        return TeamDashboard(team=team, metrics=metrics, report=report)


__all__ = ["GetTeamDashboardUseCase", "TeamDashboard"]
