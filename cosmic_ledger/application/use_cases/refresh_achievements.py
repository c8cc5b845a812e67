"""Use case to unlock achievements the user's data qualifies for."""

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.models import LedgerMutation
from cosmic_ledger.domain.services.achievements import unlock_detected
from cosmic_ledger.infrastructure.logging.logger import get_app_logger


class RefreshAchievementsUseCase:
    """Detect and persist newly earned achievements."""

    def __init__(self, repository: SnapshotRepositoryPort, logger=None) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str) -> frozenset[str]:
        """Return the ids unlocked by this call, empty when nothing changed."""
        snapshot = self._repository.fetch_snapshot(user_id)
        unlocked = unlock_detected(snapshot.user, snapshot.teams)
        if unlocked is None:
            return frozenset()
        new_ids = unlocked.achievements - snapshot.user.achievements
        self._repository.apply_mutation(LedgerMutation(users=(unlocked,)))
        self._logger.info(
            f"Unlocked {', '.join(sorted(new_ids))} for user {user_id}"
        )
        return frozenset(new_ids)


__all__ = ["RefreshAchievementsUseCase"]
