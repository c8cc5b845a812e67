"""Use case to add or update an asset or liability."""

from dataclasses import replace

from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases.ledger_writes import build_mutation
from cosmic_ledger.domain.errors import LedgerError
from cosmic_ledger.domain.models import Holding, Liability
from cosmic_ledger.domain.services.achievements import unlock_detected
from cosmic_ledger.domain.services.statements import place_holding
from cosmic_ledger.infrastructure.logging.logger import get_app_logger
from cosmic_ledger.utils.identifiers import new_document_id


class SaveHoldingUseCase:
    """Store a holding in the personal or team statement that owns it.

    Saving a holding can qualify the user for investment or debt
    achievements, which are unlocked in the same write.
    """

    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        logger=None,
        id_factory=None,
    ) -> None:
        self._repository = repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or new_document_id

    def execute(self, user_id: str, item: Holding) -> Holding:
        """Save the holding; an empty id creates a new one.

        Raises:
            LedgerValidationError: When the ownership shares are invalid.
            TeamNotFoundError: When a team holding names an unknown team.
        """
        if not item.id:
            prefix = "liability" if isinstance(item, Liability) else "asset"
            item = replace(item, id=self._id_factory(prefix))
        try:
            snapshot = self._repository.fetch_snapshot(user_id)
            users, teams = place_holding(
                item,
                user_id,
                snapshot.users_by_id(),
                snapshot.teams_by_id(),
            )
        except LedgerError as exc:
            self._logger.warning(
                f"Holding {item.name} rejected for user {user_id}: {exc}"
            )
            raise

        acting_user = users.get(user_id, snapshot.user)
        merged_teams = {**snapshot.teams_by_id(), **teams}
        unlocked = unlock_detected(acting_user, merged_teams.values())
        if unlocked is not None:
            users[user_id] = unlocked
            new_ids = sorted(unlocked.achievements - acting_user.achievements)
            self._logger.info(
                f"Unlocked {', '.join(new_ids)} for user {user_id}"
            )

        accounts = snapshot.accounts_by_id()
        self._repository.apply_mutation(
            build_mutation(accounts, accounts, users, teams)
        )
        self._logger.info(f"Saved holding {item.id} ({item.name})")
        return item


__all__ = ["SaveHoldingUseCase"]
