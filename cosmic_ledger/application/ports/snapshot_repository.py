"""Port for reading ledger snapshots and persisting ledger mutations."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from cosmic_ledger.domain.models import Account, LedgerMutation, Team, User
from cosmic_ledger.domain.services.posting import index_accounts


@dataclass(frozen=True)
class LedgerSnapshot:
    """Consistent view of one user's ledger, fetched in a single read.

    Attributes:
        user: User the snapshot was fetched for, with accounts joined in.
        teams: Teams listing the user as a member, with accounts joined in.
        members: Every other loaded user: team members and requested extras.
    """

    user: User
    teams: tuple[Team, ...] = ()
    members: tuple[User, ...] = ()

    @property
    def all_users(self) -> tuple[User, ...]:
        return (self.user, *self.members)

    def users_by_id(self) -> dict[str, User]:
        return {user.id: user for user in self.all_users}

    def teams_by_id(self) -> dict[str, Team]:
        return {team.id: team for team in self.teams}

    def accounts_by_id(self) -> dict[str, Account]:
        """Return every account reachable from the snapshot keyed by id."""
        return index_accounts(
            *(user.accounts for user in self.all_users),
            *(team.accounts for team in self.teams),
        )

    def find_team(self, team_id: str) -> Team | None:
        return self.teams_by_id().get(team_id)


class SnapshotRepositoryPort(Protocol):
    """Port exposing snapshot reads and atomic mutation writes."""

    def fetch_snapshot(
        self,
        user_id: str,
        extra_user_ids: Iterable[str] = (),
    ) -> LedgerSnapshot:
        """Return the user's snapshot.

        Args:
            user_id: User to load.
            extra_user_ids: Further users to load, such as participants of
                a transaction who share no team with the user.

        Returns:
            LedgerSnapshot: User, teams, members and their accounts.
        """

    def apply_mutation(self, mutation: LedgerMutation) -> None:
        """Persist every document of the mutation in one transaction."""


__all__ = ["LedgerSnapshot", "SnapshotRepositoryPort"]
