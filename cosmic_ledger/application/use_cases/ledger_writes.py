"""Helpers shared by the use cases that write to the ledger."""

from collections.abc import Iterable, Mapping

from cosmic_ledger.application.ports.snapshot_repository import (
    LedgerSnapshot,
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.models import (
    Account,
    LedgerMutation,
    Team,
    Transaction,
    User,
)
from cosmic_ledger.domain.services.posting import changed_accounts


def fetch_for_transactions(
    repository: SnapshotRepositoryPort,
    user_id: str,
    transactions: Iterable[Transaction | None],
    snapshot: LedgerSnapshot | None = None,
) -> LedgerSnapshot:
    """Return a snapshot that also loads every participant of the records.

    An existing snapshot is reused when it already holds all participants.
    """
    participant_ids: dict[str, None] = {}
    for transaction in transactions:
        if transaction is not None:
            participant_ids.update(dict.fromkeys(transaction.participant_ids()))
    if snapshot is not None:
        loaded = {user.id for user in snapshot.all_users}
        if loaded.issuperset(participant_ids):
            return snapshot
    return repository.fetch_snapshot(
        user_id,
        extra_user_ids=tuple(participant_ids),
    )


def build_mutation(
    accounts_before: Mapping[str, Account],
    accounts_after: Mapping[str, Account],
    users: Mapping[str, User] | None = None,
    teams: Mapping[str, Team] | None = None,
) -> LedgerMutation:
    """Package the documents changed by one operation."""
    return LedgerMutation(
        accounts=changed_accounts(accounts_before, accounts_after),
        users=tuple((users or {}).values()),
        teams=tuple((teams or {}).values()),
    )


__all__ = ["fetch_for_transactions", "build_mutation"]
