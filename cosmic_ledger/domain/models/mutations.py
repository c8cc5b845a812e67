"""Domain model for the documents a ledger operation asks to persist."""

from dataclasses import dataclass

from .ledger import Account
from .parties import Team, User


@dataclass(frozen=True)
class LedgerMutation:
    """Whole documents to upsert atomically as one write.

    Attributes:
        accounts: Accounts whose balances changed.
        users: Users whose statement, goals, budgets or achievements changed.
        teams: Teams whose statement changed.
    """

    accounts: tuple[Account, ...] = ()
    users: tuple[User, ...] = ()
    teams: tuple[Team, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.accounts or self.users or self.teams)

    def merge(self, other: "LedgerMutation") -> "LedgerMutation":
        """Combine two mutations; documents from ``other`` win on id clashes."""
        return LedgerMutation(
            accounts=_merge_by_id(self.accounts, other.accounts),
            users=_merge_by_id(self.users, other.users),
            teams=_merge_by_id(self.teams, other.teams),
        )


def _merge_by_id(first: tuple, second: tuple) -> tuple:
    merged = {item.id: item for item in first}
    for item in second:
        merged[item.id] = item
    return tuple(merged.values())


__all__ = ["LedgerMutation"]
