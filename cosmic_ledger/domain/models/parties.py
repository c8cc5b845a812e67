"""Domain models for users, teams and their plans."""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Mapping

from .ledger import Account, Asset, FinancialStatement


@dataclass(frozen=True)
class Budget:
    """Spending limits per category for one calendar month.

    Attributes:
        month: Month key in ``YYYY-MM`` form.
        limits: Limit per category name.
    """

    month: str
    limits: Mapping[str, Decimal] = field(default_factory=dict)

    @property
    def total_limit(self) -> Decimal:
        return sum(self.limits.values(), Decimal("0"))


@dataclass(frozen=True)
class Goal:
    """Savings target tracked by contributions."""

    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal = Decimal("0")
    deadline: date | None = None

    @property
    def progress(self) -> Decimal:
        """Return completion as a fraction capped to 1."""
        if self.target_amount <= 0:
            return Decimal("0")
        return min(self.current_amount / self.target_amount, Decimal("1"))


@dataclass(frozen=True)
class User:
    """Player of the game with a personal statement and accounts."""

    id: str
    name: str
    avatar: str = ""
    email: str | None = None
    statement: FinancialStatement = field(default_factory=FinancialStatement)
    accounts: tuple[Account, ...] = ()
    team_ids: tuple[str, ...] = ()
    budgets: tuple[Budget, ...] = ()
    goals: tuple[Goal, ...] = ()
    achievements: frozenset[str] = frozenset()

    def find_account(self, account_id: str) -> Account | None:
        for account in self.accounts:
            if account.id == account_id:
                return account
        return None

    def find_goal(self, goal_id: str) -> Goal | None:
        for goal in self.goals:
            if goal.id == goal_id:
                return goal
        return None

    def with_statement(self, statement: FinancialStatement) -> "User":
        return replace(self, statement=statement)


@dataclass(frozen=True)
class Team:
    """Group of users sharing a statement and accounts."""

    id: str
    name: str
    member_ids: tuple[str, ...] = ()
    statement: FinancialStatement = field(default_factory=FinancialStatement)
    accounts: tuple[Account, ...] = ()
    goals: tuple[Goal, ...] = ()

    def has_member(self, user_id: str) -> bool:
        return user_id in self.member_ids

    @property
    def member_count(self) -> int:
        return len(set(self.member_ids))

    def with_statement(self, statement: FinancialStatement) -> "Team":
        return replace(self, statement=statement)


@dataclass(frozen=True)
class EventOutcome:
    """Result of a game event choice.

    Attributes:
        message: Narrative shown to the player.
        cash_change: Signed change applied to the cash account.
        new_asset: Asset granted by the event, if any.
    """

    message: str
    cash_change: Decimal | None = None
    new_asset: Asset | None = None


__all__ = ["Budget", "Goal", "User", "Team", "EventOutcome"]
