"""Achievement detection and unlocking."""

from collections.abc import Iterable
from dataclasses import replace

from cosmic_ledger.domain.constants import (
    ACHIEVEMENT_DEBT_FREE,
    ACHIEVEMENT_FIRST_INVESTMENT,
    ACHIEVEMENT_FIRST_TEAM,
    ACHIEVEMENT_FIRST_TRANSACTION,
    ALL_ACHIEVEMENTS,
)
from cosmic_ledger.domain.errors import LedgerValidationError
from cosmic_ledger.domain.models import AssetType, Team, User


def detect_achievements(user: User, teams: Iterable[Team]) -> frozenset[str]:
    """Return the achievements the user's current data qualifies for."""
    user_teams = [team for team in teams if team.has_member(user.id)]
    statements = [user.statement, *(team.statement for team in user_teams)]
    detected = set()

    if any(
        user.id in transaction.participant_ids()
        for statement in statements
        for transaction in statement.transactions
    ):
        detected.add(ACHIEVEMENT_FIRST_TRANSACTION)
    if any(
        asset.asset_type == AssetType.STOCK
        for statement in statements
        for asset in statement.assets
    ):
        detected.add(ACHIEVEMENT_FIRST_INVESTMENT)
    if user_teams or user.team_ids:
        detected.add(ACHIEVEMENT_FIRST_TEAM)
    if any(
        liability.balance <= 0
        for statement in statements
        for liability in statement.liabilities
    ):
        detected.add(ACHIEVEMENT_DEBT_FREE)
    return frozenset(detected)


def unlock_achievement(user: User, achievement_id: str) -> User | None:
    """Return the user with the achievement unlocked.

    Returns:
        User | None: None when the achievement was already unlocked.

    Raises:
        LedgerValidationError: For an unknown achievement id.
    """
    if achievement_id not in ALL_ACHIEVEMENTS:
        raise LedgerValidationError(f"Unknown achievement: {achievement_id}")
    if achievement_id in user.achievements:
        return None
    return replace(user, achievements=user.achievements | {achievement_id})


def unlock_detected(user: User, teams: Iterable[Team]) -> User | None:
    """Unlock every newly qualified achievement, or return None if none."""
    missing = detect_achievements(user, teams) - user.achievements
    if not missing:
        return None
    return replace(user, achievements=user.achievements | missing)


__all__ = ["detect_achievements", "unlock_achievement", "unlock_detected"]
