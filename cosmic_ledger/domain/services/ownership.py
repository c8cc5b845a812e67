"""Share resolution for holdings and team-scoped amounts."""

from collections.abc import Iterable
from decimal import Decimal

from cosmic_ledger.domain.constants import FULL_OWNERSHIP_PERCENTAGE
from cosmic_ledger.domain.models import (
    ExplicitShares,
    Holding,
    SoleOwnership,
    Team,
    TeamEqualSplit,
)


def find_team(teams: Iterable[Team], team_id: str | None) -> Team | None:
    """Return the team with the given id, or None."""
    if team_id is None:
        return None
    for team in teams:
        if team.id == team_id:
            return team
    return None


def team_fraction(team: Team | None, user_id: str) -> Decimal:
    """Return the user's equal-split fraction of a team, 0 for non-members."""
    if team is None or not team.has_member(user_id) or team.member_count == 0:
        return Decimal("0")
    return Decimal("1") / Decimal(team.member_count)


def team_split_amount(
    amount: Decimal,
    team: Team | None,
    user_id: str,
) -> Decimal:
    """Return the user's equal share of an amount booked to a team.

    Dividing the amount keeps exact results for even splits (90 over three
    members is 30, not 29.99...).
    """
    if team is None or not team.has_member(user_id) or team.member_count == 0:
        return Decimal("0")
    return amount / Decimal(team.member_count)


def resolve_ownership_fraction(
    item: Holding,
    user_id: str,
    teams: Iterable[Team],
    *,
    holder_id: str | None = None,
) -> Decimal:
    """Return the fraction of a holding that belongs to a user.

    A team reference that does not resolve yields 0; orphaned team tags are
    expected after membership changes and simply do not contribute.

    Args:
        item: Asset or liability to resolve.
        user_id: User whose share is requested.
        teams: Teams available for team-split resolution.
        holder_id: Owner of the statement holding a solely owned item;
            defaults to the querying user.

    Returns:
        Decimal: Fraction in [0, 1].
    """
    ownership = item.ownership
    if isinstance(ownership, ExplicitShares):
        percentage = ownership.percentage_for(user_id)
        if ownership.prorated:
            return Decimal("1") if percentage > 0 else Decimal("0")
        return percentage / FULL_OWNERSHIP_PERCENTAGE
    if isinstance(ownership, TeamEqualSplit):
        return team_fraction(find_team(teams, ownership.team_id), user_id)
    if isinstance(ownership, SoleOwnership):
        owner = holder_id if holder_id is not None else user_id
        return Decimal("1") if owner == user_id else Decimal("0")
    raise TypeError(f"Unsupported ownership mode: {ownership!r}")


def owned_amount(
    item: Holding,
    user_id: str,
    teams: Iterable[Team],
    *,
    holder_id: str | None = None,
) -> Decimal:
    """Return the part of a holding's value or balance owned by a user."""
    ownership = item.ownership
    if isinstance(ownership, TeamEqualSplit):
        team = find_team(teams, ownership.team_id)
        return team_split_amount(item.amount, team, user_id)
    fraction = resolve_ownership_fraction(
        item,
        user_id,
        teams,
        holder_id=holder_id,
    )
    return item.amount * fraction


__all__ = [
    "find_team",
    "team_fraction",
    "team_split_amount",
    "resolve_ownership_fraction",
    "owned_amount",
]
