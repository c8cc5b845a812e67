"""Attribution of transaction amounts to a single user."""

from collections.abc import Iterable
from decimal import Decimal

from cosmic_ledger.domain.constants import NON_REPORTING_CATEGORIES
from cosmic_ledger.domain.models import Team, Transaction
from cosmic_ledger.domain.services.ownership import find_team, team_split_amount


def attributed_amount(
    transaction: Transaction,
    user_id: str,
    teams: Iterable[Team],
) -> Decimal:
    """Return the part of a transaction reported for one user.

    Income counts the user's payment share and expenses count the user's
    expense share. When the user has no entry, a team-scoped transaction is
    split equally across the team's members and anything else contributes
    nothing.

    Args:
        transaction: Transaction to attribute.
        user_id: User the figures are reported for.
        teams: Teams available for the equal-split fallback.

    Returns:
        Decimal: Non-negative attributed amount.
    """
    if transaction.is_income:
        share = transaction.payment_share_for(user_id)
    else:
        share = transaction.expense_share_for(user_id)
    if share is not None:
        return share
    if transaction.team_id is None:
        return Decimal("0")
    team = find_team(teams, transaction.team_id)
    return team_split_amount(transaction.amount, team, user_id)


def is_reportable(transaction: Transaction) -> bool:
    """Return False for balance moves such as transfers between own accounts."""
    return transaction.category not in NON_REPORTING_CATEGORIES


def matches_period(transaction: Transaction, period: str) -> bool:
    """Return True when the ISO date starts with the period prefix."""
    return transaction.date.isoformat().startswith(period)


__all__ = ["attributed_amount", "is_reportable", "matches_period"]
