"""Net worth time series rebuilt from the transaction log."""

import calendar
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from cosmic_ledger.domain.constants import FULL_OWNERSHIP_PERCENTAGE
from cosmic_ledger.domain.models import (
    ExplicitShares,
    HistoricalDataPoint,
    Holding,
    Team,
    TeamEqualSplit,
    Transaction,
    User,
)
from cosmic_ledger.domain.services.attribution import (
    attributed_amount,
    is_reportable,
)
from cosmic_ledger.domain.services.ownership import team_split_amount


def build_net_worth_history(
    user: User,
    teams: Iterable[Team],
) -> list[HistoricalDataPoint]:
    """Replay the user's transactions into a net worth series.

    The opening balance is the current value of the user's holdings plus
    their share of each team's holdings; asset values are assumed constant
    over the whole log. Transactions from the personal and team statements
    are replayed oldest first in a single pass. Each one emits a point with
    the running net worth (the last transaction of a day wins), and every
    month emits a rollup keyed to its last day.

    Args:
        user: User whose history is built.
        teams: Candidate teams; only those listing the user are replayed.

    Returns:
        list[HistoricalDataPoint]: Points sorted by date.
    """
    user_teams = tuple(team for team in teams if team.has_member(user.id))
    running = _opening_net_worth(user, user_teams)

    net_worth_by_day: dict[date, Decimal] = {}
    months: dict[tuple[int, int], dict[str, Decimal]] = {}
    for transaction in _replay_order(user, user_teams):
        key = (transaction.date.year, transaction.date.month)
        rollup = months.setdefault(
            key,
            {
                "cash_flow": Decimal("0"),
                "passive_income": Decimal("0"),
                "expenses": Decimal("0"),
            },
        )
        amount = attributed_amount(transaction, user.id, user_teams)
        if transaction.is_income:
            running += amount
            rollup["cash_flow"] += amount
            if transaction.is_passive:
                rollup["passive_income"] += amount
        else:
            running -= amount
            rollup["cash_flow"] -= amount
            rollup["expenses"] += amount
        net_worth_by_day[transaction.date] = running

    points: dict[date, dict[str, Decimal]] = {
        day: {"net_worth": value} for day, value in net_worth_by_day.items()
    }
    for (year, month), rollup in months.items():
        month_end = date(year, month, calendar.monthrange(year, month)[1])
        points.setdefault(month_end, {}).update(rollup)

    return [
        HistoricalDataPoint(date=day, **fields)
        for day, fields in sorted(points.items())
    ]


def _opening_net_worth(user: User, user_teams: tuple[Team, ...]) -> Decimal:
    total = Decimal("0")
    for asset in user.statement.assets:
        total += asset.value * _personal_fraction(asset, user.id)
    for liability in user.statement.liabilities:
        total -= liability.balance * _personal_fraction(liability, user.id)
    for team in user_teams:
        for asset in team.statement.assets:
            total += team_split_amount(asset.value, team, user.id)
        for liability in team.statement.liabilities:
            total -= team_split_amount(liability.balance, team, user.id)
    return total


def _personal_fraction(item: Holding, user_id: str) -> Decimal:
    # Team-tagged items are counted through the team's own statement.
    ownership = item.ownership
    if isinstance(ownership, ExplicitShares):
        if ownership.prorated:
            return Decimal("1")
        return ownership.percentage_for(user_id) / FULL_OWNERSHIP_PERCENTAGE
    if isinstance(ownership, TeamEqualSplit):
        return Decimal("0")
    return Decimal("1")


def _replay_order(
    user: User,
    user_teams: tuple[Team, ...],
) -> list[Transaction]:
    unique: dict[str, Transaction] = {}
    for transaction in user.statement.transactions:
        unique[transaction.id] = transaction
    for team in user_teams:
        for transaction in team.statement.transactions:
            unique[transaction.id] = transaction
    replayable = [t for t in unique.values() if is_reportable(t)]
    return sorted(replayable, key=lambda t: t.date)


__all__ = ["build_net_worth_history"]
