"""Financial metrics, net worth breakdown and team reports."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from cosmic_ledger.domain.models import (
    BreakdownLine,
    CategoryAmount,
    FinancialMetrics,
    FinancialStatement,
    Holding,
    NetWorthBreakdown,
    Team,
    TeamReport,
    User,
)
from cosmic_ledger.domain.services.attribution import (
    attributed_amount,
    is_reportable,
    matches_period,
)
from cosmic_ledger.domain.services.ownership import (
    owned_amount,
    team_split_amount,
)


def current_period(today: date | None = None) -> str:
    """Return the ``YYYY-MM`` key of the current month."""
    return (today or date.today()).strftime("%Y-%m")


def compute_metrics(
    statement: FinancialStatement,
    user_id: str | None,
    teams: Iterable[Team],
    period: str | None = None,
    *,
    team_view: bool = False,
    today: date | None = None,
) -> FinancialMetrics:
    """Compute net worth and flow metrics for one user's view.

    Holdings count at the user's ownership fraction; transactions count at
    their attributed amount. In team view every holding and transaction
    counts in full.

    Args:
        statement: Effective statement to summarize.
        user_id: User the figures are reported for; ignored in team view.
        teams: Teams available for share resolution.
        period: Date prefix selecting transactions: ``YYYY-MM``, ``YYYY`` or
            ``""`` for all time. Defaults to the current month.
        team_view: Count every item at 100%.
        today: Reference date for the default period.

    Returns:
        FinancialMetrics: Computed figures.
    """
    teams = tuple(teams)
    prefix = current_period(today) if period is None else period

    total_assets = sum(
        (_holding_amount(a, user_id, teams, team_view) for a in statement.assets),
        Decimal("0"),
    )
    total_liabilities = sum(
        (
            _holding_amount(item, user_id, teams, team_view)
            for item in statement.liabilities
        ),
        Decimal("0"),
    )

    active_income = Decimal("0")
    passive_income = Decimal("0")
    total_expenses = Decimal("0")
    by_category: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for transaction in statement.transactions:
        if not is_reportable(transaction):
            continue
        if not matches_period(transaction, prefix):
            continue
        if team_view or user_id is None:
            amount = transaction.amount
        else:
            amount = attributed_amount(transaction, user_id, teams)
        if transaction.is_income:
            if transaction.is_passive:
                passive_income += amount
            else:
                active_income += amount
        else:
            total_expenses += amount
            if amount:
                by_category[transaction.category] += amount

    total_income = active_income + passive_income
    breakdown = [
        CategoryAmount(category=category, amount=amount)
        for category, amount in sorted(
            by_category.items(),
            key=lambda item: (-item[1], item[0]),
        )
    ]
    return FinancialMetrics(
        net_worth=total_assets - total_liabilities,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_income=total_income,
        active_income=active_income,
        passive_income=passive_income,
        total_expenses=total_expenses,
        cash_flow=total_income - total_expenses,
        category_breakdown=breakdown,
    )


def _holding_amount(
    item: Holding,
    user_id: str | None,
    teams: tuple[Team, ...],
    team_view: bool,
) -> Decimal:
    if team_view or user_id is None:
        return item.amount
    return owned_amount(item, user_id, teams)


def compute_net_worth_breakdown(
    user: User,
    teams: Iterable[Team],
) -> NetWorthBreakdown:
    """Itemize the user's net worth by holding.

    Personal holdings come first at the user's ownership fraction, followed
    by each team's holdings at the user's equal share, labeled with the
    team name. Holdings owned at 0% are left out.
    """
    teams = tuple(teams)
    assets: list[BreakdownLine] = []
    liabilities: list[BreakdownLine] = []

    for asset in user.statement.assets:
        _append_line(assets, asset, owned_amount(asset, user.id, teams))
    for liability in user.statement.liabilities:
        _append_line(
            liabilities,
            liability,
            owned_amount(liability, user.id, teams),
        )

    for team in teams:
        if not team.has_member(user.id):
            continue
        for asset in team.statement.assets:
            _append_line(
                assets,
                asset,
                team_split_amount(asset.amount, team, user.id),
                team.name,
            )
        for liability in team.statement.liabilities:
            _append_line(
                liabilities,
                liability,
                team_split_amount(liability.amount, team, user.id),
                team.name,
            )

    return NetWorthBreakdown(
        assets=assets,
        liabilities=liabilities,
        total_assets=sum((line.amount for line in assets), Decimal("0")),
        total_liabilities=sum(
            (line.amount for line in liabilities),
            Decimal("0"),
        ),
    )


def _append_line(
    lines: list[BreakdownLine],
    item: Holding,
    amount: Decimal,
    source: str | None = None,
) -> None:
    if amount:
        lines.append(
            BreakdownLine(
                item_id=item.id,
                name=item.name,
                amount=amount,
                source=source,
            )
        )


def compute_team_report(
    team: Team,
    start_date: date,
    end_date: date,
) -> TeamReport:
    """Summarize team income and expenses between two dates, inclusive.

    Transfers are excluded from totals but still listed. Transactions are
    returned newest first.
    """
    selected = [
        t
        for t in team.statement.transactions
        if start_date <= t.date <= end_date
    ]
    reportable = [t for t in selected if is_reportable(t)]
    total_income = sum(
        (t.amount for t in reportable if t.is_income),
        Decimal("0"),
    )
    total_expenses = sum(
        (t.amount for t in reportable if t.is_expense),
        Decimal("0"),
    )
    return TeamReport(
        team_id=team.id,
        start_date=start_date,
        end_date=end_date,
        total_income=total_income,
        total_expenses=total_expenses,
        transactions=sorted(selected, key=lambda t: t.date, reverse=True),
    )


__all__ = [
    "current_period",
    "compute_metrics",
    "compute_net_worth_breakdown",
    "compute_team_report",
]
