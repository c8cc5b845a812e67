"""Domain models for derived financial figures."""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from .ledger import Transaction


@dataclass(frozen=True)
class CategoryAmount:
    """Amount spent in one category."""

    category: str
    amount: Decimal


@dataclass(frozen=True)
class FinancialMetrics:
    """Metrics computed for one user, or one team in team view.

    Attributes:
        net_worth: Owned asset value minus owed liability balance.
        cash_flow: Attributed income minus attributed expenses.
        category_breakdown: Attributed expenses per category.
    """

    net_worth: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    total_income: Decimal
    active_income: Decimal
    passive_income: Decimal
    total_expenses: Decimal
    cash_flow: Decimal
    category_breakdown: list[CategoryAmount]

    @property
    def freedom_percentage(self) -> int:
        """Return passive income as a whole percentage of expenses."""
        if self.total_expenses <= 0:
            return 100
        ratio = self.passive_income / self.total_expenses * 100
        return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class HistoricalDataPoint:
    """Point of the net worth time series.

    Per-transaction points carry ``net_worth``; month rollups carry the
    flow fields. A date holding both carries every field.
    """

    date: date
    net_worth: Decimal | None = None
    cash_flow: Decimal | None = None
    passive_income: Decimal | None = None
    expenses: Decimal | None = None


@dataclass(frozen=True)
class NetBalance:
    """Net settlement position of one user against the group."""

    user_id: str
    amount: Decimal


@dataclass(frozen=True)
class BreakdownLine:
    """One holding's contribution to a user's net worth."""

    item_id: str
    name: str
    amount: Decimal
    source: str | None = None


@dataclass(frozen=True)
class NetWorthBreakdown:
    """Net worth itemized by holding."""

    assets: list[BreakdownLine]
    liabilities: list[BreakdownLine]
    total_assets: Decimal
    total_liabilities: Decimal

    @property
    def net_worth(self) -> Decimal:
        return self.total_assets - self.total_liabilities


@dataclass(frozen=True)
class BudgetLine:
    """Spending against one category limit."""

    category: str
    limit: Decimal
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    @property
    def is_over_budget(self) -> bool:
        return self.spent > self.limit


@dataclass(frozen=True)
class BudgetProgress:
    """Spending against a monthly budget."""

    month: str
    lines: list[BudgetLine]
    total_spent: Decimal
    total_budgeted: Decimal


@dataclass(frozen=True)
class TeamReport:
    """Team income and expenses over an inclusive date range."""

    team_id: str
    start_date: date
    end_date: date
    total_income: Decimal
    total_expenses: Decimal
    transactions: list[Transaction]

    @property
    def profit(self) -> Decimal:
        return self.total_income - self.total_expenses


__all__ = [
    "CategoryAmount",
    "FinancialMetrics",
    "HistoricalDataPoint",
    "NetBalance",
    "BreakdownLine",
    "NetWorthBreakdown",
    "BudgetLine",
    "BudgetProgress",
    "TeamReport",
]
