"""Monthly budgets and spending progress."""

import re
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from cosmic_ledger.domain.errors import LedgerValidationError
from cosmic_ledger.domain.models import (
    Budget,
    BudgetLine,
    BudgetProgress,
    FinancialStatement,
    Team,
    User,
)
from cosmic_ledger.domain.services.attribution import (
    attributed_amount,
    is_reportable,
    matches_period,
)

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def validate_budget(budget: Budget) -> None:
    """Reject malformed months and negative limits."""
    if not MONTH_PATTERN.match(budget.month):
        raise LedgerValidationError(
            f"Budget month must look like YYYY-MM, got {budget.month!r}"
        )
    for category, limit in budget.limits.items():
        if not category.strip():
            raise LedgerValidationError("Budget category cannot be blank")
        if limit < 0:
            raise LedgerValidationError(
                f"Budget limit for {category} cannot be negative"
            )


def upsert_budget(user: User, budget: Budget) -> User:
    """Return the user with the budget replacing any for the same month."""
    validate_budget(budget)
    kept = tuple(b for b in user.budgets if b.month != budget.month)
    return replace(user, budgets=kept + (budget,))


def find_budget(user: User, month: str) -> Budget | None:
    """Return the user's budget for a YYYY-MM month, or None."""
    for budget in user.budgets:
        if budget.month == month:
            return budget
    return None


def compute_budget_progress(
    statement: FinancialStatement,
    user_id: str,
    teams: Iterable[Team],
    budget: Budget,
) -> BudgetProgress:
    """Compare the user's attributed spending in a month to its budget.

    Budgeted categories come first in the budget's order, followed by
    unbudgeted categories with spending (limit 0) sorted by name.

    Args:
        statement: Effective statement of the user.
        user_id: User whose spending is measured.
        teams: Teams for the equal-split fallback.
        budget: Budget of the month to report.

    Returns:
        BudgetProgress: One line per category plus totals.
    """
    teams = tuple(teams)
    spent: dict[str, Decimal] = defaultdict(lambda: Decimal("0"))
    for transaction in statement.transactions:
        if not transaction.is_expense or not is_reportable(transaction):
            continue
        if not matches_period(transaction, budget.month):
            continue
        amount = attributed_amount(transaction, user_id, teams)
        if amount:
            spent[transaction.category] += amount

    lines = [
        BudgetLine(
            category=category,
            limit=limit,
            spent=spent.get(category, Decimal("0")),
        )
        for category, limit in budget.limits.items()
    ]
    lines.extend(
        BudgetLine(category=category, limit=Decimal("0"), spent=amount)
        for category, amount in sorted(spent.items())
        if category not in budget.limits
    )
    return BudgetProgress(
        month=budget.month,
        lines=lines,
        total_spent=sum(spent.values(), Decimal("0")),
        total_budgeted=budget.total_limit,
    )


__all__ = [
    "MONTH_PATTERN",
    "validate_budget",
    "upsert_budget",
    "find_budget",
    "compute_budget_progress",
]
