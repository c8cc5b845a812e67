"""Domain models package."""

from .ledger import (
    Account,
    AccountType,
    Asset,
    AssetType,
    ExpenseShare,
    ExplicitShares,
    FinancialStatement,
    Holding,
    Liability,
    OwnershipMode,
    OwnershipShare,
    PaymentShare,
    SoleOwnership,
    TeamEqualSplit,
    Transaction,
    TransactionType,
    resolve_ownership_mode,
)
from .metrics import (
    BreakdownLine,
    BudgetLine,
    BudgetProgress,
    CategoryAmount,
    FinancialMetrics,
    HistoricalDataPoint,
    NetBalance,
    NetWorthBreakdown,
    TeamReport,
)
from .mutations import LedgerMutation
from .parties import Budget, EventOutcome, Goal, Team, User

__all__ = [
    "Account",
    "AccountType",
    "Asset",
    "AssetType",
    "ExpenseShare",
    "ExplicitShares",
    "FinancialStatement",
    "Holding",
    "Liability",
    "OwnershipMode",
    "OwnershipShare",
    "PaymentShare",
    "SoleOwnership",
    "TeamEqualSplit",
    "Transaction",
    "TransactionType",
    "resolve_ownership_mode",
    "BreakdownLine",
    "BudgetLine",
    "BudgetProgress",
    "CategoryAmount",
    "FinancialMetrics",
    "HistoricalDataPoint",
    "NetBalance",
    "NetWorthBreakdown",
    "TeamReport",
    "LedgerMutation",
    "Budget",
    "EventOutcome",
    "Goal",
    "Team",
    "User",
]
