"""Domain package for ledger rules and core models."""

from .errors import (
    LedgerError,
    LedgerReferenceError,
    LedgerValidationError,
)
from .models import (
    Account,
    Asset,
    FinancialMetrics,
    FinancialStatement,
    LedgerMutation,
    Liability,
    Team,
    Transaction,
    User,
)
from .services import (
    build_net_worth_history,
    compute_metrics,
    compute_net_balances,
    merge_effective_statement,
    post_transaction,
    resolve_ownership_fraction,
    reverse_transaction,
)

__all__ = [
    "LedgerError",
    "LedgerReferenceError",
    "LedgerValidationError",
    "Account",
    "Asset",
    "FinancialMetrics",
    "FinancialStatement",
    "LedgerMutation",
    "Liability",
    "Team",
    "Transaction",
    "User",
    "build_net_worth_history",
    "compute_metrics",
    "compute_net_balances",
    "merge_effective_statement",
    "post_transaction",
    "resolve_ownership_fraction",
    "reverse_transaction",
]
