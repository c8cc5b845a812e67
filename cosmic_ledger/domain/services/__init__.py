"""Domain services package."""

from .achievements import detect_achievements, unlock_achievement, unlock_detected
from .attribution import attributed_amount, is_reportable, matches_period
from .budgets import compute_budget_progress, find_budget, upsert_budget
from .events import EventResult, apply_event_outcome
from .goals import GoalContribution, contribute_to_goal
from .history import build_net_worth_history
from .metrics import (
    compute_metrics,
    compute_net_worth_breakdown,
    compute_team_report,
    current_period,
)
from .ownership import find_team, resolve_ownership_fraction, team_split_amount
from .posting import (
    TransferResult,
    changed_accounts,
    index_accounts,
    log_dividend,
    post_transaction,
    repost_transaction,
    reverse_transaction,
    transfer_funds,
)
from .settlement import compute_net_balances, summarize_position
from .statements import (
    find_transaction,
    merge_effective_statement,
    place_holding,
    place_transaction,
    remove_transaction,
)
from .validation import (
    validate_holding,
    validate_ownership_shares,
    validate_payment_accounts,
    validate_transaction,
)

__all__ = [
    "detect_achievements",
    "unlock_achievement",
    "unlock_detected",
    "attributed_amount",
    "is_reportable",
    "matches_period",
    "compute_budget_progress",
    "find_budget",
    "upsert_budget",
    "EventResult",
    "apply_event_outcome",
    "GoalContribution",
    "contribute_to_goal",
    "build_net_worth_history",
    "compute_metrics",
    "compute_net_worth_breakdown",
    "compute_team_report",
    "current_period",
    "find_team",
    "resolve_ownership_fraction",
    "team_split_amount",
    "TransferResult",
    "changed_accounts",
    "index_accounts",
    "log_dividend",
    "post_transaction",
    "repost_transaction",
    "reverse_transaction",
    "transfer_funds",
    "compute_net_balances",
    "summarize_position",
    "find_transaction",
    "merge_effective_statement",
    "place_holding",
    "place_transaction",
    "remove_transaction",
    "validate_holding",
    "validate_ownership_shares",
    "validate_payment_accounts",
    "validate_transaction",
]
