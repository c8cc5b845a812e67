"""Application use cases package."""

from .apply_event_outcome import ApplyEventOutcomeUseCase
from .contribute_to_goal import ContributeToGoalUseCase
from .delete_transaction import DeleteTransactionUseCase
from .get_balances import BalancesView, GetBalancesUseCase
from .get_budget_progress import GetBudgetProgressUseCase
from .get_financial_overview import (
    FinancialOverview,
    GetFinancialOverviewUseCase,
)
from .get_team_dashboard import GetTeamDashboardUseCase, TeamDashboard
from .log_dividend import LogDividendUseCase
from .refresh_achievements import RefreshAchievementsUseCase
from .save_budget import SaveBudgetUseCase
from .save_holding import SaveHoldingUseCase
from .save_transaction import SaveTransactionUseCase
from .transfer_funds import TransferFundsUseCase

__all__ = [
    "ApplyEventOutcomeUseCase",
    "ContributeToGoalUseCase",
    "DeleteTransactionUseCase",
    "BalancesView",
    "GetBalancesUseCase",
    "GetBudgetProgressUseCase",
    "FinancialOverview",
    "GetFinancialOverviewUseCase",
    "GetTeamDashboardUseCase",
    "TeamDashboard",
    "LogDividendUseCase",
    "RefreshAchievementsUseCase",
    "SaveBudgetUseCase",
    "SaveHoldingUseCase",
    "SaveTransactionUseCase",
    "TransferFundsUseCase",
]
