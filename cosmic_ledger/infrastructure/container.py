"""Composition root for wiring infrastructure adapters."""

from cosmic_ledger.application.ports.database import DatabaseEnginePort
from cosmic_ledger.application.ports.snapshot_repository import (
    SnapshotRepositoryPort,
)
from cosmic_ledger.application.use_cases import (
    ApplyEventOutcomeUseCase,
    ContributeToGoalUseCase,
    DeleteTransactionUseCase,
    GetBalancesUseCase,
    GetBudgetProgressUseCase,
    GetFinancialOverviewUseCase,
    GetTeamDashboardUseCase,
    LogDividendUseCase,
    RefreshAchievementsUseCase,
    SaveBudgetUseCase,
    SaveHoldingUseCase,
    SaveTransactionUseCase,
    TransferFundsUseCase,
)
from cosmic_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from cosmic_ledger.infrastructure.document_store import SqlAlchemyDocumentStore
from cosmic_ledger.infrastructure.logging.logger import get_app_logger

_USE_CASES = {
    "apply_event_outcome": ApplyEventOutcomeUseCase,
    "contribute_to_goal": ContributeToGoalUseCase,
    "delete_transaction": DeleteTransactionUseCase,
    "get_balances": GetBalancesUseCase,
    "get_budget_progress": GetBudgetProgressUseCase,
    "get_financial_overview": GetFinancialOverviewUseCase,
    "get_team_dashboard": GetTeamDashboardUseCase,
    "log_dividend": LogDividendUseCase,
    "refresh_achievements": RefreshAchievementsUseCase,
    "save_budget": SaveBudgetUseCase,
    "save_holding": SaveHoldingUseCase,
    "save_transaction": SaveTransactionUseCase,
    "transfer_funds": TransferFundsUseCase,
}


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_snapshot_repository(
    db_port: DatabaseEnginePort | None = None,
    prepare: bool = True,
) -> SnapshotRepositoryPort:
    """Return the document store, creating its table when requested."""
    resolved_db = db_port or build_database_adapter()
    store = SqlAlchemyDocumentStore(resolved_db, logger=get_app_logger())
    if prepare:
        store.prepare()
    return store


def build_use_case(
    name: str,
    repository: SnapshotRepositoryPort | None = None,
):
    """Return the named use case wired to the snapshot repository.

    Raises:
        KeyError: When no use case has that name.
    """
    if name not in _USE_CASES:
        raise KeyError(f"Unknown use case: {name}")
    resolved_repository = repository or build_snapshot_repository()
    return _USE_CASES[name](resolved_repository, logger=get_app_logger())


__all__ = [
    "build_database_adapter",
    "build_snapshot_repository",
    "build_use_case",
]
