"""Application ports package."""

from .database import DatabaseEnginePort
from .snapshot_repository import LedgerSnapshot, SnapshotRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerSnapshot",
    "SnapshotRepositoryPort",
]
