"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import dotenv

from cosmic_ledger.infrastructure.logging.logger import get_app_logger
from cosmic_ledger.utils.utils import get_project_root

DEFAULT_DB_FILENAME = "ledger.db"


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for locating the ledger document database.

    Attributes:
        db_url: SQLAlchemy URL of the document database, if configured.
    """

    db_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables and the .env file.

        Returns:
            LedgerSettings: Settings sourced from ``LEDGER_DB_URL``, falling
            back to ``data/ledger.db`` when the project has a data folder.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        raw_url = os.getenv("LEDGER_DB_URL")
        if raw_url:
            return cls(db_url=cls._normalize_url(raw_url.strip(), logger=logger))
        return cls(db_url=cls._default_db_url(logger=logger))

    @staticmethod
    def _normalize_url(raw_url: str, logger) -> str:
        """Normalize a database URL or SQLite file path.

        Args:
            raw_url: Raw URL or filesystem path.
            logger: Logger used for warnings.

        Returns:
            str: URL passed through, or an absolute ``sqlite:///`` URL.
        """
        parsed = urlparse(raw_url)
        if parsed.scheme and parsed.scheme != "file" and len(parsed.scheme) > 1:
            return raw_url
        raw_path = unquote(parsed.path) if parsed.scheme == "file" else raw_url
        path = Path(raw_path).expanduser().resolve()
        if not path.parent.exists():
            logger.warning(
                f"Ledger database folder does not exist: {path.parent}"
            )
        return f"sqlite:///{path}"

    @staticmethod
    def _default_db_url(logger) -> str | None:
        """Return the default SQLite URL when a data folder is available.

        Args:
            logger: Logger used for warnings.

        Returns:
            str | None: URL of ``data/ledger.db`` or None.
        """
        data_dir = get_project_root() / "data"
        if not data_dir.exists():
            logger.warning(
                "LEDGER_DB_URL is not set and no data/ folder was found."
            )
            return None
        return f"sqlite:///{(data_dir / DEFAULT_DB_FILENAME).resolve()}"


__all__ = ["LedgerSettings", "DEFAULT_DB_FILENAME"]
