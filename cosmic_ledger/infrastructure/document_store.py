"""SQLAlchemy-backed document store for users, teams and accounts."""

import json
from collections.abc import Iterable

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection

from cosmic_ledger.application.ports.database import DatabaseEnginePort
from cosmic_ledger.application.ports.snapshot_repository import (
    LedgerSnapshot,
    SnapshotRepositoryPort,
)
from cosmic_ledger.domain.errors import UserNotFoundError
from cosmic_ledger.domain.models import Account, LedgerMutation
from cosmic_ledger.infrastructure.documents import (
    Document,
    decode_account,
    decode_team,
    decode_user,
    encode_account,
    encode_team,
    encode_user,
)
from cosmic_ledger.infrastructure.logging.logger import get_app_logger

USERS = "users"
TEAMS = "teams"
ACCOUNTS = "accounts"

CREATE_DOCUMENTS_SQL = """
CREATE TABLE IF NOT EXISTS ledger_documents (
    collection TEXT NOT NULL,
    doc_id TEXT NOT NULL,
    payload TEXT NOT NULL,
    PRIMARY KEY (collection, doc_id)
)
"""

SELECT_COLLECTION_SQL = text(
    """
    SELECT doc_id, payload
    FROM ledger_documents
    WHERE collection = :collection
    ORDER BY doc_id
    """
)

SELECT_DOCUMENTS_SQL = text(
    """
    SELECT doc_id, payload
    FROM ledger_documents
    WHERE collection = :collection AND doc_id IN :doc_ids
    """
).bindparams(bindparam("doc_ids", expanding=True))

DELETE_DOCUMENT_SQL = text(
    """
    DELETE FROM ledger_documents
    WHERE collection = :collection AND doc_id = :doc_id
    """
)

INSERT_DOCUMENT_SQL = text(
    """
    INSERT INTO ledger_documents (collection, doc_id, payload)
    VALUES (:collection, :doc_id, :payload)
    """
)


class SqlAlchemyDocumentStore(SnapshotRepositoryPort):
    """Snapshot repository storing JSON documents in one SQL table.

    Snapshots are read through a single connection and mutations are written
    inside a single transaction, so readers never observe half an operation.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the store.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def prepare(self) -> None:
        """Create the documents table if it does not exist."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_DOCUMENTS_SQL)

    def fetch_snapshot(
        self,
        user_id: str,
        extra_user_ids: Iterable[str] = (),
    ) -> LedgerSnapshot:
        """Load a user, their teams, fellow members and all their accounts.

        Args:
            user_id: User to load.
            extra_user_ids: Further users to load.

        Returns:
            LedgerSnapshot: Consistent snapshot read in one connection.

        Raises:
            UserNotFoundError: When the user or a requested extra user has
                no document.
        """
        extras = tuple(dict.fromkeys(i for i in extra_user_ids if i != user_id))
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            user_docs = self._fetch_documents(conn, USERS, (user_id,))
            if user_id not in user_docs:
                raise UserNotFoundError(user_id)
            team_docs = [
                doc
                for doc in self._fetch_collection(conn, TEAMS)
                if user_id in (doc.get("memberIds") or ())
            ]
            member_ids = dict.fromkeys(
                member_id
                for doc in team_docs
                for member_id in doc.get("memberIds") or ()
                if member_id != user_id
            )
            member_ids.update(dict.fromkeys(extras))
            member_docs = self._fetch_documents(conn, USERS, tuple(member_ids))
            account_docs = self._fetch_collection(conn, ACCOUNTS)

        missing = [i for i in extras if i not in member_docs]
        if missing:
            raise UserNotFoundError(missing[0])
        dangling = [i for i in member_ids if i not in member_docs]
        if dangling:
            self._logger.warning(
                f"Team members without a user document: {', '.join(dangling)}"
            )

        loaded_user_ids = {user_id, *member_docs}
        team_ids = {doc["id"] for doc in team_docs}
        accounts = [
            decode_account(doc)
            for doc in account_docs
            if doc.get("teamId") in team_ids
            or loaded_user_ids.intersection(doc.get("ownerIds") or ())
        ]
        user = decode_user(
            user_docs[user_id],
            self._owned_by(accounts, user_id),
        )
        teams = tuple(
            decode_team(
                doc,
                [a for a in accounts if a.team_id == doc["id"]],
            )
            for doc in team_docs
        )
        members = tuple(
            decode_user(member_docs[i], self._owned_by(accounts, i))
            for i in member_ids
            if i in member_docs
        )
        self._logger.info(
            f"Fetched snapshot for user {user_id}: {len(teams)} teams, "
            f"{len(members)} other users"
        )
        return LedgerSnapshot(user=user, teams=teams, members=members)

    def apply_mutation(self, mutation: LedgerMutation) -> None:
        """Replace every document of the mutation in one transaction."""
        if mutation.is_empty:
            return
        rows = [
            *(self._row(ACCOUNTS, encode_account(a)) for a in mutation.accounts),
            *(self._row(USERS, encode_user(u)) for u in mutation.users),
            *(self._row(TEAMS, encode_team(t)) for t in mutation.teams),
        ]
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(
                DELETE_DOCUMENT_SQL,
                [
                    {"collection": row["collection"], "doc_id": row["doc_id"]}
                    for row in rows
                ],
            )
            conn.execute(INSERT_DOCUMENT_SQL, rows)
        self._logger.info(
            f"Persisted {len(mutation.accounts)} accounts, "
            f"{len(mutation.users)} users and {len(mutation.teams)} teams"
        )

    @staticmethod
    def _row(collection: str, document: Document) -> dict[str, str]:
        return {
            "collection": collection,
            "doc_id": document["id"],
            "payload": json.dumps(document, sort_keys=True),
        }

    @staticmethod
    def _owned_by(accounts: list[Account], user_id: str) -> list[Account]:
        return [a for a in accounts if user_id in a.owner_ids]

    @staticmethod
    def _fetch_collection(conn: Connection, collection: str) -> list[Document]:
        rows = conn.execute(
            SELECT_COLLECTION_SQL,
            {"collection": collection},
        ).all()
        return [json.loads(row.payload) for row in rows]

    @staticmethod
    def _fetch_documents(
        conn: Connection,
        collection: str,
        doc_ids: tuple[str, ...],
    ) -> dict[str, Document]:
        if not doc_ids:
            return {}
        rows = conn.execute(
            SELECT_DOCUMENTS_SQL,
            {"collection": collection, "doc_ids": list(doc_ids)},
        ).all()
        return {row.doc_id: json.loads(row.payload) for row in rows}


__all__ = ["SqlAlchemyDocumentStore", "CREATE_DOCUMENTS_SQL"]
