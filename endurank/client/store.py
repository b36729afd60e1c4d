"""
Catalog document store: the read/write surface the core depends on,
an in-memory implementation and a MySQL-backed one.
"""
import copy
import json
import logging
import re
from typing import Any, Optional, Protocol

import mysql.connector
from mysql.connector import Error as MySQLError
from tenacity import (
    Retrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import MySQLConfig, StoreConfig, get_config
from ..exceptions import StoreError


logger = logging.getLogger(__name__)

Document = dict[str, Any]

# Collection names
COLLECTIONS = {
    "gear": "gear",
    "races": "races",
}

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class CatalogStore(Protocol):
    """Document store keyed by collection and document id."""

    def find_by_field(self, collection: str, field: str, value: Any) -> list[Document]: ...

    def find_by_fields(self, collection: str, fields: dict[str, Any]) -> list[Document]: ...

    def list_all(self, collection: str) -> list[Document]: ...

    def get(self, collection: str, doc_id: str) -> Optional[Document]: ...

    def put(self, collection: str, doc_id: str, doc: Document) -> None: ...

    def update(self, collection: str, doc_id: str, changes: Document) -> None: ...


class InMemoryCatalogStore:
    """
    Dict-backed store. Documents are copied on the way in and out so
    callers never share state with the store.
    """

    def __init__(self, collections: Optional[dict[str, dict[str, Document]]] = None):
        self._collections: dict[str, dict[str, Document]] = {}
        for name, docs in (collections or {}).items():
            for doc_id, doc in docs.items():
                self.put(name, doc_id, doc)

    def find_by_field(self, collection: str, field: str, value: Any) -> list[Document]:
        return self.find_by_fields(collection, {field: value})

    def find_by_fields(self, collection: str, fields: dict[str, Any]) -> list[Document]:
        return [
            copy.deepcopy(doc)
            for doc in self._collections.get(collection, {}).values()
            if all(doc.get(k) == v for k, v in fields.items())
        ]

    def list_all(self, collection: str) -> list[Document]:
        return [copy.deepcopy(doc) for doc in self._collections.get(collection, {}).values()]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        doc = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def put(self, collection: str, doc_id: str, doc: Document) -> None:
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(doc)

    def update(self, collection: str, doc_id: str, changes: Document) -> None:
        docs = self._collections.get(collection, {})
        if doc_id not in docs:
            raise StoreError(f"No document '{doc_id}' in '{collection}'")
        docs[doc_id].update(copy.deepcopy(changes))


class MySQLCatalogStore:
    """
    Documents kept as JSON in one table per collection.
    Reads retry with exponential backoff; failures surface as StoreError.
    """

    def __init__(
        self,
        mysql_config: Optional[MySQLConfig] = None,
        store_config: Optional[StoreConfig] = None,
    ):
        config = get_config()
        self.mysql_config = mysql_config or config.mysql
        store_config = store_config or config.store

        self._retrying = Retrying(
            stop=stop_after_attempt(store_config.retry_attempts),
            wait=wait_exponential(
                multiplier=1,
                min=store_config.retry_min_wait,
                max=store_config.retry_max_wait,
            ),
            retry=retry_if_exception_type(MySQLError),
            before_sleep=lambda retry_state: logger.warning(
                f"Store read failed, retry attempt {retry_state.attempt_number}"
            ),
        )
        self._initialized: set[str] = set()
        logger.info(f"MySQLCatalogStore using {self.mysql_config.host}/{self.mysql_config.database}")

    def get_connection(self):
        """Get a MySQL database connection."""
        return mysql.connector.connect(
            host=self.mysql_config.host,
            port=self.mysql_config.port,
            user=self.mysql_config.user,
            password=self.mysql_config.password,
            database=self.mysql_config.database,
        )

    def _table(self, collection: str) -> str:
        if not _IDENTIFIER.match(collection):
            raise StoreError(f"Invalid collection name: {collection!r}")
        return collection

    def _ensure_table(self, cursor, table: str) -> None:
        if table in self._initialized:
            return
        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS {table} (
                id VARCHAR(255) PRIMARY KEY,
                doc JSON NOT NULL
            )
        """)
        self._initialized.add(table)

    def _execute_read(self, table: str, sql: str, params: tuple) -> list[Document]:
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            self._ensure_table(cursor, table)
            cursor.execute(sql, params)
            rows = cursor.fetchall()
            return [json.loads(row[0]) for row in rows]
        finally:
            conn.close()

    def _read(self, table: str, sql: str, params: tuple = ()) -> list[Document]:
        try:
            return self._retrying(self._execute_read, table, sql, params)
        except RetryError as e:
            last = e.last_attempt.exception()
            logger.error(f"Store read on '{table}' failed: {last}")
            raise StoreError(f"Read from '{table}' failed: {last}") from last

    def _write(self, table: str, sql: str, params: tuple) -> None:
        try:
            conn = self.get_connection()
        except MySQLError as e:
            raise StoreError(f"Cannot connect to store: {e}") from e

        try:
            cursor = conn.cursor()
            self._ensure_table(cursor, table)
            cursor.execute(sql, params)
            conn.commit()
        except MySQLError as e:
            logger.error(f"Store write on '{table}' failed: {e}")
            raise StoreError(f"Write to '{table}' failed: {e}") from e
        finally:
            conn.close()

    def find_by_field(self, collection: str, field: str, value: Any) -> list[Document]:
        return self.find_by_fields(collection, {field: value})

    def find_by_fields(self, collection: str, fields: dict[str, Any]) -> list[Document]:
        table = self._table(collection)
        clauses = []
        params: list[Any] = []
        for field, value in fields.items():
            if not _IDENTIFIER.match(field):
                raise StoreError(f"Invalid field name: {field!r}")
            clauses.append("JSON_EXTRACT(doc, %s) = CAST(%s AS JSON)")
            params.extend([f"$.{field}", json.dumps(value)])

        sql = f"SELECT doc FROM {table}"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        return self._read(table, sql, tuple(params))

    def list_all(self, collection: str) -> list[Document]:
        table = self._table(collection)
        return self._read(table, f"SELECT doc FROM {table}")

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        table = self._table(collection)
        docs = self._read(table, f"SELECT doc FROM {table} WHERE id = %s", (doc_id,))
        return docs[0] if docs else None

    def put(self, collection: str, doc_id: str, doc: Document) -> None:
        table = self._table(collection)
        self._write(
            table,
            f"REPLACE INTO {table} (id, doc) VALUES (%s, %s)",
            (doc_id, json.dumps(doc, default=str)),
        )

    def update(self, collection: str, doc_id: str, changes: Document) -> None:
        table = self._table(collection)
        self._write(
            table,
            f"UPDATE {table} SET doc = JSON_MERGE_PATCH(doc, %s) WHERE id = %s",
            (json.dumps(changes, default=str), doc_id),
        )
