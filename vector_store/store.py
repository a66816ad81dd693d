"""
Vector Store - SQLite-backed retrieval index

Stores chunk embeddings as fixed-size float32 blobs in a local SQLite file
and answers top-K queries by scanning every row:
- Insert: validate dimensionality, encode, append one row per transaction
- Query: decode and score every row by cosine similarity, stable-sort, cut at K
- Documents: a small side table recording source and ingestion time

Design:
- Exhaustive linear scan, no approximate index
- One connection shared across threads, guarded by a lock (single writer)
- Rows are read in id order, so equal scores keep insertion order
- An instance whose database fails to open stays unready for its lifetime

Usage:
    from vector_store import SqliteVectorStore, StoreConfig

    store = SqliteVectorStore(StoreConfig(db_path="data/offline_rag.db"))
    chunk_id = store.insert("doc-1", "Some text.", vector, source="user")
    hits = store.query(query_vector, k=5)
"""

import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from .base import VectorIndex
from .codec import ELEMENT_SIZE, decode_vector, encode_vector
from .exceptions import (
    CollaboratorUnavailableError,
    CorruptRecordError,
    DimensionMismatchError,
    StorageIOError,
    ValidationError,
)
from .models import DocumentRecord, QueryResult, StoreConfig
from .similarity import cosine_similarity

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS chunks(
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  doc_id TEXT NOT NULL,
  source TEXT,
  text TEXT NOT NULL,
  embedding BLOB NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_chunks_doc ON chunks(doc_id);
CREATE TABLE IF NOT EXISTS documents(
  doc_id TEXT PRIMARY KEY,
  source TEXT,
  created_at TEXT NOT NULL
);
"""


class SqliteVectorStore(VectorIndex):
    """
    Retrieval index persisted in SQLite.

    The store is either ready (normal operation) or unready (the database
    could not be opened). There is no transition back to ready; construct a
    new instance instead.
    """

    def __init__(self, config: Optional[StoreConfig] = None):
        """
        Open (or create) the database and its schema.

        Args:
            config: Store configuration. Uses defaults if not provided.
        """
        self.config = config or StoreConfig()
        self._lock = threading.RLock()
        self._conn: Optional[sqlite3.Connection] = None
        self._dimensions: Optional[int] = self.config.dimensions
        self.init_error: Optional[str] = None

        try:
            self._conn = self._connect()
            self._conn.executescript(_SCHEMA)
            if self._dimensions is None:
                self._dimensions = self._stored_dimensions()
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to init SQLite store at %s: %s", self.config.db_path, e)
            self.init_error = str(e)
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    @property
    def is_ready(self) -> bool:
        return self._conn is not None

    @property
    def dimensions(self) -> Optional[int]:
        return self._dimensions

    def insert(
        self,
        doc_id: str,
        text: str,
        embedding: Sequence[float],
        source: Optional[str] = None,
    ) -> int:
        """
        Append one chunk.

        The first vector ever stored fixes the dimensionality of the index.
        Duplicate (doc_id, text) pairs are allowed.

        Returns:
            The new chunk id.

        Raises:
            ValidationError: Empty or non-finite vector.
            DimensionMismatchError: Vector length differs from the index.
            StorageIOError: The row could not be written.
        """
        conn = self._require_ready()
        vector = self._as_vector(embedding)

        with self._lock:
            if self._dimensions is not None and vector.size != self._dimensions:
                raise DimensionMismatchError(self._dimensions, int(vector.size))
            try:
                with conn:
                    cursor = conn.execute(
                        "INSERT INTO chunks(doc_id, source, text, embedding) VALUES(?, ?, ?, ?)",
                        (doc_id, source, text, encode_vector(vector)),
                    )
            except sqlite3.Error as e:
                raise StorageIOError("insert", e) from e
            if self._dimensions is None:
                self._dimensions = int(vector.size)
            return int(cursor.lastrowid)

    def query(self, vector: Sequence[float], k: int) -> list[QueryResult]:
        """
        Exhaustive top-K search by cosine similarity.

        Every stored chunk is scored; results are sorted by descending score
        with ties in insertion order. Fewer than k results are returned when
        the store holds fewer chunks.

        Raises:
            ValidationError: k < 1, or an empty/non-finite query vector.
            DimensionMismatchError: Query length differs from the index.
            CorruptRecordError: A row is undecodable and the policy is "raise".
            StorageIOError: The scan failed.
        """
        conn = self._require_ready()
        if k < 1:
            raise ValidationError(f"k must be >= 1, got {k}")
        query_vector = self._as_vector(vector)

        with self._lock:
            if self._dimensions is not None and query_vector.size != self._dimensions:
                raise DimensionMismatchError(self._dimensions, int(query_vector.size))
            try:
                rows = conn.execute(
                    "SELECT id, doc_id, text, embedding FROM chunks ORDER BY id"
                ).fetchall()
            except sqlite3.Error as e:
                raise StorageIOError("query", e) from e

        scored: list[tuple[float, int, str, str]] = []
        for chunk_id, doc_id, text, blob in rows:
            try:
                stored = decode_vector(blob, chunk_id=chunk_id)
            except CorruptRecordError:
                if self.config.corrupt_record_policy == "raise":
                    raise
                logger.warning(
                    "Skipping corrupt chunk %d (%d bytes)", chunk_id, len(blob)
                )
                continue
            scored.append((cosine_similarity(query_vector, stored), chunk_id, doc_id, text))

        # list.sort is stable, reverse=True keeps equal scores in scan order
        scored.sort(key=lambda item: item[0], reverse=True)
        return [
            QueryResult(chunk_id=chunk_id, doc_id=doc_id, text=text, score=score)
            for score, chunk_id, doc_id, text in scored[:k]
        ]

    def register_document(self, doc_id: str, source: Optional[str] = None) -> DocumentRecord:
        """Record (or replace) a document's source and ingestion time."""
        conn = self._require_ready()
        created_at = datetime.now(timezone.utc)
        with self._lock:
            try:
                with conn:
                    conn.execute(
                        "INSERT OR REPLACE INTO documents(doc_id, source, created_at) VALUES(?, ?, ?)",
                        (doc_id, source, created_at.isoformat()),
                    )
            except sqlite3.Error as e:
                raise StorageIOError("register_document", e) from e
        return DocumentRecord(doc_id=doc_id, source=source, created_at=created_at)

    def list_documents(self) -> list[DocumentRecord]:
        """All known documents with chunk counts, sorted by doc_id."""
        conn = self._require_ready()
        with self._lock:
            try:
                counts = dict(
                    conn.execute("SELECT doc_id, COUNT(*) FROM chunks GROUP BY doc_id").fetchall()
                )
                documents = conn.execute(
                    "SELECT doc_id, source, created_at FROM documents"
                ).fetchall()
            except sqlite3.Error as e:
                raise StorageIOError("list_documents", e) from e

        records = {
            doc_id: DocumentRecord(
                doc_id=doc_id,
                source=source,
                created_at=created_at,
                chunk_count=counts.get(doc_id, 0),
            )
            for doc_id, source, created_at in documents
        }
        for doc_id, count in counts.items():
            records.setdefault(doc_id, DocumentRecord(doc_id=doc_id, chunk_count=count))
        return [records[doc_id] for doc_id in sorted(records)]

    def count(self) -> int:
        conn = self._require_ready()
        with self._lock:
            try:
                return conn.execute("SELECT COUNT(*) FROM chunks").fetchone()[0]
            except sqlite3.Error as e:
                raise StorageIOError("count", e) from e

    def health_check(self) -> dict:
        """
        Report store readiness.

        Returns:
            Dict with readiness, location and size of the store.
        """
        result = {
            "db_ready": self.is_ready,
            "db_path": self.config.db_path,
            "chunks_stored": 0,
            "dimensions": self._dimensions,
            "error": self.init_error or "",
        }
        if self.is_ready:
            try:
                result["chunks_stored"] = self.count()
            except StorageIOError as e:
                result["error"] = str(e)
        return result

    def close(self) -> None:
        """Close the connection; the instance is unready afterwards."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                self.init_error = "Store closed"

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        db_path = self.config.db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(db_path, check_same_thread=False)

    def _stored_dimensions(self) -> Optional[int]:
        """Dimensionality of the first persisted row, if any."""
        row = self._conn.execute(
            "SELECT length(embedding) FROM chunks ORDER BY id LIMIT 1"
        ).fetchone()
        if row is None or row[0] % ELEMENT_SIZE:
            return None
        return row[0] // ELEMENT_SIZE

    def _require_ready(self) -> sqlite3.Connection:
        conn = self._conn
        if conn is None:
            raise CollaboratorUnavailableError(
                "store",
                message="Vector store is not ready",
                details=self.init_error,
            )
        return conn

    @staticmethod
    def _as_vector(embedding: Sequence[float]) -> np.ndarray:
        try:
            vector = np.asarray(embedding, dtype=np.float32)
        except (TypeError, ValueError) as e:
            raise ValidationError("Embedding must be a sequence of numbers", str(e)) from e
        if vector.ndim != 1 or vector.size == 0:
            raise ValidationError("Embedding must be a non-empty 1-D vector")
        if not np.all(np.isfinite(vector)):
            raise ValidationError("Embedding contains non-finite values")
        return vector
