"""
Retrieval Index contract.

Any index implementation (the exhaustive SQLite scan, or a future indexed
structure) must return the same deterministic top-K for the same scoring
function, with ties kept in insertion order.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .models import DocumentRecord, QueryResult


class VectorIndex(ABC):
    """Append-only store of chunk embeddings with top-K cosine queries."""

    @property
    @abstractmethod
    def is_ready(self) -> bool:
        """True when the backing storage initialized successfully."""

    @property
    @abstractmethod
    def dimensions(self) -> Optional[int]:
        """Established vector dimensionality, None until the first vector."""

    @abstractmethod
    def insert(
        self,
        doc_id: str,
        text: str,
        embedding: Sequence[float],
        source: Optional[str] = None,
    ) -> int:
        """Store one chunk and return its new, strictly increasing id."""

    @abstractmethod
    def query(self, vector: Sequence[float], k: int) -> list[QueryResult]:
        """Return at most ``k`` chunks ordered by descending similarity."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored chunks."""

    @abstractmethod
    def register_document(self, doc_id: str, source: Optional[str] = None) -> DocumentRecord:
        """Record a document's provenance and ingestion time."""

    @abstractmethod
    def list_documents(self) -> list[DocumentRecord]:
        """Known documents with their chunk counts."""

    @abstractmethod
    def health_check(self) -> dict:
        """Return a dict with at least ``db_ready`` and ``error``."""
