"""
Retrieval Service - ingestion and query pipelines

Ingestion: chunk the text, embed each chunk, insert it into the index in
chunk order. Query: embed the query once, run a top-K scan on the index.

Both pipelines fail fast while the embedder or the store is unready, and
both accept a threading.Event that is checked before every embedding call
so a caller can abort without leaving a half-written row.
"""

import logging
import threading
from typing import Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from chunking import ChunkingConfig, split_text
from embedding import Embedder, create_embedder
from vector_store import SqliteVectorStore, StoreConfig, VectorIndex
from vector_store.exceptions import (
    CollaboratorUnavailableError,
    OperationCancelledError,
    ValidationError,
)
from vector_store.models import QueryResult

from .config import RetrievalConfig, TopKPolicy
from .models import ChatMessage, DocumentSummary, HealthStatus, IngestResult

logger = logging.getLogger(__name__)


class RetrievalService:
    def __init__(self, config: RetrievalConfig, store: VectorIndex, embedder: Embedder):
        self.config = config
        self.store = store
        self.embedder = embedder

    @classmethod
    def from_config(cls, config: RetrievalConfig) -> "RetrievalService":
        store = SqliteVectorStore(
            StoreConfig(
                db_path=config.db_path,
                dimensions=config.dimensions,
                corrupt_record_policy=config.corrupt_record_policy,
            )
        )
        embedder = create_embedder(
            config.embedder_backend,
            model=config.embedding_model,
            base_url=config.ollama_base_url,
            dimensions=config.dimensions,
        )
        return cls(config, store, embedder)

    @property
    def is_ready(self) -> bool:
        return self.store.is_ready and self.embedder.is_ready

    def ingest(
        self,
        doc_id: str,
        text: str,
        chunk_size: Optional[int] = None,
        overlap: Optional[int] = None,
        source: Optional[str] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> IngestResult:
        if not doc_id or not doc_id.strip():
            raise ValidationError("doc_id is required")
        if not text or not text.strip():
            raise ValidationError("text is required")
        try:
            chunking = ChunkingConfig(
                chunk_size=self.config.chunk_chars if chunk_size is None else chunk_size,
                overlap=self.config.overlap_chars if overlap is None else overlap,
            )
        except PydanticValidationError as e:
            raise ValidationError("Invalid chunking settings", details=str(e)) from e
        self._require_ready()

        source = source or self.config.default_source
        chunk_ids: list[int] = []
        skipped = 0
        for chunk in split_text(text, chunking.chunk_size, chunking.overlap):
            if not chunk:
                skipped += 1
                continue
            _check_cancelled(cancel_event)
            vector = self.embedder.embed(chunk)
            chunk_ids.append(self.store.insert(doc_id, chunk, vector, source))
            # the document row only exists once it owns a chunk
            if len(chunk_ids) == 1:
                self.store.register_document(doc_id, source)

        logger.info(
            "Ingested %s: %d chunks (%d empty skipped)", doc_id, len(chunk_ids), skipped
        )
        return IngestResult(doc_id=doc_id, chunk_ids=chunk_ids, skipped_empty=skipped)

    def retrieve_top_k(
        self,
        query: str,
        k: Optional[int] = None,
        policy: Optional[TopKPolicy] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[QueryResult]:
        """
        Embed ``query`` once and return the K most similar chunks.

        ``k`` is passed to the index unchanged unless a policy is given, in
        which case it is clamped to the policy's range.
        """
        if not query or not query.strip():
            raise ValidationError("query is required")
        if policy is not None:
            k = policy.clamp(k)
        elif k is None:
            k = self.config.default_k
        self._require_ready()

        _check_cancelled(cancel_event)
        vector = self.embedder.embed(query)
        _check_cancelled(cancel_event)
        results = self.store.query(vector, k)
        logger.debug("Query returned %d of k=%d results", len(results), k)
        return results

    def chat_context(
        self,
        messages: Sequence[ChatMessage],
        k: Optional[int] = None,
    ) -> list[QueryResult]:
        """Retrieve context for the last user message of a chat."""
        query = next(
            (m.content for m in reversed(messages) if m.role == "user"),
            "",
        )
        if not query.strip():
            return []
        return self.retrieve_top_k(query, k, policy=self.config.chat_policy)

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            raise ValidationError("No texts")
        return self.embedder.embed_batch(texts)

    def list_documents(self) -> list[DocumentSummary]:
        return [
            DocumentSummary(**record.model_dump())
            for record in self.store.list_documents()
        ]

    def health(self) -> HealthStatus:
        embedder_health = self.embedder.health_check()
        store_health = self.store.health_check()
        model_loaded = self.embedder.is_ready and bool(embedder_health.get("healthy"))
        db_ready = self.store.is_ready
        ready = model_loaded and db_ready
        return HealthStatus(
            status="ok" if ready else "unready",
            model_loaded=model_loaded,
            db_ready=db_ready,
            ready=ready,
            details={"embedder": embedder_health, "store": store_health},
        )

    def _require_ready(self) -> None:
        if not self.store.is_ready:
            raise CollaboratorUnavailableError("store", message="Vector store is not ready")
        if not self.embedder.is_ready:
            raise CollaboratorUnavailableError(
                "embedder",
                message="Embedding model is not loaded",
                details=self.embedder.load_error,
            )


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError()
