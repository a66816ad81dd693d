"""
Data Models for the Vector Store

Defines:
1. StoreConfig - SQLite location, fixed dimensionality, corrupt-row policy
2. QueryResult - A single scored chunk returned by a top-K query
3. DocumentRecord - A registered document with its chunk count

Design Principles:
- Pydantic v2 for validation (consistent with chunking and retrieval)
- Query results are ephemeral and never persisted
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class StoreConfig(BaseModel):
    """Configuration for the SQLite-backed vector store."""
    db_path: str = Field(
        "data/retrieval/offline_rag.db",
        description="SQLite database file (':memory:' for an in-process store)",
    )
    dimensions: Optional[int] = Field(
        None,
        description="Fixed vector dimensionality; inferred from the first vector when unset",
        gt=0,
    )
    corrupt_record_policy: Literal["skip", "raise"] = Field(
        "skip",
        description="Skip undecodable rows during a query, or abort the query",
    )


class QueryResult(BaseModel):
    """A single top-K hit."""
    chunk_id: int = Field(
        ...,
        description="Engine-assigned chunk id",
    )
    doc_id: str = Field(
        ...,
        description="Document the chunk belongs to",
    )
    text: str = Field(
        ...,
        description="Chunk text",
    )
    score: float = Field(
        ...,
        description="Cosine similarity to the query (1 = identical direction)",
    )


class DocumentRecord(BaseModel):
    """A document registered in the store."""
    doc_id: str = Field(
        ...,
        description="Caller-supplied document identifier",
    )
    source: Optional[str] = Field(
        None,
        description="Free-text provenance label",
    )
    created_at: Optional[datetime] = Field(
        None,
        description="Ingestion timestamp (UTC)",
    )
    chunk_count: int = Field(
        0,
        description="Number of chunks stored for this document",
    )
