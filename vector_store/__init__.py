"""
Vector Store Module - SQLite blob table with exhaustive cosine search

Stores chunk embeddings as little-endian float32 blobs and answers top-K
queries by scoring every stored vector against the query.

Quick Start:
    from vector_store import SqliteVectorStore, StoreConfig

    store = SqliteVectorStore(StoreConfig(db_path="data/offline_rag.db"))
    store.insert("doc-1", "The quick fox.", vector, source="user")
    hits = store.query(query_vector, k=5)
"""

__version__ = "1.0.0"

from .base import VectorIndex
from .codec import ELEMENT_SIZE, decode_vector, encode_vector
from .exceptions import (
    CollaboratorUnavailableError,
    CorruptRecordError,
    DimensionMismatchError,
    EmbeddingError,
    OperationCancelledError,
    RetrievalError,
    StorageIOError,
    ValidationError,
)
from .models import DocumentRecord, QueryResult, StoreConfig
from .similarity import cosine_similarity
from .store import SqliteVectorStore

__all__ = [
    "__version__",
    "VectorIndex",
    "SqliteVectorStore",
    "StoreConfig",
    "QueryResult",
    "DocumentRecord",
    "ELEMENT_SIZE",
    "encode_vector",
    "decode_vector",
    "cosine_similarity",
    "RetrievalError",
    "ValidationError",
    "DimensionMismatchError",
    "CorruptRecordError",
    "CollaboratorUnavailableError",
    "EmbeddingError",
    "StorageIOError",
    "OperationCancelledError",
]
