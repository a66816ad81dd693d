"""
Retrieval component for the offline RAG app.

Ingestion and query pipelines over an embedder and a vector index, plus
the FastAPI host and CLI that expose them.
"""

__version__ = "1.0.0"

from .config import CHAT_POLICY, SEARCH_POLICY, RetrievalConfig, TopKPolicy
from .service import RetrievalService
from .models import (
    ChatContextRequest,
    ChatMessage,
    DocumentSummary,
    EmbedRequest,
    EmbedResponse,
    HealthStatus,
    IngestRequest,
    IngestResponse,
    IngestResult,
    SearchHit,
    SearchRequest,
    SearchResponse,
)
from .logging_config import setup_logging

__all__ = [
    "__version__",
    "RetrievalConfig",
    "TopKPolicy",
    "SEARCH_POLICY",
    "CHAT_POLICY",
    "RetrievalService",
    "ChatContextRequest",
    "ChatMessage",
    "DocumentSummary",
    "EmbedRequest",
    "EmbedResponse",
    "HealthStatus",
    "IngestRequest",
    "IngestResponse",
    "IngestResult",
    "SearchHit",
    "SearchRequest",
    "SearchResponse",
    "setup_logging",
]
