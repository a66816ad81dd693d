from dataclasses import dataclass
import os
from typing import Optional


@dataclass
class TopKPolicy:
    """Caller-side range for k; the index itself never clamps."""
    minimum: int = 1
    maximum: int = 50
    default: int = 5

    def clamp(self, k: Optional[int]) -> int:
        if k is None:
            k = self.default
        return max(self.minimum, min(self.maximum, k))


CORRUPT_RECORD_POLICIES = ("skip", "raise")

SEARCH_POLICY = TopKPolicy(minimum=1, maximum=50, default=5)
CHAT_POLICY = TopKPolicy(minimum=1, maximum=20, default=5)


@dataclass
class RetrievalConfig:
    db_path: str = "data/retrieval/offline_rag.db"
    embedder_backend: str = "ollama"
    embedding_model: Optional[str] = None
    ollama_base_url: str = "http://localhost:11434"
    dimensions: Optional[int] = None
    chunk_chars: int = 1200
    overlap_chars: int = 120
    default_source: str = "user"
    default_k: int = 5
    search_max_k: int = 50
    chat_max_k: int = 20
    corrupt_record_policy: str = "skip"
    log_level: str = "INFO"

    @property
    def search_policy(self) -> TopKPolicy:
        return TopKPolicy(minimum=1, maximum=self.search_max_k, default=self.default_k)

    @property
    def chat_policy(self) -> TopKPolicy:
        return TopKPolicy(minimum=1, maximum=self.chat_max_k, default=self.default_k)

    @classmethod
    def from_env(cls) -> "RetrievalConfig":
        def _int(name: str, default: Optional[int]) -> Optional[int]:
            value = os.environ.get(name)
            return int(value) if value else default

        corrupt_record_policy = os.environ.get("OFFLINE_RAG_CORRUPT_POLICY", cls.corrupt_record_policy)
        if corrupt_record_policy not in CORRUPT_RECORD_POLICIES:
            raise ValueError(
                f"OFFLINE_RAG_CORRUPT_POLICY must be one of {CORRUPT_RECORD_POLICIES}, "
                f"got {corrupt_record_policy!r}"
            )

        return cls(
            db_path=os.environ.get("OFFLINE_RAG_DB_PATH", cls.db_path),
            embedder_backend=os.environ.get("OFFLINE_RAG_EMBEDDER", cls.embedder_backend),
            embedding_model=os.environ.get("OFFLINE_RAG_EMBED_MODEL") or cls.embedding_model,
            ollama_base_url=os.environ.get("OLLAMA_BASE_URL", cls.ollama_base_url),
            dimensions=_int("OFFLINE_RAG_DIMENSIONS", cls.dimensions),
            chunk_chars=_int("OFFLINE_RAG_CHUNK_CHARS", cls.chunk_chars),
            overlap_chars=_int("OFFLINE_RAG_OVERLAP_CHARS", cls.overlap_chars),
            default_k=_int("OFFLINE_RAG_DEFAULT_K", cls.default_k),
            search_max_k=_int("OFFLINE_RAG_SEARCH_MAX_K", cls.search_max_k),
            chat_max_k=_int("OFFLINE_RAG_CHAT_MAX_K", cls.chat_max_k),
            corrupt_record_policy=corrupt_record_policy,
            log_level=os.environ.get("OFFLINE_RAG_LOG_LEVEL", cls.log_level),
        )
