"""
Embedding collaborator interface.

An embedder turns text into a fixed-length vector. Implementations return
vectors that are already mean-pooled and L2-normalized; the retrieval
engine never re-normalizes them.
"""

from abc import ABC, abstractmethod
from typing import Optional

from vector_store.exceptions import CollaboratorUnavailableError


class Embedder(ABC):
    """
    Base class for embedding backends.

    An embedder whose model failed to load records the reason in
    ``load_error`` and stays unready for its whole lifetime.
    """

    load_error: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.load_error is None

    @property
    @abstractmethod
    def dimensions(self) -> Optional[int]:
        """Vector length, None until known."""

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Embed a single text."""

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed several texts, one call per text."""
        return [self.embed(text) for text in texts]

    @abstractmethod
    def health_check(self) -> dict:
        """Return a dict with at least a boolean ``healthy`` and an ``error`` string."""

    def _require_ready(self) -> None:
        if not self.is_ready:
            raise CollaboratorUnavailableError(
                "embedder",
                message="Embedding model is not loaded",
                details=self.load_error,
            )
