"""
Ollama Embedder - Local embedding generation via Ollama API

Wraps the Ollama Python client to generate text embeddings locally.
Supports single and batch embedding with health checks.

Design:
- Thin wrapper around ollama.embed() (available since ollama 0.4+)
- Ollama's /api/embed returns L2-normalized vectors
- Connection failures and a missing model surface as
  CollaboratorUnavailableError, other inference failures as EmbeddingError
- A missing model leaves the embedder unready for its lifetime

Usage:
    from embedding import OllamaEmbedder

    embedder = OllamaEmbedder(model="nomic-embed-text")
    vector = embedder.embed("The quick fox.")
    vectors = embedder.embed_batch(["Text 1", "Text 2"])
"""

import logging
from typing import Optional

import ollama

from vector_store.exceptions import (
    CollaboratorUnavailableError,
    EmbeddingError,
    ValidationError,
)

from .base import Embedder

logger = logging.getLogger(__name__)


def _is_connection_failure(error: Exception) -> bool:
    return (
        isinstance(error, ConnectionError)
        or "Connect" in type(error).__name__
        or "refused" in str(error).lower()
    )


def _is_model_missing(error: ollama.ResponseError) -> bool:
    return error.status_code == 404 or "not found" in str(error).lower()


class OllamaEmbedder(Embedder):
    """
    Generates text embeddings using a local Ollama model.

    The embedder connects to a running Ollama instance and uses a specified
    embedding model to convert text into dense vector representations.
    """

    def __init__(
        self,
        model: str = "nomic-embed-text",
        base_url: str = "http://localhost:11434",
    ):
        """
        Initialize the embedder.

        Args:
            model: Ollama model name for embeddings.
            base_url: Ollama API base URL.
        """
        self.model = model
        self.base_url = base_url
        self._client = ollama.Client(host=base_url)
        self._dimensions: Optional[int] = None

    @property
    def dimensions(self) -> Optional[int]:
        """Return the embedding dimensions (available after first embed call)."""
        return self._dimensions

    def embed(self, text: str) -> list[float]:
        """
        Generate an embedding for a single text.

        Raises:
            ValidationError: If the text is empty.
            CollaboratorUnavailableError: If Ollama is not reachable.
            EmbeddingError: If embedding generation fails.
        """
        if not text or not text.strip():
            raise ValidationError("Cannot embed empty text")
        self._require_ready()

        try:
            response = self._client.embed(model=self.model, input=text)
            embedding = list(response["embeddings"][0])
        except ollama.ResponseError as e:
            if _is_model_missing(e):
                raise self._model_missing(e) from e
            raise EmbeddingError(
                f"Ollama embedding failed for model '{self.model}'", e
            ) from e
        except Exception as e:
            if _is_connection_failure(e):
                raise CollaboratorUnavailableError(
                    "embedder",
                    message=f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve",
                    details=str(e),
                ) from e
            raise EmbeddingError("Embedding generation failed", e) from e

        self._dimensions = len(embedding)
        return embedding

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed several texts in one request.

        Empty strings are not sent to Ollama; their slot holds an empty list.
        """
        if not texts:
            return []

        non_empty: list[tuple[int, str]] = [
            (i, t) for i, t in enumerate(texts) if t and t.strip()
        ]
        if not non_empty:
            return [[] for _ in texts]
        self._require_ready()

        try:
            input_texts = [t for _, t in non_empty]
            response = self._client.embed(model=self.model, input=input_texts)
            embeddings = response["embeddings"]
        except ollama.ResponseError as e:
            if _is_model_missing(e):
                raise self._model_missing(e) from e
            raise EmbeddingError(
                f"Ollama batch embedding failed for model '{self.model}'", e
            ) from e
        except Exception as e:
            if _is_connection_failure(e):
                raise CollaboratorUnavailableError(
                    "embedder",
                    message=f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve",
                    details=str(e),
                ) from e
            raise EmbeddingError("Batch embedding failed", e) from e

        if embeddings:
            self._dimensions = len(embeddings[0])

        result: list[list[float]] = [[] for _ in texts]
        for (orig_idx, _), embedding in zip(non_empty, embeddings):
            result[orig_idx] = list(embedding)
        return result

    def health_check(self) -> dict:
        result = {
            "healthy": False,
            "ollama_running": False,
            "model_available": False,
            "model": self.model,
            "error": "",
        }

        try:
            models = self._client.list()
            result["ollama_running"] = True

            model_names = [m.model for m in models.models]
            result["model_available"] = any(
                m.startswith(self.model) for m in model_names
            )

            if not result["model_available"]:
                result["error"] = (
                    f"Model '{self.model}' not found. "
                    f"Available: {model_names}. "
                    f"Pull it with: ollama pull {self.model}"
                )
                self.load_error = result["error"]
            else:
                result["healthy"] = True

        except Exception as e:
            logger.warning("Ollama health check failed: %s", e)
            result["error"] = f"Cannot connect to Ollama: {e}"

        return result

    def _model_missing(self, error: Exception) -> CollaboratorUnavailableError:
        """Mark the embedder unready; the model has to be pulled and the service restarted."""
        self.load_error = (
            f"Model '{self.model}' not found. Pull it with: ollama pull {self.model}"
        )
        logger.error("%s (%s)", self.load_error, error)
        return CollaboratorUnavailableError(
            "embedder",
            message="Embedding model is not loaded",
            details=self.load_error,
        )
