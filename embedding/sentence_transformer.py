"""
In-process embedding with sentence-transformers.

Loads a BERT-style encoder (all-MiniLM-L6-v2 by default) once at
construction. The model's pooling layer averages token outputs over
non-padding positions; ``normalize_embeddings=True`` applies the L2
normalization. If the model cannot be loaded the embedder stays unready.
"""

import logging
from typing import Optional

from sentence_transformers import SentenceTransformer

from vector_store.exceptions import EmbeddingError, ValidationError

from .base import Embedder

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder(Embedder):
    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        device: Optional[str] = None,
    ):
        self.model_name = model_name
        self._model: Optional[SentenceTransformer] = None
        self._dimensions: Optional[int] = None

        logger.info("Loading embedding model: %s", model_name)
        try:
            self._model = SentenceTransformer(model_name, device=device)
            self._dimensions = self._model.get_sentence_embedding_dimension()
        except Exception as e:
            # hub, torch and filesystem errors all mean "model not loaded"
            logger.error("Failed to load embedding model %s: %s", model_name, e)
            self.load_error = str(e)
        else:
            logger.info("Embedding model loaded (%s dimensions)", self._dimensions)

    @property
    def dimensions(self) -> Optional[int]:
        return self._dimensions

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise ValidationError("Cannot embed empty text")
        self._require_ready()
        try:
            vector = self._model.encode(
                text,
                convert_to_numpy=True,
                normalize_embeddings=True,
            )
        except Exception as e:
            raise EmbeddingError(f"Embedding failed for model '{self.model_name}'", e) from e
        return vector.tolist()

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        for text in texts:
            if not text or not text.strip():
                raise ValidationError("Cannot embed empty text")
        self._require_ready()
        try:
            vectors = self._model.encode(
                texts,
                convert_to_numpy=True,
                normalize_embeddings=True,
            )
        except Exception as e:
            raise EmbeddingError(f"Batch embedding failed for model '{self.model_name}'", e) from e
        return vectors.tolist()

    def health_check(self) -> dict:
        return {
            "healthy": self.is_ready,
            "model": self.model_name,
            "dimensions": self._dimensions,
            "error": self.load_error or "",
        }
