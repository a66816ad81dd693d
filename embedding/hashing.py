"""
Hashing Embedder - dependency-free bag-of-words vectors

Maps each word token to a signed bucket of a fixed-size vector (feature
hashing) and L2-normalizes the result. Texts that share words get a higher
cosine similarity, which is enough for offline demos and tests where no
neural model is installed.

Usage:
    from embedding import HashingEmbedder

    embedder = HashingEmbedder(dimensions=384)
    vector = embedder.embed("The quick fox.")
"""

import hashlib
import re
from typing import Optional

import numpy as np

from vector_store.exceptions import ValidationError

from .base import Embedder

_TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)


class HashingEmbedder(Embedder):
    """Deterministic feature-hashing embedder."""

    def __init__(self, dimensions: int = 384):
        if dimensions <= 0:
            raise ValueError(f"dimensions must be > 0, got {dimensions}")
        self._dimensions = dimensions

    @property
    def dimensions(self) -> Optional[int]:
        return self._dimensions

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise ValidationError("Cannot embed empty text")

        vector = np.zeros(self._dimensions, dtype=np.float32)
        for token in _TOKEN_PATTERN.findall(text.lower()):
            digest = hashlib.blake2b(token.encode("utf-8"), digest_size=8).digest()
            bucket = int.from_bytes(digest[:7], "little") % self._dimensions
            sign = 1.0 if digest[7] & 1 else -1.0
            vector[bucket] += sign

        norm = float(np.linalg.norm(vector))
        if norm > 0:
            vector /= norm
        return vector.tolist()

    def health_check(self) -> dict:
        return {
            "healthy": True,
            "model": f"hashing-{self._dimensions}",
            "dimensions": self._dimensions,
            "error": "",
        }
