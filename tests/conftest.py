"""
Pytest fixtures for the retrieval engine tests.
"""

import logging
import re
from typing import Optional

import numpy as np
import pytest

from embedding.base import Embedder
from retrieval.config import RetrievalConfig
from retrieval.logging_config import PACKAGE_LOGGERS
from retrieval.service import RetrievalService
from vector_store import SqliteVectorStore, StoreConfig

VOCABULARY = ["the", "quick", "fox", "slow", "dog", "cat", "bird", "river", "mountain", "tree"]

_WORD = re.compile(r"\w+")


class KeywordEmbedder(Embedder):
    """Counts vocabulary words; lexical overlap raises cosine similarity."""

    def __init__(self, vocabulary: Optional[list[str]] = None, load_error: Optional[str] = None):
        self.vocabulary = vocabulary or VOCABULARY
        self.load_error = load_error
        self.calls: list[str] = []

    @property
    def dimensions(self) -> Optional[int]:
        return len(self.vocabulary)

    def embed(self, text: str) -> list[float]:
        self._require_ready()
        self.calls.append(text)
        vector = np.zeros(len(self.vocabulary), dtype=np.float32)
        for word in _WORD.findall(text.lower()):
            if word in self.vocabulary:
                vector[self.vocabulary.index(word)] += 1.0
        norm = float(np.linalg.norm(vector))
        if norm > 0:
            vector /= norm
        return vector.tolist()

    def health_check(self) -> dict:
        return {"healthy": self.is_ready, "model": "keyword", "error": self.load_error or ""}


@pytest.fixture
def embedder():
    return KeywordEmbedder()


@pytest.fixture
def store(tmp_path):
    return SqliteVectorStore(StoreConfig(db_path=str(tmp_path / "index.db")))


@pytest.fixture
def config(tmp_path):
    return RetrievalConfig(db_path=str(tmp_path / "index.db"), embedder_backend="hashing")


@pytest.fixture
def service(config, store, embedder):
    return RetrievalService(config, store, embedder)


@pytest.fixture(autouse=True)
def reset_package_loggers():
    """setup_logging() attaches handlers to captured streams; drop them after each test."""
    yield
    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
