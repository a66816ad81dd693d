"""
Embedding Module - text to fixed-length vectors

Backends:
    OllamaEmbedder               - local Ollama server (default)
    SentenceTransformerEmbedder  - in-process model (``pip install .[local]``)
    HashingEmbedder              - feature hashing, no model required

Quick Start:
    from embedding import create_embedder

    embedder = create_embedder("ollama", model="nomic-embed-text")
    vector = embedder.embed("The quick fox.")
"""

__version__ = "1.0.0"

from .base import Embedder
from .factory import BACKENDS, create_embedder
from .hashing import HashingEmbedder
from .ollama_embedder import OllamaEmbedder

__all__ = [
    "__version__",
    "Embedder",
    "OllamaEmbedder",
    "HashingEmbedder",
    "BACKENDS",
    "create_embedder",
]
