from typing import Optional

from .base import Embedder
from .hashing import HashingEmbedder
from .ollama_embedder import OllamaEmbedder

BACKENDS = ("ollama", "sentence-transformers", "hashing")


def create_embedder(
    backend: str = "ollama",
    model: Optional[str] = None,
    base_url: str = "http://localhost:11434",
    dimensions: Optional[int] = None,
) -> Embedder:
    """
    Build an embedder for the given backend name.

    Args:
        backend: One of "ollama", "sentence-transformers", "hashing".
        model: Model name; each backend has its own default.
        base_url: Ollama API base URL (ollama backend only).
        dimensions: Vector size (hashing backend only).
    """
    if backend == "ollama":
        return OllamaEmbedder(model=model or "nomic-embed-text", base_url=base_url)
    if backend == "sentence-transformers":
        # optional extra, imported only when selected
        from .sentence_transformer import SentenceTransformerEmbedder

        return SentenceTransformerEmbedder(
            model_name=model or "sentence-transformers/all-MiniLM-L6-v2"
        )
    if backend == "hashing":
        return HashingEmbedder(dimensions=dimensions or 384)
    raise ValueError(f"Unknown embedder backend '{backend}'. Choose from: {', '.join(BACKENDS)}")
