"""
Chunking Module - Overlapping character windows for embedding

Splits raw document text into overlapping chunks that prefer to end on a
line or sentence boundary.

Quick Start:
    from chunking import ChunkingConfig, split_text

    config = ChunkingConfig(chunk_size=1200, overlap=120)
    chunks = list(split_text(text, config.chunk_size, config.overlap))
"""

__version__ = "1.0.0"

from .chunker import BOUNDARY_CHARS, BOUNDARY_RATIO, iter_windows, split_text
from .models import ChunkingConfig, ChunkWindow

__all__ = [
    "__version__",
    "split_text",
    "iter_windows",
    "BOUNDARY_CHARS",
    "BOUNDARY_RATIO",
    "ChunkingConfig",
    "ChunkWindow",
]
