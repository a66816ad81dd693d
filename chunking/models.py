"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingConfig - Window size and overlap, in characters
2. ChunkWindow - One raw window produced by the sliding-window splitter

Design Principles:
- Pydantic v2 for validation (consistent with vector_store and retrieval)
- Character-based windows so the same settings work for any embedding model

Usage:
    config = ChunkingConfig(chunk_size=800, overlap=120)
    chunks = list(split_text(text, config.chunk_size, config.overlap))
"""

from pydantic import BaseModel, Field


class ChunkingConfig(BaseModel):
    """
    Configuration for the character-window chunker.

    Defaults match the server ingestion endpoint (1200 / 120).
    """
    chunk_size: int = Field(
        1200,
        description="Maximum characters per chunk window",
        gt=0,
    )
    overlap: int = Field(
        120,
        description="Characters shared by consecutive windows",
        ge=0,
    )


class ChunkWindow(BaseModel):
    """A raw window over the source text, before whitespace trimming."""
    start: int = Field(..., description="Offset of the first character", ge=0)
    end: int = Field(..., description="Offset one past the last character", ge=0)
    raw: str = Field(..., description="Untrimmed window text (text[start:end])")

    @property
    def text(self) -> str:
        """The chunk text as emitted to the embedding model."""
        return self.raw.strip()
