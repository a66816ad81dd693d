"""
Text Chunker - Overlapping character windows for embedding

Splits raw document text into overlapping segments that are embedded
independently by the retrieval pipeline.

Algorithm:
1. Take a window of at most chunk_size characters starting at the cursor.
2. Find the last sentence/line boundary ("\\n", ".", "!") in the window.
3. If that boundary lies beyond 60% of chunk_size, cut the window right after it.
4. Emit the stripped window.
5. Stop once the window reaches the end of the text, otherwise advance the
   cursor by max(1, len(window) - overlap).

Usage:
    from chunking import split_text

    for chunk in split_text(text, chunk_size=1200, overlap=120):
        ...
"""

from typing import Iterator

from .models import ChunkWindow

BOUNDARY_CHARS = ("\n", ".", "!")
BOUNDARY_RATIO = 0.6


def iter_windows(text: str, chunk_size: int, overlap: int) -> Iterator[ChunkWindow]:
    """
    Yield the raw (untrimmed) windows covering ``text``.

    Consecutive windows never leave a gap and share at most ``overlap``
    characters. The cursor always moves forward by at least one character.

    Raises:
        ValueError: If chunk_size is not positive or overlap is negative.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
    if overlap < 0:
        raise ValueError(f"overlap must be >= 0, got {overlap}")

    length = len(text)
    i = 0
    while i < length:
        end = min(i + chunk_size, length)
        part = text[i:end]

        last_break = max(part.rfind(ch) for ch in BOUNDARY_CHARS)
        if last_break > chunk_size * BOUNDARY_RATIO:
            part = part[: last_break + 1]

        yield ChunkWindow(start=i, end=i + len(part), raw=part)

        if i + len(part) >= length:
            break
        i += max(1, len(part) - overlap)


def split_text(text: str, chunk_size: int, overlap: int) -> Iterator[str]:
    """
    Split ``text`` into overlapping, whitespace-trimmed chunks.

    Windows that trim to an empty string are still yielded; callers decide
    whether to keep them.
    """
    for window in iter_windows(text, chunk_size, overlap):
        yield window.text
