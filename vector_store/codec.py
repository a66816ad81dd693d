"""
Vector Codec - float32 little-endian blob encoding

Every element is stored as 4 bytes, little-endian IEEE-754 single precision,
regardless of the host byte order. A blob whose length is not a multiple of
4 is corrupt.
"""

from typing import Sequence

import numpy as np

from .exceptions import CorruptRecordError

ELEMENT_SIZE = 4
_DTYPE = np.dtype("<f4")


def encode_vector(vector: Sequence[float] | np.ndarray) -> bytes:
    """Encode a vector as a little-endian float32 blob."""
    return np.asarray(vector, dtype=_DTYPE).tobytes()


def decode_vector(blob: bytes, chunk_id: int | None = None) -> np.ndarray:
    """
    Decode a blob produced by ``encode_vector``.

    Args:
        blob: Raw bytes from storage.
        chunk_id: Row id, only used to label a CorruptRecordError.

    Returns:
        1-D float32 array of length len(blob) // 4.

    Raises:
        CorruptRecordError: If the blob length is not a multiple of 4.
    """
    if len(blob) % ELEMENT_SIZE:
        raise CorruptRecordError(len(blob), chunk_id=chunk_id)
    return np.frombuffer(blob, dtype=_DTYPE).astype(np.float32)
