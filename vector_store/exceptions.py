"""
Custom Exceptions for the Retrieval Engine.

This module defines the error taxonomy shared by the vector store, the
embedding backends and the ingestion/query pipelines.

Exception Hierarchy:
    RetrievalError (base)
    ├── ValidationError
    ├── DimensionMismatchError
    ├── CorruptRecordError
    ├── CollaboratorUnavailableError
    ├── EmbeddingError
    ├── StorageIOError
    └── OperationCancelledError

No error is retried by the engine; everything is raised to the immediate
caller.

Usage:
    from vector_store.exceptions import (
        RetrievalError,
        DimensionMismatchError,
    )

    try:
        store.insert("doc", "text", vector)
    except DimensionMismatchError as e:
        print(f"Expected {e.expected} dimensions, got {e.actual}")
    except RetrievalError as e:
        print(f"Insert failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class RetrievalError(Exception):
    """
    Base exception for all retrieval-engine errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A retrieval error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# CALLER ERRORS
# =============================================================================


class ValidationError(RetrievalError):
    """
    Raised when a caller supplies an empty or malformed argument.

    Examples: blank doc_id, blank text, blank query, k < 1.
    """

    def __init__(self, message: str = "Invalid input", details: Optional[str] = None):
        super().__init__(message, details)


class DimensionMismatchError(RetrievalError):
    """
    Raised when a vector's length disagrees with the index dimensionality.

    Fatal to the single insert or query; the index stays ready.

    Attributes:
        expected: Dimensionality established by the index
        actual: Length of the offending vector
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Vector has {actual} dimensions, index expects {expected}"
        )


# =============================================================================
# DATA ERRORS
# =============================================================================


class CorruptRecordError(RetrievalError):
    """
    Raised when a stored embedding blob cannot be decoded.

    Attributes:
        chunk_id: Row id of the corrupt record (None when decoding a bare blob)
        byte_length: Length of the blob in bytes
    """

    def __init__(self, byte_length: int, chunk_id: Optional[int] = None):
        self.chunk_id = chunk_id
        self.byte_length = byte_length
        message = f"Embedding blob of {byte_length} bytes is not a multiple of 4"
        if chunk_id is not None:
            message = f"{message} [chunk {chunk_id}]"
        super().__init__(message)


# =============================================================================
# COLLABORATOR ERRORS
# =============================================================================


class CollaboratorUnavailableError(RetrievalError):
    """
    Raised when the embedding model or the backing store is not ready.

    An unready component never recovers within a running instance;
    a fresh instance has to be constructed.

    Attributes:
        component: "embedder" or "store"
    """

    def __init__(
        self,
        component: str,
        message: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.component = component
        msg = message or f"The {component} is not available"
        super().__init__(msg, details)


class EmbeddingError(RetrievalError):
    """
    Raised when the embedding model is reachable but inference fails.
    """

    def __init__(
        self,
        message: str = "Embedding generation failed",
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message, details)


class StorageIOError(RetrievalError):
    """
    Raised when reading from or writing to the backing store fails.

    Attributes:
        operation: Name of the failed operation (e.g. "insert", "query")
        original_error: The underlying database error
    """

    def __init__(
        self,
        operation: str,
        original_error: Optional[Exception] = None,
    ):
        self.operation = operation
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(f"Storage {operation} failed", details)


class OperationCancelledError(RetrievalError):
    """Raised when a caller cancels an ingest or query before it completes."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        original = getattr(current, "original_error", None)
        if original is not None:
            current = original
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
