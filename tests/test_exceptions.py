"""Tests for vector_store.exceptions: the engine error taxonomy."""

import sqlite3

import pytest

from vector_store.exceptions import (
    CollaboratorUnavailableError,
    CorruptRecordError,
    DimensionMismatchError,
    EmbeddingError,
    OperationCancelledError,
    RetrievalError,
    StorageIOError,
    ValidationError,
    format_error_chain,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            ValidationError(),
            DimensionMismatchError(384, 256),
            CorruptRecordError(7),
            CollaboratorUnavailableError("store"),
            EmbeddingError(),
            StorageIOError("insert"),
            OperationCancelledError(),
        ],
    )
    def test_all_inherit_from_base(self, error):
        assert isinstance(error, RetrievalError)


class TestMessages:
    def test_details_are_appended(self):
        error = RetrievalError("Something failed", details="disk full")
        assert str(error) == "Something failed | Details: disk full"
        assert error.message == "Something failed"

    def test_dimension_mismatch(self):
        error = DimensionMismatchError(expected=384, actual=256)
        assert error.expected == 384
        assert error.actual == 256
        assert "256" in str(error) and "384" in str(error)

    def test_corrupt_record_with_chunk_id(self):
        error = CorruptRecordError(10, chunk_id=3)
        assert "chunk 3" in str(error)
        assert error.byte_length == 10

    def test_collaborator_default_message(self):
        error = CollaboratorUnavailableError("embedder")
        assert error.component == "embedder"
        assert "embedder" in str(error)

    def test_storage_error_wraps_original(self):
        original = sqlite3.OperationalError("database is locked")
        error = StorageIOError("insert", original)
        assert error.original_error is original
        assert "database is locked" in str(error)


class TestFormatErrorChain:
    def test_single_error(self):
        assert format_error_chain(ValidationError("bad")) == "ValidationError: bad"

    def test_follows_original_error(self):
        error = StorageIOError("query", sqlite3.OperationalError("no such table"))
        lines = format_error_chain(error).splitlines()
        assert lines[0].startswith("StorageIOError")
        assert lines[1] == "  └─ OperationalError: no such table"

    def test_follows_cause(self):
        try:
            try:
                raise KeyError("x")
            except KeyError as e:
                raise OperationCancelledError() from e
        except OperationCancelledError as error:
            chain = format_error_chain(error)
        assert "KeyError" in chain.splitlines()[1]
