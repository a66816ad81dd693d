"""Tests for vector_store.codec: float32 blob encoding."""

import struct

import numpy as np
import pytest

from vector_store.codec import ELEMENT_SIZE, decode_vector, encode_vector
from vector_store.exceptions import CorruptRecordError


class TestEncode:
    def test_little_endian_float32(self):
        assert encode_vector([1.0]) == b"\x00\x00\x80\x3f"

    def test_matches_struct_packing(self):
        values = [0.5, -2.25, 3.0, 1e-3]
        assert encode_vector(values) == struct.pack("<4f", *values)

    def test_length_is_four_bytes_per_element(self):
        assert len(encode_vector(np.ones(384))) == 384 * ELEMENT_SIZE

    def test_big_endian_input_is_converted(self):
        vector = np.array([1.5, -7.0], dtype=">f4")
        assert encode_vector(vector) == struct.pack("<2f", 1.5, -7.0)


class TestDecode:
    def test_round_trip_is_exact(self):
        rng = np.random.default_rng(7)
        vector = rng.standard_normal(384).astype(np.float32)
        decoded = decode_vector(encode_vector(vector))
        assert decoded.dtype == np.float32
        assert np.array_equal(decoded, vector)

    def test_round_trip_extreme_values(self):
        info = np.finfo(np.float32)
        vector = np.array([info.max, info.min, info.tiny, -0.0, 0.0], dtype=np.float32)
        assert np.array_equal(decode_vector(encode_vector(vector)), vector)

    def test_empty_blob(self):
        assert decode_vector(b"").size == 0

    def test_length_not_multiple_of_four_is_corrupt(self):
        with pytest.raises(CorruptRecordError) as exc_info:
            decode_vector(b"\x00" * 7, chunk_id=12)
        assert exc_info.value.byte_length == 7
        assert exc_info.value.chunk_id == 12
