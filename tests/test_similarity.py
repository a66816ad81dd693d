"""Tests for vector_store.similarity: cosine over the shared prefix."""

import numpy as np
import pytest

from vector_store.similarity import cosine_similarity


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([0.3, -1.2, 4.0], [0.3, -1.2, 4.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 0.0], [2.0, 0.0]) == 1.0

    def test_zero_vector_scores_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
        assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0

    def test_zero_vector_against_itself(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [0.0, 0.0, 0.0]) == 0.0

    def test_unequal_lengths_use_shared_prefix(self):
        assert cosine_similarity([1.0, 0.0, 5.0], [1.0, 0.0]) == 1.0
        assert cosine_similarity([1.0], [0.0, 3.0]) == 0.0

    def test_empty_vector(self):
        assert cosine_similarity([], [1.0, 2.0]) == 0.0

    def test_symmetric(self):
        rng = np.random.default_rng(3)
        for _ in range(50):
            a = rng.standard_normal(rng.integers(1, 40)).astype(np.float32)
            b = rng.standard_normal(rng.integers(1, 40)).astype(np.float32)
            assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_bounded(self):
        rng = np.random.default_rng(11)
        for _ in range(50):
            a = rng.standard_normal(16)
            b = rng.standard_normal(16)
            assert -1.0 - 1e-9 <= cosine_similarity(a, b) <= 1.0 + 1e-9

    def test_self_similarity_is_one_for_nonzero(self):
        rng = np.random.default_rng(5)
        v = rng.standard_normal(384).astype(np.float32)
        assert cosine_similarity(v, v) == pytest.approx(1.0)
