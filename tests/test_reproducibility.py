"""Tests for seed resolution and random source creation."""

import numpy as np
import pytest

from bigs.reproducibility import make_rng, resolve_seed, verify_seed_determinism


class TestResolveSeed:
    def test_explicit_seed_kept(self):
        assert resolve_seed(42) == 42
        assert resolve_seed(0) == 0

    def test_none_draws_seed(self):
        seed = resolve_seed(None)
        assert 0 <= seed < 2**64

    def test_drawn_seeds_differ(self):
        assert len({resolve_seed() for _ in range(10)}) > 1

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            resolve_seed(-1)


class TestMakeRng:
    def test_generator_type(self):
        assert isinstance(make_rng(1), np.random.Generator)

    def test_same_seed_same_draws(self):
        assert make_rng(5).integers(0, 100, 20).tolist() == make_rng(5).integers(
            0, 100, 20
        ).tolist()

    def test_verify_seed_determinism(self):
        assert verify_seed_determinism(42) is True
        assert verify_seed_determinism(0) is True
