"""Reproducibility infrastructure: seed resolution and random source creation."""

from bigs.reproducibility.seed import make_rng, resolve_seed, verify_seed_determinism

__all__ = [
    "make_rng",
    "resolve_seed",
    "verify_seed_determinism",
]
