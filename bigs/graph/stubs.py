"""Reusable stub buffers for configuration-model pairing.

A stub is one unit of a vertex's degree. The canonical template lists every
vertex id repeated once per unit of degree, in sorted order; it is built
once per configuration and copied into the working buffers before each
sample so no allocation happens on the sampling path.
"""

import numpy as np

from bigs.config.sampler import SamplerConfig


def stub_dtype(config: SamplerConfig) -> np.dtype:
    """Smallest signed integer dtype able to hold every vertex id and pair key."""
    largest_key = config.n * config.m
    if largest_key < np.iinfo(np.int32).max:
        return np.dtype(np.int32)
    return np.dtype(np.int64)


def canonical_stubs(count: int, degree: int, dtype: np.dtype) -> np.ndarray:
    """Each id in [0, count) repeated degree times, in sorted order."""
    return np.repeat(np.arange(count, dtype=dtype), degree)


class StubPool:
    """Canonical stub templates plus the working buffers mutated while sampling.

    The templates are read-only. The working buffers are shared by every
    sample drawn through the owning sampler, so access to them must be
    serialized by the caller.
    """

    def __init__(self, config: SamplerConfig) -> None:
        dtype = stub_dtype(config)
        self.variable_template = canonical_stubs(config.n, config.v, dtype)
        self.constraint_template = canonical_stubs(config.m, config.c, dtype)
        self.variable_template.setflags(write=False)
        self.constraint_template.setflags(write=False)

        self.variables = np.empty_like(self.variable_template)
        self.constraints = np.empty_like(self.constraint_template)

    def __len__(self) -> int:
        return len(self.variable_template)

    def reset(self) -> tuple[np.ndarray, np.ndarray]:
        """Restore canonical order in the working buffers and return them."""
        np.copyto(self.variables, self.variable_template)
        np.copyto(self.constraints, self.constraint_template)
        return self.variables, self.constraints
