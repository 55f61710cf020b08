"""Regular bipartite graph sampler: configuration model with switching repair.

A Sampler is built once from a validated SamplerConfig and can then draw any
number of independent graphs. Each sample:
1. Resets the stub buffers to canonical order
2. Shuffles both buffers with the caller's random source
3. Pairs stubs positionally (slot i with slot i)
4. Repairs duplicate pairs by edge switching
5. Freezes the result into a BipartiteGraph and validates it
"""

import logging
import threading

import numpy as np

from bigs.config.sampler import SamplerConfig
from bigs.graph.resolver import (
    FALLBACK_WINDOW_SIZE,
    MAX_SWAP_RETRIES,
    GraphGenerationError,
    resolve_conflicts,
)
from bigs.graph.shuffle import shuffle_stubs
from bigs.graph.stubs import StubPool
from bigs.graph.types import BipartiteGraph, RandomSource
from bigs.graph.validation import validate_graph

log = logging.getLogger(__name__)


class Sampler:
    """Draws simple regular bipartite graphs for one fixed configuration.

    The configuration and canonical stub templates are immutable. The
    working buffers are reused across calls, so sample() holds a lock while
    it mutates them; returned graphs never alias those buffers.
    """

    def __init__(
        self,
        config: SamplerConfig,
        max_swap_retries: int = MAX_SWAP_RETRIES,
        fallback_window_size: int = FALLBACK_WINDOW_SIZE,
    ) -> None:
        self._config = config
        self._stubs = StubPool(config)
        self._lock = threading.Lock()
        self.max_swap_retries = max_swap_retries
        self.fallback_window_size = fallback_window_size

    @staticmethod
    def builder():
        """Return a fresh SamplerBuilder with every parameter at 0."""
        from bigs.graph.builder import SamplerBuilder

        return SamplerBuilder()

    @classmethod
    def from_config(cls, config: SamplerConfig) -> "Sampler":
        return cls(config)

    @property
    def config(self) -> SamplerConfig:
        return self._config

    @property
    def number_of_variables(self) -> int:
        return self._config.n

    @property
    def number_of_constraints(self) -> int:
        return self._config.m

    @property
    def variable_degree(self) -> int:
        return self._config.v

    @property
    def constraint_degree(self) -> int:
        return self._config.c

    @property
    def number_of_edges(self) -> int:
        return self._config.number_of_edges

    def sample(self, rng: RandomSource) -> BipartiteGraph:
        """Draw one graph using draws from rng.

        Args:
            rng: Random source; its state advances with every draw.

        Returns:
            A new BipartiteGraph satisfying the configuration.

        Raises:
            GraphGenerationError: Only on an internal defect (resolution
                budget exceeded or output failing validation).
        """
        config = self._config
        with self._lock:
            variables, constraints = self._stubs.reset()
            shuffle_stubs(variables, rng)
            shuffle_stubs(constraints, rng)
            stats = resolve_conflicts(
                variables,
                constraints,
                config.m,
                rng,
                max_swap_retries=self.max_swap_retries,
                fallback_window_size=self.fallback_window_size,
            )
            graph = BipartiteGraph.from_edge_arrays(
                variables, constraints, config.n, config.m
            )

        errors = validate_graph(graph, config)
        if errors:
            raise GraphGenerationError(
                f"Sampled graph violates its configuration: {'; '.join(errors)}"
            )

        log.info(
            "Graph sampled (n=%d, m=%d, v=%d, c=%d, edges=%d, conflicts=%d)",
            config.n,
            config.m,
            config.v,
            config.c,
            graph.number_of_edges,
            stats.conflicts_found,
        )
        return graph

    def __repr__(self) -> str:
        c = self._config
        return f"Sampler(n={c.n}, m={c.m}, v={c.v}, c={c.c})"


def generate_bipartite_graph(config: SamplerConfig, seed: int) -> BipartiteGraph:
    """Sample one graph for config with a fresh numpy Generator seeded by seed.

    Same config and seed always produce the same graph.
    """
    rng = np.random.default_rng(seed)
    return Sampler(config).sample(rng)
