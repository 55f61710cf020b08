"""Invariant checks for sampled regular bipartite graphs.

Verifies the guarantees every sampler output must meet:
1. Adjacency shapes match the configuration
2. Vertex ids fall inside their class range
3. No (variable, constraint) pair appears twice
4. The per-variable and per-constraint views describe the same edge set
"""

import logging

import numpy as np

from bigs.config.sampler import SamplerConfig
from bigs.graph.types import BipartiteGraph

log = logging.getLogger(__name__)


def _has_repeated_entries(rows: np.ndarray) -> bool:
    """True if any row of a row-sorted 2-D array repeats a value."""
    if rows.shape[1] < 2:
        return False
    return bool(np.any(rows[:, 1:] == rows[:, :-1]))


def validate_graph(graph: BipartiteGraph, config: SamplerConfig) -> list[str]:
    """Validate a graph against the regular bipartite constraints.

    Checks (cheapest first). Shape failures stop further checks since the
    remaining checks assume the configured dimensions.

    Args:
        graph: Graph to check.
        config: Parameters the graph is supposed to satisfy.

    Returns:
        List of error strings (empty = valid graph).
    """
    errors: list[str] = []
    var_adj = graph.variable_adjacency
    con_adj = graph.constraint_adjacency

    # 1. Shapes, which also pin every degree
    if var_adj.shape != (config.n, config.v):
        errors.append(
            f"Variable adjacency shape {var_adj.shape} != ({config.n}, {config.v})"
        )
    if con_adj.shape != (config.m, config.c):
        errors.append(
            f"Constraint adjacency shape {con_adj.shape} != ({config.m}, {config.c})"
        )
    if errors:
        return errors

    # 2. Id ranges
    if var_adj.size and (var_adj.min() < 0 or var_adj.max() >= config.m):
        errors.append(f"Constraint id out of range [0, {config.m})")
    if con_adj.size and (con_adj.min() < 0 or con_adj.max() >= config.n):
        errors.append(f"Variable id out of range [0, {config.n})")

    # 3. Duplicate pairs (rows are sorted, so repeats are adjacent)
    if _has_repeated_entries(var_adj):
        errors.append("Duplicate (variable, constraint) pair in variable view")
    if _has_repeated_entries(con_adj):
        errors.append("Duplicate (variable, constraint) pair in constraint view")

    # 4. Both views describe one edge set
    from_variables = (
        np.repeat(np.arange(config.n, dtype=np.int64), config.v) * config.m
        + var_adj.ravel()
    )
    from_constraints = (
        con_adj.ravel().astype(np.int64) * config.m
        + np.repeat(np.arange(config.m, dtype=np.int64), config.c)
    )
    if not np.array_equal(np.sort(from_variables), np.sort(from_constraints)):
        errors.append("Variable and constraint views disagree on the edge set")

    if errors:
        log.debug("Graph validation failed: %s", "; ".join(errors))
    return errors
