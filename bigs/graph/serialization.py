"""JSON storage for sampled graphs together with their generation metadata.

The file records everything needed to reproduce a graph (configuration and
seed) next to the graph itself, stored as per-variable constraint lists.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from bigs.config.hashing import config_hash
from bigs.config.sampler import SamplerConfig
from bigs.config.serialization import config_from_dict, config_to_dict
from bigs.graph.types import BipartiteGraph
from bigs.graph.validation import validate_graph

log = logging.getLogger(__name__)


def graph_to_dict(
    graph: BipartiteGraph, config: SamplerConfig, seed: int | None = None
) -> dict[str, Any]:
    """Convert a graph and its provenance into JSON-ready data.

    Args:
        graph: Sampled graph.
        config: Configuration the graph was sampled from.
        seed: Seed of the random source, if known.

    Returns:
        Plain dict (ints and lists only).
    """
    return {
        "number_of_variables": graph.number_of_variables,
        "number_of_constraints": graph.number_of_constraints,
        "variable_degree": graph.variable_degree,
        "constraint_degree": graph.constraint_degree,
        "rng_seed": seed,
        "config": config_to_dict(config),
        "config_hash": config_hash(config),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "variable_neighbors": graph.variable_adjacency.tolist(),
    }


def graph_from_dict(
    data: dict[str, Any],
) -> tuple[BipartiteGraph, SamplerConfig, int | None]:
    """Rebuild (graph, config, seed) from graph_to_dict output.

    Raises:
        ValueError: If the stored graph does not satisfy the stored config.
    """
    config = config_from_dict(data["config"])
    graph = BipartiteGraph.from_variable_adjacency(
        data["variable_neighbors"], config.m
    )
    errors = validate_graph(graph, config)
    if errors:
        raise ValueError(f"Stored graph is invalid: {'; '.join(errors)}")
    return graph, config, data.get("rng_seed")


def save_graph(
    graph: BipartiteGraph,
    config: SamplerConfig,
    path: Path,
    seed: int | None = None,
) -> Path:
    """Write a graph and its metadata to path as JSON.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(graph_to_dict(graph, config, seed), f)
    log.info("Graph saved to %s", path)
    return path


def load_graph(path: Path) -> tuple[BipartiteGraph, SamplerConfig, int | None]:
    """Load (graph, config, seed) from a file written by save_graph."""
    with open(path) as f:
        data = json.load(f)
    log.info("Graph loaded from %s", path)
    return graph_from_dict(data)
