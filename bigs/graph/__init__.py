"""Regular bipartite graph sampling: stubs, shuffling, repair, output."""

from bigs.graph.builder import SamplerBuilder
from bigs.graph.resolver import (
    FALLBACK_WINDOW_SIZE,
    MAX_SWAP_RETRIES,
    ConflictResolver,
    GraphGenerationError,
    ResolutionState,
    ResolutionStats,
    resolve_conflicts,
)
from bigs.graph.sampler import Sampler, generate_bipartite_graph
from bigs.graph.serialization import (
    graph_from_dict,
    graph_to_dict,
    load_graph,
    save_graph,
)
from bigs.graph.stubs import StubPool
from bigs.graph.types import BipartiteGraph, Edge, Node, NodeKind, RandomSource
from bigs.graph.validation import validate_graph

__all__ = [
    "BipartiteGraph",
    "ConflictResolver",
    "Edge",
    "FALLBACK_WINDOW_SIZE",
    "GraphGenerationError",
    "MAX_SWAP_RETRIES",
    "Node",
    "NodeKind",
    "RandomSource",
    "ResolutionState",
    "ResolutionStats",
    "Sampler",
    "SamplerBuilder",
    "StubPool",
    "generate_bipartite_graph",
    "graph_from_dict",
    "graph_to_dict",
    "load_graph",
    "resolve_conflicts",
    "save_graph",
    "validate_graph",
]
