"""BIpartite Graph Sampler.

Samples random regular bipartite graphs: a set of variables and a set of
constraints (named after SAT problems) where every variable has the same
degree and every constraint has the same degree, with no repeated edge.

Quick start::

    import numpy as np
    from bigs import Sampler

    builder = Sampler.builder()
    builder.number_of_variables = 10
    builder.number_of_constraints = 6
    builder.variable_degree = 3
    builder.constraint_degree = 5
    sampler = builder.build()

    graph = sampler.sample(np.random.default_rng(42))
    other_graph = sampler.sample(np.random.default_rng(7))
"""

from bigs.config import (
    DegreeExceedsPartnerCountError,
    InvalidEdgeBalanceError,
    InvalidParametersError,
    SamplerConfig,
    ZeroDegreeOrCountError,
)
from bigs.graph import (
    BipartiteGraph,
    Edge,
    GraphGenerationError,
    Node,
    Sampler,
    SamplerBuilder,
    generate_bipartite_graph,
)

__version__ = "0.3.0"

__all__ = [
    "BipartiteGraph",
    "DegreeExceedsPartnerCountError",
    "Edge",
    "GraphGenerationError",
    "InvalidEdgeBalanceError",
    "InvalidParametersError",
    "Node",
    "Sampler",
    "SamplerBuilder",
    "SamplerConfig",
    "ZeroDegreeOrCountError",
    "generate_bipartite_graph",
]
