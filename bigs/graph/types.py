"""Graph data structures for regular bipartite sampling and storage."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

import numpy as np
import scipy.sparse


class RandomSource(Protocol):
    """Caller-owned random capability consumed by every sample.

    numpy.random.Generator satisfies this protocol. The sampler never stores
    a random source; it is passed into each sample() call.
    """

    def integers(self, low, high=None, size=None):  # uniform ints in [low, high)
        ...

    def shuffle(self, x) -> None:  # in-place uniform permutation
        ...


class NodeKind(StrEnum):
    """Which vertex class a node belongs to."""

    VARIABLE = "variable"
    CONSTRAINT = "constraint"


@dataclass(frozen=True, slots=True)
class Edge:
    """A (variable, constraint) pair.

    Variables and constraints are disjoint vertex sets, so Edge(3, 3) is an
    ordinary edge between variable 3 and constraint 3.
    """

    variable: int
    constraint: int


@dataclass(frozen=True, slots=True)
class Node:
    """A vertex of a sampled graph, as yielded by variables()/constraints()."""

    label: int
    kind: NodeKind
    neighbors: frozenset[int]

    @property
    def degree(self) -> int:
        return len(self.neighbors)

    def has_neighbor(self, label: int) -> bool:
        return label in self.neighbors

    @property
    def is_variable(self) -> bool:
        return self.kind is NodeKind.VARIABLE

    @property
    def is_constraint(self) -> bool:
        return self.kind is NodeKind.CONSTRAINT


def _readonly(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class BipartiteGraph:
    """Immutable regular bipartite graph produced by one successful sample.

    Both adjacency views are stored as read-only integer arrays with sorted
    rows, so the structure can be shared across threads. Uses frozen=True
    but omits slots=True since numpy arrays don't interact well with
    __slots__.
    """

    variable_adjacency: np.ndarray  # int array (n, v), row i = constraints of variable i
    constraint_adjacency: np.ndarray  # int array (m, c), row j = variables of constraint j

    @classmethod
    def from_edge_arrays(
        cls,
        variables: np.ndarray,
        constraints: np.ndarray,
        n: int,
        m: int,
    ) -> "BipartiteGraph":
        """Build both adjacency views from positionally paired endpoint arrays.

        Requires a regular edge list: every variable appears the same number
        of times, and so does every constraint. Inputs are copied, never
        aliased.

        Args:
            variables: Variable endpoint of each edge.
            constraints: Constraint endpoint of each edge, same length.
            n: Number of variables.
            m: Number of constraints.

        Returns:
            A new BipartiteGraph.
        """
        num_edges = len(variables)
        if num_edges % n != 0 or num_edges % m != 0:
            raise ValueError(
                f"{num_edges} edges cannot be regular over "
                f"{n} variables and {m} constraints"
            )

        variables = np.asarray(variables, dtype=np.int64)
        constraints = np.asarray(constraints, dtype=np.int64)

        # Sorting (row * width + column) keys groups rows and sorts each row
        by_variable = np.sort(variables * m + constraints)
        variable_adjacency = (by_variable % m).reshape(n, num_edges // n)

        by_constraint = np.sort(constraints * n + variables)
        constraint_adjacency = (by_constraint % n).reshape(m, num_edges // m)

        return cls(
            variable_adjacency=_readonly(np.ascontiguousarray(variable_adjacency)),
            constraint_adjacency=_readonly(np.ascontiguousarray(constraint_adjacency)),
        )

    @classmethod
    def from_variable_adjacency(
        cls, rows: list[list[int]] | np.ndarray, m: int
    ) -> "BipartiteGraph":
        """Rebuild a graph from its per-variable constraint lists."""
        adjacency = np.asarray(rows, dtype=np.int64)
        if adjacency.ndim != 2:
            raise ValueError(
                f"variable adjacency must be 2-dimensional, got shape {adjacency.shape}"
            )
        n, v = adjacency.shape
        variables = np.repeat(np.arange(n, dtype=np.int64), v)
        return cls.from_edge_arrays(variables, adjacency.ravel(), n, m)

    @property
    def number_of_variables(self) -> int:
        return self.variable_adjacency.shape[0]

    @property
    def number_of_constraints(self) -> int:
        return self.constraint_adjacency.shape[0]

    @property
    def number_of_edges(self) -> int:
        return self.variable_adjacency.size

    @property
    def variable_degree(self) -> int:
        return self.variable_adjacency.shape[1]

    @property
    def constraint_degree(self) -> int:
        return self.constraint_adjacency.shape[1]

    def variable_neighbors(self, variable: int) -> frozenset[int]:
        """Constraint ids incident to the given variable."""
        return frozenset(self.variable_adjacency[variable].tolist())

    def constraint_neighbors(self, constraint: int) -> frozenset[int]:
        """Variable ids incident to the given constraint."""
        return frozenset(self.constraint_adjacency[constraint].tolist())

    def contains_edge(self, edge: Edge) -> bool:
        if not 0 <= edge.variable < self.number_of_variables:
            return False
        row = self.variable_adjacency[edge.variable]
        idx = np.searchsorted(row, edge.constraint)
        return bool(idx < len(row) and row[idx] == edge.constraint)

    def edges(self) -> Iterator[Edge]:
        """Iterate all edges in increasing (variable, constraint) order."""
        for variable, row in enumerate(self.variable_adjacency.tolist()):
            for constraint in row:
                yield Edge(variable, constraint)

    def variables(self) -> Iterator[Node]:
        """Iterate variables in increasing label order."""
        for label, row in enumerate(self.variable_adjacency.tolist()):
            yield Node(label, NodeKind.VARIABLE, frozenset(row))

    def constraints(self) -> Iterator[Node]:
        """Iterate constraints in increasing label order."""
        for label, row in enumerate(self.constraint_adjacency.tolist()):
            yield Node(label, NodeKind.CONSTRAINT, frozenset(row))

    def biadjacency(self) -> scipy.sparse.csr_matrix:
        """Sparse (n x m) 0/1 biadjacency matrix, rows = variables."""
        n, v = self.variable_adjacency.shape
        indptr = np.arange(0, n * v + 1, v, dtype=np.int64)
        data = np.ones(n * v, dtype=np.int8)
        return scipy.sparse.csr_matrix(
            (data, self.variable_adjacency.ravel(), indptr),
            shape=(n, self.number_of_constraints),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BipartiteGraph):
            return NotImplemented
        return np.array_equal(
            self.variable_adjacency, other.variable_adjacency
        ) and np.array_equal(self.constraint_adjacency, other.constraint_adjacency)
