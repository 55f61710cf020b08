"""Duplicate-edge detection and repair by randomized edge switching.

After positional pairing of two shuffled stub buffers, the edge list is a
random bipartite multigraph: the degrees are exact but the same
(variable, constraint) pair can appear more than once. The resolver removes
every duplicate while preserving all degrees. Each repair exchanges the
constraint endpoints of a duplicated edge i and a partner edge j:

    (u_i, c_i), (u_j, c_j)  ->  (u_i, c_j), (u_j, c_i)

Every stub keeps its vertex, so degrees never change. A switch is committed
only if neither new pair already exists. Exchanging the variable endpoints
instead would produce the same two edges, so only the constraint side is
ever rewritten.

Repair runs as an explicit state machine:

    PAIRED -> DETECTING_CONFLICTS -> CONFLICT_FOUND -> ATTEMPTING_SWAP
        -> COMMITTED | RETRYING | FALLBACK_RESHUFFLE -> DETECTING_CONFLICTS
        -> ... -> RESOLVED
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import StrEnum

import numpy as np

from bigs.graph.shuffle import sample_window, shuffle_window
from bigs.graph.types import RandomSource

log = logging.getLogger(__name__)

# Random partner draws per conflicting edge before falling back.
MAX_SWAP_RETRIES = 64

# Positions reshuffled together when no switch partner exists.
FALLBACK_WINDOW_SIZE = 8

# Draws spent looking for a non-conflicting partner within one attempt.
MAX_PARTNER_DRAWS = 32

# State-machine transitions allowed per edge before declaring a defect.
STEP_BUDGET_PER_EDGE = 10_000


class GraphGenerationError(Exception):
    """Raised when sampling fails to produce a valid graph.

    Never expected at runtime: it signals a broken retry/fallback bound or
    a broken output invariant.
    """


class ResolutionState(StrEnum):
    """States of the conflict repair machine."""

    PAIRED = "paired"
    DETECTING_CONFLICTS = "detecting_conflicts"
    CONFLICT_FOUND = "conflict_found"
    ATTEMPTING_SWAP = "attempting_swap"
    COMMITTED = "committed"
    RETRYING = "retrying"
    FALLBACK_RESHUFFLE = "fallback_reshuffle"
    RESOLVED = "resolved"


@dataclass
class ResolutionStats:
    """Counters collected over one resolution run."""

    conflicts_found: int = 0  # duplicates detected, including ones a window reshuffle created
    swaps_committed: int = 0
    retries: int = 0
    fallbacks: int = 0
    window_reshuffles: int = 0
    steps: int = 0


def pair_keys(variables: np.ndarray, constraints: np.ndarray, m: int) -> np.ndarray:
    """Encode positionally paired stubs as int64 keys variable * m + constraint."""
    return variables.astype(np.int64) * m + constraints


class PairCounter:
    """Multiset of pair keys supporting cheap point lookups and updates.

    The initial pairing is held as sorted unique keys with their counts.
    Later changes go into a sparse delta map, since the number of repairs
    is tiny compared to the number of edges.
    """

    def __init__(self, keys: np.ndarray) -> None:
        self._keys, self._counts = np.unique(keys, return_counts=True)
        self._delta: dict[int, int] = {}

    def count(self, key: int) -> int:
        idx = int(np.searchsorted(self._keys, key))
        base = 0
        if idx < len(self._keys) and self._keys[idx] == key:
            base = int(self._counts[idx])
        return base + self._delta.get(key, 0)

    def add(self, key: int) -> None:
        self._delta[key] = self._delta.get(key, 0) + 1

    def remove(self, key: int) -> None:
        self._delta[key] = self._delta.get(key, 0) - 1


class ConflictResolver:
    """Turns a positional stub pairing into a duplicate-free edge list.

    Mutates the constraint buffer in place; the variable buffer is only read.

    Args:
        variables: Shuffled variable stubs.
        constraints: Shuffled constraint stubs, same length.
        m: Number of constraints (key stride).
        rng: Random source for partner draws and fallback reshuffles.
        max_swap_retries: Failed switch attempts tolerated per conflict.
        fallback_window_size: Positions reshuffled by the fallback repair.
        max_steps: Transition budget; defaults to STEP_BUDGET_PER_EDGE per edge.
    """

    def __init__(
        self,
        variables: np.ndarray,
        constraints: np.ndarray,
        m: int,
        rng: RandomSource,
        max_swap_retries: int = MAX_SWAP_RETRIES,
        fallback_window_size: int = FALLBACK_WINDOW_SIZE,
        max_steps: int | None = None,
    ) -> None:
        if len(variables) != len(constraints):
            raise ValueError(
                f"stub buffers differ in length: "
                f"{len(variables)} variables vs {len(constraints)} constraints"
            )
        self.variables = variables
        self.constraints = constraints
        self.m = m
        self.rng = rng
        self.max_swap_retries = max_swap_retries
        self.fallback_window_size = max(2, fallback_window_size)
        self.max_steps = (
            max_steps
            if max_steps is not None
            else STEP_BUDGET_PER_EDGE * max(len(variables), 1)
        )

        self.state = ResolutionState.PAIRED
        self.stats = ResolutionStats()
        self.keys = np.empty(0, dtype=np.int64)
        self.counter: PairCounter | None = None
        self.queue: deque[int] = deque()
        self.pending: set[int] = set()
        self._current = -1
        self._attempts = 0

        self._handlers = {
            ResolutionState.PAIRED: self._on_paired,
            ResolutionState.DETECTING_CONFLICTS: self._on_detecting,
            ResolutionState.CONFLICT_FOUND: self._on_conflict_found,
            ResolutionState.ATTEMPTING_SWAP: self._on_attempting_swap,
            ResolutionState.COMMITTED: self._on_committed,
            ResolutionState.RETRYING: self._on_retrying,
            ResolutionState.FALLBACK_RESHUFFLE: self._on_fallback,
        }

    @property
    def num_edges(self) -> int:
        return len(self.variables)

    def run(self) -> ResolutionStats:
        """Drive the state machine until no duplicate pair remains.

        Raises:
            GraphGenerationError: If the transition budget is exhausted.
        """
        while self.state is not ResolutionState.RESOLVED:
            self.stats.steps += 1
            if self.stats.steps > self.max_steps:
                raise GraphGenerationError(
                    f"Conflict resolution exceeded {self.max_steps} steps "
                    f"with {len(self.queue)} conflicts queued ({self.stats})"
                )
            self.state = self._handlers[self.state]()

        log.debug(
            "Resolved %d edges: %d conflicts, %d swaps, %d retries, "
            "%d fallbacks (%d window reshuffles), %d steps",
            self.num_edges,
            self.stats.conflicts_found,
            self.stats.swaps_committed,
            self.stats.retries,
            self.stats.fallbacks,
            self.stats.window_reshuffles,
            self.stats.steps,
        )
        return self.stats

    # -- state handlers -------------------------------------------------

    def _on_paired(self) -> ResolutionState:
        """Build the pair multiset and queue every repeated occurrence."""
        self.keys = pair_keys(self.variables, self.constraints, self.m)
        self.counter = PairCounter(self.keys)

        # np.unique with return_index reports the first occurrence of each key
        _, first = np.unique(self.keys, return_index=True)
        duplicate = np.ones(self.num_edges, dtype=bool)
        duplicate[first] = False
        positions = np.flatnonzero(duplicate).tolist()

        self.queue.extend(positions)
        self.pending.update(positions)
        self.stats.conflicts_found += len(positions)
        return ResolutionState.DETECTING_CONFLICTS

    def _on_detecting(self) -> ResolutionState:
        while self.queue:
            i = self.queue.popleft()
            if self.counter.count(int(self.keys[i])) > 1:
                self._current = i
                return ResolutionState.CONFLICT_FOUND
            # an earlier repair already removed the other copy
            self.pending.discard(i)
        return ResolutionState.RESOLVED

    def _on_conflict_found(self) -> ResolutionState:
        self._attempts = 0
        return ResolutionState.ATTEMPTING_SWAP

    def _on_attempting_swap(self) -> ResolutionState:
        j = self._draw_partner()
        if j is not None and self._try_switch(self._current, j):
            return ResolutionState.COMMITTED
        return ResolutionState.RETRYING

    def _on_committed(self) -> ResolutionState:
        self.pending.discard(self._current)
        self.stats.swaps_committed += 1
        return ResolutionState.DETECTING_CONFLICTS

    def _on_retrying(self) -> ResolutionState:
        self._attempts += 1
        self.stats.retries += 1
        if self._attempts >= self.max_swap_retries:
            return ResolutionState.FALLBACK_RESHUFFLE
        return ResolutionState.ATTEMPTING_SWAP

    def _on_fallback(self) -> ResolutionState:
        """Repair a conflict that random partner draws could not fix.

        First looks for any valid switch partner over the whole edge list.
        Only when none exists is a random window around the conflicting
        position reshuffled and re-checked.
        """
        i = self._current
        self.stats.fallbacks += 1

        j = self._scan_for_partner(i)
        if j is not None and self._try_switch(i, j):
            log.debug("Fallback scan found partner %d for position %d", j, i)
            return ResolutionState.COMMITTED

        log.warning(
            "No switch partner for position %d after %d attempts; "
            "reshuffling a window of %d positions",
            i,
            self._attempts,
            self.fallback_window_size,
        )
        self.reshuffle_window(i)
        return ResolutionState.DETECTING_CONFLICTS

    # -- repair primitives ----------------------------------------------

    def _draw_partner(self) -> int | None:
        """Uniform position outside the conflict set, or None if draws run out."""
        for _ in range(MAX_PARTNER_DRAWS):
            j = int(self.rng.integers(0, self.num_edges))
            if j not in self.pending:
                return j
        return None

    def _try_switch(self, i: int, j: int) -> bool:
        """Exchange constraint endpoints of i and j if no duplicate results."""
        ui, ci = int(self.variables[i]), int(self.constraints[i])
        uj, cj = int(self.variables[j]), int(self.constraints[j])
        if ui == uj or ci == cj:
            return False

        new_i = ui * self.m + cj
        new_j = uj * self.m + ci
        if self.counter.count(new_i) or self.counter.count(new_j):
            return False

        self.counter.remove(int(self.keys[i]))
        self.counter.remove(int(self.keys[j]))
        self.counter.add(new_i)
        self.counter.add(new_j)
        self.constraints[i], self.constraints[j] = cj, ci
        self.keys[i], self.keys[j] = new_i, new_j
        return True

    def _scan_for_partner(self, i: int) -> int | None:
        """Pick uniformly among every position that forms a valid switch with i."""
        ui, ci = int(self.variables[i]), int(self.constraints[i])
        keys_if_i = ui * self.m + self.constraints.astype(np.int64)
        keys_if_j = self.variables.astype(np.int64) * self.m + ci

        valid = (self.variables != ui) & (self.constraints != ci)
        valid &= ~np.isin(keys_if_i, self.keys)
        valid &= ~np.isin(keys_if_j, self.keys)

        candidates = np.flatnonzero(valid)
        if len(candidates) == 0:
            return None
        return int(candidates[int(self.rng.integers(0, len(candidates)))])

    def reshuffle_window(self, i: int) -> np.ndarray:
        """Shuffle constraint endpoints over a random window containing i.

        Pairs in the window are removed from the multiset, reshuffled, added
        back, and every window position left duplicated is queued again.

        Returns:
            The positions that were reshuffled.
        """
        self.stats.window_reshuffles += 1
        positions = sample_window(
            self.fallback_window_size, i, self.num_edges, self.rng
        )

        for p in positions.tolist():
            self.counter.remove(int(self.keys[p]))
            self.pending.discard(p)

        shuffle_window(self.constraints, positions, self.rng)
        new_keys = pair_keys(
            self.variables[positions], self.constraints[positions], self.m
        )
        self.keys[positions] = new_keys
        for key in new_keys.tolist():
            self.counter.add(key)

        for p, key in zip(positions.tolist(), new_keys.tolist()):
            if self.counter.count(key) > 1 and p not in self.pending:
                self.pending.add(p)
                self.queue.append(p)
                self.stats.conflicts_found += 1
        return positions


def resolve_conflicts(
    variables: np.ndarray,
    constraints: np.ndarray,
    m: int,
    rng: RandomSource,
    max_swap_retries: int = MAX_SWAP_RETRIES,
    fallback_window_size: int = FALLBACK_WINDOW_SIZE,
) -> ResolutionStats:
    """Remove every duplicate pair from a positional pairing, in place.

    Args:
        variables: Shuffled variable stubs (read only).
        constraints: Shuffled constraint stubs (rewritten in place).
        m: Number of constraints.
        rng: Random source.
        max_swap_retries: Failed switch attempts tolerated per conflict.
        fallback_window_size: Positions reshuffled by the fallback repair.

    Returns:
        ResolutionStats for the run.
    """
    resolver = ConflictResolver(
        variables,
        constraints,
        m,
        rng,
        max_swap_retries=max_swap_retries,
        fallback_window_size=fallback_window_size,
    )
    return resolver.run()
