"""In-place uniform permutation of stub buffers.

Uses the Fisher-Yates shuffle: walk from the last index down to the first,
swapping each position with a uniformly drawn earlier-or-equal position.
numpy.random.Generator.shuffle implements exactly this loop in C, which is
what keeps millions of stubs within the time budget.
"""

import numpy as np

from bigs.graph.types import RandomSource


def shuffle_stubs(buffer: np.ndarray, rng: RandomSource) -> None:
    """Permute a stub buffer in place with draws from rng."""
    rng.shuffle(buffer)


def shuffle_window(
    buffer: np.ndarray, positions: np.ndarray, rng: RandomSource
) -> None:
    """Permute only the entries of buffer at the given positions.

    The values at positions are gathered, shuffled, and scattered back to
    the same positions, so the multiset of values in buffer is unchanged.
    """
    window = buffer[positions]
    rng.shuffle(window)
    buffer[positions] = window


def sample_window(
    size: int, anchor: int, population: int, rng: RandomSource
) -> np.ndarray:
    """Pick up to size distinct positions out of [0, population), anchor included.

    Args:
        size: Desired window size (clipped to the population).
        anchor: Position that must be part of the window.
        population: Number of positions to choose from.
        rng: Random source.

    Returns:
        int64 array of distinct positions with anchor first.
    """
    size = min(size, population)
    chosen = {anchor}
    while len(chosen) < size:
        chosen.add(int(rng.integers(0, population)))
    chosen.discard(anchor)
    return np.array([anchor, *sorted(chosen)], dtype=np.int64)
