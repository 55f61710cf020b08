"""Sampler configuration dataclass -- frozen and slotted for immutability."""

from dataclasses import dataclass

from bigs.config.errors import (
    DegreeExceedsPartnerCountError,
    InvalidEdgeBalanceError,
    ZeroDegreeOrCountError,
)


@dataclass(frozen=True, slots=True)
class SamplerConfig:
    """Regular bipartite graph parameters.

    All fields are frozen and typed. Validation runs in __post_init__ so an
    invalid configuration can never be observed.
    """

    n: int  # number of variables
    m: int  # number of constraints
    v: int  # variable degree
    c: int  # constraint degree

    def __post_init__(self) -> None:
        """Reject inconsistent parameters before any buffer is allocated."""
        for name in ("n", "m", "v", "c"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(
                    f"{name} must be an int, got {type(value).__name__}"
                )

        n, m, v, c = self.n, self.m, self.v, self.c

        if min(n, m, v, c) <= 0:
            raise ZeroDegreeOrCountError(
                f"all parameters must be positive, got "
                f"n={n}, m={m}, v={v}, c={c}",
                n, m, v, c,
            )
        if n * v != m * c:
            raise InvalidEdgeBalanceError(
                f"n * v ({n * v}) must equal m * c ({m * c})",
                n, m, v, c,
            )
        # with n * v == m * c, v > m and c > n imply each other
        if v > m or c > n:
            raise DegreeExceedsPartnerCountError(
                f"variable degree v ({v}) exceeds number of constraints m ({m}) "
                f"or constraint degree c ({c}) exceeds number of variables n ({n})",
                n, m, v, c,
            )

    @property
    def number_of_edges(self) -> int:
        return self.n * self.v
