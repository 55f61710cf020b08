"""Configuration error taxonomy for regular bipartite graph sampling."""


class InvalidParametersError(ValueError):
    """Raised when sampler parameters cannot describe a simple regular bipartite graph.

    Carries the four offending parameters so callers (the CLI in particular)
    can report exactly what was rejected.
    """

    def __init__(self, message: str, n: int, m: int, v: int, c: int) -> None:
        super().__init__(message)
        self.n = n
        self.m = m
        self.v = v
        self.c = c


class ZeroDegreeOrCountError(InvalidParametersError):
    """A vertex count or degree is zero (or negative)."""


class InvalidEdgeBalanceError(InvalidParametersError):
    """Variable-side stubs n * v do not match constraint-side stubs m * c."""


class DegreeExceedsPartnerCountError(InvalidParametersError):
    """A degree is larger than the number of vertices on the other side."""
