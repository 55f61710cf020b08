"""Mutable settings stage for building a Sampler."""

from dataclasses import dataclass

from bigs.config.sampler import SamplerConfig
from bigs.graph.sampler import Sampler


@dataclass
class SamplerBuilder:
    """Collects sampler parameters, then validates them all at once in build().

    Every parameter defaults to 0, so forgetting one is reported as a
    ZeroDegreeOrCountError rather than silently producing an empty graph.
    """

    number_of_variables: int = 0
    number_of_constraints: int = 0
    variable_degree: int = 0
    constraint_degree: int = 0

    def build(self) -> Sampler:
        """Validate the settings and return an immutable Sampler.

        Raises:
            InvalidParametersError: One of its three subclasses, depending on
                which check fails first.
        """
        config = SamplerConfig(
            n=self.number_of_variables,
            m=self.number_of_constraints,
            v=self.variable_degree,
            c=self.constraint_degree,
        )
        return Sampler(config)
