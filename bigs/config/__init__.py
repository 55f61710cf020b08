"""Sampler configuration: frozen, validated, hashable, serializable."""

from bigs.config.errors import (
    DegreeExceedsPartnerCountError,
    InvalidEdgeBalanceError,
    InvalidParametersError,
    ZeroDegreeOrCountError,
)
from bigs.config.hashing import config_hash
from bigs.config.sampler import SamplerConfig
from bigs.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "SamplerConfig",
    "InvalidParametersError",
    "InvalidEdgeBalanceError",
    "DegreeExceedsPartnerCountError",
    "ZeroDegreeOrCountError",
    "config_hash",
    "config_to_json",
    "config_from_json",
    "config_to_dict",
    "config_from_dict",
]
