"""JSON serialization and deserialization for sampler configs."""

import json
from dataclasses import asdict
from typing import Any

from dacite import from_dict, Config as DaciteConfig

from bigs.config.sampler import SamplerConfig


def config_to_json(config: SamplerConfig) -> str:
    """Serialize a SamplerConfig to a JSON string.

    Uses sorted keys and 2-space indent for human readability and diffability.
    """
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> SamplerConfig:
    """Deserialize a JSON string to a SamplerConfig.

    Validation in SamplerConfig.__post_init__ runs as part of construction,
    so a file with unbalanced parameters raises the same errors as direct
    construction.
    """
    return config_from_dict(json.loads(json_str))


def config_to_dict(config: SamplerConfig) -> dict[str, Any]:
    """Convert a SamplerConfig to a plain dictionary."""
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> SamplerConfig:
    """Reconstruct a SamplerConfig from a plain dictionary.

    dacite runs with strict=True to reject unknown keys (catches schema drift).
    """
    return from_dict(
        data_class=SamplerConfig,
        data=d,
        config=DaciteConfig(
            check_types=True,
            strict=True,
        ),
    )
