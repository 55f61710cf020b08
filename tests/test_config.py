"""Tests for the sampler configuration system."""

import json

import pytest
from dacite import UnexpectedDataError
from dataclasses import FrozenInstanceError

from bigs.config import (
    DegreeExceedsPartnerCountError,
    InvalidEdgeBalanceError,
    InvalidParametersError,
    SamplerConfig,
    ZeroDegreeOrCountError,
    config_from_json,
    config_hash,
    config_to_json,
)


class TestConfigValidation:
    """SamplerConfig rejects inconsistent parameters at construction."""

    def test_valid_config(self):
        config = SamplerConfig(n=10, m=6, v=3, c=5)
        assert config.number_of_edges == 30

    def test_edge_balance_rejected(self):
        with pytest.raises(InvalidEdgeBalanceError, match="must equal"):
            SamplerConfig(n=3, m=2, v=2, c=2)

    def test_degree_exceeds_partner_count(self):
        with pytest.raises(DegreeExceedsPartnerCountError, match="exceeds"):
            SamplerConfig(n=2, m=2, v=3, c=3)

    def test_degree_exceeds_partner_count_both_sides(self):
        # 1 * 6 == 2 * 3: v=6 > m=2 and c=3 > n=1
        with pytest.raises(DegreeExceedsPartnerCountError):
            SamplerConfig(n=1, m=2, v=6, c=3)

    @pytest.mark.parametrize(
        "n, m, v, c",
        [(0, 6, 3, 5), (10, 0, 3, 5), (10, 6, 0, 5), (10, 6, 3, 0), (0, 0, 0, 0)],
    )
    def test_zero_rejected(self, n, m, v, c):
        with pytest.raises(ZeroDegreeOrCountError):
            SamplerConfig(n=n, m=m, v=v, c=c)

    def test_negative_rejected_as_zero_error(self):
        with pytest.raises(ZeroDegreeOrCountError, match="positive"):
            SamplerConfig(n=-2, m=-2, v=1, c=1)

    def test_non_int_rejected(self):
        with pytest.raises(TypeError, match="must be an int"):
            SamplerConfig(n=2.0, m=2, v=1, c=1)  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            SamplerConfig(n=True, m=1, v=1, c=1)  # type: ignore[arg-type]

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            SamplerConfig(n=3, m=2, v=2, c=2)

    def test_error_carries_parameters(self):
        with pytest.raises(InvalidParametersError) as excinfo:
            SamplerConfig(n=10, m=10, v=3, c=2)
        err = excinfo.value
        assert (err.n, err.m, err.v, err.c) == (10, 10, 3, 2)

    def test_zero_checked_before_balance(self):
        # 0 * 3 == 0 * 5 balances, but zero counts are still rejected
        with pytest.raises(ZeroDegreeOrCountError):
            SamplerConfig(n=0, m=0, v=3, c=5)


class TestConfigImmutability:
    """Frozen dataclass prevents mutation."""

    def test_config_frozen(self):
        config = SamplerConfig(n=10, m=6, v=3, c=5)
        with pytest.raises(FrozenInstanceError):
            config.n = 20  # type: ignore[misc]

    def test_config_equality(self):
        assert SamplerConfig(4, 4, 2, 2) == SamplerConfig(n=4, m=4, v=2, c=2)


class TestConfigRoundTrip:
    """JSON serialization round-trip preserves identity."""

    def test_round_trip(self):
        config = SamplerConfig(n=10, m=6, v=3, c=5)
        restored = config_from_json(config_to_json(config))
        assert restored == config
        assert config_hash(restored) == config_hash(config)

    def test_json_sorted_keys(self):
        data = json.loads(config_to_json(SamplerConfig(n=10, m=6, v=3, c=5)))
        assert list(data) == ["c", "m", "n", "v"]

    def test_unknown_key_rejected(self):
        payload = json.dumps({"n": 10, "m": 6, "v": 3, "c": 5, "extra": 1})
        with pytest.raises(UnexpectedDataError):
            config_from_json(payload)

    def test_invalid_values_rejected_on_load(self):
        payload = json.dumps({"n": 3, "m": 2, "v": 2, "c": 2})
        with pytest.raises(InvalidEdgeBalanceError):
            config_from_json(payload)


class TestConfigHash:
    """Deterministic hashing of configs."""

    def test_hash_format(self):
        h = config_hash(SamplerConfig(n=10, m=6, v=3, c=5))
        assert len(h) == 16
        int(h, 16)

    def test_hash_stable(self):
        a = SamplerConfig(n=10, m=6, v=3, c=5)
        b = SamplerConfig(n=10, m=6, v=3, c=5)
        assert config_hash(a) == config_hash(b)

    def test_hash_differs(self):
        a = SamplerConfig(n=10, m=6, v=3, c=5)
        b = SamplerConfig(n=10, m=10, v=3, c=3)
        assert config_hash(a) != config_hash(b)

    def test_hash_exclude_fields(self):
        a = SamplerConfig(n=10, m=6, v=3, c=5)
        b = SamplerConfig(n=20, m=12, v=3, c=5)
        assert config_hash(a, exclude_fields=["n", "m"]) == config_hash(
            b, exclude_fields=["n", "m"]
        )
