import math

import numpy as np
import pytest

from prsampler import (
    HardCorePointProcess,
    ModelDomainError,
    SamplerConfig,
    StraussPointProcess,
    get_rng,
    get_sampler_config,
    set_sampler_config,
)
from prsampler.validate import ensure_positive_int, ensure_unit_interval


@pytest.mark.parametrize(
    "kwargs",
    [
        {"beta": 0.0, "gamma": 0.5, "r": 0.1},
        {"beta": 1.0, "gamma": 1.5, "r": 0.1},
        {"beta": 1.0, "gamma": -0.1, "r": 0.1},
        {"beta": 1.0, "gamma": 0.5, "r": 0.0},
        {"beta": math.inf, "gamma": 0.5, "r": 0.1},
        {"beta": "many", "gamma": 0.5, "r": 0.1},
    ],
)
def test_strauss_parameters_are_validated(kwargs):
    with pytest.raises(ModelDomainError):
        StraussPointProcess(**kwargs)


def test_model_domain_error_is_a_value_error():
    with pytest.raises(ValueError):
        HardCorePointProcess(beta=1.0, r=-1.0)


def test_helpers_normalize_values():
    assert ensure_unit_interval("p", 1) == 1.0
    assert ensure_positive_int("n", np.int64(3)) == 3
    with pytest.raises(ModelDomainError, match="integer"):
        ensure_positive_int("n", 1.0)


def test_get_rng_resolution():
    generator = np.random.default_rng(1)
    assert get_rng(generator) is generator
    assert get_rng(None) is get_rng(-1)
    assert get_rng(5).random() == np.random.default_rng(5).random()
    with pytest.raises(TypeError):
        get_rng("seed")
    with pytest.raises(TypeError):
        get_rng(True)


def test_sampler_config_round_trip():
    original = get_sampler_config()
    try:
        set_sampler_config(SamplerConfig(dcftp_initial_steps=8, warn_slow_mixing=False))
        config = get_sampler_config()
        assert config.dcftp_initial_steps == 8
        assert config.warn_slow_mixing is False

        config.dcftp_initial_steps = 99
        assert get_sampler_config().dcftp_initial_steps == 8
    finally:
        set_sampler_config(original)
