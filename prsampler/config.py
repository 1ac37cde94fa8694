"""Process-wide defaults for the samplers."""

from __future__ import annotations

import copy
from dataclasses import dataclass


@dataclass
class SamplerConfig:
    """Tunable defaults shared by the sampling engines.

    ``dcftp_initial_steps`` is the number of backward steps simulated before the
    first coalescence check of dominated CFTP. ``progress_log_interval`` is the
    number of outer rounds between two progress records of the rejection loops.
    """

    dcftp_initial_steps: int = 1
    warn_slow_mixing: bool = True
    progress_log_interval: int = 1000


_SAMPLER_CONFIG = SamplerConfig()


def get_sampler_config() -> SamplerConfig:
    return copy.deepcopy(_SAMPLER_CONFIG)


def set_sampler_config(config: SamplerConfig) -> None:
    global _SAMPLER_CONFIG
    _SAMPLER_CONFIG = copy.deepcopy(config)
