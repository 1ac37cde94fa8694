import logging
import math
import operator
import warnings
from typing import Any

logger = logging.getLogger(__name__)


class ModelDomainError(ValueError):
    """Raised when model parameters fall outside their admissible domain."""


class SlowMixingWarning(UserWarning):
    """Issued when parameters leave the regime where fast termination is proven."""


def ensure_finite(name: str, value: Any) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ModelDomainError(f'{name} must be a real number (got {value!r})') from None
    if not math.isfinite(value):
        raise ModelDomainError(f'{name} must be finite (got {value})')
    return value


def ensure_positive(name: str, value: Any) -> float:
    value = ensure_finite(name, value)
    if value <= 0:
        raise ModelDomainError(f'{name} must be positive (got {value})')
    return value


def ensure_non_negative(name: str, value: Any) -> float:
    value = ensure_finite(name, value)
    if value < 0:
        raise ModelDomainError(f'{name} must be non-negative (got {value})')
    return value


def ensure_unit_interval(name: str, value: Any) -> float:
    value = ensure_finite(name, value)
    if not 0.0 <= value <= 1.0:
        raise ModelDomainError(f'{name} must lie in [0, 1] (got {value})')
    return value


def ensure_positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ModelDomainError(f'{name} must be an integer (got {value!r})')
    try:
        value = operator.index(value)
    except TypeError:
        raise ModelDomainError(f'{name} must be an integer (got {value!r})') from None
    if value < 1:
        raise ModelDomainError(f'{name} must be a positive integer (got {value})')
    return value


def warn_slow_mixing(message: str) -> None:
    from .config import get_sampler_config

    if not get_sampler_config().warn_slow_mixing:
        return
    logger.warning(message)
    warnings.warn(message, SlowMixingWarning, stacklevel=3)
