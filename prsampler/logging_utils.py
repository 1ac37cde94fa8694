from __future__ import annotations

import logging
import reprlib
import time
from functools import wraps
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar, cast

import networkx as nx
import numpy as np

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 160
_repr.maxstring = 60
_repr.maxlist = 10
_repr.maxtuple = 10
_repr.maxset = 10

_BRACKETS = {tuple: ("(", ")"), set: ("{", "}"), frozenset: ("frozenset({", "})")}


def _summarize_array(value: np.ndarray, max_items: int) -> str:
    parts = [f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"]
    if value.size == 0:
        return parts[0]
    if value.size <= max_items:
        parts.append(f"values={_repr.repr(value.tolist())}")
    elif np.issubdtype(value.dtype, np.number):
        parts.append(f"min={float(value.min()):.6g}")
        parts.append(f"max={float(value.max()):.6g}")
    return ", ".join(parts)


def _safe_repr(value: Any, *, max_items: int = 5, max_length: int = 400) -> str:
    if isinstance(value, np.ndarray):
        return _summarize_array(value, max_items)

    if isinstance(value, np.random.Generator):
        return f"Generator({type(value.bit_generator).__name__})"

    if isinstance(value, nx.Graph):
        kind = "DiGraph" if value.is_directed() else "Graph"
        return f"{kind}(nodes={value.number_of_nodes()}, edges={value.number_of_edges()})"

    if isinstance(value, dict):
        items = []
        for idx, (key, val) in enumerate(value.items()):
            if idx >= max_items:
                items.append("...")
                break
            items.append(f"{_safe_repr(key)}: {_safe_repr(val)}")
        return "{" + ", ".join(items) + "}"

    if isinstance(value, (list, tuple, set, frozenset)):
        open_br, close_br = _BRACKETS.get(type(value), ("[", "]"))
        items = []
        for idx, item in enumerate(value):
            if idx >= max_items:
                items.append(f"... ({len(value)} items)")
                break
            items.append(_safe_repr(item))
        return f"{open_br}{', '.join(items)}{close_br}"

    rendered = _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_call(label: str, args: Sequence[Any], kwargs: Mapping[str, Any]) -> str:
    rendered = [_safe_repr(arg) for arg in args]
    rendered.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return f"{label}({', '.join(rendered)})"


def debug_log_call(logger: logging.Logger, *, name: Optional[str] = None) -> Callable[[F], F]:
    """Trace a sampling entry point at DEBUG: the call, its wall time and a summary of the sample.

    Nothing is formatted unless ``logger`` is enabled for DEBUG.
    """

    def decorator(func: F) -> F:
        label = name or func.__qualname__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            call = _format_call(label, args, kwargs)
            logger.debug("Call %s", call)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("%s failed after %.3fs", call, time.perf_counter() - started)
                raise
            logger.debug("%s returned %s in %.3fs", label, _safe_repr(result), time.perf_counter() - started)
            return result

        return cast(F, wrapper)

    return decorator


class ProgressLogger:
    """Emit a DEBUG record every ``interval`` rounds of a long-running loop."""

    def __init__(self, logger: logging.Logger, label: str, interval: Optional[int] = None) -> None:
        if interval is None:
            from .config import get_sampler_config

            interval = get_sampler_config().progress_log_interval
        self.logger = logger
        self.label = label
        self.interval = max(int(interval), 1)
        self.rounds = 0

    def tick(self, **stats: Any) -> None:
        self.rounds += 1
        if self.rounds % self.interval == 0 and self.logger.isEnabledFor(logging.DEBUG):
            details = ", ".join(f"{key}={_safe_repr(value)}" for key, value in stats.items())
            self.logger.debug("%s: %d rounds (%s)", self.label, self.rounds, details or "no stats")


__all__ = ["ProgressLogger", "debug_log_call"]
