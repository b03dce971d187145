"""Distance functions accepted by :class:`~bktreex.core.tree.BKTree`.

A distance must be a *metric* over the element type:

* ``d(a, b)`` is a non-negative integer;
* ``d(a, b) == d(b, a)``;
* ``d(a, b) == 0`` exactly when ``a`` and ``b`` are the same element;
* ``d(a, c) <= d(a, b) + d(b, c)``.

These properties are a hard precondition on the caller and are never
checked. A function violating them does not make the tree raise; it makes
queries silently miss matches (triangle inequality) or store duplicates
(identity of indiscernibles).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Sequence, Tuple

import numpy as np

from bktreex import config as bx_config

DistanceFn = Callable[[Any, Any], int]


@dataclass(frozen=True)
class Metric:
    """Named integer-valued distance function."""

    name: str
    function: DistanceFn

    def __call__(self, lhs: Any, rhs: Any) -> int:
        return self.function(lhs, rhs)


class MetricRegistry:
    """Minimal registry for runtime-selectable metrics."""

    def __init__(self) -> None:
        self._metrics: Dict[str, Metric] = {}

    def register(self, metric: Metric, *, overwrite: bool = False) -> None:
        name = metric.name.lower()
        if not overwrite and name in self._metrics:
            raise ValueError(f"Metric '{metric.name}' already registered.")
        self._metrics[name] = metric

    def get(self, name: str) -> Metric:
        key = name.lower()
        if key not in self._metrics:
            raise KeyError(f"Metric '{name}' not registered.")
        return self._metrics[key]

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._metrics.keys()))


def levenshtein(lhs: Sequence[Any], rhs: Sequence[Any]) -> int:
    """Unit-cost edit distance (insertions, deletions, substitutions)."""

    if len(lhs) < len(rhs):
        lhs, rhs = rhs, lhs
    if not rhs:
        return len(lhs)
    rhs_items = list(rhs)
    width = len(rhs_items)
    offsets = np.arange(width + 1, dtype=np.int64)
    previous = offsets.copy()
    current = np.empty_like(previous)
    for i, symbol in enumerate(lhs, start=1):
        current[0] = i
        # Elements may themselves be sequences; compare them one at a time.
        mismatch = np.fromiter(
            (item != symbol for item in rhs_items), dtype=np.int64, count=width
        )
        np.minimum(previous[1:] + 1, previous[:-1] + mismatch, out=current[1:])
        # Insertion: current[j] = min(current[i] + j - i) over i <= j.
        current = np.minimum.accumulate(current - offsets) + offsets
        previous, current = current, previous
    return int(previous[-1])


def hamming(lhs: Sequence[Any], rhs: Sequence[Any]) -> int:
    """Number of positions at which two equal-length sequences differ."""

    if isinstance(lhs, (str, bytes)) or isinstance(rhs, (str, bytes)):
        if len(lhs) != len(rhs):
            raise ValueError("Hamming distance requires sequences of equal length.")
        return sum(1 for a, b in zip(lhs, rhs) if a != b)
    lhs_arr = np.asarray(lhs)
    rhs_arr = np.asarray(rhs)
    if lhs_arr.shape != rhs_arr.shape:
        raise ValueError("Hamming distance requires sequences of equal length.")
    return int(np.count_nonzero(lhs_arr != rhs_arr))


def absolute(lhs: int, rhs: int) -> int:
    return abs(int(lhs) - int(rhs))


def _load_registry() -> MetricRegistry:
    registry = MetricRegistry()
    registry.register(Metric(name="levenshtein", function=levenshtein))
    registry.register(Metric(name="hamming", function=hamming))
    registry.register(Metric(name="absolute", function=absolute))
    return registry


_REGISTRY = _load_registry()


def get_metric(name: str | None = None) -> Metric:
    """Return a registered metric, defaulting to the runtime-selected metric."""

    if name is None:
        name = bx_config.runtime_config().metric
    return _REGISTRY.get(name)


def register_metric(name: str, function: DistanceFn, *, overwrite: bool = False) -> Metric:
    metric = Metric(name=name, function=function)
    _REGISTRY.register(metric, overwrite=overwrite)
    return metric


def available_metrics() -> Tuple[str, ...]:
    return _REGISTRY.names()


__all__ = [
    "DistanceFn",
    "Metric",
    "MetricRegistry",
    "absolute",
    "available_metrics",
    "get_metric",
    "hamming",
    "levenshtein",
    "register_metric",
]
