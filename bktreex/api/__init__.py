"""Public ergonomic façade for bktreex."""

from .index import MetricIndex
from .runtime import Runtime

__all__ = [
    "MetricIndex",
    "Runtime",
]
