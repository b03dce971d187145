"""bktreex: Burkhard-Keller trees over arbitrary integer metrics.

Quick Start
-----------
>>> from bktreex import BKTree
>>>
>>> tree = BKTree("levenshtein", ["book", "books", "cake", "boo", "cape"])
>>> tree.get_within_distance("bool", 1)
2
>>> matches = []
>>> tree.get_within_distance("cakes", 1, matches)
1
>>> tree.nearest("bok", n=2)
[(1, 'book'), (1, 'boo')]

Custom metrics
--------------
Any callable ``(a, b) -> int`` satisfying the metric axioms works:

>>> tree = BKTree(lambda a, b: abs(a - b), range(100))
>>> tree.count(42)
1

Classes
-------
BKTree : The index (alias ``MetricSpaceIndex``).
MetricIndex : Runtime-aware façade for bulk insertion and batched queries.
Runtime : Configuration for metric, traversal order and diagnostics.
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("bktreex")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.1"

from .api import MetricIndex, Runtime
from .core import (
    BKNode,
    BKTree,
    Metric,
    MetricRegistry,
    MetricSpaceIndex,
    TreeStats,
    available_metrics,
    get_metric,
    register_metric,
)
from .errors import BKTreeError, InvalidArgumentError
from .queries import brute_force_within, range_query

__all__ = [
    "__version__",
    "BKTree",
    "MetricSpaceIndex",
    "MetricIndex",
    "Runtime",
    "BKNode",
    "TreeStats",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "range_query",
    "brute_force_within",
    "BKTreeError",
    "InvalidArgumentError",
]
