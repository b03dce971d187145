"""Core data structures for the Burkhard-Keller tree."""

from .metrics import (
    Metric,
    MetricRegistry,
    available_metrics,
    get_metric,
    register_metric,
)
from .node import ROOT_DISTANCE, BKNode, dismantle, iter_preorder
from .traverse import (
    register_traversal_strategy,
    registered_traversal_strategies,
    select_traversal_strategy,
)
from .tree import BKTree, MetricSpaceIndex, TreeStats

__all__ = [
    "ROOT_DISTANCE",
    "BKNode",
    "BKTree",
    "MetricSpaceIndex",
    "TreeStats",
    "dismantle",
    "iter_preorder",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "register_traversal_strategy",
    "registered_traversal_strategies",
    "select_traversal_strategy",
]
