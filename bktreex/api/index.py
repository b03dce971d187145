from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

from bktreex.api.runtime import Runtime
from bktreex.core.metrics import get_metric
from bktreex.core.tree import BKTree
from bktreex.queries.range import range_query


@dataclass(frozen=True)
class MetricIndex:
    """Thin façade pairing a :class:`Runtime` with an optional tree."""

    runtime: Runtime = field(default_factory=Runtime)
    tree: BKTree[Any] | None = None

    def fit(self, items: Iterable[Any]) -> BKTree[Any]:
        context = self.runtime.activate()
        tree: BKTree[Any] = BKTree(get_metric(context.config.metric))
        tree.insert_many(items)
        return tree

    def insert(self, items: Iterable[Any]) -> BKTree[Any]:
        tree = self._require_tree()
        self.runtime.activate()
        tree.insert_many(items)
        return tree

    def within(self, centers: Iterable[Any], k: int) -> List[List[Any]]:
        tree = self._require_tree()
        context = self.runtime.activate()
        return range_query(tree, centers, k, strategy=context.config.traversal)

    def nearest(self, query: Any, n: int = 1) -> List[Tuple[int, Any]]:
        tree = self._require_tree()
        self.runtime.activate()
        return tree.nearest(query, n)

    def _require_tree(self) -> BKTree[Any]:
        if self.tree is None:
            raise ValueError("MetricIndex requires an existing tree; call fit() first.")
        return self.tree


__all__ = ["MetricIndex"]
