"""Burkhard-Keller tree over an arbitrary integer metric.

Every node keeps its children keyed by their exact distance to it, so all
elements below the child at key ``c`` lie at distance ``c`` from the node.
A range query for ``k`` around ``q`` that measured ``d = dist(node, q)`` can
therefore skip every child whose key falls outside ``[d - k, d + k]``
without measuring anything inside it: by the triangle inequality such an
element is more than ``k`` away from ``q``.

The tree only grows. Its shape is fixed by insertion order and by how well
the metric separates elements; there is no deletion and no rebalancing.
Instances are not thread-safe: guard ``insert`` with an exclusive lock and
queries with a shared lock if the tree is used from several threads.
"""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, List, Tuple, TypeVar

from bktreex.core.metrics import Metric, get_metric
from bktreex.core.node import BKNode, dismantle, iter_preorder
from bktreex.core.traverse import Frontier, select_traversal_strategy
from bktreex.diagnostics import log_operation
from bktreex.errors import InvalidArgumentError, require_radius
from bktreex.logging import get_logger

T = TypeVar("T")

LOGGER = get_logger("core.tree")


@dataclass(frozen=True)
class TreeStats:
    size: int
    depth: int
    max_fanout: int
    leaves: int


def _resolve_distance(distance: Callable[[Any, Any], int] | Metric | str) -> Callable[[Any, Any], int]:
    if isinstance(distance, str):
        return get_metric(distance)
    if not callable(distance):
        raise TypeError(f"Distance must be callable or a metric name, got {distance!r}.")
    return distance


class BKTree(Generic[T]):
    """Metric-space index answering "everything within ``k`` of ``q``".

    Parameters
    ----------
    distance:
        Integer metric over the element type, a :class:`Metric`, or the name
        of a registered metric. It is bound for the lifetime of the tree:
        every stored ``distance_to_parent`` was computed with it, so it
        cannot be replaced afterwards.
    items:
        Optional elements inserted in order.

    The distance must satisfy the metric axioms (see
    :mod:`bktreex.core.metrics`). This is not checked; a non-metric yields
    wrong query results rather than errors.
    """

    def __init__(
        self,
        distance: Callable[[T, T], int] | Metric | str,
        items: Iterable[T] = (),
    ) -> None:
        self._distance = _resolve_distance(distance)
        self._root: BKNode | None = None
        self._size = 0
        self._nodes_shared = False
        for item in items:
            self.insert(item)

    @classmethod
    def from_items(
        cls,
        items: Iterable[T],
        distance: Callable[[T, T], int] | Metric | str,
    ) -> "BKTree[T]":
        tree = cls(distance)
        tree.insert_many(items)
        return tree

    def __del__(self) -> None:
        root = getattr(self, "_root", None)
        self._root = None
        # Nodes handed out through ``root`` or ``iter_nodes`` belong to the
        # caller from then on and must keep their links.
        if root is not None and not getattr(self, "_nodes_shared", True):
            dismantle(root)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self._size})"

    @property
    def distance(self) -> Callable[[T, T], int]:
        return self._distance

    @property
    def root(self) -> BKNode | None:
        """Root node; its subtree is left intact when the tree is collected."""

        self._nodes_shared = True
        return self._root

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def insert(self, item: T) -> None:
        """Insert ``item``; a no-op if an element at distance 0 is already stored."""

        if self._root is None:
            self._root = BKNode(item)
            self._size = 1
            return

        node = self._root
        while True:
            d = self._distance(node.item, item)
            if d == 0:
                return
            child = node.children.get(d)
            if child is None:
                node.attach(item, d)
                self._size += 1
                return
            node = child

    def insert_many(self, items: Iterable[T]) -> int:
        """Insert ``items`` in order and return how many new nodes were created."""

        with log_operation(LOGGER, "bulk_insert") as op_log:
            before = self._size
            offered = 0
            for item in items:
                self.insert(item)
                offered += 1
            added = self._size - before
            op_log.add_metadata(offered=offered, added=added, size=self._size)
        return added

    # ------------------------------------------------------------------
    # Size bookkeeping
    # ------------------------------------------------------------------

    def size(self) -> int:
        return self._size

    def empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def count(self, item: T) -> int:
        """Membership test: 1 if an element at distance 0 is stored, else 0."""

        return self.get_within_distance(item, 0)

    def __contains__(self, item: object) -> bool:
        return self.count(item) > 0  # type: ignore[arg-type]

    def _walk(self, center: T, k: int, frontier: Frontier) -> Iterator[Tuple[int, T]]:
        if self._root is None:
            return
        frontier.push(self._root)
        distance = self._distance
        while len(frontier):
            node = frontier.pop()
            d = distance(node.item, center)
            if d <= k:
                yield d, node.item
            low, high = d - k, d + k
            for key, child in node.children.items():
                if low <= key <= high:
                    frontier.push(child)

    def get_within_distance(
        self,
        center: T,
        k: int,
        collector: Any = None,
        *,
        strategy: str | None = None,
    ) -> int:
        """Count the stored elements at distance ``<= k`` from ``center``.

        When ``collector`` is given, each match is appended to it. The order
        of matches is unspecified. ``k`` must be a non-negative integer;
        anything else raises :class:`InvalidArgumentError`.
        """

        radius = require_radius(k)
        frontier = select_traversal_strategy(strategy)()
        found = 0
        for _, item in self._walk(center, radius, frontier):
            if collector is not None:
                collector.append(item)
            found += 1
        return found

    def find_within(
        self,
        center: T,
        k: int,
        *,
        strategy: str | None = None,
    ) -> List[Tuple[int, T]]:
        """Return ``(distance, item)`` for every match, closest first."""

        radius = require_radius(k)
        frontier = select_traversal_strategy(strategy)()
        matches = list(self._walk(center, radius, frontier))
        matches.sort(key=lambda pair: pair[0])
        return matches

    def nearest(
        self,
        query: T,
        n: int = 1,
        *,
        max_distance: int | None = None,
    ) -> List[Tuple[int, T]]:
        """Best-first search for the ``n`` elements closest to ``query``.

        Returns up to ``n`` ``(distance, item)`` pairs sorted by distance.
        Ties at the cut-off distance are resolved arbitrarily.
        """

        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InvalidArgumentError(f"n must be a positive integer, got {n!r}.")
        limit = math.inf if max_distance is None else require_radius(max_distance)
        if self._root is None:
            return []

        distance = self._distance
        best: List[Tuple[int, int, T]] = []  # max-heap of (-distance, -visit, item)
        candidates: List[Tuple[int, int, BKNode]] = [(0, 0, self._root)]
        counter = 1
        visit = 0

        def radius() -> float:
            if len(best) < n:
                return limit
            return -best[0][0]

        while candidates:
            lower, _, node = heapq.heappop(candidates)
            if lower > radius():
                break
            d = distance(node.item, query)
            visit += 1
            if d <= limit:
                if len(best) < n:
                    heapq.heappush(best, (-d, -visit, node.item))
                elif d < -best[0][0]:
                    heapq.heapreplace(best, (-d, -visit, node.item))
            for key, child in node.children.items():
                bound = max(lower, abs(d - key))
                if bound <= radius():
                    heapq.heappush(candidates, (bound, counter, child))
                    counter += 1

        ordered = sorted(best, key=lambda entry: (-entry[0], -entry[1]))
        return [(-neg_dist, item) for neg_dist, _, item in ordered]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def iter_nodes(self) -> Iterator[BKNode]:
        self._nodes_shared = True
        yield from iter_preorder(self._root)

    def __iter__(self) -> Iterator[T]:
        for node in iter_preorder(self._root):
            yield node.item

    def depth(self) -> int:
        if self._root is None:
            return 0
        deepest = 0
        stack: List[Tuple[BKNode, int]] = [(self._root, 1)]
        while stack:
            node, level = stack.pop()
            if level > deepest:
                deepest = level
            stack.extend((child, level + 1) for child in node.children.values())
        return deepest

    def stats(self) -> TreeStats:
        max_fanout = 0
        leaves = 0
        for node in iter_preorder(self._root):
            fanout = len(node.children)
            if fanout > max_fanout:
                max_fanout = fanout
            if fanout == 0:
                leaves += 1
        return TreeStats(
            size=self._size,
            depth=self.depth(),
            max_fanout=max_fanout,
            leaves=leaves,
        )


MetricSpaceIndex = BKTree


__all__ = ["BKTree", "MetricSpaceIndex", "TreeStats"]
