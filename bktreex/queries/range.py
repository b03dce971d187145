from __future__ import annotations

from typing import Any, Callable, Iterable, List, Sequence, TypeVar

from bktreex.core.tree import BKTree
from bktreex.diagnostics import log_operation
from bktreex.errors import require_radius
from bktreex.logging import get_logger

T = TypeVar("T")

LOGGER = get_logger("queries.range")


def range_query(
    tree: BKTree[T],
    centers: Iterable[T],
    k: int,
    *,
    strategy: str | None = None,
) -> List[List[T]]:
    """Collect the matches within ``k`` of each center, one list per center."""

    radius = require_radius(k)
    with log_operation(LOGGER, "range_query") as op_log:
        results: List[List[T]] = []
        for center in centers:
            matches: List[T] = []
            tree.get_within_distance(center, radius, matches, strategy=strategy)
            results.append(matches)
        op_log.add_metadata(
            queries=len(results),
            k=radius,
            matches=sum(len(matches) for matches in results),
            tree_size=tree.size(),
        )
    return results


def brute_force_within(
    items: Sequence[T],
    distance: Callable[[Any, Any], int],
    center: T,
    k: int,
) -> List[T]:
    """Linear-scan reference for ``BKTree.get_within_distance``."""

    radius = require_radius(k)
    return [item for item in items if distance(item, center) <= radius]


__all__ = ["brute_force_within", "range_query"]
