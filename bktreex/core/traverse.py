from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Protocol, Tuple

from bktreex import config as bx_config
from bktreex.core.node import BKNode
from bktreex.errors import InvalidArgumentError
from bktreex.logging import get_logger

LOGGER = get_logger("core.traverse")


class Frontier(Protocol):
    """Work-list of nodes still to visit during a range query."""

    def push(self, node: BKNode) -> None:
        ...

    def pop(self) -> BKNode:
        ...

    def __len__(self) -> int:
        ...


class BreadthFirstFrontier:
    __slots__ = ("_queue",)

    def __init__(self) -> None:
        self._queue: Deque[BKNode] = deque()

    def push(self, node: BKNode) -> None:
        self._queue.append(node)

    def pop(self) -> BKNode:
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)


class DepthFirstFrontier:
    __slots__ = ("_stack",)

    def __init__(self) -> None:
        self._stack: List[BKNode] = []

    def push(self, node: BKNode) -> None:
        self._stack.append(node)

    def pop(self) -> BKNode:
        return self._stack.pop()

    def __len__(self) -> int:
        return len(self._stack)


@dataclass(frozen=True)
class _TraversalStrategySpec:
    name: str
    factory: Callable[[], Frontier]


_TRAVERSAL_REGISTRY: Dict[str, _TraversalStrategySpec] = {}


def register_traversal_strategy(name: str, factory: Callable[[], Frontier]) -> None:
    """Register or replace the frontier used for traversal ``name``."""

    key = name.strip().lower()
    _TRAVERSAL_REGISTRY[key] = _TraversalStrategySpec(name=key, factory=factory)
    LOGGER.debug("Registered traversal strategy: %s", key)


def registered_traversal_strategies() -> Tuple[str, ...]:
    return tuple(sorted(_TRAVERSAL_REGISTRY))


def select_traversal_strategy(name: str | None = None) -> Callable[[], Frontier]:
    """Return the frontier factory for ``name`` (runtime default when ``None``)."""

    if name is None:
        name = bx_config.runtime_config().traversal
    spec = _TRAVERSAL_REGISTRY.get(name.strip().lower())
    if spec is None:
        raise InvalidArgumentError(
            f"Unknown traversal strategy '{name}'. "
            f"Expected one of {registered_traversal_strategies()}."
        )
    return spec.factory


register_traversal_strategy("bfs", BreadthFirstFrontier)
register_traversal_strategy("dfs", DepthFirstFrontier)


__all__ = [
    "BreadthFirstFrontier",
    "DepthFirstFrontier",
    "Frontier",
    "register_traversal_strategy",
    "registered_traversal_strategies",
    "select_traversal_strategy",
]
