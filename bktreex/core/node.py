from __future__ import annotations

from typing import Any, Dict, Iterator, List

ROOT_DISTANCE = -1


class BKNode:
    """One stored element plus its children keyed by distance to this node.

    ``distance_to_parent`` is computed once, when the node is attached, and is
    ``ROOT_DISTANCE`` for the root. Children are owned exclusively by their
    parent; no node holds a reference back up the tree.
    """

    __slots__ = ("item", "distance_to_parent", "children")

    def __init__(self, item: Any, distance_to_parent: int = ROOT_DISTANCE) -> None:
        self.item = item
        self.distance_to_parent = distance_to_parent
        self.children: Dict[int, BKNode] = {}

    def __repr__(self) -> str:
        return (
            f"BKNode(item={self.item!r}, distance_to_parent={self.distance_to_parent}, "
            f"children={len(self.children)})"
        )

    @property
    def is_root(self) -> bool:
        return self.distance_to_parent == ROOT_DISTANCE

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def child_at(self, distance: int) -> BKNode | None:
        return self.children.get(distance)

    def attach(self, item: Any, distance: int) -> BKNode:
        """Create a child at ``distance``; the slot must be free."""

        if distance in self.children:
            raise ValueError(f"Node already has a child at distance {distance}.")
        child = BKNode(item, distance)
        self.children[distance] = child
        return child


def iter_preorder(root: BKNode | None) -> Iterator[BKNode]:
    """Yield every node below (and including) ``root`` without recursion."""

    if root is None:
        return
    stack: List[BKNode] = [root]
    while stack:
        node = stack.pop()
        yield node
        # Reverse so siblings come out in attachment order.
        stack.extend(reversed(list(node.children.values())))


def dismantle(root: BKNode | None) -> int:
    """Detach every node from its parent using an explicit work-list.

    Returns the number of nodes released. After this call no node references
    another, so reclaiming them never recurses however deep the tree was.
    """

    if root is None:
        return 0
    released = 0
    work: List[BKNode] = [root]
    while work:
        node = work.pop()
        work.extend(node.children.values())
        node.children = {}
        released += 1
    return released


__all__ = ["BKNode", "ROOT_DISTANCE", "dismantle", "iter_preorder"]
