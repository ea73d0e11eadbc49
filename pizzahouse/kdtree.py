"""A two-dimensional k-d tree of pizzerias with nearest, radius and area queries."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .branches import Branch
from .geometry import Point


def _crosses(start: Point, end: Point, m: Point) -> bool:
    """Whether a ray from m along +x crosses the edge start-end."""
    if (start.y > m.y) == (end.y > m.y):
        return False
    crossing_x = (end.x - start.x) * (m.y - start.y) / (end.y - start.y) + start.x
    return m.x < crossing_x


def point_in_quadrilateral(a: Point, b: Point, c: Point, d: Point, m: Point) -> bool:
    """Ray-casting test: whether m lies inside the quadrilateral a-b-c-d."""
    edges = ((a, b), (b, c), (c, d), (d, a))
    crossings = sum(1 for start, end in edges if _crosses(start, end, m))
    return crossings % 2 == 1


def _merge_sorted(items: list[Branch], key: Callable[[Branch], float]) -> list[Branch]:
    """Merge sort; on equal keys the element from the right half goes first."""
    if len(items) <= 1:
        return list(items)
    split = (len(items) - 1) // 2 + 1
    left = deque(_merge_sorted(items[:split], key))
    right = deque(_merge_sorted(items[split:], key))
    merged: list[Branch] = []
    while left and right:
        if key(left[0]) < key(right[0]):
            merged.append(left.popleft())
        else:
            merged.append(right.popleft())
    merged.extend(left)
    merged.extend(right)
    return merged


def _axis_value(point: Point, axis: int) -> float:
    return point.x if axis == 0 else point.y


@dataclass
class KDNode:
    """A tree node holding one branch."""

    branch: Branch
    left: KDNode | None = None
    right: KDNode | None = None


class KDTree:
    """A balanced k-d tree over branch coordinates, rebuilt on every change."""

    def __init__(self, branches: Iterable[Branch] = ()) -> None:
        self._branches: list[Branch] = list(branches)
        self.root: KDNode | None = None
        if self._branches:
            self.build()

    @property
    def branches(self) -> tuple[Branch, ...]:
        """The stored branches in their current order."""
        return tuple(self._branches)

    def __len__(self) -> int:
        return len(self._branches)

    def set_branches(self, branches: Iterable[Branch]) -> None:
        """Replace the stored branches; call build() to index them."""
        self._branches = list(branches)

    def build(self) -> None:
        """Rebuild a balanced tree from the stored branches."""
        self.root = self._build(0, len(self._branches) - 1, 0)

    def _build(self, begin: int, end: int, depth: int) -> KDNode | None:
        if begin > end:
            return None
        axis = depth % 2
        self._branches[begin : end + 1] = _merge_sorted(
            self._branches[begin : end + 1],
            lambda branch: _axis_value(branch.coordinate, axis),
        )
        median = begin + (end - begin) // 2
        node = KDNode(self._branches[median])
        node.left = self._build(begin, median - 1, depth + 1)
        node.right = self._build(median + 1, end, depth + 1)
        return node

    def insert(self, branch: Branch) -> None:
        """Add a branch and rebuild the tree."""
        self._branches.append(branch)
        self.build()

    def delete(self, coordinate: Point) -> Branch | None:
        """Remove the first branch at the coordinate, rebuild, and return it (or None)."""
        removed: Branch | None = None
        for index, branch in enumerate(self._branches):
            if branch.coordinate == coordinate:
                removed = self._branches.pop(index)
                break
        self.build()
        return removed

    def _locate(self, x: float, y: float) -> KDNode | None:
        target = Point(x, y)
        node = self.root
        depth = 0
        while node is not None:
            if node.branch.coordinate == target:
                return node
            axis = depth % 2
            if _axis_value(target, axis) < _axis_value(node.branch.coordinate, axis):
                node = node.left
            else:
                node = node.right
            depth += 1
        return None

    def contains(self, x: float, y: float) -> bool:
        """Whether a branch sits exactly at (x, y)."""
        return self._locate(x, y) is not None

    def find(self, x: float, y: float) -> Branch | None:
        """The branch at exactly (x, y), or None."""
        node = self._locate(x, y)
        return node.branch if node is not None else None

    @staticmethod
    def _children(node: KDNode, target: Point, axis: int) -> tuple[KDNode | None, KDNode | None]:
        if _axis_value(target, axis) < _axis_value(node.branch.coordinate, axis):
            return node.left, node.right
        return node.right, node.left

    def _nearest(self, node: KDNode | None, target: Point, depth: int) -> KDNode | None:
        if node is None:
            return None
        axis = depth % 2
        near, far = self._children(node, target, axis)
        closest = self._nearest(near, target, depth + 1)
        closest_distance = (
            closest.branch.coordinate.distance_to(target) if closest is not None else float("inf")
        )
        if node.branch.coordinate.distance_to(target) < closest_distance:
            closest = node
        gap = abs(_axis_value(target, axis) - _axis_value(node.branch.coordinate, axis))
        if gap < closest_distance:
            candidate = self._nearest(far, target, depth + 1)
            if candidate is not None and closest is not None:
                if candidate.branch.coordinate.distance_to(
                    target
                ) < closest.branch.coordinate.distance_to(target):
                    closest = candidate
        return closest

    def nearest(self, target: Point) -> Branch | None:
        """The branch closest to the target, or None if the tree is empty."""
        node = self._nearest(self.root, target, 0)
        return node.branch if node is not None else None

    def _within(
        self, node: KDNode | None, target: Point, radius: float, depth: int, found: list[Branch]
    ) -> None:
        if node is None:
            return
        axis = depth % 2
        near, far = self._children(node, target, axis)
        self._within(near, target, radius, depth + 1, found)
        if node.branch.coordinate.distance_to(target) <= radius:
            found.append(node.branch)
        gap = abs(_axis_value(target, axis) - _axis_value(node.branch.coordinate, axis))
        if gap < radius:
            self._within(far, target, radius, depth + 1, found)

    def within_radius(self, target: Point, radius: float) -> list[Branch]:
        """Branches whose distance from the target is at most radius."""
        found: list[Branch] = []
        self._within(self.root, target, radius, 0, found)
        return found

    def in_quadrilateral(self, a: Point, b: Point, c: Point, d: Point) -> list[Branch]:
        """Stored branches lying inside the quadrilateral a-b-c-d."""
        return [
            branch
            for branch in self._branches
            if point_in_quadrilateral(a, b, c, d, branch.coordinate)
        ]