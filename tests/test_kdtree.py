import random

import pytest

from pizzahouse.branches import Branch
from pizzahouse.geometry import Point
from pizzahouse.kdtree import KDTree, point_in_quadrilateral


def _branch(name, x, y, main="Chain"):
    return Branch(name, Point(x, y), main)


def _random_branches(seed, count):
    rng = random.Random(seed)
    coords = set()
    while len(coords) < count:
        coords.add((rng.randint(-20, 20), rng.randint(-20, 20)))
    return [_branch(f"b{i}", x, y) for i, (x, y) in enumerate(sorted(coords))]


@pytest.fixture
def tree():
    t = KDTree()
    for branch in [
        _branch("a", 2, 3),
        _branch("b", 5, 4),
        _branch("c", 9, 6),
        _branch("d", 4, 7),
        _branch("e", 8, 1),
        _branch("f", 7, 2),
    ]:
        t.insert(branch)
    return t


def test_contains_and_find(tree):
    assert tree.contains(9, 6)
    assert not tree.contains(9, 7)
    found = tree.find(4, 7)
    assert found is not None
    assert found.name == "d"
    assert tree.find(100, 100) is None


def test_empty_tree():
    tree = KDTree()
    tree.build()
    assert tree.nearest(Point(1, 1)) is None
    assert tree.within_radius(Point(0, 0), 10) == []
    assert not tree.contains(0, 0)
    assert tree.find(0, 0) is None


def test_nearest_exact_location(tree):
    assert tree.nearest(Point(8, 1)).name == "e"


def test_nearest_close_point(tree):
    assert tree.nearest(Point(9, 5.5)).name == "c"


@pytest.mark.parametrize("seed", [3, 7, 11])
def test_nearest_has_minimal_distance(seed):
    branches = _random_branches(seed, 40)
    tree = KDTree(branches)
    rng = random.Random(seed + 100)
    for _ in range(30):
        target = Point(rng.uniform(-25, 25), rng.uniform(-25, 25))
        best = tree.nearest(target)
        best_distance = best.coordinate.distance_to(target)
        assert all(best_distance <= b.coordinate.distance_to(target) for b in branches)


@pytest.mark.parametrize("seed", [2, 5])
def test_within_radius_matches_distance_filter(seed):
    branches = _random_branches(seed, 50)
    tree = KDTree(branches)
    rng = random.Random(seed)
    for _ in range(20):
        target = Point(rng.randint(-20, 20), rng.randint(-20, 20))
        found = tree.within_radius(target, 4.5)
        assert len(found) == len(set(found))
        assert set(found) == {b for b in branches if b.coordinate.distance_to(target) <= 4.5}


def test_within_radius_includes_exact_point(tree):
    names = {b.name for b in tree.within_radius(Point(5, 4), 0.5)}
    assert names == {"b"}


def test_delete_removes_branch(tree):
    removed = tree.delete(Point(5, 4))
    assert removed is not None
    assert removed.name == "b"
    assert not tree.contains(5, 4)
    assert len(tree) == 5
    for x, y in [(2, 3), (9, 6), (4, 7), (8, 1), (7, 2)]:
        assert tree.contains(x, y)


def test_delete_missing_returns_none(tree):
    assert tree.delete(Point(50, 50)) is None
    assert len(tree) == 6


def test_point_in_square():
    a, b, c, d = Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)
    assert point_in_quadrilateral(a, b, c, d, Point(5, 5))
    assert not point_in_quadrilateral(a, b, c, d, Point(15, 5))
    assert not point_in_quadrilateral(a, b, c, d, Point(5, -1))


def test_point_in_rotated_quadrilateral():
    a, b, c, d = Point(0, 5), Point(5, 0), Point(10, 5), Point(5, 10)
    assert point_in_quadrilateral(a, b, c, d, Point(5, 5))
    assert not point_in_quadrilateral(a, b, c, d, Point(1, 1))


def test_in_quadrilateral(tree):
    found = tree.in_quadrilateral(Point(0, 0), Point(6, 0), Point(6, 8), Point(0, 8))
    assert {b.name for b in found} == {"a", "b", "d"}


def test_set_branches_then_build_replaces_content(tree):
    tree.set_branches([_branch("only", 1, 1)])
    tree.build()
    assert tree.nearest(Point(9, 6)).name == "only"
    assert not tree.contains(9, 6)