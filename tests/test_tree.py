import numpy as np
import pytest

from bktreex import BKTree, InvalidArgumentError, MetricSpaceIndex
from bktreex.core.metrics import absolute, levenshtein
from bktreex.core.node import ROOT_DISTANCE


def test_empty_tree_reports_nothing():
    tree = BKTree(levenshtein)

    assert tree.size() == 0
    assert tree.empty()
    assert len(tree) == 0
    assert not tree
    assert tree.root is None
    assert list(tree) == []
    assert tree.depth() == 0
    for k in range(4):
        assert tree.get_within_distance("anything", k) == 0
    assert tree.count("anything") == 0
    assert tree.nearest("anything") == []


def test_single_insert_scenario():
    tree = BKTree(levenshtein)
    tree.insert("boobs")

    assert tree.size() == 1
    assert not tree.empty()
    assert tree.count("boobs") == 1
    assert tree.count("books") == 0
    assert tree.get_within_distance("boobs", 0) == 1
    assert tree.get_within_distance("boobs", 1) == 1
    assert tree.get_within_distance("books", 0) == 0
    assert tree.get_within_distance("books", 1) == 1


def test_second_insert_scenario():
    tree = BKTree(levenshtein)
    tree.insert("boobs")
    tree.insert("books")

    assert tree.size() == 2
    assert not tree.empty()
    assert tree.count("boobs") == 1
    assert tree.count("books") == 1
    assert tree.count("boots") == 0
    assert tree.get_within_distance("books", 0) == 1
    assert tree.get_within_distance("books", 1) == 2
    assert tree.get_within_distance("boots", 1) == 2
    assert tree.get_within_distance("boobs", 1) == 2


def test_root_and_child_distances_are_recorded():
    tree = BKTree(levenshtein, ["boobs", "books"])

    root = tree.root
    assert root is not None
    assert root.item == "boobs"
    assert root.distance_to_parent == ROOT_DISTANCE
    assert root.is_root
    assert list(root.children) == [1]
    assert root.children[1].item == "books"
    assert root.children[1].is_leaf


def test_duplicate_insert_is_a_no_op():
    tree = BKTree(levenshtein, ["cat", "hat", "cart"])
    before = sorted(tree)
    results_before = [tree.get_within_distance(word, 1) for word in ("cat", "bat", "card")]

    tree.insert("hat")
    tree.insert("cat")

    assert tree.size() == 3
    assert sorted(tree) == before
    assert [tree.get_within_distance(word, 1) for word in ("cat", "bat", "card")] == results_before


def test_collector_receives_every_match():
    tree = BKTree(levenshtein, ["book", "books", "cake", "boo", "cape"])
    matches: list[str] = []

    found = tree.get_within_distance("bool", 1, matches)

    assert found == 2
    assert sorted(matches) == ["boo", "book"]


def test_collector_is_appended_not_replaced():
    tree = BKTree(absolute, [1, 2, 3])
    matches = [99]

    tree.get_within_distance(2, 0, matches)

    assert matches == [99, 2]


def test_negative_radius_raises_invalid_argument():
    tree = BKTree(levenshtein, ["word"])

    with pytest.raises(InvalidArgumentError):
        tree.get_within_distance("word", -1)
    with pytest.raises(ValueError):
        tree.get_within_distance("word", -5)


def test_negative_radius_raises_even_when_empty():
    tree = BKTree(levenshtein)

    with pytest.raises(InvalidArgumentError):
        tree.get_within_distance("word", -1)


@pytest.mark.parametrize("radius", [1.5, "1", None, True])
def test_non_integer_radius_is_rejected(radius):
    tree = BKTree(levenshtein, ["word"])

    with pytest.raises(InvalidArgumentError):
        tree.get_within_distance("word", radius)


def test_numpy_integer_radius_is_accepted():
    tree = BKTree(absolute, [1, 5, 9])

    assert tree.get_within_distance(5, np.int64(4)) == 3


def test_contains_and_count_agree():
    words = ["alpha", "beta", "gamma", "delta"]
    tree = BKTree(levenshtein, words)

    for word in words:
        assert word in tree
        assert tree.count(word) == 1
    assert "epsilon" not in tree
    assert tree.count("epsilon") == 0


def test_within_zero_equals_count():
    tree = BKTree(levenshtein, ["alpha", "beta", "gamma"])

    for center in ["alpha", "alpah", "beta", "zeta"]:
        assert tree.get_within_distance(center, 0) == tree.count(center)


def test_distance_is_bound_for_lifetime():
    tree = BKTree(absolute)

    assert tree.distance is absolute
    with pytest.raises(AttributeError):
        tree.distance = levenshtein  # type: ignore[misc]


def test_distance_can_be_named_metric():
    tree = BKTree("absolute", [3, 7, 11])

    assert tree.distance.name == "absolute"
    assert tree.get_within_distance(8, 1) == 1


def test_non_callable_distance_is_rejected():
    with pytest.raises(TypeError):
        BKTree(42)  # type: ignore[arg-type]


def test_unknown_metric_name_is_rejected():
    with pytest.raises(KeyError):
        BKTree("no-such-metric")


def test_distance_errors_propagate():
    def picky(lhs: int, rhs: int) -> int:
        if rhs == 13:
            raise RuntimeError("unlucky")
        return abs(lhs - rhs)

    tree = BKTree(picky, [1, 2])

    with pytest.raises(RuntimeError, match="unlucky"):
        tree.insert(13)
    assert tree.size() == 2


def test_from_items_and_alias():
    tree = MetricSpaceIndex.from_items([5, 1, 5, 9], absolute)

    assert isinstance(tree, BKTree)
    assert tree.size() == 3
    assert sorted(tree) == [1, 5, 9]


def test_insert_many_reports_new_nodes():
    tree = BKTree(levenshtein)

    assert tree.insert_many(["a", "b", "a", "ab"]) == 3
    assert tree.insert_many(["a", "b"]) == 0
    assert tree.insert_many(iter(["abc"])) == 1
    assert tree.size() == 4


def test_find_within_is_sorted_by_distance():
    tree = BKTree(absolute, [10, 14, 7, 12, 30])

    pairs = tree.find_within(11, 4)

    assert [distance for distance, _ in pairs] == sorted(distance for distance, _ in pairs)
    assert sorted(item for _, item in pairs) == [7, 10, 12, 14]
    assert pairs[0] in {(1, 10), (1, 12)}


def test_unknown_strategy_is_rejected():
    tree = BKTree(absolute, [1])

    with pytest.raises(InvalidArgumentError):
        tree.get_within_distance(1, 0, strategy="sideways")


@pytest.mark.parametrize("strategy", ["bfs", "dfs"])
def test_strategies_agree_on_small_tree(strategy):
    tree = BKTree(levenshtein, ["book", "books", "cake", "boo", "cape", "boon", "cook"])
    matches: list[str] = []

    found = tree.get_within_distance("book", 1, matches, strategy=strategy)

    assert found == 5
    assert sorted(matches) == ["boo", "book", "books", "boon", "cook"]
