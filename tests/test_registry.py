import pytest

from pizzahouse.branches import Branch, MainBranch
from pizzahouse.geometry import Point, Valley
from pizzahouse.registry import (
    TABLE_SIZE,
    Command,
    CommandHistory,
    CommandKind,
    MainBranchRegistry,
    ValleyRegistry,
    string_hash,
)


def test_string_hash_is_order_independent_and_in_range():
    assert string_hash("roma", TABLE_SIZE) == string_hash("amor", TABLE_SIZE)
    for name in ["", "a", "Pizza Hut", "Domino"]:
        assert 0 <= string_hash(name, TABLE_SIZE) < TABLE_SIZE


def test_string_hash_of_empty_is_zero():
    assert string_hash("", TABLE_SIZE) == 0


def test_main_registry_insert_and_search():
    registry = MainBranchRegistry()
    roma = MainBranch("Roma", Point(1, 1))
    registry.insert(roma)
    assert registry.search("Roma") is roma
    assert registry.search("Napoli") is None


def test_main_registry_colliding_names():
    registry = MainBranchRegistry()
    ab, ba = MainBranch("ab", Point(0, 0)), MainBranch("ba", Point(1, 1))
    registry.insert(ab)
    registry.insert(ba)
    assert registry.search("ab") is ab
    assert registry.search("ba") is ba


def test_main_registry_delete_needs_matching_coordinate():
    registry = MainBranchRegistry()
    registry.insert(MainBranch("Roma", Point(1, 1)))
    registry.delete(MainBranch("Roma", Point(2, 2)))
    assert registry.search("Roma") is not None and registry.search("Roma").coordinate == Point(1, 1)
    registry.delete(MainBranch("Roma", Point(1, 1)))
    assert registry.search("Roma") is None


def test_most_branches_picks_largest():
    registry = MainBranchRegistry()
    small = MainBranch("Small", Point(0, 0))
    big = MainBranch("Big", Point(5, 5))
    big.add_branch(Branch("B1", Point(6, 6), "Big"))
    big.add_branch(Branch("B2", Point(7, 7), "Big"))
    small.add_branch(Branch("S1", Point(1, 1), "Small"))
    registry.insert(small)
    registry.insert(big)
    assert registry.most_branches() is big


def test_most_branches_tie_goes_to_first_inserted_in_bucket():
    registry = MainBranchRegistry()
    first, second = MainBranch("ab", Point(0, 0)), MainBranch("ba", Point(1, 1))
    registry.insert(first)
    registry.insert(second)
    assert registry.most_branches() is first


def test_most_branches_empty_raises():
    with pytest.raises(LookupError):
        MainBranchRegistry().most_branches()


def test_valley_registry_roundtrip():
    registry = ValleyRegistry()
    valley = Valley("north", [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)])
    registry.insert(valley)
    assert registry.search("north") is valley
    registry.delete(Valley("north"))
    assert registry.search("north") is None


def test_command_kind_values_are_command_names():
    assert CommandKind("Add-Br") is CommandKind.ADD_BRANCH
    assert CommandKind.DELETE_BRANCH.value == "Del-Br"


def test_command_history_colliding_numbers():
    history = CommandHistory()
    one = Command(CommandKind.ADD_MAIN_BRANCH, 1, branch=Branch("Roma", Point(1, 1), "", True))
    later = Command(CommandKind.ADD_NEIGHBORHOOD, 1 + TABLE_SIZE, valley=Valley("north"))
    history.record(one)
    history.record(later)
    assert history.get(1) is one
    assert history.get(1 + TABLE_SIZE) is later
    history.remove(one)
    assert history.get(1) is None
    assert history.get(1 + TABLE_SIZE) is later


def test_command_history_missing_number():
    assert CommandHistory().get(7) is None