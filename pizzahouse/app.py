"""The pizza house service: state, undo history and the interactive command menu."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from typing import TextIO

from .branches import Branch, MainBranch
from .geometry import Point, Valley
from .kdtree import KDTree
from .registry import (
    Command,
    CommandHistory,
    CommandKind,
    MainBranchRegistry,
    ValleyRegistry,
)

COMMAND_NAMES = (
    "Add-N",
    "Add-P",
    "Add-Br",
    "Del-Br",
    "List-P",
    "List-Brs",
    "Near-P",
    "Near-Br",
    "Avail-P",
    "Most-Brs",
    "Undo",
)

QUERY_COMMANDS = frozenset({"List-P", "List-Brs", "Near-P", "Near-Br", "Avail-P", "Most-Brs"})


class PizzaHouseError(Exception):
    """A command could not be carried out."""


class PizzaHouse:
    """Pizzerias, their chains and neighbourhoods, with numbered undoable commands."""

    def __init__(self) -> None:
        self.tree = KDTree()
        self.main_branches = MainBranchRegistry()
        self.valleys = ValleyRegistry()
        self.history = CommandHistory()
        self.command_count = 0

    def _record(
        self, kind: CommandKind, branch: Branch | None = None, valley: Valley | None = None
    ) -> None:
        self.command_count += 1
        self.history.record(Command(kind, self.command_count, branch, valley))

    def add_neighborhood(self, name: str, corners: Iterable[Point]) -> Valley:
        """Register a neighbourhood bounded by four corners."""
        valley = Valley(name, tuple(corners))
        self.valleys.insert(valley)
        self._record(CommandKind.ADD_NEIGHBORHOOD, valley=valley)
        return valley

    def add_main_branch(self, name: str, x: float, y: float) -> MainBranch:
        """Open a new chain headquarters at (x, y)."""
        if self.tree.contains(x, y):
            raise PizzaHouseError("There is another pizzeria in this place")
        branch = Branch(name, Point(x, y), "", True)
        self.tree.insert(branch)
        self._record(CommandKind.ADD_MAIN_BRANCH, branch=branch)
        main_branch = MainBranch(name, Point(x, y))
        self.main_branches.insert(main_branch)
        return main_branch

    def add_branch(self, name: str, main_name: str, x: float, y: float) -> Branch:
        """Open a pizzeria at (x, y) belonging to an existing main branch."""
        if self.tree.contains(x, y):
            raise PizzaHouseError("There is another pizzeria in this place")
        main_branch = self.main_branches.search(main_name)
        if main_branch is None:
            raise PizzaHouseError("Main branch not found")
        branch = Branch(name, Point(x, y), main_name, False)
        self.tree.insert(branch)
        main_branch.add_branch(branch)
        self._record(CommandKind.ADD_BRANCH, branch=branch)
        return branch

    def delete_branch(self, x: float, y: float) -> Branch:
        """Close the pizzeria at (x, y); main branches cannot be closed."""
        branch = self.tree.find(x, y)
        if branch is None:
            raise PizzaHouseError("Pizzeria not found")
        if branch.is_main:
            raise PizzaHouseError("The main branch cannot be deleted")
        main_branch = self.main_branches.search(branch.main_name)
        if main_branch is not None:
            main_branch.remove_branch(branch.coordinate)
        self.tree.delete(branch.coordinate)
        self._record(CommandKind.DELETE_BRANCH, branch=branch)
        return branch

    def nearest(self, x: float, y: float) -> Branch | None:
        """The pizzeria closest to (x, y), or None if there are none."""
        return self.tree.nearest(Point(x, y))

    def available(self, x: float, y: float, radius: float) -> list[Branch]:
        """Pizzerias within radius of (x, y)."""
        return self.tree.within_radius(Point(x, y), radius)

    def neighborhood_pizzerias(self, name: str) -> list[Branch]:
        """Pizzerias lying inside the named neighbourhood."""
        valley = self.valleys.search(name)
        if valley is None:
            raise PizzaHouseError("There is no Valley")
        return self.tree.in_quadrilateral(*valley.corners)

    def branches_of(self, name: str) -> MainBranch:
        """The named main branch, with its branches."""
        main_branch = self.main_branches.search(name)
        if main_branch is None:
            raise PizzaHouseError("Main branch not found")
        return main_branch

    def nearest_branch(self, main_name: str, x: float, y: float) -> Branch | None:
        """The branch of the named chain closest to (x, y), or None if it has none."""
        main_branch = self.main_branches.search(main_name)
        if main_branch is None:
            raise PizzaHouseError("Main branch not found")
        return KDTree(main_branch.branches).nearest(Point(x, y))

    def most_branches(self) -> MainBranch:
        """The main branch with the most branches."""
        try:
            return self.main_branches.most_branches()
        except LookupError as exc:
            raise PizzaHouseError("There are no main branches") from exc

    def count_query(self) -> None:
        """Advance the command counter for a read-only command."""
        self.command_count += 1

    def undo(self, target: int) -> list[Command]:
        """Roll back every command numbered above target; return those undone, newest first."""
        undone: list[Command] = []
        if target >= self.command_count:
            return undone
        while self.command_count > target:
            command = self.history.get(self.command_count)
            if command is not None:
                self._revert(command)
                self.history.remove(command)
                undone.append(command)
            self.command_count -= 1
        return undone

    def _revert(self, command: Command) -> None:
        branch = command.branch
        if command.kind is CommandKind.ADD_MAIN_BRANCH and branch is not None:
            self.tree.delete(branch.coordinate)
            self.main_branches.delete(MainBranch(branch.name, branch.coordinate))
        elif command.kind is CommandKind.ADD_BRANCH and branch is not None:
            stored = self.tree.find(branch.coordinate.x, branch.coordinate.y)
            main_name = stored.main_name if stored is not None else branch.main_name
            main_branch = self.main_branches.search(main_name)
            if main_branch is not None:
                main_branch.remove_branch(branch.coordinate)
            self.tree.delete(branch.coordinate)
        elif command.kind is CommandKind.DELETE_BRANCH and branch is not None:
            self.tree.insert(branch)
            main_branch = self.main_branches.search(branch.main_name)
            if main_branch is not None:
                main_branch.add_branch(branch)
        elif command.kind is CommandKind.ADD_NEIGHBORHOOD and command.valley is not None:
            self.valleys.delete(command.valley)


def is_valid_rule(rule: str) -> bool:
    """Whether the rule starts with a known command name."""
    words = rule.split()
    return bool(words) and words[0] in COMMAND_NAMES


def split_rules(text: str) -> list[str]:
    """Split an input line on '&', dropping empty pieces."""
    return [piece for piece in text.split("&") if piece != ""]


def parse_rule(rule: str) -> tuple[str, str]:
    """The command name and the bracketed name argument of a rule."""
    words = rule.split()
    action = words[0] if words else ""
    argument = words[1] if len(words) > 1 else ""
    start = argument.find("[")
    end = argument.find("]")
    name = ""
    if start != -1 and end != -1:
        name = argument[start + 1 : end] if end > start else argument[start + 1 :]
    return action, name


def _paint(code: int, text: str) -> str:
    return f"\033[38;5;{code}m{text}\033[0m"


class _Console:
    def __init__(self, out: TextIO) -> None:
        self.out = out

    def write(self, text: str = "") -> None:
        print(text, file=self.out)

    def ask(self, label: str) -> str:
        self.out.write(f"\t\t\t{_paint(202, label)}")
        self.out.flush()
        return input()

    def ask_float(self, label: str) -> float:
        while True:
            text = self.ask(label)
            try:
                return float(text.strip())
            except ValueError:
                self.write(f"\t\t\t{_paint(52, 'Please enter a number')}")

    def ask_int(self, label: str) -> int:
        while True:
            text = self.ask(label)
            try:
                return int(text.strip())
            except ValueError:
                self.write(f"\t\t\t{_paint(52, 'Please enter a whole number')}")

    def ok(self, text: str) -> None:
        self.write(f"\t\t\t{_paint(28, text)}")

    def fail(self, text: str) -> None:
        self.write(f"\t\t\t{_paint(52, text)}")

    def title(self, text: str) -> None:
        self.write("\n\n\n")
        self.write(f"\t\t\t{_paint(30, text)}")

    def clear(self) -> None:
        self.out.write("\033[2J\033[H")


_HELP_ROWS = (
    ("Add-N", "Add valley"),
    ("Add-P", "Add main branch"),
    ("Add-Br", "Add pizzeria"),
    ("Del-Br", "Remove pizzeria"),
    ("List-P", "Display of pizzerias in a neighborhood"),
    ("List-Brs", "Display pizzerias of a main branch"),
    ("Near-P", "Display nearest pizzeria"),
    ("Near-Br", "Display the nearest pizzeria of a branch"),
    ("Avail-P", "Display available pizzerias"),
    ("Most-Brs", "Display the pizzeria with the most branches"),
    ("Undo", "Return to previous commands"),
)


def _show_help(console: _Console) -> None:
    console.write("\n\n\n")
    console.write(f"\t\t\t\t{_paint(202, '      PIZZA HOUSE')}")
    for command, text in _HELP_ROWS:
        console.write(
            f"\t\t\t{_paint(202, '*')}{_paint(30, command.ljust(10))}"
            f"{_paint(202, '------>')}\t\t{_paint(30, text)}"
        )
    console.write(
        f"\t\t\t{_paint(202, 'Input format:COMMAND_NAME [NAME] && COMMAND_NAME [NAME]')}"
    )


def _do_add_n(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Add neighborhood")
    corners = [
        Point(console.ask_float("Enter x-coordinate:"), console.ask_float("Enter y-coordinate:"))
        for _ in range(4)
    ]
    house.add_neighborhood(name, corners)
    console.ok("The neighborhood was added:)")


def _do_add_p(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Add main branch")
    x = console.ask_float("X:")
    y = console.ask_float("Y:")
    house.add_main_branch(name, x, y)
    console.ok("Pizzeria added:)")


def _do_add_br(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Add pizzeria")
    main_name = console.ask("Name of the main branch:").strip()
    x = console.ask_float("X:")
    y = console.ask_float("Y:")
    house.add_branch(name, main_name, x, y)
    console.ok("Pizzeria added:)")


def _do_del_br(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Remove a pizzeria")
    x = console.ask_float("X:")
    y = console.ask_float("Y:")
    house.delete_branch(x, y)
    console.ok("The pizzeria was removed:)")


def _do_list_p(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Display neighborhood pizzerias")
    found = house.neighborhood_pizzerias(name)
    console.ok(f"Pizzerias in {name} neighborhood:")
    for branch in found:
        console.ok(f"{branch.name} : {branch.coordinate}")


def _do_list_brs(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Display of one-branch pizzerias")
    console.ok(house.branches_of(name).describe())


def _show_closest(console: _Console, branch: Branch | None) -> None:
    if branch is None:
        console.fail("No points in the KD Tree:(")
    else:
        console.ok(f"Closest node to the target point:{branch.name} {branch.coordinate}")


def _do_near_p(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Display nearest pizzeria")
    x = console.ask_float("X:")
    y = console.ask_float("Y:")
    _show_closest(console, house.nearest(x, y))


def _do_near_br(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Display the nearest pizzeria of a branch")
    x = console.ask_float("X:")
    y = console.ask_float("Y:")
    _show_closest(console, house.nearest_branch(name, x, y))


def _do_avail_p(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Display available pizzerias")
    x = console.ask_float("X:")
    y = console.ask_float("Y:")
    radius = console.ask_float("R:")
    found = house.available(x, y, radius)
    if not found:
        console.fail("There is no point:(")
        return
    console.ok(f"Points within radius {radius:g} from the target point:")
    for branch in found:
        console.ok(f"{branch.name}     :     {branch.coordinate}")


def _do_most_brs(house: PizzaHouse, console: _Console, name: str) -> None:
    most = house.most_branches()
    console.write("\n\n\n")
    console.ok(f"The pizzeria with the most branches:{most.name} With {most.branch_count} branches")


def _do_undo(house: PizzaHouse, console: _Console, name: str) -> None:
    console.title("Undo")
    target = console.ask_int("P:")
    for command in house.undo(target):
        if command.kind is CommandKind.ADD_NEIGHBORHOOD and command.valley is not None:
            console.write(f"\t\t\t{_paint(88, f'Neighborhood {command.valley.name} was removed:)')}")
        elif command.branch is not None:
            verb = "added" if command.kind is CommandKind.DELETE_BRANCH else "removed"
            console.write(
                f"\t\t\t{_paint(88, f'Pizzeria {command.branch.name} was {verb}:)')}"
            )
    while console.ask("Press 1 to continue").strip() != "1":
        pass


_HANDLERS: dict[str, Callable[[PizzaHouse, _Console, str], None]] = {
    "Add-N": _do_add_n,
    "Add-P": _do_add_p,
    "Add-Br": _do_add_br,
    "Del-Br": _do_del_br,
    "List-P": _do_list_p,
    "List-Brs": _do_list_brs,
    "Near-P": _do_near_p,
    "Near-Br": _do_near_br,
    "Avail-P": _do_avail_p,
    "Most-Brs": _do_most_brs,
    "Undo": _do_undo,
}


def _read_rules(console: _Console) -> list[str]:
    while True:
        _show_help(console)
        rules = split_rules(console.ask("Enter:"))
        console.clear()
        if all(is_valid_rule(rule) for rule in rules):
            return rules


def _run(house: PizzaHouse, console: _Console) -> None:
    while True:
        console.clear()
        for rule in _read_rules(console):
            action, name = parse_rule(rule)
            try:
                _HANDLERS[action](house, console, name)
            except PizzaHouseError as exc:
                console.fail(f"{exc}:(")
            finally:
                if action in QUERY_COMMANDS:
                    house.count_query()


def main(argv: list[str] | None = None) -> int:
    """Run the interactive pizza house menu until input ends."""
    parser = argparse.ArgumentParser(
        prog="pizzahouse", description="Manage pizzerias, chains and neighbourhoods."
    )
    parser.parse_args(argv)
    console = _Console(sys.stdout)
    try:
        _run(PizzaHouse(), console)
    except (EOFError, KeyboardInterrupt):
        console.write()
    return 0