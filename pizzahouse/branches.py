"""Pizzerias and the main branches that own them."""

from __future__ import annotations

from dataclasses import dataclass, field

from .geometry import Point


@dataclass(frozen=True)
class Branch:
    """A single pizzeria at a location, belonging to a main branch."""

    name: str = " "
    coordinate: Point = field(default_factory=Point)
    main_name: str = " "
    is_main: bool = field(default=False, compare=False)


@dataclass(eq=False)
class MainBranch:
    """A pizzeria chain headquarters with its list of branches."""

    name: str = ""
    coordinate: Point = field(default_factory=Point)
    branches: list[Branch] = field(default_factory=list)

    @property
    def branch_count(self) -> int:
        """Number of branches currently registered."""
        return len(self.branches)

    def add_branch(self, branch: Branch) -> None:
        """Register a branch under this main branch."""
        self.branches.append(branch)

    def remove_branch(self, coordinate: Point) -> Branch | None:
        """Remove the first branch at the coordinate; return it, or None if absent."""
        for index, branch in enumerate(self.branches):
            if branch.coordinate == coordinate:
                return self.branches.pop(index)
        return None

    def describe(self) -> str:
        """A readable listing of this main branch and its branches."""
        lines = [f"{self.name} branches:"]
        lines.extend(
            f"Name:{branch.name} Coordinate:{branch.coordinate}" for branch in self.branches
        )
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MainBranch):
            return NotImplemented
        return self.name == other.name and self.coordinate == other.coordinate