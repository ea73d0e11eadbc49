"""Hash-bucketed registries for main branches, neighbourhoods and command history."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .branches import Branch, MainBranch
from .geometry import Valley

TABLE_SIZE = 41


def string_hash(text: str, size: int) -> int:
    """Bucket index of a name: the sum of its character codes modulo size."""
    return sum(text.encode("utf-8")) % size


class MainBranchRegistry:
    """Main branches looked up by name."""

    def __init__(self, size: int = TABLE_SIZE) -> None:
        self._size = size
        self._buckets: list[list[MainBranch]] = [[] for _ in range(size)]

    def insert(self, main_branch: MainBranch) -> None:
        """Add a main branch."""
        self._buckets[string_hash(main_branch.name, self._size)].append(main_branch)

    def search(self, name: str) -> MainBranch | None:
        """The first main branch with this name, or None."""
        bucket = self._buckets[string_hash(name, self._size)]
        return next((entry for entry in bucket if entry.name == name), None)

    def delete(self, main_branch: MainBranch) -> None:
        """Remove the first entry matching the name and coordinate."""
        bucket = self._buckets[string_hash(main_branch.name, self._size)]
        for index, entry in enumerate(bucket):
            if entry.name == main_branch.name and entry.coordinate == main_branch.coordinate:
                del bucket[index]
                return

    def most_branches(self) -> MainBranch:
        """The main branch with the most branches; ties go to the first in bucket order."""
        best: MainBranch | None = None
        for bucket in self._buckets:
            for entry in bucket:
                if best is None or entry.branch_count > best.branch_count:
                    best = entry
        if best is None:
            raise LookupError("no main branches registered")
        return best


class ValleyRegistry:
    """Neighbourhoods looked up by name."""

    def __init__(self, size: int = TABLE_SIZE) -> None:
        self._size = size
        self._buckets: list[list[Valley]] = [[] for _ in range(size)]

    def insert(self, valley: Valley) -> None:
        """Add a neighbourhood."""
        self._buckets[string_hash(valley.name, self._size)].append(valley)

    def search(self, name: str) -> Valley | None:
        """The first neighbourhood with this name, or None."""
        bucket = self._buckets[string_hash(name, self._size)]
        return next((entry for entry in bucket if entry.name == name), None)

    def delete(self, valley: Valley) -> None:
        """Remove the first neighbourhood with the same name."""
        bucket = self._buckets[string_hash(valley.name, self._size)]
        for index, entry in enumerate(bucket):
            if entry.name == valley.name:
                del bucket[index]
                return


class CommandKind(enum.Enum):
    """Commands that change state and can be undone."""

    ADD_NEIGHBORHOOD = "Add-N"
    ADD_MAIN_BRANCH = "Add-P"
    ADD_BRANCH = "Add-Br"
    DELETE_BRANCH = "Del-Br"


@dataclass(frozen=True)
class Command:
    """A recorded command with its sequence number and the object it acted on."""

    kind: CommandKind
    number: int
    branch: Branch | None = None
    valley: Valley | None = None


class CommandHistory:
    """Recorded commands looked up by sequence number."""

    def __init__(self, size: int = TABLE_SIZE) -> None:
        self._size = size
        self._buckets: list[list[Command]] = [[] for _ in range(size)]

    def record(self, command: Command) -> None:
        """Store a command."""
        self._buckets[command.number % self._size].append(command)

    def get(self, number: int) -> Command | None:
        """The command with this number, or None."""
        bucket = self._buckets[number % self._size]
        return next((entry for entry in bucket if entry.number == number), None)

    def remove(self, command: Command) -> None:
        """Forget the first command with the same number."""
        bucket = self._buckets[command.number % self._size]
        for index, entry in enumerate(bucket):
            if entry.number == command.number:
                del bucket[index]
                return