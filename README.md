# pizzahouse

A small console application for managing pizzerias on a 2-D map.
Main branches (pizzeria chains) and their branches are stored in a k-d tree.
The tree answers two kinds of query: the nearest pizzeria to a point, and
the pizzerias within a radius of a point. The application can also list the
pizzerias inside a named neighborhood, which is given as a region with four
corners. Every command gets a number, so changes can be undone back to an
earlier command.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
pizzahouse
```

The program shows a menu and then reads a line of commands. You can put
several commands on one line by joining them with `&&`:

```
COMMAND_NAME [NAME] && COMMAND_NAME [NAME]
```

The name is the second word of a command, written in square brackets, so it
cannot contain spaces. If any command on the line is unknown, the whole line
is rejected and the menu is shown again. The program asks for any
coordinates it needs. It runs until input ends.

| Command    | What it does                                                         |
|------------|----------------------------------------------------------------------|
| `Add-N`    | Add a neighborhood `[NAME]`. Asks for four corners, x then y for each |
| `Add-P`    | Add a main branch `[NAME]`. Asks for X and Y                        |
| `Add-Br`   | Add a branch `[NAME]`. Asks for the main branch name, then X and Y  |
| `Del-Br`   | Remove the branch at X, Y. A main branch cannot be removed          |
| `List-P`   | List the pizzerias inside the neighborhood `[NAME]`                 |
| `List-Brs` | List the branches of the main branch `[NAME]`                       |
| `Near-P`   | Show the pizzeria nearest to X, Y                                   |
| `Near-Br`  | Show the branch of main branch `[NAME]` that is nearest to X, Y     |
| `Avail-P`  | List the pizzerias within radius R of X, Y                          |
| `Most-Brs` | Show the main branch with the most branches                         |
| `Undo`     | Undo every command numbered above P                                 |

Command numbers start at 1. Every command except `Undo` takes the next
number, and that includes the listing and query commands. `Undo` reverts the
changing commands (`Add-N`, `Add-P`, `Add-Br`, `Del-Br`) that are numbered
above the P you enter. After that it waits for you to enter `1`.

Example input line:

```
Add-P [Dominos] && Add-Br [Downtown]
```

## Using it as a library

```python
from pizzahouse.app import PizzaHouse
from pizzahouse.geometry import Point

house = PizzaHouse()
house.add_main_branch("Dominos", 0, 0)
house.add_branch("Downtown", "Dominos", 3, 4)
house.add_neighborhood("Center", [Point(-1, -1), Point(5, -1), Point(5, 5), Point(-1, 5)])

print(house.nearest(2, 3).name)                     # Downtown
print([b.name for b in house.available(0, 0, 5)])
print([b.name for b in house.neighborhood_pizzerias("Center")])
print(house.most_branches().name)                   # Dominos
print(house.branches_of("Dominos").describe())

house.undo(0)                                       # revert everything
```

Failed operations raise `pizzahouse.app.PizzaHouseError`. This happens for
an occupied location, an unknown main branch or neighborhood, an attempt to
delete a main branch, or a `most_branches()` call when there are no main
branches.

The parts of the package:

- `pizzahouse.geometry`: `Point` and `Valley`. A `Valley` is a named region
  with four corners.
- `pizzahouse.branches`: `Branch` and `MainBranch`.
- `pizzahouse.registry`: registries that look up main branches and
  neighborhoods by name, plus `Command` and `CommandHistory` for undo.
- `pizzahouse.kdtree`: `KDTree` and `point_in_quadrilateral`.

You can use the spatial index on its own:

```python
from pizzahouse.kdtree import KDTree
from pizzahouse.branches import Branch
from pizzahouse.geometry import Point

tree = KDTree()
tree.insert(Branch("A", Point(1, 1)))
tree.insert(Branch("B", Point(4, 5)))
print(tree.nearest(Point(3, 3)).name)               # B
print([b.name for b in tree.within_radius(Point(0, 0), 2)])   # ['A']
```

## What it does not do

All data is kept in memory only. Nothing is saved to disk, and everything
you entered is lost when the program exits.