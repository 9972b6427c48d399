"""
Island & Maze command line driver.

Builds a grid (random or loaded from a text file), toggles one cell on and
counts the islands, then solves the grid as a maze: first with the fixed
East/South/North/West priority, then with the best of all 24 priorities.

A random grid that cannot be solved is regenerated until it can be.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

from grid_model import Grid, GridError
from island_counter import IslandCounter
from maze_solver import MazeSolver
from grid_text import print_grid

DEFAULT_ROWS = 12
DEFAULT_COLS = 12
DEFAULT_TOGGLE = (1, 2)
DEFAULT_MAX_ATTEMPTS = 1000

EXIT_OK = 0
EXIT_UNSOLVED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Island counter and maze solver on a binary grid")
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Rows of a random grid")
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Columns of a random grid")
    parser.add_argument("--grid", help="Path to a grid text file (0/. free, 1/# occupied)")
    parser.add_argument("--toggle", type=int, nargs=2, metavar=("X", "Y"), default=list(DEFAULT_TOGGLE),
                        help="Cell occupied before counting islands")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible random grids")
    parser.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS,
                        help="How many random grids to try before giving up")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours in the grid dump")
    return parser


def load_grid(args: argparse.Namespace, rng: random.Random) -> Grid:
    if args.grid:
        with open(args.grid, "r", encoding="utf-8") as f:
            return Grid.from_text(f.read(), rng=rng)
    grid = Grid(args.rows, args.cols, rng=rng)
    grid.randomize()
    return grid


def run(args: argparse.Namespace, out: Callable[[str], None] = print) -> int:
    color = not args.no_color
    rng = random.Random(args.seed) if args.seed is not None else random.Random()

    try:
        grid = load_grid(args, rng)
    except (GridError, ValueError, OSError) as e:
        out(f"Error: {e}")
        return EXIT_ERROR

    counter = IslandCounter()
    solver = MazeSolver()

    out("Filling the grid with '1's at arbitrary places")
    out("----------------------------------------------")

    # Keep the grid as generated to look for the best path later.
    grid.save()

    x, y = args.toggle
    n = counter.update_and_count(grid, x, y)
    print_grid(grid, color=color, out=out)
    out(f"Number of islands in the above grid: {n}")
    out("")

    steps = solver.solve(grid)
    if steps == 0 and args.grid:
        out("The maze is a dead-end!")
        return EXIT_UNSOLVED

    attempts = 1
    new_grid = False
    while steps == 0:
        if attempts >= args.max_attempts:
            out(f"No solvable grid found after {attempts} attempts.")
            return EXIT_UNSOLVED
        # The grid is not solvable. Generate another one!
        grid.randomize()
        grid.save()
        new_grid = True
        attempts += 1
        steps = solver.solve(grid)

    if new_grid:
        out(f"Generated {attempts} grids to find a solvable one (it may differ from the original).")

    out(f"Found solution in the maze at {steps} steps.")
    print_grid(grid, color=color, out=out)

    # Back to the saved grid to find the best path.
    grid.restore()
    best = solver.solve_best(grid)
    if best <= 0:
        out("The maze is a dead-end!")
        return EXIT_UNSOLVED

    out(f"Found best solution in the maze at {best} steps.")
    print_grid(grid, color=color, out=out)
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
