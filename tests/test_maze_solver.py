import itertools
import os
import random
import sys

import pytest

# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_model import Grid, FREE, OCCUPIED, PATH
from island_counter import IslandCounter
from maze_solver import MazeSolver, DIRECTIONS, EAST, SOUTH, NORTH, WEST

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def load_puzzle(name):
    with open(os.path.join(PROJECT_ROOT, "puzzles", name), "r", encoding="utf-8") as f:
        return Grid.from_text(f.read())


def grid_with_free_cells(rows, cols, free):
    g = Grid(rows, cols)
    g.occupy((x, y) for y in range(rows) for x in range(cols) if (x, y) not in free)
    return g


def assert_valid_path(grid, path, steps):
    assert len(path) == steps
    assert path[0] == (0, 0)
    assert path[-1] == (grid.cols - 1, grid.rows - 1)
    assert len(set(path)) == len(path)
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1
    assert sorted(grid.cells_in_state(PATH)) == sorted(path)


def test_directions():
    assert DIRECTIONS == (EAST, SOUTH, NORTH, WEST)
    assert len(set(itertools.permutations(DIRECTIONS))) == 24


def test_open_grid_straight_path():
    g = Grid(3, 3)
    solver = MazeSolver()
    assert solver.solve(g) == 5
    assert solver.last_path == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
    assert_valid_path(g, solver.last_path, 5)
    assert solver.last_directions == DIRECTIONS
    assert IslandCounter().count(g) == 0


def test_forced_path_same_for_solve_and_best():
    free = {(0, 0), (1, 0), (1, 1), (2, 1), (2, 2)}
    solver = MazeSolver()

    g = grid_with_free_cells(3, 3, free)
    assert solver.solve(g) == 5
    assert set(g.cells_in_state(PATH)) == free

    g = grid_with_free_cells(3, 3, free)
    assert solver.solve_best(g) == 5
    assert set(g.cells_in_state(PATH)) == free


@pytest.mark.parametrize("wall", [(0, 0), (2, 2)])
def test_blocked_endpoint_skips_search(wall):
    g = Grid(3, 3)
    g.occupy([wall])
    before = g.copy_cells()
    solver = MazeSolver()

    assert solver.solve(g) == 0
    assert g.cells == before
    assert solver.solve_best(g) == 0
    assert g.cells == before
    assert solver.last_path == []
    assert solver.last_directions is None


def test_dead_end_leaves_grid_unchanged():
    g = Grid(3, 3)
    g.occupy([(1, 0), (1, 1), (1, 2)])
    before = g.copy_cells()
    solver = MazeSolver()

    assert solver.solve(g) == 0
    assert g.cells == before
    assert g.count_state(PATH) == 0

    assert solver.solve_best(g) == -1
    assert g.cells == before
    assert solver.last_path == []


def test_best_beats_fixed_order_on_detour():
    # East first wanders round the right side before coming back west.
    g = load_puzzle("detour_3x5.txt")
    solver = MazeSolver()
    assert solver.solve(g) == 11
    assert_valid_path(g, solver.last_path, 11)

    g = load_puzzle("detour_3x5.txt")
    assert solver.solve_best(g) == 7
    assert solver.last_path == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (1, 4), (2, 4)]
    assert_valid_path(g, solver.last_path, 7)
    assert solver.last_directions == (SOUTH, EAST, NORTH, WEST)


def test_best_keeps_first_ordering_on_ties():
    g = Grid(3, 3)
    solver = MazeSolver()
    assert solver.solve_best(g) == 5
    # the very first ordering already reaches the minimum
    assert solver.last_directions == DIRECTIONS
    assert solver.last_path == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]


def test_single_cell_grid():
    solver = MazeSolver()
    g = Grid(1, 1)
    assert solver.solve(g) == 1
    assert g.cells == [[PATH]]

    g = Grid(1, 1)
    assert solver.solve_best(g) == 1

    g = Grid(1, 1)
    g.occupy([(0, 0)])
    assert solver.solve(g) == 0
    assert solver.solve_best(g) == 0


def test_single_row_and_column():
    solver = MazeSolver()
    assert solver.solve(Grid(1, 6)) == 6
    assert solver.solve(Grid(6, 1)) == 6
    g = Grid(1, 6)
    g.occupy([(3, 0)])
    assert solver.solve(g) == 0
    assert solver.solve_best(g) == -1


def test_solve_util_edge_cases():
    solver = MazeSolver()
    g = Grid(3, 3)
    g.occupy([(1, 1)])
    assert solver.solve_util(g, -1, 0, DIRECTIONS) == (False, 0)
    assert solver.solve_util(g, 1, 1, DIRECTIONS) == (False, 0)
    assert g.count_state(PATH) == 0

    g.set(0, 0, PATH)
    assert solver.solve_util(g, 0, 0, DIRECTIONS) == (False, 0)

    assert solver.solve_util(g, 2, 2, DIRECTIONS) == (True, 1)
    assert g.get(2, 2) == PATH


def test_solve_util_from_inner_cell():
    g = Grid(3, 3)
    solver = MazeSolver()
    assert solver.solve_util(g, 1, 1, DIRECTIONS) == (True, 3)
    assert solver.last_path == [(1, 1), (2, 1), (2, 2)]


@pytest.mark.parametrize("order", list(itertools.permutations(DIRECTIONS)))
def test_failed_search_leaves_no_markers(order):
    g = Grid(4, 4)
    g.occupy([(3, 2), (2, 3)])
    before = g.copy_cells()
    found, steps = MazeSolver().solve_util(g, 0, 0, order)
    assert (found, steps) == (False, 0)
    assert g.cells == before


@pytest.mark.parametrize("seed", range(20))
def test_random_grids(seed):
    g = Grid(4, 4, rng=random.Random(seed))
    g.randomize()
    g.save()
    original = g.copy_cells()
    solver = MazeSolver()

    steps = solver.solve(g)
    if steps == 0:
        assert g.cells == original
    else:
        assert_valid_path(g, solver.last_path, steps)

    g.restore()
    best = solver.solve_best(g)
    if steps == 0:
        blocked = original[0][0] == OCCUPIED or original[3][3] == OCCUPIED
        assert best == (0 if blocked else -1)
        assert g.cells == original
    else:
        assert 7 <= best <= steps
        assert_valid_path(g, solver.last_path, best)
        # walls are untouched by the search
        assert g.cells_in_state(OCCUPIED) == [(x, y) for y in range(4) for x in range(4) if original[y][x] == OCCUPIED]


def test_sample_maze():
    g = load_puzzle("maze_12x12.txt")
    g.occupy([(1, 2)])
    solver = MazeSolver()
    steps = solver.solve(g)
    assert steps == 37
    assert_valid_path(g, solver.last_path, steps)
    # walks the top row, loops round the wall at (7, 2), then down the right edge
    assert solver.last_path[:12] == [(x, 0) for x in range(12)]
    assert solver.last_path[-8:] == [(11, y) for y in range(4, 12)]


def test_large_open_grid_does_not_hit_recursion_limit():
    g = Grid(40, 40)
    assert MazeSolver().solve(g) == 79


def test_solve_on_grid_with_previous_path_markers():
    # markers from an earlier solve block the search until cleared
    g = Grid(1, 3)
    g.set(1, 0, PATH)
    solver = MazeSolver()
    assert solver.solve(g) == 0
    assert g.get(1, 0) == PATH
    g.clear_path()
    assert solver.solve(g) == 3
    assert g.count_state(FREE) == 0
