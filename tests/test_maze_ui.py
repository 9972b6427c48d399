import os
import sys

# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from grid_model import Grid, FREE, OCCUPIED, PATH
from maze_ui import (
    ViewerState, toggle_cell, run_solver, format_debug_cell,
    list_puzzle_files, load_puzzle_file, html_escape,
)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def test_default_state():
    state = ViewerState()
    assert (state.grid.rows, state.grid.cols) == (12, 12)
    assert state.last_toggled is None


def test_toggle_cell_occupies_then_frees():
    state = ViewerState(grid=Grid(3, 3))
    state.grid.occupy([(0, 0)])

    assert toggle_cell(state, 1, 0) == "Occupied (1,0). Islands: 1"
    assert state.grid.get(1, 0) == OCCUPIED
    assert state.last_toggled == (1, 0)

    assert toggle_cell(state, 2, 2) == "Occupied (2,2). Islands: 2"
    assert toggle_cell(state, 1, 0) == "Freed (1,0). Islands: 2"
    assert state.grid.get(1, 0) == FREE


def test_run_solver_clears_old_path_first():
    state = ViewerState(grid=Grid(3, 3))
    assert run_solver(state, best=False) == "Path found: 5 steps"
    assert state.grid.count_state(PATH) == 5
    assert run_solver(state, best=False) == "Path found: 5 steps"
    assert state.grid.count_state(PATH) == 5


def test_run_solver_best_and_dead_end():
    state = ViewerState(grid=Grid(3, 3))
    msg = run_solver(state, best=True)
    assert msg.startswith("Best path: 5 steps")

    state.grid.occupy([(1, 0), (1, 1), (1, 2)])
    assert run_solver(state, best=True) == "The maze is a dead-end!"
    assert run_solver(state, best=False) == "The maze is a dead-end!"


def test_format_debug_cell():
    g = Grid(2, 2)
    g.occupy([(0, 0)])
    assert format_debug_cell(g, 0, 0) == "Cell (0,0) state=occupied isolated=True"
    assert format_debug_cell(g, 1, 1) == "Cell (1,1) state=free isolated=False"
    assert format_debug_cell(g, 5, 0) == "Out of bounds."


def test_puzzle_files_load():
    files = list_puzzle_files(os.path.join(PROJECT_ROOT, "puzzles"))
    names = [os.path.basename(p) for p in files]
    assert "maze_12x12.txt" in names
    assert names == sorted(names)
    for p in files:
        g = load_puzzle_file(p)
        assert g.rows > 0 and g.cols > 0


def test_html_escape():
    assert html_escape("<b>&'\"") == "&lt;b&gt;&amp;&#39;&quot;"
