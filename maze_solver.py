import itertools
from typing import List, Optional, Sequence, Tuple

from grid_model import Grid, Coord, FREE, OCCUPIED, PATH

EAST = (1, 0)
SOUTH = (0, 1)
NORTH = (0, -1)
WEST = (-1, 0)

# Default exploration priority of solve().
DIRECTIONS: Tuple[Coord, ...] = (EAST, SOUTH, NORTH, WEST)

Directions = Sequence[Coord]


class MazeSolver:
    """Backtracking path search from the top-left to the bottom-right cell.

    Occupied cells are walls. The path found is written into the grid as PATH
    cells; the number of steps returned is the number of cells on the path,
    both endpoints included.
    """

    def __init__(self) -> None:
        self.last_path: List[Coord] = []
        self.last_directions: Optional[Tuple[Coord, ...]] = None

    @staticmethod
    def _is_goal(grid: Grid, x: int, y: int) -> bool:
        return x == grid.cols - 1 and y == grid.rows - 1 and grid.cells[y][x] != OCCUPIED

    @staticmethod
    def _is_open(grid: Grid, x: int, y: int) -> bool:
        return grid.in_range(x, y) and grid.cells[y][x] == FREE

    @staticmethod
    def _endpoints_blocked(grid: Grid) -> bool:
        # The start and end cells must always be free.
        return grid.cells[0][0] == OCCUPIED or grid.cells[grid.rows - 1][grid.cols - 1] == OCCUPIED

    def solve_util(self, grid: Grid, x: int, y: int, directions: Directions) -> Tuple[bool, int]:
        """Depth-first search from (x, y) trying neighbours in `directions` order.

        Returns (found, steps). On failure every cell marked during the search
        has been reset to FREE, so the grid is left as it was.
        """
        self.last_path = []
        if self._is_goal(grid, x, y):
            grid.cells[y][x] = PATH
            self.last_path = [(x, y)]
            return True, 1
        if not self._is_open(grid, x, y):
            return False, 0

        grid.cells[y][x] = PATH
        # Each frame is [x, y, index of the next direction to try]; the stack
        # is the tentative path.
        stack = [[x, y, 0]]
        while stack:
            frame = stack[-1]
            cx, cy, i = frame
            if i == len(directions):
                # No way out from here: unmark and backtrack.
                grid.cells[cy][cx] = FREE
                stack.pop()
                continue

            frame[2] += 1
            dx, dy = directions[i]
            nx, ny = cx + dx, cy + dy
            if self._is_goal(grid, nx, ny):
                grid.cells[ny][nx] = PATH
                self.last_path = [(fx, fy) for fx, fy, _ in stack] + [(nx, ny)]
                return True, len(self.last_path)
            if self._is_open(grid, nx, ny):
                grid.cells[ny][nx] = PATH
                stack.append([nx, ny, 0])

        return False, 0

    def solve(self, grid: Grid) -> int:
        """Mark the first path found with the East, South, North, West priority.

        Returns the number of steps, or 0 when there is no path.
        """
        self.last_directions = None
        if self._endpoints_blocked(grid):
            self.last_path = []
            return 0

        found, steps = self.solve_util(grid, 0, 0, DIRECTIONS)
        if not found:
            return 0
        self.last_directions = DIRECTIONS
        return steps

    def solve_best(self, grid: Grid) -> int:
        """Try all 24 direction priorities and keep the shortest path found.

        The best path is the shortest among the backtracking results, not
        necessarily the shortest path in the grid. Returns -1 (grid untouched)
        when no ordering reaches the goal, 0 when an endpoint is a wall.
        """
        self.last_directions = None
        self.last_path = []
        if self._endpoints_blocked(grid):
            return 0

        original = grid.copy_cells()
        best_steps = -1
        best_cells: Optional[List[List[int]]] = None
        best_path: List[Coord] = []

        for order in itertools.permutations(DIRECTIONS):
            found, steps = self.solve_util(grid, 0, 0, order)
            if found and (best_cells is None or steps < best_steps):
                best_steps = steps
                best_cells = grid.copy_cells()
                best_path = list(self.last_path)
                self.last_directions = order

            # Restore the grid for the next ordering.
            grid.load_cells(original)

        if best_cells is None:
            # Probably a dead-end.
            self.last_path = []
            return -1

        grid.load_cells(best_cells)
        self.last_path = best_path
        return best_steps
