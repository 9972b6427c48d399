from typing import List, Tuple

from grid_model import Grid, FREE, OCCUPIED


class IslandCounter:
    """Counts 4-connected components of occupied cells."""

    def count(self, grid: Grid) -> int:
        return len(self.component_sizes(grid))

    def update_and_count(self, grid: Grid, x: int, y: int) -> int:
        """Occupy (x, y) on the live grid, then count islands.

        Out of range coordinates leave the grid untouched and return 0.
        """
        if not grid.in_range(x, y):
            return 0
        grid.set(x, y, OCCUPIED)
        return self.count(grid)

    def component_sizes(self, grid: Grid) -> List[int]:
        # Work on a copy so erasing islands never touches the caller's grid.
        cells = grid.copy_cells()
        sizes = []
        for y in range(grid.rows):
            for x in range(grid.cols):
                if cells[y][x] == OCCUPIED:
                    sizes.append(self._erase_island(grid, cells, x, y))
        return sizes

    def isolated_cells(self, grid: Grid) -> List[Tuple[int, int]]:
        return [(x, y) for x, y in grid.cells_in_state(OCCUPIED) if grid.is_isolated(x, y)]

    def _erase_island(self, grid: Grid, cells: List[List[int]], x: int, y: int) -> int:
        """Set every cell of the island at (x, y) free in `cells`; return its size."""
        size = 0
        cells[y][x] = FREE
        stack = [(x, y)]
        while stack:
            cx, cy = stack.pop()
            size += 1
            for nx, ny in grid.neighbors4(cx, cy):
                if cells[ny][nx] == OCCUPIED:
                    cells[ny][nx] = FREE
                    stack.append((nx, ny))
        return size
