import random
from typing import Iterable, List, Optional, Tuple

# ----------------------------
# Domain model
# ----------------------------

FREE = 0
OCCUPIED = 1
PATH = 2

CELL_STATES = (FREE, OCCUPIED, PATH)

SYMBOLS = {FREE: "0", OCCUPIED: "1", PATH: "+"}
PARSE_SYMBOLS = {"0": FREE, ".": FREE, "1": OCCUPIED, "#": OCCUPIED, "+": PATH}

Coord = Tuple[int, int]  # (x, y)


class GridError(Exception):
    """Base class for grid errors."""


class InvalidDimensions(GridError, ValueError):
    pass


class OutOfRange(GridError, IndexError):
    pass


class NoSnapshot(GridError, RuntimeError):
    pass


class Grid:
    """Fixed-size binary grid with a transient path marker state.

    Coordinates are (x, y): x is the column, y is the row. Cells are stored
    row-major as cells[y][x].
    """

    def __init__(self, rows: int, cols: int, rng: Optional[random.Random] = None) -> None:
        if not isinstance(rows, int) or not isinstance(cols, int) or rows <= 0 or cols <= 0:
            raise InvalidDimensions(f"Invalid grid dimensions: {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells: List[List[int]] = [[FREE for _ in range(cols)] for _ in range(rows)]
        self._backup: Optional[List[List[int]]] = None
        self.rng = rng if rng is not None else random.Random()

    def in_range(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def neighbors4(self, x: int, y: int) -> List[Coord]:
        out = []
        for dx, dy in [(1, 0), (-1, 0), (0, 1), (0, -1)]:
            nx, ny = x + dx, y + dy
            if self.in_range(nx, ny):
                out.append((nx, ny))
        return out

    def _check(self, x: int, y: int) -> None:
        if not self.in_range(x, y):
            raise OutOfRange(f"Cell ({x},{y}) outside {self.cols}x{self.rows} grid")

    def get(self, x: int, y: int) -> int:
        self._check(x, y)
        return self.cells[y][x]

    def cell_state(self, x: int, y: int) -> int:
        """Read accessor used by the renderers."""
        return self.get(x, y)

    def set(self, x: int, y: int, state: int) -> None:
        self._check(x, y)
        if state not in CELL_STATES:
            raise ValueError(f"Unknown cell state: {state}")
        self.cells[y][x] = state

    def clear(self) -> None:
        for row in self.cells:
            for x in range(self.cols):
                row[x] = FREE

    def clear_path(self) -> int:
        """Reset path markers to free; return how many were reset."""
        n = 0
        for row in self.cells:
            for x in range(self.cols):
                if row[x] == PATH:
                    row[x] = FREE
                    n += 1
        return n

    def occupy(self, coords: Iterable[Coord]) -> None:
        """Mark every given (x, y) occupied. Does not clear first.

        Coordinates outside the grid are ignored.
        """
        for x, y in coords:
            if self.in_range(x, y):
                self.cells[y][x] = OCCUPIED

    def randomize(self) -> None:
        """Clear, then occupy up to rows*cols random cells (duplicates allowed)."""
        self.clear()
        n = self.rng.randint(1, self.rows * self.cols)
        for _ in range(n):
            x = self.rng.randrange(self.cols)
            y = self.rng.randrange(self.rows)
            self.cells[y][x] = OCCUPIED

    # ----------------------------
    # Snapshot
    # ----------------------------

    @property
    def has_snapshot(self) -> bool:
        return self._backup is not None

    def save(self) -> None:
        self._backup = self.copy_cells()

    def restore(self) -> None:
        if self._backup is None:
            raise NoSnapshot("no snapshot available")
        self.cells = [row[:] for row in self._backup]

    def copy_cells(self) -> List[List[int]]:
        return [row[:] for row in self.cells]

    def load_cells(self, cells: List[List[int]]) -> None:
        """Replace the cell array with a copy of `cells` (same dimensions)."""
        if len(cells) != self.rows or any(len(row) != self.cols for row in cells):
            raise ValueError(f"Cell array does not match a {self.cols}x{self.rows} grid.")
        for row in cells:
            for v in row:
                if v not in CELL_STATES:
                    raise ValueError(f"Unknown cell state: {v}")
        self.cells = [row[:] for row in cells]

    # ----------------------------
    # Queries
    # ----------------------------

    def is_isolated(self, x: int, y: int) -> bool:
        """True if (x, y) is occupied and no orthogonal neighbour is occupied."""
        if not self.in_range(x, y) or self.cells[y][x] != OCCUPIED:
            return False
        for nx, ny in self.neighbors4(x, y):
            if self.cells[ny][nx] == OCCUPIED:
                return False
        return True

    def count_state(self, state: int) -> int:
        return sum(row.count(state) for row in self.cells)

    def cells_in_state(self, state: int) -> List[Coord]:
        return [(x, y) for y in range(self.rows) for x in range(self.cols) if self.cells[y][x] == state]

    # ----------------------------
    # Text format
    # ----------------------------

    @classmethod
    def from_text(cls, text: str, rng: Optional[random.Random] = None) -> "Grid":
        lines = [ln.strip() for ln in text.splitlines() if ln.strip() != ""]
        if not lines:
            raise ValueError("Empty input.")

        rows: List[List[int]] = []
        for ln in lines:
            # tokenized if spaces exist, else a character grid
            tokens = ln.split() if " " in ln or "\t" in ln else list(ln)
            row: List[int] = []
            for t in tokens:
                if t not in PARSE_SYMBOLS:
                    raise ValueError(f"Bad token: {t}")
                row.append(PARSE_SYMBOLS[t])
            rows.append(row)

        cols = len(rows[0])
        if any(len(r) != cols for r in rows):
            raise ValueError("Ragged rows: all rows must have the same number of columns.")

        grid = cls(len(rows), cols, rng=rng)
        grid.load_cells(rows)
        return grid

    def to_text(self) -> str:
        return "\n".join("".join(SYMBOLS[v] for v in row) for row in self.cells)

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols})"
