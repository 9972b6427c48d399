from typing import Callable, List

from grid_model import Grid, SYMBOLS, PATH
import grid_style


def dump_grid(grid: Grid, isolation: bool = False, color: bool = True) -> str:
    """Render a grid as text, one row per line.

    With `isolation` set, each cell shows 1 if it is an isolated island and 0
    otherwise instead of its state. Mostly used for debugging.
    """
    lines: List[str] = []
    for y in range(grid.rows):
        symbols = []
        for x in range(grid.cols):
            if isolation:
                symbols.append("1" if grid.is_isolated(x, y) else "0")
                continue
            state = grid.cell_state(x, y)
            s = SYMBOLS[state]
            if color and state == PATH:
                s = f"{grid_style.ANSI_PATH}{s}{grid_style.ANSI_RESET}"
            symbols.append(s)
        lines.append("  ".join(symbols))
    return "\n".join(lines)


def print_grid(grid: Grid, isolation: bool = False, color: bool = True, out: Callable[[str], None] = print) -> None:
    out("")
    out(dump_grid(grid, isolation=isolation, color=color))
    out("")
