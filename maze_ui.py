"""
Island & Maze Viewer (Pygame)

Controls:
- Left click: occupy a free cell (reports the new island count) or free an occupied one
- Right click: display debug info for the cell
- Middle drag: pan, mouse wheel: zoom
- Buttons: New, Random, Clear, Save, Restore, Count, Solve, Best
- Puzzle list: click a file from puzzles/ to load it
"""

import os
import glob
from dataclasses import dataclass, field
from typing import Tuple, Optional, List

import pygame
import pygame_gui

from grid_model import Grid, GridError, Coord, FREE, OCCUPIED, PATH
from island_counter import IslandCounter
from maze_solver import MazeSolver
from grid_drawing import Camera, draw_grid, pick_cell_from_mouse, clamp_int
import grid_style


PUZZLE_DIR = "puzzles"
BASE_CELL_SIZE = 40
MAX_LOG_LINES = 100
STATE_NAMES = {FREE: "free", OCCUPIED: "occupied", PATH: "path"}


# ----------------------------
# App state
# ----------------------------

@dataclass
class ViewerState:
    grid: Grid = field(default_factory=lambda: Grid(12, 12))
    counter: IslandCounter = field(default_factory=IslandCounter)
    solver: MazeSolver = field(default_factory=MazeSolver)
    last_toggled: Optional[Coord] = None
    show_isolated: bool = False
    puzzle_files: List[str] = field(default_factory=list)


# ----------------------------
# Helpers
# ----------------------------

def list_puzzle_files(path: str = PUZZLE_DIR) -> List[str]:
    return sorted(glob.glob(os.path.join(path, "*.txt")))


def load_puzzle_file(path: str) -> Grid:
    with open(path, "r", encoding="utf-8") as f:
        return Grid.from_text(f.read())


def format_debug_cell(grid: Grid, x: int, y: int) -> str:
    if not grid.in_range(x, y):
        return "Out of bounds."
    state = grid.cell_state(x, y)
    return f"Cell ({x},{y}) state={STATE_NAMES[state]} isolated={grid.is_isolated(x, y)}"


def toggle_cell(state: ViewerState, x: int, y: int) -> str:
    grid = state.grid
    state.last_toggled = (x, y)
    if grid.cell_state(x, y) == OCCUPIED:
        grid.set(x, y, FREE)
        return f"Freed ({x},{y}). Islands: {state.counter.count(grid)}"
    n = state.counter.update_and_count(grid, x, y)
    return f"Occupied ({x},{y}). Islands: {n}"


def run_solver(state: ViewerState, best: bool) -> str:
    grid = state.grid
    grid.clear_path()
    if best:
        steps = state.solver.solve_best(grid)
        if steps > 0:
            return f"Best path: {steps} steps (order {state.solver.last_directions})"
        return "The maze is a dead-end!"
    steps = state.solver.solve(grid)
    if steps > 0:
        return f"Path found: {steps} steps"
    return "The maze is a dead-end!"


def html_escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
         .replace("<", "&lt;")
         .replace(">", "&gt;")
         .replace('"', "&quot;")
         .replace("'", "&#39;")
    )


# ----------------------------
# Main
# ----------------------------

def main() -> None:
    pygame.init()
    pygame.display.set_caption("Island & Maze Viewer")

    screen = pygame.display.set_mode((1100, 760), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    small_font = pygame.font.SysFont("arial", 12)

    ui_manager = pygame_gui.UIManager(screen.get_size())

    controls_win = pygame_gui.elements.UIWindow(
        pygame.Rect(20, 20, 260, 560),
        ui_manager,
        window_display_title="Controls",
        resizable=True
    )
    controls_win.close_window_button.hide()
    log_win = pygame_gui.elements.UIWindow(
        pygame.Rect(20, 590, 520, 160),
        ui_manager,
        window_display_title="Log",
        resizable=True
    )
    log_win.close_window_button.hide()

    inp_rows = pygame_gui.elements.UITextEntryLine(pygame.Rect(10, 10, 70, 28), ui_manager, container=controls_win)
    inp_rows.set_text("12")
    inp_cols = pygame_gui.elements.UITextEntryLine(pygame.Rect(90, 10, 70, 28), ui_manager, container=controls_win)
    inp_cols.set_text("12")
    btn_new = pygame_gui.elements.UIButton(pygame.Rect(170, 10, 70, 28), "New", ui_manager, container=controls_win)

    btn_random = pygame_gui.elements.UIButton(pygame.Rect(10, 48, 110, 32), "Random", ui_manager, container=controls_win)
    btn_clear = pygame_gui.elements.UIButton(pygame.Rect(130, 48, 110, 32), "Clear", ui_manager, container=controls_win)
    btn_save = pygame_gui.elements.UIButton(pygame.Rect(10, 88, 110, 32), "Save", ui_manager, container=controls_win)
    btn_restore = pygame_gui.elements.UIButton(pygame.Rect(130, 88, 110, 32), "Restore", ui_manager, container=controls_win)
    btn_count = pygame_gui.elements.UIButton(pygame.Rect(10, 128, 110, 32), "Count", ui_manager, container=controls_win)
    btn_isolated = pygame_gui.elements.UIButton(pygame.Rect(130, 128, 110, 32), "Isolated", ui_manager, container=controls_win)
    btn_solve = pygame_gui.elements.UIButton(pygame.Rect(10, 168, 110, 32), "Solve", ui_manager, container=controls_win)
    btn_best = pygame_gui.elements.UIButton(pygame.Rect(130, 168, 110, 32), "Best", ui_manager, container=controls_win)

    pygame_gui.elements.UILabel(pygame.Rect(10, 210, 230, 24), "Puzzle files (click to load):", ui_manager, container=controls_win)
    files_list = pygame_gui.elements.UISelectionList(
        relative_rect=pygame.Rect(10, 238, 230, 200),
        item_list=[],
        manager=ui_manager,
        container=controls_win
    )

    log_box = pygame_gui.elements.UITextBox(
        html_text="",
        relative_rect=pygame.Rect(10, 10, 500, 100),
        manager=ui_manager,
        container=log_win,
        anchors={"left": "left", "right": "right", "top": "top", "bottom": "bottom"}
    )

    state = ViewerState()
    state.puzzle_files = list_puzzle_files()
    files_list.set_item_list([os.path.basename(p) for p in state.puzzle_files])

    camera = Camera()
    camera.center_on(state.grid, screen.get_size(), BASE_CELL_SIZE)

    log_lines: List[str] = []

    def log_append(msg: str) -> None:
        for line in msg.splitlines():
            line = line.strip()
            if line:
                log_lines.append(line)
        if len(log_lines) > MAX_LOG_LINES:
            del log_lines[0:len(log_lines) - MAX_LOG_LINES]
        log_box.set_text("<br>".join(html_escape(ln) for ln in log_lines))
        if log_box.scroll_bar is not None:
            log_box.scroll_bar.set_scroll_from_start_percentage(1.0)

    def replace_grid(grid: Grid) -> None:
        state.grid = grid
        state.last_toggled = None
        camera.center_on(grid, screen.get_size(), BASE_CELL_SIZE)

    def is_over_ui(pos: Tuple[int, int]) -> bool:
        return any(w.visible and w.get_abs_rect().collidepoint(pos) for w in (controls_win, log_win))

    log_append("Ready.")

    panning = False
    pan_last: Optional[Tuple[int, int]] = None

    running = True
    while running:
        time_delta = clock.tick(60) / 1000.0

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break

            if event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                ui_manager.set_window_resolution(event.size)

            ui_manager.process_events(event)

            if event.type == pygame_gui.UI_BUTTON_PRESSED:
                grid = state.grid
                if event.ui_element == btn_new:
                    try:
                        r = clamp_int(int(inp_rows.get_text().strip()), 1, 40)
                        c = clamp_int(int(inp_cols.get_text().strip()), 1, 40)
                        replace_grid(Grid(r, c))
                        log_append(f"New grid {r}x{c}.")
                    except ValueError:
                        log_append("Invalid rows/cols.")

                elif event.ui_element == btn_random:
                    grid.randomize()
                    log_append(f"Random grid with {grid.count_state(OCCUPIED)} occupied cells.")

                elif event.ui_element == btn_clear:
                    grid.clear()
                    log_append("Grid cleared.")

                elif event.ui_element == btn_save:
                    grid.save()
                    log_append("Grid saved.")

                elif event.ui_element == btn_restore:
                    try:
                        grid.restore()
                        log_append("Grid restored.")
                    except GridError as e:
                        log_append(f"Restore failed: {e}")

                elif event.ui_element == btn_count:
                    sizes = state.counter.component_sizes(grid)
                    log_append(f"Islands: {len(sizes)} sizes={sizes}")

                elif event.ui_element == btn_isolated:
                    state.show_isolated = not state.show_isolated
                    n = len(state.counter.isolated_cells(grid))
                    log_append(f"Isolated islands: {n} ({'shown' if state.show_isolated else 'hidden'})")

                elif event.ui_element == btn_solve:
                    log_append(run_solver(state, best=False))

                elif event.ui_element == btn_best:
                    log_append(run_solver(state, best=True))

            if event.type == pygame_gui.UI_SELECTION_LIST_NEW_SELECTION and event.ui_element == files_list:
                name = event.text
                path = next((p for p in state.puzzle_files if os.path.basename(p) == name), None)
                if path is not None:
                    try:
                        replace_grid(load_puzzle_file(path))
                        log_append(f"Loaded: {name}")
                    except (ValueError, OSError) as e:
                        log_append(f"Load failed: {e}")

            if event.type == pygame.MOUSEWHEEL:
                if not is_over_ui(pygame.mouse.get_pos()):
                    if event.y > 0:
                        camera.zoom_at(pygame.mouse.get_pos(), 1.1, 0.2, 6.0)
                    elif event.y < 0:
                        camera.zoom_at(pygame.mouse.get_pos(), 1.0 / 1.1, 0.2, 6.0)

            if event.type == pygame.MOUSEBUTTONDOWN and not is_over_ui(event.pos):
                if event.button == 2:
                    panning = True
                    pan_last = event.pos

                if event.button == 1:
                    cell = pick_cell_from_mouse(state.grid, camera, BASE_CELL_SIZE, event.pos)
                    if cell is not None:
                        log_append(toggle_cell(state, *cell))

                if event.button == 3:
                    cell = pick_cell_from_mouse(state.grid, camera, BASE_CELL_SIZE, event.pos)
                    if cell is not None:
                        log_append(format_debug_cell(state.grid, *cell))

            if event.type == pygame.MOUSEMOTION and panning and pan_last is not None:
                mx, my = event.pos
                lx, ly = pan_last
                camera.offset_x += mx - lx
                camera.offset_y += my - ly
                pan_last = event.pos

            if event.type == pygame.MOUSEBUTTONUP and event.button == 2:
                panning = False
                pan_last = None

        ui_manager.update(time_delta)

        screen.fill(grid_style.COLOR_BG)
        isolated = state.counter.isolated_cells(state.grid) if state.show_isolated else None
        path = state.solver.last_path if state.grid.count_state(PATH) else None
        draw_grid(
            screen, state.grid, camera, BASE_CELL_SIZE, small_font,
            highlight=state.last_toggled,
            isolated=isolated,
            path=path
        )
        ui_manager.draw_ui(screen)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
