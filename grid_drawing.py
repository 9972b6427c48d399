import math
import pygame
from dataclasses import dataclass
from typing import Tuple, Optional, List, Dict
from grid_model import Grid, Coord, OCCUPIED, PATH
import grid_style

STATE_COLORS = {
    OCCUPIED: grid_style.COLOR_OCCUPIED,
    PATH: grid_style.COLOR_PATH,
}


@dataclass
class Camera:
    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = 1.0

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        return (sx - self.offset_x) / self.zoom, (sy - self.offset_y) / self.zoom

    def world_to_screen(self, wx: float, wy: float) -> Tuple[float, float]:
        return wx * self.zoom + self.offset_x, wy * self.zoom + self.offset_y

    def zoom_at(self, mouse_pos: Tuple[int, int], zoom_factor: float, min_zoom: float, max_zoom: float) -> None:
        mx, my = mouse_pos
        wx, wy = self.screen_to_world(mx, my)

        new_zoom = max(min_zoom, min(max_zoom, self.zoom * zoom_factor))
        if abs(new_zoom - self.zoom) < 1e-9:
            return

        # keep the world point under the mouse fixed
        self.zoom = new_zoom
        self.offset_x = mx - wx * self.zoom
        self.offset_y = my - wy * self.zoom

    def center_on(self, grid: Grid, screen_size: Tuple[int, int], base_cell_size: int) -> None:
        sw, sh = screen_size
        self.zoom = 1.0
        self.offset_x = (sw - grid.cols * base_cell_size) * 0.5
        self.offset_y = (sh - grid.rows * base_cell_size) * 0.5


def clamp_int(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def visible_range(grid: Grid, camera: Camera, base_cell_size: int, screen_size: Tuple[int, int]) -> Tuple[int, int, int, int]:
    """Return (x0, y0, x1, y1), the inclusive cell range intersecting the screen."""
    cell_size = base_cell_size * camera.zoom
    sw, sh = screen_size
    wl, wt = camera.screen_to_world(-cell_size, -cell_size)
    wr, wb = camera.screen_to_world(sw + cell_size, sh + cell_size)
    x0 = clamp_int(int(math.floor(wl / base_cell_size)), 0, grid.cols - 1)
    y0 = clamp_int(int(math.floor(wt / base_cell_size)), 0, grid.rows - 1)
    x1 = clamp_int(int(math.ceil(wr / base_cell_size)), 0, grid.cols - 1)
    y1 = clamp_int(int(math.ceil(wb / base_cell_size)), 0, grid.rows - 1)
    return x0, y0, x1, y1


def draw_grid(
    screen: pygame.Surface,
    grid: Grid,
    camera: Camera,
    base_cell_size: int,
    font: Optional[pygame.font.Font] = None,
    highlight: Optional[Coord] = None,
    isolated: Optional[List[Coord]] = None,
    path: Optional[List[Coord]] = None
) -> None:
    cell_size = base_cell_size * camera.zoom
    if cell_size < 2:
        return

    step_of: Dict[Coord, int] = {}
    if path:
        step_of = {cell: i + 1 for i, cell in enumerate(path)}

    x0, y0, x1, y1 = visible_range(grid, camera, base_cell_size, screen.get_size())
    for y in range(y0, y1 + 1):
        for x in range(x0, x1 + 1):
            sx, sy = camera.world_to_screen(x * base_cell_size, y * base_cell_size)
            rect = pygame.Rect(int(sx), int(sy), int(cell_size), int(cell_size))

            state = grid.cell_state(x, y)
            pygame.draw.rect(screen, STATE_COLORS.get(state, grid_style.COLOR_FREE), rect)
            pygame.draw.rect(screen, grid_style.COLOR_GRID_LINES, rect, 1)

            if highlight is not None and (x, y) == highlight:
                pygame.draw.rect(screen, grid_style.COLOR_EDITOR_HIGHLIGHT, rect, 3)

            if isolated and (x, y) in isolated:
                pygame.draw.rect(screen, grid_style.COLOR_ISOLATED_HIGHLIGHT, rect, 4)

            if font is not None and camera.zoom >= 1.0 and state == PATH and (x, y) in step_of:
                surf = font.render(str(step_of[(x, y)]), True, grid_style.COLOR_TEXT_DEBUG)
                screen.blit(surf, (rect.x + 3, rect.y + 2))


def pick_cell_from_mouse(grid: Grid, camera: Camera, base_cell_size: int, mouse_pos: Tuple[int, int]) -> Optional[Coord]:
    mx, my = mouse_pos
    wx, wy = camera.screen_to_world(mx, my)
    x = int(wx // base_cell_size)
    y = int(wy // base_cell_size)
    if grid.in_range(x, y):
        return (x, y)
    return None
