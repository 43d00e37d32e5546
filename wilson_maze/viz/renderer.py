import logging
import pygame
from wilson_maze.core.maze import Maze

logger = logging.getLogger(__name__)


class RenderError(Exception):
    """Raised when a maze cannot be rasterized or encoded."""


class MazeRenderer:
    COLOR_BG = (0, 0, 0, 0)
    # Black at 80% opacity
    COLOR_WALL = (0, 0, 0, 200)

    def __init__(self, cell_size: int = 25):
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size

    def surface_size(self, maze: Maze):
        return maze.width * self.cell_size, maze.height * self.cell_size

    def render(self, maze: Maze) -> pygame.Surface:
        width, height = self.surface_size(maze)
        if width == 0 or height == 0:
            raise RenderError(f"render failed: cannot rasterize a {maze.width}x{maze.height} maze")

        try:
            surface = pygame.Surface((width, height), pygame.SRCALPHA, 32)
            surface.fill(self.COLOR_BG)

            # Border walls sit exactly on the canvas edge; pull them onto the last pixel row/column
            max_x, max_y = width - 1, height - 1
            drawn = 0
            for (x0, y0), (x1, y1) in maze.walls(self.cell_size):
                if (x0, y0) == (x1, y1):
                    continue
                start = (min(x0, max_x), min(y0, max_y))
                end = (min(x1, max_x), min(y1, max_y))
                pygame.draw.aaline(surface, self.COLOR_WALL, start, end)
                drawn += 1
        except pygame.error as e:
            raise RenderError(f"render failed: {e}") from e

        logger.debug(f"Rendered {drawn} wall segments onto {width}x{height} surface")
        return surface
