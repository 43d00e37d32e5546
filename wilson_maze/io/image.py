import os
import pygame
from wilson_maze.viz.renderer import RenderError

class ImageWriter:
    @staticmethod
    def save(surface: pygame.Surface, filepath: str):
        """
        Encodes the surface as a PNG.
        The format is picked from the extension, so anything but .png is rejected.
        """
        if os.path.splitext(filepath)[1].lower() != ".png":
            raise RenderError(f"render failed: output path must end in .png, got {filepath}")

        directory = os.path.dirname(filepath)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            pygame.image.save(surface, filepath)
        except (pygame.error, OSError) as e:
            raise RenderError(f"render failed: could not write {filepath}: {e}") from e
