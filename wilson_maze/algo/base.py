import random
from abc import ABC, abstractmethod
from typing import Iterator
from wilson_maze.core.maze import Maze

class Generator(ABC):
    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Generator dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.step_count = 0

    @abstractmethod
    def run(self, rng: random.Random) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        Generator state is modified in-place; call emit() once exhausted.
        """
        pass

    @abstractmethod
    def emit(self) -> Maze:
        """Builds the finished Maze from the generator state."""
        pass

    def generate(self, rng: random.Random) -> Maze:
        """Helper to run the generator to completion and return the maze."""
        for _ in self.run(rng):
            pass
        return self.emit()
