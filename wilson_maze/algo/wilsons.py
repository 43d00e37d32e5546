import logging
import random
from array import array
from typing import Iterator, List, Optional, Tuple
from wilson_maze.core.direction import Direction
from wilson_maze.core.maze import Maze
from wilson_maze.algo.base import Generator

logger = logging.getLogger(__name__)

class WilsonsAlgorithm(Generator):
    """
    Uniform spanning tree generator using loop-erased random walks.

    Every generator cell is one byte:
      EMPTY                      never touched by a walk
      WALK | (direction << 4)    on the current walk, leaving in `direction`
      IN_MAZE | wall bits        part of the tree; wall bits are Maze.WEST_OPEN / Maze.NORTH_OPEN
    """

    EMPTY   = 0b000000
    IN_MAZE = 0b000100
    WALK    = 0b001000
    DIR_SHIFT = 4
    DIR_MASK  = 0b11

    # Walks between progress updates from run()
    PROGRESS_INTERVAL = 100

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        count = width * height
        self.cells = array('B', [self.EMPTY] * count)
        self.unvisited_candidates: List[int] = list(range(count))
        self.walk_count = 0

        # Scratch space reused across walks
        self._directions = list(Direction.ALL)
        self._walk_indexes: List[int] = []

        self.started = False
        self.finished = False

    def __len__(self) -> int:
        return len(self.cells)

    def is_in_maze(self, index: int) -> bool:
        return (self.cells[index] & self.IN_MAZE) != 0

    def walk_direction(self, index: int) -> Optional[int]:
        val = self.cells[index]
        if val & self.WALK:
            return (val >> self.DIR_SHIFT) & self.DIR_MASK
        return None

    def adjacent(self, index: int, direction: int) -> Optional[int]:
        """Index of the neighbour in `direction`, or None when `index` is on that border."""
        w = self.width
        if direction == Direction.WEST:
            return None if index % w == 0 else index - 1
        if direction == Direction.EAST:
            return None if index % w == w - 1 else index + 1
        if direction == Direction.NORTH:
            return None if index < w else index - w
        if direction == Direction.SOUTH:
            return None if index >= w * (self.height - 1) else index + w
        raise ValueError(f"Unknown direction: {direction}")

    def choose_walk_start(self) -> Optional[int]:
        # Lazy deletion: candidates absorbed by earlier walks are dropped here.
        # Walk cells count as unvisited, so the pool does not depend on cleanup.
        while self.unvisited_candidates:
            idx = self.unvisited_candidates.pop()
            if not self.cells[idx] & self.IN_MAZE:
                return idx
        return None

    def choose_random_adjacent(self, from_idx: int, rng: random.Random) -> Tuple[int, int]:
        # Stepping back onto the previous cell stays allowed; excluding it would bias the tree.
        directions = self._directions
        rng.shuffle(directions)
        for direction in directions:
            adjacent = self.adjacent(from_idx, direction)
            if adjacent is not None:
                return direction, adjacent
        raise RuntimeError(
            f"Cell {from_idx} has no neighbours in a {self.width}x{self.height} grid"
        )

    def walk(self, start: int, rng: random.Random):
        """Random walk from `start` until it touches the maze, leaving a direction in each cell."""
        cells = self.cells
        curr = start
        while True:
            self._walk_indexes.append(curr)
            direction, next_idx = self.choose_random_adjacent(curr, rng)
            # Overwriting an earlier direction here is what erases loops
            cells[curr] = self.WALK | (direction << self.DIR_SHIFT)
            self.step_count += 1
            if cells[next_idx] & self.IN_MAZE:
                return
            curr = next_idx

    def carve(self, start: int):
        """
        Adds the loop-erased walk starting at `start` to the maze.

        The path is followed through the directions stored in the cells, not the
        visited indexes, so cells on erased loops are skipped. Cells own their
        north and west walls, so both the outgoing direction and the direction the
        cell was entered from decide which of its walls open.
        """
        cells = self.cells
        curr = start
        last_direction = None
        while True:
            val = cells[curr]
            if val & self.WALK:
                direction = (val >> self.DIR_SHIFT) & self.DIR_MASK
                bits = 0
                if direction == Direction.WEST or last_direction == Direction.EAST:
                    bits |= Maze.WEST_OPEN
                if direction == Direction.NORTH or last_direction == Direction.SOUTH:
                    bits |= Maze.NORTH_OPEN
                cells[curr] = self.IN_MAZE | bits
                next_idx = self.adjacent(curr, direction)
                if next_idx is None:
                    raise RuntimeError(
                        f"Walk at cell {curr} points {Direction.name(direction)} off the grid"
                    )
                curr = next_idx
                last_direction = direction
            elif val & self.IN_MAZE:
                # Join the tree. North/West entries were opened by the previous walk cell.
                if last_direction == Direction.EAST:
                    cells[curr] |= Maze.WEST_OPEN
                elif last_direction == Direction.SOUTH:
                    cells[curr] |= Maze.NORTH_OPEN
                return
            else:
                raise RuntimeError(f"Carve reached empty cell {curr}; walk state is corrupt")

    def clear_walk(self):
        """Resets walk cells that did not end up in the maze."""
        cells = self.cells
        for idx in self._walk_indexes:
            if cells[idx] & self.WALK:
                cells[idx] = self.EMPTY
        self._walk_indexes.clear()

    def run(self, rng: random.Random) -> Iterator[str]:
        if self.started:
            raise RuntimeError("WilsonsAlgorithm instances are single-use")
        self.started = True

        if not self.cells:
            self.finished = True
            yield "Done"
            return

        rng.shuffle(self.unvisited_candidates)

        # A single random cell seeds the tree
        initial_idx = self.choose_walk_start()
        self.cells[initial_idx] = self.IN_MAZE

        while True:
            start_idx = self.choose_walk_start()
            if start_idx is None:
                break

            self.walk(start_idx, rng)
            self.carve(start_idx)
            self.clear_walk()
            self.walk_count += 1

            if self.walk_count % self.PROGRESS_INTERVAL == 0:
                yield f"Walks: {self.walk_count}, candidates left: {len(self.unvisited_candidates)}"

        self.finished = True
        logger.debug(
            "Generated %dx%d maze in %d walks (%d steps)",
            self.width, self.height, self.walk_count, self.step_count,
        )
        yield "Done"

    def emit(self) -> Maze:
        if not self.finished:
            raise RuntimeError("Cannot emit a maze before generation has completed")

        maze = Maze(self.width, self.height)
        for idx, val in enumerate(self.cells):
            if not val & self.IN_MAZE:
                raise RuntimeError(f"Cell {idx} is not part of the maze after generation (state {val:#04x})")
            maze.cells[idx] = val & Maze.WALL_MASK
        return maze

    def dump(self) -> str:
        rows = []
        for y in range(self.height):
            top = ["-"]
            middle = []
            for x in range(self.width):
                val = self.cells[y * self.width + x]
                in_maze = val & self.IN_MAZE
                top.append(" " if in_maze and val & Maze.NORTH_OPEN else "-")
                top.append("-")

                middle.append(" " if in_maze and val & Maze.WEST_OPEN else "|")
                if in_maze:
                    middle.append(" ")
                elif val & self.WALK:
                    middle.append(Direction.ARROWS[(val >> self.DIR_SHIFT) & self.DIR_MASK])
                else:
                    middle.append("X")
            middle.append("|")
            rows.append("".join(top))
            rows.append("".join(middle))
        rows.append("--" * self.width + "-")
        return "\n".join(rows) + "\n"

    def __str__(self) -> str:
        return self.dump()
