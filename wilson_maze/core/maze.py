from array import array
from typing import Iterator, Tuple

Point = Tuple[int, int]
Segment = Tuple[Point, Point]


class CellRef:
    """Mutable handle on one cell of a Maze. Walls can only be opened."""

    __slots__ = ('maze', 'index')

    def __init__(self, maze: "Maze", index: int):
        self.maze = maze
        self.index = index

    @property
    def west_open(self) -> bool:
        return (self.maze.cells[self.index] & Maze.WEST_OPEN) != 0

    @property
    def north_open(self) -> bool:
        return (self.maze.cells[self.index] & Maze.NORTH_OPEN) != 0

    def set_west_open(self):
        self.maze.cells[self.index] |= Maze.WEST_OPEN

    def set_north_open(self):
        self.maze.cells[self.index] |= Maze.NORTH_OPEN

    def set(self, bits: int):
        self.maze.cells[self.index] |= bits & Maze.WALL_MASK


class Maze:
    # Each cell owns only its west and north walls.
    # East wall of (x,y) == west wall of (x+1,y); south wall of (x,y) == north wall of (x,y+1).
    WEST_OPEN  = 0b01
    NORTH_OPEN = 0b10
    WALL_MASK  = WEST_OPEN | NORTH_OPEN

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Maze dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        # 1 byte per cell, all walls closed
        self.cells = array('B', [0] * (width * height))

    def __len__(self) -> int:
        return len(self.cells)

    def is_empty(self) -> bool:
        return len(self.cells) == 0

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def _check_index(self, index: int):
        if not 0 <= index < len(self.cells):
            raise IndexError(f"Cell index {index} out of range for {self.width}x{self.height} maze")

    def cell(self, index: int) -> int:
        self._check_index(index)
        return self.cells[index]

    def cell_mut(self, index: int) -> CellRef:
        self._check_index(index)
        return CellRef(self, index)

    def west_open(self, index: int) -> bool:
        return (self.cell(index) & self.WEST_OPEN) != 0

    def north_open(self, index: int) -> bool:
        return (self.cell(index) & self.NORTH_OPEN) != 0

    def set_west_open(self, index: int):
        self._check_index(index)
        self.cells[index] |= self.WEST_OPEN

    def set_north_open(self, index: int):
        self._check_index(index)
        self.cells[index] |= self.NORTH_OPEN

    def walls(self, cell_size: int) -> Iterator[Segment]:
        """
        Yields ((x0, y0), (x1, y1)) pixel segments for every closed wall, followed by
        the south and east borders. The north wall of (0,0) is the entrance and the
        south wall of (W-1,H-1) is the exit; neither is yielded.
        """
        if self.is_empty():
            return
        s = cell_size
        for y in range(self.height):
            for x in range(self.width):
                val = self.cells[y * self.width + x]
                left, top = x * s, y * s

                if not (val & self.NORTH_OPEN or (x == 0 and y == 0)):
                    yield ((left, top), (left + s, top))
                if not val & self.WEST_OPEN:
                    yield ((left, top), (left, top + s))

        bottom = self.height * s
        right = self.width * s
        # South border stops short of the last cell to leave the exit open
        yield ((0, bottom), ((self.width - 1) * s, bottom))
        yield ((right, 0), (right, bottom))

    def render(self, cell_size: int = 25):
        """Rasterizes the maze into a W*cell_size x H*cell_size RGBA surface."""
        from wilson_maze.viz.renderer import MazeRenderer
        return MazeRenderer(cell_size).render(self)
