from typing import Dict, List, Tuple
import numpy as np
from wilson_maze.core.maze import Maze


def open_edges(maze: Maze) -> List[Tuple[int, int]]:
    """
    Returns (a, b) index pairs for every open wall, with b the cell that owns it.
    Border bits are ignored since they have no neighbour to connect to.
    """
    edges = []
    w = maze.width
    for idx, val in enumerate(maze.cells):
        x, y = idx % w, idx // w
        if val & Maze.NORTH_OPEN and y > 0:
            edges.append((idx - w, idx))
        if val & Maze.WEST_OPEN and x > 0:
            edges.append((idx - 1, idx))
    return edges


def is_spanning_tree(maze: Maze) -> bool:
    """True when the open walls connect all W*H cells with exactly W*H-1 edges and no cycle."""
    count = len(maze)
    if count == 0:
        return True
    edges = open_edges(maze)
    if len(edges) != count - 1:
        return False

    parent = list(range(count))

    def find(i):
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    for a, b in edges:
        ra, rb = find(a), find(b)
        if ra == rb:
            return False
        parent[ra] = rb
    # n-1 edges and no cycle means a single component
    return True


def degrees(maze: Maze) -> np.ndarray:
    """(height, width) array with the number of open passages out of each cell."""
    h, w = maze.height, maze.width
    cells = np.frombuffer(maze.cells.tobytes(), dtype=np.uint8).reshape(h, w)
    north = (cells & Maze.NORTH_OPEN) != 0
    west = (cells & Maze.WEST_OPEN) != 0
    # Border cells never own a usable passage through the outer wall
    north[0, :] = False
    west[:, 0] = False

    deg = north.astype(np.int32) + west.astype(np.int32)
    # A cell's south/east passage is its neighbour's north/west bit
    deg[:-1, :] += north[1:, :]
    deg[:, :-1] += west[:, 1:]
    return deg


def calculate_stats(maze: Maze) -> Dict[str, float]:
    total = len(maze)
    if total == 0:
        return {
            "dead_ends": 0,
            "corridors": 0,
            "junctions": 0,
            "open_edges": 0,
            "dead_end_percent": 0,
        }

    deg = degrees(maze)
    dead_ends = int(np.count_nonzero(deg == 1))
    return {
        "dead_ends": dead_ends,
        "corridors": int(np.count_nonzero(deg == 2)),
        "junctions": int(np.count_nonzero(deg >= 3)),
        "open_edges": int(deg.sum()) // 2,
        "dead_end_percent": (dead_ends / total) * 100,
    }
