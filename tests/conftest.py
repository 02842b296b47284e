import numpy as np
import pytest

from color_maze.colors import FLOOR_COLOR, GOAL_COLOR, START_COLOR, WALL_COLOR
from color_maze.graph import MazeGraph

PALETTE = {
    ".": FLOOR_COLOR,
    "#": WALL_COLOR,
    "S": START_COLOR,
    "G": GOAL_COLOR,
}


def rgb_from_rows(rows):
    """ASCII maze → (H, W, 3) uint8 RGB array. '.' floor, '#' wall, 'S' start, 'G' goal."""
    height, width = len(rows), len(rows[0])
    rgb = np.zeros((height, width, 3), dtype=np.uint8)
    for y, row in enumerate(rows):
        assert len(row) == width, "ragged maze"
        for x, ch in enumerate(row):
            rgb[y, x] = PALETTE[ch]
    return rgb


@pytest.fixture
def maze_rgb():
    return rgb_from_rows


@pytest.fixture
def maze_graph():
    def build(rows):
        return MazeGraph.from_rgb(rgb_from_rows(rows))

    return build


# 5x5, wall column at x=2 with a single gap at (2, 2)
GAP_MAZE = [
    "..#..",
    "..#..",
    "S...G",
    "..#..",
    "..#..",
]

CLOSED_MAZE = [
    "..#..",
    "..#..",
    "S.#.G",
    "..#..",
    "..#..",
]


@pytest.fixture
def gap_maze():
    return list(GAP_MAZE)


@pytest.fixture
def closed_maze():
    return list(CLOSED_MAZE)
