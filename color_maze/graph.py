"""
graph.py — dense per-pixel grid the A* engine searches.

Every pixel becomes one :class:`Cell`.  The grid owns all cells; everything
else refers to them by (x, y) coordinate, including a cell's parent link.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Protocol

import numpy as np

from .area import DesignatedArea, Point
from .colors import Role, classify, classify_image
from .errors import NoGoalRegionError, NoStartRegionError

log = logging.getLogger(__name__)

ORTHOGONAL_COST = 10
DIAGONAL_COST = 14


###############################################################################
# Directions
###############################################################################

class Direction(enum.Enum):
    """The eight neighbours of a pixel, ordered by increasing (y, x) offset."""

    NORTHWEST = (-1, -1)
    NORTH = (0, -1)
    NORTHEAST = (1, -1)
    WEST = (-1, 0)
    EAST = (1, 0)
    SOUTHEAST = (1, 1)
    SOUTH = (0, 1)
    SOUTHWEST = (-1, 1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def is_diagonal(self) -> bool:
        return self.dx != 0 and self.dy != 0

    @property
    def step_cost(self) -> int:
        return DIAGONAL_COST if self.is_diagonal else ORTHOGONAL_COST

    @property
    def corner_directions(self) -> tuple[Direction, ...]:
        """Orthogonal moves flanking a diagonal one; both must be open to take it."""
        return _CORNERS[self]


_CORNERS: dict[Direction, tuple[Direction, ...]] = {
    Direction.NORTHWEST: (Direction.WEST, Direction.NORTH),
    Direction.NORTHEAST: (Direction.NORTH, Direction.EAST),
    Direction.SOUTHWEST: (Direction.WEST, Direction.SOUTH),
    Direction.SOUTHEAST: (Direction.SOUTH, Direction.EAST),
    Direction.NORTH: (),
    Direction.WEST: (),
    Direction.EAST: (),
    Direction.SOUTH: (),
}


###############################################################################
# Cells
###############################################################################

@dataclass(eq=False)
class Cell:
    x: int
    y: int
    role: Role = Role.WALL
    open: bool = False
    closed: bool = False
    g: int = 0
    h: int = 0
    parent: Point | None = None

    @property
    def walkable(self) -> bool:
        return self.role.walkable

    @property
    def f(self) -> int:
        return self.g + self.h

    @property
    def coords(self) -> Point:
        return self.x, self.y

    def reset(self) -> None:
        self.open = False
        self.closed = False
        self.g = 0
        self.h = 0
        self.parent = None

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open" if self.open else "unvisited"
        return f"Cell({self.x}, {self.y}, {self.role.name}, {state}, g={self.g}, h={self.h}, parent={self.parent})"


###############################################################################
# Graph
###############################################################################

class PixelSource(Protocol):
    width: int
    height: int

    def get_rgb(self, x: int, y: int) -> tuple[int, int, int]: ...


class MazeGraph:
    def __init__(self, cells: list[list[Cell]], start_area: DesignatedArea, goal_area: DesignatedArea) -> None:
        self._cells = cells  # [y][x]
        self.height = len(cells)
        self.width = len(cells[0]) if cells else 0
        self.start_area = start_area
        self.goal_area = goal_area
        self.start: Point = start_area.resolve()
        self.goal: Point = goal_area.resolve()

    # -- construction --------------------------------------------------------

    @classmethod
    def build(cls, width: int, height: int, role_at: Callable[[int, int], Role]) -> MazeGraph:
        """Classify every pixel once (raster order) and collect the marker regions."""
        if width <= 0 or height <= 0:
            raise ValueError(f"image must be non-empty, got {width}x{height}")
        start_area = DesignatedArea(Role.START)
        goal_area = DesignatedArea(Role.GOAL)
        cells: list[list[Cell]] = []
        for y in range(height):
            row = []
            for x in range(width):
                role = Role(role_at(x, y))
                row.append(Cell(x, y, role))
                if role is Role.START:
                    start_area.add(x, y)
                elif role is Role.GOAL:
                    goal_area.add(x, y)
            cells.append(row)

        if not start_area.has_points:
            raise NoStartRegionError()
        if not goal_area.has_points:
            raise NoGoalRegionError()

        graph = cls(cells, start_area, goal_area)
        log.debug(
            "built %dx%d graph: start area %d px -> %s, goal area %d px -> %s",
            width, height, len(start_area), graph.start, len(goal_area), graph.goal,
        )
        return graph

    @classmethod
    def from_roles(cls, roles: np.ndarray) -> MazeGraph:
        """Build from an (H, W) array of :class:`Role` codes."""
        height, width = roles.shape
        codes = roles.tolist()
        return cls.build(width, height, lambda x, y: codes[y][x])

    @classmethod
    def from_rgb(cls, rgb: np.ndarray) -> MazeGraph:
        return cls.from_roles(classify_image(rgb))

    @classmethod
    def from_pixels(cls, source: PixelSource) -> MazeGraph:
        return cls.build(source.width, source.height, lambda x, y: classify(*source.get_rgb(x, y)))

    # -- queries -------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside the {self.width}x{self.height} grid")
        return self._cells[y][x]

    @property
    def start_cell(self) -> Cell:
        return self.cell(*self.start)

    @property
    def goal_cell(self) -> Cell:
        return self.cell(*self.goal)

    def has_neighbor(self, cell: Cell, direction: Direction) -> bool:
        return self.in_bounds(cell.x + direction.dx, cell.y + direction.dy)

    def neighbor(self, cell: Cell, direction: Direction) -> Cell:
        return self.cell(cell.x + direction.dx, cell.y + direction.dy)

    def directions_in_bounds(self, cell: Cell) -> list[Direction]:
        return [d for d in Direction if self.has_neighbor(cell, d)]

    def neighbors(self, cell: Cell) -> list[Cell]:
        return [self.neighbor(cell, d) for d in self.directions_in_bounds(cell)]

    def cells(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def reset_search(self) -> None:
        for cell in self.cells():
            cell.reset()

    def __repr__(self) -> str:
        return f"MazeGraph({self.width}x{self.height}, start={self.start}, goal={self.goal})"
