"""8-connected A* over a :class:`~color_maze.graph.MazeGraph`.

Moves cost 10 orthogonally and 14 diagonally; the heuristic is the matching
octile distance, so it never overestimates.  A diagonal move is only allowed
when both orthogonal cells beside it are walkable (no squeezing past a wall
corner).  Equal-f ties are resolved by the frontier in insertion order.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable

from .area import Point
from .frontier import OpenFrontier
from .graph import DIAGONAL_COST, ORTHOGONAL_COST, Cell, Direction, MazeGraph

log = logging.getLogger(__name__)


class Outcome(enum.Enum):
    PATH_FOUND = "path_found"
    NO_PATH = "no_path"


@dataclass(frozen=True)
class SearchResult:
    outcome: Outcome
    expanded: int
    cost: int | None = None

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.PATH_FOUND


def octile_distance(a: Point, b: Point) -> int:
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    return DIAGONAL_COST * min(dx, dy) + ORTHOGONAL_COST * abs(dx - dy)


class AStar:
    """Single-pass search; parent links are left in the graph's cells."""

    def __init__(
        self,
        graph: MazeGraph,
        logger: logging.Logger | None = None,
        on_close: Callable[[Cell], None] | None = None,
    ) -> None:
        self.graph = graph
        self.log = logger or log
        self.on_close = on_close
        self.frontier: OpenFrontier[Point] = OpenFrontier()
        graph.reset_search()

    def run(self, max_expansions: int | None = None) -> SearchResult:
        """Search until the goal is closed or the frontier runs dry.

        ``max_expansions`` is an optional cap on closed cells; hitting it is
        reported as NO_PATH.
        """
        graph = self.graph
        goal = graph.goal
        frontier = self.frontier

        start = graph.start_cell
        start.g = 0
        start.h = octile_distance(start.coords, goal)
        start.parent = None
        start.open = True
        frontier.insert(start.coords, start.f)
        self.log.debug("A* start %s -> goal %s (h=%d)", graph.start, goal, start.h)

        expanded = 0
        while not frontier.is_empty():
            if max_expansions is not None and expanded >= max_expansions:
                self.log.warning("gave up after %d expansions without reaching %s", expanded, goal)
                return SearchResult(Outcome.NO_PATH, expanded)

            current = graph.cell(*frontier.extract_min())
            current.open = False
            current.closed = True
            expanded += 1
            if self.on_close is not None:
                self.on_close(current)

            if current.coords == goal:
                self.log.info("path found: cost %d after %d expansions", current.g, expanded)
                return SearchResult(Outcome.PATH_FOUND, expanded, current.g)

            self._expand(current)

        self.log.info("no path: frontier exhausted after %d expansions", expanded)
        return SearchResult(Outcome.NO_PATH, expanded)

    def _expand(self, current: Cell) -> None:
        graph = self.graph
        goal = graph.goal
        for direction in Direction:
            if not graph.has_neighbor(current, direction):
                continue
            if direction.is_diagonal and not self._corner_clear(current, direction):
                continue

            neighbor = graph.neighbor(current, direction)
            if not neighbor.walkable or neighbor.closed:
                continue

            g = current.g + direction.step_cost
            if not neighbor.open:
                neighbor.g = g
                neighbor.h = octile_distance(neighbor.coords, goal)
                neighbor.parent = current.coords
                neighbor.open = True
                self.frontier.insert(neighbor.coords, neighbor.f)
            elif g < neighbor.g:
                neighbor.g = g
                neighbor.parent = current.coords
                self.frontier.decrease_priority(neighbor.coords, neighbor.f)

    def _corner_clear(self, cell: Cell, direction: Direction) -> bool:
        # a diagonal neighbour in bounds implies both flanking cells are too
        return all(self.graph.neighbor(cell, side).walkable for side in direction.corner_directions)


def find_path(
    graph: MazeGraph,
    *,
    max_expansions: int | None = None,
    logger: logging.Logger | None = None,
    on_close: Callable[[Cell], None] | None = None,
) -> SearchResult:
    return AStar(graph, logger=logger, on_close=on_close).run(max_expansions)
