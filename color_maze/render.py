"""Draw a solved path back onto the image."""

from __future__ import annotations

from typing import Protocol

from .area import Point
from .colors import PATH_COLOR, Role
from .graph import MazeGraph


class PixelSink(Protocol):
    def set_rgb(self, x: int, y: int, rgb: tuple[int, int, int]) -> None: ...


def trace_path(graph: MazeGraph) -> list[Point]:
    """Follow parent links from the goal anchor; return the path start → goal."""
    goal = graph.goal_cell
    if not goal.closed:
        raise ValueError("the goal was never reached; there is no path to trace")
    path = [goal.coords]
    cell = goal
    while cell.parent is not None:
        cell = graph.cell(*cell.parent)
        path.append(cell.coords)
    path.reverse()
    return path


def render_path(graph: MazeGraph, sink: PixelSink, color: tuple[int, int, int] = PATH_COLOR) -> int:
    """Paint every path cell except the start/goal markers; return pixels painted."""
    painted = 0
    for x, y in trace_path(graph):
        if graph.cell(x, y).role in (Role.START, Role.GOAL):
            continue
        sink.set_rgb(x, y, color)
        painted += 1
    return painted
