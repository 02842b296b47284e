"""Image in, solved image out.

Ties the pieces together the way the command line uses them, and writes
whatever optional extras the options ask for.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

import imageio.v3 as iio  # type: ignore  # for GIF
import matplotlib.pyplot as plt  # type: ignore
import numpy as np

from .area import Point
from .astar import AStar, SearchResult
from .colors import PATH_COLOR, Role
from .errors import NoPathError, OutputWriteError
from .graph import Cell, MazeGraph
from .pixels import PixelBuffer, save_image
from .render import render_path, trace_path

log = logging.getLogger(__name__)

EXPLORED_TINT = (255, 170, 60)  # closed cells in animation frames


@dataclass(frozen=True)
class SolveOptions:
    max_expansions: int | None = None
    animate_path: Path | None = None
    frame_every: int = 500
    max_frames: int = 200
    csv_path: Path | None = None
    show: bool = False


@dataclass
class Solution:
    result: SearchResult
    path: list[Point]
    image: PixelBuffer
    graph: MazeGraph
    frames: list[np.ndarray] = field(default_factory=list)


class _FrameRecorder:
    """Snapshots the search every ``every`` closed cells.

    At most ``limit`` frames are kept: when full, every other frame is dropped
    and the interval doubles, so long searches still span the whole run.
    """

    def __init__(self, base: PixelBuffer, every: int, limit: int) -> None:
        self.canvas = base.array.copy()
        self.every = max(1, every)
        self.limit = max(2, limit)
        self.frames: list[np.ndarray] = []
        self._count = 0

    def __call__(self, cell: Cell) -> None:
        if cell.role is Role.PASSABLE:
            self.canvas[cell.y, cell.x] = EXPLORED_TINT
        self._count += 1
        if self._count % self.every:
            return
        if len(self.frames) >= self.limit:
            self.frames = self.frames[1::2]
            self.every *= 2
            if self._count % self.every:
                return
        self.frames.append(self.canvas.copy())


def write_path_csv(path: Path, points: list[Point]) -> None:
    try:
        with open(path, "w", newline="") as f:
            w = csv.writer(f)
            w.writerow(["x", "y"])
            w.writerows(points)
    except OSError as e:
        raise OutputWriteError(f"Cannot write path CSV {path}: {e}") from e


def write_animation(path: Path, frames: list[np.ndarray]) -> None:
    try:
        # pillow takes the frame duration in milliseconds
        iio.imwrite(path, np.stack(frames), duration=80, loop=0)
    except (OSError, ValueError) as e:
        raise OutputWriteError(f"Cannot write animation {path}: {e}") from e


def show_image(image: PixelBuffer, title: str = "") -> None:
    fig, ax = plt.subplots()
    ax.imshow(image.array)
    ax.set_title(title)
    ax.set_axis_off()
    plt.show()
    plt.close(fig)


def solve(buffer: PixelBuffer, options: SolveOptions | None = None, logger: logging.Logger | None = None) -> Solution:
    """Find and draw the shortest path; raise NoPathError when there is none.

    Nothing is written to disk here; see :func:`write_outputs`.
    """
    options = options or SolveOptions()
    logger = logger or log

    graph = MazeGraph.from_rgb(buffer.array)
    logger.info("maze %dx%d: start %s, goal %s", graph.width, graph.height, graph.start, graph.goal)

    recorder = _FrameRecorder(buffer, options.frame_every, options.max_frames) if options.animate_path else None
    result = AStar(graph, logger=logger, on_close=recorder).run(options.max_expansions)
    if not result.found:
        raise NoPathError(f"A connecting path could not be found after {result.expanded} expansions")

    image = buffer.copy()
    render_path(graph, image, PATH_COLOR)
    path = trace_path(graph)
    logger.info("path: %d cells, cost %d", len(path), result.cost)

    frames = recorder.frames + [image.array.copy()] if recorder is not None else []
    if options.show:
        show_image(image, f"path length={len(path)}")

    return Solution(result=result, path=path, image=image, graph=graph, frames=frames)


def write_outputs(
    solution: Solution,
    destination: Path,
    options: SolveOptions | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Save the solved image, then the optional CSV and animation.

    The image goes first so a failed save leaves no extras behind.
    """
    options = options or SolveOptions()
    logger = logger or log

    save_image(destination, solution.image)

    if options.csv_path is not None:
        write_path_csv(options.csv_path, solution.path)
        logger.info("path coordinates -> %s", options.csv_path)

    if options.animate_path is not None and solution.frames:
        write_animation(options.animate_path, solution.frames)
        logger.info("search animation (%d frames) -> %s", len(solution.frames), options.animate_path)
