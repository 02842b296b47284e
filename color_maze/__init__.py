"""Shortest-path solver for colour-marked maze images."""

from .area import DesignatedArea
from .astar import AStar, Outcome, SearchResult, find_path, octile_distance
from .colors import Role, classify, classify_image
from .errors import (
    EmptyAreaError,
    EmptyFrontierError,
    ImageReadError,
    ImageWriteError,
    MazeError,
    MazeFormatError,
    NoGoalRegionError,
    NoPathError,
    NoStartRegionError,
    OutputWriteError,
)
from .frontier import OpenFrontier
from .graph import Cell, Direction, MazeGraph
from .pixels import PixelBuffer, load_image, save_image
from .render import render_path, trace_path
from .solver import Solution, SolveOptions, solve, write_outputs

__version__ = "0.1.0"
