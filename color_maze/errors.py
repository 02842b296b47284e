"""Exceptions raised while building, searching and rendering a maze."""

from __future__ import annotations


class MazeError(Exception):
    """Base class for every error raised by color_maze."""


class EmptyAreaError(MazeError, LookupError):
    """A designated area was resolved before any point was added."""


class MazeFormatError(MazeError, ValueError):
    """The image does not describe a usable maze."""


class NoStartRegionError(MazeFormatError):
    def __init__(self, message: str = "The image doesn't appear to have any start region marked (red)."):
        super().__init__(message)


class NoGoalRegionError(MazeFormatError):
    def __init__(self, message: str = "The image doesn't appear to have any goal region marked (blue)."):
        super().__init__(message)


class EmptyFrontierError(MazeError, IndexError):
    """extract_min() was called on an empty frontier."""


class NoPathError(MazeError):
    """The search exhausted the frontier without reaching the goal."""


class ImageReadError(MazeError, OSError):
    pass


class OutputWriteError(MazeError, OSError):
    """A result file (image, CSV, animation) could not be written."""


class ImageWriteError(OutputWriteError):
    pass
