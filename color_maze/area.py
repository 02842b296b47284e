"""Start / goal regions and their anchor points."""

from __future__ import annotations

from typing import Iterator

from .colors import Role
from .errors import EmptyAreaError

Point = tuple[int, int]  # (x, y)

# Neighbour scan used when the centroid itself is not part of the area.
_CORRECTION_OFFSETS: tuple[Point, ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def _raster_key(point: Point) -> tuple[int, int]:
    return point[1], point[0]


def _round_half_away(total: int, count: int) -> int:
    """round(total / count) with halves rounded away from zero, in exact integers."""
    magnitude = (2 * abs(total) + count) // (2 * count)
    return -magnitude if total < 0 else magnitude


class DesignatedArea:
    """All pixels of one marker colour, with running sums for the centroid."""

    def __init__(self, role: Role | None = None) -> None:
        self.role = role
        self._points: dict[Point, None] = {}  # insertion-ordered set
        self._x_sum = 0
        self._y_sum = 0

    def add(self, x: int, y: int) -> None:
        point = (x, y)
        if point in self._points:
            return
        self._points[point] = None
        self._x_sum += x
        self._y_sum += y

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, point: object) -> bool:
        return point in self._points

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    @property
    def has_points(self) -> bool:
        return bool(self._points)

    @property
    def points(self) -> list[Point]:
        return list(self._points)

    def centroid(self) -> Point:
        if not self._points:
            raise EmptyAreaError(f"centroid() called on an empty {self._label()} area")
        n = len(self._points)
        return _round_half_away(self._x_sum, n), _round_half_away(self._y_sum, n)

    def resolve(self) -> Point:
        """Pick the single representative point of the area.

        The centroid is used when it belongs to the area.  Odd shapes (rings,
        L-blobs) can put it on a wall, so its eight neighbours are tried next,
        and finally the first point in raster order (top row first), which is
        the first point added when the area is filled by scanning an image.
        """
        if not self._points:
            raise EmptyAreaError(f"resolve() called on an empty {self._label()} area")
        if len(self._points) == 1:
            return next(iter(self._points))

        cx, cy = self.centroid()
        if (cx, cy) in self._points:
            return cx, cy
        for dx, dy in _CORRECTION_OFFSETS:
            candidate = (cx + dx, cy + dy)
            if candidate in self._points:
                return candidate
        return min(self._points, key=_raster_key)

    def _label(self) -> str:
        return self.role.name.lower() if self.role is not None else "designated"

    def __repr__(self) -> str:
        return f"DesignatedArea(role={self._label()}, points={len(self._points)})"
