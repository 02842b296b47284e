"""Pixel colour to maze role.

Roles are decided with tolerance bands measured as the distance of each
channel from full intensity (255 - value), so JPEG noise around a pure red,
blue or white pixel is still read correctly.  These thresholds are the only
contract between an image producer and the solver.
"""

from __future__ import annotations

import enum

import numpy as np

# Distance-from-255 bands.
MARKER_NEAR = 56     # channel that must be (almost) saturated in a marker
MARKER_FAR = 128     # channels that must be (almost) off in a marker
FLOOR_NEAR = 20      # every channel of a floor pixel

PATH_COLOR = (0, 255, 0)
START_COLOR = (255, 0, 0)
GOAL_COLOR = (0, 0, 255)
FLOOR_COLOR = (255, 255, 255)
WALL_COLOR = (0, 0, 0)


class Role(enum.IntEnum):
    WALL = 0
    PASSABLE = 1
    START = 2
    GOAL = 3

    @property
    def walkable(self) -> bool:
        return self is not Role.WALL


def classify(r: int, g: int, b: int) -> Role:
    """Return the role of a single RGB pixel."""
    dr, dg, db = 255 - int(r), 255 - int(g), 255 - int(b)
    if dr < MARKER_NEAR and dg > MARKER_FAR and db > MARKER_FAR:
        return Role.START
    if dr > MARKER_FAR and dg > MARKER_FAR and db < MARKER_NEAR:
        return Role.GOAL
    if dr < FLOOR_NEAR and dg < FLOOR_NEAR and db < FLOOR_NEAR:
        return Role.PASSABLE
    return Role.WALL


def classify_image(rgb: np.ndarray) -> np.ndarray:
    """Vectorised :func:`classify` over an (H, W, 3) RGB array → (H, W) uint8 role codes."""
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"expected an (H, W, 3) RGB array, got shape {rgb.shape}")
    dist = 255 - rgb.astype(np.int16)
    dr, dg, db = dist[..., 0], dist[..., 1], dist[..., 2]

    start = (dr < MARKER_NEAR) & (dg > MARKER_FAR) & (db > MARKER_FAR)
    goal = (dr > MARKER_FAR) & (dg > MARKER_FAR) & (db < MARKER_NEAR)
    floor = (dr < FLOOR_NEAR) & (dg < FLOOR_NEAR) & (db < FLOOR_NEAR)

    roles = np.full(rgb.shape[:2], Role.WALL, dtype=np.uint8)
    # later assignments win, so apply in reverse priority order
    roles[floor] = Role.PASSABLE
    roles[goal] = Role.GOAL
    roles[start] = Role.START
    return roles
