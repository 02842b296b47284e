"""In-memory RGB buffers and image file I/O.

OpenCV decodes to BGR; everything inside color_maze works in RGB, so the
conversion happens here and nowhere else.
"""

from __future__ import annotations

from pathlib import Path

import cv2  # type: ignore
import numpy as np

from .errors import ImageReadError, ImageWriteError


class PixelBuffer:
    """Mutable (H, W, 3) uint8 RGB image addressed as (x, y)."""

    def __init__(self, rgb: np.ndarray) -> None:
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise ValueError(f"expected an (H, W, 3) RGB array, got shape {rgb.shape}")
        self.array = np.ascontiguousarray(rgb, dtype=np.uint8)

    @classmethod
    def from_array(cls, data: np.ndarray) -> PixelBuffer:
        """Accept grayscale, RGB or RGBA input; alpha is dropped."""
        if data.ndim == 2:
            data = np.repeat(data[:, :, None], 3, axis=2)
        elif data.ndim == 3 and data.shape[2] == 4:
            data = data[:, :, :3]
        return cls(data)

    @property
    def width(self) -> int:
        return self.array.shape[1]

    @property
    def height(self) -> int:
        return self.array.shape[0]

    def get_rgb(self, x: int, y: int) -> tuple[int, int, int]:
        r, g, b = self.array[y, x]
        return int(r), int(g), int(b)

    def set_rgb(self, x: int, y: int, rgb: tuple[int, int, int]) -> None:
        self.array[y, x] = rgb

    def copy(self) -> PixelBuffer:
        return PixelBuffer(self.array.copy())


def load_image(path: str | Path) -> PixelBuffer:
    """Decode any image OpenCV reads into 8-bit RGB; alpha is discarded."""
    data = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if data is None:
        raise ImageReadError(f"Cannot read image {path}")
    if data.dtype == np.uint16:
        data = (data >> 8).astype(np.uint8)
    elif data.dtype != np.uint8:
        raise ImageReadError(f"Unsupported pixel type {data.dtype} in {path}")
    if data.ndim == 3 and data.shape[2] == 1:
        data = data[:, :, 0]
    elif data.ndim == 3 and data.shape[2] == 4:
        data = cv2.cvtColor(data, cv2.COLOR_BGRA2RGBA)
    elif data.ndim == 3:
        data = cv2.cvtColor(data, cv2.COLOR_BGR2RGB)
    return PixelBuffer.from_array(data)


def save_image(path: str | Path, buffer: PixelBuffer) -> None:
    try:
        ok = cv2.imwrite(str(path), cv2.cvtColor(buffer.array, cv2.COLOR_RGB2BGR))
    except cv2.error as e:
        raise ImageWriteError(f"Cannot write image {path}: {e}") from e
    if not ok:
        raise ImageWriteError(f"Cannot write image {path}")
