"""
Pixel buffer access for color extraction.

Wraps a raw RGBA buffer in a bounds-checked (height, width, 4) array and
provides stride-subsampled, alpha-filtered sampling of rectangular regions.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
from loguru import logger

from outfit_intel.config import config
from .color_model import round_half_up


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in pixel coordinates."""
    x: int
    y: int
    width: int
    height: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PixelBuffer:
    """
    Immutable RGBA pixel buffer.

    Accepts either a (height, width, 4) / (height, width, 3) array or a flat
    RGBA sequence together with its width and height. RGB input is treated
    as fully opaque. Values are clamped to 0-255.
    """

    def __init__(self, data: Union[np.ndarray, Sequence[int], bytes],
                 width: Optional[int] = None, height: Optional[int] = None):
        if isinstance(data, (bytes, bytearray, memoryview)):
            arr = np.frombuffer(data, dtype=np.uint8)
        else:
            arr = np.asarray(data)

        if arr.ndim == 1:
            if width is None or height is None:
                raise ValueError("Flat pixel data requires width and height")
            if arr.size != width * height * 4:
                raise ValueError(
                    f"Pixel data length {arr.size} does not match "
                    f"{width}x{height} RGBA ({width * height * 4})"
                )
            arr = arr.reshape(height, width, 4)
        elif arr.ndim == 3 and arr.shape[2] in (3, 4):
            if width is not None and width != arr.shape[1]:
                raise ValueError(f"Width mismatch: {width} != {arr.shape[1]}")
            if height is not None and height != arr.shape[0]:
                raise ValueError(f"Height mismatch: {height} != {arr.shape[0]}")
            if arr.shape[2] == 3:
                alpha = np.full(arr.shape[:2] + (1,), 255, dtype=arr.dtype)
                arr = np.concatenate([arr, alpha], axis=2)
        else:
            raise ValueError(f"Expected RGBA image data, got shape {arr.shape}")

        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)

        # Read-only view; the caller's array keeps its own flags
        arr = np.ascontiguousarray(arr).view()
        arr.flags.writeable = False
        self._data = arr

    @property
    def width(self) -> int:
        return int(self._data.shape[1])

    @property
    def height(self) -> int:
        return int(self._data.shape[0])

    @property
    def rgba(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view."""
        return self._data

    def clamp_rect(self, rect: Rect) -> Optional[Rect]:
        """Clip a rectangle to the buffer, or None if nothing remains."""
        x = max(0, round_half_up(rect.x))
        y = max(0, round_half_up(rect.y))
        w = min(round_half_up(rect.width), self.width - x)
        h = min(round_half_up(rect.height), self.height - y)

        if w <= 0 or h <= 0:
            return None
        return Rect(x, y, w, h)

    def region(self, rect: Rect) -> np.ndarray:
        """RGBA pixels inside ``rect`` (clamped), shape (h, w, 4)."""
        clamped = self.clamp_rect(rect)
        if clamped is None:
            return np.empty((0, 0, 4), dtype=np.uint8)
        return self._data[clamped.y:clamped.y + clamped.height,
                          clamped.x:clamped.x + clamped.width]


def sample_pixels(buffer: PixelBuffer, rect: Rect,
                  stride: Optional[int] = None,
                  alpha_threshold: Optional[int] = None) -> np.ndarray:
    """
    Sample opaque pixels from a region of the buffer.

    Takes every ``stride``-th pixel of the region in row-major order and
    drops pixels whose alpha is below ``alpha_threshold``.

    Returns:
        (N, 3) uint8 RGB array, possibly empty
    """
    stride = config.SAMPLE_STRIDE if stride is None else stride
    alpha_threshold = config.ALPHA_THRESHOLD if alpha_threshold is None else alpha_threshold
    if not config.validate_stride(stride):
        raise ValueError(f"Invalid sampling stride: {stride}")

    region = buffer.region(rect)
    if region.size == 0:
        logger.debug(f"Region {rect} lies outside the {buffer.width}x{buffer.height} buffer")
        return np.empty((0, 3), dtype=np.uint8)

    flat = region.reshape(-1, 4)[::stride]
    opaque = flat[flat[:, 3] >= alpha_threshold]
    return np.ascontiguousarray(opaque[:, :3])
