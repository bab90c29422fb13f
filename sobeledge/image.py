"""Pixel and image containers used by the edge detector."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

import numpy as np

# ITU-R BT.709 luma weights.
_R_WEIGHT = 0.2126
_G_WEIGHT = 0.7152
_B_WEIGHT = 0.0722


def _round_half_away(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves upward."""
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def _check_dimensions(width: Any, height: Any) -> tuple[int, int]:
    if width is None or height is None or width <= 0 or height <= 0:
        raise ValueError("Image dimensions must be positive")
    return int(width), int(height)


@dataclass(frozen=True)
class RGBPixel:
    """An RGB pixel with 8-bit components."""

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"component {name}={value} is outside 0..255")

    def to_grayscale(self) -> int:
        """Return the BT.709 luma of this pixel in the range 0..255."""
        gray = _R_WEIGHT * self.r + _G_WEIGHT * self.g + _B_WEIGHT * self.b
        return _round_half_away(min(max(gray, 0.0), 255.0))


class Image:
    """A row-major two-dimensional image of arbitrary pixel values.

    Calling the constructor with no arguments gives an empty image.
    """

    default_pixel: Any = None
    _unit = 1

    def __init__(self, width=None, height=None, data=None):
        if width is None and height is None and data is None:
            self._width = 0
            self._height = 0
            self._data = self._allocate(0)
            return
        width, height = _check_dimensions(width, height)
        if data is None:
            store = self._allocate(width * height)
        else:
            store = self._wrap(data)
            if len(store) // self._unit != width * height:
                raise ValueError("Data size doesn't match image dimensions")
        self._width = width
        self._height = height
        self._data = store

    # Storage hooks; subclasses choose a compact representation.
    def _allocate(self, count: int):
        return [self.default_pixel] * count

    def _wrap(self, data: Iterable[Any]):
        return list(data)

    def _read(self, index: int) -> Any:
        return self._data[index]

    def _write(self, index: int, pixel: Any) -> None:
        self._data[index] = pixel

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError("Pixel coordinates out of bounds")
        return y * self._width + x

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def __len__(self) -> int:
        return len(self._data) // self._unit

    def __bool__(self) -> bool:
        return len(self) > 0

    def __iter__(self) -> Iterator[Any]:
        return (self._read(index) for index in range(len(self)))

    def __getitem__(self, position: tuple[int, int]) -> Any:
        x, y = position
        return self.at(x, y)

    def __setitem__(self, position: tuple[int, int], pixel: Any) -> None:
        x, y = position
        self.set_pixel(x, y, pixel)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._data == other._data
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self._width}, height={self._height})"

    def at(self, x: int, y: int) -> Any:
        """Return the pixel at (x, y); raise IndexError outside the image."""
        return self._read(self._index(x, y))

    def get_pixel_safe(self, x: int, y: int, default: Any = None) -> Any:
        """Return the pixel at (x, y), or ``default`` when outside the image."""
        if default is None:
            default = self.default_pixel
        if not (0 <= x < self._width and 0 <= y < self._height):
            return default
        return self._read(y * self._width + x)

    def set_pixel(self, x: int, y: int, pixel: Any) -> None:
        """Store ``pixel`` at (x, y); raise IndexError outside the image."""
        self._write(self._index(x, y), pixel)

    def clear(self) -> None:
        """Drop all pixel data, leaving an empty image."""
        self._data = self._allocate(0)
        self._width = 0
        self._height = 0

    def resize(self, width: int, height: int) -> None:
        """Change the dimensions, keeping the leading pixels of the flat data."""
        width, height = _check_dimensions(width, height)
        count = width * height
        kept = self._data[: count * self._unit]
        self._data = kept + self._allocate(count)[len(kept):]
        self._width = width
        self._height = height


class GrayscaleImage(Image):
    """An image of 8-bit intensity values."""

    default_pixel = 0

    def _allocate(self, count: int) -> bytearray:
        return bytearray(count)

    def _wrap(self, data: Iterable[int]) -> bytearray:
        return bytearray(data)

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "GrayscaleImage":
        """Build an image from one byte per pixel in row-major order."""
        width, height = _check_dimensions(width, height)
        if len(data) != width * height:
            raise ValueError("Data size doesn't match image dimensions")
        return cls(width, height, data)

    def to_bytes(self) -> bytes:
        """Return the pixels as one byte each in row-major order."""
        return bytes(self._data)


class RGBImage(Image):
    """An image of RGB pixels, stored as interleaved bytes."""

    default_pixel = RGBPixel()
    _unit = 3

    def _allocate(self, count: int) -> bytearray:
        return bytearray(count * 3)

    def _wrap(self, data: Iterable[RGBPixel]) -> bytearray:
        return bytearray(
            component for pixel in data for component in (pixel.r, pixel.g, pixel.b)
        )

    def _read(self, index: int) -> RGBPixel:
        start = index * 3
        r, g, b = self._data[start : start + 3]
        return RGBPixel(r, g, b)

    def _write(self, index: int, pixel: RGBPixel) -> None:
        start = index * 3
        self._data[start : start + 3] = bytes((pixel.r, pixel.g, pixel.b))

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "RGBImage":
        """Build an image from interleaved R, G, B bytes in row-major order."""
        width, height = _check_dimensions(width, height)
        if len(data) != width * height * 3:
            raise ValueError("Data size doesn't match image dimensions")
        image = cls(width, height)
        image._data = bytearray(data)
        return image

    def to_grayscale(self) -> GrayscaleImage:
        """Convert every pixel with the BT.709 weights."""
        if not self:
            return GrayscaleImage()
        rgb = np.frombuffer(self._data, dtype=np.uint8).reshape(-1, 3).astype(np.float64)
        gray = _R_WEIGHT * rgb[:, 0] + _G_WEIGHT * rgb[:, 1] + _B_WEIGHT * rgb[:, 2]
        gray = np.clip(gray, 0.0, 255.0)
        floor = np.floor(gray)
        rounded = np.where(gray - floor >= 0.5, floor + 1.0, floor).astype(np.uint8)
        return GrayscaleImage.from_bytes(rounded.tobytes(), self._width, self._height)