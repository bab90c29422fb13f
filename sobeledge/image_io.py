"""Reading and writing headerless raw image files."""

from __future__ import annotations

import os
import stat
from enum import Enum, auto
from pathlib import Path
from typing import Union

from .image import GrayscaleImage, RGBImage

PathLike = Union[str, "os.PathLike[str]"]


class ImageIOErrorKind(Enum):
    """The ways loading or saving an image can fail."""

    FILE_NOT_FOUND = auto()
    INVALID_FILE_SIZE = auto()
    READ_ERROR = auto()
    WRITE_ERROR = auto()
    INVALID_DIMENSIONS = auto()


_MESSAGES = {
    ImageIOErrorKind.FILE_NOT_FOUND: "File not found",
    ImageIOErrorKind.INVALID_FILE_SIZE: "Invalid file size for specified image dimensions",
    ImageIOErrorKind.READ_ERROR: "Error reading from file",
    ImageIOErrorKind.WRITE_ERROR: "Error writing to file",
    ImageIOErrorKind.INVALID_DIMENSIONS: "Invalid image dimensions",
}


def error_message(kind: ImageIOErrorKind) -> str:
    """Return a human-readable description of an error kind."""
    return _MESSAGES.get(kind, "Unknown error")


class ImageIOError(Exception):
    """Raised when an image file cannot be loaded or saved."""

    def __init__(self, kind: ImageIOErrorKind, path: PathLike | None = None):
        super().__init__(error_message(kind))
        self.kind = kind
        self.path = path


def get_file_size(path: PathLike) -> int:
    """Return the size of a regular file in bytes, or 0 if it cannot be read."""
    try:
        info = os.stat(path)
    except OSError:
        return 0
    if not stat.S_ISREG(info.st_mode):
        return 0
    return info.st_size


def validate_rgb_file_size(path: PathLike, width: int, height: int) -> bool:
    """Tell whether the file holds exactly ``width * height`` RGB pixels."""
    return get_file_size(path) == width * height * 3


def load_rgb_image(path: PathLike, width: int, height: int) -> RGBImage:
    """Load a raw interleaved RGB file of the given dimensions."""
    if not os.path.exists(path):
        raise ImageIOError(ImageIOErrorKind.FILE_NOT_FOUND, path)
    if not validate_rgb_file_size(path, width, height):
        raise ImageIOError(ImageIOErrorKind.INVALID_FILE_SIZE, path)

    expected = width * height * 3
    try:
        with open(path, "rb") as stream:
            raw = stream.read(expected)
    except OSError as exc:
        raise ImageIOError(ImageIOErrorKind.READ_ERROR, path) from exc
    if len(raw) != expected:
        raise ImageIOError(ImageIOErrorKind.READ_ERROR, path)

    try:
        return RGBImage.from_bytes(raw, width, height)
    except ValueError as exc:
        raise ImageIOError(ImageIOErrorKind.INVALID_DIMENSIONS, path) from exc


def save_grayscale_image(image: GrayscaleImage, path: PathLike) -> None:
    """Write a grayscale image as one byte per pixel, creating parent folders."""
    if not image:
        raise ImageIOError(ImageIOErrorKind.INVALID_DIMENSIONS, path)
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("wb") as stream:
            stream.write(image.to_bytes())
    except OSError as exc:
        raise ImageIOError(ImageIOErrorKind.WRITE_ERROR, path) from exc