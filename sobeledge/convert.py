"""Contrast fixes, BMP export and RGB-to-gray conversion of raw 640x640 frames."""

from __future__ import annotations

import os
import struct
import sys
from typing import Sequence, Union

import numpy as np

from .analysis import IMAGE_HEIGHT, IMAGE_PIXELS, IMAGE_WIDTH, read_raw

PathLike = Union[str, "os.PathLike[str]"]

_BMP_HEADER = struct.Struct("<HIIIIiiHHIIiiII")
_BMP_HEADER_SIZE = 54
_PALETTE_SIZE = 256 * 4
_PIXELS_PER_METER = 2835


def _as_array(data: bytes) -> np.ndarray:
    return np.frombuffer(bytes(data), dtype=np.uint8)


def threshold_contrast(data: bytes) -> bytes:
    """Black out values below 50, whiten above 150, double the rest.

    Doubling is done in 8 bits, so values of 128 to 150 wrap around.
    """
    values = _as_array(data).astype(np.int32)
    out = np.where(values < 50, 0, np.where(values > 150, 255, (values * 2) % 256))
    return out.astype(np.uint8).tobytes()


def normalize_contrast(data: bytes) -> bytes:
    """Stretch the values linearly so they span 0 to 255."""
    values = _as_array(data)
    if values.size == 0:
        return b""
    low, high = int(values.min()), int(values.max())
    if high <= low:
        return bytes(data)
    scale = 255.0 / (high - low)
    stretched = np.clip((values.astype(np.float64) - low) * scale, 0.0, 255.0)
    return stretched.astype(np.uint8).tobytes()


def grayscale_bmp(data: bytes) -> bytes:
    """Encode a 640x640 grayscale frame as a top-down 8-bit palette BMP."""
    data = bytes(data)
    if len(data) != IMAGE_PIXELS:
        raise ValueError(f"expected {IMAGE_PIXELS} bytes, got {len(data)}")
    row_size = ((IMAGE_WIDTH * 8 + 31) // 32) * 4
    image_size = row_size * IMAGE_HEIGHT
    data_offset = _BMP_HEADER_SIZE + _PALETTE_SIZE
    header = _BMP_HEADER.pack(
        0x4D42,
        data_offset + image_size,
        0,
        data_offset,
        40,
        IMAGE_WIDTH,
        -IMAGE_HEIGHT,
        1,
        8,
        0,
        image_size,
        _PIXELS_PER_METER,
        _PIXELS_PER_METER,
        256,
        256,
    )
    palette = b"".join(bytes((i, i, i, 0)) for i in range(256))
    padding = bytes(row_size - IMAGE_WIDTH)
    rows = b"".join(
        data[y * IMAGE_WIDTH : (y + 1) * IMAGE_WIDTH] + padding
        for y in range(IMAGE_HEIGHT)
    )
    return header + palette + rows


def convert_raw_to_bmp(raw_path: PathLike, bmp_path: PathLike) -> None:
    """Read a 640x640 grayscale raw file and write it as a BMP."""
    with open(raw_path, "rb") as stream:
        raw = stream.read(IMAGE_PIXELS)
    if len(raw) != IMAGE_PIXELS:
        raise ValueError(f"RAW file has wrong size: {len(raw)} bytes")
    encoded = grayscale_bmp(raw)
    with open(bmp_path, "wb") as stream:
        stream.write(encoded)


def rgb_to_gray(data: bytes) -> bytes:
    """Convert interleaved RGB bytes to BT.709 gray, rounding halves up."""
    if len(data) % 3:
        raise ValueError("RGB data length must be a multiple of 3")
    rgb = _as_array(data).reshape(-1, 3).astype(np.float64)
    gray = 0.2126 * rgb[:, 0] + 0.7152 * rgb[:, 1] + 0.0722 * rgb[:, 2]
    return (gray + 0.5).astype(np.uint8).tobytes()


def fix_contrast_main(argv: Sequence[str] | None = None) -> int:
    """Write thresholded and normalised versions of a frame; return the status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Usage: fix_contrast <input.raw> <output.raw>")
        return 1
    source, target = args
    try:
        data = read_raw(source)
    except OSError:
        print(f"Cannot open file: {source}", file=sys.stderr)
        return 1

    print(f"Original range: {min(data)} - {max(data)}")
    threshold_path = f"{target}_threshold.raw"
    normalized_path = f"{target}_normalized.raw"
    with open(threshold_path, "wb") as stream:
        stream.write(threshold_contrast(data))
    with open(normalized_path, "wb") as stream:
        stream.write(normalize_contrast(data))

    print("Created:")
    print(f"  {threshold_path} (threshold method)")
    print(f"  {normalized_path} (normalize method)")
    return 0


def raw_to_bmp_main(argv: Sequence[str] | None = None) -> int:
    """Convert a grayscale raw frame to BMP; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("RAW to BMP Converter")
        print("Usage: raw_to_bmp <input.raw> <output.bmp>")
        print("Example: raw_to_bmp building_edges.raw building_edges.bmp")
        print("         raw_to_bmp books_edges.raw books_edges.bmp")
        return 1
    source, target = args
    print("Converting 640x640 grayscale RAW to BMP...")
    try:
        convert_raw_to_bmp(source, target)
    except (OSError, ValueError) as exc:
        print(f"Cannot convert {source}: {exc}", file=sys.stderr)
        print()
        print("❌ Conversion failed!")
        return 1

    print(f"✅ Converted {source} → {target}")
    print("   Open with Paint, Image Viewer, or any image editor!")
    print()
    print("🎯 Success! Now you can:")
    print(f"1. Double-click {target} to open in an image viewer")
    print("2. Open with Paint to see edge detection results")
    print("3. White pixels = strong edges, Black = no edges")
    return 0


def rgb_to_gray_main(argv: Sequence[str] | None = None) -> int:
    """Convert a raw RGB frame to grayscale and report on it; return the status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 2:
        print("Usage: rgb_to_gray <input_rgb.raw> <output_gray.raw>")
        return 1
    source, target = args
    size = IMAGE_PIXELS * 3
    try:
        with open(source, "rb") as stream:
            rgb = stream.read(size)
    except OSError:
        print(f"Cannot open file: {source}", file=sys.stderr)
        return 1
    rgb += bytes(size - len(rgb))

    gray = rgb_to_gray(rgb)
    with open(target, "wb") as stream:
        stream.write(gray)

    print("RGB->Grayscale conversion complete:")
    print(f"  Input: {source} ({len(rgb)} bytes)")
    print(f"  Output: {target} ({len(gray)} bytes)")
    print(f"  Grayscale range: {min(gray)} - {max(gray)}")
    print("First 10 RGB->Gray conversions:")
    for index in range(10):
        r, g, b = rgb[index * 3 : index * 3 + 3]
        print(f"  RGB({r},{g},{b}) -> {gray[index]}")
    return 0


if __name__ == "__main__":
    sys.exit(raw_to_bmp_main())