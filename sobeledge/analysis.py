"""Statistics, interpretation and previews of raw 640x640 grayscale files."""

from __future__ import annotations

import os
import sys
from collections import Counter
from dataclasses import dataclass
from typing import Sequence, Union

IMAGE_WIDTH = 640
IMAGE_HEIGHT = 640
IMAGE_PIXELS = IMAGE_WIDTH * IMAGE_HEIGHT

ASCII_RAMP = " .:-=+*#%@"
_CENTER_X = 315
_CENTER_Y = 315
_SAMPLE_SIZE = 10
_FIRST_VALUES = 20

PathLike = Union[str, "os.PathLike[str]"]


def read_raw(path: PathLike) -> bytes:
    """Read one 640x640 grayscale frame; a short file is padded with zeros."""
    with open(path, "rb") as stream:
        data = stream.read(IMAGE_PIXELS)
    return data + bytes(IMAGE_PIXELS - len(data))


def _histogram(data: bytes) -> tuple[int, ...]:
    counts = Counter(data)
    return tuple(counts.get(value, 0) for value in range(256))


@dataclass(frozen=True)
class RawAnalysis:
    """Value statistics of a raw byte buffer."""

    size: int
    min_value: int
    max_value: int
    zero_count: int
    nonzero_count: int
    histogram: tuple[int, ...]
    first_values: tuple[int, ...]

    @property
    def zero_percent(self) -> float:
        return 100.0 * self.zero_count / self.size

    @property
    def nonzero_percent(self) -> float:
        return 100.0 * self.nonzero_count / self.size

    @property
    def common_values(self) -> list[tuple[int, int]]:
        """Values held by more than 0.1% of the pixels, with their counts."""
        threshold = int(self.size * 0.001)
        return [
            (value, count)
            for value, count in enumerate(self.histogram)
            if count > threshold
        ]


@dataclass(frozen=True)
class EdgeAnalysis:
    """Edge-strength statistics of a 640x640 edge map."""

    size: int
    min_value: int
    max_value: int
    average: float
    strong_edges: int
    medium_edges: int
    weak_edges: int
    center_sample: tuple[tuple[int, ...], ...]

    @property
    def strong_percent(self) -> float:
        return 100.0 * self.strong_edges / self.size

    @property
    def medium_percent(self) -> float:
        return 100.0 * self.medium_edges / self.size

    @property
    def weak_percent(self) -> float:
        return 100.0 * self.weak_edges / self.size


def analyze_raw(data: bytes) -> RawAnalysis:
    """Summarise the byte values of a buffer."""
    if not data:
        raise ValueError("cannot analyse an empty buffer")
    data = bytes(data)
    histogram = _histogram(data)
    zeros = histogram[0]
    return RawAnalysis(
        size=len(data),
        min_value=min(data),
        max_value=max(data),
        zero_count=zeros,
        nonzero_count=len(data) - zeros,
        histogram=histogram,
        first_values=tuple(data[:_FIRST_VALUES]),
    )


def analyze_edges(data: bytes) -> EdgeAnalysis:
    """Classify the pixels of a 640x640 edge map by strength."""
    data = bytes(data)
    if len(data) != IMAGE_PIXELS:
        raise ValueError(f"expected {IMAGE_PIXELS} bytes, got {len(data)}")
    histogram = _histogram(data)
    strong = sum(histogram[200:])
    medium = sum(histogram[100:200])
    weak = sum(histogram[50:100])
    sample = tuple(
        tuple(data[row * IMAGE_WIDTH + _CENTER_X : row * IMAGE_WIDTH + _CENTER_X + _SAMPLE_SIZE])
        for row in range(_CENTER_Y, _CENTER_Y + _SAMPLE_SIZE)
    )
    return EdgeAnalysis(
        size=len(data),
        min_value=min(data),
        max_value=max(data),
        average=sum(data) / len(data),
        strong_edges=strong,
        medium_edges=medium,
        weak_edges=weak,
        center_sample=sample,
    )


def interpret(analysis: EdgeAnalysis) -> list[str]:
    """Return verdicts on how well edges were detected."""
    if analysis.strong_percent > 5:
        messages = ["✅ EXCELLENT: Lots of strong edges detected!"]
    elif analysis.strong_percent > 1:
        messages = ["✅ GOOD: Reasonable edge detection"]
    elif analysis.medium_percent > 5:
        messages = ["⚠️  OKAY: Some edges, but weak"]
    elif analysis.max_value > 50:
        messages = ["⚠️  WEAK: Few edges detected"]
    else:
        messages = ["❌ PROBLEM: Almost no edges (all dark)"]
    if analysis.max_value == 255:
        messages.append("✅ Good dynamic range (uses full 0-255 scale)")
    if analysis.average < 20:
        messages.append("✅ Mostly background (expected for edge detection)")
    return messages


def ascii_preview(data: bytes, sample_rate: int = 8) -> str:
    """Render a 640x640 frame as text, one character per sampled pixel."""
    if sample_rate < 1:
        raise ValueError("sample_rate must be at least 1")
    if len(data) != IMAGE_PIXELS:
        raise ValueError(f"expected {IMAGE_PIXELS} bytes, got {len(data)}")
    return "\n".join(
        "".join(
            ASCII_RAMP[data[y * IMAGE_WIDTH + x] * 9 // 255]
            for x in range(0, IMAGE_WIDTH, sample_rate)
        )
        for y in range(0, IMAGE_HEIGHT, sample_rate)
    )


def analyze_raw_main(argv: Sequence[str] | None = None) -> int:
    """Print value statistics of a raw file; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: analyze_raw <file.raw>")
        return 1
    path = args[0]
    try:
        data = read_raw(path)
    except OSError:
        print(f"Cannot open file: {path}", file=sys.stderr)
        return 1

    result = analyze_raw(data)
    print(f"=== RAW FILE ANALYSIS: {path} ===")
    print(f"File size: {result.size} bytes")
    print(f"Min value: {result.min_value}")
    print(f"Max value: {result.max_value}")
    print(f"Zero pixels: {result.zero_count} ({result.zero_percent:g}%)")
    print(f"Non-zero pixels: {result.nonzero_count} ({result.nonzero_percent:g}%)")
    print()
    print("Value distribution (showing values with >0.1% of pixels):")
    for value, count in result.common_values:
        print(f"  Value {value}: {count} pixels ({100.0 * count / result.size:g}%)")
    print()
    print("First 20 pixel values: " + "".join(f"{v} " for v in result.first_values))
    return 0


def edge_analyzer_main(argv: Sequence[str] | None = None) -> int:
    """Print an edge-strength report and optional text preview; return the status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("Usage: edge_analyzer <edge_file.raw> [ascii]")
        print("Example: edge_analyzer building_edges.raw")
        print("         edge_analyzer building_edges.raw ascii")
        return 1
    filename = args[0]
    show_ascii = len(args) >= 2 and args[1] == "ascii"

    try:
        data = read_raw(filename)
    except OSError:
        print(f"Cannot open: {filename}", file=sys.stderr)
        return 1

    result = analyze_edges(data)
    print()
    print(f"=== Edge Detection Analysis: {filename} ===")
    print(f"Pixel value range: {result.min_value} - {result.max_value}")
    print(f"Average intensity: {result.average:.1f}")
    print(f"Strong edges (200-255): {result.strong_percent:.1f}% ({result.strong_edges} pixels)")
    print(f"Medium edges (100-199): {result.medium_percent:.1f}% ({result.medium_edges} pixels)")
    print(f"Weak edges (50-99): {result.weak_percent:.1f}% ({result.weak_edges} pixels)")
    print()
    print("Sample 10x10 from center (edge intensities):")
    for row in result.center_sample:
        print("".join(f"{value:3d} " for value in row))
    print()
    print("=== INTERPRETATION ===")
    for message in interpret(result):
        print(message)

    if show_ascii:
        print()
        print("=== ASCII Preview (sampled every 8 pixels) ===")
        print(ascii_preview(data, 8))
        print("Legend: ' '=no edge, '@'=strong edge")
    return 0


if __name__ == "__main__":
    sys.exit(edge_analyzer_main())