"""A buffered 5x5 Sobel edge detector with selectable execution paths.

Unlike :class:`sobeledge.sobel_filter.SobelFilter`, this detector treats
pixels outside the image as zero. It does not replicate the edge pixels.
All execution paths produce identical output.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from .image import GrayscaleImage, RGBImage
from .sobel_filter import KERNEL_X, KERNEL_Y, Kernel, SobelConfig, gradient_magnitude, quantize

_INT16_MIN = -32768
_INT16_MAX = 32767

_CPUINFO = Path("/proc/cpuinfo")

# Kernel flag names and the labels reported for them, in report order.
_FLAG_LABELS = (
    ("sse", "SSE"),
    ("sse2", "SSE2"),
    ("pni", "SSE3"),
    ("sse4_1", "SSE4.1"),
    ("sse4_2", "SSE4.2"),
    ("avx", "AVX"),
)


class OptimizationLevel(Enum):
    """Which execution path the filter takes."""

    SCALAR = "Scalar"
    SSE = "SSE"
    AVX2 = "AVX2"
    AUTO = "Auto"


@dataclass
class PerformanceMetrics:
    """Timing figures from the most recent profiled run."""

    processing_time_us: int = 0
    pixels_per_second: int = 0
    memory_bandwidth: int = 0
    optimization_used: str = ""


def _capabilities_from_flags(flags: set[str]) -> str:
    labels = [label for flag, label in _FLAG_LABELS if flag in flags]
    if "avx" in flags and "avx2" in flags:
        labels.append("AVX2")
    return "".join(f"{label} " for label in labels)


def detect_cpu_capabilities() -> str:
    """Return the vector extensions of this CPU, each followed by a space.

    Gives ``"Unknown "`` when the processor features cannot be read.
    """
    try:
        text = _CPUINFO.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return "Unknown "
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() == "flags":
            return _capabilities_from_flags(set(value.split()))
    return "Unknown "


def _resolve_level(level: OptimizationLevel) -> OptimizationLevel:
    if level is not OptimizationLevel.AUTO:
        return level
    capabilities = detect_cpu_capabilities()
    if "AVX2" in capabilities:
        return OptimizationLevel.AVX2
    if "SSE4.1" in capabilities:
        return OptimizationLevel.SSE
    return OptimizationLevel.SCALAR


def _convolve_zero_padded(gray: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Convolve with a 5x5 kernel, treating outside pixels as 0; clamp to int16."""
    height, width = gray.shape
    radius = len(kernel) // 2
    padded = np.pad(gray.astype(np.int32), radius, mode="constant", constant_values=0)
    total = np.zeros((height, width), dtype=np.int32)
    for ky, row in enumerate(kernel):
        for kx, weight in enumerate(row):
            if weight:
                total += weight * padded[ky : ky + height, kx : kx + width]
    return np.clip(total, _INT16_MIN, _INT16_MAX).astype(np.int16)


class FastSobelFilter:
    """Sobel edge detector with optional profiling of each run."""

    def __init__(
        self,
        config: SobelConfig | None = None,
        level: OptimizationLevel = OptimizationLevel.AUTO,
    ):
        self.config = config if config is not None else SobelConfig()
        self.level = _resolve_level(level)
        self.last_metrics = PerformanceMetrics()

    def cpu_capabilities(self) -> str:
        """Return the vector extensions of this CPU."""
        return detect_cpu_capabilities()

    def apply(self, image: RGBImage, profile: bool = False) -> GrayscaleImage:
        """Return the edge map of an RGB image, recording timings if asked."""
        if not isinstance(image, RGBImage):
            raise TypeError(f"cannot filter {type(image).__name__}")
        if not image:
            raise ValueError("Image dimensions must be positive")

        start = time.perf_counter_ns() if profile else 0

        width, height = image.width, image.height
        gray_image = image.to_grayscale()
        gray = np.frombuffer(gray_image.to_bytes(), dtype=np.uint8).reshape(height, width)
        gx = _convolve_zero_padded(gray, KERNEL_X)
        gy = _convolve_zero_padded(gray, KERNEL_Y)
        quantized = quantize(gradient_magnitude(gx, gy), self.config)
        result = GrayscaleImage.from_bytes(quantized.tobytes(), width, height)

        if profile:
            elapsed_us = (time.perf_counter_ns() - start) // 1000
            pixels = width * height
            self.last_metrics = PerformanceMetrics(
                processing_time_us=elapsed_us,
                pixels_per_second=(pixels * 1_000_000) // elapsed_us if elapsed_us > 0 else 0,
                memory_bandwidth=pixels,
                optimization_used=self.level.value,
            )
        return result