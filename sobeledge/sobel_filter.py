"""5x5 Sobel edge detection with gradient magnitude quantization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .image import GrayscaleImage, Image, RGBImage

Kernel = tuple[tuple[int, ...], ...]

KERNEL_X: Kernel = (
    (-1, -2, 0, 2, 1),
    (-4, -8, 0, 8, 4),
    (-6, -12, 0, 12, 6),
    (-4, -8, 0, 8, 4),
    (-1, -2, 0, 2, 1),
)

KERNEL_Y: Kernel = (
    (-1, -4, -6, -4, -1),
    (-2, -8, -12, -8, -2),
    (0, 0, 0, 0, 0),
    (2, 8, 12, 8, 2),
    (1, 4, 6, 4, 1),
)

_INT16_MIN = -32768
_INT16_MAX = 32767


@dataclass(frozen=True)
class SobelConfig:
    """Settings that control how gradient magnitudes become output bytes."""

    use_quantization: bool = True
    quantization_levels: int = 64
    normalize_output: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.quantization_levels <= 255:
            raise ValueError(
                f"quantization_levels={self.quantization_levels} is outside 0..255"
            )


def _convolve(gray: np.ndarray, kernel: Kernel) -> np.ndarray:
    """Convolve with a 5x5 kernel, replicating edge pixels; clamp to int16."""
    height, width = gray.shape
    radius = len(kernel) // 2
    padded = np.pad(gray.astype(np.int32), radius, mode="edge")
    total = np.zeros((height, width), dtype=np.int32)
    for ky, row in enumerate(kernel):
        for kx, weight in enumerate(row):
            if weight:
                total += weight * padded[ky : ky + height, kx : kx + width]
    return np.clip(total, _INT16_MIN, _INT16_MAX).astype(np.int16)


def gradient_magnitude(gx: Sequence[int], gy: Sequence[int]) -> np.ndarray:
    """Return sqrt(gx**2 + gy**2) element-wise as float64."""
    x = np.asarray(gx, dtype=np.float64)
    y = np.asarray(gy, dtype=np.float64)
    if x.shape != y.shape:
        raise ValueError("gradient arrays differ in shape")
    return np.sqrt(x * x + y * y)


def quantize(magnitudes: Sequence[float], config: SobelConfig) -> np.ndarray:
    """Map gradient magnitudes to 8-bit values according to ``config``."""
    values = np.asarray(magnitudes, dtype=np.float64)
    if values.size == 0:
        return np.zeros(values.shape, dtype=np.uint8)

    if not config.use_quantization:
        return np.clip(values, 0.0, 255.0).astype(np.uint8)

    low = values.min()
    span = values.max() - low
    if span < 1e-10:
        return np.zeros(values.shape, dtype=np.uint8)

    levels = float(config.quantization_levels)
    with np.errstate(divide="ignore", invalid="ignore"):
        scale = levels / span
        normalized = (values - low) * scale
        if config.normalize_output:
            normalized = (normalized / levels) * 255.0
    normalized = np.nan_to_num(normalized, nan=0.0)
    return np.clip(normalized, 0.0, 255.0).astype(np.uint8)


class SobelFilter:
    """Edge detector built on 5x5 Sobel kernels."""

    def __init__(self, config: SobelConfig | None = None):
        self.config = config if config is not None else SobelConfig()

    def apply(self, image: Image) -> GrayscaleImage:
        """Return the edge map of an RGB or grayscale image."""
        if isinstance(image, RGBImage):
            image = image.to_grayscale()
        elif not isinstance(image, GrayscaleImage):
            raise TypeError(f"cannot filter {type(image).__name__}")

        if not image:
            return GrayscaleImage()

        width, height = image.width, image.height
        gray = np.frombuffer(image.to_bytes(), dtype=np.uint8).reshape(height, width)

        gx = _convolve(gray, KERNEL_X)
        gy = _convolve(gray, KERNEL_Y)
        magnitudes = gradient_magnitude(gx, gy)
        quantized = quantize(magnitudes, self.config)
        return GrayscaleImage.from_bytes(quantized.tobytes(), width, height)