import numpy as np
import pytest

from sobeledge.fast_filter import (
    FastSobelFilter,
    OptimizationLevel,
    PerformanceMetrics,
    detect_cpu_capabilities,
)
from sobeledge.image import GrayscaleImage, RGBImage
from sobeledge.sobel_filter import SobelConfig, SobelFilter

LEVELS = [OptimizationLevel.SCALAR, OptimizationLevel.SSE, OptimizationLevel.AVX2]

CONFIGS = [
    SobelConfig(True, 255, True),
    SobelConfig(True, 128, True),
    SobelConfig(True, 64, True),
    SobelConfig(True, 255, False),
    SobelConfig(False, 255, False),
]


def solid(width, height, r, g, b):
    return RGBImage.from_bytes(bytes((r, g, b)) * (width * height), width, height)


def gradient(width, height):
    row = [(x * 255) // width for x in range(width)]
    data = bytes(v for _ in range(height) for value in row for v in (value, value, value))
    return RGBImage.from_bytes(data, width, height)


def random_image(width, height, seed=42):
    rng = np.random.default_rng(seed)
    data = rng.integers(0, 256, size=width * height * 3, dtype=np.uint8)
    return RGBImage.from_bytes(data.tobytes(), width, height)


def checkerboard(width, height, size):
    data = bytearray()
    for y in range(height):
        for x in range(width):
            value = 255 if ((x // size) + (y // size)) % 2 == 0 else 0
            data += bytes((value, value, value))
    return RGBImage.from_bytes(bytes(data), width, height)


def as_array(image: GrayscaleImage) -> np.ndarray:
    return np.frombuffer(image.to_bytes(), dtype=np.uint8).reshape(image.height, image.width)


@pytest.mark.parametrize("config", CONFIGS)
@pytest.mark.parametrize("level", LEVELS)
def test_solid_black_matches_baseline(config, level):
    image = solid(64, 64, 0, 0, 0)
    baseline = SobelFilter(config).apply(image)
    result = FastSobelFilter(config, level).apply(image)
    assert result == baseline
    assert set(result.to_bytes()) == {0}


@pytest.mark.parametrize(
    "image",
    [gradient(64, 64), checkerboard(64, 64, 4), random_image(64, 64), solid(64, 64, 128, 128, 128)],
)
@pytest.mark.parametrize("level", LEVELS)
def test_interior_matches_baseline_without_quantization(image, level):
    config = SobelConfig(False, 255, False)
    baseline = as_array(SobelFilter(config).apply(image))
    result = as_array(FastSobelFilter(config, level).apply(image))
    assert result.shape == (64, 64)
    assert np.array_equal(result[2:-2, 2:-2], baseline[2:-2, 2:-2])


@pytest.mark.parametrize("config", CONFIGS)
def test_all_levels_agree(config):
    image = random_image(40, 30, seed=7)
    outputs = [FastSobelFilter(config, level).apply(image) for level in LEVELS]
    assert outputs[0] == outputs[1] == outputs[2]


def test_solid_gray_has_border_edges_from_zero_padding():
    result = as_array(FastSobelFilter(SobelConfig(), OptimizationLevel.SCALAR).apply(solid(64, 64, 128, 128, 128)))
    assert np.all(result[2:-2, 2:-2] == 0)
    assert result[0, 0] > 0
    assert result.max() >= 254


def test_solid_white_without_quantization_saturates_corner():
    config = SobelConfig(False, 255, False)
    result = FastSobelFilter(config, OptimizationLevel.SCALAR).apply(solid(64, 64, 255, 255, 255))
    assert result.at(0, 0) == 255
    assert result.at(32, 32) == 0


def test_debug_pattern_symmetric_rows():
    data = bytes(v for _ in range(5) for x in range(5) for v in (x * 50,) * 3)
    image = RGBImage.from_bytes(data, 5, 5)
    result = as_array(FastSobelFilter().apply(image))
    assert result.shape == (5, 5)
    assert result.min() == 0
    assert np.array_equal(result[0], result[4])
    assert np.array_equal(result[1], result[3])


@pytest.mark.parametrize("levels", [16, 32, 64, 128, 255])
def test_quantization_levels_span_full_range(levels):
    result = as_array(FastSobelFilter(SobelConfig(True, levels, True)).apply(gradient(32, 32)))
    assert result.min() == 0
    assert result.max() >= 254


@pytest.mark.parametrize(
    "width,height,color",
    [
        (1, 1, (128, 128, 128)),
        (3, 3, (128, 128, 128)),
        (5, 5, (128, 128, 128)),
        (640, 480, (128, 128, 128)),
        (33, 17, (255, 0, 128)),
    ],
)
def test_edge_case_dimensions(width, height, color):
    result = FastSobelFilter().apply(solid(width, height, *color))
    assert (result.width, result.height) == (width, height)
    assert len(result.to_bytes()) == width * height


def test_single_pixel_is_zero():
    result = FastSobelFilter().apply(solid(1, 1, 200, 10, 30))
    assert result.to_bytes() == b"\x00"


def test_empty_image_rejected():
    with pytest.raises(ValueError):
        FastSobelFilter().apply(RGBImage())


def test_grayscale_input_rejected():
    with pytest.raises(TypeError):
        FastSobelFilter().apply(GrayscaleImage(4, 4))


def test_metrics_untouched_without_profiling():
    fast = FastSobelFilter(level=OptimizationLevel.SCALAR)
    fast.apply(gradient(16, 16))
    assert fast.last_metrics == PerformanceMetrics()


@pytest.mark.parametrize(
    "level,name",
    [
        (OptimizationLevel.SCALAR, "Scalar"),
        (OptimizationLevel.SSE, "SSE"),
        (OptimizationLevel.AVX2, "AVX2"),
    ],
)
def test_profiling_records_metrics(level, name):
    fast = FastSobelFilter(level=level)
    fast.apply(gradient(20, 10), profile=True)
    metrics = fast.last_metrics
    assert metrics.optimization_used == name
    assert metrics.memory_bandwidth == 200
    assert metrics.processing_time_us >= 0
    if metrics.processing_time_us > 0:
        assert metrics.pixels_per_second == 200 * 1_000_000 // metrics.processing_time_us
    else:
        assert metrics.pixels_per_second == 0


def test_config_can_be_replaced():
    fast = FastSobelFilter(SobelConfig(True, 64, True), OptimizationLevel.SCALAR)
    fast.config = SobelConfig(False, 255, False)
    image = solid(8, 8, 255, 255, 255)
    assert fast.apply(image).at(0, 0) == 255


def test_capabilities_format_and_auto_level():
    capabilities = detect_cpu_capabilities()
    assert capabilities.endswith(" ")
    known = {"SSE", "SSE2", "SSE3", "SSE4.1", "SSE4.2", "AVX", "AVX2", "Unknown"}
    assert set(capabilities.split()) <= known
    fast = FastSobelFilter()
    assert fast.cpu_capabilities() == capabilities
    if "AVX2" in capabilities:
        expected = OptimizationLevel.AVX2
    elif "SSE4.1" in capabilities:
        expected = OptimizationLevel.SSE
    else:
        expected = OptimizationLevel.SCALAR
    assert fast.level is expected


def test_explicit_level_is_kept():
    assert FastSobelFilter(level=OptimizationLevel.SSE).level is OptimizationLevel.SSE