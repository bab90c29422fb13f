# sobeledge

Edge detection for raw RGB images using 5x5 Sobel kernels, together with a
handful of small tools for inspecting and converting the results.

The input format is headerless interleaved 8-bit RGB (`R G B R G B ...`),
row by row from the top. The command-line tools work on 640x640 images:

- input: 640 x 640 x 3 = 1,228,800 bytes
- output: 640 x 640 = 409,600 bytes of 8-bit grayscale edge strength

## How it works

1. Each RGB pixel is converted to grayscale with the ITU-R BT.709 weights
   (0.2126 R + 0.7152 G + 0.0722 B), rounded to the nearest integer with
   halves going up.
2. The grayscale image is convolved with 5x5 Sobel kernels in X and Y.
   `SobelFilter` repeats the border pixels beyond the image edge. Each
   result is clamped to the signed 16-bit range.
3. The gradient magnitude `sqrt(gx² + gy²)` is computed per pixel.
4. The magnitudes are mapped to bytes according to `SobelConfig`:
   - by default (`use_quantization=True`, `normalize_output=True`) they are
     rescaled linearly from their minimum and maximum onto 0–255 and
     truncated;
   - with `normalize_output=False` they are rescaled onto
     0–`quantization_levels` (default 64) instead;
   - an image with no gradient range at all comes out entirely black;
   - with `use_quantization=False` they are simply clamped to 0–255 and
     truncated.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Commands

Detect edges in a 640x640 RGB raw file. The file must be exactly
1,228,800 bytes; missing parent folders of the output are created:

```
sobel-filter input.raw edges.raw
```

Time every execution path of `FastSobelFilter` and the `SobelFilter`
baseline on a generated 640x640 test pattern, and print statistics of the
results (`--runs` sets the number of timed runs per path, 10 by default):

```
sobel-benchmark
sobel-benchmark --runs 3
```

Print the minimum, maximum, zero count, the values held by more than 0.1%
of the pixels and the first 20 values of a 640x640 grayscale raw file:

```
sobel-analyze-raw edges.raw
```

Grade an edge map (strong, medium and weak edge counts, a 10x10 sample from
the centre, a short verdict) and optionally draw it as ASCII art sampled
every 8 pixels:

```
sobel-edge-analyzer edges.raw
sobel-edge-analyzer edges.raw ascii
```

Produce two contrast-enhanced versions of an edge map,
`out_threshold.raw` and `out_normalized.raw`:

```
sobel-fix-contrast edges.raw out
```

Turn a 640x640 grayscale raw file into a top-down 8-bit palette BMP that
any image viewer can open (white = strong edge, black = none):

```
sobel-raw-to-bmp edges.raw edges.bmp
```

Convert an RGB raw file to grayscale only, to check the first stage on its
own, and print the first ten conversions:

```
sobel-rgb-to-gray input.raw gray.raw
```

The analysis, contrast and grayscale commands read up to one 640x640 frame
and fill a shorter file with zeros; `sobel-raw-to-bmp` refuses a file that
is too short.

## Library use

```python
from sobeledge.image_io import load_rgb_image, save_grayscale_image
from sobeledge.sobel_filter import SobelConfig, SobelFilter

image = load_rgb_image("input.raw", 640, 640)
edges = SobelFilter(SobelConfig()).apply(image)
save_grayscale_image(edges, "edges.raw")
```

`SobelFilter.apply` takes an `RGBImage` or a `GrayscaleImage`. The module
also exposes the kernels `KERNEL_X` and `KERNEL_Y` and the steps
`gradient_magnitude` and `quantize`.

Loading raises `ImageIOError` when the file is missing, has the wrong size
for the given dimensions, or cannot be read; saving raises it for an empty
image or a failed write. Its `kind` is an `ImageIOErrorKind`, and
`error_message` turns a kind into a readable sentence. `get_file_size` and
`validate_rgb_file_size` are available on their own.

`sobeledge.image` holds the pixel and image types: `RGBPixel` (with
`to_grayscale`), `RGBImage` and `GrayscaleImage`, with `from_bytes` and
`GrayscaleImage.to_bytes` for the raw layout, `RGBImage.to_grayscale`, and
bounds-checked access through `at`, `set_pixel`, `get_pixel_safe` and
`image[x, y]`. Out-of-range coordinates raise `IndexError`; non-positive
dimensions raise `ValueError`.

`sobeledge.fast_filter.FastSobelFilter` is a second implementation of the
same pipeline that can record `PerformanceMetrics` for a run with
`apply(image, profile=True)`. It treats pixels beyond the image border as
zero, whereas `SobelFilter` repeats the border pixels, so results differ
near the edges of the image. `detect_cpu_capabilities` lists the processor's
vector extensions as read from `/proc/cpuinfo`, or gives `"Unknown "` where
that cannot be read; with `OptimizationLevel.AUTO` this list picks the
level reported in the metrics.

`sobeledge.benchmark` exposes `create_test_image`, `output_stats` and
`run_benchmark`. `sobeledge.analysis` and `sobeledge.convert` expose the
functions behind the commands above (`read_raw`, `analyze_raw`,
`analyze_edges`, `interpret`, `ascii_preview`, `threshold_contrast`,
`normalize_contrast`, `grayscale_bmp`, `convert_raw_to_bmp`, `rgb_to_gray`)
for use on in-memory data.

## What it does not do

- It reads only headerless raw RGB data. There is no decoder for JPEG, PNG
  or other image formats; convert pictures to raw RGB with another tool
  first. The only encoded format it writes is the 640x640 grayscale BMP.
- The command-line tools accept only 640x640 frames; other sizes are
  available through the library.
- The optimization levels of `FastSobelFilter` do not select different
  code: every level runs the same NumPy computation and gives identical
  output. The level only changes the name recorded in the metrics.