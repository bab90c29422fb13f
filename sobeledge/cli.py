"""Command that runs 5x5 Sobel edge detection on a raw 640x640 RGB file."""

from __future__ import annotations

import sys
from typing import Sequence

from .image_io import ImageIOError, load_rgb_image, save_grayscale_image
from .sobel_filter import SobelFilter

IMAGE_WIDTH = 640
IMAGE_HEIGHT = 640

_PROGRAM = "sobeledge"


def _print_usage(program: str) -> None:
    print(f"Usage: {program} <input.raw> <output.raw>")
    print("  input.raw  : 640x640 RGB raw image file (1,228,800 bytes)")
    print("  output.raw : Output grayscale edge-detected image (409,600 bytes)")
    print()
    print("Implementation features:")
    print("  - 5x5 Sobel kernels for robust edge detection")
    print("  - RGB to grayscale conversion with proper weighting")
    print("  - Gradient magnitude calculation with quantization")
    print("  - Zero-padding for boundary handling")


def main(argv: Sequence[str] | None = None) -> int:
    """Filter the input file and write the edge map; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)

    print("Sobel Filter - Edge Detection Implementation")
    print("============================================")

    if len(args) != 2:
        _print_usage(_PROGRAM)
        return 1

    input_file, output_file = args
    print(f"Input file: {input_file}")
    print(f"Output file: {output_file}")

    try:
        image = load_rgb_image(input_file, IMAGE_WIDTH, IMAGE_HEIGHT)
    except ImageIOError as exc:
        print(f"Error loading image: {exc}", file=sys.stderr)
        return 1

    print(f"Image loaded successfully ({image.width}x{image.height} pixels)")
    print("Applying 5x5 Sobel edge detection...")

    edges = SobelFilter().apply(image)

    print("Edge detection completed. Saving output...")

    try:
        save_grayscale_image(edges, output_file)
    except ImageIOError as exc:
        print(f"Error saving image: {exc}", file=sys.stderr)
        return 1

    print(f"Edge detection complete! Output saved to: {output_file}")
    print("5x5 Sobel filter successfully applied.")
    return 0


if __name__ == "__main__":
    sys.exit(main())