"""5x5 Sobel edge detection for raw RGB images, with analysis and conversion tools."""

__version__ = "1.0.0"