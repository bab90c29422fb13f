[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sobeledge"
version = "1.0.0"
description = "5x5 Sobel edge detection for raw RGB images, with analysis and conversion tools"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "sobel",
    "edge detection",
    "image processing",
    "convolution",
    "raw image",
    "bmp",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sobel-filter = "sobeledge.cli:main"
sobel-benchmark = "sobeledge.benchmark:main"
sobel-analyze-raw = "sobeledge.analysis:analyze_raw_main"
sobel-edge-analyzer = "sobeledge.analysis:edge_analyzer_main"
sobel-fix-contrast = "sobeledge.convert:fix_contrast_main"
sobel-raw-to-bmp = "sobeledge.convert:raw_to_bmp_main"
sobel-rgb-to-gray = "sobeledge.convert:rgb_to_gray_main"

[tool.hatch.build.targets.wheel]
packages = ["sobeledge"]

[tool.hatch.build.targets.sdist]
include = [
    "sobeledge",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
check_untyped_defs = true
