[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "noyaconv"
version = "0.1.0"
description = "Convolve RGBA PNG images with square kernels over mirrored edges"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = ["convolution", "image", "png", "kernel", "filter", "tokenizer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["noyaconv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
