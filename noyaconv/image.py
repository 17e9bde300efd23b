"""Reading and writing PNG images as RGBA pixel arrays."""

from __future__ import annotations

import os
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

PathLike = Union[str, "os.PathLike[str]"]


class ImageError(Exception):
    """Raised when an image cannot be read or written."""


def load_png(path: PathLike) -> np.ndarray:
    """Load an image file as a writable ``(height, width, 4)`` uint8 RGBA array."""
    try:
        with Image.open(path) as img:
            rgba = img.convert("RGBA")
            pixels = np.array(rgba, dtype=np.uint8)
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise ImageError(f"{os.fspath(path)} - {exc}") from exc
    return pixels


def save_png(path: PathLike, pixels: np.ndarray) -> None:
    """Write a ``(height, width, 4)`` RGBA array to a PNG file."""
    array = np.asarray(pixels)
    if array.ndim != 3 or array.shape[2] != 4:
        raise ImageError(
            f"{os.fspath(path)} - expected an array of shape (height, width, 4), got {array.shape}"
        )
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise ImageError(f"{os.fspath(path)} - image has no pixels")
    data = np.ascontiguousarray(array, dtype=np.uint8)
    try:
        Image.fromarray(data).save(path, format="PNG")
    except (OSError, ValueError) as exc:
        raise ImageError(f"{os.fspath(path)} - {exc}") from exc