"""Convolution over an image extended by mirroring its edges.

The image is copied into a wider buffer whose rows are aligned on 16 pixels.
Margins of half the kernel width are filled by reflecting the image about
its edges, the edge pixels included. Every pixel of the image is then
filtered with a true convolution (the kernel is flipped):
``out[i, j] = sum(img[i + ii, j + jj] * kernel[m - ii, m - jj])``.
Red, green and blue are clamped to [0, 255] and truncated. Alpha is kept.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

ALIGNMENT = 16


def _check_image(image: np.ndarray) -> np.ndarray:
    pixels = np.asarray(image)
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"expected an RGBA array of shape (height, width, 4), got {pixels.shape}")
    return pixels.astype(np.uint8, copy=False)


def _check_kernel(kernel: np.ndarray) -> np.ndarray:
    weights = np.asarray(kernel, dtype=np.float64)
    if weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
        raise ValueError(f"kernel must be square, got shape {weights.shape}")
    size = weights.shape[0]
    if size == 0 or size % 2 == 0:
        raise ValueError(f"kernel size must be odd and positive, got {size}")
    return weights


def _align(value: int) -> int:
    return (value + ALIGNMENT - 1) & ~(ALIGNMENT - 1)


def aligned_layout(width: int, margin: int) -> tuple[int, int]:
    """Return ``(left_margin, stride)`` of the padded buffer for an image row.

    The left margin is ``margin`` rounded up to a multiple of 16, and the
    stride adds the image width plus right margin, also rounded up to 16.
    """
    if width < 0 or margin < 0:
        raise ValueError("width and margin must not be negative")
    left = _align(margin)
    return left, left + _align(width + margin)


def pad_mirror(image: np.ndarray, margin: int) -> np.ndarray:
    """Return the image inside an aligned buffer with mirrored margins.

    The result has shape ``(margin + height + margin, stride, 4)``; the image
    starts at row ``margin`` and column ``left_margin`` of
    :func:`aligned_layout`. Columns outside the mirrored margins are zero.
    """
    pixels = _check_image(image)
    if margin < 0:
        raise ValueError("margin must not be negative")
    height, width = pixels.shape[:2]
    if margin > height or margin > width:
        raise ValueError(
            f"margin {margin} is larger than the image ({width} x {height})"
        )
    left, stride = aligned_layout(width, margin)
    padded = np.zeros((margin + height + margin, stride, 4), dtype=np.uint8)
    mirrored = np.pad(pixels, ((margin, margin), (margin, margin), (0, 0)), mode="symmetric")
    padded[:, left - margin : left + width + margin] = mirrored
    return padded


def split_rows(height: int, rank: int, size: int) -> tuple[int, int]:
    """Return the ``(start, stop)`` rows that worker ``rank`` of ``size`` filters."""
    if size < 1:
        raise ValueError("size must be at least 1")
    if not 0 <= rank < size:
        raise ValueError(f"rank must be in [0, {size}), got {rank}")
    if height < 0:
        raise ValueError("height must not be negative")
    return rank * height // size, (rank + 1) * height // size


def _filter_rows(
    padded: np.ndarray,
    weights: np.ndarray,
    left: int,
    width: int,
    start: int,
    stop: int,
) -> np.ndarray:
    margin = weights.shape[0] // 2
    source = padded[:, :, :3].astype(np.float64)
    acc = np.zeros((stop - start, width, 3), dtype=np.float64)
    for ii in range(-margin, margin + 1):
        rows = source[margin + start + ii : margin + stop + ii]
        for jj in range(-margin, margin + 1):
            weight = weights[margin - ii, margin - jj]
            acc += rows[:, left + jj : left + jj + width] * weight
    return np.clip(acc, 0.0, 255.0).astype(np.uint8)


def convolve_mirrored(
    image: np.ndarray, kernel: np.ndarray, rows: Optional[tuple[int, int]] = None
) -> np.ndarray:
    """Return a copy of ``image`` with rows ``rows = (start, stop)`` filtered.

    With ``rows`` left out, every row is filtered. Rows outside the range
    are returned unchanged.
    """
    pixels = _check_image(image)
    weights = _check_kernel(kernel)
    height, width = pixels.shape[:2]
    start, stop = (0, height) if rows is None else rows
    if not 0 <= start <= stop <= height:
        raise ValueError(f"invalid row range [{start}, {stop}) for height {height}")

    margin = weights.shape[0] // 2
    padded = pad_mirror(pixels, margin)
    left, _ = aligned_layout(width, margin)
    out = pixels.copy()
    if start < stop and width > 0:
        out[start:stop, :, :3] = _filter_rows(padded, weights, left, width, start, stop)
    return out


def convolve_mirrored_parallel(image: np.ndarray, kernel: np.ndarray, workers: int) -> np.ndarray:
    """Filter every row with the rows shared among ``workers`` threads.

    The result is identical to :func:`convolve_mirrored`.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")
    pixels = _check_image(image)
    weights = _check_kernel(kernel)
    height, width = pixels.shape[:2]
    margin = weights.shape[0] // 2
    padded = pad_mirror(pixels, margin)
    left, _ = aligned_layout(width, margin)

    out = pixels.copy()
    bands = [split_rows(height, rank, workers) for rank in range(workers)]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = pool.map(
            lambda band: _filter_rows(padded, weights, left, width, band[0], band[1]),
            bands,
        )
        for (start, stop), filtered in zip(bands, results):
            out[start:stop, :, :3] = filtered
    return out