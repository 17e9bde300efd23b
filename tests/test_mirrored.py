import numpy as np
import pytest

from noyaconv.mirrored import (
    aligned_layout,
    convolve_mirrored,
    convolve_mirrored_parallel,
    pad_mirror,
    split_rows,
)


def _random_image(height, width, seed=0):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)


def _identity(size=3):
    kernel = np.zeros((size, size))
    kernel[size // 2, size // 2] = 1.0
    return kernel


@pytest.mark.parametrize("width", [1, 7, 16, 33, 100])
@pytest.mark.parametrize("margin", [0, 1, 2, 15, 16, 17])
def test_aligned_layout_invariants(width, margin):
    left, stride = aligned_layout(width, margin)
    assert left % 16 == 0
    assert stride % 16 == 0
    assert margin <= left < margin + 16
    assert stride >= left + width + margin


def test_aligned_layout_without_margin():
    assert aligned_layout(16, 0) == (0, 16)


def test_aligned_layout_rejects_negative():
    with pytest.raises(ValueError):
        aligned_layout(-1, 1)


def test_pad_mirror_shape_and_content():
    image = _random_image(5, 7)
    margin = 2
    padded = pad_mirror(image, margin)
    left, stride = aligned_layout(7, margin)
    assert padded.shape == (5 + 2 * margin, stride, 4)
    np.testing.assert_array_equal(padded[margin : margin + 5, left : left + 7], image)
    expected = np.pad(image, ((margin, margin), (margin, margin), (0, 0)), mode="symmetric")
    np.testing.assert_array_equal(padded[:, left - margin : left + 7 + margin], expected)
    assert not padded[:, : left - margin].any()
    assert not padded[:, left + 7 + margin :].any()


def test_pad_mirror_reflects_edges_including_edge_row():
    image = _random_image(4, 4, seed=3)
    padded = pad_mirror(image, 1)
    left, _ = aligned_layout(4, 1)
    np.testing.assert_array_equal(padded[0, left : left + 4], image[0])
    np.testing.assert_array_equal(padded[5, left : left + 4], image[3])
    np.testing.assert_array_equal(padded[1:5, left - 1], image[:, 0])
    np.testing.assert_array_equal(padded[1:5, left + 4], image[:, 3])


def test_pad_mirror_margin_too_large():
    with pytest.raises(ValueError):
        pad_mirror(_random_image(2, 8), 3)


@pytest.mark.parametrize("height,size", [(0, 1), (10, 3), (7, 7), (5, 8), (100, 6)])
def test_split_rows_cover_all_rows(height, size):
    bands = [split_rows(height, rank, size) for rank in range(size)]
    assert bands[0][0] == 0
    assert bands[-1][1] == height
    for (_, stop), (start, _) in zip(bands, bands[1:]):
        assert stop == start
    assert all(start <= stop for start, stop in bands)


@pytest.mark.parametrize("rank,size", [(0, 0), (2, 2), (-1, 3)])
def test_split_rows_invalid(rank, size):
    with pytest.raises(ValueError):
        split_rows(10, rank, size)


def test_identity_kernel_keeps_image():
    image = _random_image(6, 9)
    np.testing.assert_array_equal(convolve_mirrored(image, _identity()), image)
    np.testing.assert_array_equal(convolve_mirrored(image, _identity(5)), image)


def test_uniform_image_with_sum_kernel_everywhere():
    image = np.full((5, 6, 4), 20, dtype=np.uint8)
    image[:, :, 3] = 77
    out = convolve_mirrored(image, np.ones((3, 3)))
    assert (out[:, :, :3] == 180).all()
    assert (out[:, :, 3] == 77).all()


def test_saturation_is_clamped():
    image = np.full((4, 4, 4), 100, dtype=np.uint8)
    high = convolve_mirrored(image, np.ones((3, 3)))
    low = convolve_mirrored(image, -np.ones((3, 3)))
    assert (high[:, :, :3] == 255).all()
    assert (low[:, :, :3] == 0).all()
    np.testing.assert_array_equal(high[:, :, 3], image[:, :, 3])


def test_kernel_is_flipped():
    image = _random_image(6, 6, seed=5)
    kernel = np.zeros((3, 3))
    kernel[0, 0] = 1.0
    out = convolve_mirrored(image, kernel)
    np.testing.assert_array_equal(out[:-1, :-1, :3], image[1:, 1:, :3])
    np.testing.assert_array_equal(out[-1, :-1, :3], image[-1, 1:, :3])


def test_rows_outside_range_unchanged():
    image = _random_image(8, 5, seed=2)
    kernel = np.ones((3, 3)) / 4.0
    full = convolve_mirrored(image, kernel)
    part = convolve_mirrored(image, kernel, (2, 5))
    np.testing.assert_array_equal(part[:2], image[:2])
    np.testing.assert_array_equal(part[5:], image[5:])
    np.testing.assert_array_equal(part[2:5], full[2:5])


def test_does_not_modify_input():
    image = _random_image(5, 5, seed=4)
    before = image.copy()
    convolve_mirrored(image, np.ones((3, 3)))
    np.testing.assert_array_equal(image, before)


@pytest.mark.parametrize(
    "kernel", [np.ones((2, 2)), np.ones((3, 5)), np.ones(3), np.ones((0, 0))]
)
def test_invalid_kernel(kernel):
    with pytest.raises(ValueError):
        convolve_mirrored(_random_image(5, 5), kernel)


def test_invalid_rows():
    with pytest.raises(ValueError):
        convolve_mirrored(_random_image(5, 5), _identity(), (3, 9))


def test_invalid_image_shape():
    with pytest.raises(ValueError):
        convolve_mirrored(np.zeros((4, 4, 3), dtype=np.uint8), _identity())


@pytest.mark.parametrize("workers", [1, 2, 3, 7, 20])
def test_parallel_matches_serial(workers):
    image = _random_image(13, 11, seed=9)
    kernel = np.random.default_rng(1).normal(size=(5, 5))
    np.testing.assert_array_equal(
        convolve_mirrored_parallel(image, kernel, workers),
        convolve_mirrored(image, kernel),
    )


def test_parallel_rejects_zero_workers():
    with pytest.raises(ValueError):
        convolve_mirrored_parallel(_random_image(4, 4), _identity(), 0)