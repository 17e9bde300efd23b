# noyaconv

noyaconv is a library for filtering RGBA images with square convolution
kernels. It changes the red, green and blue channels and leaves the alpha
channel as it is. It also has a small stream tokenizer, which you can use to
read whitespace-separated values such as kernel weights.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## Reading and writing images

`noyaconv.image`:

- `load_png(path)` opens any image that Pillow can read and converts it to
  RGBA. It returns a writable `numpy` array of shape `(height, width, 4)` with
  dtype `uint8`.
- `save_png(path, pixels)` writes an array of that shape to a PNG file. It
  rejects arrays of any other shape and images that have no pixels.

Both functions raise `ImageError` when they fail. The message starts with the
file path.

## Convolution with mirrored edges

`noyaconv.mirrored`:

- `convolve_mirrored(image, kernel, rows=None)` returns a filtered copy of the
  image. The image is first extended by mirroring it about its edges; the edge
  pixels are repeated. Every pixel is then computed as a true convolution, with
  the kernel flipped:
  `out[i, j] = sum(img[i + ii, j + jj] * kernel[m - ii, m - jj])`, where `m` is
  half the kernel size. The red, green and blue results are clamped to
  `[0, 255]` and truncated to integers. If you pass `rows=(start, stop)`, only
  those rows are filtered and all other rows are returned unchanged.
- `convolve_mirrored_parallel(image, kernel, workers)` shares the rows among
  `workers` threads and gives the same result as `convolve_mirrored`.
- `split_rows(height, rank, size)` returns the `(start, stop)` rows that worker
  `rank` out of `size` workers filters.
- `pad_mirror(image, margin)` returns the padded buffer. Its shape is
  `(margin + height + margin, stride, 4)`, and its columns are aligned as
  `aligned_layout` gives them. Columns outside the mirrored margins are zero.
- `aligned_layout(width, margin)` returns `(left_margin, stride)`. Both values
  are rounded up to a multiple of 16 pixels.

The kernel must be a square 2-D array of odd size. The margin, which is half
the kernel size, must not be larger than the image. If any of these conditions
fails, the functions raise `ValueError`.

```python
import numpy as np
from noyaconv.image import load_png, save_png
from noyaconv.mirrored import convolve_mirrored

kernel = np.array([[0.0625, 0.125, 0.0625],
                   [0.125,  0.25,  0.125],
                   [0.0625, 0.125, 0.0625]])
save_png("blurred.png", convolve_mirrored(load_png("photo.png"), kernel))
```

## Tokenizer

`noyaconv.tokenizer.Tokenizer(stream=None, buffer_size=1024)` splits a text or
binary stream into tokens. By default, tokens are separated by spaces, tabs,
carriage returns and newlines.

- `next_token()` returns the next token, or `None` at the end of the stream.
  You can also iterate over the tokenizer to get each token in turn.
- `set_delimiters(white_space, single_char_tokens)` replaces the delimiters.
  Each single-character token delimiter is returned as a token of its own. A
  character cannot be both white space and a single-character token; if it is,
  the method raises `ValueError`.
- `putback_token(token)` pushes a token back. Tokens that were pushed back are
  returned in last-in, first-out order and are not parsed again.
  `peek_next_char()` returns the next character without consuming it, or `""`
  at the end of the stream.
- `set_stream(stream)` switches to a new stream. It resets `line` and clears
  the read buffer and the tokens that were pushed back. `set_buffer_size(size)`
  changes the read size; any size under 10 makes the tokenizer read one
  character at a time.
- `white_space()` and `single_char_tokens()` return the current delimiters.
  The `line` attribute counts the newlines that have been read.

If you read from a tokenizer that has no stream, it raises `RuntimeError`.

```python
import io
from noyaconv.tokenizer import Tokenizer

values = list(Tokenizer(io.StringIO("3\n1 2 3\n")))  # ['3', '1', '2', '3']
```

## What it does not do

The package has no command-line program. It does not read kernel files into
arrays for you: build the kernel array yourself, for example from the tokens
that `Tokenizer` returns. The only filtering mode is the mirrored-edge mode
described above. There is no mode that leaves a border of the image unfiltered.