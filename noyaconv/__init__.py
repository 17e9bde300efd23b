"""Convolution of RGBA images over mirrored edges, PNG input and output, and a stream tokenizer."""

__version__ = "0.1.0"