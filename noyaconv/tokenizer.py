"""Stream tokenizer with configurable white space and single-character delimiters."""

from __future__ import annotations

from enum import Enum
from typing import IO, Iterator, Optional

DEFAULT_WHITE_SPACE = " \t\n\r"
DEFAULT_BUFFER_SIZE = 1024
MIN_BUFFER_SIZE = 10


class DelimiterType(Enum):
    """Kinds of delimiter characters."""

    WHITE_SPACE = 1
    SINGLE_CHAR = 2


class Tokenizer:
    """Split a text stream into tokens.

    Tokens are runs of characters separated by white space, or single
    characters declared as single-character tokens.  With ``a`` and ``d``
    as single-character tokens, ``"abcd"`` yields ``"a"``, ``"bc"``, ``"d"``.
    """

    def __init__(self, stream: Optional[IO] = None, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        self.line = 1
        self.stream_name = ""
        self._stream = stream
        self._delimiters: dict[str, DelimiterType] = {}
        self._buffer = ""
        self._pos = 0
        self._buffer_size = 0
        self._tokens: list[str] = []
        self.set_delimiters(DEFAULT_WHITE_SPACE, "")
        self.set_buffer_size(buffer_size)

    @property
    def buffer_size(self) -> int:
        """Size of the internal read buffer; 0 means characters are read one at a time."""
        return self._buffer_size

    @property
    def stream(self) -> Optional[IO]:
        return self._stream

    def _require_stream(self) -> IO:
        if self._stream is None:
            raise RuntimeError("undefined input stream")
        return self._stream

    def _fill(self) -> None:
        chunk = self._require_stream().read(self._buffer_size or 1)
        if isinstance(chunk, bytes):
            chunk = chunk.decode("latin-1")
        self._buffer = chunk or ""
        self._pos = 0

    def _read_char(self) -> str:
        if self._pos >= len(self._buffer):
            self._fill()
            if not self._buffer:
                return ""
        ch = self._buffer[self._pos]
        self._pos += 1
        return ch

    def _unread_char(self) -> None:
        self._pos -= 1

    def next_token(self) -> Optional[str]:
        """Return the next token, or None once the stream is exhausted."""
        self._require_stream()
        if self._tokens:
            return self._tokens.pop()

        while True:
            ch = self._read_char()
            if not ch:
                return None
            if ch == "\n":
                self.line += 1
            if self._delimiters.get(ch) is not DelimiterType.WHITE_SPACE:
                break

        parts = [ch]
        if ch not in self._delimiters:
            while True:
                ch = self._read_char()
                if not ch:
                    break
                if ch in self._delimiters:
                    self._unread_char()
                    break
                parts.append(ch)
                if ch == "\n":
                    self.line += 1
        return "".join(parts)

    def __iter__(self) -> Iterator[str]:
        while (token := self.next_token()) is not None:
            yield token

    def peek_next_char(self) -> str:
        """Return the next character without consuming it, or "" at end of stream."""
        self._require_stream()
        if self._tokens:
            return self._tokens[-1][0]
        ch = self._read_char()
        if ch:
            self._unread_char()
        return ch

    def putback_token(self, token: str) -> None:
        """Push a token back; put-back tokens are returned in LIFO order and not re-parsed."""
        if not token:
            raise ValueError("cannot put back an empty string")
        self._tokens.append(token)

    def _chars_of(self, kind: DelimiterType) -> str:
        return "".join(sorted((c for c, k in self._delimiters.items() if k is kind), key=ord))

    def single_char_tokens(self) -> str:
        """Return the single-character token delimiters, ordered by code point."""
        return self._chars_of(DelimiterType.SINGLE_CHAR)

    def white_space(self) -> str:
        """Return the white space delimiters, ordered by code point."""
        return self._chars_of(DelimiterType.WHITE_SPACE)

    def set_buffer_size(self, size: int) -> None:
        """Set the read buffer size; sizes under 10 disable buffering. Buffered input is discarded."""
        if size < MIN_BUFFER_SIZE:
            size = 0
        self._buffer_size = size
        self._buffer = ""
        self._pos = 0

    def set_delimiters(self, white_space: str, single_char_tokens: str) -> None:
        """Replace the white space and single-character token delimiters."""
        delimiters = {ch: DelimiterType.WHITE_SPACE for ch in white_space}
        for ch in single_char_tokens:
            if ch in delimiters:
                raise ValueError("a delimiter cannot be both white space and single char token")
            delimiters[ch] = DelimiterType.SINGLE_CHAR
        self._delimiters = delimiters

    def set_stream(self, stream: IO) -> None:
        """Tokenize a new stream, resetting the line count, read buffer and put-back tokens."""
        self._stream = stream
        self.line = 1
        self._buffer = ""
        self._pos = 0
        self._tokens = []