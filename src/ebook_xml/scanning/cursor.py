"""Code-point aware scanning primitives over an immutable text buffer.

The cursor walks a ``str`` one code point at a time but reports positions as
UTF-8 byte offsets, which is what consumers use to map nodes back onto the
raw buffer extracted from an e-book container. Both positions move together;
the byte offset is only ever advanced by the encoded length of a span that
was actually consumed, so it can never land inside a multi-byte character.
"""

from typing import Callable, Optional

# Characters str.isspace() accepts that lack the Unicode White_Space property
_NON_WHITE_SPACE_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_white_space(char: str) -> bool:
    """Check a single code point against the Unicode White_Space property."""
    return char.isspace() and char not in _NON_WHITE_SPACE_SEPARATORS


def utf8_length(text: str) -> int:
    """Return the number of bytes ``text`` occupies when encoded as UTF-8.

    Lone surrogates produced by decoding with ``surrogateescape`` count as the
    single raw byte they stand for.
    """
    if text.isascii():
        return len(text)
    try:
        return len(text.encode("utf-8", "surrogateescape"))
    except UnicodeEncodeError:
        return len(text.encode("utf-8", "surrogatepass"))


class Cursor:
    """Forward-only scanner holding a code-point position and a byte offset.

    Attributes:
        text: The buffer being scanned (never copied or modified)
        pos: Index of the next code point in ``text``
        offset: UTF-8 byte offset corresponding to ``pos``
    """

    __slots__ = ("text", "pos", "offset", "_length")

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.offset = 0
        self._length = len(text)

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, offset={self.offset}, length={self._length})"

    @property
    def eof(self) -> bool:
        """True once every code point has been consumed."""
        return self.pos >= self._length

    def peek(self) -> Optional[str]:
        """Return the next code point without consuming it, or None at the end."""
        if self.pos < self._length:
            return self.text[self.pos]
        return None

    def starts_with(self, prefix: str) -> bool:
        """Check whether the unconsumed text begins with ``prefix``."""
        return self.text.startswith(prefix, self.pos)

    def slice_from(self, start: int) -> str:
        """Return the text between code-point position ``start`` and the cursor."""
        return self.text[start:self.pos]

    def _move_to(self, pos: int) -> None:
        if pos > self.pos:
            self.offset += utf8_length(self.text[self.pos:pos])
            self.pos = pos

    def advance(self, count: int) -> None:
        """Move forward ``count`` code points, stopping early at the end."""
        self._move_to(min(self.pos + count, self._length))

    def advance_while(self, predicate: Callable[[str], bool]) -> None:
        """Move forward while ``predicate`` holds for the next code point."""
        end = self.pos
        text = self.text
        while end < self._length and predicate(text[end]):
            end += 1
        self._move_to(end)

    def advance_to(self, char: str) -> None:
        """Move forward to the next occurrence of ``char``, or to the end."""
        index = self.text.find(char, self.pos)
        self._move_to(self._length if index < 0 else index)

    def advance_until(self, target: str) -> bool:
        """Consume through the next occurrence of ``target``.

        At least one code point is consumed before the search starts, so a
        match beginning exactly at the cursor is not recognised. When the
        input ends without a match the cursor stops at the end.

        Returns:
            True if ``target`` was found and consumed, False otherwise
        """
        if not target:
            return False

        first = target[0]
        found = False
        while not self.eof:
            self.advance(1)
            self.advance_to(first)
            if self.starts_with(target):
                found = True
                break
        self.advance(len(target))
        return found
