"""Low-level scanning primitives."""

from .cursor import Cursor, is_white_space, utf8_length

__all__ = [
    "Cursor",
    "is_white_space",
    "utf8_length",
]
