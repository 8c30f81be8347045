"""Public API for lenient markup parsing.

Provides the simple ``parse`` entry point, the diagnostic-carrying
``parse_document`` variant, and adapters to other XML object models.
"""

from .adapters import to_etree, to_lxml
from .parser import InputType, ParseResult, parse, parse_document

__all__ = [
    "InputType",
    "ParseResult",
    "parse",
    "parse_document",
    "to_etree",
    "to_lxml",
]
