"""Lenient XML/XHTML parsing for e-book content.

Turns raw, often malformed markup extracted from e-book containers into a
document tree whose nodes remember their UTF-8 byte offset in the original
buffer, and decodes character and numeric entity references on demand.

Progressive API Disclosure:
- Level 1: parse() returning the root node, decode_entities()
- Level 2: parse_document() with diagnostics and metrics, ParserConfig
- Level 3: XmlParser and Cursor for callers driving the scan themselves
"""

__version__ = "0.1.0"
__author__ = "ebook-xml developers"

from .api import ParseResult, parse, parse_document, to_etree, to_lxml
from .entities import decode_entities, entity_table
from .scanning import Cursor
from .shared import (
    ConfigError,
    ConfigValidationError,
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseMetrics,
    ParserConfig,
)
from .tree import Node, NodeKind, XmlParser

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1
    "parse",
    "decode_entities",

    # Level 2
    "parse_document",
    "ParseResult",
    "ParserConfig",
    "ConfigError",
    "ConfigValidationError",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseMetrics",

    # Level 3
    "XmlParser",
    "Cursor",
    "entity_table",

    # Tree model and adapters
    "Node",
    "NodeKind",
    "to_etree",
    "to_lxml",
]
