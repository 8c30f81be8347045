"""Public parsing entry points.

``parse`` returns just the document tree; ``parse_document`` also reports
the recoveries performed and timing metrics. Neither raises on malformed
markup: the worst outcome of bad input is a best-effort tree.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ebook_xml.scanning import utf8_length
from ebook_xml.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseMetrics,
    ParserConfig,
    get_logger,
)
from ebook_xml.tree import Node, XmlParser

InputType = Union[str, bytes]

MS_PER_SECOND = 1000


@dataclass
class ParseResult:
    """Document tree together with the diagnostics gathered while building it."""

    root: Node
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: ParseMetrics = field(default_factory=ParseMetrics)
    correlation_id: Optional[str] = None

    @property
    def has_diagnostics(self) -> bool:
        return len(self.diagnostics) > 0

    @property
    def warnings(self) -> List[DiagnosticEntry]:
        """Diagnostics of WARNING severity or worse."""
        return [
            entry for entry in self.diagnostics
            if entry.severity in (
                DiagnosticSeverity.WARNING,
                DiagnosticSeverity.ERROR,
                DiagnosticSeverity.CRITICAL,
            )
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root.to_dict(),
            "diagnostics": [entry.to_dict() for entry in self.diagnostics],
            "metrics": self.metrics.to_dict(),
            "correlation_id": self.correlation_id,
        }


def _as_text(input_data: InputType) -> str:
    if isinstance(input_data, str):
        return input_data
    if isinstance(input_data, (bytes, bytearray, memoryview)):
        # surrogateescape keeps one code point per invalid byte, so byte
        # offsets still line up with the raw buffer
        return bytes(input_data).decode("utf-8", "surrogateescape")
    raise TypeError(
        f"Expected str or bytes markup, got {type(input_data).__name__}"
    )


def parse_document(
    input_data: InputType,
    config: Optional[ParserConfig] = None
) -> ParseResult:
    """Parse markup and report diagnostics and metrics.

    Args:
        input_data: Markup as ``str`` or UTF-8 encoded ``bytes``
        config: Optional parser configuration

    Returns:
        ParseResult holding the root node, diagnostics and metrics

    Raises:
        TypeError: If ``input_data`` is neither text nor bytes

    Examples:
        >>> result = parse_document("<p>one<p>two")
        >>> result.root.tag_name
        'p'
        >>> [d.message for d in result.diagnostics]
        ['Element left open at end of input', 'Element left open at end of input']
    """
    config = config or ParserConfig()
    text = _as_text(input_data)
    logger = get_logger(__name__, config.correlation_id, "parse_document")

    start_time = time.perf_counter()
    logger.debug("Starting parse", extra={"content_length": len(text)})

    parser = XmlParser(text, config)
    root = parser.parse()

    processing_time = (time.perf_counter() - start_time) * MS_PER_SECOND
    metrics = ParseMetrics(
        processing_time_ms=processing_time,
        characters_processed=len(text),
        bytes_processed=utf8_length(text),
        nodes_created=parser.nodes_created,
        recovery_operations=parser.recovery_count,
    )
    logger.debug(
        "Parse completed",
        extra={
            "processing_time_ms": processing_time,
            "nodes_created": metrics.nodes_created,
            "recovery_operations": metrics.recovery_operations,
        }
    )

    return ParseResult(
        root=root,
        diagnostics=parser.diagnostics,
        metrics=metrics,
        correlation_id=config.correlation_id,
    )


def parse(input_data: InputType, config: Optional[ParserConfig] = None) -> Node:
    """Parse markup into a document tree.

    Examples:
        >>> parse("<a/>").tag_name
        'a'
        >>> root = parse("<a/><b/>")
        >>> root.tag_name, [child.tag_name for child in root.children]
        ('root', ['a', 'b'])
    """
    if config is None:
        config = ParserConfig.minimal()
    return XmlParser(_as_text(input_data), config).parse()
