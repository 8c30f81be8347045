"""Lenient recursive-descent tree builder.

:class:`XmlParser` turns XML/XHTML-like text into a :class:`~ebook_xml.tree.nodes.Node`
tree without ever failing on malformed input. Recovery rules:

- a start tag cut off by the end of input is dropped,
- comments, CDATA sections and processing instructions that never terminate
  swallow the rest of the input,
- any end tag closes the innermost open element, whatever its name,
- elements still open at the end of input are closed with what they hold.

Nesting is tracked with an explicit stack of open elements rather than
Python recursion, so pathological nesting depth cannot exhaust the
interpreter stack. The resulting tree is the same as a recursive descent
would produce.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ebook_xml.scanning import Cursor, is_white_space
from ebook_xml.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParserConfig,
    get_logger,
)

from .nodes import Node, element, text, whitespace


def _is_name_char(char: str) -> bool:
    return char != ">" and char != "/" and not is_white_space(char)


def _is_not_quote(char: str) -> bool:
    return char != '"' and char != "'"


def _strip_white_space(value: str) -> str:
    start, end = 0, len(value)
    while start < end and is_white_space(value[start]):
        start += 1
    while end > start and is_white_space(value[end - 1]):
        end -= 1
    return value[start:end]


@dataclass
class _OpenElement:
    """Element whose start tag was read but whose end tag was not."""

    name: str
    offset: int
    attributes: Dict[str, str]
    children: List[Node] = field(default_factory=list)

    def close(self) -> Node:
        return element(self.name, self.offset, self.attributes, self.children)


class XmlParser:
    """Fault-tolerant parser producing a single root node.

    Example:
        >>> root = XmlParser('<a href="x">link</a>').parse()
        >>> root.tag_name, root.attr("href"), root.text()
        ('a', 'x', 'link')
    """

    def __init__(self, text: str, config: Optional[ParserConfig] = None) -> None:
        self.input = text
        self.config = config or ParserConfig()
        self.diagnostics: List[DiagnosticEntry] = []
        self.recovery_count = 0
        self.nodes_created = 0
        self._cursor = Cursor(text)
        self._logger = get_logger(__name__, self.config.correlation_id, "tree_builder")

    def parse(self) -> Node:
        """Parse the whole buffer.

        Returns:
            The single top-level node, or a synthetic root element at offset 0
            wrapping the top-level nodes when there are zero or several
        """
        self._cursor = Cursor(self.input)
        self.diagnostics = []
        self.recovery_count = 0
        self.nodes_created = 0

        nodes = self._parse_nodes()
        if len(nodes) == 1:
            return nodes[0]
        self.nodes_created += 1
        return element(self.config.root_name, 0, {}, nodes)

    def _recover(
        self,
        severity: DiagnosticSeverity,
        message: str,
        offset: int,
        **details: Any
    ) -> None:
        """Account for a recovery from malformed input."""
        self.recovery_count += 1
        if self._logger.is_enabled_for(logging.DEBUG):
            self._logger.debug(message, extra={"offset": offset, **details})
        if self.config.collect_diagnostics:
            self.diagnostics.append(DiagnosticEntry(
                severity=severity,
                message=message,
                component="tree_builder",
                position={"offset": offset},
                details=details or None,
                correlation_id=self.config.correlation_id,
            ))

    def _append(self, nodes: List[Node], node: Node) -> None:
        nodes.append(node)
        self.nodes_created += 1

    def _parse_attributes(self) -> Dict[str, str]:
        cursor = self._cursor
        attributes: Dict[str, str] = {}
        while not cursor.eof:
            cursor.advance_while(is_white_space)
            char = cursor.peek()
            if char is None or char == ">" or char == "/":
                break

            key_start = cursor.pos
            cursor.advance_to("=")
            key = cursor.slice_from(key_start)

            cursor.advance_while(_is_not_quote)
            quote = cursor.peek() or '"'
            cursor.advance(1)

            value_start = cursor.pos
            cursor.advance_to(quote)
            attributes[key] = cursor.slice_from(value_start)
            cursor.advance(1)
        return attributes

    def _parse_element(self, nodes: List[Node], offset: int) -> Optional[_OpenElement]:
        """Parse a start tag whose ``<`` sits at byte ``offset``.

        Self-closing elements are appended to ``nodes`` directly. For an
        ordinary start tag the open element is returned so the caller can
        collect its children.
        """
        cursor = self._cursor
        name_start = cursor.pos
        cursor.advance_while(_is_name_char)
        name = cursor.slice_from(name_start)
        attributes = self._parse_attributes()

        char = cursor.peek()
        if char == "/":
            cursor.advance(2)
            self._append(nodes, element(name, offset, attributes))
        elif char == ">":
            cursor.advance(1)
            return _OpenElement(name, offset, attributes)
        else:
            self._recover(
                DiagnosticSeverity.WARNING,
                "Truncated start tag dropped",
                offset,
                tag=name,
            )
        return None

    def _skip_markup(self, target: str, kind: str, offset: int) -> None:
        if not self._cursor.advance_until(target):
            self._recover(
                DiagnosticSeverity.WARNING,
                f"Unterminated {kind} consumed to end of input",
                offset,
                terminator=target,
            )

    def _parse_end_tag(self) -> str:
        """Consume an end tag and return its name."""
        cursor = self._cursor
        cursor.advance(2)
        name_start = cursor.pos
        cursor.advance_to(">")
        name = _strip_white_space(cursor.slice_from(name_start))
        cursor.advance(1)
        return name

    def _parse_nodes(self) -> List[Node]:
        cursor = self._cursor
        keep_whitespace = self.config.keep_whitespace
        top_level: List[Node] = []
        open_elements: List[_OpenElement] = []
        nodes = top_level

        while not cursor.eof:
            start = cursor.pos
            offset = cursor.offset
            cursor.advance_while(is_white_space)
            char = cursor.peek()

            if char is None:
                break

            if char != "<":
                cursor.advance_to("<")
                self._append(nodes, text(cursor.slice_from(start), offset))
                continue

            if cursor.pos > start and keep_whitespace:
                self._append(nodes, whitespace(cursor.slice_from(start), offset))

            tag_offset = cursor.offset
            if cursor.starts_with("</"):
                name = self._parse_end_tag()
                if not open_elements:
                    self._recover(
                        DiagnosticSeverity.WARNING,
                        "End tag without open element ends parsing",
                        tag_offset,
                        tag=name,
                    )
                    break
                current = open_elements.pop()
                if name != current.name:
                    self._recover(
                        DiagnosticSeverity.WARNING,
                        "Mismatched end tag closes current element",
                        tag_offset,
                        expected=current.name,
                        found=name,
                    )
                nodes = open_elements[-1].children if open_elements else top_level
                self._append(nodes, current.close())
                continue

            cursor.advance(1)
            char = cursor.peek()
            if char == "?":
                cursor.advance(1)
                self._skip_markup("?>", "processing instruction", tag_offset)
            elif char == "!":
                cursor.advance(1)
                char = cursor.peek()
                if char == "-":
                    cursor.advance(2)
                    self._skip_markup("-->", "comment", tag_offset)
                elif char == "[":
                    cursor.advance(1)
                    self._skip_markup("]]>", "CDATA section", tag_offset)
                else:
                    cursor.advance_to(">")
                    if cursor.eof:
                        self._recover(
                            DiagnosticSeverity.WARNING,
                            "Unterminated declaration consumed to end of input",
                            tag_offset,
                            terminator=">",
                        )
                    cursor.advance(1)
            else:
                opened = self._parse_element(nodes, tag_offset)
                if opened is not None:
                    open_elements.append(opened)
                    nodes = opened.children

        while open_elements:
            current = open_elements.pop()
            self._recover(
                DiagnosticSeverity.INFO,
                "Element left open at end of input",
                current.offset,
                tag=current.name,
            )
            nodes = open_elements[-1].children if open_elements else top_level
            self._append(nodes, current.close())

        return top_level
