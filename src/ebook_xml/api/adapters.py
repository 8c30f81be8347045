"""Conversion of parsed trees into other XML object models.

ElementTree has no separate text nodes: character data lives in the
``text`` of an element (before its first child) and the ``tail`` of each
child (after it). Text and whitespace nodes are folded into those slots in
document order. Offsets have no counterpart in these models and are dropped.
"""

import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, List, Tuple

from ebook_xml.entities import decode_entities
from ebook_xml.tree import Node, NodeKind

ElementFactory = Callable[[str, Dict[str, str]], Any]


def _identity(value: str) -> str:
    return value


def _convert(node: Node, make_element: ElementFactory, decode: bool) -> Any:
    if node.kind is not NodeKind.ELEMENT:
        raise ValueError(f"Only element nodes can be converted, got {node.kind.value}")

    convert_text = decode_entities if decode else _identity

    def build(source: Node) -> Any:
        attributes = {
            key: convert_text(value) for key, value in source.attributes.items()
        }
        return make_element(source.name, attributes)

    root = build(node)
    stack: List[Tuple[Node, Any]] = [(node, root)]
    while stack:
        source, target = stack.pop()
        last_child = None
        for child in source.children:
            if child.kind is NodeKind.ELEMENT:
                converted = build(child)
                target.append(converted)
                stack.append((child, converted))
                last_child = converted
            elif last_child is None:
                target.text = (target.text or "") + convert_text(child.content)
            else:
                last_child.tail = (last_child.tail or "") + convert_text(child.content)
    return root


def to_etree(node: Node, decode: bool = False) -> ET.Element:
    """Convert an element node into an ``xml.etree.ElementTree.Element``.

    Args:
        node: Element node to convert
        decode: Expand entity references in text and attribute values

    Raises:
        ValueError: If ``node`` is a text or whitespace node
    """
    return _convert(node, ET.Element, decode)


def to_lxml(node: Node, decode: bool = False) -> Any:
    """Convert an element node into an ``lxml.etree`` element.

    lxml enforces XML naming rules, so trees built from badly malformed
    markup may be rejected with ``ValueError``.

    Raises:
        ImportError: If lxml is not installed
        ValueError: If ``node`` is not an element or holds names lxml rejects
    """
    try:
        from lxml import etree
    except ImportError as e:
        raise ImportError(
            "lxml is required for to_lxml(); install it with "
            "'pip install ebook-xml[lxml]'"
        ) from e

    return _convert(node, etree.Element, decode)
