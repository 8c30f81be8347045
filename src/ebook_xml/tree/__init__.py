"""Document tree model and the lenient tree builder."""

from .builder import XmlParser
from .nodes import Node, NodeKind, element, text, whitespace

__all__ = [
    "XmlParser",
    "Node",
    "NodeKind",
    "element",
    "text",
    "whitespace",
]
