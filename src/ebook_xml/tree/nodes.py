"""Document tree node types.

A node is a tagged union: a single frozen dataclass whose ``kind`` selects
one of three closed variants (element, text, whitespace). Every accessor
dispatches on the tag and answers ``None`` for queries that do not apply to
the variant, so consumers can probe a node without type checks.

Trees are read-only once built: children are tuples and attribute mappings
are exposed through ``MappingProxyType``.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

_EMPTY_ATTRIBUTES: Mapping[str, str] = MappingProxyType({})


class NodeKind(Enum):
    """Variants of a document tree node."""

    ELEMENT = "element"
    TEXT = "text"
    WHITESPACE = "whitespace"


@dataclass(frozen=True)
class Node:
    """A node of the document tree.

    Attributes:
        kind: Which variant this node is
        offset: UTF-8 byte offset of the node's start in the original buffer
        name: Tag name (elements only, empty otherwise)
        attributes: Attribute mapping (elements only, empty otherwise)
        children: Child nodes in document order (elements only)
        content: Literal, un-decoded content (text and whitespace only)
    """

    kind: NodeKind
    offset: int
    name: str = ""
    attributes: Mapping[str, str] = field(default_factory=lambda: _EMPTY_ATTRIBUTES)
    children: Tuple["Node", ...] = ()
    content: str = ""

    # Attribute mappings are not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.kind is NodeKind.ELEMENT:
            return (
                f"Node(element {self.name!r} @{self.offset}, "
                f"{len(self.attributes)} attrs, {len(self.children)} children)"
            )
        return f"Node({self.kind.value} {self.content!r} @{self.offset})"

    @property
    def is_element(self) -> bool:
        return self.kind is NodeKind.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.kind is NodeKind.TEXT

    @property
    def is_whitespace(self) -> bool:
        return self.kind is NodeKind.WHITESPACE

    @property
    def tag_name(self) -> Optional[str]:
        """Element name, or None for text and whitespace nodes."""
        if self.kind is NodeKind.ELEMENT:
            return self.name
        return None

    def attr(self, key: str) -> Optional[str]:
        """Look up an attribute value; None if absent or not an element."""
        if self.kind is NodeKind.ELEMENT:
            return self.attributes.get(key)
        return None

    def child(self, index: int) -> Optional["Node"]:
        """Return the child at ``index``; None if out of range or not an element."""
        if self.kind is NodeKind.ELEMENT and 0 <= index < len(self.children):
            return self.children[index]
        return None

    def text(self) -> Optional[str]:
        """Return the node's own literal text, descending through first children.

        Text and whitespace nodes answer their content. An element answers the
        text of its first child, followed down to a leaf, or None when an
        element on that path is empty.
        """
        node = self
        while node.kind is NodeKind.ELEMENT:
            if not node.children:
                return None
            node = node.children[0]
        return node.content

    def iter(self) -> Iterator["Node"]:
        """Iterate over this node and all descendants in document order."""
        stack: List[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def find(self, tag: str) -> Optional["Node"]:
        """Find the first descendant element named ``tag``."""
        return next(
            (node for node in self.iter() if node is not self and node.name == tag
             and node.kind is NodeKind.ELEMENT),
            None,
        )

    def find_all(self, tag: str) -> List["Node"]:
        """Find all descendant elements named ``tag`` in document order."""
        return [
            node for node in self.iter()
            if node is not self and node.kind is NodeKind.ELEMENT and node.name == tag
        ]

    def full_text(self) -> str:
        """Concatenate the literal content of every text and whitespace node."""
        return "".join(
            node.content for node in self.iter() if node.kind is not NodeKind.ELEMENT
        )

    def _as_dict(self) -> Dict[str, Any]:
        if self.kind is NodeKind.ELEMENT:
            return {
                "kind": self.kind.value,
                "name": self.name,
                "offset": self.offset,
                "attributes": dict(self.attributes),
                "children": [],
            }
        return {
            "kind": self.kind.value,
            "content": self.content,
            "offset": self.offset,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to plain dictionaries."""
        result = self._as_dict()
        stack: List[Tuple[Node, Dict[str, Any]]] = [(self, result)]
        while stack:
            node, converted = stack.pop()
            for child in node.children:
                child_dict = child._as_dict()
                converted["children"].append(child_dict)
                if child.children:
                    stack.append((child, child_dict))
        return result


def element(
    name: str,
    offset: int,
    attributes: Optional[Mapping[str, str]] = None,
    children: Optional[List[Node]] = None,
) -> Node:
    """Build an element node, freezing its attributes and children."""
    return Node(
        kind=NodeKind.ELEMENT,
        offset=offset,
        name=name,
        attributes=MappingProxyType(dict(attributes)) if attributes else _EMPTY_ATTRIBUTES,
        children=tuple(children) if children else (),
    )


def text(content: str, offset: int) -> Node:
    """Build a text node holding raw, un-decoded content."""
    return Node(kind=NodeKind.TEXT, offset=offset, content=content)


def whitespace(content: str, offset: int) -> Node:
    """Build a whitespace node for a blank run between markup."""
    return Node(kind=NodeKind.WHITESPACE, offset=offset, content=content)
