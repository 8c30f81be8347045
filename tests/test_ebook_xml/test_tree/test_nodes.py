"""Tests for the document tree node model."""

import dataclasses

import pytest

from ebook_xml.tree import Node, NodeKind, element, text, whitespace


@pytest.fixture
def sample_tree() -> Node:
    """<body><p class="x">Hello <em>there</em></p> <p>bye</p></body>"""
    return element("body", 0, {}, [
        element("p", 6, {"class": "x"}, [
            text("Hello ", 16),
            element("em", 22, {}, [text("there", 26)]),
        ]),
        whitespace(" ", 40),
        element("p", 41, {}, [text("bye", 44)]),
    ])


class TestNodeVariants:
    """Test variant construction and tag-based accessors."""

    def test_element_accessors(self) -> None:
        """Test accessors on an element node."""
        node = element("a", 4, {"href": "x"})

        assert node.kind is NodeKind.ELEMENT
        assert node.is_element
        assert node.tag_name == "a"
        assert node.offset == 4
        assert node.attr("href") == "x"
        assert node.attr("missing") is None
        assert node.children == ()

    def test_text_accessors(self) -> None:
        """Test that element-only queries answer None on text nodes."""
        node = text("words", 3)

        assert node.is_text
        assert node.tag_name is None
        assert node.attr("href") is None
        assert node.child(0) is None
        assert node.text() == "words"
        assert node.offset == 3

    def test_whitespace_is_distinct_from_text(self) -> None:
        """Test that whitespace nodes carry their own kind."""
        node = whitespace("\n  ", 7)

        assert node.is_whitespace
        assert not node.is_text
        assert node.text() == "\n  "

    def test_nodes_are_immutable(self) -> None:
        """Test that nodes and attribute mappings cannot be changed."""
        node = element("a", 0, {"k": "v"})

        with pytest.raises(dataclasses.FrozenInstanceError):
            node.name = "b"  # type: ignore[misc]
        with pytest.raises(TypeError):
            node.attributes["k"] = "w"  # type: ignore[index]

    def test_factory_copies_attributes(self) -> None:
        """Test that later changes to the source dict do not leak into the node."""
        attributes = {"k": "v"}
        node = element("a", 0, attributes)

        attributes["k"] = "changed"

        assert node.attr("k") == "v"

    def test_equality_compares_structure(self) -> None:
        """Test that equal trees compare equal."""
        assert element("a", 0, {"x": "1"}, [text("t", 3)]) == element(
            "a", 0, {"x": "1"}, [text("t", 3)]
        )
        assert text("t", 0) != whitespace("t", 0)


class TestNavigation:
    """Test child access and traversal helpers."""

    def test_child_by_index(self, sample_tree: Node) -> None:
        """Test indexed child access including out-of-range indexes."""
        assert sample_tree.child(0).tag_name == "p"
        assert sample_tree.child(1).is_whitespace
        assert sample_tree.child(3) is None
        assert sample_tree.child(-1) is None

    def test_text_descends_through_first_children(self, sample_tree: Node) -> None:
        """Test that element text comes from the first child chain."""
        assert sample_tree.text() == "Hello "
        assert sample_tree.child(0).child(1).text() == "there"

    def test_empty_element_has_no_text(self) -> None:
        """Test text() on an element without children."""
        assert element("br", 0).text() is None

    def test_iter_is_document_order(self, sample_tree: Node) -> None:
        """Test pre-order traversal."""
        offsets = [node.offset for node in sample_tree.iter()]

        assert offsets == [0, 6, 16, 22, 26, 40, 41, 44]

    def test_find_and_find_all(self, sample_tree: Node) -> None:
        """Test searching descendants by tag name."""
        assert sample_tree.find("em").offset == 22
        assert [node.offset for node in sample_tree.find_all("p")] == [6, 41]
        assert sample_tree.find("body") is None
        assert sample_tree.find("table") is None

    def test_full_text(self, sample_tree: Node) -> None:
        """Test concatenation of all literal content."""
        assert sample_tree.full_text() == "Hello there bye"

    def test_to_dict(self) -> None:
        """Test dictionary conversion."""
        node = element("a", 0, {"k": "v"}, [whitespace(" ", 3)])

        assert node.to_dict() == {
            "kind": "element",
            "name": "a",
            "offset": 0,
            "attributes": {"k": "v"},
            "children": [{"kind": "whitespace", "content": " ", "offset": 3}],
        }

    def test_repr_mentions_variant(self) -> None:
        """Test the debugging representation."""
        assert "element 'a'" in repr(element("a", 0))
        assert "text 'x'" in repr(text("x", 1))

    def test_nodes_are_unhashable(self) -> None:
        """Test that hashing a node fails with a plain unhashable-type error."""
        assert Node.__hash__ is None
        with pytest.raises(TypeError, match="unhashable type"):
            hash(element("a", 0))

    def test_to_dict_handles_deep_trees(self) -> None:
        """Test dictionary conversion of a tree deeper than the recursion limit."""
        depth = 5000
        node = text("x", depth)
        for offset in reversed(range(depth)):
            node = element("d", offset, {}, [node])

        converted = node.to_dict()
        for offset in range(depth):
            assert converted["offset"] == offset
            converted = converted["children"][0]
        assert converted == {"kind": "text", "content": "x", "offset": depth}
