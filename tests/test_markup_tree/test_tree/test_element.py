"""Comprehensive tests for the element tree engine.

Tests child ownership, re-parenting, lazy child lists, content replacement,
ancestor traversal, queries and serialization.
"""

import pytest

from markup_tree.shared import BuilderConfig
from markup_tree.tree import (
    Element,
    ElementCollection,
    Proxy,
    RenderingContext,
    Tag,
    TextNode,
)


class Section(Element):
    """Element subclass used to check class-derived tag names."""


class Item(Tag):
    """Tag subclass rendered as <item>."""


def _assert_single_parent(*nodes) -> None:
    """Every attached node must be listed by its parent."""
    for node in nodes:
        if node.parent is not None:
            assert any(entry is node for entry in node.parent.children)


class TestElementCreation:
    """Test element construction and basic properties."""

    def test_default_context_created_when_omitted(self) -> None:
        """Test that each element without a context gets a fresh one."""
        first = Element()
        second = Element()

        assert isinstance(first.context, RenderingContext)
        assert first.context is not second.context

    def test_shared_context_is_kept(self) -> None:
        """Test that a supplied context is shared, not copied."""
        context = RenderingContext()

        assert Element(context).context is context

    def test_tag_name_derived_from_class_name(self) -> None:
        """Test that tag names come from the lowercased class name."""
        assert Element().tag_name == "element"
        assert Section().tag_name == "section"
        assert TextNode("x").tag_name == "textnode"

    def test_new_element_is_parentless_root(self) -> None:
        """Test that a new element has no parent."""
        element = Element()

        assert element.parent is None
        assert not element.has_parent
        assert element.indent_level == 0

    def test_assigns_and_helpers_come_from_context(self) -> None:
        """Test the context shortcut properties."""
        helpers = object()
        context = RenderingContext(variables={"title": "Home"}, helpers=helpers)
        element = Element(context)

        assert element.assigns == {"title": "Home"}
        assert element.helpers is helpers


class TestLazyChildren:
    """Test the lazily created child list."""

    def test_untouched_element_has_no_children(self) -> None:
        """Test that reads do not create the child list."""
        element = Element()

        assert not element.has_children
        assert element.content == ""
        assert element.get_elements_by_tag_name("p") == []
        assert element._children is None

    def test_children_accessor_materializes_list(self) -> None:
        """Test that the public accessor creates an empty list."""
        element = Element()

        children = element.children

        assert isinstance(children, ElementCollection)
        assert children == []
        assert not element.has_children

    def test_emptied_element_reports_no_children(self) -> None:
        """Test that an element emptied again reports no children."""
        parent = Element()
        child = Element()
        parent.add_child(child)

        parent.remove_child(child)

        assert not parent.has_children


class TestAddChild:
    """Test insertion semantics."""

    def test_add_child_establishes_parent_relationship(self) -> None:
        """Test adding an element sets its parent and appends it."""
        parent = Element()
        child = Element()

        parent.add_child(child)

        assert child.parent is parent
        assert list(parent.children) == [child]
        assert parent.has_children

    def test_add_none_is_noop(self) -> None:
        """Test that None is ignored without creating the child list."""
        parent = Element()

        assert parent.add_child(None) is None
        assert parent._children is None

    def test_add_scalar_wraps_text_node(self) -> None:
        """Test that non-node values become text nodes."""
        parent = Element()

        parent.add_child("hello")
        parent.add_child(42)

        first, second = parent.children
        assert isinstance(first, TextNode)
        assert first.text == "hello"
        assert second.text == "42"
        assert first.parent is parent

    def test_add_sequence_inserts_each_item_in_order(self) -> None:
        """Test that lists are inserted item by item and return the child list."""
        parent = Element()
        child = Element()

        result = parent.add_child(["a", child, None, ("b", "c")])

        assert result is parent.children
        assert str(parent) == "abc"
        assert len(parent.children) == 4
        assert child.parent is parent

    def test_add_empty_sequence_materializes_child_list(self) -> None:
        """Test that an empty list still returns the child list."""
        parent = Element()

        result = parent.add_child([])

        assert result == []
        assert not parent.has_children

    def test_reparent_moves_child(self) -> None:
        """Test that adding to a new parent detaches from the old one."""
        first = Element()
        second = Element()
        child = Element()

        first.add_child(child)
        second.add_child(child)

        assert child.parent is second
        assert all(entry is not child for entry in first.children)
        assert sum(1 for entry in second.children if entry is child) == 1
        _assert_single_parent(child)

    def test_self_reinsert_creates_duplicate_entry(self) -> None:
        """Test that re-adding to the same parent appends a second entry."""
        parent = Element()
        child = Element()

        parent.add_child(child)
        parent.add_child(child)

        assert child.parent is parent
        assert sum(1 for entry in parent.children if entry is child) == 2

    def test_lshift_chains_insertions(self) -> None:
        """Test that << returns the element so insertions chain."""
        parent = Element()
        child = Element()

        result = parent << child << "text"

        assert result is parent
        assert child.parent is parent
        assert str(parent) == "text"
        assert len(parent.children) == 2

    def test_proxy_is_unwrapped_on_insertion(self) -> None:
        """Test that inserting a proxy attaches the viewed element."""
        parent = Element()
        child = Element()

        parent.add_child(Proxy(child))

        assert parent.children[0] is child
        assert child.parent is parent

    def test_text_escaping_follows_config(self) -> None:
        """Test that coerced text honors the escape_text setting."""
        escaped = Element()
        raw = Element(RenderingContext(config=BuilderConfig.raw_text()))

        escaped.add_child("<b>")
        raw.add_child("<b>")

        assert str(escaped) == "&lt;b&gt;"
        assert str(raw) == "<b>"


class TestRemoveChild:
    """Test detaching children."""

    def test_remove_child_clears_parent_relationship(self) -> None:
        """Test that removal clears the link in both directions."""
        parent = Element()
        child = Element()
        parent.add_child(child)

        result = parent.remove_child(child)

        assert result is True
        assert child.parent is None
        assert all(entry is not child for entry in parent.children)

    def test_remove_from_untouched_element_is_noop(self) -> None:
        """Test that removal never creates the child list."""
        parent = Element()
        child = Element()

        assert parent.remove_child(child) is False
        assert parent._children is None

    def test_remove_foreign_child_keeps_its_parent(self) -> None:
        """Test that removing another element's child changes nothing."""
        owner = Element()
        stranger = Element()
        child = Element()
        owner.add_child(child)
        stranger.add_child("x")

        assert stranger.remove_child(child) is False
        assert child.parent is owner
        _assert_single_parent(child)

    def test_detach_preserves_subtree(self) -> None:
        """Test that a removed node keeps its own children."""
        root = Element()
        branch = Element()
        sibling = Element()
        leaf = Element()
        root.add_child(branch)
        root.add_child(sibling)
        branch.add_child(leaf)

        root.remove_child(branch)

        assert branch.parent is None
        assert list(branch.children) == [leaf]
        assert leaf.parent is branch
        assert list(root.children) == [sibling]

    def test_remove_duplicate_removes_every_entry(self) -> None:
        """Test that a node added twice is fully detached by one removal."""
        parent = Element()
        child = Element()
        parent.add_child("before")
        parent.add_child(child)
        parent.add_child(child)

        assert parent.remove_child(child) is True

        assert child.parent is None
        assert all(entry is not child for entry in parent.children)
        assert all(entry.parent is parent for entry in parent.children)
        assert str(parent) == "before"


class TestContent:
    """Test content replacement and serialization."""

    def test_empty_element_serializes_to_empty_string(self) -> None:
        """Test serialization of a childless element."""
        assert str(Element()) == ""

    def test_text_leaf_serializes_to_text(self) -> None:
        """Test serialization of a single text child."""
        element = Element()
        element.add_child("hi")

        assert str(element) == "hi"
        assert element.content == "hi"

    def test_children_concatenate_without_separator(self) -> None:
        """Test that children render back to back."""
        element = Element()
        element.add_child("a")
        element.add_child("b")

        assert str(element) == "ab"

    def test_nested_elements_render_recursively(self) -> None:
        """Test that nested content renders in document order."""
        root = Element()
        inner = Element()
        inner << "b" << "c"
        root << "a" << inner << "d"

        assert str(root) == "abcd"

    def test_content_setter_replaces_children(self) -> None:
        """Test that assigning content drops existing children."""
        element = Element()
        old = Element()
        element.add_child(old)
        element.add_child("old")

        element.content = "new"

        assert str(element) == "new"
        assert len(element.children) == 1
        assert old.parent is None

    def test_content_setter_on_untouched_element(self) -> None:
        """Test that assigning content to a new element just adds it."""
        element = Element()

        element.content = ["x", "y"]

        assert str(element) == "xy"

    def test_content_setter_with_none_empties(self) -> None:
        """Test that assigning None leaves the element empty."""
        element = Element()
        element.add_child("x")

        element.content = None

        assert not element.has_children
        assert str(element) == ""


class TestAncestors:
    """Test upward traversal."""

    def _chain(self, config=None):
        context = RenderingContext(config=config)
        root, mid, leaf = Element(context), Section(context), Element(context)
        root.add_child(mid)
        mid.add_child(leaf)
        return root, mid, leaf

    def test_ancestor_order_nearest_first(self) -> None:
        """Test that ancestors run from parent to root."""
        root, mid, leaf = self._chain()

        assert leaf.ancestors == [mid, root]
        assert mid.ancestors == [root]
        assert root.ancestors == []

    def test_indent_level_counts_ancestors(self) -> None:
        """Test depth below the root."""
        root, mid, leaf = self._chain()

        assert root.indent_level == 0
        assert mid.indent_level == 1
        assert leaf.indent_level == 2

    def test_returned_list_does_not_alias_memo(self) -> None:
        """Test that mutating the result leaves the node unaffected."""
        _, mid, leaf = self._chain()

        leaf.ancestors.clear()

        assert leaf.ancestors[0] is mid

    def test_reparenting_invalidates_memoized_ancestors(self) -> None:
        """Test that moving a subtree refreshes its ancestor chains."""
        root, mid, leaf = self._chain()
        assert leaf.ancestors == [mid, root]

        other = Element(root.context)
        other.add_child(mid)

        assert mid.ancestors == [other]
        assert leaf.ancestors == [mid, other]

    def test_detached_subtree_ancestors_end_at_new_root(self) -> None:
        """Test that removal refreshes the chain of the detached subtree."""
        root, mid, leaf = self._chain()
        assert leaf.ancestors == [mid, root]

        root.remove_child(mid)

        assert leaf.ancestors == [mid]
        assert mid.ancestors == []

    def test_unmemoized_chain_is_always_fresh(self) -> None:
        """Test ancestors with memoization disabled."""
        root, mid, leaf = self._chain(BuilderConfig.debugging())
        assert leaf.ancestors == [mid, root]

        assert leaf._ancestors is None
        assert mid._ancestors is None

    def test_text_node_ancestors(self) -> None:
        """Test that text leaves report their ancestors too."""
        root, mid, _ = self._chain()
        mid.add_child("text")

        text = mid.children[-1]

        assert text.ancestors == [mid, root]

    def test_find_first_ancestor_by_type(self) -> None:
        """Test lookup of the nearest ancestor of a class."""
        root, mid, leaf = self._chain()

        assert leaf.find_first_ancestor(Section) is mid
        assert leaf.find_first_ancestor(Element) is mid
        assert leaf.find_first_ancestor(Tag) is None
        assert root.find_first_ancestor(Element) is None


class TestQueries:
    """Test descendant queries."""

    def test_get_elements_by_tag_name_document_order(self) -> None:
        """Test that matches come back depth-first in document order."""
        context = RenderingContext()
        root = Element(context)
        first = Tag("x", context=context)
        branch = Tag("y", context=context)
        nested = Tag("x", context=context)
        root << first << branch
        branch << nested

        result = root.get_elements_by_tag_name("x")

        assert isinstance(result, ElementCollection)
        assert list(result) == [first, nested]

    def test_query_excludes_self(self) -> None:
        """Test that the queried element is never part of the result."""
        outer = Tag("x")
        inner = Tag("x", context=outer.context)
        outer << inner

        assert list(outer.find_by_tag("x")) == [inner]

    def test_parent_precedes_its_descendants(self) -> None:
        """Test pre-order: a match is listed before matches inside it."""
        root = Element()
        outer = Tag("x", context=root.context)
        inner = Tag("x", context=root.context)
        after = Tag("x", context=root.context)
        root << outer << after
        outer << inner

        assert list(root.get_elements_by_tag_name("x")) == [outer, inner, after]

    def test_get_elements_by_class_name(self) -> None:
        """Test class queries across nesting levels."""
        root = Element()
        card = Item(attributes={"class": "card wide"}, context=root.context)
        body = Tag("p", context=root.context)
        nested = Tag("span", attributes={"class": "card"}, context=root.context)
        root << card << body << "plain text"
        body << nested

        result = root.get_elements_by_class_name("card")

        assert list(result) == [card, nested]
        assert list(root.find_by_class("wide")) == [card]
        assert root.find_by_class("missing") == []

    def test_class_query_skips_nodes_without_class_list(self) -> None:
        """Test that plain elements and text never match class queries."""
        root = Element()
        root << Element(root.context) << "text"

        assert root.get_elements_by_class_name("text") == []


class TestConcatenation:
    """Test fragment concatenation with +."""

    def test_plus_builds_collection_without_reparenting(self) -> None:
        """Test that + wraps self in a proxy and leaves parents alone."""
        parent = Element()
        child = Element()
        parent.add_child(child)
        other = Element()

        combined = child + other

        assert isinstance(combined, ElementCollection)
        assert len(combined) == 2
        assert isinstance(combined[0], Proxy)
        assert combined[0].node is child
        assert combined[1] is other
        assert child.parent is parent
        assert other.parent is None

    def test_plus_coerces_scalars_to_text(self) -> None:
        """Test that + turns plain values into text nodes."""
        element = Element()
        element.add_child("a")

        combined = element + "b"

        assert isinstance(combined[1], TextNode)
        assert str(combined) == "ab"

    def test_plus_chains(self) -> None:
        """Test that collections keep concatenating."""
        first = Element()
        first.add_child("1")

        combined = first + "2" + "3"

        assert str(combined) == "123"
        assert len(combined) == 3

    def test_plus_text_escaping_follows_config(self) -> None:
        """Test that + coerces text the same way add_child does."""
        escaped = Element()
        raw = Element(RenderingContext(config=BuilderConfig.raw_text()))

        assert str(escaped + "<b>" + "&") == "&lt;b&gt;&amp;"
        assert str(raw + "<b>" + "&") == "<b>&"

        raw.add_child("<i>")
        assert str(raw.children[0] + "<b>") == "<i><b>"

    def test_inserting_combined_fragments_attaches_originals(self) -> None:
        """Test that adding a concatenation attaches the viewed elements."""
        first = Element()
        second = Element()
        target = Element()

        target.add_child(first + second)

        assert first.parent is target
        assert second.parent is target
        assert list(target.children) == [first, second]


class TestBuild:
    """Test block-based construction."""

    def test_build_runs_block_with_element_as_current(self) -> None:
        """Test that the element is the current element inside the block."""
        element = Element()
        seen = []

        element.build(lambda node: seen.append(node.context.current_element))

        assert seen == [element]
        assert element.context.current_element is None

    def test_build_appends_returned_text_when_empty(self) -> None:
        """Test that a returned string becomes content of an empty element."""
        element = Element()

        element.build(lambda node: "returned")

        assert str(element) == "returned"

    def test_build_ignores_return_value_when_children_added(self) -> None:
        """Test that the return value is dropped once the block added content."""
        element = Element()

        def block(node):
            node << "added"
            return "ignored"

        element.build(block)

        assert str(element) == "added"

    def test_build_passes_extra_arguments(self) -> None:
        """Test that extra arguments reach the block."""
        element = Element()

        element.build(lambda node, a, b: f"{a}-{b}", 1, 2)

        assert str(element) == "1-2"

    def test_build_without_block_returns_element(self) -> None:
        """Test build with no block."""
        element = Element()

        assert element.build() is element
        assert not element.has_children

    def test_build_restores_cursor_on_error(self) -> None:
        """Test that the current element is popped when the block raises."""
        element = Element()

        def block(node):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            element.build(block)

        assert element.context.current_element is None


class TestSingleParentInvariant:
    """Test the ownership invariant across mixed mutation sequences."""

    def test_invariant_holds_after_mixed_operations(self) -> None:
        """Test parent links after moves, removals and replacements."""
        context = RenderingContext()
        a, b, c = Element(context), Element(context), Element(context)
        x, y, z = Element(context), Element(context), Element(context)

        a << x << y
        b << x
        c << y << z
        a.remove_child(y)
        b.content = z
        c.remove_child(x)

        assert x.parent is None
        assert y.parent is c
        assert z.parent is b
        assert not a.has_children
        _assert_single_parent(x, y, z)

    def test_move_after_reinsert_leaves_no_stale_entry(self) -> None:
        """Test moving a node that its old parent listed twice."""
        context = RenderingContext()
        a, b = Element(context), Element(context)
        x = Element(context)
        x << "X"

        a << x << x
        b << x

        assert x.parent is b
        assert all(entry is not x for entry in a.children)
        assert str(a) == ""
        assert str(b) == "X"
        _assert_single_parent(x)

    def test_every_listed_child_points_back(self) -> None:
        """Test that duplicates never outlive the parent link."""
        context = RenderingContext()
        a, b = Element(context), Element(context)
        x, y = Element(context), Element(context)

        a << x << y << x
        a.remove_child(x)
        b << y << y
        a << y

        for parent in (a, b):
            assert all(entry.parent is parent for entry in parent.children)
        assert list(a.children) == [y]
        assert not b.has_children

    def test_repr_mentions_tag_and_child_count(self) -> None:
        """Test the debugging representation."""
        element = Section()
        element << "a" << "b"

        assert repr(element) == "<Section section children=2>"
