"""Tests for Tag rendering, attributes and class lists."""

import pytest

from markup_tree.tree import ClassList, Element, HasClassList, RenderingContext, Tag


class Div(Tag):
    """Tag named after its class."""


class TestClassList:
    """Test the ordered class name set."""

    def test_from_string_splits_whitespace(self) -> None:
        """Test parsing a class attribute value."""
        classes = ClassList.from_string("  a b\tc ")

        assert list(classes) == ["a", "b", "c"]
        assert str(classes) == "a b c"

    def test_add_keeps_insertion_order_without_duplicates(self) -> None:
        """Test adding names repeatedly."""
        classes = ClassList(["b"])

        classes.add("a", "b", "c d")

        assert list(classes) == ["b", "a", "c", "d"]
        assert len(classes) == 4

    def test_membership_and_removal(self) -> None:
        """Test contains and remove."""
        classes = ClassList(["a", "b"])

        classes.remove("a")
        classes.remove("missing")

        assert "a" not in classes
        assert "b" in classes
        assert repr(classes) == "ClassList(['b'])"


class TestTag:
    """Test tag construction and rendering."""

    def test_tag_is_element_with_class_list(self) -> None:
        """Test the capability interfaces of a tag."""
        tag = Tag("p")

        assert isinstance(tag, Element)
        assert isinstance(tag, HasClassList)
        assert not isinstance(Element(), HasClassList)

    def test_tag_name_explicit_or_from_class(self) -> None:
        """Test both naming styles."""
        assert Tag("span").tag_name == "span"
        assert Div().tag_name == "div"
        assert Tag().tag_name == "tag"

    def test_renders_empty_tag(self) -> None:
        """Test an empty tag renders start and end tags."""
        assert str(Div()) == "<div></div>"

    def test_renders_children_inside_tags(self) -> None:
        """Test nested rendering."""
        context = RenderingContext()
        ul = Tag("ul", context=context)
        for label in ("one", "two"):
            item = Tag("li", context=context)
            item << label
            ul << item

        assert str(ul) == "<ul><li>one</li><li>two</li></ul>"

    def test_renders_attributes_escaped(self) -> None:
        """Test attribute rendering with escaping and boolean values."""
        tag = Tag(
            "input",
            attributes={
                "class": "field wide",
                "value": 'say "hi" & bye',
                "disabled": True,
                "hidden": False,
            },
        )

        assert str(tag) == (
            '<input class="field wide" value="say &quot;hi&quot; &amp; bye" '
            "disabled></input>"
        )

    def test_attribute_accessors(self) -> None:
        """Test get, set, has and remove."""
        tag = Tag("a")

        tag.set_attribute("href", "/home")
        tag.id = "main"

        assert tag.get_attribute("href") == "/home"
        assert tag.id == "main"
        assert tag.has_attribute("href")
        assert tag.get_attribute("missing", "fallback") == "fallback"

        tag.remove_attribute("href")
        tag.set_attribute("id", None)

        assert not tag.has_attribute("href")
        assert tag.id is None

    def test_class_attribute_maps_to_class_list(self) -> None:
        """Test that the class attribute and class list stay in sync."""
        tag = Tag("p")

        assert not tag.has_attribute("class")
        assert tag.get_attribute("class") is None

        tag.set_attribute("class", "a b")
        tag.add_class("c")
        tag.remove_class("a")

        assert tag.get_attribute("class") == "b c"
        assert tag.has_attribute("class")
        assert "class" not in tag.attributes

    def test_invalid_attribute_name_raises(self) -> None:
        """Test that attribute names must be non-empty strings."""
        with pytest.raises(TypeError, match="Attribute name must be a non-empty string"):
            Tag("p").set_attribute("", "x")

    def test_undefined_attribute_resolves_through_context(self) -> None:
        """Test that tags take part in the resolution chain."""
        tag = Tag("p", context=RenderingContext(variables={"title": "Hi"}))

        tag << tag.title

        assert str(tag) == "<p>Hi</p>"
