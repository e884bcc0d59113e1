"""Markup tags with attributes and class lists.

:class:`Tag` is the concrete element that renders its own start and end tags.
Subclasses take their tag name from the class name (``class Div(Tag)`` renders
``<div>``); a plain ``Tag("span")`` names it explicitly.
"""

import html
from typing import Any, Dict, Iterable, Iterator, Optional

from markup_tree.tree.context import RenderingContext
from markup_tree.tree.element import Element
from markup_tree.tree.node import HasClassList


class ClassList:
    """Insertion-ordered set of CSS class names."""

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self._names: Dict[str, None] = {}
        if names is not None:
            self.add(*names)

    @classmethod
    def from_string(cls, value: str) -> "ClassList":
        """Create a class list from a whitespace separated string."""
        return cls(value.split())

    def add(self, *names: str) -> None:
        """Add class names; whitespace separated names are split."""
        for name in names:
            for part in str(name).split():
                self._names[part] = None

    def remove(self, name: str) -> None:
        """Remove a class name if present."""
        self._names.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __str__(self) -> str:
        return " ".join(self._names)

    def __repr__(self) -> str:
        return f"ClassList({list(self._names)!r})"


class Tag(Element, HasClassList):
    """Element that renders as ``<tag attributes>content</tag>``."""

    def __init__(
        self,
        tag_name: Optional[str] = None,
        attributes: Optional[Dict[str, Any]] = None,
        context: Optional[RenderingContext] = None,
    ) -> None:
        """Initialize the tag.

        Args:
            tag_name: Explicit tag name, defaults to the lowercased class name
            attributes: Initial attributes; ``class`` fills the class list
            context: Rendering context shared with the rest of the tree
        """
        super().__init__(context)
        self._tag_name = tag_name
        self._class_list = ClassList()
        self.attributes: Dict[str, Any] = {}
        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)

    @property
    def tag_name(self) -> str:
        return self._tag_name or super().tag_name

    @property
    def class_list(self) -> ClassList:
        return self._class_list

    @property
    def id(self) -> Optional[str]:
        """Get the ``id`` attribute."""
        return self.attributes.get("id")

    @id.setter
    def id(self, value: Optional[str]) -> None:
        self.set_attribute("id", value)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        """Get attribute value with optional default."""
        if name == "class":
            return str(self._class_list) if self._class_list else default
        return self.attributes.get(name, default)

    def set_attribute(self, name: str, value: Any) -> None:
        """Set attribute value; ``None`` removes the attribute."""
        if not isinstance(name, str) or not name:
            raise TypeError("Attribute name must be a non-empty string")
        if name == "class":
            self._class_list = ClassList.from_string(str(value or ""))
            return
        if value is None:
            self.attributes.pop(name, None)
            return
        self.attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        """Check if the tag has a specific attribute."""
        if name == "class":
            return len(self._class_list) > 0
        return name in self.attributes

    def remove_attribute(self, name: str) -> None:
        """Remove an attribute if present."""
        self.set_attribute(name, None)

    def add_class(self, *names: str) -> None:
        """Add CSS class names."""
        self._class_list.add(*names)

    def remove_class(self, name: str) -> None:
        """Remove a CSS class name."""
        self._class_list.remove(name)

    def _render_attributes(self) -> str:
        parts = []
        if self._class_list:
            parts.append(f' class="{html.escape(str(self._class_list))}"')
        for name, value in self.attributes.items():
            if value is False:
                continue
            if value is True:
                parts.append(f" {name}")
            else:
                parts.append(f' {name}="{html.escape(str(value))}"')
        return "".join(parts)

    def __str__(self) -> str:
        tag_name = self.tag_name
        return f"<{tag_name}{self._render_attributes()}>{self.content}</{tag_name}>"
