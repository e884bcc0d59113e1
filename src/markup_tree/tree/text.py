"""Text leaves and the coercion of plain values into tree nodes."""

import html
from typing import Any

from markup_tree.tree.node import Node


class TextNode(Node):
    """Leaf node holding literal text.

    The text is stored raw and escaped when rendered, unless the node was
    created with ``escape=False``.
    """

    def __init__(self, text: str = "", escape: bool = True) -> None:
        super().__init__()
        self.text = text
        self.escape = escape

    @classmethod
    def from_string(cls, raw: Any, escape: bool = True) -> "TextNode":
        """Create a text node from any value using its ``str()`` form."""
        if raw is None:
            return cls("", escape)
        return cls(raw if isinstance(raw, str) else str(raw), escape)

    @property
    def content(self) -> str:
        return str(self)

    def __str__(self) -> str:
        if self.escape:
            return html.escape(self.text)
        return self.text

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"
