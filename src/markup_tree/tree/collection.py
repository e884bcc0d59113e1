"""Ordered node collections.

:class:`ElementCollection` is both the child list an element owns and the
result type of queries and fragment concatenation. The collection itself never
touches parent links; ownership is enforced by the element that holds it.
"""

from typing import Any, Iterable, List

from markup_tree.tree.node import Node, Proxy
from markup_tree.tree.text import TextNode


class ElementCollection(list):
    """List of nodes in document order that renders as their concatenation."""

    def remove_node(self, node: Any) -> bool:
        """Remove every entry that is ``node`` itself.

        Returns:
            True if at least one entry was removed
        """
        kept = [item for item in self if item is not node]
        if len(kept) == len(self):
            return False
        self[:] = kept
        return True

    def flatten(self) -> "ElementCollection":
        """Get a new collection with nested lists and collections expanded."""
        flat = ElementCollection()

        def collect(items: Iterable[Any]) -> None:
            for item in items:
                if isinstance(item, (list, tuple)):
                    collect(item)
                else:
                    flat.append(item)

        collect(self)
        return flat

    def __add__(self, other: Any) -> "ElementCollection":
        items: List[Any]
        if other is None:
            items = []
        elif isinstance(other, (Node, Proxy)):
            items = [other]
        elif isinstance(other, (list, tuple)):
            items = list(other)
        else:
            items = [TextNode.from_string(other, escape=self._escape_text())]
        return ElementCollection(list(self) + items)

    def _escape_text(self) -> bool:
        # Coerced text follows the tree of the first node; escape otherwise
        for item in self:
            if isinstance(item, (Node, Proxy)):
                return item._escape_text()
        return True

    def __str__(self) -> str:
        return "".join(str(item) for item in self)

    def __repr__(self) -> str:
        return f"ElementCollection({list.__repr__(self)})"
