"""Element nodes: child ownership, mutation, queries and serialization.

An :class:`Element` owns an ordered child list that is only materialized on the
first write. Every insertion enforces the single-parent rule: a node attached
elsewhere is detached from its previous parent first. Attributes the element
does not define are resolved through its rendering context.
"""

from typing import Any, Callable, Iterable, Optional

from markup_tree.shared import get_logger
from markup_tree.tree.collection import ElementCollection
from markup_tree.tree.context import RenderingContext
from markup_tree.tree.node import HasClassList, Node, Proxy
from markup_tree.tree.text import TextNode

logger = get_logger(__name__, component="Element")

NodePredicate = Callable[[Node], bool]


class Element(Node):
    """Structural tree node owning an ordered list of children.

    An element renders as the concatenation of its children; subclasses add
    their own markup around that content.
    """

    def __init__(self, context: Optional[RenderingContext] = None) -> None:
        """Initialize an empty element.

        Args:
            context: Rendering context shared with the rest of the tree, a new
                default context is created when omitted
        """
        super().__init__()
        self._context = context if context is not None else RenderingContext()
        self._children: Optional[ElementCollection] = None

    @property
    def context(self) -> RenderingContext:
        """Get the rendering context this element resolves against."""
        return self._context

    @property
    def assigns(self) -> dict:
        """Get the variables bound in the rendering context."""
        return self._context.variables

    @property
    def helpers(self) -> Any:
        """Get the helper object of the rendering context."""
        return self._context.helpers

    @property
    def children(self) -> ElementCollection:
        """Get the child list, creating it on first access."""
        if self._children is None:
            self._children = ElementCollection()
        return self._children

    @property
    def has_children(self) -> bool:
        """Check whether the child list exists and is non-empty."""
        return self._children is not None and len(self._children) > 0

    # Tree mutation

    def add_child(self, child: Any) -> Optional[ElementCollection]:
        """Append ``child`` to this element.

        ``None`` is ignored, lists and tuples are inserted item by item, proxies
        are unwrapped, and any other non-node value becomes a text node. A node
        attached to another parent is detached from it first. A node that is
        already a child of this element is appended again; every entry for it
        goes away together when it is removed or moved.

        Returns:
            The child list, or None when nothing was added
        """
        if child is None:
            return None

        if isinstance(child, (list, tuple)):
            for item in child:
                self.add_child(item)
            return self.children

        if isinstance(child, Proxy):
            child = child.node
        elif not isinstance(child, Node):
            child = TextNode.from_string(child, escape=self._escape_text())

        previous = child.parent
        if previous is not None and previous is not self:
            logger.debug(
                f"Moving <{child.tag_name}> from <{previous.tag_name}> "
                f"to <{self.tag_name}>",
                context=self._context,
            )
            previous.remove_child(child)

        child.parent = self
        self.children.append(child)
        return self._children

    def remove_child(self, child: Node) -> bool:
        """Detach ``child`` from this element.

        The removed subtree is left intact and becomes a parentless root.
        Every entry for the node is dropped, so a node added twice is fully
        detached. Removing a node that is not a child is a no-op.

        Returns:
            True if any entry was removed from the child list
        """
        if child.parent is self:
            child.parent = None
        if self._children is None:
            return False
        return self._children.remove_node(child)

    def __lshift__(self, child: Any) -> "Element":
        self.add_child(child)
        return self

    @property
    def content(self) -> str:
        """Get the concatenated rendering of the children."""
        if not self.has_children:
            return ""
        return str(self._children)

    @content.setter
    def content(self, value: Any) -> None:
        self._clear_children()
        self.add_child(value)

    def build(self, block: Optional[Callable[..., Any]] = None, *args: Any) -> "Element":
        """Run ``block(self, *args)`` with this element as the current element.

        If the block returns a value that is not a node and the element is
        still empty afterwards, the value is added as content.
        """
        if block is not None:
            with self._context.within(self):
                self._append_return_value(block(self, *args))
        return self

    # Traversal and queries

    def get_elements_by_tag_name(self, tag_name: str) -> ElementCollection:
        """Find all descendants with the given tag name in document order."""
        return self._collect(lambda node: node.tag_name == tag_name)

    find_by_tag = get_elements_by_tag_name

    def get_elements_by_class_name(self, class_name: str) -> ElementCollection:
        """Find all descendants carrying the given class in document order."""
        return self._collect(
            lambda node: isinstance(node, HasClassList)
            and class_name in node.class_list
        )

    find_by_class = get_elements_by_class_name

    def _collect(self, predicate: NodePredicate) -> ElementCollection:
        elements = ElementCollection()
        if not self.has_children:
            return elements

        for child in self._children:
            if predicate(child):
                elements.append(child)
            if isinstance(child, Element):
                elements.extend(child._collect(predicate))
        return elements

    # Internal helpers

    def _clear_children(self) -> None:
        if self._children is None:
            return
        for child in self._children:
            if child.parent is self:
                child.parent = None
        self._children.clear()

    def _append_return_value(self, value: Any) -> None:
        if value is None or isinstance(value, Node) or self.has_children:
            return
        self.add_child(value)

    def _iter_children(self) -> Iterable[Node]:
        return self._children if self._children is not None else ()

    def _memoize_ancestors(self) -> bool:
        return self._context.config.tree.memoize_ancestors

    def _escape_text(self) -> bool:
        return self._context.config.tree.escape_text

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("_"):
            raise AttributeError(
                f"{type(self).__name__!r} object has no attribute {name!r}"
            )
        return self._context.resolve(name)

    def __str__(self) -> str:
        return self.content

    def __repr__(self) -> str:
        count = len(self._children) if self._children is not None else 0
        return f"<{type(self).__name__} {self.tag_name} children={count}>"
