"""Base node types for markup trees.

Every tree member derives from :class:`Node`, which carries the single parent
back reference and the upward traversal built on it. Ownership runs downward
only: an element's child list holds its children, while ``parent`` is a plain
back pointer that never keeps anything alive on its own.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Tuple, Type, Union

if TYPE_CHECKING:
    from markup_tree.tree.collection import ElementCollection
    from markup_tree.tree.tag import ClassList

ClassOrTuple = Union[Type[Any], Tuple[Type[Any], ...]]


class Node:
    """Common behavior of every tree member.

    Provides the parent link, the memoized ancestor chain, and fragment
    concatenation with ``+``.
    """

    def __init__(self) -> None:
        """Initialize a parentless node."""
        self._parent: Optional["Node"] = None
        self._ancestors: Optional[Tuple["Node", ...]] = None

    @property
    def tag_name(self) -> str:
        """Get the tag name derived from the concrete class name."""
        return type(self).__name__.lower()

    @property
    def parent(self) -> Optional["Node"]:
        """Get the element whose child list holds this node."""
        return self._parent

    @parent.setter
    def parent(self, parent: Optional["Node"]) -> None:
        if parent is self._parent:
            return
        self._parent = parent
        self._invalidate_ancestors()

    @property
    def has_parent(self) -> bool:
        """Check whether the node is attached to a parent."""
        return self._parent is not None

    @property
    def has_children(self) -> bool:
        """Leaf nodes never have children."""
        return False

    @property
    def ancestors(self) -> List["Node"]:
        """Get the strict ancestors, nearest first and root last."""
        if self._ancestors is not None:
            return list(self._ancestors)

        parent = self._parent
        chain: Tuple["Node", ...] = (
            (parent, *parent.ancestors) if parent is not None else ()
        )
        if self._memoize_ancestors():
            self._ancestors = chain
        return list(chain)

    def find_first_ancestor(self, kind: ClassOrTuple) -> Optional["Node"]:
        """Find the nearest ancestor that is an instance of ``kind``.

        The whole ancestor chain is materialized before the scan.
        """
        return next(
            (ancestor for ancestor in self.ancestors if isinstance(ancestor, kind)),
            None,
        )

    @property
    def indent_level(self) -> int:
        """Get the depth of this node below its root (root = 0)."""
        if self._parent is None:
            return 0
        return self._parent.indent_level + 1

    def to_collection(self) -> "ElementCollection":
        """Wrap this node in a read-only proxy inside a new collection."""
        from markup_tree.tree.collection import ElementCollection  # noqa: PLC0415

        return ElementCollection([Proxy(self)])

    def __add__(self, other: Any) -> "ElementCollection":
        return self.to_collection() + other

    def _iter_children(self) -> Iterable["Node"]:
        return ()

    def _memoize_ancestors(self) -> bool:
        if self._parent is None:
            return True
        return self._parent._memoize_ancestors()

    def _escape_text(self) -> bool:
        if self._parent is None:
            return True
        return self._parent._escape_text()

    def _invalidate_ancestors(self) -> None:
        # A memoized descendant implies a memoized ancestor, so an empty memo
        # on a memoizing node means nothing below is cached either.
        if self._ancestors is None and self._memoize_ancestors():
            return
        self._ancestors = None
        for child in self._iter_children():
            child._invalidate_ancestors()


class Proxy:
    """Read-only, non-owning view of a node.

    Produced when fragments are combined with ``+`` so that building a
    collection never changes the parent of the viewed node. Attribute reads
    are forwarded to the node; writes are rejected. A proxy compares and
    hashes as its node, so membership tests see through it, but it is not a
    Node instance: insertion code detects it with ``isinstance`` and unwraps it.
    """

    __slots__ = ("_node",)

    def __init__(self, node: Node) -> None:
        object.__setattr__(self, "_node", node)

    @property
    def node(self) -> Node:
        """Get the viewed node."""
        return self._node

    def __getattr__(self, name: str) -> Any:
        if name == "_node":
            raise AttributeError(name)
        return getattr(self._node, name)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"cannot set {name!r} through a read-only proxy")

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Proxy):
            other = other.node
        return self._node == other

    def __hash__(self) -> int:
        return hash(self._node)

    def __str__(self) -> str:
        return str(self._node)

    def __repr__(self) -> str:
        return f"Proxy({self._node!r})"


class HasClassList(ABC):
    """Capability of nodes that carry a set of CSS class names."""

    @property
    @abstractmethod
    def class_list(self) -> "ClassList":
        """Get the class names of this node."""
