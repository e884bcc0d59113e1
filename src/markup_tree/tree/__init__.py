"""Element tree engine for markup building.

Key Components:
    Element: Structural node owning an ordered child list
    TextNode: Leaf holding literal text, escaped on rendering
    Tag: Element rendering its own start/end tags, attributes and classes
    ElementCollection: Ordered node list used for children and query results
    RenderingContext: Variables, helpers and current element shared by a tree
    ResolutionChain: Fallback layers for attributes an element does not define
    TreeStatistics: Node counts and depth for diagnostics
"""

from .collection import ElementCollection
from .context import RenderingContext
from .element import Element
from .node import HasClassList, Node, Proxy
from .resolution import (
    UNRESOLVED,
    CurrentElementResolver,
    HelperResolver,
    OperationResolver,
    ResolutionChain,
    UnresolvedOperation,
    VariableResolver,
)
from .statistics import TreeStatistics
from .tag import ClassList, Tag
from .text import TextNode

__all__ = [
    "ClassList",
    "CurrentElementResolver",
    "Element",
    "ElementCollection",
    "HasClassList",
    "HelperResolver",
    "Node",
    "OperationResolver",
    "Proxy",
    "RenderingContext",
    "ResolutionChain",
    "Tag",
    "TextNode",
    "TreeStatistics",
    "UNRESOLVED",
    "UnresolvedOperation",
    "VariableResolver",
]
