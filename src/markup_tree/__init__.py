"""Markup Tree.

A programmatic builder for HTML-like markup: construct a tree of typed nodes
in plain Python, then render it to text.

Progressive API Disclosure:
- Level 1: Simple functions - build(), render()
- Level 2: Tree classes - Element, Tag, TextNode with a shared RenderingContext
- Level 3: Custom resolution layers - ResolutionChain, OperationResolver
- Level 4: Export adapters - lxml and BeautifulSoup document models
"""

__version__ = "0.1.0"
__author__ = "Markup Tree Team"

# Progressive API disclosure - Level 1: Simple functions
from .api import build, render

# Configuration classes for advanced usage
from .shared.config import BuilderConfig, GlobalConfig, TreeConfig

# Level 2 and 3: Tree classes and resolution
from .tree import (
    Element,
    ElementCollection,
    RenderingContext,
    ResolutionChain,
    Tag,
    TextNode,
    UnresolvedOperation,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions (progressive disclosure entry point)
    "build",
    "render",

    # Level 2: Tree classes
    "Element",
    "ElementCollection",
    "RenderingContext",
    "Tag",
    "TextNode",

    # Level 3: Resolution
    "ResolutionChain",
    "UnresolvedOperation",

    # Configuration classes for advanced usage
    "BuilderConfig",
    "GlobalConfig",
    "TreeConfig",
]
