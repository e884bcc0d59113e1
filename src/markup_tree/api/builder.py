"""Entry points for building and rendering markup trees.

Examples:
    >>> from markup_tree.tree import Tag
    >>> def page(root):
    ...     heading = Tag("h1", context=root.context)
    ...     heading << "Hello"
    ...     root << heading
    >>> render(build(page))
    '<h1>Hello</h1>'
"""

import time
from typing import Any, Callable, Dict, Optional

from markup_tree.shared import BuilderConfig, configure_logging, get_logger
from markup_tree.tree import Element, Node, RenderingContext

MS_PER_SECOND = 1000  # Milliseconds per second conversion

logger = get_logger(__name__, component="build")


def build(
    block: Optional[Callable[[Element], Any]] = None,
    *,
    variables: Optional[Dict[str, Any]] = None,
    helpers: Any = None,
    config: Optional[BuilderConfig] = None,
    correlation_id: Optional[str] = None,
) -> Element:
    """Build a tree under a fresh rendering context.

    A root element is created and ``block(root)`` runs with the root as the
    current element. Inside the block, attributes the root does not define
    resolve to the variables and then the helpers.

    Args:
        block: Callable receiving the root element
        variables: Names bound for the tree
        helpers: Object whose attributes are exposed to every element
        config: Builder configuration; when given, its logging level is
            applied to the package loggers
        correlation_id: Optional correlation ID for log records

    Returns:
        The root element; it renders as its children, without markup of its own
    """
    if config is not None:
        configure_logging(config.global_.logging_level)

    context = RenderingContext(
        variables=variables,
        helpers=helpers,
        config=config,
        correlation_id=correlation_id,
    )

    start_time = time.time()
    root = Element(context)
    root.build(block)

    logger.debug(
        "Built markup tree",
        context=context,
        extra={
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
            "has_children": root.has_children,
        },
    )
    return root


def render(node: Node) -> str:
    """Render a node and its subtree to text."""
    return str(node)
