"""Rendering context shared by the elements of one tree.

The context carries the variables ("assigns") and the helper object that
undefined element attributes fall back to, plus a stack tracking the element
currently being built.
"""

import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional

from markup_tree.shared import BuilderConfig, get_logger
from markup_tree.tree.resolution import ResolutionChain

if TYPE_CHECKING:
    from markup_tree.tree.element import Element

logger = get_logger(__name__, component="RenderingContext")


class RenderingContext:
    """Environment consulted by elements for attributes they do not define.

    One context is normally shared by every element of a tree and lives as long
    as the tree being built. It is not thread-safe; build each tree from a
    single thread.
    """

    def __init__(
        self,
        variables: Optional[Dict[str, Any]] = None,
        helpers: Any = None,
        config: Optional[BuilderConfig] = None,
        resolution_chain: Optional[ResolutionChain] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize the rendering context.

        Args:
            variables: Names bound for the tree, looked up by exact key
            helpers: Object whose attributes are exposed to every element
            config: Builder configuration, defaults to BuilderConfig()
            resolution_chain: Fallback layers, defaults to the standard chain
            correlation_id: ID attached to log records, generated when omitted
                and correlation tracking is enabled
        """
        self.config = config if config is not None else BuilderConfig()
        self.variables: Dict[str, Any] = variables if variables is not None else {}
        self.helpers = helpers
        self.resolution_chain = (
            resolution_chain if resolution_chain is not None else ResolutionChain()
        )

        if correlation_id is None and self.config.global_.enable_correlation_tracking:
            correlation_id = uuid.uuid4().hex[:8]
        self.correlation_id = correlation_id

        self._element_stack: List["Element"] = []

    @property
    def current_element(self) -> Optional["Element"]:
        """Get the element currently being built, if any."""
        if not self._element_stack:
            return None
        return self._element_stack[-1]

    @contextmanager
    def within(self, element: "Element") -> Iterator["Element"]:
        """Make ``element`` the current element for the duration of the block."""
        self._element_stack.append(element)
        logger.debug(
            f"Building <{element.tag_name}>",
            context=self,
            extra={"depth": len(self._element_stack)},
        )
        try:
            yield element
        finally:
            self._element_stack.pop()

    def resolve(self, name: str) -> Any:
        """Resolve ``name`` through the resolution chain.

        Raises:
            UnresolvedOperation: If no layer answers
        """
        return self.resolution_chain.resolve(self, name)

    def __repr__(self) -> str:
        return (
            f"RenderingContext(correlation_id={self.correlation_id!r}, "
            f"variables={list(self.variables)!r})"
        )
