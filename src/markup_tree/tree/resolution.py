"""Resolution of attributes an element does not define itself.

When an attribute lookup fails on an element, the element hands the name to
its rendering context, which walks an ordered :class:`ResolutionChain`:

1. the context's current element, if it defines the attribute natively
2. the context's variables, if one is bound under that exact name
3. the context's helper object, if it exposes the attribute

The first layer that answers wins, so the current element shadows a variable
of the same name, which in turn shadows a helper. If no layer answers,
:class:`UnresolvedOperation` is raised.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence

from markup_tree.shared import get_logger

if TYPE_CHECKING:
    from markup_tree.tree.context import RenderingContext

logger = get_logger(__name__, component="ResolutionChain")


class _Unresolved:
    """Sentinel type returned by resolvers that cannot answer."""

    def __repr__(self) -> str:
        return "UNRESOLVED"


UNRESOLVED = _Unresolved()


class UnresolvedOperation(AttributeError):
    """Raised when no resolution layer knows the requested name.

    Subclasses AttributeError so that ``hasattr`` and ``getattr`` with a
    default keep their usual meaning on elements.
    """

    def __init__(self, name: str, layers: Sequence[str] = ()) -> None:
        self.layers = list(layers)
        consulted = ", ".join(self.layers) if self.layers else "no resolution layers"
        super().__init__(f"undefined operation {name!r} (consulted: {consulted})")
        self.name = name


def native_attribute(obj: Any, name: str) -> Any:
    """Look ``name`` up on ``obj`` without triggering its ``__getattr__``.

    Returns:
        The attribute value, or UNRESOLVED if ``obj`` does not define it
    """
    try:
        return object.__getattribute__(obj, name)
    except AttributeError:
        return UNRESOLVED


class OperationResolver(ABC):
    """One layer of the resolution chain."""

    layer = "resolver"

    @abstractmethod
    def resolve(self, context: "RenderingContext", name: str) -> Any:
        """Return the value bound to ``name`` in this layer, or UNRESOLVED."""


class CurrentElementResolver(OperationResolver):
    """Resolve against the element currently being built."""

    layer = "current_element"

    def resolve(self, context: "RenderingContext", name: str) -> Any:
        cursor = context.current_element
        if cursor is None:
            return UNRESOLVED
        return native_attribute(cursor, name)


class VariableResolver(OperationResolver):
    """Resolve against the variables bound in the context."""

    layer = "variables"

    def resolve(self, context: "RenderingContext", name: str) -> Any:
        variables = context.variables
        if variables is not None and name in variables:
            return variables[name]
        return UNRESOLVED


class HelperResolver(OperationResolver):
    """Resolve against the context's helper object."""

    layer = "helpers"

    def resolve(self, context: "RenderingContext", name: str) -> Any:
        helpers = context.helpers
        if helpers is None:
            return UNRESOLVED
        return getattr(helpers, name, UNRESOLVED)


def default_resolvers() -> List[OperationResolver]:
    """Get the standard resolution layers in priority order."""
    return [CurrentElementResolver(), VariableResolver(), HelperResolver()]


class ResolutionChain:
    """Ordered fallback resolvers consulted for undefined element attributes."""

    def __init__(self, resolvers: Optional[Iterable[OperationResolver]] = None) -> None:
        """Initialize the chain.

        Args:
            resolvers: Layers in priority order, defaults to the standard three
        """
        self.resolvers: List[OperationResolver] = (
            list(resolvers) if resolvers is not None else default_resolvers()
        )

    @property
    def layers(self) -> List[str]:
        """Get the layer names in priority order."""
        return [resolver.layer for resolver in self.resolvers]

    def resolve(self, context: "RenderingContext", name: str) -> Any:
        """Resolve ``name`` through each layer in order.

        Raises:
            UnresolvedOperation: If no layer answers
        """
        for resolver in self.resolvers:
            value = resolver.resolve(context, name)
            if value is not UNRESOLVED:
                logger.debug(
                    f"Resolved '{name}' through {resolver.layer}",
                    context=context,
                    extra={"layer": resolver.layer},
                )
                return value

        logger.debug(
            f"Could not resolve '{name}'",
            context=context,
            extra={"layers": self.layers},
        )
        raise UnresolvedOperation(name, self.layers)
