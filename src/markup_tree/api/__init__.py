"""Public API for building, rendering and exporting markup trees."""

from .adapters import (
    AdapterMetadata,
    AdapterRegistry,
    AdapterType,
    BeautifulSoupAdapter,
    ConversionResult,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    get_adapters_by_type,
    list_available_adapters,
    register_adapter,
)
from .builder import build, render

__all__ = [
    "AdapterMetadata",
    "AdapterRegistry",
    "AdapterType",
    "BeautifulSoupAdapter",
    "ConversionResult",
    "IntegrationAdapter",
    "LxmlAdapter",
    "build",
    "get_adapter",
    "get_adapters_by_type",
    "list_available_adapters",
    "register_adapter",
    "render",
]
