"""Integration adapters exporting built trees to third-party document models.

Adapters hand the rendered markup of a tree to lxml or BeautifulSoup so that
callers can inspect, query, or validate the output with those libraries.
Conversion is one way: nothing here turns foreign documents back into trees.
Failures never raise; they are reported through :class:`ConversionResult`.
"""

import threading
import time
import weakref
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Type

from markup_tree.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    get_logger,
)
from markup_tree.tree import Node

_MAX_RECORDED_CONVERSIONS = 1000


class AdapterType(Enum):
    """Types of integration adapters."""

    HTML_LIBRARY = auto()    # HTML/XML document libraries (lxml, BeautifulSoup)
    PLUGIN = auto()          # Custom plugin adapters


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    version: str
    adapter_type: AdapterType
    target_library: str
    supported_versions: List[str]
    description: str
    author: str = "markup-tree"


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


class AdapterPerformanceProfiler:
    """Performance profiling utility for adapters."""

    def __init__(self) -> None:
        """Initialize performance profiler."""
        self._metrics: Dict[str, List[float]] = {}
        self._lock = threading.RLock()

    def record_conversion(self, adapter_name: str, conversion_time_ms: float) -> None:
        """Record conversion performance."""
        with self._lock:
            times = self._metrics.setdefault(adapter_name, [])
            times.append(conversion_time_ms)

            # Keep only recent metrics
            if len(times) > _MAX_RECORDED_CONVERSIONS:
                self._metrics[adapter_name] = times[-_MAX_RECORDED_CONVERSIONS:]

    def get_statistics(self, adapter_name: str) -> Dict[str, float]:
        """Get performance statistics for an adapter."""
        with self._lock:
            times = self._metrics.get(adapter_name)
            if not times:
                return {}

            return {
                "count": len(times),
                "average_ms": sum(times) / len(times),
                "min_ms": min(times),
                "max_ms": max(times),
                "total_ms": sum(times),
            }

    def get_all_statistics(self) -> Dict[str, Dict[str, float]]:
        """Get performance statistics for all adapters."""
        with self._lock:
            return {name: self.get_statistics(name) for name in self._metrics}


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters.

    Subclasses convert a rendered node into their target library's document
    model and report the outcome as a ConversionResult.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)
        self._profiler = AdapterPerformanceProfiler()

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the target library can be imported."""

    @abstractmethod
    def _convert_markup(self, markup: str) -> Any:
        """Convert rendered markup into the target representation."""

    def _conversion_metadata(self, converted: Any, markup: str) -> Dict[str, Any]:
        return {"markup_length": len(markup)}

    def to_target(self, node: Node) -> ConversionResult:
        """Render ``node`` and convert the markup to the target library.

        Args:
            node: Root of the subtree to export

        Returns:
            ConversionResult containing the target library's object
        """
        start_time = time.time()

        if not isinstance(node, Node):
            return self._create_error_result(
                f"Expected a tree node, got {type(node).__name__}",
                node,
                (time.time() - start_time) * 1000,
            )

        try:
            markup = str(node)
            converted = self._convert_markup(markup)
        except Exception as e:
            processing_time = (time.time() - start_time) * 1000
            self._logger.error(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                extra={"node": node.tag_name},
            )
            return self._create_error_result(
                f"Failed to convert to {self.metadata.target_library}: {e}",
                node,
                processing_time,
            )

        processing_time = (time.time() - start_time) * 1000
        self._record_performance(processing_time)
        self._logger.info(
            f"Exported <{node.tag_name}> to {self.metadata.target_library}",
            extra={"conversion_time_ms": processing_time},
        )

        return ConversionResult(
            success=True,
            converted_data=converted,
            original_data=node,
            conversion_time_ms=processing_time,
            metadata=self._conversion_metadata(converted, markup),
        )

    def get_performance_stats(self) -> Dict[str, Dict[str, float]]:
        """Get performance statistics for this adapter."""
        return self._profiler.get_all_statistics()

    def _record_performance(self, operation_time_ms: float) -> None:
        """Record performance metrics for this adapter."""
        self._profiler.record_conversion(self.metadata.name, operation_time_ms)

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float = 0.0
    ) -> ConversionResult:
        """Create a ConversionResult for error conditions."""
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id
                )
            ]
        )


class LxmlAdapter(IntegrationAdapter):
    """Adapter exporting trees as lxml.html elements.

    The markup is wrapped in a ``<div>`` so that fragments with several top
    level nodes or bare text convert to a single element.
    """

    wrapper_tag = "div"

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="lxml",
            version="1.0.0",
            adapter_type=AdapterType.HTML_LIBRARY,
            target_library="lxml",
            supported_versions=["4.0+"],
            description="Export of rendered trees as lxml.html fragments",
        )

    def is_available(self) -> bool:
        """Check if lxml is available."""
        try:
            import lxml.html  # noqa: F401, PLC0415
            return True
        except ImportError:
            return False

    def _convert_markup(self, markup: str) -> Any:
        import lxml.html  # noqa: PLC0415

        if not markup.strip():
            return lxml.html.Element(self.wrapper_tag)
        return lxml.html.fragment_fromstring(markup, create_parent=self.wrapper_tag)

    def _conversion_metadata(self, converted: Any, markup: str) -> Dict[str, Any]:
        import lxml.etree  # noqa: PLC0415

        return {
            "markup_length": len(markup),
            "lxml_version": lxml.etree.LXML_VERSION,
            "element_count": len(converted.xpath(".//*")),
        }


class BeautifulSoupAdapter(IntegrationAdapter):
    """Adapter exporting trees as BeautifulSoup documents."""

    parser_name = "html.parser"

    @property
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""
        return AdapterMetadata(
            name="beautifulsoup",
            version="1.0.0",
            adapter_type=AdapterType.HTML_LIBRARY,
            target_library="beautifulsoup4",
            supported_versions=["4.0+"],
            description="Export of rendered trees as BeautifulSoup documents",
        )

    def is_available(self) -> bool:
        """Check if BeautifulSoup is available."""
        try:
            from bs4 import BeautifulSoup  # noqa: F401, PLC0415
            return True
        except ImportError:
            return False

    def _convert_markup(self, markup: str) -> Any:
        from bs4 import BeautifulSoup  # noqa: PLC0415

        return BeautifulSoup(markup, self.parser_name)

    def _conversion_metadata(self, converted: Any, markup: str) -> Dict[str, Any]:
        return {
            "markup_length": len(markup),
            "parser_name": self.parser_name,
            "element_count": len(converted.find_all(True)),
        }


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        """Initialize the adapter registry."""
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._instances: weakref.WeakValueDictionary = weakref.WeakValueDictionary()
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class.

        Args:
            adapter_class: Adapter class to register
        """
        with self._lock:
            metadata = adapter_class().metadata
            self._adapters[metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name.

        Args:
            adapter_name: Name of the adapter
            correlation_id: Optional correlation ID

        Returns:
            Adapter instance if found and available, None otherwise
        """
        with self._lock:
            if adapter_name not in self._adapters:
                return None

            instance_key = f"{adapter_name}_{correlation_id or 'default'}"
            instance = self._instances.get(instance_key)
            if instance is not None:
                return instance

            instance = self._adapters[adapter_name](correlation_id)
            if not instance.is_available():
                return None
            self._instances[instance_key] = instance
            return instance

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List all available adapters with their metadata."""
        with self._lock:
            available = []
            for adapter_class in self._adapters.values():
                instance = adapter_class()
                if instance.is_available():
                    available.append(instance.metadata)
            return available

    def get_adapters_by_type(self, adapter_type: AdapterType) -> List[str]:
        """Get names of available adapters of the given type."""
        with self._lock:
            return [
                metadata.name
                for metadata in self.list_available_adapters()
                if metadata.adapter_type == adapter_type
            ]


# Global adapter registry instance
_adapter_registry = AdapterRegistry()


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance, or None if unknown or unavailable."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()


def get_adapters_by_type(adapter_type: AdapterType) -> List[str]:
    """Get adapter names by type."""
    return _adapter_registry.get_adapters_by_type(adapter_type)


register_adapter(LxmlAdapter)
register_adapter(BeautifulSoupAdapter)
