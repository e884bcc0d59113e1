"""Configuration classes for markup tree building.

This module provides configuration objects for the tree engine and the
package-wide settings, with validation, presets, and dict/JSON round trips.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional



@dataclass
class TreeConfig:
    """Configuration for tree mutation, traversal and text coercion."""

    # Cache each node's ancestor chain; the cache is dropped on re-parenting
    memoize_ancestors: bool = True

    # HTML-escape text nodes created by coercion
    escape_text: bool = True

    # Reported by TreeStatistics, never enforced on insertion
    max_tree_depth: int = 1000

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.max_tree_depth <= 0:
            raise ValueError("max_tree_depth must be > 0")


@dataclass
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")


_COMPONENT_CLASSES = {"tree": TreeConfig, "global_": GlobalConfig}
_COMPONENTS = tuple(_COMPONENT_CLASSES)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class BuilderConfig:
    """Complete configuration shared by every element of a rendering context.

    Immutable so that one instance can back any number of trees.
    """

    tree: TreeConfig = field(default_factory=TreeConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    # Metadata
    version: str = "1.0.0"
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete builder configuration."""
        for component, expected in _COMPONENT_CLASSES.items():
            value = getattr(self, component)
            if not isinstance(value, expected):
                raise ConfigValidationError(
                    f"{component} must be a {expected.__name__}, "
                    f"got {type(value).__name__}",
                    field_name=component,
                )
        try:
            self.tree.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "BuilderConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override

        Returns:
            New BuilderConfig instance with overrides applied

        Example:
            >>> config = BuilderConfig()
            >>> raw = config.override(tree__escape_text=False)
            >>> raw.tree.escape_text
            False
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" not in key:
                nested_overrides[key] = value
                continue

            # Match on known prefixes since "global_" itself ends in "_"
            component = next(
                (name for name in _COMPONENTS if key.startswith(f"{name}__")), None
            )
            if component is None:
                raise ConfigValidationError(
                    f"Unknown configuration component: {key.split('__', 1)[0]}",
                    field_name=key,
                    suggestions=[f"Use one of {list(_COMPONENTS)}"],
                )
            field_name = key[len(component) + 2:]
            nested_overrides.setdefault(component, {})[field_name] = value

        new_fields: Dict[str, Any] = {}
        for component in _COMPONENTS:
            current_config = getattr(self, component)
            if component in nested_overrides:
                try:
                    new_fields[component] = replace(
                        current_config, **nested_overrides.pop(component)
                    )
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=component) from e

        new_fields.update(nested_overrides)
        return replace(self, **new_fields)

    def validate_compatibility(self, other: "BuilderConfig") -> List[str]:
        """Check compatibility with another configuration.

        Trees built under differing settings render or cache differently when
        fragments from one are inserted into the other.

        Args:
            other: Configuration to compare against

        Returns:
            List of compatibility warnings
        """
        warnings = []

        if self.version != other.version:
            warnings.append(f"Version mismatch: {self.version} vs {other.version}")

        if self.tree.escape_text != other.tree.escape_text:
            warnings.append(
                "Text escaping differs - coerced text will render inconsistently"
            )

        if self.tree.memoize_ancestors != other.tree.memoize_ancestors:
            warnings.append("Ancestor memoization differs between trees")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            """Recursively convert dataclass to dict."""
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, (list, tuple, set)):
                return [_dataclass_to_dict(item) for item in obj]
            if isinstance(obj, dict):
                return {key: _dataclass_to_dict(value) for key, value in obj.items()}
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuilderConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored so that newer dumps load on older versions.

        Args:
            data: Dictionary containing configuration data

        Returns:
            BuilderConfig instance created from dictionary
        """
        field_values: Dict[str, Any] = {}
        for field_name in cls.__dataclass_fields__:
            if field_name not in data:
                continue
            value = data[field_name]
            if field_name in _COMPONENT_CLASSES and isinstance(value, dict):
                target_class = _COMPONENT_CLASSES[field_name]
                known = {
                    key: item for key, item in value.items()
                    if key in target_class.__dataclass_fields__
                }
                try:
                    value = target_class(**known)
                except ValueError as e:
                    raise ConfigValidationError(str(e), field_name=field_name) from e
            field_values[field_name] = value

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "BuilderConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "BuilderConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def raw_text(cls) -> "BuilderConfig":
        """Create a preset whose coerced text is emitted without escaping."""
        return cls(
            tree=TreeConfig(escape_text=False),
            name="raw_text",
            description="Text nodes are rendered verbatim, callers escape input",
        )

    @classmethod
    def debugging(cls) -> "BuilderConfig":
        """Create a preset for tracing tree construction."""
        return cls(
            tree=TreeConfig(memoize_ancestors=False),
            global_=GlobalConfig(logging_level="DEBUG"),
            name="debugging",
            description=(
                "Verbose logging and uncached ancestor chains for tracing mutations"
            ),
        )
