"""Configuration for the lenient markup parser.

:class:`ParserConfig` is an immutable dataclass: parser instances only read
it, so one configuration can be shared freely between threads.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

# Characters that would make a synthetic root name unparseable as markup
_FORBIDDEN_NAME_CHARS = frozenset("<>/=\"'&")


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
class ParserConfig:
    """Options controlling tree construction and diagnostics.

    Attributes:
        root_name: Name of the synthetic element wrapping several top-level nodes
        keep_whitespace: Emit whitespace-only runs before tags as whitespace nodes
        collect_diagnostics: Record a diagnostic entry for every recovery
        correlation_id: Optional ID attached to log records and diagnostics
    """

    root_name: str = "root"
    keep_whitespace: bool = True
    collect_diagnostics: bool = True
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.root_name, str) or not self.root_name:
            raise ConfigValidationError(
                "root_name must be a non-empty string",
                field_name="root_name",
                suggestions=['Use the default "root"'],
            )
        if any(c.isspace() or c in _FORBIDDEN_NAME_CHARS for c in self.root_name):
            raise ConfigValidationError(
                f"root_name contains whitespace or markup delimiters: {self.root_name!r}",
                field_name="root_name",
                suggestions=["Use a plain element name such as \"root\" or \"body\""],
            )
        if self.correlation_id is not None and not isinstance(self.correlation_id, str):
            raise ConfigValidationError(
                "correlation_id must be a string or None",
                field_name="correlation_id",
            )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig()
            >>> config.override(keep_whitespace=False).keep_whitespace
            False
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration field(s): {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=[f"Valid fields: {', '.join(sorted(known))}"],
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than silently ignored.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a dictionary")
        return cls().override(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "ParserConfig":
        """Default configuration: whitespace nodes kept, diagnostics on."""
        return cls()

    @classmethod
    def minimal(cls) -> "ParserConfig":
        """Configuration that skips diagnostic bookkeeping entirely."""
        return cls(collect_diagnostics=False)
