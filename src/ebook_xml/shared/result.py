"""Diagnostic and metric types shared by the parsing layers.

Malformed markup never raises; instead each recovery the parser performs can
be reported as a :class:`DiagnosticEntry`. Diagnostics are purely
informational and never influence the shape of the produced tree.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Malformed input that was recovered from
    ERROR = auto()      # Recovered errors that lose content
    CRITICAL = auto()   # Reserved for implementation faults


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    @property
    def offset(self) -> Optional[int]:
        """Byte offset the diagnostic refers to, if any."""
        if self.position is None:
            return None
        return self.position.get("offset")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
            "correlation_id": self.correlation_id,
        }


@dataclass
class ParseMetrics:
    """Performance counters for a single parse call."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    bytes_processed: int = 0
    nodes_created: int = 0
    recovery_operations: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processing_time_ms": self.processing_time_ms,
            "characters_processed": self.characters_processed,
            "bytes_processed": self.bytes_processed,
            "nodes_created": self.nodes_created,
            "recovery_operations": self.recovery_operations,
        }
