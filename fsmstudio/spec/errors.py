"""
errors.py - Exceptions raised at the I/O edge of the spec layer.

The model, lint, layout and merge functions never raise for malformed specs.
These exceptions are for parsing text and loading preset documents, where
the caller needs to know the input was unusable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional


class SpecError(Exception):
    """Base exception for spec-related errors."""

    pass


class SpecParseError(SpecError):
    """Raised when FSM text cannot be parsed into a WorkflowSpec."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class PresetNotFoundError(SpecError):
    """Raised when a requested preset id does not exist."""

    def __init__(self, preset_id: str):
        self.preset_id = preset_id
        super().__init__(f"Preset '{preset_id}' not found")


@dataclass
class SchemaViolation:
    """Structured schema validation failure."""

    path: str  # JSON path to the error location
    message: str  # Human-readable error message
    value: Optional[Any] = None  # The invalid value

    def __str__(self) -> str:
        if self.path:
            return f"[{self.path}] {self.message}"
        return self.message


class PresetValidationError(SpecError):
    """Raised when a preset document fails schema validation."""

    def __init__(self, source: str, violations: List[SchemaViolation]):
        self.source = source
        self.violations = violations
        details = "; ".join(str(v) for v in violations)
        super().__init__(f"Preset document {source} is invalid: {details}")
