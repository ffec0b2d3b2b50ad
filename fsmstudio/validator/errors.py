# fsmstudio/validator/errors.py
"""Lint issue collection and formatting."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

# Issue message template: [ERROR] transitions: INIT.go -> target "X" is not a declared state
ISSUE_TEMPLATE = "[{level}] {tab}: {location}{message}"


class LintLevel(str, Enum):
    """Issue severity."""
    ERROR = "error"
    WARNING = "warning"


class LintTab(str, Enum):
    """Editor tab the issue belongs to."""
    TRANSITIONS = "transitions"
    STATE = "state"


class LintIssue:
    """Structured lint diagnostic."""

    def __init__(
        self,
        id: str,
        level: LintLevel,
        tab: LintTab,
        message: str,
        state_name: Optional[str] = None,
        event_name: Optional[str] = None,
        field: Optional[str] = None,
    ):
        self.id = id
        self.level = level
        self.tab = tab
        self.message = message
        self.state_name = state_name
        self.event_name = event_name
        self.field = field

    @property
    def location(self) -> str:
        if self.state_name is None:
            return ""
        if self.event_name is None:
            return self.state_name
        return f"{self.state_name}.{self.event_name}"

    def format(self) -> str:
        """Format issue message."""
        location = f"{self.location} " if self.location else ""
        return ISSUE_TEMPLATE.format(
            level=self.level.value.upper(),
            tab=self.tab.value,
            location=location,
            message=self.message,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert issue to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "id": self.id,
            "level": self.level.value,
            "tab": self.tab.value,
            "message": self.message,
        }
        if self.state_name is not None:
            result["stateName"] = self.state_name
        if self.event_name is not None:
            result["eventName"] = self.event_name
        if self.field is not None:
            result["field"] = self.field
        return result

    def __repr__(self) -> str:
        return f"LintIssue({self.id!r}, {self.level.value})"


class LintResult:
    """Collects lint errors and warnings in discovery order."""

    def __init__(self):
        self.issues: List[LintIssue] = []

    @property
    def errors(self) -> List[LintIssue]:
        return [issue for issue in self.issues if issue.level is LintLevel.ERROR]

    @property
    def warnings(self) -> List[LintIssue]:
        return [issue for issue in self.issues if issue.level is LintLevel.WARNING]

    def add_error(
        self,
        id: str,
        tab: LintTab,
        message: str,
        state_name: Optional[str] = None,
        event_name: Optional[str] = None,
        field: Optional[str] = None,
    ):
        """Add a lint error (the spec is not valid until fixed)."""
        self.issues.append(
            LintIssue(id, LintLevel.ERROR, tab, message, state_name, event_name, field)
        )

    def add_warning(
        self,
        id: str,
        tab: LintTab,
        message: str,
        state_name: Optional[str] = None,
        event_name: Optional[str] = None,
        field: Optional[str] = None,
    ):
        """Add a lint warning (completeness hint, not an error)."""
        self.issues.append(
            LintIssue(id, LintLevel.WARNING, tab, message, state_name, event_name, field)
        )

    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if any warnings were collected."""
        return len(self.warnings) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "status": "FAIL" if self.has_errors() else "PASS",
        }
