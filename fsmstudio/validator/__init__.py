"""Lint issue types shared by the spec linter and the CLI."""

from .errors import LintIssue, LintLevel, LintResult, LintTab

__all__ = ["LintIssue", "LintLevel", "LintResult", "LintTab"]
