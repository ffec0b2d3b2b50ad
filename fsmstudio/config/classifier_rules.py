"""
classifier_rules.py - Load classification tables from classifiers.yaml

The phase, state-type and edge-kind classifiers are keyword heuristics.
Their patterns live in YAML so deployments with other naming conventions can
swap them without code changes; the precedence between them is fixed in the
classifier functions.

Usage:
    from fsmstudio.config.classifier_rules import get_default_rules, load_classifier_rules

    rules = get_default_rules()
    custom = load_classifier_rules(Path("my_classifiers.yaml"))
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Pattern, Tuple

import yaml

logger = logging.getLogger(__name__)

_CONFIG_FILE = Path(__file__).parent / "classifiers.yaml"


class LifecyclePhase(str, Enum):
    """Swimlane grouping, in top-to-bottom lane order."""
    INGRESS = "Ingress"
    ENRICHMENT = "Enrichment"
    SANCTIONS = "Sanctions"
    CLEARING = "Clearing"
    FINALIZATION = "Finalization"


class StateType(str, Enum):
    """Visual role of a state node."""
    PROCESSING = "processing"
    EXTERNAL = "external"
    FAILURE = "failure"
    SUCCESS = "success"


class EdgeKind(str, Enum):
    """Visual role of a transition edge."""
    SUCCESS = "success"
    FAILURE = "failure"
    RETRY = "retry"
    EXTERNAL = "external"
    START = "start"


PHASE_ORDER: Tuple[LifecyclePhase, ...] = tuple(LifecyclePhase)


class ClassifierConfigError(ValueError):
    """Raised when a classifier table cannot be loaded."""


@dataclass(frozen=True)
class ClassifierRules:
    """Compiled classification tables.

    Attributes:
        phases: Ordered (pattern, phase) pairs; first match wins
        default_phase: Phase used when no pattern matches
        failure: Failure keyword pattern (states and events)
        retry: Retry keyword pattern (events)
        success: Success keyword pattern (terminal states)
        external: External-system keyword pattern (state names and actions)
    """
    phases: Tuple[Tuple[Pattern[str], LifecyclePhase], ...]
    default_phase: LifecyclePhase
    failure: Pattern[str]
    retry: Pattern[str]
    success: Pattern[str]
    external: Pattern[str]


def _compile(pattern: Any, name: str) -> Pattern[str]:
    if not isinstance(pattern, str) or not pattern:
        raise ClassifierConfigError(f"Pattern '{name}' must be a non-empty string")
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise ClassifierConfigError(f"Invalid regex for '{name}': {e}")


def _phase(value: Any) -> LifecyclePhase:
    try:
        return LifecyclePhase(value)
    except ValueError:
        valid = ", ".join(p.value for p in LifecyclePhase)
        raise ClassifierConfigError(f"Unknown phase '{value}' (expected one of: {valid})")


def classifier_rules_from_dict(data: Dict[str, Any]) -> ClassifierRules:
    """Build ClassifierRules from a parsed classifiers.yaml document."""
    phases = []
    for index, entry in enumerate(data.get("phases") or []):
        if not isinstance(entry, dict):
            raise ClassifierConfigError(f"phases[{index}] must be a mapping")
        phases.append(
            (_compile(entry.get("pattern"), f"phases[{index}]"), _phase(entry.get("phase")))
        )

    return ClassifierRules(
        phases=tuple(phases),
        default_phase=_phase(data.get("default_phase", LifecyclePhase.ENRICHMENT.value)),
        failure=_compile(data.get("failure"), "failure"),
        retry=_compile(data.get("retry"), "retry"),
        success=_compile(data.get("success"), "success"),
        external=_compile(data.get("external"), "external"),
    )


@lru_cache(maxsize=8)
def load_classifier_rules(path: Optional[Path] = None) -> ClassifierRules:
    """Load and compile a classifier table file.

    Args:
        path: YAML file to load. Defaults to the packaged classifiers.yaml.

    Raises:
        ClassifierConfigError: If the file is missing, not valid YAML, or
            contains unknown phases or invalid patterns.
    """
    config_path = Path(path) if path else _CONFIG_FILE
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ClassifierConfigError(f"Cannot read classifier rules {config_path}: {e}")
    except yaml.YAMLError as e:
        raise ClassifierConfigError(f"Invalid YAML in classifier rules {config_path}: {e}")

    if not isinstance(data, dict):
        raise ClassifierConfigError(f"Classifier rules must be a mapping: {config_path}")

    rules = classifier_rules_from_dict(data)
    logger.debug("Loaded classifier rules from %s (%d phase patterns)", config_path, len(rules.phases))
    return rules


def get_default_rules() -> ClassifierRules:
    """The packaged classifier tables (loaded once)."""
    return load_classifier_rules(None)
