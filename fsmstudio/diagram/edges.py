"""
edges.py - Transition edge classification.

Edge kinds are cosmetic (colour and dash style in the renderer) but the
diagram filters and the exported payload rely on them.
"""

from __future__ import annotations

from typing import Optional

from fsmstudio.config.classifier_rules import (
    ClassifierRules,
    EdgeKind,
    StateType,
    get_default_rules,
)
from fsmstudio.spec.types import WorkflowTransitionRow

START_EDGE_PREFIX = "start__"


def classify_edge(
    event_name: str,
    source_type: StateType,
    target_type: StateType,
    rules: Optional[ClassifierRules] = None,
) -> EdgeKind:
    """Classify a transition edge.

    Precedence: failure keyword on the event, retry keyword on the event,
    either endpoint external, otherwise success.
    """
    rules = rules or get_default_rules()
    name = (event_name or "").strip()
    if rules.failure.search(name):
        return EdgeKind.FAILURE
    if rules.retry.search(name):
        return EdgeKind.RETRY
    if StateType.EXTERNAL in (source_type, target_type):
        return EdgeKind.EXTERNAL
    return EdgeKind.SUCCESS


def classify_transition(
    transition: WorkflowTransitionRow,
    source_type: StateType,
    target_type: StateType,
    rules: Optional[ClassifierRules] = None,
) -> EdgeKind:
    """classify_edge() for a flattened transition row."""
    return classify_edge(transition.event_name, source_type, target_type, rules)


def build_edge_id(transition: WorkflowTransitionRow) -> str:
    return f"{transition.from_state}__{transition.event_name}__{transition.target}"


def build_start_edge_id(start_state: str) -> str:
    return f"{START_EDGE_PREFIX}{start_state}"
