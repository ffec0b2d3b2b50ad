"""
phases.py - Lifecycle phase and state type classification.

Both classifiers are keyword heuristics over the state name (and, for the
state type, its action names). The keyword tables come from
config/classifiers.yaml; the precedence between them is fixed here.
"""

from __future__ import annotations

from typing import Iterable, Optional

from fsmstudio.config.classifier_rules import (
    ClassifierRules,
    LifecyclePhase,
    StateType,
    get_default_rules,
)

MAX_SUMMARY_ACTIONS = 2


def resolve_phase(
    state_name: str,
    start_state: Optional[str],
    rules: Optional[ClassifierRules] = None,
) -> LifecyclePhase:
    """Assign a state to a swimlane.

    The start state is always Ingress. Otherwise the first matching pattern
    of the ordered phase table wins, falling back to the default phase.
    """
    rules = rules or get_default_rules()
    if start_state and state_name == start_state:
        return LifecyclePhase.INGRESS
    for pattern, phase in rules.phases:
        if pattern.search(state_name):
            return phase
    return rules.default_phase


def resolve_state_type(
    state_name: str,
    actions: Iterable[str],
    is_terminal: bool,
    rules: Optional[ClassifierRules] = None,
) -> StateType:
    """Classify the visual role of a state.

    Precedence: failure name, then success name on a terminal state, then
    external system (name or any action), then processing.
    """
    rules = rules or get_default_rules()
    if rules.failure.search(state_name):
        return StateType.FAILURE
    if is_terminal and rules.success.search(state_name):
        return StateType.SUCCESS
    if rules.external.search(state_name):
        return StateType.EXTERNAL
    if any(rules.external.search(action) for action in actions):
        return StateType.EXTERNAL
    return StateType.PROCESSING


def build_actions_summary(actions: Iterable[str]) -> Optional[str]:
    """Digest like "Actions: a, b +3 more", or None when there are no actions."""
    unique = []
    for action in actions:
        trimmed = action.strip()
        if trimmed and trimmed not in unique:
            unique.append(trimmed)
    if not unique:
        return None
    shown = unique[:MAX_SUMMARY_ACTIONS]
    remaining = len(unique) - len(shown)
    summary = "Actions: " + ", ".join(shown)
    if remaining > 0:
        summary += f" +{remaining} more"
    return summary
