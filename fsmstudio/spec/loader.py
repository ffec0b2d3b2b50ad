"""
loader.py - Read and write workflow specs as FSM YAML or snapshot JSON.

FSM YAML is the preset/export format used by the state machine runtime:

    statesClass: com.example.States
    eventsClass: com.example.Events
    states:
      RECEIVED:
        on_event:
          VALIDATE:
            target: VALIDATED
            actions: [persist-txn]
      VALIDATED:
        on_event: {}

Snapshot JSON is the persisted editor shape handled by
workflow_spec_from_dict().
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import SpecParseError
from .types import (
    StateSpec,
    TransitionSpec,
    WorkflowSpec,
    transition_spec_from_dict,
    workflow_spec_from_dict,
)

logger = logging.getLogger(__name__)


# =============================================================================
# FSM YAML
# =============================================================================


def fsm_document_to_spec(data: Dict[str, Any]) -> WorkflowSpec:
    """Convert a parsed FSM YAML mapping into a WorkflowSpec.

    Malformed state or event entries degrade to empty values; the start
    state is the first declared state.
    """
    states: List[StateSpec] = []
    raw_states = data.get("states")
    if isinstance(raw_states, dict):
        for state_name, state_value in raw_states.items():
            on_event: Dict[str, TransitionSpec] = {}
            raw_events = state_value.get("on_event") if isinstance(state_value, dict) else None
            if isinstance(raw_events, dict):
                for event_name, raw_transition in raw_events.items():
                    if not isinstance(raw_transition, dict):
                        logger.warning(
                            "Skipping malformed transition %s.%s", state_name, event_name
                        )
                        continue
                    on_event[str(event_name)] = transition_spec_from_dict(raw_transition)
            states.append(StateSpec(name=str(state_name), on_event=on_event))

    states_class = data.get("statesClass")
    events_class = data.get("eventsClass")
    return WorkflowSpec(
        workflow_key="",
        states=tuple(states),
        start_state=states[0].name if states else "",
        states_class=states_class if isinstance(states_class, str) else None,
        events_class=events_class if isinstance(events_class, str) else None,
    )


def parse_fsm_yaml(text: str, source: Optional[str] = None) -> WorkflowSpec:
    """Parse FSM YAML text into a WorkflowSpec.

    Args:
        text: YAML document.
        source: Optional name (file path, preset id) used in error messages.

    Returns:
        Parsed WorkflowSpec. An empty document yields an empty spec.

    Raises:
        SpecParseError: If the text is not valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SpecParseError(f"Invalid YAML: {e}", source)

    if data is None:
        return WorkflowSpec(start_state="")
    if not isinstance(data, dict):
        raise SpecParseError(
            f"Expected a mapping at document root, got {type(data).__name__}", source
        )
    return fsm_document_to_spec(data)


def spec_to_fsm_document(spec: WorkflowSpec) -> Dict[str, Any]:
    """Build the FSM YAML mapping; states and events are sorted by name."""
    document: Dict[str, Any] = {}
    if (spec.states_class or "").strip():
        document["statesClass"] = spec.states_class.strip()
    if (spec.events_class or "").strip():
        document["eventsClass"] = spec.events_class.strip()

    states: Dict[str, Any] = {}
    for state in sorted(spec.states, key=lambda s: s.name):
        events: Dict[str, Any] = {}
        for event_name in sorted(state.on_event):
            transition = state.on_event[event_name]
            events[event_name.strip()] = {
                "target": transition.target.strip(),
                "actions": [action.strip() for action in transition.actions],
            }
        states[state.name.strip()] = {"on_event": events}
    document["states"] = states
    return document


def dump_fsm_yaml(spec: WorkflowSpec) -> str:
    """Serialize a WorkflowSpec to FSM YAML text."""
    return yaml.safe_dump(
        spec_to_fsm_document(spec),
        sort_keys=False,
        default_flow_style=None,
        allow_unicode=True,
    )


# =============================================================================
# Files
# =============================================================================


def load_workflow_file(path: Union[str, Path]) -> WorkflowSpec:
    """Load a workflow from a .yaml/.yml (FSM or snapshot) or .json file.

    Raises:
        FileNotFoundError: If the file does not exist.
        SpecParseError: If the content cannot be parsed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Workflow file not found: {file_path}")

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SpecParseError(f"Invalid JSON: {e}", str(file_path))
        return workflow_spec_from_dict(data)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SpecParseError(f"Invalid YAML: {e}", str(file_path))

    if data is None:
        return WorkflowSpec(start_state="")
    if not isinstance(data, dict):
        raise SpecParseError("Expected a mapping at document root", str(file_path))
    if isinstance(data.get("states"), dict):
        return fsm_document_to_spec(data)
    return workflow_spec_from_dict(data)
