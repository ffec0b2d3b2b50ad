"""
Test fixtures for the fsmstudio workflow toolkit.

Provides small canonical workflows (the lint scenarios, a three-lane chain)
and helpers for writing workflow files into temporary directories.
"""

import sys
from pathlib import Path
from typing import Dict, List, Sequence

import pytest

_REPO_ROOT = Path(__file__).resolve().parent.parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from fsmstudio.spec import StateSpec, TransitionSpec, WorkflowSpec


# ============================================================================
# Builders
# ============================================================================


def make_spec(
    states: Dict[str, Dict[str, tuple]],
    start_state=None,
    workflow_key: str = "test-workflow",
) -> WorkflowSpec:
    """Build a WorkflowSpec from {state: {event: (target, [actions])}}."""
    return WorkflowSpec(
        workflow_key=workflow_key,
        states=tuple(
            StateSpec(
                name=name,
                on_event={
                    event: TransitionSpec(target=target, actions=tuple(actions))
                    for event, (target, actions) in events.items()
                },
            )
            for name, events in states.items()
        ),
        start_state=start_state,
    )


def make_state_list(entries: Sequence[tuple]) -> WorkflowSpec:
    """Build a spec from (name, events) pairs, allowing duplicate names."""
    return WorkflowSpec(
        states=tuple(
            StateSpec(
                name=name,
                on_event={
                    event: TransitionSpec(target=target, actions=tuple(actions))
                    for event, (target, actions) in events.items()
                },
            )
            for name, events in entries
        ),
    )


def issue_ids(issues: List) -> List[str]:
    return [issue.id for issue in issues]


# ============================================================================
# Workflow Fixtures
# ============================================================================


@pytest.fixture
def scenario_a() -> WorkflowSpec:
    """States [A, B]; A --go--> B with no actions."""
    return make_spec({"A": {"go": ("B", [])}, "B": {}})


@pytest.fixture
def scenario_b() -> WorkflowSpec:
    """States [A, B]; A --go--> C where C is undeclared."""
    return make_spec({"A": {"go": ("C", [])}, "B": {}})


@pytest.fixture
def scenario_c() -> WorkflowSpec:
    """Two states named INIT and init."""
    return make_state_list([("INIT", {}), ("init", {})])


@pytest.fixture
def payment_spec() -> WorkflowSpec:
    """RECEIVED -> VALIDATED -> CLEARED with a rejection path."""
    return make_spec(
        {
            "RECEIVED": {
                "VALIDATE": ("VALIDATED", ["persist-txn"]),
                "Reject": ("FAILED", ["archive-message"]),
            },
            "VALIDATED": {
                "CLEAR": ("CLEARED", ["post-ledger-entry"]),
                "OnRetry": ("VALIDATED", ["reset-mtp"]),
            },
            "CLEARED": {},
            "FAILED": {},
        },
        start_state="RECEIVED",
    )


@pytest.fixture
def three_lane_spec() -> WorkflowSpec:
    """Linear chain across Ingress, Clearing and Finalization."""
    return make_spec(
        {
            "RECEIVED": {"PROCESS": ("CLEARING", ["persist-txn"])},
            "CLEARING": {"FINISH": ("COMPLETED", ["post-ledger-entry"])},
            "COMPLETED": {},
        },
        start_state="RECEIVED",
    )


# ============================================================================
# File Fixtures
# ============================================================================


FSM_YAML = """\
statesClass: com.example.payments.States
eventsClass: com.example.payments.Events
states:
  RECEIVED:
    on_event:
      VALIDATE:
        target: VALIDATED
        actions: [persist-txn]
  VALIDATED:
    on_event:
      CLEAR:
        target: CLEARED
        actions: [send-clearing-request]
  CLEARED:
    on_event: {}
"""


@pytest.fixture
def fsm_yaml_text() -> str:
    return FSM_YAML


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
