"""
layout.py - Build the positioned, classified render graph for a workflow.

The layered layout supplies the rank axis and the relative order of states;
vertical placement is then overridden so that every lifecycle phase renders
as one contiguous swimlane:

    lane:Ingress       [ RECEIVED ]
    lane:Enrichment    [ BANKCODE_ENRICHMENT ] [ PSP_ENRICHMENT ]
    lane:Clearing      [ CLEARED ]

Usage:
    from fsmstudio.diagram import layout_graph

    graph = layout_graph(spec, direction="LR")
    for node in graph.state_nodes():
        print(node.id, node.position.x, node.position.y)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set, Tuple

from fsmstudio.config.classifier_rules import (
    PHASE_ORDER,
    ClassifierRules,
    EdgeKind,
    LifecyclePhase,
    StateType,
    get_default_rules,
)
from fsmstudio.spec.model import list_all_transitions, resolve_start_state
from fsmstudio.spec.types import WorkflowSpec, WorkflowTransitionRow

from .edges import build_edge_id, build_start_edge_id, classify_transition
from .layered import layered_layout
from .phases import build_actions_summary, resolve_phase, resolve_state_type
from .schema import (
    DiagramEdge,
    DiagramEdgeData,
    DiagramEvent,
    DiagramGraph,
    DiagramNode,
    DiagramNodeData,
    Point,
    StartNodeData,
    SwimlaneData,
)

logger = logging.getLogger(__name__)

NODE_WIDTH = 220
NODE_HEIGHT = 120
RANK_SEP = 140
NODE_SEP = 70
EDGE_SEP = 50

LANE_HEADER_HEIGHT = 26
LANE_PADDING = 28
LANE_GAP = 36
ROW_GAP = 48

START_NODE_ID = "__start__"
START_NODE_SIZE = 18
START_NODE_GAP = 48
LANE_ID_PREFIX = "lane:"

DIRECTIONS = ("LR", "TB")


def _synthetic_id(candidate: str, taken: Set[str]) -> str:
    """Return ``candidate``, suffixed with underscores until no state uses it."""
    while candidate in taken:
        candidate += "_"
    return candidate


def _normalize_direction(direction: Optional[str]) -> str:
    value = (direction or "LR").strip().upper()
    if value not in DIRECTIONS:
        logger.debug("Unknown layout direction %r, using LR", direction)
        return "LR"
    return value


def _lane_height(members: int) -> float:
    return (
        LANE_HEADER_HEIGHT
        + LANE_PADDING * 2
        + members * NODE_HEIGHT
        + max(0, members - 1) * ROW_GAP
    )


def stack_swimlanes(
    positions: Dict[str, Tuple[float, float]],
    phases: Dict[str, LifecyclePhase],
) -> Tuple[Dict[str, Tuple[float, float]], List[Tuple[LifecyclePhase, float, float]]]:
    """Re-stack states into phase lanes.

    Within a phase, states keep the order of their layered y coordinate
    (declaration order breaks ties); x is kept as-is.

    Returns:
        (positions, lanes) where lanes is a list of (phase, top, height) in
        lane order. Empty phases have no lane.
    """
    members: Dict[LifecyclePhase, List[str]] = {}
    for state, phase in phases.items():
        members.setdefault(phase, []).append(state)

    stacked: Dict[str, Tuple[float, float]] = {}
    lanes: List[Tuple[LifecyclePhase, float, float]] = []
    lane_top = 0.0
    for phase in PHASE_ORDER:
        entries = members.get(phase, [])
        if not entries:
            continue
        entries = sorted(entries, key=lambda s: positions[s][1])
        height = _lane_height(len(entries))
        for index, state in enumerate(entries):
            y = lane_top + LANE_HEADER_HEIGHT + LANE_PADDING + index * (NODE_HEIGHT + ROW_GAP)
            stacked[state] = (positions[state][0], y)
        lanes.append((phase, lane_top, height))
        lane_top += height + LANE_GAP
    return stacked, lanes


def _anchor_points(
    source: Tuple[float, float],
    target: Tuple[float, float],
    source_size: Tuple[float, float],
    direction: str,
) -> List[Point]:
    sx, sy = source
    sw, sh = source_size
    tx, ty = target
    if direction == "LR":
        return [Point(x=sx + sw, y=sy + sh / 2), Point(x=tx, y=ty + NODE_HEIGHT / 2)]
    return [Point(x=sx + sw / 2, y=sy + sh), Point(x=tx + NODE_WIDTH / 2, y=ty)]


def _group_events(transitions: List[WorkflowTransitionRow]) -> Dict[str, List[DiagramEvent]]:
    events: Dict[str, List[DiagramEvent]] = {}
    for row in transitions:
        events.setdefault(row.from_state, []).append(
            DiagramEvent(event_name=row.event_name, target=row.target, actions=list(row.actions))
        )
    return events


def layout_graph(
    spec: WorkflowSpec,
    direction: str = "LR",
    rules: Optional[ClassifierRules] = None,
) -> DiagramGraph:
    """Compute the render graph for a workflow.

    Args:
        spec: Workflow to draw. Malformed content never raises; dangling
            targets yield edges without geometry.
        direction: ``LR`` (ranks along x) or ``TB`` (ranks along y).
        rules: Classifier tables; defaults to the packaged classifiers.yaml.

    Returns:
        DiagramGraph with nodes ordered swimlanes, start marker, states and
        the start edge (if any) first among the edges.
    """
    rules = rules or get_default_rules()
    direction = _normalize_direction(direction)

    transitions = list_all_transitions(spec)
    state_list = list(dict.fromkeys(state.name for state in spec.states if state.name))
    start_state = resolve_start_state(spec)

    layered = layered_layout(
        state_list,
        [(row.from_state, row.target) for row in transitions],
        NODE_WIDTH,
        NODE_HEIGHT,
        direction=direction,
        rank_sep=RANK_SEP,
        node_sep=NODE_SEP,
        edge_sep=EDGE_SEP,
        first=start_state,
    )

    taken_ids = set(state_list)
    phases = {state: resolve_phase(state, start_state, rules) for state in state_list}
    positions, lanes = stack_swimlanes(layered.positions, phases)

    # State data
    events_by_state = _group_events(transitions)
    state_by_id: Dict[str, DiagramNodeData] = {}
    state_nodes: List[DiagramNode] = []
    for state in state_list:
        events = events_by_state.get(state, [])
        actions = [action for event in events for action in event.actions]
        is_terminal = not events
        data = DiagramNodeData(
            label=state,
            phase=phases[state],
            state_type=resolve_state_type(state, actions, is_terminal, rules),
            actions_summary=build_actions_summary(actions),
            is_terminal=is_terminal,
            events=events,
        )
        state_by_id[state] = data
        x, y = positions.get(state, (0.0, 0.0))
        state_nodes.append(
            DiagramNode(
                id=state,
                type="state",
                position=Point(x=x, y=y),
                width=NODE_WIDTH,
                height=NODE_HEIGHT,
                z_index=1,
                data=data,
            )
        )

    # Swimlanes share one horizontal extent across all positioned states
    if positions:
        min_x = min(x for x, _ in positions.values())
        max_x = max(x + NODE_WIDTH for x, _ in positions.values())
    else:
        min_x = max_x = 0.0
    lane_x = min_x - LANE_PADDING
    lane_width = max_x - min_x + LANE_PADDING * 2
    swimlane_nodes = [
        DiagramNode(
            id=_synthetic_id(f"{LANE_ID_PREFIX}{phase.value}", taken_ids),
            type="swimlane",
            position=Point(x=lane_x, y=top),
            width=lane_width,
            height=height,
            z_index=0,
            draggable=False,
            selectable=False,
            data=SwimlaneData(label=phase.value, phase=phase),
        )
        for phase, top, height in lanes
    ]

    # Transition edges
    edges: List[DiagramEdge] = []
    for row in transitions:
        event_name = row.event_name.strip()
        source_type = state_by_id[row.from_state].state_type if row.from_state in state_by_id else StateType.PROCESSING
        target_type = state_by_id[row.target].state_type if row.target in state_by_id else StateType.PROCESSING
        points: List[Point] = []
        if row.from_state in positions and row.target in positions:
            points = _anchor_points(
                positions[row.from_state],
                positions[row.target],
                (NODE_WIDTH, NODE_HEIGHT),
                direction,
            )
        edges.append(
            DiagramEdge(
                id=build_edge_id(row),
                source=row.from_state,
                target=row.target,
                label=event_name,
                data=DiagramEdgeData(
                    event_name=event_name,
                    actions_count=len(row.actions),
                    kind=classify_transition(row, source_type, target_type, rules),
                ),
                points=points,
            )
        )

    # Start marker
    extra_nodes: List[DiagramNode] = []
    if start_state and start_state in positions:
        start_id = _synthetic_id(START_NODE_ID, taken_ids)
        start_x, start_y = positions[start_state]
        marker = (
            start_x - START_NODE_SIZE - START_NODE_GAP,
            start_y + NODE_HEIGHT / 2 - START_NODE_SIZE / 2,
        )
        extra_nodes.append(
            DiagramNode(
                id=start_id,
                type="start",
                position=Point(x=marker[0], y=marker[1]),
                width=START_NODE_SIZE,
                height=START_NODE_SIZE,
                draggable=False,
                selectable=False,
                data=StartNodeData(),
            )
        )
        edges.insert(
            0,
            DiagramEdge(
                id=build_start_edge_id(start_state),
                source=start_id,
                target=start_state,
                data=DiagramEdgeData(event_name="", actions_count=0, kind=EdgeKind.START),
                points=[
                    Point(x=marker[0] + START_NODE_SIZE, y=marker[1] + START_NODE_SIZE / 2),
                    Point(x=start_x, y=start_y + NODE_HEIGHT / 2),
                ],
            ),
        )

    logger.debug(
        "Laid out %d states in %d lanes (%d edges, direction=%s)",
        len(state_nodes),
        len(swimlane_nodes),
        len(edges),
        direction,
    )
    return DiagramGraph(
        nodes=swimlane_nodes + extra_nodes + state_nodes,
        edges=edges,
        state_by_id=state_by_id,
    )
