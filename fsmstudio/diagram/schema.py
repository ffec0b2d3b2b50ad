"""
Pydantic models for the workflow diagram render payload.

These models are the contract with the graph rendering surface. They are
rebuilt from the WorkflowSpec on every edit and never persisted.

Usage:
    from fsmstudio.diagram import layout_graph

    graph = layout_graph(spec)
    payload = graph.model_dump(mode="json")
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from fsmstudio.config.classifier_rules import EdgeKind, LifecyclePhase, StateType

__all__ = [
    "EdgeKind",
    "LifecyclePhase",
    "StateType",
    "Point",
    "DiagramEvent",
    "DiagramNodeData",
    "SwimlaneData",
    "StartNodeData",
    "DiagramNode",
    "DiagramEdgeData",
    "DiagramEdge",
    "DiagramGraph",
]


# =============================================================================
# Geometry
# =============================================================================


class Point(BaseModel):
    """A position in diagram coordinates (top-left origin)."""
    x: float
    y: float


# =============================================================================
# Nodes
# =============================================================================


class DiagramEvent(BaseModel):
    """One outgoing event of a state, as shown in the node detail."""
    event_name: str = Field(description="Event name as declared")
    target: str = Field(description="Target state name")
    actions: List[str] = Field(default_factory=list, description="Normalized action list")


class DiagramNodeData(BaseModel):
    """Render data for a state node."""
    label: str = Field(description="State name")
    phase: LifecyclePhase = Field(description="Swimlane the state is placed in")
    state_type: StateType = Field(description="Visual role (processing, external, failure, success)")
    actions_summary: Optional[str] = Field(None, description="Digest of up to two action names")
    is_terminal: bool = Field(description="True when the state has no outgoing events")
    events: List[DiagramEvent] = Field(default_factory=list, description="Outgoing events in declaration order")


class SwimlaneData(BaseModel):
    """Render data for a phase swimlane."""
    label: str
    phase: LifecyclePhase


class StartNodeData(BaseModel):
    """Render data for the synthetic start marker."""
    label: str = "Start"


class DiagramNode(BaseModel):
    """Positioned node: a state, a swimlane background, or the start marker."""
    id: str = Field(description="Unique node id (state name, lane:<phase>, or __start__)")
    type: Literal["state", "swimlane", "start"]
    position: Point
    width: float
    height: float
    z_index: int = 1
    draggable: bool = True
    selectable: bool = True
    data: Union[DiagramNodeData, SwimlaneData, StartNodeData]


# =============================================================================
# Edges
# =============================================================================


class DiagramEdgeData(BaseModel):
    """Render data for a transition edge."""
    event_name: str = Field(description="Trimmed event name")
    actions_count: int = Field(description="Number of actions on the transition")
    kind: EdgeKind = Field(description="Styling kind (success, failure, retry, external, start)")


class DiagramEdge(BaseModel):
    """Directed edge between two nodes."""
    id: str = Field(description="<from>__<event>__<target>, or start__<state>")
    source: str
    target: str
    label: Optional[str] = None
    data: DiagramEdgeData
    points: List[Point] = Field(
        default_factory=list,
        description="Source and target anchor points; empty when an endpoint is not positioned",
    )


class DiagramGraph(BaseModel):
    """Complete render payload for one workflow."""
    nodes: List[DiagramNode] = Field(description="Swimlanes, then the start marker, then states")
    edges: List[DiagramEdge] = Field(description="Start edge first, then transitions in row order")
    state_by_id: Dict[str, DiagramNodeData] = Field(description="State node data keyed by state name")

    def state_nodes(self) -> List[DiagramNode]:
        return [node for node in self.nodes if node.type == "state"]

    def swimlanes(self) -> List[DiagramNode]:
        return [node for node in self.nodes if node.type == "swimlane"]

    def node(self, node_id: str) -> Optional[DiagramNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
