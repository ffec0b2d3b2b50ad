"""
fsmstudio/diagram - Swimlane diagram layout for workflow specs.

- Phases: lifecycle phase and state type classifiers
- Layered: networkx Sugiyama layout (ranks and in-rank order)
- Layout: swimlane stacking, start marker, render payload
- Edges / Filters: edge kinds and view filters
- Schema: pydantic render models

Usage:
    from fsmstudio.diagram import layout_graph, filter_edges, DiagramFilterOptions

    graph = layout_graph(spec)
    edges = filter_edges(graph.edges, DiagramFilterOptions(happy_only=True))
"""

from .schema import (
    DiagramEdge,
    DiagramEdgeData,
    DiagramEvent,
    DiagramGraph,
    DiagramNode,
    DiagramNodeData,
    EdgeKind,
    LifecyclePhase,
    Point,
    StartNodeData,
    StateType,
    SwimlaneData,
)

from .phases import (
    build_actions_summary,
    resolve_phase,
    resolve_state_type,
)

from .edges import (
    build_edge_id,
    classify_edge,
    classify_transition,
)

from .filters import (
    DiagramFilterOptions,
    filter_edges,
)

from .layered import (
    LayeredLayout,
    layered_layout,
)

from .layout import (
    START_NODE_ID,
    layout_graph,
)

__all__ = [
    # Schema
    "DiagramEdge",
    "DiagramEdgeData",
    "DiagramEvent",
    "DiagramGraph",
    "DiagramNode",
    "DiagramNodeData",
    "EdgeKind",
    "LifecyclePhase",
    "Point",
    "StartNodeData",
    "StateType",
    "SwimlaneData",
    # Classifiers
    "build_actions_summary",
    "resolve_phase",
    "resolve_state_type",
    "build_edge_id",
    "classify_edge",
    "classify_transition",
    # Filters
    "DiagramFilterOptions",
    "filter_edges",
    # Layout
    "LayeredLayout",
    "layered_layout",
    "START_NODE_ID",
    "layout_graph",
]
