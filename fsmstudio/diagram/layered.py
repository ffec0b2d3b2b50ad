"""
layered.py - Sugiyama-style layered layout over a networkx DiGraph.

Phases:
  1. Cycle removal (greedy feedback arc set)
  2. Rank assignment (longest path)
  3. Dummy node insertion for edges spanning several ranks
  4. Crossing minimization (barycenter sweeps)
  5. Coordinate assignment

Every tie is broken by node declaration order, so the same input always
produces the same positions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

import networkx as nx

logger = logging.getLogger(__name__)

DUMMY_PREFIX = "__dummy_"
MAX_ORDERING_PASSES = 24

Edge = Tuple[str, str]


@dataclass
class LayeredLayout:
    """Result of layered_layout().

    Attributes:
        positions: Top-left (x, y) per real node
        ranks: Rank per real node (0 is the first layer)
        ordering: Final node order per rank, dummy nodes included
        reversed_edges: Edges reversed to break cycles
    """
    positions: Dict[str, Tuple[float, float]] = field(default_factory=dict)
    ranks: Dict[str, int] = field(default_factory=dict)
    ordering: List[List[str]] = field(default_factory=list)
    reversed_edges: Set[Edge] = field(default_factory=set)


# =============================================================================
# Graph construction
# =============================================================================


def build_digraph(nodes: Sequence[str], edges: Sequence[Edge]) -> nx.DiGraph:
    """Build the layout graph.

    Edges with an endpoint outside ``nodes`` and self-loops carry no layout
    information and are left out.
    """
    graph = nx.DiGraph()
    for node in nodes:
        graph.add_node(node)
    for source, target in edges:
        if source == target:
            continue
        if source in graph and target in graph:
            graph.add_edge(source, target)
    return graph


# =============================================================================
# Cycle removal
# =============================================================================


def greedy_fas_ordering(graph: nx.DiGraph) -> List[str]:
    """Node ordering from the Eades-Lin-Smyth greedy feedback arc set heuristic.

    Sinks are peeled to the right, sources to the left, and otherwise the
    node with the largest out-degree surplus goes left. Edges pointing
    backwards in the returned ordering form the feedback arc set.
    """
    active: List[str] = list(graph.nodes)
    out_deg = {node: graph.out_degree(node) for node in active}
    in_deg = {node: graph.in_degree(node) for node in active}
    left: List[str] = []
    right: List[str] = []

    def remove(node: str) -> None:
        active.remove(node)
        for succ in graph.successors(node):
            in_deg[succ] -= 1
        for pred in graph.predecessors(node):
            out_deg[pred] -= 1

    while active:
        changed = True
        while changed:
            changed = False
            for node in [n for n in active if out_deg[n] == 0]:
                remove(node)
                right.append(node)
                changed = True
            for node in [n for n in active if in_deg[n] == 0]:
                remove(node)
                left.append(node)
                changed = True

        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            remove(best)
            left.append(best)

    right.reverse()
    return left + right


def remove_cycles(graph: nx.DiGraph) -> Tuple[nx.DiGraph, Set[Edge]]:
    """Return an acyclic copy of ``graph`` plus the set of reversed edges."""
    position = {node: index for index, node in enumerate(greedy_fas_ordering(graph))}
    reversed_edges = {
        (source, target) for source, target in graph.edges if position[source] > position[target]
    }

    dag = nx.DiGraph()
    dag.add_nodes_from(graph.nodes)
    for source, target in graph.edges:
        if (source, target) in reversed_edges:
            dag.add_edge(target, source)
        else:
            dag.add_edge(source, target)
    return dag, reversed_edges


# =============================================================================
# Ranking
# =============================================================================


def assign_ranks(dag: nx.DiGraph) -> Dict[str, int]:
    """Longest-path ranking: every edge points to a strictly higher rank."""
    index = {node: i for i, node in enumerate(dag.nodes)}
    ranks: Dict[str, int] = {}
    for node in nx.lexicographical_topological_sort(dag, key=index.__getitem__):
        ranks[node] = max((ranks[pred] + 1 for pred in dag.predecessors(node)), default=0)
    return ranks


def insert_dummy_nodes(dag: nx.DiGraph, ranks: Dict[str, int]) -> Tuple[nx.DiGraph, Dict[str, int]]:
    """Split every edge spanning more than one rank into unit-length segments.

    Dummy ids never reuse the id of a node already in the graph.
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(dag.nodes)
    all_ranks = dict(ranks)

    for counter, (source, target) in enumerate(list(dag.edges)):
        span = ranks[target] - ranks[source]
        if span <= 1:
            graph.add_edge(source, target)
            continue
        previous = source
        for step in range(1, span):
            dummy = f"{DUMMY_PREFIX}{counter}_{step}"
            while dummy in graph:
                dummy += "_"
            graph.add_node(dummy)
            all_ranks[dummy] = ranks[source] + step
            graph.add_edge(previous, dummy)
            previous = dummy
        graph.add_edge(previous, target)

    return graph, all_ranks


# =============================================================================
# Crossing minimization
# =============================================================================


def count_crossings(ordering: List[List[str]], graph: nx.DiGraph) -> int:
    """Count edge crossings between consecutive ranks."""
    total = 0
    for rank in range(len(ordering) - 1):
        next_pos = {node: i for i, node in enumerate(ordering[rank + 1])}
        segments = []
        for pos, node in enumerate(ordering[rank]):
            for succ in graph.successors(node):
                if succ in next_pos:
                    segments.append((pos, next_pos[succ]))
        for i in range(len(segments)):
            for j in range(i + 1, len(segments)):
                (a0, a1), (b0, b1) = segments[i], segments[j]
                if (a0 - b0) * (a1 - b1) < 0:
                    total += 1
    return total


def _barycenter(node: str, neighbours: List[str], positions: Dict[str, int], fallback: float) -> float:
    placed = [positions[n] for n in neighbours if n in positions]
    if not placed:
        return fallback
    return sum(placed) / len(placed)


def _sweep(ordering: List[List[str]], graph: nx.DiGraph, downward: bool) -> None:
    rank_range = range(1, len(ordering)) if downward else range(len(ordering) - 2, -1, -1)
    for rank in rank_range:
        fixed = ordering[rank - 1] if downward else ordering[rank + 1]
        positions = {node: i for i, node in enumerate(fixed)}
        current = {node: i for i, node in enumerate(ordering[rank])}

        def key(node: str) -> float:
            neighbours = graph.predecessors(node) if downward else graph.successors(node)
            return _barycenter(node, list(neighbours), positions, float(current[node]))

        ordering[rank].sort(key=key)


def minimise_crossings(graph: nx.DiGraph, ranks: Dict[str, int]) -> List[List[str]]:
    """Order nodes within each rank to reduce crossings.

    The initial order is graph insertion order (declaration order, then dummy
    nodes). Alternating down/up barycenter sweeps run until the crossing count
    stops improving; the best ordering seen is returned.
    """
    rank_count = (max(ranks.values()) + 1) if ranks else 0
    ordering: List[List[str]] = [[] for _ in range(rank_count)]
    for node in graph.nodes:
        ordering[ranks[node]].append(node)

    best = [list(layer) for layer in ordering]
    best_crossings = count_crossings(best, graph)

    for _ in range(MAX_ORDERING_PASSES):
        if best_crossings == 0:
            break
        _sweep(ordering, graph, downward=True)
        _sweep(ordering, graph, downward=False)
        crossings = count_crossings(ordering, graph)
        if crossings >= best_crossings:
            break
        best = [list(layer) for layer in ordering]
        best_crossings = crossings

    return best


# =============================================================================
# Coordinates
# =============================================================================


def assign_coordinates(
    ordering: List[List[str]],
    real_nodes: Set[str],
    node_width: float,
    node_height: float,
    direction: str,
    rank_sep: float,
    node_sep: float,
    edge_sep: float,
) -> Dict[str, Tuple[float, float]]:
    """Assign top-left coordinates to the real nodes.

    Ranks advance along x for ``LR`` and along y for ``TB``. Inside a rank,
    nodes are packed along the other axis and the rank is centred on zero;
    dummy nodes take no room beyond ``edge_sep``. The result is shifted so
    the smallest coordinate on each axis is zero.
    """
    horizontal = direction == "LR"
    rank_size = node_width if horizontal else node_height
    cross_size = node_height if horizontal else node_width

    centres: Dict[str, Tuple[float, float]] = {}
    for rank, layer in enumerate(ordering):
        sizes = [cross_size if node in real_nodes else 0.0 for node in layer]
        gaps = []
        for left, right in zip(layer, layer[1:]):
            both_real = left in real_nodes and right in real_nodes
            gaps.append(node_sep if both_real else edge_sep)
        extent = sum(sizes) + sum(gaps)

        cursor = -extent / 2
        primary = rank * (rank_size + rank_sep) + rank_size / 2
        for i, node in enumerate(layer):
            secondary = cursor + sizes[i] / 2
            if node in real_nodes:
                centres[node] = (primary, secondary) if horizontal else (secondary, primary)
            cursor += sizes[i] + (gaps[i] if i < len(gaps) else 0)

    if not centres:
        return {}

    min_x = min(x - node_width / 2 for x, _ in centres.values())
    min_y = min(y - node_height / 2 for _, y in centres.values())
    return {
        node: (x - node_width / 2 - min_x, y - node_height / 2 - min_y)
        for node, (x, y) in centres.items()
    }


def layered_layout(
    nodes: Sequence[str],
    edges: Sequence[Edge],
    node_width: float,
    node_height: float,
    direction: str = "LR",
    rank_sep: float = 140,
    node_sep: float = 70,
    edge_sep: float = 50,
    first: Optional[str] = None,
) -> LayeredLayout:
    """Lay out a directed graph with fixed-size node boxes.

    Args:
        nodes: Node ids in declaration order (duplicates collapse).
        edges: (source, target) pairs; dangling edges and self-loops are ignored.
        node_width: Box width shared by every node.
        node_height: Box height shared by every node.
        direction: ``LR`` or ``TB``.
        rank_sep: Gap between consecutive ranks.
        node_sep: Gap between neighbouring nodes in a rank.
        edge_sep: Gap around dummy nodes.
        first: Node to favour for the first rank (typically the start state).

    Returns:
        LayeredLayout with positions for every distinct node.
    """
    ordered = list(dict.fromkeys(nodes))
    if first in ordered:
        ordered.remove(first)
        ordered.insert(0, first)
    if not ordered:
        return LayeredLayout()

    graph = build_digraph(ordered, edges)
    dag, reversed_edges = remove_cycles(graph)
    ranks = assign_ranks(dag)
    augmented, all_ranks = insert_dummy_nodes(dag, ranks)
    ordering = minimise_crossings(augmented, all_ranks)
    positions = assign_coordinates(
        ordering,
        set(ordered),
        node_width,
        node_height,
        direction,
        rank_sep,
        node_sep,
        edge_sep,
    )

    logger.debug(
        "Layered layout: %d nodes, %d ranks, %d reversed edges",
        len(ordered),
        len(ordering),
        len(reversed_edges),
    )
    return LayeredLayout(
        positions=positions,
        ranks=ranks,
        ordering=ordering,
        reversed_edges=reversed_edges,
    )
