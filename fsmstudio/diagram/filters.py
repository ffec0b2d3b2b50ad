"""
filters.py - Edge visibility filters for the diagram view.

Filtering works on the classified edge kind and, for edges classified with
other rule tables, on a fixed set of event-name tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from fsmstudio.config.classifier_rules import EdgeKind

from .schema import DiagramEdge

FAILURE_TOKENS = ("FAILED", "ERROR", "NOTRECOVERABLE", "NOT_RECOVERABLE", "RECOVERABLE")
RETRY_EVENT = "ONRETRY"


@dataclass(frozen=True)
class DiagramFilterOptions:
    """Which edges to show.

    Attributes:
        happy_only: Hide every failure edge
        show_retries: Show retry edges
        show_failures: Show failure edges
    """
    happy_only: bool = False
    show_retries: bool = True
    show_failures: bool = True


def _event_name(edge: DiagramEdge) -> str:
    return (edge.data.event_name or edge.label or "").strip()


def is_failure_edge(edge: DiagramEdge) -> bool:
    if edge.data.kind == EdgeKind.FAILURE:
        return True
    upper = _event_name(edge).upper()
    return any(token in upper for token in FAILURE_TOKENS)


def is_retry_edge(edge: DiagramEdge) -> bool:
    return edge.data.kind == EdgeKind.RETRY or _event_name(edge).upper() == RETRY_EVENT


def filter_edges(edges: Iterable[DiagramEdge], options: DiagramFilterOptions) -> List[DiagramEdge]:
    """Return the edges visible under ``options``, preserving order.

    The start edge is always kept.
    """
    visible = []
    for edge in edges:
        if edge.data.kind == EdgeKind.START:
            visible.append(edge)
            continue
        failure = is_failure_edge(edge)
        if failure and (options.happy_only or not options.show_failures):
            continue
        if not options.show_retries and is_retry_edge(edge):
            continue
        visible.append(edge)
    return visible
