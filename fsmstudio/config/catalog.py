"""
catalog.py - Reference state/event/action vocabulary for workflow editing.

The catalog is read-only configuration: load it once and pass it by
reference to the suggestion helpers.

Usage:
    from fsmstudio.config.catalog import get_default_catalog, suggested_events_for_state

    catalog = get_default_catalog()
    events = suggested_events_for_state("BANKCODE_ENRICHMENT", catalog)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import yaml

from .classifier_rules import ClassifierRules, get_default_rules

logger = logging.getLogger(__name__)

_CATALOG_FILE = Path(__file__).parent / "catalog.yaml"

_SUCCESS_EVENT = re.compile(r"(SUCCESS|PASSED|COMPLETED|ENABLED|APPROVED|APPROVE)", re.IGNORECASE)
_ENRICHMENT_FAILURE_EVENTS = ("EnrichmentFailureRecoverable", "EnrichmentFailureNotRecoverable")
_RETRY_EVENT = "OnRetry"


@dataclass(frozen=True)
class FsmCatalog:
    """Known state, event and action names."""
    states: Tuple[str, ...] = ()
    events: Tuple[str, ...] = ()
    actions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FsmSuggestions:
    """Sorted, deduplicated catalog values for autocomplete."""
    states: Tuple[str, ...] = ()
    events: Tuple[str, ...] = ()
    actions: Tuple[str, ...] = ()


def _unique(values: Iterable[object]) -> Tuple[str, ...]:
    """Trim and dedupe case-insensitively; first spelling wins."""
    seen = set()
    result: List[str] = []
    for value in values:
        text = str(value).strip() if value is not None else ""
        if not text or text.lower() in seen:
            continue
        seen.add(text.lower())
        result.append(text)
    return tuple(result)


@lru_cache(maxsize=8)
def load_catalog(path: Optional[Path] = None) -> FsmCatalog:
    """Load a catalog YAML file (defaults to the packaged catalog.yaml)."""
    catalog_path = Path(path) if path else _CATALOG_FILE
    with open(catalog_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    catalog = FsmCatalog(
        states=_unique(data.get("states") or []),
        events=_unique(data.get("events") or []),
        actions=_unique(data.get("actions") or []),
    )
    logger.debug(
        "Loaded catalog %s: %d states, %d events, %d actions",
        catalog_path,
        len(catalog.states),
        len(catalog.events),
        len(catalog.actions),
    )
    return catalog


def get_default_catalog() -> FsmCatalog:
    """The packaged catalog (loaded once)."""
    return load_catalog(None)


def merge_catalogs(base: FsmCatalog, extra: Optional[FsmCatalog] = None) -> FsmCatalog:
    """Combine two catalogs; base entries keep their position and spelling."""
    if extra is None:
        return base
    return FsmCatalog(
        states=_unique(base.states + extra.states),
        events=_unique(base.events + extra.events),
        actions=_unique(base.actions + extra.actions),
    )


def build_suggestions(catalog: FsmCatalog) -> FsmSuggestions:
    """Deduplicated, sorted autocomplete lists."""
    def sort(values: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(sorted({v.strip() for v in values if v.strip()}))

    return FsmSuggestions(
        states=sort(catalog.states),
        events=sort(catalog.events),
        actions=sort(catalog.actions),
    )


def _compact(value: str) -> str:
    return re.sub(r"[^a-z0-9]", "", value.strip().lower())


def suggested_events_for_state(state_name: str, catalog: Optional[FsmCatalog] = None) -> List[str]:
    """Catalog events likely to be raised in the given state.

    Events whose name embeds the state name come first, then the standard
    enrichment failure events for enrichment states, then the retry event.
    """
    catalog = catalog or get_default_catalog()
    key = _compact(state_name)
    if not key:
        return []

    matches = [event for event in catalog.events if key in _compact(event)]
    known = set(catalog.events)

    extras: List[str] = []
    if "enrichment" in state_name.lower():
        extras.extend(e for e in _ENRICHMENT_FAILURE_EVENTS if e in known)
    if _RETRY_EVENT in known:
        extras.append(_RETRY_EVENT)

    return list(_unique(matches + extras))


def suggested_actions_for_event(
    event_name: str,
    catalog: Optional[FsmCatalog] = None,
    rules: Optional[ClassifierRules] = None,
) -> List[str]:
    """Default action for an event: retry, failure or success conventions."""
    if not event_name.strip():
        return []
    catalog = catalog or get_default_catalog()
    rules = rules or get_default_rules()
    known = set(catalog.actions)

    if rules.retry.search(event_name) and "reset-mtp" in known:
        return ["reset-mtp"]
    if rules.failure.search(event_name) and "notify-bd-error" in known:
        return ["notify-bd-error"]
    if _SUCCESS_EVENT.search(event_name) and "persist-txn" in known:
        return ["persist-txn"]
    return []
