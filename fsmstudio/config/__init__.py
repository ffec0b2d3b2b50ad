"""
fsmstudio/config - Packaged configuration registries.

Each registry reads a YAML file shipped next to this module, is cached per
path, and returns frozen values:
- classifier_rules: phase/state-type/edge-kind keyword tables (classifiers.yaml)
- catalog: reference state, event and action names (catalog.yaml)
- preset_registry: built-in workflow presets (presets.yaml, schema-validated)
"""

from .classifier_rules import (
    PHASE_ORDER,
    ClassifierConfigError,
    ClassifierRules,
    EdgeKind,
    LifecyclePhase,
    StateType,
    get_default_rules,
    load_classifier_rules,
)

from .catalog import (
    FsmCatalog,
    FsmSuggestions,
    build_suggestions,
    get_default_catalog,
    load_catalog,
    merge_catalogs,
    suggested_actions_for_event,
    suggested_events_for_state,
)

__all__ = [
    # Classifier rules
    "PHASE_ORDER",
    "ClassifierConfigError",
    "ClassifierRules",
    "EdgeKind",
    "LifecyclePhase",
    "StateType",
    "get_default_rules",
    "load_classifier_rules",
    # Catalog
    "FsmCatalog",
    "FsmSuggestions",
    "build_suggestions",
    "get_default_catalog",
    "load_catalog",
    "merge_catalogs",
    "suggested_actions_for_event",
    "suggested_events_for_state",
]
