"""
fsmstudio/spec - Workflow (FSM) specification model.

This package provides the specification layer for payment lifecycle workflows:
- Types: WorkflowSpec, StateSpec, TransitionSpec (frozen dataclasses)
- Model: integrity-preserving edits (upsert/delete transition, rename state)
- Lint: structural diagnostics (duplicates, dangling targets, reachability)
- Presets: non-destructive merge of workflow fragments
- Loader: FSM YAML / snapshot JSON import and export

Usage:
    from fsmstudio.spec import (
        WorkflowSpec,
        TransitionSpec,
        upsert_transition,
        rename_state,
        lint_workflow_spec,
        apply_preset,
    )

    spec = upsert_transition(spec, "RECEIVED", "VALIDATE", TransitionSpec("VALIDATED"))
    result = lint_workflow_spec(spec)
    if result.has_errors():
        ...
"""

from .types import (
    StateSpec,
    TransitionSpec,
    WorkflowSpec,
    WorkflowTransitionRow,
    make_transition,
    normalize_actions,
    normalize_name,
    state_spec_from_dict,
    workflow_spec_from_dict,
    workflow_spec_to_dict,
)

from .model import (
    add_state,
    delete_transition,
    find_state,
    list_all_transitions,
    migrate_legacy_transition_rows,
    remove_state,
    rename_state,
    resolve_start_state,
    set_start_state,
    state_names,
    upsert_transition,
)

from .lint import (
    compute_reachable_states,
    lint_workflow_spec,
)

from .presets import (
    WorkflowPreset,
    apply_preset,
    merge_actions,
    workflow_preset_from_dict,
)

from .loader import (
    dump_fsm_yaml,
    load_workflow_file,
    parse_fsm_yaml,
)

from .errors import (
    PresetNotFoundError,
    PresetValidationError,
    SchemaViolation,
    SpecError,
    SpecParseError,
)

__all__ = [
    # Types
    "StateSpec",
    "TransitionSpec",
    "WorkflowSpec",
    "WorkflowTransitionRow",
    "make_transition",
    "normalize_actions",
    "normalize_name",
    "state_spec_from_dict",
    "workflow_spec_from_dict",
    "workflow_spec_to_dict",
    # Model
    "add_state",
    "delete_transition",
    "find_state",
    "list_all_transitions",
    "migrate_legacy_transition_rows",
    "remove_state",
    "rename_state",
    "resolve_start_state",
    "set_start_state",
    "state_names",
    "upsert_transition",
    # Lint
    "compute_reachable_states",
    "lint_workflow_spec",
    # Presets
    "WorkflowPreset",
    "apply_preset",
    "merge_actions",
    "workflow_preset_from_dict",
    # Loader
    "dump_fsm_yaml",
    "load_workflow_file",
    "parse_fsm_yaml",
    # Errors
    "PresetNotFoundError",
    "PresetValidationError",
    "SchemaViolation",
    "SpecError",
    "SpecParseError",
]
