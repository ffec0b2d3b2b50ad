"""
preset_registry.py - Load built-in workflow presets from presets.yaml

Preset documents are validated against schemas/workflow_presets.schema.json
before they are parsed, so a broken preset file fails loudly at load time
instead of producing a half-merged workflow.

Usage:
    from fsmstudio.config.preset_registry import get_presets, get_preset

    preset = get_preset("bankcode-psp-sanctions")
    spec = apply_preset(spec, preset)
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from jsonschema import Draft7Validator

from fsmstudio.spec.errors import (
    PresetNotFoundError,
    PresetValidationError,
    SchemaViolation,
)
from fsmstudio.spec.presets import WorkflowPreset, workflow_preset_from_dict

logger = logging.getLogger(__name__)

_CONFIG_FILE = Path(__file__).parent / "presets.yaml"
_SCHEMA_FILE = Path(__file__).parent / "schemas" / "workflow_presets.schema.json"


@lru_cache(maxsize=1)
def _load_schema() -> Dict[str, Any]:
    with open(_SCHEMA_FILE, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_preset_document(data: Any) -> List[SchemaViolation]:
    """Validate a parsed presets document against the preset schema.

    Returns:
        List of violations. Empty list means valid.
    """
    validator = Draft7Validator(_load_schema())
    violations = []
    for error in validator.iter_errors(data):
        path = ".".join(str(p) for p in error.absolute_path) or "root"
        violations.append(SchemaViolation(path=path, message=error.message, value=error.instance))
    return violations


def presets_from_document(data: Any, source: str = "<document>") -> Tuple[WorkflowPreset, ...]:
    """Validate and parse a presets document.

    Raises:
        PresetValidationError: If the document does not match the schema.
    """
    violations = validate_preset_document(data)
    if violations:
        raise PresetValidationError(source, violations)
    return tuple(workflow_preset_from_dict(raw) for raw in data["presets"])


@lru_cache(maxsize=8)
def load_presets(path: Optional[Path] = None) -> Tuple[WorkflowPreset, ...]:
    """Load presets from a YAML file (defaults to the packaged presets.yaml).

    Raises:
        PresetValidationError: If the file is not valid YAML or fails the schema.
    """
    config_path = Path(path) if path else _CONFIG_FILE
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise PresetValidationError(
            str(config_path), [SchemaViolation(path="", message=f"Invalid YAML: {e}")]
        )

    presets = presets_from_document(data, str(config_path))
    logger.debug("Loaded %d presets from %s", len(presets), config_path)
    return presets


def get_presets() -> List[WorkflowPreset]:
    """All built-in presets, in declaration order."""
    return list(load_presets(None))


def get_preset_ids() -> List[str]:
    """Ids of the built-in presets."""
    return [preset.id for preset in load_presets(None)]


def get_preset(preset_id: str, path: Optional[Path] = None) -> WorkflowPreset:
    """Look up a preset by id.

    Raises:
        PresetNotFoundError: If no preset has that id.
    """
    for preset in load_presets(path):
        if preset.id == preset_id:
            return preset
    raise PresetNotFoundError(preset_id)
