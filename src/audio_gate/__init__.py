"""Public package exports for Audio Gate with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ReferenceDataset",
    "ValidationVerdict",
    "VerdictStatus",
    "CheckStatus",
    "FileReport",
    "validate_conversational",
    "validate_script_match",
    "load_reference_dataset",
    "resolve_reference_dataset",
    "AudioCriteria",
    "validate_criteria",
    "determine_overall_status",
    "CheckSubmission",
]

_EXPORT_MODULES: dict[str, str] = {
    "ReferenceDataset": "audio_gate.domain.models",
    "ValidationVerdict": "audio_gate.domain.models",
    "VerdictStatus": "audio_gate.domain.models",
    "CheckStatus": "audio_gate.domain.models",
    "FileReport": "audio_gate.domain.models",
    "validate_conversational": "audio_gate.filename",
    "validate_script_match": "audio_gate.filename",
    "load_reference_dataset": "audio_gate.reference_data",
    "resolve_reference_dataset": "audio_gate.reference_data",
    "AudioCriteria": "audio_gate.criteria",
    "validate_criteria": "audio_gate.criteria",
    "determine_overall_status": "audio_gate.aggregation",
    "CheckSubmission": "audio_gate.application",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'audio_gate' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
