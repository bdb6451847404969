"""Technical-criteria validation of audio header properties."""

from __future__ import annotations

from pathlib import Path
import json
import re

from pydantic import BaseModel, Field, field_validator

from audio_gate.domain.models import AudioProperties, CheckStatus, CriterionResult

_DETAIL_SUFFIX = re.compile(r"\s*\(.*\)")


class AudioCriteria(BaseModel):
    """Accepted values per property; an empty list leaves the property unchecked."""

    file_types: list[str] = Field(default_factory=list)
    sample_rates: list[int] = Field(default_factory=list)
    bit_depths: list[int] = Field(default_factory=list)
    channels: list[int] = Field(default_factory=list)
    min_duration_seconds: float | None = Field(None, ge=0.0)

    @field_validator("file_types")
    @classmethod
    def _normalize_file_types(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item.strip()]


def matches_file_type(actual: str, target: str) -> CheckStatus:
    """Compare a header file-type label such as ``WAV (PCM)`` to a target like ``wav``."""

    if actual == target:
        return CheckStatus.PASS

    if target.lower() == "wav":
        if actual == "WAV (PCM)":
            return CheckStatus.PASS
        if actual.startswith("WAV"):
            return CheckStatus.WARNING
        return CheckStatus.FAIL

    if _DETAIL_SUFFIX.sub("", actual).strip() == target.upper():
        return CheckStatus.PASS
    return CheckStatus.FAIL


def _best_file_type_status(actual: str, targets: list[str]) -> CheckStatus:
    statuses = [matches_file_type(actual, target) for target in targets]
    if CheckStatus.PASS in statuses:
        return CheckStatus.PASS
    if CheckStatus.WARNING in statuses:
        return CheckStatus.WARNING
    return CheckStatus.FAIL


def _target(values: list):
    return values[0] if len(values) == 1 else list(values)


def _membership(actual: int | None, allowed: list[int], label: str) -> CriterionResult:
    if actual is not None and actual in allowed:
        return CriterionResult(CheckStatus.PASS, _target(allowed), actual)
    shown = "unknown" if actual is None else actual
    expected = ", ".join(str(value) for value in allowed)
    return CriterionResult(
        CheckStatus.FAIL,
        _target(allowed),
        actual,
        f"{label} {shown} is not one of: {expected}",
    )


def validate_criteria(
    properties: AudioProperties, criteria: AudioCriteria
) -> dict[str, CriterionResult]:
    """Check each configured criterion; keys appear only for configured criteria."""

    results: dict[str, CriterionResult] = {}

    if criteria.file_types:
        status = _best_file_type_status(properties.file_type, criteria.file_types)
        issue = ""
        if status is CheckStatus.WARNING:
            issue = f"File type {properties.file_type} is a non-PCM variant"
        elif status is CheckStatus.FAIL:
            issue = f"File type {properties.file_type} is not one of: {', '.join(criteria.file_types)}"
        results["fileType"] = CriterionResult(
            status, _target(criteria.file_types), properties.file_type, issue
        )

    if criteria.sample_rates:
        results["sampleRate"] = _membership(
            properties.sample_rate_hz, criteria.sample_rates, "Sample rate"
        )
    if criteria.bit_depths:
        results["bitDepth"] = _membership(properties.bit_depth, criteria.bit_depths, "Bit depth")
    if criteria.channels:
        results["channels"] = _membership(properties.channels, criteria.channels, "Channel count")

    if criteria.min_duration_seconds:
        minimum = criteria.min_duration_seconds
        duration = properties.duration_seconds
        if duration is None:
            results["duration"] = CriterionResult(
                CheckStatus.WARNING, minimum, None, "Duration could not be determined"
            )
        elif duration < minimum:
            results["duration"] = CriterionResult(
                CheckStatus.FAIL,
                minimum,
                duration,
                f"Duration {duration:.2f}s is shorter than the minimum of {minimum:g}s",
            )
        else:
            results["duration"] = CriterionResult(CheckStatus.PASS, minimum, duration)

    return results


def load_criteria(path: Path) -> AudioCriteria:
    """Load custom criteria from a JSON or YAML file."""

    if path.suffix.lower() in {".yaml", ".yml"}:
        import yaml

        with path.open("r", encoding="utf-8") as handle:
            return AudioCriteria.model_validate(yaml.safe_load(handle) or {})

    with path.open("r", encoding="utf-8") as handle:
        return AudioCriteria.model_validate(json.load(handle))
