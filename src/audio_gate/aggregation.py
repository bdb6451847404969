"""Combination of filename verdicts and criteria results into per-file reports."""

from __future__ import annotations

from typing import Collection, Iterable, Mapping

from audio_gate.domain.models import (
    AudioProperties,
    CheckStatus,
    CriterionResult,
    FileReport,
    ReferenceDataset,
    ValidationVerdict,
    VerdictStatus,
)
from audio_gate.filename import validate_conversational, validate_script_match
from audio_gate.filename.base import UNAVAILABLE_FORMAT
from audio_gate.options import FilenameRule
from audio_gate.presets import Preset

SCRIPT_MATCH_UNCONFIGURED = (
    "Script-match validation requires configuration: "
    "scripts folder and speaker ID must be set"
)


def determine_overall_status(statuses: Iterable[CheckStatus | VerdictStatus]) -> CheckStatus:
    """Fail beats warning beats pass; nothing to check counts as pass."""

    values = {CheckStatus(status.value) for status in statuses}
    if CheckStatus.FAIL in values:
        return CheckStatus.FAIL
    if CheckStatus.WARNING in values:
        return CheckStatus.WARNING
    return CheckStatus.PASS


def validate_filename_for_preset(
    filename: str,
    preset: Preset,
    *,
    dataset: ReferenceDataset | None = None,
    script_base_names: Collection[str] | None = None,
    speaker_id: str | None = None,
) -> ValidationVerdict | None:
    """Run the filename grammar configured for ``preset``, if any."""

    if preset.filename_rule is None:
        return None

    if preset.filename_rule is FilenameRule.BILINGUAL_PATTERN:
        if dataset is None:
            raise ValueError(
                f"Preset '{preset.preset_id}' requires a reference dataset for filename validation."
            )
        return validate_conversational(filename, dataset)

    if not script_base_names or not speaker_id:
        return ValidationVerdict(
            status=VerdictStatus.FAIL,
            expected_format=UNAVAILABLE_FORMAT,
            issues=(SCRIPT_MATCH_UNCONFIGURED,),
        )
    return validate_script_match(filename, script_base_names, speaker_id)


def build_file_report(
    filename: str,
    *,
    properties: AudioProperties | None = None,
    criteria: Mapping[str, CriterionResult] | None = None,
    filename_verdict: ValidationVerdict | None = None,
    error: str | None = None,
) -> FileReport:
    criteria = dict(criteria or {})
    statuses: list[CheckStatus | VerdictStatus] = [result.status for result in criteria.values()]
    if filename_verdict is not None:
        statuses.append(filename_verdict.status)
    status = CheckStatus.FAIL if error else determine_overall_status(statuses)
    return FileReport(
        filename=filename,
        status=status,
        properties=properties,
        criteria=criteria,
        filename_verdict=filename_verdict,
        error=error,
    )
