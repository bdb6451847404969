"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
import logging
from pathlib import Path
from typing import Sequence
from uuid import uuid4

from audio_gate.aggregation import build_file_report
from audio_gate.application.check_service import CheckSubmission
from audio_gate.criteria import load_criteria
from audio_gate.domain.models import FileReport, ReferenceDataset, ValidationVerdict
from audio_gate.export import export_stats
from audio_gate.filename import (
    script_base_names_from_dir,
    validate_conversational,
    validate_script_match,
)
from audio_gate.infrastructure.logging_event_publisher import LoggingEventPublisher
from audio_gate.options import FilenameRule
from audio_gate.presets import get_preset, with_criteria
from audio_gate.reference_data import DEFAULT_HTTP_TIMEOUT_SECONDS, resolve_reference_dataset

logger = logging.getLogger(__name__)

_event_publisher = LoggingEventPublisher()


def check_single_filename(
    filename: str,
    rule: FilenameRule,
    *,
    reference_data: str | None = None,
    scripts_dir: Path | None = None,
    speaker_id: str | None = None,
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
) -> ValidationVerdict:
    if rule is FilenameRule.BILINGUAL_PATTERN:
        if not reference_data:
            raise ValueError("--dataset is required for the bilingual-pattern rule.")
        dataset = resolve_reference_dataset(reference_data, timeout=http_timeout)
        return validate_conversational(filename, dataset)

    if scripts_dir is None or not speaker_id:
        raise ValueError("--scripts-dir and --speaker-id are required for the script-match rule.")
    return validate_script_match(filename, script_base_names_from_dir(scripts_dir), speaker_id)


def build_check_service(
    preset_id: str,
    *,
    reference_data: str | None = None,
    scripts_dir: Path | None = None,
    speaker_id: str | None = None,
    criteria_file: Path | None = None,
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
) -> CheckSubmission:
    preset = get_preset(preset_id)
    if criteria_file is not None:
        preset = with_criteria(preset, load_criteria(criteria_file))

    dataset: ReferenceDataset | None = None
    if preset.filename_rule is FilenameRule.BILINGUAL_PATTERN:
        if not reference_data:
            raise ValueError(f"Preset '{preset.preset_id}' requires --dataset for filename validation.")
        dataset = resolve_reference_dataset(reference_data, timeout=http_timeout)

    script_base_names: tuple[str, ...] = ()
    if preset.filename_rule is FilenameRule.SCRIPT_MATCH and scripts_dir is not None:
        script_base_names = tuple(script_base_names_from_dir(scripts_dir))

    return CheckSubmission(
        preset=preset,
        dataset=dataset,
        script_base_names=script_base_names,
        speaker_id=speaker_id,
        event_publisher=_event_publisher,
    )


def collect_paths(
    paths: Sequence[Path], directory: Path | None = None, pattern: str = "*.wav"
) -> list[Path]:
    collected = list(paths)
    if directory is not None:
        if not directory.is_dir():
            raise ValueError(f"Directory not found: {directory}")
        collected.extend(sorted(path for path in directory.glob(pattern) if path.is_file()))
    if not collected:
        raise ValueError("No input files were resolved.")
    return collected


def run_batch_check(
    paths: Sequence[Path],
    service: CheckSubmission,
    concurrency_limit: int = 4,
    filename_only: bool = False,
) -> tuple[list[FileReport], dict[str, int]]:
    """Check files concurrently; reports come back in input order."""

    def _process(path: Path) -> FileReport:
        correlation_id = str(uuid4())
        try:
            return service.check_path(path, correlation_id=correlation_id, filename_only=filename_only)
        except Exception as error:  # noqa: BLE001
            logger.exception("submission_check_failed", extra={"path": str(path), "correlation_id": correlation_id})
            return build_file_report(path.name, error=str(error))

    safe_concurrency = max(1, concurrency_limit)
    reports: list[FileReport | None] = [None] * len(paths)
    with ThreadPoolExecutor(max_workers=safe_concurrency) as executor:
        futures = {executor.submit(_process, path): idx for idx, path in enumerate(paths)}
        for future in as_completed(futures):
            reports[futures[future]] = future.result()

    ordered = [report for report in reports if report is not None]
    return ordered, export_stats(ordered)
