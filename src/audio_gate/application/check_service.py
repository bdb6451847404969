"""Application service orchestrating submission checks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from audio_gate.aggregation import build_file_report, validate_filename_for_preset
from audio_gate.application.event_publisher import EventPublisher, NullEventPublisher
from audio_gate.audio_properties import AudioHeaderError, read_audio_properties_bytes
from audio_gate.criteria import validate_criteria
from audio_gate.domain.events import (
    CriteriaEvaluated,
    FilenameValidated,
    SubmissionChecked,
    SubmissionFailed,
)
from audio_gate.domain.models import FileReport, ReferenceDataset, ValidationVerdict
from audio_gate.presets import DEFAULT_PRESET_ID, PRESETS, Preset


@dataclass(slots=True)
class CheckSubmission:
    """Use case that checks one submitted file against a preset."""

    preset: Preset = PRESETS[DEFAULT_PRESET_ID]
    dataset: ReferenceDataset | None = None
    script_base_names: tuple[str, ...] = ()
    speaker_id: str | None = None
    event_publisher: EventPublisher = NullEventPublisher()

    def validate_filename(
        self, filename: str, correlation_id: str | None = None
    ) -> ValidationVerdict | None:
        verdict = validate_filename_for_preset(
            filename,
            self.preset,
            dataset=self.dataset,
            script_base_names=self.script_base_names,
            speaker_id=self.speaker_id,
        )
        if verdict is not None:
            self.event_publisher.publish(
                FilenameValidated(
                    correlation_id=correlation_id or str(uuid4()),
                    payload_summary={
                        "filename": filename,
                        "rule": self.preset.filename_rule.value if self.preset.filename_rule else None,
                        "status": verdict.status.value,
                        "issue_count": len(verdict.issues),
                    },
                )
            )
        return verdict

    def check_filename(self, filename: str, correlation_id: str | None = None) -> FileReport:
        """Check only the filename; no audio bytes are read."""

        run_correlation_id = correlation_id or str(uuid4())
        report = build_file_report(
            filename,
            filename_verdict=self.validate_filename(filename, correlation_id=run_correlation_id),
        )
        self._publish_checked(report, run_correlation_id)
        return report

    def check_bytes(
        self, raw_bytes: bytes, filename: str, correlation_id: str | None = None
    ) -> FileReport:
        run_correlation_id = correlation_id or str(uuid4())
        verdict = self.validate_filename(filename, correlation_id=run_correlation_id)

        try:
            properties = read_audio_properties_bytes(raw_bytes, filename=filename)
        except AudioHeaderError as error:
            self.event_publisher.publish(
                SubmissionFailed(
                    correlation_id=run_correlation_id,
                    payload_summary={"filename": filename, "code": error.code, "error": error.message},
                )
            )
            report = build_file_report(filename, filename_verdict=verdict, error=error.message)
            self._publish_checked(report, run_correlation_id)
            return report

        criteria = validate_criteria(properties, self.preset.criteria)
        self.event_publisher.publish(
            CriteriaEvaluated(
                correlation_id=run_correlation_id,
                payload_summary={
                    "filename": filename,
                    "file_type": properties.file_type,
                    "sample_rate_hz": properties.sample_rate_hz,
                    "bit_depth": properties.bit_depth,
                    "channels": properties.channels,
                    "duration_seconds": properties.duration_seconds,
                    "statuses": {name: result.status.value for name, result in criteria.items()},
                },
            )
        )
        report = build_file_report(
            filename, properties=properties, criteria=criteria, filename_verdict=verdict
        )
        self._publish_checked(report, run_correlation_id)
        return report

    def check_path(
        self, path: Path, correlation_id: str | None = None, filename_only: bool = False
    ) -> FileReport:
        if filename_only:
            return self.check_filename(path.name, correlation_id=correlation_id)

        try:
            raw_bytes = path.read_bytes()
        except OSError as error:
            run_correlation_id = correlation_id or str(uuid4())
            verdict = self.validate_filename(path.name, correlation_id=run_correlation_id)
            self.event_publisher.publish(
                SubmissionFailed(
                    correlation_id=run_correlation_id,
                    payload_summary={"filename": path.name, "code": "file_unreadable", "error": str(error)},
                )
            )
            report = build_file_report(
                path.name,
                filename_verdict=verdict,
                error=f"Audio file is unreadable: {path}",
            )
            self._publish_checked(report, run_correlation_id)
            return report
        return self.check_bytes(raw_bytes, path.name, correlation_id=correlation_id)

    def _publish_checked(self, report: FileReport, correlation_id: str) -> None:
        self.event_publisher.publish(
            SubmissionChecked(
                correlation_id=correlation_id,
                payload_summary={
                    "filename": report.filename,
                    "preset_id": self.preset.preset_id,
                    "status": report.status.value,
                },
            )
        )
