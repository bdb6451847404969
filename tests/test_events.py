from __future__ import annotations

import logging
from pathlib import Path

from audio_gate.application.check_service import CheckSubmission
from audio_gate.domain.events import (
    CriteriaEvaluated,
    FilenameValidated,
    SubmissionChecked,
    SubmissionFailed,
)
from audio_gate.domain.models import CheckStatus
from audio_gate.infrastructure.logging_event_publisher import LoggingEventPublisher
from audio_gate.presets import get_preset


class RecordingPublisher:
    def __init__(self) -> None:
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)


def test_check_bytes_emits_events_in_order_success(dataset, wav_factory) -> None:
    publisher = RecordingPublisher()
    service = CheckSubmission(dataset=dataset, event_publisher=publisher)

    report = service.check_bytes(
        wav_factory(duration_seconds=0.1),
        "conv1-en-user-1-agent-2.wav",
        correlation_id="corr-1",
    )

    assert report.status is CheckStatus.PASS
    assert [type(event) for event in publisher.events] == [
        FilenameValidated,
        CriteriaEvaluated,
        SubmissionChecked,
    ]
    assert {event.correlation_id for event in publisher.events} == {"corr-1"}
    assert publisher.events[0].payload_summary["rule"] == "bilingual-pattern"
    assert publisher.events[-1].payload_summary == {
        "filename": "conv1-en-user-1-agent-2.wav",
        "preset_id": "bilingual-conversational",
        "status": "pass",
    }


def test_check_bytes_emits_failure_event_for_unreadable_audio(dataset) -> None:
    publisher = RecordingPublisher()
    service = CheckSubmission(dataset=dataset, event_publisher=publisher)

    report = service.check_bytes(b"not audio", "conv1-en-user-1-agent-2.wav", correlation_id="corr-2")

    assert report.status is CheckStatus.FAIL
    assert report.filename_verdict is not None and report.filename_verdict.passed
    assert report.error is not None
    assert [type(event) for event in publisher.events] == [
        FilenameValidated,
        SubmissionFailed,
        SubmissionChecked,
    ]
    assert publisher.events[1].payload_summary["code"] == "unsupported_container"


def test_preset_without_filename_rule_skips_filename_event(wav_factory) -> None:
    publisher = RecordingPublisher()
    service = CheckSubmission(preset=get_preset("custom"), event_publisher=publisher)

    report = service.check_bytes(wav_factory(duration_seconds=0.1), "Anything Goes.wav")

    assert report.status is CheckStatus.PASS
    assert report.filename_verdict is None
    assert [type(event) for event in publisher.events] == [CriteriaEvaluated, SubmissionChecked]


def test_check_filename_reads_no_audio(dataset) -> None:
    publisher = RecordingPublisher()
    service = CheckSubmission(dataset=dataset, event_publisher=publisher)

    report = service.check_filename("conv1-xx-user-1-agent-2.wav")

    assert report.status is CheckStatus.FAIL
    assert report.properties is None
    assert [type(event) for event in publisher.events] == [FilenameValidated, SubmissionChecked]


def test_check_path_reports_unreadable_file(tmp_path: Path, dataset) -> None:
    publisher = RecordingPublisher()
    service = CheckSubmission(dataset=dataset, event_publisher=publisher)

    report = service.check_path(tmp_path / "conv1-en-user-1-agent-2.wav", correlation_id="corr-3")

    assert report.status is CheckStatus.FAIL
    assert report.error is not None and "unreadable" in report.error
    assert [type(event) for event in publisher.events] == [
        FilenameValidated,
        SubmissionFailed,
        SubmissionChecked,
    ]


def test_logging_event_publisher_emits_structured_record(caplog) -> None:
    publisher = LoggingEventPublisher()

    with caplog.at_level(logging.INFO, logger="audio_gate.events"):
        publisher.publish(SubmissionChecked(correlation_id="corr-4", payload_summary={"status": "pass"}))

    record = caplog.records[-1]
    assert record.getMessage() == "domain_event_emitted"
    assert record.event_name == "SubmissionChecked"
    assert record.correlation_id == "corr-4"
    assert record.payload_summary == {"status": "pass"}
