from __future__ import annotations

import json
from pathlib import Path

import pytest

from audio_gate.application.check_service import CheckSubmission
from audio_gate.domain.models import CheckStatus
from audio_gate.interfaces import cli_handlers
from audio_gate.options import FilenameRule
from audio_gate.presets import get_preset


def test_check_single_filename_conversational(dataset_file: Path) -> None:
    verdict = cli_handlers.check_single_filename(
        "conv1-en-user-1-agent-2.wav",
        FilenameRule.BILINGUAL_PATTERN,
        reference_data=str(dataset_file),
    )

    assert verdict.passed


def test_check_single_filename_requires_dataset() -> None:
    with pytest.raises(ValueError, match="--dataset"):
        cli_handlers.check_single_filename("x.wav", FilenameRule.BILINGUAL_PATTERN)


def test_check_single_filename_script_match(tmp_path: Path) -> None:
    (tmp_path / "intro.txt").write_text("Hello", encoding="utf-8")

    verdict = cli_handlers.check_single_filename(
        "intro_spk1.wav",
        FilenameRule.SCRIPT_MATCH,
        scripts_dir=tmp_path,
        speaker_id="spk1",
    )

    assert verdict.passed


def test_check_single_filename_script_match_requires_speaker(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="--speaker-id"):
        cli_handlers.check_single_filename("intro_spk1.wav", FilenameRule.SCRIPT_MATCH, scripts_dir=tmp_path)


def test_build_check_service_applies_criteria_override(tmp_path: Path) -> None:
    criteria_path = tmp_path / "criteria.json"
    criteria_path.write_text(json.dumps({"channels": [2]}), encoding="utf-8")
    (tmp_path / "intro.txt").write_text("Hello", encoding="utf-8")

    service = cli_handlers.build_check_service(
        "three-hour", scripts_dir=tmp_path, speaker_id="spk1", criteria_file=criteria_path
    )

    assert service.preset.criteria.channels == [2]
    assert service.script_base_names == ("intro",)
    assert service.dataset is None


def test_build_check_service_loads_dataset(dataset_file: Path) -> None:
    service = cli_handlers.build_check_service("bilingual-conversational", reference_data=str(dataset_file))

    assert service.dataset is not None and service.dataset.has_language("en")


def test_build_check_service_requires_dataset_for_conversational_presets() -> None:
    with pytest.raises(ValueError, match="requires --dataset"):
        cli_handlers.build_check_service("bilingual-conversational")


def test_collect_paths_scans_directory(tmp_path: Path) -> None:
    (tmp_path / "b.wav").write_bytes(b"")
    (tmp_path / "a.wav").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    collected = cli_handlers.collect_paths([Path("explicit.wav")], directory=tmp_path)

    assert collected == [Path("explicit.wav"), tmp_path / "a.wav", tmp_path / "b.wav"]


def test_collect_paths_requires_inputs(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No input files"):
        cli_handlers.collect_paths([], directory=tmp_path)
    with pytest.raises(ValueError, match="Directory not found"):
        cli_handlers.collect_paths([], directory=tmp_path / "missing")


def test_run_batch_check_preserves_order_and_counts(tmp_path: Path, dataset, wav_factory) -> None:
    good = tmp_path / "conv1-en-user-1-agent-2.wav"
    good.write_bytes(wav_factory(duration_seconds=0.1))
    mono = tmp_path / "conv2-es-user-u1-agent-a1.wav"
    mono.write_bytes(wav_factory(duration_seconds=0.1, channels=1))
    empty = tmp_path / "conv1-es-user-1-agent-2.wav"
    empty.write_bytes(b"")

    service = CheckSubmission(dataset=dataset)
    reports, summary = cli_handlers.run_batch_check([good, mono, empty], service, concurrency_limit=2)

    assert [report.filename for report in reports] == [good.name, mono.name, empty.name]
    assert [report.status for report in reports] == [CheckStatus.PASS, CheckStatus.FAIL, CheckStatus.FAIL]
    assert reports[1].criteria["channels"].issue == "Channel count 1 is not one of: 2"
    assert reports[2].error == "Audio file is empty."
    assert summary == {"total": 3, "pass": 1, "warning": 0, "fail": 1, "error": 1}


def test_run_batch_check_turns_unexpected_errors_into_reports(tmp_path: Path) -> None:
    class ExplodingService:
        def check_path(self, path, correlation_id=None, filename_only=False):
            raise RuntimeError("boom")

    reports, summary = cli_handlers.run_batch_check([tmp_path / "a.wav"], ExplodingService())

    assert reports[0].status is CheckStatus.FAIL
    assert reports[0].error == "boom"
    assert summary["error"] == 1


def test_run_batch_check_filename_only(tmp_path: Path) -> None:
    service = CheckSubmission(
        preset=get_preset("three-hour"), script_base_names=("intro",), speaker_id="spk1"
    )

    reports, _ = cli_handlers.run_batch_check(
        [tmp_path / "intro_spk1.wav", tmp_path / "outro_spk1.wav"], service, filename_only=True
    )

    assert [report.status for report in reports] == [CheckStatus.PASS, CheckStatus.FAIL]
    assert all(report.properties is None for report in reports)
