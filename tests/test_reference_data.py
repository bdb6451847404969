from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests
import yaml

from audio_gate.reference_data import (
    ReferenceDataError,
    fetch_reference_dataset,
    load_reference_dataset,
    parse_reference_dataset,
    resolve_reference_dataset,
)


class FakeResponse:
    def __init__(self, payload=None, *, status_error: Exception | None = None, json_error: bool = False) -> None:
        self._payload = payload
        self._status_error = status_error
        self._json_error = json_error

    def raise_for_status(self) -> None:
        if self._status_error is not None:
            raise self._status_error

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value")
        return self._payload


def test_parse_accepts_camel_case_payload(reference_payload) -> None:
    dataset = parse_reference_dataset(reference_payload)

    assert dataset.has_language("zh_tw")
    assert dataset.conversations_for("en") == frozenset({"conv1", "greeting-01"})
    assert dataset.conversations_for("zh_tw") == frozenset()
    assert dataset.has_contributor_pair("a1", "u1")


def test_parse_accepts_snake_case_keys_and_numeric_ids() -> None:
    dataset = parse_reference_dataset(
        {
            "language_codes": ["en"],
            "conversations_by_language": {"en": ["conv1"]},
            "contributor_pairs": [[1, 2]],
        }
    )

    assert dataset.has_contributor_pair("1", "2")
    assert dataset.has_contributor_pair("2", "1")


def test_parse_unwraps_success_envelope(reference_payload) -> None:
    dataset = parse_reference_dataset({"success": True, "data": reference_payload})

    assert dataset.has_language("es")


def test_parse_rejects_failed_envelope() -> None:
    with pytest.raises(ReferenceDataError) as exc_info:
        parse_reference_dataset({"success": False, "data": None, "error": "sheet offline"})

    assert exc_info.value.code == "reference_data_unavailable"
    assert "sheet offline" in str(exc_info.value)


def test_parse_rejects_malformed_contributor_pair(reference_payload) -> None:
    reference_payload["contributorPairs"] = [["u1"]]

    with pytest.raises(ReferenceDataError) as exc_info:
        parse_reference_dataset(reference_payload)

    assert exc_info.value.code == "invalid_reference_data"
    assert exc_info.value.as_dict()["code"] == "invalid_reference_data"


def test_parse_requires_language_codes() -> None:
    with pytest.raises(ReferenceDataError, match="malformed"):
        parse_reference_dataset({"contributorPairs": []})


def test_load_reads_json_file(dataset_file: Path) -> None:
    assert load_reference_dataset(dataset_file).has_language("en")


def test_load_reads_yaml_file(tmp_path: Path, reference_payload) -> None:
    path = tmp_path / "reference.yaml"
    path.write_text(yaml.safe_dump(reference_payload), encoding="utf-8")

    dataset = load_reference_dataset(path)

    assert dataset.conversations_for("es") == frozenset({"conv1", "conv2"})


def test_load_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ReferenceDataError) as exc_info:
        load_reference_dataset(tmp_path / "missing.json")

    assert exc_info.value.code == "file_not_found"


def test_load_reports_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ReferenceDataError) as exc_info:
        load_reference_dataset(path)

    assert exc_info.value.code == "invalid_reference_data"


def test_fetch_uses_timeout_and_parses_envelope(monkeypatch, reference_payload) -> None:
    captured = {}

    def fake_get(url, timeout):
        captured["url"] = url
        captured["timeout"] = timeout
        return FakeResponse({"success": True, "data": reference_payload})

    monkeypatch.setattr("audio_gate.reference_data.requests.get", fake_get)

    dataset = fetch_reference_dataset("https://example.test/validation-data", timeout=3.5)

    assert dataset.has_language("en")
    assert captured == {"url": "https://example.test/validation-data", "timeout": 3.5}


def test_fetch_maps_http_errors(monkeypatch) -> None:
    monkeypatch.setattr(
        "audio_gate.reference_data.requests.get",
        lambda url, timeout: FakeResponse(status_error=requests.HTTPError("500 Server Error")),
    )

    with pytest.raises(ReferenceDataError) as exc_info:
        fetch_reference_dataset("https://example.test/validation-data")

    assert exc_info.value.code == "reference_data_unavailable"


def test_fetch_maps_connection_errors(monkeypatch) -> None:
    def fake_get(url, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr("audio_gate.reference_data.requests.get", fake_get)

    with pytest.raises(ReferenceDataError) as exc_info:
        fetch_reference_dataset("http://localhost:9/validation-data")

    assert exc_info.value.code == "reference_data_unavailable"


def test_fetch_maps_non_json_body(monkeypatch) -> None:
    monkeypatch.setattr(
        "audio_gate.reference_data.requests.get",
        lambda url, timeout: FakeResponse(json_error=True),
    )

    with pytest.raises(ReferenceDataError) as exc_info:
        fetch_reference_dataset("https://example.test/validation-data")

    assert exc_info.value.code == "invalid_reference_data"


def test_resolve_dispatches_on_source_shape(monkeypatch, dataset_file: Path, reference_payload) -> None:
    monkeypatch.setattr(
        "audio_gate.reference_data.requests.get",
        lambda url, timeout: FakeResponse(reference_payload),
    )

    assert resolve_reference_dataset("https://example.test/data").has_language("en")
    assert resolve_reference_dataset(str(dataset_file)).has_language("en")


def test_loaded_dataset_matches_file_contents(dataset_file: Path) -> None:
    raw = json.loads(dataset_file.read_text(encoding="utf-8"))
    dataset = load_reference_dataset(dataset_file)

    assert dataset.language_codes == frozenset(raw["languageCodes"])
    assert len(dataset.contributor_pairs) == len(raw["contributorPairs"])
