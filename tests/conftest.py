import io
import json
import wave

import pytest

from audio_gate.domain.models import ReferenceDataset
from audio_gate.settings import load_settings

REFERENCE_PAYLOAD = {
    "languageCodes": ["en", "es", "zh_tw"],
    "conversationsByLanguage": {
        "en": ["conv1", "greeting-01"],
        "es": ["conv1", "conv2"],
    },
    "contributorPairs": [["u1", "a1"], ["1", "2"]],
}


@pytest.fixture
def reference_payload():
    return json.loads(json.dumps(REFERENCE_PAYLOAD))


@pytest.fixture
def dataset():
    return ReferenceDataset.build(
        REFERENCE_PAYLOAD["languageCodes"],
        REFERENCE_PAYLOAD["conversationsByLanguage"],
        REFERENCE_PAYLOAD["contributorPairs"],
    )


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "reference.json"
    path.write_text(json.dumps(REFERENCE_PAYLOAD), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    for name in (
        "AUDIO_GATE_REFERENCE_DATA",
        "AUDIO_GATE_SCRIPTS_DIR",
        "AUDIO_GATE_SPEAKER_ID",
        "AUDIO_GATE_PRESET",
        "AUDIO_GATE_HTTP_TIMEOUT",
        "AUDIO_GATE_CONCURRENCY",
        "AUDIO_GATE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


def make_wav_bytes(
    *,
    duration_seconds: float = 1.0,
    sample_rate: int = 48_000,
    channels: int = 2,
    sample_width: int = 2,
) -> bytes:
    frames = int(duration_seconds * sample_rate)
    with io.BytesIO() as buffer:
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(channels)
            wav.setsampwidth(sample_width)
            wav.setframerate(sample_rate)
            wav.writeframes(b"\x00" * sample_width * channels * frames)
        return buffer.getvalue()


@pytest.fixture
def wav_factory():
    return make_wav_bytes
