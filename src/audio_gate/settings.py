"""Runtime settings loaded from the environment."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from audio_gate.presets import DEFAULT_PRESET_ID
from audio_gate.reference_data import DEFAULT_HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class AppSettings:
    """Runtime configuration shared by the CLI and the HTTP API."""

    reference_data: str | None
    scripts_dir: str | None
    speaker_id: str | None
    preset_id: str
    http_timeout_seconds: float
    concurrency_limit: int
    log_level: str


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    """Load settings from ``AUDIO_GATE_*`` environment variables."""

    return AppSettings(
        reference_data=os.getenv("AUDIO_GATE_REFERENCE_DATA") or None,
        scripts_dir=os.getenv("AUDIO_GATE_SCRIPTS_DIR") or None,
        speaker_id=os.getenv("AUDIO_GATE_SPEAKER_ID") or None,
        preset_id=os.getenv("AUDIO_GATE_PRESET", DEFAULT_PRESET_ID),
        http_timeout_seconds=float(
            os.getenv("AUDIO_GATE_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT_SECONDS))
        ),
        concurrency_limit=max(1, int(os.getenv("AUDIO_GATE_CONCURRENCY", "4"))),
        log_level=os.getenv("AUDIO_GATE_LOG_LEVEL", "INFO").upper(),
    )
