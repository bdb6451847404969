"""API-facing handlers that delegate to application services."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from audio_gate.application.check_service import CheckSubmission
from audio_gate.domain.models import ReferenceDataset
from audio_gate.filename import script_base_names_from_dir
from audio_gate.infrastructure.logging_event_publisher import LoggingEventPublisher
from audio_gate.presets import Preset
from audio_gate.reference_data import ReferenceDataError, resolve_reference_dataset
from audio_gate.settings import load_settings

_event_publisher = LoggingEventPublisher()


@lru_cache(maxsize=1)
def get_reference_dataset() -> ReferenceDataset:
    """Load the configured reference dataset once per process."""

    settings = load_settings()
    if not settings.reference_data:
        raise ReferenceDataError(
            "reference_data_unavailable", "AUDIO_GATE_REFERENCE_DATA is not configured."
        )
    return resolve_reference_dataset(settings.reference_data, timeout=settings.http_timeout_seconds)


def get_script_base_names() -> tuple[str, ...]:
    settings = load_settings()
    if not settings.scripts_dir:
        return ()
    return tuple(script_base_names_from_dir(Path(settings.scripts_dir)))


def build_check_service(
    preset: Preset,
    dataset: ReferenceDataset | None,
    script_base_names: tuple[str, ...],
    speaker_id: str | None,
) -> CheckSubmission:
    return CheckSubmission(
        preset=preset,
        dataset=dataset,
        script_base_names=script_base_names,
        speaker_id=speaker_id,
        event_publisher=_event_publisher,
    )


__all__ = [
    "ReferenceDataError",
    "build_check_service",
    "get_reference_dataset",
    "get_script_base_names",
]
