"""Per-project acceptance presets."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from audio_gate.criteria import AudioCriteria
from audio_gate.options import FilenameRule


@dataclass(frozen=True, slots=True)
class Preset:
    preset_id: str
    name: str
    criteria: AudioCriteria
    filename_rule: FilenameRule | None = None


class UnknownPresetError(KeyError):
    """Raised when a preset id is not in the catalogue."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Unknown preset"


def _wav(
    sample_rates: list[int],
    bit_depths: list[int],
    channels: list[int],
    min_duration_seconds: float | None = None,
) -> AudioCriteria:
    return AudioCriteria(
        file_types=["wav"],
        sample_rates=sample_rates,
        bit_depths=bit_depths,
        channels=channels,
        min_duration_seconds=min_duration_seconds,
    )


_PRESETS = (
    Preset("auditions-character-recordings", "Auditions: Character Recordings", _wav([48000], [24], [1], 120)),
    Preset("auditions-studio-ai", "Auditions: Studio AI", _wav([48000], [24], [1], 120)),
    Preset("auditions-bilingual-partner", "Auditions: Bilingual Partner", _wav([48000], [24], [1], 150)),
    Preset("auditions-emotional-voice", "Auditions: Emotional Voice", _wav([48000], [16, 24], [1, 2], 5)),
    Preset("character-recordings", "Character Recordings", _wav([48000], [24], [1])),
    Preset("p2b2-pairs-mono", "P2B2 Pairs (Mono)", _wav([44100, 48000], [16, 24], [1])),
    Preset("p2b2-pairs-stereo", "P2B2 Pairs (Stereo)", _wav([44100, 48000], [16, 24], [2])),
    Preset("p2b2-pairs-mixed", "P2B2 Pairs (Mixed)", _wav([44100, 48000], [16, 24], [1, 2])),
    Preset("three-hour", "Three Hour", _wav([48000], [24], [1]), FilenameRule.SCRIPT_MATCH),
    Preset(
        "bilingual-conversational",
        "Bilingual Conversational",
        _wav([48000], [16, 24], [2]),
        FilenameRule.BILINGUAL_PATTERN,
    ),
    Preset("custom", "Custom", AudioCriteria()),
)

PRESETS = MappingProxyType({preset.preset_id: preset for preset in _PRESETS})
DEFAULT_PRESET_ID = "bilingual-conversational"


def get_preset(preset_id: str) -> Preset:
    """Look up a preset case-insensitively."""

    normalized = preset_id.strip().lower()
    if normalized in PRESETS:
        return PRESETS[normalized]
    allowed = ", ".join(PRESETS)
    raise UnknownPresetError(f"Unknown preset: '{preset_id}'. Allowed values: {allowed}.")


def with_criteria(preset: Preset, criteria: AudioCriteria) -> Preset:
    """Return ``preset`` with its technical criteria replaced."""

    return Preset(preset.preset_id, preset.name, criteria, preset.filename_rule)
