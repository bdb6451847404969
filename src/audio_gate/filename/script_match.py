"""Script + speaker filename validation.

Recordings of a scripted session are named ``<scriptBaseName>_<speakerId>.wav``
where the base name must match one of the script files for the project.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Collection

from audio_gate.domain.models import ValidationVerdict, VerdictStatus
from audio_gate.filename.base import UNAVAILABLE_FORMAT

_WAV_SUFFIX = re.compile(r"\.wav\Z", re.IGNORECASE)
SCRIPT_SUFFIX = ".txt"


def validate_script_match(
    filename: str, script_base_names: Collection[str], speaker_id: str
) -> ValidationVerdict:
    """Check that ``filename`` is the canonical recording name for a known script."""

    name_without_ext = _WAV_SUFFIX.sub("", filename, count=1)

    # Leftmost split: a base name that itself contains ``_<speakerId>`` is cut short.
    candidate_base = name_without_ext.split(f"_{speaker_id}", 1)[0]

    if candidate_base not in script_base_names:
        return ValidationVerdict(
            status=VerdictStatus.FAIL,
            expected_format=UNAVAILABLE_FORMAT,
            issues=("No matching script file found",),
        )

    expected_name = f"{candidate_base}_{speaker_id}.wav"
    if filename == expected_name:
        return ValidationVerdict(status=VerdictStatus.PASS, expected_format=expected_name)

    return ValidationVerdict(
        status=VerdictStatus.FAIL,
        expected_format=expected_name,
        issues=("Incorrect filename for existing script",),
    )


def script_base_names_from_dir(directory: Path) -> list[str]:
    """Return the base names of the ``.txt`` script files in ``directory``."""

    if not directory.is_dir():
        raise FileNotFoundError(f"Scripts directory not found: {directory}")

    return sorted(
        path.stem
        for path in directory.iterdir()
        if path.is_file() and path.suffix.lower() == SCRIPT_SUFFIX
    )
