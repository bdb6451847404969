"""Audio header reader.

Reads just enough of a WAV, FLAC or MP3 container to report the technical
properties that submission criteria are checked against. No audio is decoded.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import struct

from audio_gate.domain.models import AudioProperties

WAV_PCM_FORMAT = 1


@dataclass(frozen=True, slots=True)
class AudioHeaderError(ValueError):
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


def read_audio_properties(path: Path) -> AudioProperties:
    if not path.exists() or not path.is_file():
        raise AudioHeaderError("file_not_found", f"Audio file not found: {path}")

    try:
        raw_bytes = path.read_bytes()
    except OSError as exc:
        raise AudioHeaderError("file_unreadable", f"Audio file is unreadable: {path}") from exc

    return read_audio_properties_bytes(raw_bytes, filename=path.name)


def read_audio_properties_bytes(raw_bytes: bytes, *, filename: str | None = None) -> AudioProperties:
    if not raw_bytes:
        raise AudioHeaderError("empty_file", "Audio file is empty.")

    if raw_bytes.startswith(b"RIFF") and raw_bytes[8:12] == b"WAVE":
        return _parse_wav(raw_bytes)
    if raw_bytes.startswith(b"fLaC"):
        return _parse_flac(raw_bytes)
    if raw_bytes.startswith(b"ID3") or raw_bytes[:1] == b"\xFF":
        return _parse_mp3(raw_bytes)

    label = f"'{filename}'" if filename else "input"
    raise AudioHeaderError(
        "unsupported_container", f"Unsupported or unrecognized audio container for {label}."
    )


def wav_file_type(audio_format: int) -> str:
    if audio_format == WAV_PCM_FORMAT:
        return "WAV (PCM)"
    return f"WAV (Compressed - Format {audio_format})"


def _parse_wav(raw_bytes: bytes) -> AudioProperties:
    offset = 12
    sample_rate = 0
    channels = 0
    audio_format = 0
    bits_per_sample = 0
    data_size: int | None = None
    while offset + 8 <= len(raw_bytes):
        chunk_id = raw_bytes[offset : offset + 4]
        chunk_size = int.from_bytes(raw_bytes[offset + 4 : offset + 8], "little")
        chunk_data_start = offset + 8
        chunk_data_end = chunk_data_start + chunk_size
        if chunk_id == b"fmt ":
            if chunk_size < 16 or chunk_data_end > len(raw_bytes):
                raise AudioHeaderError("corrupted_file", "Corrupted WAV fmt chunk.")
            audio_format, channels, sample_rate = struct.unpack(
                "<HHI", raw_bytes[chunk_data_start : chunk_data_start + 8]
            )
            bits_per_sample = struct.unpack(
                "<H", raw_bytes[chunk_data_start + 14 : chunk_data_start + 16]
            )[0]
        elif chunk_id == b"data":
            # Partial downloads truncate the data chunk; the declared size still holds.
            data_size = chunk_size
            break
        elif chunk_data_end > len(raw_bytes):
            raise AudioHeaderError("corrupted_file", "Corrupted WAV file structure.")
        offset = chunk_data_end + (chunk_size % 2)

    if not sample_rate or not channels:
        raise AudioHeaderError("corrupted_file", "Incomplete WAV metadata.")

    bytes_per_second = sample_rate * channels * max(bits_per_sample // 8, 1)
    duration_seconds = None
    if data_size is not None and bytes_per_second:
        duration_seconds = data_size / bytes_per_second

    return AudioProperties(
        file_type=wav_file_type(audio_format),
        sample_rate_hz=sample_rate,
        bit_depth=bits_per_sample or None,
        channels=channels,
        duration_seconds=duration_seconds,
        size_bytes=len(raw_bytes),
    )


def _parse_flac(raw_bytes: bytes) -> AudioProperties:
    if len(raw_bytes) < 42:
        raise AudioHeaderError("corrupted_file", "Corrupted FLAC header.")
    block_header = raw_bytes[4]
    block_type = block_header & 0x7F
    block_len = int.from_bytes(raw_bytes[5:8], "big")
    if block_type != 0 or block_len != 34:
        raise AudioHeaderError("corrupted_file", "Missing FLAC STREAMINFO metadata.")
    stream_info = raw_bytes[8:42]
    packed = int.from_bytes(stream_info[10:18], "big")
    sample_rate = (packed >> 44) & 0xFFFFF
    channels = ((packed >> 41) & 0x7) + 1
    bits_per_sample = ((packed >> 36) & 0x1F) + 1
    total_samples = packed & 0xFFFFFFFFF
    duration_seconds = (total_samples / sample_rate) if sample_rate else None
    return AudioProperties(
        file_type="FLAC",
        sample_rate_hz=sample_rate or None,
        bit_depth=bits_per_sample,
        channels=channels,
        duration_seconds=duration_seconds,
        size_bytes=len(raw_bytes),
    )


def _parse_mp3(raw_bytes: bytes) -> AudioProperties:
    if len(raw_bytes) < 4:
        raise AudioHeaderError("corrupted_file", "Corrupted MP3 header.")

    offset = 0
    if raw_bytes.startswith(b"ID3"):
        if len(raw_bytes) < 10:
            raise AudioHeaderError("corrupted_file", "Corrupted ID3v2 tag.")
        id3_size = (
            ((raw_bytes[6] & 0x7F) << 21)
            | ((raw_bytes[7] & 0x7F) << 14)
            | ((raw_bytes[8] & 0x7F) << 7)
            | (raw_bytes[9] & 0x7F)
        )
        offset = 10 + id3_size
        if raw_bytes[5] & 0x10:
            offset += 10

    search_end = min(len(raw_bytes) - 4, offset + 8192)
    header = None
    header_offset = offset
    while header_offset <= search_end:
        if raw_bytes[header_offset] == 0xFF and (raw_bytes[header_offset + 1] & 0xE0) == 0xE0:
            candidate = int.from_bytes(raw_bytes[header_offset : header_offset + 4], "big")
            version_id = (candidate >> 19) & 0x3
            layer = (candidate >> 17) & 0x3
            bitrate_idx = (candidate >> 12) & 0xF
            sample_idx = (candidate >> 10) & 0x3
            if version_id != 0x1 and layer != 0x0 and bitrate_idx not in (0, 0xF) and sample_idx != 0x3:
                header = candidate
                break
        header_offset += 1

    if header is None:
        raise AudioHeaderError("no_valid_frame", "No valid MP3 frame header found.")

    version_id = (header >> 19) & 0x3
    layer = (header >> 17) & 0x3
    bitrate_idx = (header >> 12) & 0xF
    sample_idx = (header >> 10) & 0x3
    channel_mode = (header >> 6) & 0x3
    if version_id != 0x3 or layer != 0x1:
        raise AudioHeaderError("unsupported_codec", "Only MPEG-1 Layer III (MP3) is supported.")
    bitrates = [0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 0]
    sample_rates = [44100, 48000, 32000, 0]
    bitrate_kbps = bitrates[bitrate_idx]
    sample_rate = sample_rates[sample_idx]
    channels = 1 if channel_mode == 0x3 else 2
    duration_seconds = (len(raw_bytes) * 8) / (bitrate_kbps * 1000)
    return AudioProperties(
        file_type="MP3",
        sample_rate_hz=sample_rate,
        bit_depth=None,
        channels=channels,
        duration_seconds=duration_seconds,
        size_bytes=len(raw_bytes),
    )
