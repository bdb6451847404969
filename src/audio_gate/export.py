"""CSV and JSON export of per-file reports."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
import csv
import json
from typing import Any, Sequence

from audio_gate.domain.models import CheckStatus, FileReport

NOT_AVAILABLE = "N/A"
NO_ISSUES = "—"


class ExportMode(str, Enum):
    STANDARD = "standard"
    METADATA_ONLY = "metadata-only"


_BASE_HEADERS = ["Filename", "Status"]
_STANDARD_HEADERS = _BASE_HEADERS + [
    "File Type",
    "Sample Rate (Hz)",
    "Bit Depth",
    "Channels",
    "Duration (s)",
    "File Size (Bytes)",
    "Expected Filename",
    "Issues",
]
_METADATA_HEADERS = _BASE_HEADERS + ["Error Details"]


def format_number(value: float | int | None, precision: int = 2) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{precision}f}"


def headers_for(mode: ExportMode) -> list[str]:
    if mode is ExportMode.METADATA_ONLY:
        return list(_METADATA_HEADERS)
    return list(_STANDARD_HEADERS)


def _issue_summary(report: FileReport) -> str:
    issues = [
        f"{name}: {issue}".replace("\n", "; ")
        for name, issue in report.issues_by_field().items()
    ]
    return "; ".join(issues) or NO_ISSUES


def report_row(report: FileReport, mode: ExportMode) -> list[str]:
    row = [report.filename, report.status.value]
    if mode is ExportMode.METADATA_ONLY:
        return row + [_issue_summary(report)]

    properties = report.properties
    verdict = report.filename_verdict
    return row + [
        properties.file_type if properties else "Unknown",
        format_number(properties.sample_rate_hz if properties else None, 0),
        format_number(properties.bit_depth if properties else None, 0),
        format_number(properties.channels if properties else None, 0),
        format_number(properties.duration_seconds if properties else None),
        format_number(properties.size_bytes if properties else None, 0),
        verdict.expected_format if verdict else NOT_AVAILABLE,
        _issue_summary(report),
    ]


def report_rows(reports: Sequence[FileReport], mode: ExportMode = ExportMode.STANDARD) -> list[list[str]]:
    """Header row followed by one row per report."""

    return [headers_for(mode)] + [report_row(report, mode) for report in reports]


def export_stats(reports: Sequence[FileReport]) -> dict[str, int]:
    return {
        "total": len(reports),
        "pass": sum(1 for report in reports if report.status is CheckStatus.PASS),
        "warning": sum(1 for report in reports if report.status is CheckStatus.WARNING),
        "fail": sum(1 for report in reports if report.status is CheckStatus.FAIL and not report.error),
        "error": sum(1 for report in reports if report.error),
    }


def write_csv(reports: Sequence[FileReport], path: Path, mode: ExportMode = ExportMode.STANDARD) -> Path:
    if not reports:
        raise ValueError("No results available to export.")

    path.parent.mkdir(parents=True, exist_ok=True)
    # utf-8-sig writes a BOM so spreadsheet tools detect the encoding.
    with path.open("w", newline="", encoding="utf-8-sig") as handle:
        writer = csv.writer(handle)
        writer.writerows(report_rows(reports, mode))
    return path


def reports_payload(reports: Sequence[FileReport]) -> dict[str, Any]:
    return {
        "summary": export_stats(reports),
        "results": [report.as_dict() for report in reports],
    }


def write_json(reports: Sequence[FileReport], path: Path) -> Path:
    if not reports:
        raise ValueError("No results available to export.")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(reports_payload(reports), indent=2), encoding="utf-8")
    return path
