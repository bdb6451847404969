"""CLI interface for Audio Gate."""

import json
import logging
from pathlib import Path
from typing import NoReturn

import typer

from .domain.models import CheckStatus
from .export import ExportMode, write_csv, write_json
from .interfaces.cli_handlers import (
    build_check_service,
    check_single_filename,
    collect_paths,
    run_batch_check,
)
from .options import FilenameRule
from .presets import PRESETS, UnknownPresetError
from .reference_data import ReferenceDataError
from .settings import load_settings

app = typer.Typer(help="Audio Gate submission checker")


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=2)


@app.callback()
def configure(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level (defaults to AUDIO_GATE_LOG_LEVEL)."
    ),
) -> None:
    """Check audio submissions against project acceptance rules."""

    level = (log_level or load_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO))


@app.command("check-name")
def check_name_command(
    filename: str = typer.Argument(..., help="Filename to validate (not a path)."),
    rule: FilenameRule = typer.Option(
        FilenameRule.BILINGUAL_PATTERN,
        "--rule",
        case_sensitive=False,
        help="Filename grammar: bilingual-pattern or script-match.",
    ),
    dataset: str | None = typer.Option(
        None, "--dataset", help="Reference data file or URL for bilingual-pattern."
    ),
    scripts_dir: Path | None = typer.Option(
        None, "--scripts-dir", help="Directory of .txt scripts for script-match."
    ),
    speaker_id: str | None = typer.Option(
        None, "--speaker-id", help="Expected speaker id for script-match."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the verdict as JSON."),
) -> None:
    """Validate a single filename and list every issue found."""

    settings = load_settings()
    try:
        verdict = check_single_filename(
            filename,
            rule,
            reference_data=dataset or settings.reference_data,
            scripts_dir=scripts_dir or (Path(settings.scripts_dir) if settings.scripts_dir else None),
            speaker_id=speaker_id or settings.speaker_id,
            http_timeout=settings.http_timeout_seconds,
        )
    except (ReferenceDataError, FileNotFoundError, ValueError) as error:
        _fail(str(error))

    if as_json:
        typer.echo(json.dumps(verdict.as_dict(), indent=2))
    else:
        typer.echo(f"[{verdict.status.value.upper()}] {filename}")
        typer.echo(f"Expected: {verdict.expected_format}")
        for issue in verdict.issues:
            typer.echo(f"  - {issue}")

    if not verdict.passed:
        raise typer.Exit(code=1)


@app.command("check-files")
def check_files_command(
    paths: list[Path] | None = typer.Argument(None, help="Audio files to check."),
    directory: Path | None = typer.Option(
        None, "--directory", "-d", help="Directory to scan for audio files."
    ),
    pattern: str = typer.Option("*.wav", "--pattern", help="Glob used with --directory."),
    preset: str | None = typer.Option(
        None, "--preset", "-p", help="Preset id (defaults to AUDIO_GATE_PRESET)."
    ),
    dataset: str | None = typer.Option(
        None, "--dataset", help="Reference data file or URL for bilingual-pattern presets."
    ),
    scripts_dir: Path | None = typer.Option(
        None, "--scripts-dir", help="Directory of .txt scripts for script-match presets."
    ),
    speaker_id: str | None = typer.Option(None, "--speaker-id", help="Expected speaker id."),
    criteria_file: Path | None = typer.Option(
        None, "--criteria", help="JSON/YAML file overriding the preset's technical criteria."
    ),
    filename_only: bool = typer.Option(
        False, "--filename-only", help="Skip header parsing and check filenames only."
    ),
    csv_path: Path | None = typer.Option(None, "--csv", help="Write a CSV report."),
    json_path: Path | None = typer.Option(None, "--json", help="Write a JSON report."),
    export_mode: ExportMode = typer.Option(
        ExportMode.STANDARD, "--export-mode", case_sensitive=False, help="CSV layout."
    ),
    concurrency_limit: int | None = typer.Option(
        None, "--concurrency-limit", min=1, help="Maximum number of files checked at once."
    ),
) -> None:
    """Check a batch of files against a preset."""

    settings = load_settings()
    try:
        service = build_check_service(
            preset or settings.preset_id,
            reference_data=dataset or settings.reference_data,
            scripts_dir=scripts_dir or (Path(settings.scripts_dir) if settings.scripts_dir else None),
            speaker_id=speaker_id or settings.speaker_id,
            criteria_file=criteria_file,
            http_timeout=settings.http_timeout_seconds,
        )
        inputs = collect_paths(paths or [], directory=directory, pattern=pattern)
    except (ReferenceDataError, UnknownPresetError, FileNotFoundError, ValueError) as error:
        _fail(str(error))

    reports, summary = run_batch_check(
        inputs,
        service,
        concurrency_limit=concurrency_limit or settings.concurrency_limit,
        filename_only=filename_only,
    )

    for report in reports:
        typer.echo(f"[{report.status.value.upper()}] {report.filename}")
        for name, issue in report.issues_by_field().items():
            for line in issue.splitlines():
                typer.echo(f"  - {name}: {line}")

    if csv_path is not None:
        typer.echo(f"CSV report written to: {write_csv(reports, csv_path, mode=export_mode)}")
    if json_path is not None:
        typer.echo(f"JSON report written to: {write_json(reports, json_path)}")

    typer.echo(
        "Summary: "
        f"total={summary['total']} "
        f"pass={summary['pass']} "
        f"warning={summary['warning']} "
        f"fail={summary['fail']} "
        f"error={summary['error']}"
    )

    if any(report.status is CheckStatus.FAIL for report in reports):
        raise typer.Exit(code=1)


@app.command("presets")
def presets_command() -> None:
    """List the available presets."""

    for preset in PRESETS.values():
        rule = preset.filename_rule.value if preset.filename_rule else "-"
        typer.echo(f"{preset.preset_id}\t{preset.name}\tfilename-rule={rule}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
