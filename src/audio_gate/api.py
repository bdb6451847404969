"""FastAPI interface for Audio Gate."""

from uuid import uuid4

from fastapi import FastAPI, File, Header, HTTPException, Query, UploadFile
from pydantic import BaseModel

from .domain.models import ReferenceDataset
from .filename import validate_conversational, validate_script_match
from .interfaces.api_handlers import (
    ReferenceDataError,
    build_check_service,
    get_reference_dataset,
    get_script_base_names,
)
from .options import FilenameRule, enum_values, parse_case_insensitive_enum
from .presets import PRESETS, UnknownPresetError, get_preset
from .settings import load_settings

app = FastAPI(title="Audio Gate API", version="0.1.0")


class FilenameValidationRequest(BaseModel):
    filename: str
    rule: str = FilenameRule.BILINGUAL_PATTERN.value
    speaker_id: str | None = None
    script_base_names: list[str] | None = None


def _reference_dataset_or_503() -> ReferenceDataset:
    try:
        return get_reference_dataset()
    except ReferenceDataError as error:
        raise HTTPException(
            status_code=503,
            detail={"code": "reference_data_unavailable", "message": error.message},
        ) from error


def _script_base_names_or_503() -> tuple[str, ...]:
    try:
        return get_script_base_names()
    except FileNotFoundError as error:
        raise HTTPException(
            status_code=503,
            detail={"code": "scripts_unavailable", "message": str(error)},
        ) from error


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""

    return {"status": "ok"}


@app.get("/presets")
def presets() -> list[dict[str, str | None]]:
    return [
        {
            "preset_id": preset.preset_id,
            "name": preset.name,
            "filename_rule": preset.filename_rule.value if preset.filename_rule else None,
        }
        for preset in PRESETS.values()
    ]


@app.post("/filenames/validate")
def validate_filename(request: FilenameValidationRequest) -> dict:
    """Validate one filename and return every issue found."""

    try:
        rule = parse_case_insensitive_enum(request.rule, FilenameRule)
    except ValueError as error:
        raise HTTPException(
            status_code=400,
            detail={
                "code": "invalid_parameter",
                "message": str(error),
                "parameter": "rule",
                "allowed_values": list(enum_values(FilenameRule)),
            },
        ) from error

    if rule is FilenameRule.BILINGUAL_PATTERN:
        verdict = validate_conversational(request.filename, _reference_dataset_or_503())
        return verdict.as_dict()

    script_base_names = request.script_base_names
    if script_base_names is None:
        script_base_names = list(_script_base_names_or_503())
    speaker_id = request.speaker_id or load_settings().speaker_id
    if not script_base_names or not speaker_id:
        raise HTTPException(
            status_code=400,
            detail={
                "code": "missing_configuration",
                "message": "script-match validation requires script base names and a speaker id.",
            },
        )
    return validate_script_match(request.filename, script_base_names, speaker_id).as_dict()


@app.post("/check")
async def check(
    file: UploadFile = File(..., description="Submitted audio file"),
    preset: str | None = Query(None, description="Preset id; defaults to AUDIO_GATE_PRESET."),
    speaker_id: str | None = Query(None, description="Expected speaker id for script-match presets."),
    filename_only: bool = Query(False, description="Check only the filename."),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> dict:
    """Check an uploaded file against a preset and return the per-file report."""

    settings = load_settings()
    try:
        selected = get_preset(preset or settings.preset_id)
    except UnknownPresetError as error:
        raise HTTPException(
            status_code=400,
            detail={
                "code": "invalid_parameter",
                "message": str(error),
                "parameter": "preset",
                "allowed_values": list(PRESETS),
            },
        ) from error

    dataset = None
    script_base_names: tuple[str, ...] = ()
    if selected.filename_rule is FilenameRule.BILINGUAL_PATTERN:
        dataset = _reference_dataset_or_503()
    elif selected.filename_rule is FilenameRule.SCRIPT_MATCH:
        script_base_names = _script_base_names_or_503()

    service = build_check_service(
        selected, dataset, script_base_names, speaker_id or settings.speaker_id
    )
    filename = file.filename or "unknown"
    correlation_id = x_correlation_id or str(uuid4())

    if filename_only:
        report = service.check_filename(filename, correlation_id=correlation_id)
    else:
        raw_bytes = await file.read()
        report = service.check_bytes(raw_bytes, filename, correlation_id=correlation_id)

    payload = report.as_dict()
    payload["correlation_id"] = correlation_id
    return payload
