"""Loading of the reference dataset used by conversational filename checks.

The dataset is prepared outside the validators, either from a JSON/YAML file
or from the HTTP validation-data endpoint, and handed over as an immutable
:class:`~audio_gate.domain.models.ReferenceDataset`.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from audio_gate.domain.models import ReferenceDataset

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class ReferenceDataError(ValueError):
    code: str
    message: str

    def __str__(self) -> str:
        return self.message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ReferenceDatasetConfig(BaseModel):
    """Wire shape of the reference dataset (camelCase or snake_case keys)."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    language_codes: list[str] = Field(alias="languageCodes")
    conversations_by_language: dict[str, list[str]] = Field(
        default_factory=dict, alias="conversationsByLanguage"
    )
    contributor_pairs: list[tuple[str, str]] = Field(
        default_factory=list, alias="contributorPairs"
    )

    def to_dataset(self) -> ReferenceDataset:
        return ReferenceDataset.build(
            self.language_codes,
            self.conversations_by_language,
            self.contributor_pairs,
        )


def parse_reference_dataset(payload: Any) -> ReferenceDataset:
    """Validate a decoded payload, unwrapping the ``{"success", "data"}`` envelope."""

    if isinstance(payload, dict) and "data" in payload and "success" in payload:
        if not payload.get("success"):
            error = payload.get("error") or "unknown error"
            raise ReferenceDataError(
                "reference_data_unavailable",
                f"Reference data endpoint reported failure: {error}",
            )
        payload = payload["data"]

    try:
        config = ReferenceDatasetConfig.model_validate(payload)
    except ValidationError as exc:
        raise ReferenceDataError(
            "invalid_reference_data", f"Reference data is malformed: {exc}"
        ) from exc

    dataset = config.to_dataset()
    logger.info(
        "reference_data_loaded",
        extra={
            "language_count": len(dataset.language_codes),
            "contributor_pair_count": len(dataset.contributor_pairs),
        },
    )
    return dataset


def load_reference_dataset(path: Path) -> ReferenceDataset:
    return parse_reference_dataset(_load_data(path))


def fetch_reference_dataset(
    url: str, timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
) -> ReferenceDataset:
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except ValueError as exc:
        raise ReferenceDataError(
            "invalid_reference_data", f"Reference data from {url} is not valid JSON."
        ) from exc
    except requests.RequestException as exc:
        raise ReferenceDataError(
            "reference_data_unavailable", f"Could not fetch reference data from {url}: {exc}"
        ) from exc
    return parse_reference_dataset(payload)


def resolve_reference_dataset(
    source: str, timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS
) -> ReferenceDataset:
    """Load from a URL or a local path depending on the shape of ``source``."""

    if source.startswith(("http://", "https://")):
        return fetch_reference_dataset(source, timeout=timeout)
    return load_reference_dataset(Path(source))


def _load_data(path: Path) -> Any:
    if not path.is_file():
        raise ReferenceDataError("file_not_found", f"Reference data file not found: {path}")

    if path.suffix.lower() in {".yaml", ".yml"}:
        import yaml

        with path.open("r", encoding="utf-8") as handle:
            try:
                return yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ReferenceDataError(
                    "invalid_reference_data", f"Reference data file is not valid YAML: {path}"
                ) from exc

    with path.open("r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ReferenceDataError(
                "invalid_reference_data", f"Reference data file is not valid JSON: {path}"
            ) from exc
