"""Domain models for submission checks and filename verdicts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping


class VerdictStatus(str, Enum):
    """Outcome of a single filename validation."""

    PASS = "pass"
    FAIL = "fail"


class CheckStatus(str, Enum):
    """Outcome of a technical criterion or of an aggregated file check."""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class ValidationVerdict:
    """Pass/fail outcome plus diagnostics for one filename."""

    status: VerdictStatus
    expected_format: str
    issues: tuple[str, ...] = ()
    is_spontaneous: bool | None = None

    @property
    def passed(self) -> bool:
        return self.status is VerdictStatus.PASS

    @property
    def issue(self) -> str:
        """All issues as one newline-separated message."""

        return "\n".join(self.issues)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "status": self.status.value,
            "expected_format": self.expected_format,
            "issues": list(self.issues),
        }
        if self.is_spontaneous is not None:
            payload["is_spontaneous"] = self.is_spontaneous
        return payload


@dataclass(frozen=True, slots=True)
class ReferenceDataset:
    """Read-only lookup of valid language codes, conversations and contributor pairs.

    Instances are built once by a loader and shared across any number of
    validation calls. None of the collections can be mutated after construction.
    """

    language_codes: frozenset[str]
    conversations_by_language: Mapping[str, frozenset[str]]
    contributor_pairs: frozenset[frozenset[str]]

    @classmethod
    def build(
        cls,
        language_codes: Iterable[str],
        conversations_by_language: Mapping[str, Iterable[str]],
        contributor_pairs: Iterable[Iterable[str]],
    ) -> "ReferenceDataset":
        conversations = {
            code: frozenset(conversation_ids)
            for code, conversation_ids in conversations_by_language.items()
        }
        return cls(
            language_codes=frozenset(language_codes),
            conversations_by_language=MappingProxyType(conversations),
            contributor_pairs=frozenset(frozenset(pair) for pair in contributor_pairs),
        )

    def has_language(self, language_code: str) -> bool:
        return language_code in self.language_codes

    def conversations_for(self, language_code: str) -> frozenset[str]:
        return self.conversations_by_language.get(language_code, frozenset())

    def has_contributor_pair(self, user_id: str, agent_id: str) -> bool:
        """Order-independent membership test for a (user, agent) pairing."""

        return frozenset((user_id, agent_id)) in self.contributor_pairs


@dataclass(frozen=True, slots=True)
class AudioProperties:
    """Technical properties read from an audio file header."""

    file_type: str
    sample_rate_hz: int | None
    bit_depth: int | None
    channels: int | None
    duration_seconds: float | None
    size_bytes: int


@dataclass(frozen=True, slots=True)
class CriterionResult:
    """Result of checking one technical property against its target."""

    status: CheckStatus
    target: Any
    actual: Any
    issue: str = ""

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "target": self.target,
            "actual": self.actual,
            "issue": self.issue,
        }


@dataclass(frozen=True, slots=True)
class FileReport:
    """Combined per-file outcome consumed by export and display."""

    filename: str
    status: CheckStatus
    properties: AudioProperties | None = None
    criteria: Mapping[str, CriterionResult] = field(default_factory=dict)
    filename_verdict: ValidationVerdict | None = None
    error: str | None = None

    def issues_by_field(self) -> dict[str, str]:
        issues = {name: result.issue for name, result in self.criteria.items() if result.issue}
        if self.filename_verdict is not None and self.filename_verdict.issue:
            issues["filename"] = self.filename_verdict.issue
        if self.error:
            issues["error"] = self.error
        return issues

    def as_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "status": self.status.value,
            "properties": None
            if self.properties is None
            else {
                "file_type": self.properties.file_type,
                "sample_rate_hz": self.properties.sample_rate_hz,
                "bit_depth": self.properties.bit_depth,
                "channels": self.properties.channels,
                "duration_seconds": self.properties.duration_seconds,
                "size_bytes": self.properties.size_bytes,
            },
            "criteria": {name: result.as_dict() for name, result in self.criteria.items()},
            "filename_validation": None
            if self.filename_verdict is None
            else self.filename_verdict.as_dict(),
            "error": self.error,
        }
