"""Domain layer."""

from .events import (
    CriteriaEvaluated,
    DomainEvent,
    FilenameValidated,
    SubmissionChecked,
    SubmissionFailed,
)
from .models import (
    AudioProperties,
    CheckStatus,
    CriterionResult,
    FileReport,
    ReferenceDataset,
    ValidationVerdict,
    VerdictStatus,
)

__all__ = [
    "DomainEvent",
    "FilenameValidated",
    "CriteriaEvaluated",
    "SubmissionChecked",
    "SubmissionFailed",
    "AudioProperties",
    "CheckStatus",
    "CriterionResult",
    "FileReport",
    "ReferenceDataset",
    "ValidationVerdict",
    "VerdictStatus",
]
