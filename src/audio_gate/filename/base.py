"""Shared building blocks for filename grammars."""

from __future__ import annotations

from abc import ABC, abstractmethod

from audio_gate.domain.models import ReferenceDataset, ValidationVerdict, VerdictStatus

# Placeholder reported when no canonical filename can be reconstructed.
UNAVAILABLE_FORMAT = "-"


class ConversationalGrammar(ABC):
    """Base class for the two-party conversational filename grammars.

    Each grammar owns its own field extraction and check pipeline. Checks append
    to the caller's ``issues`` list; only a structural parse failure returns early.
    """

    is_spontaneous: bool
    template: str

    @abstractmethod
    def validate(
        self, base_name: str, dataset: ReferenceDataset, issues: list[str]
    ) -> ValidationVerdict:
        """Validate an extension-less filename, accumulating into ``issues``."""
        raise NotImplementedError

    def fail(self, issues: list[str]) -> ValidationVerdict:
        return ValidationVerdict(
            status=VerdictStatus.FAIL,
            expected_format=self.template,
            issues=tuple(issues),
            is_spontaneous=self.is_spontaneous,
        )

    def finish(self, issues: list[str], canonical: str) -> ValidationVerdict:
        if issues:
            return self.fail(issues)
        return ValidationVerdict(
            status=VerdictStatus.PASS,
            expected_format=canonical,
            issues=(),
            is_spontaneous=self.is_spontaneous,
        )

    @staticmethod
    def check_language_code(
        language_code: str, dataset: ReferenceDataset, issues: list[str]
    ) -> bool:
        if dataset.has_language(language_code):
            return True
        issues.append(f"Invalid language code: '{language_code}'")
        return False

    @staticmethod
    def check_contributor_pair(
        user_id: str, agent_id: str, dataset: ReferenceDataset, issues: list[str]
    ) -> None:
        if not dataset.has_contributor_pair(user_id, agent_id):
            issues.append(f"Invalid contributor pair: user-{user_id}, agent-{agent_id}")
