"""Conversational-pair filename validation.

Two grammars are accepted:

* Regular: ``<conversationId>-<languageCode>-user-<userId>-agent-<agentId>.wav``
  where the conversation id may itself contain dashes.
* Spontaneous: ``SPONTANEOUS_<digits>-<languageCode>-user-<userId>-agent-<agentId>.wav``

Every problem found is reported, not just the first one.
"""

from __future__ import annotations

import re

from audio_gate.domain.models import ReferenceDataset, ValidationVerdict
from audio_gate.filename.base import ConversationalGrammar

SPONTANEOUS_PREFIX = "SPONTANEOUS_"

_WAV_SUFFIX = re.compile(r"\.wav\Z", re.IGNORECASE)
_ANY_SUFFIX = re.compile(r"\.\w+\Z", re.ASCII)
_WHITESPACE = re.compile(r"\s")

# Right-anchored: the language code is the last dash token before the fixed
# ``-user-<id>-agent-<id>`` tail; the conversation id absorbs any leading dashes.
_REGULAR_PATTERN = re.compile(r"(.+)-([a-z_]+)-user-([^-]+)-agent-([^-]+)")
_SPONTANEOUS_PATTERN = re.compile(r"SPONTANEOUS_(\d+)-(.+)", re.ASCII)


class RegularGrammar(ConversationalGrammar):
    is_spontaneous = False
    template = "[ConversationID]-[LanguageCode]-user-[UserID]-agent-[AgentID].wav"

    def validate(
        self, base_name: str, dataset: ReferenceDataset, issues: list[str]
    ) -> ValidationVerdict:
        lowercase_name = base_name.lower()
        if base_name != lowercase_name:
            issues.append("Filename must be all lowercase")

        match = _REGULAR_PATTERN.fullmatch(lowercase_name)
        if match is None:
            issues.append(
                "Filename has invalid format: expected "
                "[ConversationID]-[LanguageCode]-user-[UserID]-agent-[AgentID]"
            )
            return self.fail(issues)

        conversation_id, language_code, user_id, agent_id = match.groups()

        # An unknown language has no conversation namespace to look in.
        if self.check_language_code(language_code, dataset, issues):
            if conversation_id not in dataset.conversations_for(language_code):
                issues.append(
                    f"Invalid conversation ID: '{conversation_id}' "
                    f"for language '{language_code}'"
                )

        self.check_contributor_pair(user_id, agent_id, dataset, issues)

        return self.finish(
            issues,
            f"{conversation_id}-{language_code}-user-{user_id}-agent-{agent_id}.wav",
        )


class SpontaneousGrammar(ConversationalGrammar):
    is_spontaneous = True
    template = "SPONTANEOUS_[number]-[LanguageCode]-user-[UserID]-agent-[AgentID].wav"

    def validate(
        self, base_name: str, dataset: ReferenceDataset, issues: list[str]
    ) -> ValidationVerdict:
        if not base_name.startswith(SPONTANEOUS_PREFIX):
            issues.append("Unscripted recordings must start with SPONTANEOUS_ (all caps)")

        match = _SPONTANEOUS_PATTERN.fullmatch(base_name)
        if match is None:
            issues.append(
                "Invalid unscripted format: expected "
                "SPONTANEOUS_[number]-[LanguageCode]-user-[UserID]-agent-[AgentID]"
            )
            return self.fail(issues)

        spontaneous_id, rest = match.groups()
        if rest != rest.lower():
            issues.append("All text after SPONTANEOUS_[number]- must be lowercase")

        parts = rest.lower().split("-")
        if len(parts) != 5:
            issues.append(
                f"Invalid format: expected 5 parts after SPONTANEOUS_[number]-, got {len(parts)}"
            )
            return self.fail(issues)

        language_code, user_label, user_id, agent_label, agent_id = parts
        if user_label != "user":
            issues.append(f"Expected 'user' label, got '{user_label}'")
        if agent_label != "agent":
            issues.append(f"Expected 'agent' label, got '{agent_label}'")

        self.check_language_code(language_code, dataset, issues)
        self.check_contributor_pair(user_id, agent_id, dataset, issues)

        return self.finish(
            issues,
            f"{SPONTANEOUS_PREFIX}{spontaneous_id}-{language_code}"
            f"-user-{user_id}-agent-{agent_id}.wav",
        )


REGULAR = RegularGrammar()
SPONTANEOUS = SpontaneousGrammar()


def select_grammar(base_name: str) -> ConversationalGrammar:
    """Pick the grammar by a case-insensitive ``SPONTANEOUS_`` prefix test."""

    if base_name.upper().startswith(SPONTANEOUS_PREFIX):
        return SPONTANEOUS
    return REGULAR


def _precheck(filename: str) -> list[str]:
    issues: list[str] = []

    # Stray whitespace is reported, never trimmed away.
    if filename != filename.strip():
        issues.append("Filename has leading or trailing whitespace present")

    if _WHITESPACE.search(filename):
        issues.append("Filename contains whitespace characters")

    if _WAV_SUFFIX.search(filename) is None:
        issues.append("Filename must end with .wav extension")
    elif _ANY_SUFFIX.search(_WAV_SUFFIX.sub("", filename, count=1)):
        issues.append("Filename has multiple extensions (e.g., .mp3.wav or .wav.wav)")

    return issues


def validate_conversational(filename: str, dataset: ReferenceDataset) -> ValidationVerdict:
    """Validate a conversational-pair filename against the reference dataset."""

    issues = _precheck(filename)
    base_name = _ANY_SUFFIX.sub("", filename, count=1)
    return select_grammar(base_name).validate(base_name, dataset, issues)
