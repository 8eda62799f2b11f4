"""Requirement derivation: response ledger -> RequirementsProfile.

Each question id maps to one pure rule that takes the current profile and the
answer and returns a new profile with exactly the fields owned by that
question overwritten. Rules never read other responses and never increment
anything, so applying the same answer twice yields the same profile as applying
it once, and re-deriving after go_back/navigate_to leaves no artifacts.

Answers are validated against the question's declared type before any rule
runs. A wrongly-shaped answer raises InvalidResponseError instead of being
coerced, since a coerced value would silently skew classification.

Exports:
    InvalidResponseError: Raised when an answer does not match its question type.
    DERIVATION_RULES: question id -> rule mapping.
    validate_response: Shape check for one answer.
    derive_requirements: Validate and apply a single answer.
    derive_profile: Fold a full ledger into a fresh profile.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

import structlog

from src.advisor.interview.questions import INTERVIEW_QUESTIONS, get_question
from src.advisor.interview.schemas import (
    AgentCapabilities,
    EnvironmentPreferences,
    InteractionStyle,
    MemoryLevel,
    Question,
    QuestionType,
    RequirementsProfile,
    ResponseValue,
    Runtime,
)

logger = structlog.get_logger(__name__)

DerivationRule = Callable[[RequirementsProfile, ResponseValue], RequirementsProfile]


class InvalidResponseError(ValueError):
    """Raised when an answer's runtime shape does not match its question type."""

    def __init__(self, question_id: str, expected: str, received: object) -> None:
        self.question_id = question_id
        self.expected = expected
        self.received = received
        super().__init__(
            f"Invalid response for {question_id}: expected {expected}, "
            f"got {type(received).__name__} {received!r}"
        )


# ── Validation ──────────────────────────────────────────────────────────────


def validate_response(question: Question, value: object) -> None:
    """Check that ``value`` has the shape ``question.type`` declares.

    Raises:
        InvalidResponseError: On any mismatch, including a choice outside the
            question's options.
    """
    if question.type == QuestionType.BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidResponseError(question.id, "bool", value)
    elif question.type == QuestionType.TEXT:
        if not isinstance(value, str):
            raise InvalidResponseError(question.id, "str", value)
    elif question.type == QuestionType.CHOICE:
        if not isinstance(value, str):
            raise InvalidResponseError(question.id, "str", value)
        if question.options is not None and value not in question.options:
            raise InvalidResponseError(
                question.id, f"one of {', '.join(question.options)}", value
            )
    elif question.type == QuestionType.MULTISELECT:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise InvalidResponseError(question.id, "list[str]", value)


# ── Helpers ─────────────────────────────────────────────────────────────────


def _split_csv(value: str) -> list[str]:
    """Split comma-separated free text, trimming entries and dropping empties."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _with_capabilities(profile: RequirementsProfile, **changes: object) -> RequirementsProfile:
    # Baseline is installed lazily so partial profiles never hold half a record.
    capabilities = profile.capabilities or AgentCapabilities()
    return profile.model_copy(
        update={"capabilities": capabilities.model_copy(update=changes)}
    )


# ── Rules ───────────────────────────────────────────────────────────────────


def _agent_name(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return profile.model_copy(update={"name": value})


def _primary_outcome(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return profile.model_copy(
        update={"primary_outcome": value, "description": f"Agent for: {value}"}
    )


def _target_audience(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return profile.model_copy(update={"target_audience": _unique(value)})


def _interaction_style(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return profile.model_copy(update={"interaction_style": InteractionStyle(value)})


def _delivery_channels(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return profile.model_copy(update={"delivery_channels": _unique(value)})


def _success_metrics(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return profile.model_copy(update={"success_metrics": _unique(value)})


def _memory_needs(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return _with_capabilities(profile, memory=MemoryLevel(value))


def _file_access(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return _with_capabilities(profile, file_access=value)


def _web_access(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return _with_capabilities(profile, web_access=value)


def _code_execution(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return _with_capabilities(profile, code_execution=value)


def _data_analysis(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return _with_capabilities(profile, data_analysis=value)


def _tool_integrations(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return _with_capabilities(profile, tool_integrations=_unique(_split_csv(value)))


def _runtime_preference(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    return profile.model_copy(
        update={"environment": EnvironmentPreferences(runtime=Runtime(value))}
    )


def _constraints(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    constraints = _split_csv(value)
    return profile.model_copy(update={"constraints": constraints or None})


def _additional_notes(profile: RequirementsProfile, value: ResponseValue) -> RequirementsProfile:
    notes = value.strip()
    return profile.model_copy(update={"additional_notes": notes or None})


DERIVATION_RULES: dict[str, DerivationRule] = {
    "q1_agent_name": _agent_name,
    "q2_primary_outcome": _primary_outcome,
    "q3_target_audience": _target_audience,
    "q4_interaction_style": _interaction_style,
    "q5_delivery_channels": _delivery_channels,
    "q6_success_metrics": _success_metrics,
    "q7_memory_needs": _memory_needs,
    "q8_file_access": _file_access,
    "q9_web_access": _web_access,
    "q10_code_execution": _code_execution,
    "q11_data_analysis": _data_analysis,
    "q12_tool_integrations": _tool_integrations,
    "q13_runtime_preference": _runtime_preference,
    "q14_constraints": _constraints,
    "q15_additional_notes": _additional_notes,
}


# ── Public API ──────────────────────────────────────────────────────────────


def derive_requirements(
    profile: RequirementsProfile,
    question_id: str,
    value: ResponseValue,
) -> RequirementsProfile:
    """Validate one answer and apply its derivation rule.

    Args:
        profile: Current profile (not mutated).
        question_id: Question being answered.
        value: The answer.

    Returns:
        A new profile with the fields owned by ``question_id`` overwritten.
        Unknown question ids return ``profile`` unchanged.

    Raises:
        InvalidResponseError: If ``value`` does not match the question type.
    """
    question = get_question(question_id)
    rule = DERIVATION_RULES.get(question_id)
    if question is None or rule is None:
        logger.debug("derivation.unknown_question", question_id=question_id)
        return profile

    validate_response(question, value)
    return rule(profile, value)


def derive_profile(responses: Mapping[str, ResponseValue]) -> RequirementsProfile:
    """Build a profile from a whole ledger, applying rules in catalog order."""
    profile = RequirementsProfile()
    for question in INTERVIEW_QUESTIONS:
        if question.id in responses:
            profile = derive_requirements(profile, question.id, responses[question.id])
    return profile
