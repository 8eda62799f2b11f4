"""Partial-mode classification for the live archetype preview.

Works on sparse, in-progress profiles and never raises on missing fields.
The answer is provisional: it is shown while the interview runs and is never
used as the final recommendation (that is AgentClassifier.classify's job).

Points per archetype:
    strong capability flag:  2
    outcome keyword family:  1

Confidence:
    min(75, 4 * answered_count + 20 if a strong flag fired + 10 if the outcome matched)

Exports:
    STRONG_FLAG_ARCHETYPES: capability flag -> archetype id.
    partial_archetype: Provisional archetype for a profile.
"""

from __future__ import annotations

import structlog

from src.advisor.classification.classifier import matching_families
from src.advisor.classification.schemas import PartialClassification
from src.advisor.config import get_settings
from src.advisor.interview.schemas import RequirementsProfile
from src.advisor.templates.catalog import ALL_TEMPLATES

logger = structlog.get_logger(__name__)

STRONG_FLAG_ARCHETYPES: dict[str, str] = {
    "data_analysis": "data-analyst",
    "code_execution": "code-assistant",
    "web_access": "research-agent",
    "tool_integrations": "automation-agent",
}

_FLAG_POINTS = 2
_OUTCOME_POINTS = 1
_CONFIDENCE_CAP = 75.0
_PER_ANSWER = 4.0
_FLAG_BONUS = 20.0
_OUTCOME_BONUS = 10.0


def partial_archetype(
    profile: RequirementsProfile,
    answered_count: int,
    *,
    min_answers: int | None = None,
) -> PartialClassification:
    """Best provisional archetype for an in-progress profile.

    Args:
        profile: Possibly sparse profile.
        answered_count: Number of catalog questions answered so far.
        min_answers: Answers needed before any archetype is offered.
            Defaults to ``PARTIAL_MIN_ANSWERS``.

    Returns:
        PartialClassification with ``archetype=None`` and zero confidence
        below the threshold or when no signal fired.
    """
    if min_answers is None:
        min_answers = get_settings().PARTIAL_MIN_ANSWERS
    if answered_count < min_answers:
        return PartialClassification(answered_count=answered_count)

    points: dict[str, int] = {t.id: 0 for t in ALL_TEMPLATES}
    flag_hits: dict[str, list[str]] = {t.id: [] for t in ALL_TEMPLATES}
    outcome_hits: dict[str, list[str]] = {t.id: [] for t in ALL_TEMPLATES}

    capabilities = profile.capabilities
    if capabilities is not None:
        for flag, archetype in STRONG_FLAG_ARCHETYPES.items():
            if getattr(capabilities, flag) and archetype in points:
                points[archetype] += _FLAG_POINTS
                flag_hits[archetype].append(flag)

    for family in matching_families(profile.primary_outcome):
        if family.archetype in points:
            points[family.archetype] += _OUTCOME_POINTS
            outcome_hits[family.archetype].append(f"outcome:{family.name}")

    # max() returns the first maximal entry, so ties keep declaration order
    best = max(points, key=lambda archetype: points[archetype])
    if points[best] == 0:
        return PartialClassification(answered_count=answered_count)

    confidence = _PER_ANSWER * answered_count
    if flag_hits[best]:
        confidence += _FLAG_BONUS
    if outcome_hits[best]:
        confidence += _OUTCOME_BONUS

    result = PartialClassification(
        archetype=best,
        confidence=min(_CONFIDENCE_CAP, confidence),
        answered_count=answered_count,
        signals=[*flag_hits[best], *outcome_hits[best]],
    )
    logger.debug(
        "classification.partial",
        archetype=result.archetype,
        confidence=result.confidence,
        answered_count=answered_count,
    )
    return result
