"""Deterministic archetype classification.

Scores every template in the catalog against a complete RequirementsProfile
and ranks them. Pure function of (profile, catalog, weights): no randomness,
no clock, no I/O, so identical inputs always produce identical results.

IMPORTANT: Do NOT use an LLM for score computation. Scores must stay
reproducible and explainable through ``TemplateScore.reasoning``.

Exports:
    AgentClassifier: Full-mode scorer and ranker.
    ClassificationInputError: Raised when required profile fields are missing.
    OUTCOME_KEYWORD_FAMILIES: Outcome regex families shared with partial mode.
    extract_profile_tags: Profile -> ordered capability tag list.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from src.advisor.classification.schemas import (
    ClassificationResult,
    ScoringWeights,
    TemplateScore,
)
from src.advisor.interview.schemas import MemoryLevel, RequirementsProfile
from src.advisor.templates.catalog import ALL_TEMPLATES
from src.advisor.templates.schemas import AgentTemplate

logger = structlog.get_logger(__name__)


class ClassificationInputError(ValueError):
    """Raised when a profile lacks the fields full classification needs."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = missing_fields
        super().__init__(
            f"Cannot classify: missing required fields: {', '.join(missing_fields)}"
        )


# ── Tag extraction ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class OutcomeKeywordFamily:
    """Keyword regex over the outcome text and the tags/archetype it implies."""

    name: str
    pattern: re.Pattern[str]
    tags: tuple[str, ...]
    archetype: str


OUTCOME_KEYWORD_FAMILIES: tuple[OutcomeKeywordFamily, ...] = (
    OutcomeKeywordFamily(
        name="data",
        pattern=re.compile(r"report|statistic|visualiz|chart|graph|metric|data|analys"),
        tags=("data-processing", "statistics", "visualization", "reporting"),
        archetype="data-analyst",
    ),
    OutcomeKeywordFamily(
        name="content",
        pattern=re.compile(r"blog|article|seo|market|document|content|writ"),
        tags=("content-creation", "seo", "writing", "marketing", "documentation"),
        archetype="content-creator",
    ),
    OutcomeKeywordFamily(
        name="code",
        pattern=re.compile(r"review|test|refactor|debug|quality|code|develop"),
        tags=("code-review", "testing", "refactoring", "debugging", "development"),
        archetype="code-assistant",
    ),
    OutcomeKeywordFamily(
        name="research",
        pattern=re.compile(r"web|scrape|extract|verify|fact|research|search"),
        tags=("research", "web-search", "data-extraction", "fact-checking", "synthesis"),
        archetype="research-agent",
    ),
    OutcomeKeywordFamily(
        name="automation",
        pattern=re.compile(r"schedule|orchestrat|queue|task|job|automat|workflow"),
        tags=("automation", "scheduling", "workflow", "orchestration"),
        archetype="automation-agent",
    ),
)

# Tags implied by each boolean capability flag.
_CAPABILITY_FLAG_TAGS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("file_access", ("file-access",)),
    ("web_access", ("web-access", "web-search")),
    ("code_execution", ("code-execution", "code-review", "testing", "debugging")),
    (
        "data_analysis",
        ("data-analysis", "data-processing", "statistics", "visualization", "reporting"),
    ),
)

_STOPWORDS = frozenset({"and", "the", "for", "with", "from", "into", "via", "its", "multi"})

_WORD_RE = re.compile(r"[a-z]+")


def matching_families(outcome: str | None) -> list[OutcomeKeywordFamily]:
    """Keyword families whose regex matches the (lower-cased) outcome text."""
    text = (outcome or "").lower()
    return [family for family in OUTCOME_KEYWORD_FAMILIES if family.pattern.search(text)]


def extract_profile_tags(profile: RequirementsProfile) -> list[str]:
    """Capability tags implied by a profile, ordered and de-duplicated."""
    tags: list[str] = []
    capabilities = profile.capabilities
    if capabilities is not None:
        for flag, flag_tags in _CAPABILITY_FLAG_TAGS:
            if getattr(capabilities, flag):
                tags.extend(flag_tags)
        if capabilities.memory != MemoryLevel.NONE:
            tags.append("memory")
        if capabilities.tool_integrations:
            tags.append("integration")

    for family in matching_families(profile.primary_outcome):
        tags.extend(family.tags)

    return list(dict.fromkeys(tags))


def _ideal_for_terms(template: AgentTemplate) -> list[str]:
    words = _WORD_RE.findall(" ".join(template.ideal_for).lower())
    return list(dict.fromkeys(w for w in words if len(w) >= 3 and w not in _STOPWORDS))


# ── Classifier ──────────────────────────────────────────────────────────────


class AgentClassifier:
    """Rank catalog templates against a complete requirements profile.

    Args:
        templates: Catalog to score, in declaration order (ties keep it).
        weights: Scoring constants.
    """

    def __init__(
        self,
        templates: Sequence[AgentTemplate] = ALL_TEMPLATES,
        *,
        weights: ScoringWeights | None = None,
    ) -> None:
        self._templates = tuple(templates)
        self._weights = weights or ScoringWeights()

    @property
    def templates(self) -> tuple[AgentTemplate, ...]:
        return self._templates

    @property
    def weights(self) -> ScoringWeights:
        return self._weights

    # ── Scoring components (private) ────────────────────────────────────

    def _capability_component(
        self,
        template: AgentTemplate,
        profile_tags: list[str],
    ) -> tuple[float, list[str], list[str]]:
        tag_set = set(profile_tags)
        matched = [t for t in template.capability_tags if t in tag_set]
        missing = [t for t in template.capability_tags if t not in tag_set]
        if not template.capability_tags:
            return 0.0, matched, missing
        ratio = len(matched) / len(template.capability_tags)
        return self._weights.capability * ratio, matched, missing

    def _outcome_component(
        self,
        template: AgentTemplate,
        outcome_text: str,
    ) -> tuple[float, list[str]]:
        hits = [term for term in _ideal_for_terms(template) if term in outcome_text]
        cap = self._weights.outcome_hit_cap
        return self._weights.outcome * min(len(hits), cap) / cap, hits

    @staticmethod
    def _style_compatible(template: AgentTemplate, style: str) -> bool:
        """A template declaring no styles suits every style."""
        return not template.interaction_styles or style in template.interaction_styles

    @staticmethod
    def _clamp(value: float) -> float:
        return round(max(0.0, min(100.0, value)), 2)

    # ── Public API ──────────────────────────────────────────────────────

    def score_template(
        self,
        template: AgentTemplate,
        profile: RequirementsProfile,
    ) -> TemplateScore:
        """Score one template against a profile."""
        return self._score(template, profile, extract_profile_tags(profile))

    def _score(
        self,
        template: AgentTemplate,
        profile: RequirementsProfile,
        profile_tags: list[str],
    ) -> TemplateScore:
        outcome_text = f"{profile.primary_outcome or ''} {profile.description or ''}".lower()
        style = profile.interaction_style.value if profile.interaction_style else ""

        capability, matched, missing = self._capability_component(template, profile_tags)
        outcome, hits = self._outcome_component(template, outcome_text)
        compatible = self._style_compatible(template, style)

        raw = self._weights.baseline + capability + outcome
        if compatible:
            raw += self._weights.style

        reasoning = (
            f"matched {len(matched)} of {len(template.capability_tags)} capability tags; "
            f"outcome keyword match: {', '.join(hits) if hits else 'none'}; "
            f"{style} interaction style: {'compatible' if compatible else 'not preferred'}"
        )
        return TemplateScore(
            template_id=template.id,
            score=self._clamp(raw),
            reasoning=reasoning,
            matched_capabilities=matched,
            missing_capabilities=missing,
        )

    def confidence(self, top: float, second: float | None) -> float:
        """Confidence in the winner, growing with its score and its lead."""
        gap = top if second is None else top - second
        spread = min(max(gap, 0.0) / self._weights.confidence_gap_span, 1.0)
        floor = self._weights.confidence_floor
        return self._clamp(top * (floor + (1.0 - floor) * spread))

    def classify(self, profile: RequirementsProfile) -> ClassificationResult:
        """Score and rank every template.

        Raises:
            ClassificationInputError: If name, primary_outcome or
                interaction_style is missing.
            ValueError: If the catalog is empty.
        """
        missing_fields = [
            field
            for field in ("name", "primary_outcome", "interaction_style")
            if not getattr(profile, field)
        ]
        if missing_fields:
            raise ClassificationInputError(missing_fields)
        if not self._templates:
            raise ValueError("Cannot classify: template catalog is empty")

        profile_tags = extract_profile_tags(profile)
        scores = [self._score(t, profile, profile_tags) for t in self._templates]
        # sorted() is stable, so equal scores keep declaration order
        ranked = sorted(scores, key=lambda s: s.score, reverse=True)

        top = ranked[0]
        second = ranked[1].score if len(ranked) > 1 else None
        result = ClassificationResult(
            primary_recommendation=top.template_id,
            confidence=self.confidence(top.score, second),
            scores=ranked,
        )
        logger.info(
            "classification.completed",
            primary_recommendation=result.primary_recommendation,
            top_score=top.score,
            confidence=result.confidence,
        )
        return result
