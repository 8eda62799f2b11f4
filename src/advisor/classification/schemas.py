"""Pydantic models for archetype classification results.

Defines the tunable scoring weights, the per-template score, the ranked
full-mode result and the partial-mode (live preview) result.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScoringWeights(BaseModel):
    """Tunable constants of the full-mode scoring formula.

    score = baseline
            + capability * |matched| / |template tags|
            + outcome * min(keyword hits, outcome_hit_cap) / outcome_hit_cap
            + style (when the interaction style is compatible)

    With the defaults the maximum is exactly 100.

    confidence = top * (confidence_floor + (1 - confidence_floor)
                        * min(gap / confidence_gap_span, 1))
    """

    model_config = ConfigDict(frozen=True)

    baseline: float = Field(default=5.0, ge=0.0)
    capability: float = Field(default=60.0, ge=0.0)
    outcome: float = Field(default=25.0, ge=0.0)
    style: float = Field(default=10.0, ge=0.0)
    outcome_hit_cap: int = Field(default=3, ge=1)
    confidence_floor: float = Field(default=0.5, ge=0.0, le=1.0)
    confidence_gap_span: float = Field(default=20.0, gt=0.0)


class TemplateScore(BaseModel):
    """Score of one template against a requirements profile.

    Attributes:
        template_id: Scored template.
        score: 0-100, two decimals.
        reasoning: Human-readable explanation of the score.
        matched_capabilities: Template tags present in the profile tags.
        missing_capabilities: Template tags absent from the profile tags.
    """

    template_id: str
    score: float = Field(ge=0.0, le=100.0)
    reasoning: str
    matched_capabilities: list[str] = Field(default_factory=list)
    missing_capabilities: list[str] = Field(default_factory=list)


class ClassificationResult(BaseModel):
    """Ranked full-mode classification.

    ``scores`` is sorted descending by score; equal scores keep template
    declaration order.
    """

    primary_recommendation: str
    confidence: float = Field(ge=0.0, le=100.0)
    scores: list[TemplateScore]

    @property
    def top_score(self) -> TemplateScore:
        return self.scores[0]

    def alternatives(self, threshold: float) -> list[TemplateScore]:
        """Non-primary scores strictly above ``threshold``."""
        return [s for s in self.scores[1:] if s.score > threshold]


class PartialClassification(BaseModel):
    """Provisional archetype while the interview is in progress.

    Never used as the final recommendation.
    """

    archetype: str | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=100.0)
    answered_count: int = Field(default=0, ge=0)
    signals: list[str] = Field(default_factory=list)
