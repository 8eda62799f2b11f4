"""Unit tests for AgentClassifier -- deterministic archetype ranking.

Tests cover:
- extract_profile_tags: capability flags, memory, integrations, outcome families
- classify: required-field errors, empty catalog, ranking and stable ties
- Scenario: "Helper" / "analyze csv data" ranks a Data Analyst template first
- Score components, reasoning text and bounds
- Confidence: bounds and monotonicity in top score and gap
- Determinism across repeated calls
"""

from __future__ import annotations

import pytest

from src.advisor.classification.classifier import (
    AgentClassifier,
    ClassificationInputError,
    extract_profile_tags,
)
from src.advisor.classification.schemas import ScoringWeights
from src.advisor.interview.schemas import InteractionStyle, MemoryLevel
from src.advisor.templates.catalog import (
    ALL_TEMPLATES,
    CODE_ASSISTANT,
    CONTENT_CREATOR,
)
from src.advisor.templates.schemas import AgentTemplate
from src.advisor.templates.sections import build_document_sections


def _template(template_id: str, tags: list[str], **kwargs) -> AgentTemplate:
    return AgentTemplate(
        id=template_id,
        name=kwargs.pop("name", template_id),
        description=kwargs.pop("description", f"{template_id} template"),
        capability_tags=tags,
        ideal_for=kwargs.pop("ideal_for", []),
        document_sections=build_document_sections(),
        **kwargs,
    )


@pytest.fixture
def classifier() -> AgentClassifier:
    return AgentClassifier()


# ── Tag extraction ──────────────────────────────────────────────────────────


class TestExtractProfileTags:
    """Tests for profile -> capability tag mapping."""

    def test_flags_map_to_tags(self, profile_factory) -> None:
        profile = profile_factory(outcome="help", file_access=True, web_access=True)
        tags = extract_profile_tags(profile)
        assert tags == ["file-access", "web-access", "web-search"]

    def test_data_analysis_tags(self, profile_factory) -> None:
        tags = extract_profile_tags(profile_factory(outcome="help", data_analysis=True))
        assert "data-analysis" in tags
        assert "data-processing" in tags

    def test_memory_and_integrations(self, profile_factory) -> None:
        profile = profile_factory(
            outcome="help", memory=MemoryLevel.SHORT_TERM, integrations=["GitHub"]
        )
        assert extract_profile_tags(profile) == ["memory", "integration"]

    def test_outcome_family_tags(self, profile_factory) -> None:
        tags = extract_profile_tags(profile_factory(outcome="Write SEO blog articles"))
        assert "content-creation" in tags
        assert "seo" in tags

    def test_tags_deduplicated(self, profile_factory) -> None:
        profile = profile_factory(outcome="analyze data", data_analysis=True)
        tags = extract_profile_tags(profile)
        assert len(tags) == len(set(tags))

    def test_sparse_profile(self, profile_factory) -> None:
        profile = profile_factory(outcome=None, with_capabilities=False)
        assert extract_profile_tags(profile) == []


# ── Input validation ────────────────────────────────────────────────────────


class TestClassifyInputs:
    """Tests for classify preconditions."""

    @pytest.mark.parametrize(
        "overrides, missing",
        [
            ({"name": None}, "name"),
            ({"outcome": None}, "primary_outcome"),
            ({"style": None}, "interaction_style"),
        ],
    )
    def test_missing_required_field(self, classifier, profile_factory, overrides, missing) -> None:
        with pytest.raises(ClassificationInputError) as exc_info:
            classifier.classify(profile_factory(**overrides))
        assert missing in exc_info.value.missing_fields

    def test_input_error_is_value_error(self, classifier, profile_factory) -> None:
        with pytest.raises(ValueError):
            classifier.classify(profile_factory(name=""))

    def test_empty_catalog(self, profile_factory) -> None:
        with pytest.raises(ValueError, match="empty"):
            AgentClassifier(templates=[]).classify(profile_factory())


# ── Ranking ─────────────────────────────────────────────────────────────────


class TestRanking:
    """Tests for scoring and ranking."""

    def test_helper_scenario_ranks_data_analyst_first(self, profile_factory) -> None:
        data_analyst = _template(
            "data-analyst",
            ["data-analysis", "file-access"],
            name="Data Analyst",
            ideal_for=["CSV data analysis"],
        )
        classifier = AgentClassifier(templates=[data_analyst, CONTENT_CREATOR, CODE_ASSISTANT])
        profile = profile_factory(
            name="Helper",
            outcome="analyze csv data",
            file_access=True,
            data_analysis=True,
        )

        result = classifier.classify(profile)

        assert result.primary_recommendation == "data-analyst"
        top = result.scores[0]
        assert top.matched_capabilities == ["data-analysis", "file-access"]
        assert top.missing_capabilities == []

    def test_builtin_catalog_data_profile(self, classifier, data_profile) -> None:
        result = classifier.classify(data_profile)
        assert result.primary_recommendation == "data-analyst"
        assert len(result.scores) == len(ALL_TEMPLATES)

    def test_builtin_catalog_code_profile(self, classifier, profile_factory) -> None:
        profile = profile_factory(
            outcome="Review pull requests and debug failing tests",
            code_execution=True,
        )
        assert classifier.classify(profile).primary_recommendation == "code-assistant"

    def test_scores_sorted_descending(self, classifier, data_profile) -> None:
        scores = [s.score for s in classifier.classify(data_profile).scores]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_declaration_order(self, profile_factory) -> None:
        first = _template("first", ["x"])
        second = _template("second", ["x"])
        result = AgentClassifier(templates=[first, second]).classify(profile_factory())
        assert [s.template_id for s in result.scores] == ["first", "second"]
        assert result.scores[0].score == result.scores[1].score

    def test_determinism(self, classifier, data_profile) -> None:
        first = classifier.classify(data_profile)
        second = classifier.classify(data_profile)
        assert first == second

    def test_result_fields(self, classifier, data_profile) -> None:
        dumped = classifier.classify(data_profile).model_dump()
        assert set(dumped) == {"primary_recommendation", "confidence", "scores"}
        assert dumped["scores"][0]["template_id"] == dumped["primary_recommendation"]


# ── Score components ────────────────────────────────────────────────────────


class TestScoreComponents:
    """Tests for the per-template score formula."""

    def test_full_match_scores_100(self, profile_factory) -> None:
        template = _template(
            "full",
            ["file-access"],
            ideal_for=["csv data analyze"],
            interaction_styles=["task-focused"],
        )
        profile = profile_factory(outcome="analyze csv data", file_access=True)
        score = AgentClassifier(templates=[template]).score_template(template, profile)
        assert score.score == 100.0

    def test_baseline_only(self, profile_factory) -> None:
        template = _template("none", ["quantum"], interaction_styles=["conversational"])
        score = AgentClassifier().score_template(template, profile_factory(outcome="zzz"))
        assert score.score == 5.0
        assert score.missing_capabilities == ["quantum"]

    def test_empty_styles_compatible_with_any_style(self, profile_factory) -> None:
        template = _template("open", ["quantum"])
        profile = profile_factory(outcome="zzz", style=InteractionStyle.CONVERSATIONAL)
        score = AgentClassifier().score_template(template, profile)
        assert score.score == 15.0
        assert "conversational interaction style: compatible" in score.reasoning

    def test_reasoning_text(self, profile_factory) -> None:
        template = _template("t", ["file-access", "quantum"], interaction_styles=["conversational"])
        profile = profile_factory(outcome="zzz", file_access=True)
        score = AgentClassifier().score_template(template, profile)
        assert score.reasoning == (
            "matched 1 of 2 capability tags; outcome keyword match: none; "
            "task-focused interaction style: not preferred"
        )

    def test_custom_weights(self, profile_factory) -> None:
        weights = ScoringWeights(baseline=0.0, capability=100.0, outcome=0.0, style=0.0)
        template = _template("t", ["file-access", "quantum"])
        profile = profile_factory(outcome="zzz", file_access=True)
        score = AgentClassifier(weights=weights).score_template(template, profile)
        assert score.score == 50.0

    def test_scores_bounded(self, classifier, profile_factory) -> None:
        profile = profile_factory(
            outcome="analyze data, write blog, review code, research web, automate workflow",
            file_access=True,
            web_access=True,
            code_execution=True,
            data_analysis=True,
            memory=MemoryLevel.LONG_TERM,
            integrations=["GitHub"],
        )
        result = classifier.classify(profile)
        for score in result.scores:
            assert 0.0 <= score.score <= 100.0
        assert 0.0 <= result.confidence <= 100.0


# ── Confidence ──────────────────────────────────────────────────────────────


class TestConfidence:
    """Tests for the confidence curve."""

    def test_single_template_uses_top_as_gap(self, classifier) -> None:
        assert classifier.confidence(80.0, None) == 80.0

    def test_no_gap_halves_top(self, classifier) -> None:
        assert classifier.confidence(60.0, 60.0) == 30.0

    def test_large_gap_saturates(self, classifier) -> None:
        assert classifier.confidence(90.0, 10.0) == 90.0

    def test_monotonic_in_top(self, classifier) -> None:
        values = [classifier.confidence(top, 40.0) for top in (40.0, 50.0, 60.0, 80.0, 100.0)]
        assert values == sorted(values)

    def test_monotonic_in_gap(self, classifier) -> None:
        values = [classifier.confidence(80.0, second) for second in (80.0, 75.0, 70.0, 60.0, 0.0)]
        assert values == sorted(values)

    def test_bounds(self, classifier) -> None:
        assert classifier.confidence(0.0, 0.0) == 0.0
        assert classifier.confidence(100.0, 0.0) == 100.0
