"""Unit tests for RecommendationAssembler.

Tests cover:
- MCP server selection per capability
- Tool configurations: template tools plus integration stubs
- Complexity buckets
- System prompt sections
- Implementation step ordering and high-complexity hardening steps
- Notes: confidence, reasoning, missing capabilities, alternatives, context
- assemble end to end and purity
"""

from __future__ import annotations

import pytest

from src.advisor.classification.classifier import AgentClassifier
from src.advisor.classification.schemas import ClassificationResult, TemplateScore
from src.advisor.interview.schemas import AgentCapabilities, MemoryLevel
from src.advisor.recommendations.assembler import RecommendationAssembler
from src.advisor.templates.catalog import AUTOMATION_AGENT, DATA_ANALYST


@pytest.fixture
def assembler() -> RecommendationAssembler:
    return RecommendationAssembler()


def _classification(
    *scores: tuple[str, float],
    missing: list[str] | None = None,
) -> ClassificationResult:
    """Build a ClassificationResult from (template_id, score) pairs, best first."""
    ranked = [
        TemplateScore(
            template_id=template_id,
            score=score,
            reasoning=f"reasoning for {template_id}",
            missing_capabilities=(missing or []) if index == 0 else [],
        )
        for index, (template_id, score) in enumerate(scores)
    ]
    return ClassificationResult(
        primary_recommendation=ranked[0].template_id,
        confidence=80.0,
        scores=ranked,
    )


# ── MCP servers ─────────────────────────────────────────────────────────────


class TestMcpServers:
    """Tests for capability-driven MCP server selection."""

    def test_no_capabilities_no_servers(self, assembler) -> None:
        assert assembler.select_mcp_servers(AgentCapabilities()) == []

    def test_all_capabilities(self, assembler) -> None:
        capabilities = AgentCapabilities(
            web_access=True,
            file_access=True,
            data_analysis=True,
            memory=MemoryLevel.LONG_TERM,
        )
        names = [s.name for s in assembler.select_mcp_servers(capabilities)]
        assert names == ["web-fetch", "filesystem", "data-tools", "memory"]

    def test_short_term_memory_needs_no_server(self, assembler) -> None:
        capabilities = AgentCapabilities(memory=MemoryLevel.SHORT_TERM)
        assert assembler.select_mcp_servers(capabilities) == []

    def test_servers_need_no_authentication(self, assembler) -> None:
        servers = assembler.select_mcp_servers(AgentCapabilities(web_access=True))
        assert servers[0].authentication == "none"
        assert servers[0].url.endswith("/src/fetch")


# ── Tools ───────────────────────────────────────────────────────────────────


class TestToolConfigurations:
    """Tests for tool configuration assembly."""

    def test_template_tools_first_then_integrations(self, assembler) -> None:
        capabilities = AgentCapabilities(tool_integrations=["Google Sheets", "Jira"])
        tools = assembler.build_tool_configurations(DATA_ANALYST, capabilities)
        names = [t.name for t in tools]
        assert names[: len(DATA_ANALYST.default_tools)] == [t.name for t in DATA_ANALYST.default_tools]
        assert names[-2:] == ["google_sheets_integration", "jira_integration"]
        assert tools[-1].description == "Integration with Jira"
        assert tools[-1].required_permissions == ["network"]


# ── Complexity ──────────────────────────────────────────────────────────────


class TestComplexity:
    """Tests for complexity buckets."""

    @pytest.mark.parametrize(
        "capabilities, expected",
        [
            (AgentCapabilities(), "low"),
            (AgentCapabilities(file_access=True, data_analysis=True), "low"),
            (AgentCapabilities(file_access=True, data_analysis=True, web_access=True), "medium"),
            (
                AgentCapabilities(
                    file_access=True,
                    web_access=True,
                    code_execution=True,
                    data_analysis=True,
                    memory=MemoryLevel.SHORT_TERM,
                ),
                "medium",
            ),
            (
                AgentCapabilities(
                    file_access=True,
                    web_access=True,
                    code_execution=True,
                    data_analysis=True,
                    memory=MemoryLevel.LONG_TERM,
                    tool_integrations=["GitHub"],
                ),
                "high",
            ),
            (AgentCapabilities(tool_integrations=["a", "b", "c", "d", "e", "f"]), "high"),
        ],
    )
    def test_buckets(self, assembler, capabilities, expected) -> None:
        assert assembler.assess_complexity(capabilities) == expected


# ── System prompt ───────────────────────────────────────────────────────────


class TestSystemPrompt:
    """Tests for system prompt customisation."""

    def test_sections(self, assembler, data_profile) -> None:
        prompt = assembler.customize_system_prompt(DATA_ANALYST, data_profile)
        assert prompt.startswith("# Sales Insights\n\nAgent for: Analyze CSV sales data")
        assert DATA_ANALYST.system_prompt in prompt
        assert "## Target Audience\nYou are designed to serve: Business Analysts" in prompt
        assert "## Primary Objective\nAnalyze CSV sales data and produce weekly reports" in prompt
        assert "## Capabilities\n- file access\n- data analysis" in prompt
        assert "## Success Metrics\nMeasure success by:\n- Response accuracy" in prompt
        assert "## Constraints\n- No cloud uploads" in prompt
        assert prompt.endswith("Maintain a task-focused approach in all interactions.")

    def test_optional_sections_omitted(self, assembler, profile_factory) -> None:
        prompt = assembler.customize_system_prompt(DATA_ANALYST, profile_factory())
        assert "## Target Audience" not in prompt
        assert "## Constraints" not in prompt
        assert "## Capabilities" not in prompt


# ── Steps ───────────────────────────────────────────────────────────────────


class TestImplementationSteps:
    """Tests for implementation step ordering."""

    def test_order(self, assembler) -> None:
        capabilities = AgentCapabilities(file_access=True, memory=MemoryLevel.SHORT_TERM)
        steps = assembler.build_implementation_steps(DATA_ANALYST, capabilities, "low")

        checklist = len(DATA_ANALYST.planning_checklist)
        assert steps[:checklist] == DATA_ANALYST.planning_checklist
        assert steps[checklist:] == [
            "Configure filesystem access and file operation handlers",
            "Configure short-term memory management system",
            "Create test suite for tool validation and error handling",
            "Configure environment variables and deployment settings",
            "Document API usage and deployment instructions",
        ]

    def test_high_complexity_adds_hardening(self, assembler) -> None:
        steps = assembler.build_implementation_steps(
            AUTOMATION_AGENT, AgentCapabilities(), "high"
        )
        assert steps[-3:] == [
            "Implement comprehensive error recovery and fallback strategies",
            "Set up monitoring and performance optimization",
            "Document API usage and deployment instructions",
        ]

    def test_integrations_truncated(self, assembler) -> None:
        capabilities = AgentCapabilities(tool_integrations=["A", "B", "C", "D"])
        steps = assembler.build_implementation_steps(AUTOMATION_AGENT, capabilities, "medium")
        assert "Integrate with external services: A, B, C, ..." in steps


# ── Notes ───────────────────────────────────────────────────────────────────


class TestNotes:
    """Tests for explanatory notes."""

    def test_notes_content(self, assembler, profile_factory) -> None:
        classification = _classification(
            ("data-analyst", 90.0),
            ("research-agent", 62.0),
            ("content-creator", 50.0),
            missing=["visualization"],
        )
        profile = profile_factory(additional_notes="Runs nightly")
        notes = assembler.build_notes(classification.top_score, classification, profile)
        lines = notes.split("\n")

        assert lines[0] == "Selected data-analyst template with 80% confidence."
        assert lines[1] == "Reasoning: reasoning for data-analyst"
        assert "visualization" in lines[2]
        assert lines[3] == "Alternative options: research-agent (62%)"
        assert lines[4] == "Additional context: Runs nightly"

    def test_threshold_configurable(self, profile_factory) -> None:
        assembler = RecommendationAssembler(alternative_threshold=40.0)
        classification = _classification(("data-analyst", 90.0), ("content-creator", 50.0))
        notes = assembler.build_notes(classification.top_score, classification, profile_factory())
        assert "content-creator (50%)" in notes


# ── End to end ──────────────────────────────────────────────────────────────


class TestAssemble:
    """Tests for assemble."""

    def test_assemble_data_profile(self, assembler, data_profile) -> None:
        classification = AgentClassifier().classify(data_profile)
        recommendation = assembler.assemble(DATA_ANALYST, data_profile, classification)

        assert recommendation.agent_type == "data-analyst"
        assert recommendation.required_dependencies == DATA_ANALYST.required_dependencies
        assert [s.name for s in recommendation.mcp_servers] == ["filesystem", "data-tools"]
        assert recommendation.estimated_complexity == "low"
        assert recommendation.implementation_steps[-1] == (
            "Document API usage and deployment instructions"
        )
        assert "Additional context: Quarterly board deck too" in recommendation.notes

    def test_assemble_is_pure(self, assembler, data_profile) -> None:
        classification = AgentClassifier().classify(data_profile)
        first = assembler.assemble(DATA_ANALYST, data_profile, classification)
        second = assembler.assemble(DATA_ANALYST, data_profile, classification)
        assert first == second
