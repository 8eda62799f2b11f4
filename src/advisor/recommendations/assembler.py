"""Recommendation assembly for the winning archetype.

Turns (template, profile, classification) into an AgentRecommendation:
dependencies, MCP servers, tool configurations, a customised system prompt,
implementation steps, a complexity bucket and explanatory notes.

Pure: the assembler never re-runs classification and the same inputs always
produce the same recommendation.

Complexity:
    count = enabled boolean capabilities
            + 1 if memory != none
            + number of tool integrations
    count <= 2: low, count <= 5: medium, else high

Exports:
    RecommendationAssembler: Builds AgentRecommendation instances.
    MCP_SERVERS: Capability -> MCP server configuration.
"""

from __future__ import annotations

import re

import structlog

from src.advisor.classification.schemas import ClassificationResult, TemplateScore
from src.advisor.config import get_settings
from src.advisor.interview.schemas import AgentCapabilities, MemoryLevel, RequirementsProfile
from src.advisor.recommendations.schemas import AgentRecommendation, Complexity
from src.advisor.templates.schemas import (
    AgentTemplate,
    McpServerConfiguration,
    ToolConfiguration,
)

logger = structlog.get_logger(__name__)

_MCP_BASE_URL = "https://github.com/modelcontextprotocol/servers"

MCP_SERVERS: dict[str, McpServerConfiguration] = {
    "web_access": McpServerConfiguration(
        name="web-fetch",
        description="Web content fetching and scraping capabilities",
        url=f"{_MCP_BASE_URL}/tree/main/src/fetch",
    ),
    "file_access": McpServerConfiguration(
        name="filesystem",
        description="Local filesystem read/write operations",
        url=f"{_MCP_BASE_URL}/tree/main/src/filesystem",
    ),
    "data_analysis": McpServerConfiguration(
        name="data-tools",
        description="Statistical analysis and data processing utilities (reference example)",
        url=_MCP_BASE_URL,
    ),
    "long_term_memory": McpServerConfiguration(
        name="memory",
        description="Persistent memory and context management",
        url=f"{_MCP_BASE_URL}/tree/main/src/memory",
    ),
}

_BOOLEAN_FLAGS = ("file_access", "web_access", "code_execution", "data_analysis")

_SLUG_RE = re.compile(r"[^a-z0-9]+")


class RecommendationAssembler:
    """Build the implementation blueprint for a classified profile.

    Args:
        alternative_threshold: Alternatives scoring strictly above this are
            listed in the notes. Defaults to
            ``HIGH_CONFIDENCE_ALTERNATIVE_THRESHOLD``.
    """

    def __init__(self, *, alternative_threshold: float | None = None) -> None:
        if alternative_threshold is None:
            alternative_threshold = get_settings().HIGH_CONFIDENCE_ALTERNATIVE_THRESHOLD
        self._alternative_threshold = alternative_threshold

    # ── Components ──────────────────────────────────────────────────────

    @staticmethod
    def select_mcp_servers(capabilities: AgentCapabilities) -> list[McpServerConfiguration]:
        """MCP servers implied by the enabled capabilities."""
        servers: list[McpServerConfiguration] = []
        if capabilities.web_access:
            servers.append(MCP_SERVERS["web_access"])
        if capabilities.file_access:
            servers.append(MCP_SERVERS["file_access"])
        if capabilities.data_analysis:
            servers.append(MCP_SERVERS["data_analysis"])
        if capabilities.memory == MemoryLevel.LONG_TERM:
            servers.append(MCP_SERVERS["long_term_memory"])
        return servers

    @staticmethod
    def build_tool_configurations(
        template: AgentTemplate,
        capabilities: AgentCapabilities,
    ) -> list[ToolConfiguration]:
        """Template tools followed by one stub per external integration."""
        tools = list(template.default_tools)
        for integration in capabilities.tool_integrations:
            slug = _SLUG_RE.sub("_", integration.lower()).strip("_") or "integration"
            tools.append(
                ToolConfiguration(
                    name=f"{slug}_integration",
                    description=f"Integration with {integration}",
                    required_permissions=["network"],
                )
            )
        return tools

    @staticmethod
    def assess_complexity(capabilities: AgentCapabilities) -> Complexity:
        count = sum(1 for flag in _BOOLEAN_FLAGS if getattr(capabilities, flag))
        if capabilities.memory != MemoryLevel.NONE:
            count += 1
        count += len(capabilities.tool_integrations)

        if count <= 2:
            return "low"
        if count <= 5:
            return "medium"
        return "high"

    @staticmethod
    def customize_system_prompt(template: AgentTemplate, profile: RequirementsProfile) -> str:
        """Template prompt wrapped with the agent's identity and requirements."""
        parts = [f"# {profile.name}\n\n{profile.description or ''}\n\n{template.system_prompt}"]

        if profile.target_audience:
            parts.append(
                "## Target Audience\n"
                f"You are designed to serve: {', '.join(profile.target_audience)}"
            )

        parts.append(f"## Primary Objective\n{profile.primary_outcome}")

        capabilities = profile.capabilities or AgentCapabilities()
        enabled = capabilities.enabled
        if enabled:
            parts.append("## Capabilities\n" + "\n".join(f"- {c}" for c in enabled))

        if profile.success_metrics:
            parts.append(
                "## Success Metrics\nMeasure success by:\n"
                + "\n".join(f"- {m}" for m in profile.success_metrics)
            )

        if profile.constraints:
            parts.append("## Constraints\n" + "\n".join(f"- {c}" for c in profile.constraints))

        style = profile.interaction_style.value if profile.interaction_style else "balanced"
        parts.append(
            f"## Interaction Style\nMaintain a {style} approach in all interactions."
        )
        return "\n\n".join(parts)

    @staticmethod
    def build_implementation_steps(
        template: AgentTemplate,
        capabilities: AgentCapabilities,
        complexity: Complexity,
    ) -> list[str]:
        steps = list(template.planning_checklist)

        if capabilities.file_access:
            steps.append("Configure filesystem access and file operation handlers")
        if capabilities.web_access:
            steps.append("Set up web fetching and content extraction capabilities")
        if capabilities.code_execution:
            steps.append("Set up a sandboxed code execution environment")
        if capabilities.data_analysis:
            steps.append("Implement data processing and analysis utilities")
        if capabilities.memory != MemoryLevel.NONE:
            steps.append(f"Configure {capabilities.memory.value} memory management system")
        if capabilities.tool_integrations:
            integrations = capabilities.tool_integrations
            listed = ", ".join(integrations[:3]) + (", ..." if len(integrations) > 3 else "")
            steps.append(f"Integrate with external services: {listed}")

        steps.append("Create test suite for tool validation and error handling")
        steps.append("Configure environment variables and deployment settings")

        if complexity == "high":
            steps.append("Implement comprehensive error recovery and fallback strategies")
            steps.append("Set up monitoring and performance optimization")

        steps.append("Document API usage and deployment instructions")
        return steps

    def build_notes(
        self,
        top: TemplateScore,
        classification: ClassificationResult,
        profile: RequirementsProfile,
    ) -> str:
        notes = [
            f"Selected {top.template_id} template with "
            f"{classification.confidence:.0f}% confidence.",
            f"Reasoning: {top.reasoning}",
        ]
        if top.missing_capabilities:
            notes.append(
                "Note: Template does not natively support: "
                f"{', '.join(top.missing_capabilities)}. "
                "These may require custom implementation."
            )

        alternatives = classification.alternatives(self._alternative_threshold)
        if alternatives:
            notes.append(
                "Alternative options: "
                + ", ".join(f"{a.template_id} ({a.score:.0f}%)" for a in alternatives)
            )

        if profile.additional_notes:
            notes.append(f"Additional context: {profile.additional_notes}")
        return "\n".join(notes)

    # ── Public API ──────────────────────────────────────────────────────

    def assemble(
        self,
        template: AgentTemplate,
        profile: RequirementsProfile,
        classification: ClassificationResult,
    ) -> AgentRecommendation:
        """Build the recommendation for ``template``.

        Args:
            template: Winning template (normally the classification's primary).
            profile: Complete requirements profile.
            classification: Result the template was selected from.

        Returns:
            AgentRecommendation for the template.
        """
        capabilities = profile.capabilities or AgentCapabilities()
        complexity = self.assess_complexity(capabilities)
        top = next(
            (s for s in classification.scores if s.template_id == template.id),
            classification.top_score,
        )

        recommendation = AgentRecommendation(
            agent_type=template.id,
            required_dependencies=list(template.required_dependencies),
            mcp_servers=self.select_mcp_servers(capabilities),
            tool_configurations=self.build_tool_configurations(template, capabilities),
            system_prompt=self.customize_system_prompt(template, profile),
            estimated_complexity=complexity,
            implementation_steps=self.build_implementation_steps(
                template, capabilities, complexity
            ),
            notes=self.build_notes(top, classification, profile),
        )
        logger.info(
            "recommendation.assembled",
            agent_type=recommendation.agent_type,
            complexity=complexity,
            mcp_servers=len(recommendation.mcp_servers),
            steps=len(recommendation.implementation_steps),
        )
        return recommendation
