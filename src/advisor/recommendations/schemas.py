"""Pydantic models for the assembled agent recommendation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from src.advisor.templates.schemas import McpServerConfiguration, ToolConfiguration

Complexity = Literal["low", "medium", "high"]


class AgentRecommendation(BaseModel):
    """Implementation blueprint for the winning archetype.

    Consumed read-only by export and share collaborators.

    Attributes:
        agent_type: Template id of the winning archetype.
        required_dependencies: Packages the generated agent needs.
        mcp_servers: MCP servers to configure, driven by enabled capabilities.
        tool_configurations: Template tools plus one stub per integration.
        system_prompt: Prompt interpolating name, outcome and capabilities.
        estimated_complexity: low / medium / high bucket.
        implementation_steps: Ordered checklist.
        notes: Free-text summary of why this template was chosen.
    """

    agent_type: str
    required_dependencies: list[str] = Field(default_factory=list)
    mcp_servers: list[McpServerConfiguration] = Field(default_factory=list)
    tool_configurations: list[ToolConfiguration] = Field(default_factory=list)
    system_prompt: str = ""
    estimated_complexity: Complexity = "low"
    implementation_steps: list[str] = Field(default_factory=list)
    notes: str = ""
