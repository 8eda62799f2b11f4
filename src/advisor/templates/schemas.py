"""Pydantic data models for the agent template catalog.

Defines the archetype blueprint (AgentTemplate), its planning document
sections (DocumentSection), and the tool/MCP server configuration stubs that
templates and recommendations share. Templates are static: every model here is
frozen once constructed.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Section keys every template must define, in document order.
REQUIRED_SECTIONS: tuple[str, ...] = (
    "overview",
    "architecture",
    "implementation",
    "testing",
    "deployment",
    "monitoring",
    "troubleshooting",
    "maintenance",
)


# ── Tool / MCP Configuration ────────────────────────────────────────────────


class ToolConfiguration(BaseModel):
    """A tool the generated agent exposes to its model.

    Attributes:
        name: Tool identifier (snake_case or kebab-case).
        description: What the tool does.
        parameters: JSON-schema style parameter description.
        required_permissions: Permissions the runtime must grant.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    required_permissions: list[str] = Field(default_factory=list)


class McpServerConfiguration(BaseModel):
    """An MCP server the generated agent should connect to."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    url: str
    authentication: Literal["api_key", "oauth", "none"] = "none"


# ── Template ────────────────────────────────────────────────────────────────


class DocumentSection(BaseModel):
    """One section of an archetype's planning document."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    subsections: list[str] = Field(default_factory=list)
    content_guidance: list[str] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)


class AgentTemplate(BaseModel):
    """A named, pre-authored agent archetype.

    ``capability_tags`` drive set-intersection scoring, ``ideal_for`` phrases
    feed outcome keyword matching, and ``interaction_styles`` lists the styles
    the archetype is best suited to (empty = suits every style). The planning
    lists seed the generated implementation plan.

    Raises:
        ValueError: If any of the REQUIRED_SECTIONS is missing from
            ``document_sections``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    capability_tags: list[str]
    ideal_for: list[str]
    interaction_styles: list[str] = Field(default_factory=list)
    system_prompt: str = ""
    required_dependencies: list[str] = Field(default_factory=list)
    default_tools: list[ToolConfiguration] = Field(default_factory=list)
    recommended_integrations: list[str] = Field(default_factory=list)
    planning_checklist: list[str] = Field(default_factory=list)
    architecture_patterns: list[str] = Field(default_factory=list)
    risk_considerations: list[str] = Field(default_factory=list)
    success_criteria: list[str] = Field(default_factory=list)
    implementation_guidance: list[str] = Field(default_factory=list)
    document_sections: dict[str, DocumentSection] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_required_sections(self) -> AgentTemplate:
        """Reject templates that do not define every required document section."""
        missing = [key for key in REQUIRED_SECTIONS if key not in self.document_sections]
        if missing:
            raise ValueError(
                f'Template "{self.id}" is missing required sections: {", ".join(missing)}'
            )
        return self
