"""Shared planning-document section skeletons.

Every archetype's planning document has the same eight sections. The generic
skeleton for each lives here; archetypes extend it with their own guidance and
examples through ``build_document_sections``.

Exports:
    SECTION_TEMPLATES: section key -> generic DocumentSection.
    get_section_template: Lookup by key.
    build_document_sections: Merge archetype-specific additions into the skeletons.
"""

from __future__ import annotations

from collections.abc import Mapping

from src.advisor.templates.schemas import REQUIRED_SECTIONS, DocumentSection

SECTION_TEMPLATES: dict[str, DocumentSection] = {
    "overview": DocumentSection(
        title="Overview",
        description="High-level introduction to the agent and its primary purpose",
        subsections=[
            "Purpose and Goals",
            "Key Capabilities",
            "Target Use Cases",
            "Prerequisites and Requirements",
        ],
        content_guidance=[
            "Clearly state the agent's primary purpose in 1-2 sentences",
            "List 3-5 key capabilities the agent provides",
            "Describe ideal use cases and scenarios",
            "Outline technical prerequisites (Python version, API keys, etc.)",
        ],
        examples=[
            "This agent processes CSV data files and generates statistical analysis reports.",
        ],
    ),
    "architecture": DocumentSection(
        title="Architecture",
        description="System design, components, and architectural patterns",
        subsections=["System Components", "Data Flow", "Integration Points", "Design Patterns"],
        content_guidance=[
            "Describe the major system components",
            "Explain how data flows through the system",
            "Identify external services and APIs the agent integrates with",
            "Describe the state management approach",
            "Outline error handling and recovery mechanisms",
        ],
        examples=[
            "Components: input validator -> data processor -> analysis engine -> report generator",
        ],
    ),
    "implementation": DocumentSection(
        title="Implementation",
        description="Detailed implementation guidance and code organization",
        subsections=["Project Structure", "Core Modules", "Tool Implementations", "Configuration"],
        content_guidance=[
            "Describe the recommended package layout",
            "Explain the purpose of each major module",
            "Detail tool implementation requirements",
            "Document configuration options and environment variables",
        ],
        examples=[
            "src/tools/ - tool implementations with pydantic input models",
            "Environment variables: ANTHROPIC_API_KEY, LOG_LEVEL, DATA_DIR",
        ],
    ),
    "testing": DocumentSection(
        title="Testing",
        description="Testing strategy, test cases, and validation procedures",
        subsections=[
            "Testing Strategy",
            "Unit Tests",
            "Integration Tests",
            "End-to-End Tests",
            "Test Data",
        ],
        content_guidance=[
            "Outline the overall testing approach",
            "List critical unit test cases",
            "Describe integration test scenarios",
            "Provide sample test data and fixtures",
        ],
        examples=["Unit tests for each tool function with pytest"],
    ),
    "deployment": DocumentSection(
        title="Deployment",
        description="Deployment procedures and environment setup",
        subsections=[
            "Environment Setup",
            "Build Process",
            "Deployment Steps",
            "Environment Variables",
        ],
        content_guidance=[
            "List deployment prerequisites",
            "Provide step-by-step deployment instructions",
            "List all required environment variables and secrets",
            "Include configuration examples for dev, staging and prod",
        ],
        examples=["pip install -e . && python -m agent", "Deploy as a container or serverless function"],
    ),
    "monitoring": DocumentSection(
        title="Monitoring",
        description="Observability, metrics, and performance monitoring",
        subsections=["Key Metrics", "Logging Strategy", "Performance Indicators", "Alerting"],
        content_guidance=[
            "Define key performance indicators",
            "Describe the logging approach and log levels",
            "Document alerting thresholds and conditions",
        ],
        examples=["Track: request count, error rate, processing time, API usage"],
    ),
    "troubleshooting": DocumentSection(
        title="Troubleshooting",
        description="Common issues, debugging procedures, and solutions",
        subsections=[
            "Common Issues",
            "Debugging Procedures",
            "Error Messages",
            "Resolution Steps",
        ],
        content_guidance=[
            "List common issues users may encounter",
            "Provide diagnostic steps for each issue",
            "Document error messages and their meanings",
        ],
        examples=['Issue: "Invalid API key" -> check ANTHROPIC_API_KEY'],
    ),
    "maintenance": DocumentSection(
        title="Maintenance",
        description="Ongoing maintenance tasks and update procedures",
        subsections=[
            "Regular Maintenance",
            "Dependency Updates",
            "Performance Optimization",
            "Backup and Recovery",
        ],
        content_guidance=[
            "List regular maintenance tasks and their frequency",
            "Document dependency update procedures",
            "Describe backup and recovery procedures",
        ],
        examples=["Weekly: review error logs and performance metrics"],
    ),
}


def get_section_template(key: str) -> DocumentSection:
    """Return the generic skeleton for ``key``.

    Raises:
        KeyError: If ``key`` is not a known section.
    """
    try:
        return SECTION_TEMPLATES[key]
    except KeyError:
        raise KeyError(f"Unknown section name: {key}") from None


def build_document_sections(
    guidance: Mapping[str, list[str]] | None = None,
    examples: Mapping[str, list[str]] | None = None,
) -> dict[str, DocumentSection]:
    """Build the full section set for one archetype.

    Archetype guidance is appended after the generic guidance; archetype
    examples replace the generic ones when given.
    """
    guidance = guidance or {}
    examples = examples or {}
    sections: dict[str, DocumentSection] = {}
    for key in REQUIRED_SECTIONS:
        base = SECTION_TEMPLATES[key]
        sections[key] = base.model_copy(
            update={
                "content_guidance": [*base.content_guidance, *guidance.get(key, [])],
                "examples": list(examples.get(key, base.examples)),
            }
        )
    return sections
