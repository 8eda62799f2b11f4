"""Static catalog of agent archetypes.

Five archetypes in declaration order. Declaration order is significant: the
classifier uses it to break score ties.

Exports:
    DATA_ANALYST, CONTENT_CREATOR, CODE_ASSISTANT, RESEARCH_AGENT,
    AUTOMATION_AGENT: The individual templates.
    ALL_TEMPLATES: Every template, in declaration order.
    get_template_by_id: Lookup by id.
    get_templates_by_capability: Templates declaring a capability tag.
"""

from __future__ import annotations

from src.advisor.templates.schemas import AgentTemplate, ToolConfiguration
from src.advisor.templates.sections import build_document_sections

# ── Data Analyst ────────────────────────────────────────────────────────────

DATA_ANALYST = AgentTemplate(
    id="data-analyst",
    name="Data Analyst Agent",
    description=(
        "Specializes in CSV data processing, statistical analysis, visualization, "
        "and report generation. Ideal for data exploration, business intelligence, "
        "and automated reporting workflows."
    ),
    capability_tags=["data-processing", "statistics", "visualization", "reporting", "file-access"],
    ideal_for=[
        "Automated data analysis and reporting",
        "CSV file processing and transformation",
        "Statistical analysis and insights generation",
        "Business intelligence dashboards",
        "Data quality assessment and validation",
    ],
    interaction_styles=["task-focused"],
    system_prompt=(
        "You are a data analyst agent specializing in CSV processing and statistical analysis."
    ),
    required_dependencies=["claude-agent-sdk", "pandas", "matplotlib"],
    default_tools=[
        ToolConfiguration(
            name="read_csv",
            description="Parse a CSV file into rows, honouring delimiter and encoding",
            parameters={"file_path": "string", "delimiter": "string", "encoding": "string"},
            required_permissions=["file-read"],
        ),
        ToolConfiguration(
            name="analyze_data",
            description="Compute descriptive, correlation or regression statistics",
            parameters={"analysis_type": "string", "columns": "array"},
        ),
    ],
    planning_checklist=[
        "Define target data formats and delimiters (CSV, TSV, custom)",
        "Identify required statistical analyses (descriptive, correlation, regression)",
        "Select visualization types and report output formats",
        "Plan data validation and error handling strategy",
    ],
    architecture_patterns=[
        "Pipeline Architecture: CSV Reader -> Validator -> Analyzer -> Visualizer -> Exporter",
        "Streaming Processing: chunked reads for large CSV files",
        "Stateless Design: each tool invocation is independent",
    ],
    risk_considerations=[
        "Large File Processing: files over 100MB may exhaust memory",
        "Data Quality: missing values and inconsistent types can break analysis",
        "Security: validate file paths to prevent directory traversal",
    ],
    success_criteria=[
        "Parse CSV files with common delimiters and encodings",
        "Descriptive statistics match reference implementations",
        "Process a 10,000-row file in under 10 seconds",
    ],
    implementation_guidance=[
        "Start with the CSV reading tool and stream large files",
        "Implement statistical analysis on top of pandas",
        "Return chart configurations rather than rendered images",
    ],
    document_sections=build_document_sections(
        guidance={
            "architecture": [
                "Describe the CSV parsing strategy, statistical modules and report templating",
            ],
            "testing": ["Include messy fixtures: missing values, mixed types, large files"],
            "troubleshooting": ["Cover delimiter detection, encoding errors and non-numeric columns"],
        },
        examples={
            "overview": [
                "This Data Analyst agent processes CSV data files, performs statistical "
                "analysis, and generates reports with visualizations.",
            ],
            "implementation": [
                "src/tools/read_csv.py - CSV parsing with delimiter inference",
                "src/tools/analyze_data.py - mean, median, std dev, correlation, regression",
            ],
        },
    ),
)

# ── Content Creator ─────────────────────────────────────────────────────────

CONTENT_CREATOR = AgentTemplate(
    id="content-creator",
    name="Content Creator Agent",
    description=(
        "Specializes in blog posts, documentation, marketing copy, and SEO "
        "optimization. Ideal for content marketing, technical writing, and "
        "multi-platform content generation."
    ),
    capability_tags=["content-creation", "seo", "writing", "marketing", "documentation"],
    ideal_for=[
        "Blog post generation and publishing workflows",
        "Technical documentation and API guides",
        "Marketing copy and campaign content",
        "SEO-optimized content production",
        "Multi-platform content formatting",
    ],
    interaction_styles=["conversational", "collaborative"],
    system_prompt=(
        "You are a content creator agent specializing in blog posts, SEO "
        "optimization, and multi-platform formatting."
    ),
    required_dependencies=["claude-agent-sdk", "markdown"],
    default_tools=[
        ToolConfiguration(
            name="generate_outline",
            description="Produce a hierarchical outline for a content type and audience",
            parameters={"topic": "string", "content_type": "string", "tone": "string"},
        ),
    ],
    recommended_integrations=["WordPress API", "Medium API"],
    planning_checklist=[
        "Define target content types (blog posts, documentation, marketing copy)",
        "Identify supported tones and perspectives",
        "Select SEO optimization features (keyword density, readability scoring)",
        "Plan platform-specific formatting (WordPress, Medium, GitHub)",
    ],
    architecture_patterns=[
        "Pipeline Architecture: Outline Generator -> Section Writer -> SEO Optimizer -> Formatter",
        "Template-based Generation: content templates per content type",
    ],
    risk_considerations=[
        "Content Quality: generated content may need human review",
        "SEO Over-optimization: keyword stuffing when density targets are too high",
        "Plagiarism Risk: ensure content is original",
    ],
    success_criteria=[
        "Sections match requested tone and word count within 10%",
        "Readability above 60 (Flesch-Kincaid)",
    ],
    implementation_guidance=[
        "Start with outline generation",
        "Build the section writer with tone and perspective controls",
        "Add SEO scoring and platform formatters",
    ],
    document_sections=build_document_sections(
        guidance={
            "architecture": ["Describe outline generation, tone control and platform adapters"],
            "testing": ["Verify tone, word count targeting and platform rendering"],
        },
        examples={
            "overview": [
                "This Content Creator agent drafts blog posts and documentation and "
                "optimizes them for search.",
            ],
        },
    ),
)

# ── Code Assistant ──────────────────────────────────────────────────────────

CODE_ASSISTANT = AgentTemplate(
    id="code-assistant",
    name="Code Assistant Agent",
    description=(
        "Specializes in code review, refactoring suggestions, test generation, and "
        "debugging assistance. Ideal for code quality improvement, technical debt "
        "reduction, and development workflows."
    ),
    capability_tags=["code-review", "refactoring", "testing", "debugging", "development"],
    ideal_for=[
        "Automated code review and quality checks",
        "Refactoring legacy code and technical debt reduction",
        "Test case generation and coverage improvement",
        "Debugging assistance and root cause analysis",
        "Code documentation and explanation",
    ],
    interaction_styles=["task-focused", "collaborative"],
    system_prompt=(
        "You are a code assistant agent specializing in code review, refactoring, "
        "test generation, and debugging."
    ),
    required_dependencies=["claude-agent-sdk"],
    default_tools=[
        ToolConfiguration(
            name="review_code",
            description="Report code smells and issues with severity for a source file",
            parameters={"file_path": "string", "language": "string"},
            required_permissions=["file-read"],
        ),
        ToolConfiguration(
            name="run_tests",
            description="Run the project's test suite and return the results",
            parameters={"path": "string"},
            required_permissions=["code-execution"],
        ),
    ],
    recommended_integrations=["GitHub API", "GitLab API"],
    planning_checklist=[
        "Define target programming languages",
        "Identify review types (quality, security, performance, style)",
        "Determine test frameworks (pytest, Jest, Go testing)",
        "Choose static analysis tools to integrate",
    ],
    architecture_patterns=[
        "Pipeline Architecture: Parser -> Analyzer -> Suggestion Generator -> Formatter",
        "AST-based Analysis: structural code understanding via syntax trees",
    ],
    risk_considerations=[
        "False Positives: valid patterns flagged as issues",
        "Breaking Changes: refactoring suggestions applied incorrectly",
        "Sandboxing: executed code must run with restricted permissions",
    ],
    success_criteria=[
        "Refactoring suggestions pass existing tests",
        "Generated tests reach 70% coverage of target functions",
    ],
    implementation_guidance=[
        "Start with parsing and AST analysis",
        "Build the review engine and severity classification",
        "Add test generation and sandboxed execution",
    ],
    document_sections=build_document_sections(
        guidance={
            "architecture": ["Describe language adapters, AST parsing and sandboxing"],
            "troubleshooting": ["Cover parse failures and sandbox timeouts"],
        },
        examples={
            "overview": [
                "This Code Assistant agent reviews pull requests, suggests refactorings "
                "and generates tests.",
            ],
        },
    ),
)

# ── Research Agent ──────────────────────────────────────────────────────────

RESEARCH_AGENT = AgentTemplate(
    id="research-agent",
    name="Research Agent",
    description=(
        "Specializes in web search, content extraction, fact-checking, and source "
        "verification. Ideal for information gathering, competitive research, and "
        "knowledge synthesis."
    ),
    capability_tags=["web-search", "data-extraction", "fact-checking", "research", "synthesis"],
    ideal_for=[
        "Competitive research and market analysis",
        "Automated fact-checking and source verification",
        "Content aggregation and knowledge synthesis",
        "Due diligence and background research",
        "Literature review and citation gathering",
    ],
    interaction_styles=["conversational"],
    system_prompt=(
        "You are a research agent specializing in web search, content extraction, "
        "fact-checking, and source verification."
    ),
    required_dependencies=["claude-agent-sdk", "httpx", "beautifulsoup4"],
    default_tools=[
        ToolConfiguration(
            name="web_search",
            description="Search the web and return ranked, de-duplicated results",
            parameters={"query": "string", "max_results": "integer"},
            required_permissions=["network"],
        ),
        ToolConfiguration(
            name="extract_content",
            description="Fetch a page and extract its main content and metadata",
            parameters={"url": "string"},
            required_permissions=["network"],
        ),
    ],
    recommended_integrations=["Google Search API", "Bing Search API"],
    planning_checklist=[
        "Define target search engines",
        "Identify content extraction needs (full text, summary, metadata)",
        "Select fact verification approach (multi-source cross-referencing)",
        "Design caching strategy for search results and extracted content",
    ],
    architecture_patterns=[
        "Pipeline Architecture: Search -> Extract -> Verify -> Synthesize -> Report",
        "Caching Layer: cache search results to reduce redundant requests",
    ],
    risk_considerations=[
        "Data Freshness: cached results become stale",
        "Source Credibility: credibility scoring is heuristic",
        "Content Access: paywalls and JavaScript rendering limit coverage",
    ],
    success_criteria=[
        "Extract main content from over 95% of standard HTML pages",
        "Synthesized reports carry properly formatted citations",
    ],
    implementation_guidance=[
        "Start with web search and result de-duplication",
        "Build the content extractor",
        "Add cross-source fact verification and synthesis",
    ],
    document_sections=build_document_sections(
        guidance={
            "architecture": ["Describe search aggregation, extraction and credibility scoring"],
            "monitoring": ["Track search API quota and extraction failure rate"],
        },
        examples={
            "overview": [
                "This Research Agent gathers sources, verifies claims and writes "
                "cited summaries.",
            ],
        },
    ),
)

# ── Automation Agent ────────────────────────────────────────────────────────

AUTOMATION_AGENT = AgentTemplate(
    id="automation-agent",
    name="Automation Agent",
    description=(
        "Specializes in task scheduling, workflow orchestration, queue management, "
        "and process automation. Ideal for repetitive task automation, workflow "
        "optimization, and system integration."
    ),
    capability_tags=["automation", "scheduling", "workflow", "orchestration", "integration"],
    ideal_for=[
        "Repetitive task automation and elimination",
        "Multi-step workflow orchestration",
        "Task queue management and processing",
        "System integration and data synchronization",
        "Scheduled job execution and monitoring",
    ],
    interaction_styles=["task-focused"],
    system_prompt=(
        "You are an automation agent specializing in task scheduling, workflow "
        "orchestration, and queue management."
    ),
    required_dependencies=["claude-agent-sdk", "apscheduler", "redis"],
    default_tools=[
        ToolConfiguration(
            name="schedule_task",
            description="Register a task on a cron schedule",
            parameters={"task": "string", "cron": "string", "timezone": "string"},
        ),
    ],
    recommended_integrations=["Redis", "PostgreSQL"],
    planning_checklist=[
        "Define task scheduling needs (cron expressions, timezones)",
        "Identify workflow patterns (sequential, parallel, conditional)",
        "Select a queue backend",
        "Plan the retry strategy (max retries, backoff, failure handling)",
    ],
    architecture_patterns=[
        "Event-Driven Architecture: react to cron triggers, webhooks and queue messages",
        "DAG Execution: workflows as directed acyclic graphs",
        "Retry with Exponential Backoff",
    ],
    risk_considerations=[
        "State Management: workflow state must survive restarts",
        "Retry Storms: aggressive retries overwhelm external systems",
        "Queue Backlog: slow processing causes unbounded growth",
    ],
    success_criteria=[
        "Workflows with parallel and conditional steps run without deadlocks",
        "Queue latency under 5s at P95",
    ],
    implementation_guidance=[
        "Start with task scheduling",
        "Build the workflow engine with cycle detection",
        "Add the queue manager and integration hub",
    ],
    document_sections=build_document_sections(
        guidance={
            "architecture": ["Describe the scheduler, DAG executor and queue backend"],
            "maintenance": ["Review dead-letter queues and retry policies"],
        },
        examples={
            "overview": [
                "This Automation Agent runs scheduled workflows and syncs data "
                "between systems.",
            ],
        },
    ),
)

ALL_TEMPLATES: tuple[AgentTemplate, ...] = (
    DATA_ANALYST,
    CONTENT_CREATOR,
    CODE_ASSISTANT,
    RESEARCH_AGENT,
    AUTOMATION_AGENT,
)

_TEMPLATES_BY_ID: dict[str, AgentTemplate] = {t.id: t for t in ALL_TEMPLATES}


def get_template_by_id(template_id: str) -> AgentTemplate | None:
    """Return the template with this id, or None if unknown."""
    return _TEMPLATES_BY_ID.get(template_id)


def get_templates_by_capability(tag: str) -> list[AgentTemplate]:
    """Templates whose capability tags include ``tag``, in declaration order."""
    return [t for t in ALL_TEMPLATES if tag in t.capability_tags]
