"""Static interview question catalog.

Fifteen questions across four answerable stages. Question ids are stable
identifiers: derivation rules are keyed by them, so renaming one here without
updating ``derivation.DERIVATION_RULES`` breaks profile building (covered by
tests).

Exports:
    INTERVIEW_QUESTIONS: All questions in interview order.
    STAGE_ORDER: Ordered stages, ending with the terminal COMPLETE stage.
    get_question: Lookup by id.
    get_questions_for_stage: Ordered questions belonging to one stage.
    question_position: (stage, index) owning a question id.
"""

from __future__ import annotations

from src.advisor.interview.schemas import InterviewStage, Question, QuestionType

STAGE_ORDER: list[InterviewStage] = [
    InterviewStage.DISCOVERY,
    InterviewStage.REQUIREMENTS,
    InterviewStage.ARCHITECTURE,
    InterviewStage.OUTPUT,
    InterviewStage.COMPLETE,
]

INTERVIEW_QUESTIONS: tuple[Question, ...] = (
    # ── Discovery ───────────────────────────────────────────────────────────
    Question(
        id="q1_agent_name",
        stage=InterviewStage.DISCOVERY,
        text="What is the name of your agent?",
        type=QuestionType.TEXT,
        required=True,
        hint="Choose a descriptive name that reflects the agent's purpose",
    ),
    Question(
        id="q2_primary_outcome",
        stage=InterviewStage.DISCOVERY,
        text="What is the primary outcome or goal this agent should achieve?",
        type=QuestionType.TEXT,
        required=True,
        hint="Be specific about what success looks like for this agent",
    ),
    Question(
        id="q3_target_audience",
        stage=InterviewStage.DISCOVERY,
        text="Who are the target users or audience for this agent?",
        type=QuestionType.MULTISELECT,
        required=True,
        options=(
            "Developers",
            "End Users",
            "Business Analysts",
            "Data Scientists",
            "Product Managers",
            "Customer Support",
            "Other",
        ),
        hint="Select all that apply",
    ),
    # ── Requirements ────────────────────────────────────────────────────────
    Question(
        id="q4_interaction_style",
        stage=InterviewStage.REQUIREMENTS,
        text="What interaction style should the agent use?",
        type=QuestionType.CHOICE,
        required=True,
        options=("conversational", "task-focused", "collaborative"),
        hint=(
            "Conversational: friendly dialogue, Task-focused: direct and efficient, "
            "Collaborative: partner-like engagement"
        ),
    ),
    Question(
        id="q5_delivery_channels",
        stage=InterviewStage.REQUIREMENTS,
        text="Through which channels will this agent be accessible?",
        type=QuestionType.MULTISELECT,
        required=True,
        options=(
            "CLI",
            "Web Application",
            "Mobile App",
            "IDE Extension",
            "API",
            "Slack/Discord",
            "Other",
        ),
        hint="Select all delivery channels you plan to support",
    ),
    Question(
        id="q6_success_metrics",
        stage=InterviewStage.REQUIREMENTS,
        text="How will you measure the success of this agent?",
        type=QuestionType.MULTISELECT,
        required=True,
        options=(
            "User satisfaction scores",
            "Task completion rate",
            "Response accuracy",
            "Processing speed",
            "Cost efficiency",
            "User engagement",
            "Other",
        ),
        hint="Select the most important success metrics",
    ),
    # ── Architecture ────────────────────────────────────────────────────────
    Question(
        id="q7_memory_needs",
        stage=InterviewStage.ARCHITECTURE,
        text="What level of memory capability does the agent need?",
        type=QuestionType.CHOICE,
        required=True,
        options=("none", "short-term", "long-term"),
        hint=(
            "None: stateless, Short-term: session context, "
            "Long-term: persistent across sessions"
        ),
    ),
    Question(
        id="q8_file_access",
        stage=InterviewStage.ARCHITECTURE,
        text="Does the agent need to access or manipulate files?",
        type=QuestionType.BOOLEAN,
        required=True,
        hint="File operations include reading, writing, or modifying local files",
    ),
    Question(
        id="q9_web_access",
        stage=InterviewStage.ARCHITECTURE,
        text="Does the agent need web browsing or API access capabilities?",
        type=QuestionType.BOOLEAN,
        required=True,
        hint="Enable this for agents that need to fetch data from external sources",
    ),
    Question(
        id="q10_code_execution",
        stage=InterviewStage.ARCHITECTURE,
        text="Does the agent need to execute code or run scripts?",
        type=QuestionType.BOOLEAN,
        required=True,
        hint="This includes running commands, scripts, or evaluating code",
    ),
    Question(
        id="q11_data_analysis",
        stage=InterviewStage.ARCHITECTURE,
        text="Will the agent perform data analysis or processing tasks?",
        type=QuestionType.BOOLEAN,
        required=True,
        hint="Enable for agents that analyze datasets, generate reports, or process data",
    ),
    Question(
        id="q12_tool_integrations",
        stage=InterviewStage.ARCHITECTURE,
        text="What external tools or services should the agent integrate with?",
        type=QuestionType.TEXT,
        required=False,
        hint="Comma-separated list (e.g., GitHub, Jira, Slack, Database)",
        follow_up="These will be configured as MCP servers or custom tools",
    ),
    # ── Output ──────────────────────────────────────────────────────────────
    Question(
        id="q13_runtime_preference",
        stage=InterviewStage.OUTPUT,
        text="Where do you plan to deploy and run this agent?",
        type=QuestionType.CHOICE,
        required=True,
        options=("cloud", "local", "hybrid"),
        hint="Cloud: managed services, Local: on-premises, Hybrid: both environments",
    ),
    Question(
        id="q14_constraints",
        stage=InterviewStage.OUTPUT,
        text="Are there any specific constraints or limitations to consider?",
        type=QuestionType.TEXT,
        required=False,
        hint="Budget limits, compliance requirements, technology restrictions, etc.",
    ),
    Question(
        id="q15_additional_notes",
        stage=InterviewStage.OUTPUT,
        text="Any additional requirements or preferences?",
        type=QuestionType.TEXT,
        required=False,
        hint="Share any other context that might help configure the agent",
    ),
)

_QUESTIONS_BY_ID: dict[str, Question] = {q.id: q for q in INTERVIEW_QUESTIONS}


def get_question(question_id: str) -> Question | None:
    """Return the question with this id, or None if unknown."""
    return _QUESTIONS_BY_ID.get(question_id)


def get_questions_for_stage(stage: InterviewStage) -> list[Question]:
    """Return the questions of one stage in interview order (empty for COMPLETE)."""
    return [q for q in INTERVIEW_QUESTIONS if q.stage == stage]


def question_position(question_id: str) -> tuple[InterviewStage, int] | None:
    """Return (stage, index within stage) for a question id, or None if unknown."""
    question = get_question(question_id)
    if question is None:
        return None
    stage_questions = get_questions_for_stage(question.stage)
    return question.stage, stage_questions.index(question)
