"""Pydantic data models for the interview domain.

Defines the structured types the interview flow is built from: stages and
question types, the immutable Question, the ResponseValue answer shapes, the
derived RequirementsProfile (with its capability and environment sub-records),
the Session aggregate root, and the Progress read model. These models are the
foundational types that the state machine, derivation rules, classifier and
persistence layer all depend on.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.advisor.recommendations.schemas import AgentRecommendation


# ── Enums ───────────────────────────────────────────────────────────────────


class InterviewStage(str, Enum):
    """Ordered interview phase. COMPLETE is terminal."""

    DISCOVERY = "discovery"
    REQUIREMENTS = "requirements"
    ARCHITECTURE = "architecture"
    OUTPUT = "output"
    COMPLETE = "complete"


class QuestionType(str, Enum):
    """Declared answer shape of a question."""

    TEXT = "text"
    CHOICE = "choice"
    MULTISELECT = "multiselect"
    BOOLEAN = "boolean"


class InteractionStyle(str, Enum):
    """How the generated agent engages with its users."""

    CONVERSATIONAL = "conversational"
    TASK_FOCUSED = "task-focused"
    COLLABORATIVE = "collaborative"


class MemoryLevel(str, Enum):
    """Memory the generated agent needs."""

    NONE = "none"
    SHORT_TERM = "short-term"
    LONG_TERM = "long-term"


class Runtime(str, Enum):
    """Where the generated agent will run."""

    CLOUD = "cloud"
    LOCAL = "local"
    HYBRID = "hybrid"


# A recorded answer. Its shape must match the question's QuestionType.
ResponseValue = str | bool | list[str]


# ── Question ────────────────────────────────────────────────────────────────


class Question(BaseModel):
    """One interview question. Defined once at import, never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str
    stage: InterviewStage
    text: str
    type: QuestionType
    required: bool
    options: tuple[str, ...] | None = None
    hint: str | None = None
    follow_up: str | None = None


# ── Requirements Profile ────────────────────────────────────────────────────


class AgentCapabilities(BaseModel):
    """Functional capabilities requested for the agent.

    The defaults are the all-false / ``none`` baseline that derivation
    installs the first time any capability-bearing question is answered.
    """

    memory: MemoryLevel = MemoryLevel.NONE
    file_access: bool = False
    web_access: bool = False
    code_execution: bool = False
    data_analysis: bool = False
    tool_integrations: list[str] = Field(default_factory=list)

    @property
    def enabled(self) -> list[str]:
        """Human-readable labels of every enabled capability, in field order."""
        labels: list[str] = []
        if self.memory != MemoryLevel.NONE:
            labels.append(f"{self.memory.value} memory")
        if self.file_access:
            labels.append("file access")
        if self.web_access:
            labels.append("web access")
        if self.code_execution:
            labels.append("code execution")
        if self.data_analysis:
            labels.append("data analysis")
        return labels


class EnvironmentPreferences(BaseModel):
    """Deployment environment preferences."""

    runtime: Runtime


class RequirementsProfile(BaseModel):
    """Structured requirements derived from the response ledger.

    Every field is optional until its governing question is answered, and
    every populated field is owned by exactly one question id (see
    ``src.advisor.interview.derivation.DERIVATION_RULES``).
    """

    name: str | None = None
    description: str | None = None
    primary_outcome: str | None = None
    target_audience: list[str] | None = None
    interaction_style: InteractionStyle | None = None
    delivery_channels: list[str] | None = None
    success_metrics: list[str] | None = None
    capabilities: AgentCapabilities | None = None
    environment: EnvironmentPreferences | None = None
    constraints: list[str] | None = None
    additional_notes: str | None = None


# ── Session ─────────────────────────────────────────────────────────────────


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session(BaseModel):
    """Aggregate root for one interview.

    Mutated only through InterviewStateMachine operations. Serialised as a
    full snapshot (``model_dump_json``) keyed by ``session_id`` so every
    persistence write is an idempotent overwrite.

    Invariant: ``is_complete`` is True iff ``current_stage`` is COMPLETE.
    """

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    current_stage: InterviewStage = InterviewStage.DISCOVERY
    current_question_index: int = Field(default=0, ge=0)
    responses: dict[str, ResponseValue] = Field(default_factory=dict)
    requirements: RequirementsProfile = Field(default_factory=RequirementsProfile)
    recommendation: AgentRecommendation | None = None
    is_complete: bool = False
    started_at: datetime = Field(default_factory=_utcnow)
    last_updated_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def _check_completion(self) -> Session:
        """Reject snapshots where is_complete disagrees with current_stage."""
        if self.is_complete != (self.current_stage == InterviewStage.COMPLETE):
            raise ValueError(
                f"is_complete={self.is_complete} contradicts "
                f"current_stage={self.current_stage.value}"
            )
        return self


class Progress(BaseModel):
    """Interview progress read model.

    ``percentage`` is answer-count based, so skips and out-of-order edits are
    reflected correctly.
    """

    current_stage: InterviewStage
    stage_index: int
    question_in_stage: int
    questions_in_current_stage: int
    total_answered: int
    total_questions: int
    percentage: int = Field(ge=0, le=100)
