"""Shared test fixtures for the advisor test suite.

Provides:
- Answer scripts covering every interview question
- A fully answered InterviewStateMachine
- Profile factories for classification and assembly tests
- An in-memory session store and outbox
- Settings cache reset around every test
"""

from __future__ import annotations

import pytest

from src.advisor.config import get_settings
from src.advisor.interview.derivation import derive_profile
from src.advisor.interview.machine import InterviewStateMachine
from src.advisor.interview.schemas import (
    AgentCapabilities,
    InteractionStyle,
    MemoryLevel,
    RequirementsProfile,
)
from src.advisor.persistence.outbox import SessionOutbox
from src.advisor.persistence.store import InMemorySessionStore

# Answers for every question, in interview order.
DATA_ANALYST_ANSWERS: list[tuple[str, object]] = [
    ("q1_agent_name", "Sales Insights"),
    ("q2_primary_outcome", "Analyze CSV sales data and produce weekly reports"),
    ("q3_target_audience", ["Business Analysts"]),
    ("q4_interaction_style", "task-focused"),
    ("q5_delivery_channels", ["CLI"]),
    ("q6_success_metrics", ["Response accuracy"]),
    ("q7_memory_needs", "none"),
    ("q8_file_access", True),
    ("q9_web_access", False),
    ("q10_code_execution", False),
    ("q11_data_analysis", True),
    ("q12_tool_integrations", ""),
    ("q13_runtime_preference", "local"),
    ("q14_constraints", "No cloud uploads"),
    ("q15_additional_notes", "Quarterly board deck too"),
]


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Ensure settings read from a clean environment in every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def answers() -> list[tuple[str, object]]:
    return list(DATA_ANALYST_ANSWERS)


@pytest.fixture
def machine() -> InterviewStateMachine:
    """Fresh state machine without persistence."""
    return InterviewStateMachine()


@pytest.fixture
def completed_machine(answers) -> InterviewStateMachine:
    """State machine with every question answered."""
    sm = InterviewStateMachine()
    for question_id, value in answers:
        sm.record_response(question_id, value)
    return sm


@pytest.fixture
def data_profile(answers) -> RequirementsProfile:
    """Complete profile for a data analysis agent."""
    return derive_profile(dict(answers))


def make_profile(
    *,
    name: str | None = "Helper",
    outcome: str | None = "analyze csv data",
    style: InteractionStyle | None = InteractionStyle.TASK_FOCUSED,
    memory: MemoryLevel = MemoryLevel.NONE,
    file_access: bool = False,
    web_access: bool = False,
    code_execution: bool = False,
    data_analysis: bool = False,
    integrations: list[str] | None = None,
    with_capabilities: bool = True,
    **extra,
) -> RequirementsProfile:
    """Build a RequirementsProfile with specific fields set."""
    capabilities = None
    if with_capabilities:
        capabilities = AgentCapabilities(
            memory=memory,
            file_access=file_access,
            web_access=web_access,
            code_execution=code_execution,
            data_analysis=data_analysis,
            tool_integrations=integrations or [],
        )
    return RequirementsProfile(
        name=name,
        primary_outcome=outcome,
        description=f"Agent for: {outcome}" if outcome else None,
        interaction_style=style,
        capabilities=capabilities,
        **extra,
    )


@pytest.fixture
def profile_factory():
    """Factory building RequirementsProfile instances (see make_profile)."""
    return make_profile


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def outbox(store) -> SessionOutbox:
    return SessionOutbox(store)
