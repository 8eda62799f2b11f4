"""Interview state machine.

Owns one Session and advances/rewinds its stage and question pointer. The
Response Ledger and the derived RequirementsProfile are mutated together on
every answer; navigation never touches the ledger.

Stage order: DISCOVERY -> REQUIREMENTS -> ARCHITECTURE -> OUTPUT -> COMPLETE.
Advancing past the last question of OUTPUT (or any stage whose successor is
COMPLETE) marks the session complete. The advance is unconditional: checking
that required questions were answered is the caller's responsibility, while
skip() itself refuses to skip a required question.

After every mutating operation the session's ``last_updated_at`` is stamped
and a snapshot is handed to the outbox, so in-memory state is always updated
before the persistence attempt is issued.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog

from src.advisor.interview.derivation import derive_requirements
from src.advisor.interview.questions import (
    INTERVIEW_QUESTIONS,
    STAGE_ORDER,
    get_questions_for_stage,
    question_position,
)
from src.advisor.interview.schemas import (
    InterviewStage,
    Progress,
    Question,
    RequirementsProfile,
    ResponseValue,
    Session,
)
from src.advisor.recommendations.schemas import AgentRecommendation

if TYPE_CHECKING:
    from src.advisor.persistence.outbox import SessionOutbox

logger = structlog.get_logger(__name__)


class QuestionMismatchError(ValueError):
    """Raised when an answer targets a question other than the current one."""

    def __init__(self, expected: str | None, received: str) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Cannot record response for {received}: current question is "
            f"{expected or 'none (interview complete)'}"
        )


class RequiredQuestionError(ValueError):
    """Raised when skip() is called on a required question."""

    def __init__(self, question_id: str) -> None:
        self.question_id = question_id
        super().__init__(f"Question {question_id} is required and cannot be skipped")


class InterviewStateMachine:
    """Deterministic controller for one interview session.

    Reads go through properties and query methods; writes only through
    record_response, skip, go_back, navigate_to, set_recommendation and reset.

    Args:
        session: Existing session to resume. A fresh one is created if None.
        outbox: Optional persistence outbox receiving a snapshot after every
            mutating operation.
    """

    def __init__(
        self,
        session: Session | None = None,
        *,
        outbox: SessionOutbox | None = None,
    ) -> None:
        self._session = session or Session()
        self._outbox = outbox

    # ── Read access ─────────────────────────────────────────────────────────

    @property
    def session(self) -> Session:
        """Deep copy of the session; mutating it does not affect the machine."""
        return self._session.model_copy(deep=True)

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def current_stage(self) -> InterviewStage:
        return self._session.current_stage

    @property
    def current_question_index(self) -> int:
        return self._session.current_question_index

    @property
    def is_complete(self) -> bool:
        return self._session.is_complete

    @property
    def requirements(self) -> RequirementsProfile:
        return self._session.requirements.model_copy(deep=True)

    @property
    def responses(self) -> dict[str, ResponseValue]:
        return dict(self._session.responses)

    @property
    def recommendation(self) -> AgentRecommendation | None:
        return self._session.recommendation

    def get_current_question(self) -> Question | None:
        """Return the question under the pointer, or None once complete."""
        if self._session.is_complete:
            return None
        stage_questions = get_questions_for_stage(self._session.current_stage)
        index = self._session.current_question_index
        if 0 <= index < len(stage_questions):
            return stage_questions[index]
        return None

    def answered_questions(self) -> list[Question]:
        """Questions with a recorded answer, in catalog order."""
        return [q for q in INTERVIEW_QUESTIONS if q.id in self._session.responses]

    def can_go_back(self) -> bool:
        return (
            self._session.current_question_index > 0
            or STAGE_ORDER.index(self._session.current_stage) > 0
        )

    def progress(self) -> Progress:
        """Answer-count based progress across all stages."""
        stage = self._session.current_stage
        total = len(INTERVIEW_QUESTIONS)
        answered = len(self.answered_questions())
        return Progress(
            current_stage=stage,
            stage_index=STAGE_ORDER.index(stage),
            question_in_stage=self._session.current_question_index,
            questions_in_current_stage=len(get_questions_for_stage(stage)),
            total_answered=answered,
            total_questions=total,
            percentage=round(100 * answered / total) if total else 0,
        )

    # ── Mutations ───────────────────────────────────────────────────────────

    def record_response(self, question_id: str, value: ResponseValue) -> None:
        """Record an answer for the current question and advance.

        Args:
            question_id: Must equal the current question's id.
            value: Answer matching the question's declared type.

        Raises:
            QuestionMismatchError: If ``question_id`` is not the current question
                (including after completion).
            InvalidResponseError: If ``value`` has the wrong shape.
        """
        current = self.get_current_question()
        if current is None or current.id != question_id:
            raise QuestionMismatchError(current.id if current else None, question_id)

        # Derive first so a rejected value leaves the session untouched
        requirements = derive_requirements(self._session.requirements, question_id, value)
        stored = list(value) if isinstance(value, list) else value

        self._session.responses[question_id] = stored
        self._session.requirements = requirements
        # The ledger changed, so any earlier recommendation is stale
        self._session.recommendation = None
        self._advance()

        logger.info(
            "interview.response_recorded",
            session_id=self._session.session_id,
            question_id=question_id,
            stage=self._session.current_stage.value,
            question_index=self._session.current_question_index,
        )
        self._persist()

    def skip(self) -> bool:
        """Advance past the current optional question without answering it.

        Returns:
            True if the pointer moved, False when the interview is complete.

        Raises:
            RequiredQuestionError: If the current question is required.
        """
        current = self.get_current_question()
        if current is None:
            return False
        if current.required:
            logger.warning(
                "interview.skip_rejected",
                session_id=self._session.session_id,
                question_id=current.id,
            )
            raise RequiredQuestionError(current.id)

        self._advance()
        logger.info(
            "interview.question_skipped",
            session_id=self._session.session_id,
            question_id=current.id,
        )
        self._persist()
        return True

    def go_back(self) -> bool:
        """Move the pointer to the previous question.

        Returns:
            True if the pointer moved, False at the very first question.
        """
        session = self._session
        if session.current_question_index > 0:
            session.current_question_index -= 1
            self._persist()
            return True

        previous = self._get_previous_stage(session.current_stage)
        if previous is None:
            return False

        session.current_stage = previous
        session.current_question_index = max(0, len(get_questions_for_stage(previous)) - 1)
        session.is_complete = False
        logger.debug(
            "interview.stage_rewound",
            session_id=session.session_id,
            stage=previous.value,
        )
        self._persist()
        return True

    def navigate_to(self, question_id: str) -> bool:
        """Jump to the question with this id, keeping every recorded answer.

        Returns:
            True if the pointer moved, False for an unknown id.
        """
        position = question_position(question_id)
        if position is None:
            logger.debug("interview.navigate_unknown", question_id=question_id)
            return False

        stage, index = position
        self._session.current_stage = stage
        self._session.current_question_index = index
        self._session.is_complete = False
        self._persist()
        return True

    def set_recommendation(self, recommendation: AgentRecommendation) -> None:
        """Attach the assembled recommendation to the session."""
        self._session.recommendation = recommendation
        self._persist()

    def reset(self) -> None:
        """Abandon the current session and start a fresh one."""
        previous_id = self._session.session_id
        self._session = Session()
        logger.info(
            "interview.reset",
            previous_session_id=previous_id,
            session_id=self._session.session_id,
        )
        self._persist()

    # ── Internals ───────────────────────────────────────────────────────────

    def _advance(self) -> None:
        session = self._session
        next_index = session.current_question_index + 1
        if next_index < len(get_questions_for_stage(session.current_stage)):
            session.current_question_index = next_index
            return

        next_stage = self._get_next_stage(session.current_stage)
        session.current_question_index = 0
        if next_stage is None or next_stage == InterviewStage.COMPLETE:
            session.current_stage = InterviewStage.COMPLETE
            session.is_complete = True
            logger.info("interview.completed", session_id=session.session_id)
        else:
            session.current_stage = next_stage

    def _get_next_stage(self, current: InterviewStage) -> InterviewStage | None:
        idx = STAGE_ORDER.index(current)
        if idx >= len(STAGE_ORDER) - 1:
            return None
        return STAGE_ORDER[idx + 1]

    def _get_previous_stage(self, current: InterviewStage) -> InterviewStage | None:
        idx = STAGE_ORDER.index(current)
        if idx == 0:
            return None
        return STAGE_ORDER[idx - 1]

    def _persist(self) -> None:
        self._session.last_updated_at = datetime.now(timezone.utc)
        if self._outbox is not None:
            self._outbox.submit(self._session)


def get_required_unanswered(responses: dict[str, ResponseValue]) -> list[Question]:
    """Required questions missing from a ledger, in catalog order."""
    return [q for q in INTERVIEW_QUESTIONS if q.required and q.id not in responses]


__all__ = [
    "InterviewStateMachine",
    "QuestionMismatchError",
    "RequiredQuestionError",
    "get_required_unanswered",
]
