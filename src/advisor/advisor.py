"""Agent Advisor controller facade.

Wires the interview state machine, the classifier, partial-mode preview and
the recommendation assembler together for a single session, and exposes the
session lifecycle (start, resume, finalize) to presentation collaborators.

Exports:
    AgentAdvisor: Controller for one advisory session.
    InterviewIncompleteError: Raised when finalizing an unfinished interview.
"""

from __future__ import annotations

import structlog

from src.advisor.classification.classifier import AgentClassifier
from src.advisor.classification.partial import partial_archetype
from src.advisor.classification.schemas import ClassificationResult, PartialClassification
from src.advisor.interview.derivation import InvalidResponseError, derive_profile
from src.advisor.interview.machine import InterviewStateMachine
from src.advisor.interview.schemas import Session
from src.advisor.persistence.outbox import SessionOutbox
from src.advisor.persistence.store import PersistenceError, SessionStore
from src.advisor.recommendations.assembler import RecommendationAssembler
from src.advisor.recommendations.schemas import AgentRecommendation

logger = structlog.get_logger(__name__)


class InterviewIncompleteError(ValueError):
    """Raised when a recommendation is requested before the interview completes."""

    def __init__(self, session_id: str, current_stage: str) -> None:
        self.session_id = session_id
        self.current_stage = current_stage
        super().__init__(
            f"Session {session_id} is not complete (current stage: {current_stage})"
        )


class AgentAdvisor:
    """Controller for one advisory session.

    Args:
        machine: State machine owning the session.
        classifier: Full-mode classifier. Defaults to the built-in catalog.
        assembler: Recommendation assembler.
    """

    def __init__(
        self,
        machine: InterviewStateMachine,
        *,
        classifier: AgentClassifier | None = None,
        assembler: RecommendationAssembler | None = None,
    ) -> None:
        self.machine = machine
        self._classifier = classifier or AgentClassifier()
        self._assembler = assembler or RecommendationAssembler()
        self.last_classification: ClassificationResult | None = None

    # ── Lifecycle ───────────────────────────────────────────────────────

    @classmethod
    def start(
        cls,
        session_id: str | None = None,
        outbox: SessionOutbox | None = None,
        **kwargs,
    ) -> AgentAdvisor:
        """Begin a fresh interview, optionally under a caller-chosen id."""
        session = Session(session_id=session_id) if session_id else Session()
        machine = InterviewStateMachine(session, outbox=outbox)
        logger.info("advisor.session_started", session_id=session.session_id)
        if outbox is not None:
            outbox.submit(session)
        return cls(machine, **kwargs)

    @classmethod
    async def resume(
        cls,
        store: SessionStore,
        session_id: str | None = None,
        outbox: SessionOutbox | None = None,
        **kwargs,
    ) -> AgentAdvisor | None:
        """Restore a stored session (the latest one when no id is given).

        Returns:
            The advisor, or None when no session exists or the stored
            snapshot cannot be read.
        """
        try:
            session = await store.load(session_id)
        except PersistenceError as exc:
            logger.warning(
                "advisor.resume_failed",
                session_id=session_id,
                error=str(exc),
            )
            return None

        if session is None:
            logger.info("advisor.resume_not_found", session_id=session_id)
            return None

        # Rebuild the profile from the ledger so derivation stays the single owner
        try:
            session.requirements = derive_profile(session.responses)
        except InvalidResponseError as exc:
            logger.warning(
                "advisor.resume_invalid_ledger",
                session_id=session.session_id,
                question_id=exc.question_id,
                error=str(exc),
            )
            return None

        logger.info(
            "advisor.session_resumed",
            session_id=session.session_id,
            stage=session.current_stage.value,
            answered=len(session.responses),
        )
        return cls(InterviewStateMachine(session, outbox=outbox), **kwargs)

    # ── Classification ──────────────────────────────────────────────────

    def live_archetype(self) -> PartialClassification:
        """Provisional archetype for the in-progress profile."""
        answered = len(self.machine.answered_questions())
        return partial_archetype(self.machine.requirements, answered)

    def finalize(self) -> AgentRecommendation:
        """Classify the completed profile and attach the recommendation.

        Raises:
            InterviewIncompleteError: If the interview is not complete.
            ClassificationInputError: If required profile fields are missing.
        """
        if not self.machine.is_complete:
            raise InterviewIncompleteError(
                self.machine.session_id, self.machine.current_stage.value
            )

        profile = self.machine.requirements
        classification = self._classifier.classify(profile)
        template = next(
            t for t in self._classifier.templates if t.id == classification.primary_recommendation
        )
        recommendation = self._assembler.assemble(template, profile, classification)

        self.last_classification = classification
        self.machine.set_recommendation(recommendation)
        logger.info(
            "advisor.finalized",
            session_id=self.machine.session_id,
            agent_type=recommendation.agent_type,
            confidence=classification.confidence,
        )
        return recommendation
