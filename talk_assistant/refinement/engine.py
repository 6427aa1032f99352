"""Refinement engine orchestrator for iterative talk improvement."""

import asyncio
import logging
import time
from typing import Optional

from talk_assistant.errors import SessionBusyError, SessionStateError
from talk_assistant.generation.composer import TalkComposer
from talk_assistant.models.conversation import ConversationLog, Speaker
from talk_assistant.models.document import Document
from talk_assistant.models.preferences import PreferenceSet

from .classifier import IntentClassifier, KeywordIntentClassifier
from .history import RefinementHistory
from .models import (
    Intent,
    NoOpReason,
    NoOpResult,
    RefinementConfig,
    RefinementResult,
    SessionState,
    SubmissionResult,
)
from .transformations import TransformationOutcome, TransformationRegistry

logger = logging.getLogger(__name__)

LEGACY_ACKNOWLEDGMENT = (
    "I understand you'd like to adjust the talk. Here are some suggestions "
    'based on your request: "{instruction}". Would you like me to revise a '
    "specific section or add more detail to certain points?"
)


class RefinementEngine:
    """
    Owns one talk session: composition followed by chat refinements.

    State flows IDLE -> AWAITING_COMPOSITION -> READY, then READY ->
    REFINING -> READY for every instruction. Only one instruction may be
    in flight at a time; a second concurrent submission is rejected.

    Supports:
    - Pluggable intent classifier and transformation registry
    - Append-only conversation log
    - Undo/redo over document snapshots

    Usage:
        engine = RefinementEngine()
        document = await engine.start(PreferenceSet(topic="Faith"))
        result = await engine.submit_instruction("Can you make this shorter?")
        print(result.response_text)
        print(result.document.render())
    """

    def __init__(
        self,
        config: Optional[RefinementConfig] = None,
        composer: Optional[TalkComposer] = None,
        classifier: Optional[IntentClassifier] = None,
        registry: Optional[TransformationRegistry] = None,
    ):
        self.config = config or RefinementConfig()
        self._composer = composer or TalkComposer()
        self._classifier = classifier or KeywordIntentClassifier()
        self._registry = registry or TransformationRegistry.default()

        self._state = SessionState.IDLE
        self._document: Optional[Document] = None
        self._original_document: Optional[Document] = None
        self._conversation = ConversationLog()
        self._history = RefinementHistory(max_entries=self.config.max_history)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def document(self) -> Optional[Document]:
        """The current talk, or None before composition."""
        return self._document

    @property
    def original_document(self) -> Optional[Document]:
        """The talk as first composed."""
        return self._original_document

    @property
    def conversation(self) -> ConversationLog:
        return self._conversation

    @property
    def history(self) -> RefinementHistory:
        return self._history

    def _transition(self, target: SessionState) -> None:
        logger.debug(f"Session state: {self._state.value} -> {target.value}")
        self._state = target

    def _ensure_ready(self) -> Document:
        """Ensure the session holds a talk and is not mid-refinement."""
        if self._state == SessionState.REFINING:
            raise SessionBusyError(
                "A refinement is already in progress for this session."
            )
        if self._state != SessionState.READY or self._document is None:
            raise SessionStateError(
                "No talk to refine yet. Call start() with preferences first."
            )
        return self._document

    async def start(self, preferences: PreferenceSet) -> Document:
        """
        Compose the initial talk for this session.

        Args:
            preferences: Preferences from the talk form

        Returns:
            The composed Document

        Raises:
            ValidationError: If the topic is rejected; the session stays IDLE
            SessionStateError: If the session was already started
        """
        if self._state != SessionState.IDLE:
            raise SessionStateError(
                f"Session already started (state: {self._state.value})."
            )

        self._transition(SessionState.AWAITING_COMPOSITION)
        try:
            document = self._composer.compose(preferences)
        except Exception:
            self._transition(SessionState.IDLE)
            raise

        self._document = document
        self._original_document = document
        self._transition(SessionState.READY)

        logger.info(f"Session ready with {len(document.sections)} sections")
        return document

    async def submit_instruction(self, instruction: str) -> SubmissionResult:
        """
        Apply a free-form refinement instruction to the current talk.

        Args:
            instruction: Natural language instruction

        Returns:
            RefinementResult when the talk changed, NoOpResult otherwise

        Raises:
            SessionBusyError: If another instruction is still being applied
            SessionStateError: If no talk has been composed yet
        """
        original = self._ensure_ready()

        if not instruction.strip():
            logger.debug("Ignoring empty instruction")
            return NoOpResult(
                reason=NoOpReason.EMPTY_INSTRUCTION,
                instruction=instruction,
                document=original,
            )

        start_time = time.time()
        self._transition(SessionState.REFINING)
        try:
            intent = self._classifier.classify(instruction)
            transformation = self._registry.get(intent)

            if self.config.response_delay_seconds:
                await asyncio.sleep(self.config.response_delay_seconds)

            outcome = transformation.apply(original, instruction)
            return self._record(instruction, intent, original, outcome, start_time)
        finally:
            self._transition(SessionState.READY)

    def _record(
        self,
        instruction: str,
        intent: Intent,
        original: Document,
        outcome: TransformationOutcome,
        start_time: float,
    ) -> SubmissionResult:
        """Log both turns and store the outcome of a transformation."""
        response_text = outcome.response_text
        if not outcome.changed and self.config.claim_success_on_noop:
            response_text = LEGACY_ACKNOWLEDGMENT.format(instruction=instruction)

        self._conversation.append(Speaker.USER, instruction)
        self._conversation.append(Speaker.ASSISTANT, response_text)

        if not outcome.changed and not self.config.claim_success_on_noop:
            logger.info(f"Instruction left the talk unchanged ({intent.value})")
            return NoOpResult(
                reason=NoOpReason.NO_STRUCTURAL_CHANGE,
                instruction=instruction,
                document=original,
                response_text=response_text,
                intent=intent,
            )

        result = RefinementResult(
            intent=intent,
            instruction=instruction,
            original_document=original,
            document=outcome.document,
            response_text=response_text,
            changes_summary=outcome.changes_summary,
            latency_ms=(time.time() - start_time) * 1000,
        )

        if outcome.changed:
            self._document = outcome.document
            self._history.add(result)

        logger.info(
            f"Refinement complete ({intent.value}): "
            f"{len(result.changes_summary)} changes, {result.latency_ms:.1f}ms"
        )
        return result

    def undo(self) -> Optional[Document]:
        """Revert the last refinement; returns the restored talk or None."""
        self._ensure_ready()
        document = self._history.undo()
        if document is not None:
            self._document = document
        return document

    def redo(self) -> Optional[Document]:
        """Reapply the last undone refinement; returns the talk or None."""
        self._ensure_ready()
        document = self._history.redo()
        if document is not None:
            self._document = document
        return document
