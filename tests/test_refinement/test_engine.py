"""Tests for the refinement engine."""

import asyncio

import pytest

from talk_assistant.errors import SessionBusyError, SessionStateError, ValidationError
from talk_assistant.generation.composer import TalkComposer
from talk_assistant.generation.templates import BENEDICTION, SCRIPTURE_ELABORATION
from talk_assistant.models.conversation import Speaker
from talk_assistant.models.document import SectionKey
from talk_assistant.models.preferences import PreferenceSet
from talk_assistant.refinement import (
    Intent,
    NoOpReason,
    NoOpResult,
    RefinementConfig,
    RefinementEngine,
    RefinementResult,
    SessionState,
)
from talk_assistant.refinement.classifier import IntentClassifier


@pytest.fixture
def faith_preferences():
    return PreferenceSet(topic="Faith", include_scriptures=True)


@pytest.fixture
def engine():
    return RefinementEngine()


def all_text(document):
    return [line.text for _, _, line in document.iter_lines()]


class TestSessionStart:
    """Tests for composing the initial talk."""

    @pytest.mark.asyncio
    async def test_start_composes_document(self, engine, faith_preferences):
        assert engine.state == SessionState.IDLE
        assert engine.document is None

        document = await engine.start(faith_preferences)

        assert engine.state == SessionState.READY
        assert engine.document == document
        assert engine.original_document == document
        assert document.has_section(SectionKey.SCRIPTURAL_FOUNDATION)

    @pytest.mark.asyncio
    async def test_empty_topic_stays_idle(self, engine):
        """A rejected topic leaves the session startable."""
        with pytest.raises(ValidationError):
            await engine.start(PreferenceSet(topic="  "))

        assert engine.state == SessionState.IDLE
        assert engine.document is None

        await engine.start(PreferenceSet(topic="Hope"))
        assert engine.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_composer_failure_returns_to_idle(self, faith_preferences):
        """Any composer error leaves the session startable."""

        class BrokenComposer(TalkComposer):
            def compose(self, preferences):
                raise RuntimeError("template store unavailable")

        engine = RefinementEngine(composer=BrokenComposer())
        with pytest.raises(RuntimeError):
            await engine.start(faith_preferences)

        assert engine.state == SessionState.IDLE
        assert engine.document is None

    @pytest.mark.asyncio
    async def test_start_twice_rejected(self, engine, faith_preferences):
        await engine.start(faith_preferences)
        with pytest.raises(SessionStateError):
            await engine.start(faith_preferences)

    @pytest.mark.asyncio
    async def test_submit_before_start_rejected(self, engine):
        with pytest.raises(SessionStateError) as exc_info:
            await engine.submit_instruction("shorter")
        assert not isinstance(exc_info.value, SessionBusyError)


class TestSubmitInstruction:
    """Tests for refinement instructions."""

    @pytest.mark.asyncio
    async def test_shorten_scenario(self, engine, faith_preferences):
        """Shortening removes the scripture elaboration sentence."""
        await engine.start(faith_preferences)

        result = await engine.submit_instruction("Can you make this shorter?")

        assert isinstance(result, RefinementResult)
        assert result.intent == Intent.SHORTEN
        assert result.changed
        assert "shorter" in result.response_text.lower()
        assert SCRIPTURE_ELABORATION.format(topic="Faith") not in all_text(result.document)
        assert engine.document == result.document
        assert engine.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_turns_logged(self, engine, faith_preferences):
        await engine.start(faith_preferences)
        result = await engine.submit_instruction("Can you make this shorter?")

        turns = engine.conversation.turns
        assert [turn.speaker for turn in turns] == [Speaker.USER, Speaker.ASSISTANT]
        assert turns[0].text == "Can you make this shorter?"
        assert turns[1].text == result.response_text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("instruction", ["", "   ", "\n"])
    async def test_empty_instruction(self, engine, faith_preferences, instruction):
        """Empty instructions are ignored without logging."""
        document = await engine.start(faith_preferences)

        result = await engine.submit_instruction(instruction)

        assert isinstance(result, NoOpResult)
        assert result.reason == NoOpReason.EMPTY_INSTRUCTION
        assert result.document == document
        assert len(engine.conversation) == 0
        assert engine.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_add_scripture_twice(self, engine, faith_preferences):
        """Each scripture request inserts exactly one citation."""
        document = await engine.start(faith_preferences)
        baseline = document.citation_count()

        first = await engine.submit_instruction("add a scripture")
        assert first.document.citation_count() >= 2
        assert first.document.citation_count() == baseline + 1

        second = await engine.submit_instruction("add a scripture")
        assert second.document.citation_count() == baseline + 2
        assert len(engine.conversation) == 4

    @pytest.mark.asyncio
    async def test_noop_reported_honestly(self, engine):
        """A talk without scripture reports that nothing changed."""
        document = await engine.start(PreferenceSet(topic="Faith"))

        result = await engine.submit_instruction("add a scripture")

        assert isinstance(result, NoOpResult)
        assert result.reason == NoOpReason.NO_STRUCTURAL_CHANGE
        assert result.intent == Intent.ADD_SCRIPTURE
        assert result.document == document
        assert "unchanged" in result.response_text
        assert len(engine.conversation) == 2
        assert not engine.history.can_undo()

    @pytest.mark.asyncio
    async def test_legacy_noop_acknowledgment(self):
        """The legacy setting answers no-ops with a generic acknowledgment."""
        engine = RefinementEngine(RefinementConfig(claim_success_on_noop=True))
        document = await engine.start(PreferenceSet(topic="Faith"))

        result = await engine.submit_instruction("add a scripture")

        assert isinstance(result, RefinementResult)
        assert not result.changed
        assert result.document == document
        assert "I understand you'd like to adjust the talk" in result.response_text
        assert not engine.history.can_undo()

    @pytest.mark.asyncio
    async def test_shorten_then_lengthen(self, engine, faith_preferences):
        """The title and benediction survive any sequence of edits."""
        await engine.start(faith_preferences)

        for instruction in ["shorter", "longer", "simple words", "warmer", "shorter"]:
            result = await engine.submit_instruction(instruction)
            assert result.document.title == "Faith"
            assert result.document.closing_line() == BENEDICTION

    @pytest.mark.asyncio
    async def test_custom_classifier(self, faith_preferences):
        """The classifier is pluggable."""

        class AlwaysShorten(IntentClassifier):
            def classify(self, instruction):
                return Intent.SHORTEN

        engine = RefinementEngine(classifier=AlwaysShorten())
        await engine.start(faith_preferences)

        result = await engine.submit_instruction("make it sparkle")
        assert result.intent == Intent.SHORTEN


class TestConcurrency:
    """Tests for the one-refinement-at-a-time guard."""

    @pytest.mark.asyncio
    async def test_state_is_refining_while_in_flight(self, faith_preferences):
        engine = RefinementEngine(RefinementConfig(response_delay_seconds=0.05))
        await engine.start(faith_preferences)

        task = asyncio.create_task(engine.submit_instruction("shorter"))
        await asyncio.sleep(0)
        assert engine.state == SessionState.REFINING

        await task
        assert engine.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_concurrent_submission_rejected(self, faith_preferences):
        """A second instruction while one is in flight raises SessionBusyError."""
        engine = RefinementEngine(RefinementConfig(response_delay_seconds=0.05))
        await engine.start(faith_preferences)

        first, second = await asyncio.gather(
            engine.submit_instruction("shorter"),
            engine.submit_instruction("longer"),
            return_exceptions=True,
        )

        assert isinstance(first, RefinementResult)
        assert isinstance(second, SessionBusyError)
        assert len(engine.conversation) == 2
        assert engine.state == SessionState.READY

    @pytest.mark.asyncio
    async def test_undo_rejected_while_refining(self, faith_preferences):
        engine = RefinementEngine(RefinementConfig(response_delay_seconds=0.05))
        await engine.start(faith_preferences)

        task = asyncio.create_task(engine.submit_instruction("shorter"))
        await asyncio.sleep(0)
        with pytest.raises(SessionBusyError):
            engine.undo()
        await task


class TestUndoRedo:
    """Tests for undo/redo through the engine."""

    @pytest.mark.asyncio
    async def test_undo_restores_previous(self, engine, faith_preferences):
        original = await engine.start(faith_preferences)
        result = await engine.submit_instruction("shorter")

        assert engine.undo() == original
        assert engine.document == original

        assert engine.redo() == result.document
        assert engine.document == result.document

    @pytest.mark.asyncio
    async def test_undo_without_history(self, engine, faith_preferences):
        original = await engine.start(faith_preferences)
        assert engine.undo() is None
        assert engine.document == original

    @pytest.mark.asyncio
    async def test_undo_does_not_touch_conversation(self, engine, faith_preferences):
        await engine.start(faith_preferences)
        await engine.submit_instruction("shorter")

        engine.undo()
        assert len(engine.conversation) == 2

    @pytest.mark.asyncio
    async def test_refine_after_undo(self, engine, faith_preferences):
        """Instructions after undo apply to the restored talk."""
        original = await engine.start(faith_preferences)
        await engine.submit_instruction("add a scripture")
        engine.undo()

        result = await engine.submit_instruction("add a scripture")
        assert result.original_document == original
        assert not engine.history.can_redo()

    def test_undo_before_start(self, engine):
        with pytest.raises(SessionStateError):
            engine.undo()
