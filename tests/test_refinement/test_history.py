"""Tests for refinement history."""

import pytest

from talk_assistant.models.document import Block, Document, Section, SectionKey
from talk_assistant.refinement.history import RefinementHistory
from talk_assistant.refinement.models import Intent, RefinementResult


def make_document(text: str) -> Document:
    return Document(
        title="Faith",
        sections=(Section(key=SectionKey.INTRODUCTION, blocks=(Block.paragraph(text),)),),
    )


def make_result(before: Document, after: Document, instruction: str = "shorter"):
    return RefinementResult(
        intent=Intent.SHORTEN,
        instruction=instruction,
        original_document=before,
        document=after,
        response_text="Done",
        changes_summary=["Removed 1 elaboration line(s) from introduction"],
    )


@pytest.fixture
def documents():
    return [make_document(f"Version {i}.") for i in range(4)]


class TestRefinementHistory:
    """Tests for RefinementHistory."""

    def test_empty_history(self):
        history = RefinementHistory()
        assert not history.can_undo()
        assert not history.can_redo()
        assert history.undo() is None
        assert history.redo() is None

    def test_add_and_undo(self, documents):
        history = RefinementHistory()
        history.add(make_result(documents[0], documents[1]))

        assert history.can_undo()
        assert history.undo() == documents[0]
        assert history.entries[0].is_undone

    def test_redo(self, documents):
        history = RefinementHistory()
        history.add(make_result(documents[0], documents[1]))
        history.undo()

        assert history.can_redo()
        assert history.redo() == documents[1]
        assert not history.entries[0].is_undone

    def test_add_truncates_redo_tail(self, documents):
        """A new refinement after undo discards undone entries."""
        history = RefinementHistory()
        history.add(make_result(documents[0], documents[1], "first"))
        history.add(make_result(documents[1], documents[2], "second"))
        history.undo()
        history.add(make_result(documents[1], documents[3], "third"))

        assert [e.instruction for e in history.entries] == ["first", "third"]
        assert not history.can_redo()

    def test_max_entries(self, documents):
        """The oldest entries are dropped past the limit."""
        history = RefinementHistory(max_entries=2)
        for i in range(3):
            history.add(make_result(documents[i], documents[i + 1], f"step {i}"))

        assert [e.instruction for e in history.entries] == ["step 1", "step 2"]
        assert history.current_index == 1

    def test_list_entries(self, documents):
        history = RefinementHistory()
        history.add(make_result(documents[0], documents[1], "make it shorter"))

        entries = history.list_entries()
        assert len(entries) == 1
        assert 'shorten: "make it shorter" (1 changes)' in entries[0]

