"""Refinement history tracking with undo/redo."""

import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from talk_assistant.models.document import Document

from .models import Intent, RefinementResult

logger = logging.getLogger(__name__)


class RefinementHistoryEntry(BaseModel):
    """A single entry in the refinement history."""

    # Request info
    instruction: str
    intent: Intent

    # Result summary
    response_text: str
    changes_summary: list[str] = Field(default_factory=list)

    # Document snapshots (for undo)
    document_before: Document
    document_after: Document

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    # State tracking
    is_undone: bool = False  # True if this refinement was undone

    def to_summary(self) -> str:
        """Get a one-line summary of this entry."""
        status = "(undone)" if self.is_undone else ""
        changes = len(self.changes_summary)
        return f"[{self.timestamp.strftime('%H:%M:%S')}] {self.intent.value}: \"{self.instruction[:50]}\" ({changes} changes) {status}".strip()


class RefinementHistory(BaseModel):
    """
    Manages refinement history with undo/redo support.

    Only instructions that changed the talk are recorded. Documents are
    immutable, so entries hold the snapshots directly.
    """

    entries: list[RefinementHistoryEntry] = Field(default_factory=list)

    # Current position in history (for undo/redo)
    current_index: int = Field(
        default=-1,
        description="Index of current state (-1 means original, 0+ means after that many refinements)",
    )

    max_entries: int = Field(default=20, ge=1)

    def add(self, result: RefinementResult) -> None:
        """Add a new refinement to history."""
        # If we're not at the end, truncate future entries
        if self.current_index < len(self.entries) - 1:
            self.entries = self.entries[: self.current_index + 1]

        entry = RefinementHistoryEntry(
            instruction=result.instruction,
            intent=result.intent,
            response_text=result.response_text,
            changes_summary=result.changes_summary,
            document_before=result.original_document,
            document_after=result.document,
        )

        self.entries.append(entry)

        # Drop the oldest entries beyond the limit
        overflow = len(self.entries) - self.max_entries
        if overflow > 0:
            self.entries = self.entries[overflow:]

        self.current_index = len(self.entries) - 1
        logger.debug(f"Added history entry: {entry.to_summary()}")

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self.current_index >= 0

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self.current_index < len(self.entries) - 1

    def undo(self) -> Optional[Document]:
        """
        Undo the last refinement.

        Returns:
            The document before the undone refinement, or None if can't undo
        """
        if not self.can_undo():
            logger.debug("Nothing to undo")
            return None

        current_entry = self.entries[self.current_index]
        current_entry.is_undone = True
        self.current_index -= 1

        logger.info(f"Undone: {current_entry.instruction[:50]}")
        return current_entry.document_before

    def redo(self) -> Optional[Document]:
        """
        Redo the last undone refinement.

        Returns:
            The document after the redone refinement, or None if can't redo
        """
        if not self.can_redo():
            logger.debug("Nothing to redo")
            return None

        self.current_index += 1
        entry = self.entries[self.current_index]
        entry.is_undone = False

        logger.info(f"Redone: {entry.instruction[:50]}")
        return entry.document_after

    def list_entries(self) -> list[str]:
        """Get a list of entry summaries."""
        return [entry.to_summary() for entry in self.entries]
