"""Data models for the refinement engine."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from talk_assistant.models.document import Document


class Intent(str, Enum):
    """Classified category of a refinement instruction."""

    SHORTEN = "shorten"  # Cut elaboration
    LENGTHEN = "lengthen"  # Add reflective paragraphs
    ADD_SCRIPTURE = "add_scripture"  # Add a citation to the scriptural foundation
    SIMPLIFY_LANGUAGE = "simplify_language"  # Plainer vocabulary
    GENERIC_REVISION = "generic_revision"  # Catch-all touch-up


class SessionState(str, Enum):
    """Lifecycle states of a refinement session."""

    IDLE = "idle"
    AWAITING_COMPOSITION = "awaiting_composition"
    READY = "ready"
    REFINING = "refining"


class NoOpReason(str, Enum):
    """Why an instruction left the talk unchanged."""

    EMPTY_INSTRUCTION = "empty_instruction"
    NO_STRUCTURAL_CHANGE = "no_structural_change"


class RefinementResult(BaseModel):
    """Result of an instruction that changed the talk."""

    intent: Intent
    instruction: str

    # Documents
    original_document: Document
    document: Document

    # Assistant reply
    response_text: str
    changes_summary: list[str] = Field(
        default_factory=list,
        description="List of changes made",
    )

    # Metrics
    latency_ms: float = 0.0
    completed_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    @property
    def changed(self) -> bool:
        return self.document != self.original_document


class NoOpResult(BaseModel):
    """
    An instruction that produced no structural change.

    This is informational, not a failure: the document is returned as-is
    along with the assistant's explanation.
    """

    reason: NoOpReason
    instruction: str = ""
    document: Optional[Document] = None
    response_text: str = ""
    intent: Optional[Intent] = None

    @property
    def changed(self) -> bool:
        return False


SubmissionResult = Union[RefinementResult, NoOpResult]


class RefinementConfig(BaseModel):
    """Configuration for the refinement engine."""

    # Simulated backend latency
    response_delay_seconds: float = Field(
        default=0.0,
        ge=0.0,
        le=30.0,
        description="Delay awaited before each transformation is applied",
    )

    # History settings
    max_history: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Maximum refinement history entries to keep for undo",
    )

    # Behavior settings
    claim_success_on_noop: bool = Field(
        default=False,
        description=(
            "Answer unchanged instructions with a generic acknowledgment "
            "instead of reporting that nothing changed"
        ),
    )
