"""Data models for the talk assistant."""

from talk_assistant.models.conversation import (
    ConversationLog,
    ConversationTurn,
    Speaker,
)
from talk_assistant.models.document import (
    CONDITIONAL_SECTIONS,
    Block,
    BlockKind,
    Document,
    Line,
    Section,
    SectionKey,
)
from talk_assistant.models.preferences import (
    Audience,
    PreferenceSet,
    TalkFormat,
    TalkLength,
)

__all__ = [
    # Preferences
    "Audience",
    "PreferenceSet",
    "TalkFormat",
    "TalkLength",
    # Document
    "CONDITIONAL_SECTIONS",
    "Block",
    "BlockKind",
    "Document",
    "Line",
    "Section",
    "SectionKey",
    # Conversation
    "ConversationLog",
    "ConversationTurn",
    "Speaker",
]
