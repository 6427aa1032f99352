"""Conversation log for a refinement session."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class Speaker(str, Enum):
    """Who said a turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """A single message in the refinement chat."""

    model_config = ConfigDict(frozen=True)

    speaker: Speaker
    text: str
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class ConversationLog(BaseModel):
    """
    Append-only record of the refinement chat.

    Insertion order is display order. Turns are never removed or edited.
    """

    _turns: list[ConversationTurn] = PrivateAttr(default_factory=list)

    def append(self, speaker: Speaker, text: str) -> ConversationTurn:
        turn = ConversationTurn(speaker=speaker, text=text)
        self._turns.append(turn)
        return turn

    @property
    def turns(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    def last(self) -> Optional[ConversationTurn]:
        return self._turns[-1] if self._turns else None

    def __len__(self) -> int:
        return len(self._turns)

