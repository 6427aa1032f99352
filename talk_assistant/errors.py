"""Exception types raised by the talk assistant core."""

from typing import Optional


class TalkAssistantError(Exception):
    """Base class for talk assistant errors."""


class ValidationError(TalkAssistantError, ValueError):
    """A preference set cannot be composed into a talk."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class SessionStateError(TalkAssistantError, RuntimeError):
    """An engine operation was called in a state that does not allow it."""


class SessionBusyError(SessionStateError):
    """A refinement is already in flight for this session."""
