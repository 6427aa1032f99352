"""Preference models supplied by the talk request form."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TalkLength(str, Enum):
    """Requested speaking time."""

    FIVE_MINUTES = "5min"
    TEN_MINUTES = "10min"
    FIFTEEN_MINUTES = "15min"
    TWENTY_MINUTES = "20min"

    @property
    def minutes(self) -> int:
        return int(self.value.removesuffix("min"))


class TalkFormat(str, Enum):
    """How the talk body is written out."""

    FULL = "full"  # Word-for-word prose
    OUTLINE = "outline"  # Talking points
    HYBRID = "hybrid"  # Prose introduction, bullet application


class Audience(str, Enum):
    """Who the talk is addressed to."""

    GENERAL = "general"  # General congregation
    YOUTH = "youth"  # Youth/young adults
    ADULTS = "adults"
    PRIMARY = "primary"  # Primary children


class PreferenceSet(BaseModel):
    """
    User choices that drive talk composition.

    The topic is not validated here: the form may hand over an empty
    topic, and composition rejects it with a ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    topic: str = Field(default="", description="Talk topic, e.g. Faith or Service")
    length: Optional[TalkLength] = None
    format: Optional[TalkFormat] = None
    audience: Optional[Audience] = None

    # Optional content blocks
    include_scriptures: bool = False
    include_quotes: bool = False
    include_concepts: bool = False
    personal_experiences: bool = False

    additional_notes: str = Field(
        default="",
        description="Free-text requirements, themes or ideas",
    )

    def has_topic(self) -> bool:
        """Check whether the topic has any non-whitespace content."""
        return bool(self.topic.strip())
