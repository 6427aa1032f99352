"""Talk composer for rendering a structured talk from preferences."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from talk_assistant.errors import ValidationError
from talk_assistant.models.document import (
    Block,
    Document,
    Line,
    Section,
    SectionKey,
)
from talk_assistant.models.preferences import PreferenceSet

from .templates import (
    APPLICATION_POINTS,
    APPLICATION_PROSE,
    BENEDICTION,
    INTRODUCTION_POINTS,
    INTRODUCTION_PROSE,
    KEY_CONCEPTS,
    OPENING_ELABORATION,
    OPENING_GRATITUDE,
    PERSONAL_EXPERIENCE_POINT,
    PERSONAL_EXPERIENCE_PROSE,
    PRIMARY_SCRIPTURE,
    PROPHETIC_ELABORATION,
    PROPHETIC_LEAD_IN,
    PROPHETIC_QUOTE,
    SCRIPTURE_ELABORATION,
    SCRIPTURE_LEAD_IN,
    TESTIMONY,
    get_format_layout,
    get_length_config,
    get_salutation,
    get_section_templates,
    is_section_requested,
)

logger = logging.getLogger(__name__)

SectionBuilder = Callable[[PreferenceSet], tuple[Block, ...]]


@dataclass
class ComposerConfig:
    """Configuration for talk composition."""

    include_speaker_notes: bool = True


class TalkComposer:
    """
    Builds the initial talk document from a preference set.

    Composition is a pure function of the preferences: the same
    preferences always produce an equal Document.

    Usage:
        composer = TalkComposer()
        document = composer.compose(PreferenceSet(topic="Faith"))
        print(document.render())
    """

    def __init__(self, config: Optional[ComposerConfig] = None):
        self.config = config or ComposerConfig()
        self._builders: dict[SectionKey, SectionBuilder] = {
            SectionKey.SALUTATION: self._build_salutation,
            SectionKey.INTRODUCTION: self._build_introduction,
            SectionKey.SCRIPTURAL_FOUNDATION: self._build_scriptural_foundation,
            SectionKey.PROPHETIC_GUIDANCE: self._build_prophetic_guidance,
            SectionKey.KEY_CONCEPTS: self._build_key_concepts,
            SectionKey.APPLICATION: self._build_application,
            SectionKey.TESTIMONY: self._build_testimony,
            SectionKey.CLOSING: self._build_closing,
        }

    def compose(self, preferences: PreferenceSet) -> Document:
        """
        Compose a talk.

        Args:
            preferences: Validated form preferences

        Returns:
            The composed Document

        Raises:
            ValidationError: If the topic is empty, whitespace-only or multi-line
        """
        if not preferences.has_topic():
            raise ValidationError("Please enter a topic for your talk.", field="topic")
        if "\n" in preferences.topic or "\r" in preferences.topic:
            raise ValidationError("The topic must fit on a single line.", field="topic")

        sections = []
        for template in get_section_templates():
            if not is_section_requested(template, preferences):
                logger.debug(f"Skipping unrequested section: {template.key.value}")
                continue

            blocks = self._builders[template.key](preferences)
            sections.append(
                Section(key=template.key, heading=template.heading, blocks=blocks)
            )

        document = Document(
            title=preferences.topic,
            sections=tuple(sections),
            target_minutes=preferences.length.minutes if preferences.length else None,
            speaker_notes=self._build_speaker_notes(preferences),
        )

        logger.info(
            f"Composed talk on '{preferences.topic}': {len(sections)} sections, "
            f"{document.word_count()} words"
        )
        return document

    # ------------------------------------------------------------------------
    # Section builders
    # ------------------------------------------------------------------------

    def _build_salutation(self, preferences: PreferenceSet) -> tuple[Block, ...]:
        topic = preferences.topic
        return (
            Block.paragraph(get_salutation(preferences.audience)),
            Block(lines=(
                Line(text=OPENING_GRATITUDE.format(topic=topic)),
                Line(text=OPENING_ELABORATION, elaboration=True),
            )),
        )

    def _build_introduction(self, preferences: PreferenceSet) -> tuple[Block, ...]:
        topic = preferences.topic
        if get_format_layout(preferences.format).prose_introduction:
            return (Block.paragraph(*(s.format(topic=topic) for s in INTRODUCTION_PROSE)),)
        return (Block.bullets(*(p.format(topic=topic) for p in INTRODUCTION_POINTS)),)

    def _build_scriptural_foundation(
        self, preferences: PreferenceSet
    ) -> tuple[Block, ...]:
        return (
            Block.paragraph(SCRIPTURE_LEAD_IN),
            Block.quote(PRIMARY_SCRIPTURE),
            Block.paragraph(
                SCRIPTURE_ELABORATION.format(topic=preferences.topic),
                elaboration=True,
            ),
        )

    def _build_prophetic_guidance(self, preferences: PreferenceSet) -> tuple[Block, ...]:
        return (
            Block.paragraph(PROPHETIC_LEAD_IN),
            Block.quote(PROPHETIC_QUOTE),
            Block.paragraph(
                PROPHETIC_ELABORATION.format(topic=preferences.topic),
                elaboration=True,
            ),
        )

    def _build_key_concepts(self, preferences: PreferenceSet) -> tuple[Block, ...]:
        return (Block.bullets(*KEY_CONCEPTS),)

    def _build_application(self, preferences: PreferenceSet) -> tuple[Block, ...]:
        topic = preferences.topic
        if get_format_layout(preferences.format).prose_application:
            sentences = list(APPLICATION_PROSE)
            if preferences.personal_experiences:
                sentences.append(PERSONAL_EXPERIENCE_PROSE.format(topic=topic))
            return (Block.paragraph(*sentences),)

        points = list(APPLICATION_POINTS)
        if preferences.personal_experiences:
            points.append(PERSONAL_EXPERIENCE_POINT.format(topic=topic))
        return (Block.bullets(*points),)

    def _build_testimony(self, preferences: PreferenceSet) -> tuple[Block, ...]:
        return (Block.paragraph(*(s.format(topic=preferences.topic) for s in TESTIMONY)),)

    def _build_closing(self, preferences: PreferenceSet) -> tuple[Block, ...]:
        return (Block.paragraph(BENEDICTION),)

    def _build_speaker_notes(self, preferences: PreferenceSet) -> tuple[str, ...]:
        if not self.config.include_speaker_notes:
            return ()

        notes = []
        if preferences.length:
            guide = get_length_config(preferences.length)
            notes.append(
                f"Aim for about {guide['target_words']} words ({guide['minutes']} "
                f"minutes at {guide['words_per_minute']} words per minute)."
            )
        if preferences.personal_experiences:
            notes.append(
                "Prepare a short personal experience to share in the application section."
            )
        if preferences.additional_notes.strip():
            notes.append(preferences.additional_notes.strip())
        return tuple(notes)


def compose(
    preferences: PreferenceSet, config: Optional[ComposerConfig] = None
) -> Document:
    """Compose a talk with a default composer."""
    return TalkComposer(config).compose(preferences)
