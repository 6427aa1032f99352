"""Talk section templates and wording."""

from dataclasses import dataclass
from typing import Any, Optional

from talk_assistant.models.document import SectionKey
from talk_assistant.models.preferences import (
    Audience,
    PreferenceSet,
    TalkFormat,
    TalkLength,
)


@dataclass
class SectionTemplate:
    """Template for one section of a talk."""

    key: SectionKey
    name: str
    description: str
    default_order: int
    heading: Optional[str] = None
    preference: Optional[str] = None  # PreferenceSet flag that enables the section
    required: bool = False


# ============================================================================
# Section Templates
# ============================================================================

SECTION_TEMPLATES: dict[SectionKey, SectionTemplate] = {
    SectionKey.SALUTATION: SectionTemplate(
        key=SectionKey.SALUTATION,
        name="Salutation",
        description="Greeting and opening gratitude",
        default_order=1,
        required=True,
    ),
    SectionKey.INTRODUCTION: SectionTemplate(
        key=SectionKey.INTRODUCTION,
        name="Introduction",
        description="Opening thoughts on the topic",
        default_order=2,
        heading="Introduction",
        required=True,
    ),
    SectionKey.SCRIPTURAL_FOUNDATION: SectionTemplate(
        key=SectionKey.SCRIPTURAL_FOUNDATION,
        name="Scriptural Foundation",
        description="Scripture references supporting the topic",
        default_order=3,
        heading="Scriptural Foundation",
        preference="include_scriptures",
    ),
    SectionKey.PROPHETIC_GUIDANCE: SectionTemplate(
        key=SectionKey.PROPHETIC_GUIDANCE,
        name="Prophetic Guidance",
        description="Prophet and leader quotes",
        default_order=4,
        heading="Prophetic Guidance",
        preference="include_quotes",
    ),
    SectionKey.KEY_CONCEPTS: SectionTemplate(
        key=SectionKey.KEY_CONCEPTS,
        name="Key Concepts",
        description="Key concepts and ideas",
        default_order=5,
        heading="Key Concepts to Consider",
        preference="include_concepts",
    ),
    SectionKey.APPLICATION: SectionTemplate(
        key=SectionKey.APPLICATION,
        name="Application",
        description="How to live the principle day to day",
        default_order=6,
        heading="Application in Our Lives",
        required=True,
    ),
    SectionKey.TESTIMONY: SectionTemplate(
        key=SectionKey.TESTIMONY,
        name="Testimony",
        description="Personal witness of the topic",
        default_order=7,
        heading="Testimony",
        required=True,
    ),
    SectionKey.CLOSING: SectionTemplate(
        key=SectionKey.CLOSING,
        name="Closing",
        description="Closing benediction",
        default_order=8,
        required=True,
    ),
}


# ============================================================================
# Wording
# ============================================================================

SALUTATIONS: dict[Audience, str] = {
    Audience.GENERAL: "Dear Brothers and Sisters,",
    Audience.ADULTS: "Dear Brothers and Sisters,",
    Audience.YOUTH: "Dear young men and young women,",
    Audience.PRIMARY: "Dear boys and girls,",
}

OPENING_GRATITUDE = "I'm grateful for the opportunity to speak with you today about {topic}."
OPENING_ELABORATION = (
    "This is a topic that has been on my heart and mind as I've prepared for this talk."
)

INTRODUCTION_PROSE = (
    "As I've pondered the significance of {topic}, I've been reminded of the "
    "Lord's words in the scriptures.",
    "Our Heavenly Father has provided us with guidance and understanding "
    "through His prophets and through the Spirit.",
)
INTRODUCTION_POINTS = (
    "Opening thought about {topic}",
    "Personal connection to the topic",
    "Why this matters in our daily lives",
)

SCRIPTURE_LEAD_IN = "Let me share a scripture that has particular meaning regarding this topic:"
PRIMARY_SCRIPTURE = (
    '"Trust in the Lord with all thine heart; and lean not unto thine own '
    "understanding. In all thy ways acknowledge him, and he shall direct thy "
    'paths." - Proverbs 3:5-6'
)
SCRIPTURE_ELABORATION = (
    "This scripture teaches us about the importance of {topic} in our spiritual journey."
)

PROPHETIC_LEAD_IN = "President Russell M. Nelson has taught:"
PROPHETIC_QUOTE = (
    '"The Lord loves effort, because effort brings rewards that can\'t come without it."'
)
PROPHETIC_ELABORATION = "This principle applies directly to our understanding of {topic}."

KEY_CONCEPTS = (
    "Faith is the foundation of all righteous action",
    "Our relationship with Heavenly Father grows through consistent effort",
    "The Spirit guides us as we seek truth",
    "Service to others strengthens our own testimony",
)

APPLICATION_PROSE = (
    "How can we apply these principles in our daily lives?",
    "I believe we can start by making small, consistent choices that align "
    "with gospel principles.",
    "When we do this, we invite the Spirit into our lives and create space "
    "for spiritual growth.",
)
APPLICATION_POINTS = (
    "Daily application ideas",
    "Practical steps we can take",
    "How to make this part of our routine",
)

PERSONAL_EXPERIENCE_PROSE = (
    "Let me share an experience from my own life that taught me about {topic}."
)
PERSONAL_EXPERIENCE_POINT = "A personal experience with {topic}"

TESTIMONY = (
    "I want to bear my testimony that {topic} is a true principle.",
    "I know that as we apply these teachings in our lives, we will find the "
    "peace and direction that our Heavenly Father wants us to have.",
)

BENEDICTION = "In the name of Jesus Christ, Amen."


# ============================================================================
# Format Layouts
# ============================================================================


@dataclass(frozen=True)
class FormatLayout:
    """Which sections are written as prose rather than bullet points."""

    prose_introduction: bool
    prose_application: bool


FORMAT_LAYOUTS: dict[Optional[TalkFormat], FormatLayout] = {
    TalkFormat.FULL: FormatLayout(prose_introduction=True, prose_application=True),
    TalkFormat.OUTLINE: FormatLayout(prose_introduction=False, prose_application=False),
    TalkFormat.HYBRID: FormatLayout(prose_introduction=True, prose_application=False),
    None: FormatLayout(prose_introduction=False, prose_application=False),
}


# ============================================================================
# Length Guidelines
# ============================================================================

WORDS_PER_MINUTE = 130

LENGTH_GUIDELINES: dict[TalkLength, dict[str, Any]] = {
    length: {
        "minutes": length.minutes,
        "target_words": length.minutes * WORDS_PER_MINUTE,
        "words_per_minute": WORDS_PER_MINUTE,
    }
    for length in TalkLength
}


def get_section_template(key: SectionKey) -> SectionTemplate:
    """Get the template for a section."""
    return SECTION_TEMPLATES[key]


def get_section_templates() -> list[SectionTemplate]:
    """Get all section templates in talk order."""
    return sorted(SECTION_TEMPLATES.values(), key=lambda t: t.default_order)


def is_section_requested(template: SectionTemplate, preferences: PreferenceSet) -> bool:
    """Check whether a section belongs in a talk for these preferences."""
    if template.preference is None:
        return True
    return bool(getattr(preferences, template.preference))


def get_salutation(audience: Optional[Audience]) -> str:
    """Get the greeting for an audience."""
    return SALUTATIONS.get(audience, SALUTATIONS[Audience.GENERAL])


def get_format_layout(talk_format: Optional[TalkFormat]) -> FormatLayout:
    """Get the prose/bullet split for a format."""
    return FORMAT_LAYOUTS[talk_format]


def get_length_config(length: TalkLength) -> dict[str, Any]:
    """Get the speaking-time guidance for a talk length."""
    return LENGTH_GUIDELINES[length]
