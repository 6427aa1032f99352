"""Tests for the talk composer."""

import pytest

from talk_assistant.errors import ValidationError
from talk_assistant.generation.composer import ComposerConfig, TalkComposer, compose
from talk_assistant.generation.templates import (
    BENEDICTION,
    OPENING_ELABORATION,
    PRIMARY_SCRIPTURE,
    PROPHETIC_QUOTE,
    get_length_config,
)
from talk_assistant.models.document import BlockKind, SectionKey
from talk_assistant.models.preferences import (
    Audience,
    PreferenceSet,
    TalkFormat,
    TalkLength,
)


@pytest.fixture
def composer():
    return TalkComposer()


@pytest.fixture
def full_preferences():
    """Preferences with every optional section turned on."""
    return PreferenceSet(
        topic="Faith",
        length=TalkLength.TEN_MINUTES,
        format=TalkFormat.FULL,
        audience=Audience.YOUTH,
        include_scriptures=True,
        include_quotes=True,
        include_concepts=True,
        personal_experiences=True,
        additional_notes="  Mention my mission.  ",
    )


class TestValidation:
    """Tests for topic validation."""

    @pytest.mark.parametrize("topic", ["", "   ", "\n\t"])
    def test_empty_topic_rejected(self, composer, topic):
        """Empty or whitespace topics raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            composer.compose(PreferenceSet(topic=topic))

        assert exc_info.value.field == "topic"
        assert "topic" in exc_info.value.message.lower()

    @pytest.mark.parametrize("topic", ["Faith\nHope", "Faith\r\n# Hope"])
    def test_multiline_topic_rejected(self, composer, topic):
        """A topic must not break the single title line."""
        with pytest.raises(ValidationError) as exc_info:
            composer.compose(PreferenceSet(topic=topic))

        assert exc_info.value.field == "topic"

    def test_validation_error_is_value_error(self, composer):
        with pytest.raises(ValueError):
            composer.compose(PreferenceSet())


class TestComposition:
    """Tests for composed talk structure."""

    def test_minimal_talk_sections(self, composer):
        """Without options only the required sections appear."""
        document = composer.compose(PreferenceSet(topic="Faith"))
        assert document.section_keys() == [
            SectionKey.SALUTATION,
            SectionKey.INTRODUCTION,
            SectionKey.APPLICATION,
            SectionKey.TESTIMONY,
            SectionKey.CLOSING,
        ]

    def test_all_sections_when_requested(self, composer, full_preferences):
        """Every requested section appears in talk order."""
        document = composer.compose(full_preferences)
        assert document.section_keys() == list(SectionKey)

    @pytest.mark.parametrize(
        "flag,key",
        [
            ("include_scriptures", SectionKey.SCRIPTURAL_FOUNDATION),
            ("include_quotes", SectionKey.PROPHETIC_GUIDANCE),
            ("include_concepts", SectionKey.KEY_CONCEPTS),
        ],
    )
    def test_conditional_section_follows_flag(self, composer, flag, key):
        """A conditional section appears exactly when its flag is set."""
        with_flag = composer.compose(PreferenceSet(topic="Faith", **{flag: True}))
        without_flag = composer.compose(PreferenceSet(topic="Faith"))

        assert with_flag.has_section(key)
        assert not without_flag.has_section(key)

    def test_title_is_topic(self, composer):
        """The topic is used verbatim as the title."""
        document = composer.compose(PreferenceSet(topic="The Atonement of Christ"))
        assert document.title == "The Atonement of Christ"
        assert document.render().startswith("# The Atonement of Christ\n")

    def test_topic_appears_in_body(self, composer):
        document = composer.compose(PreferenceSet(topic="Gratitude"))
        assert "Gratitude" in document.get_section(SectionKey.TESTIMONY).render()

    def test_composition_is_deterministic(self, composer, full_preferences):
        """Same preferences produce equal documents."""
        assert composer.compose(full_preferences) == composer.compose(full_preferences)

    def test_ends_with_benediction(self, composer, full_preferences):
        document = composer.compose(full_preferences)
        assert document.closing_line() == BENEDICTION
        assert document.render().endswith(BENEDICTION)

    def test_salutation_has_elaboration_line(self, composer):
        """The opening carries an elaboration sentence that can be cut."""
        document = composer.compose(PreferenceSet(topic="Faith"))
        salutation = document.get_section(SectionKey.SALUTATION)

        elaborations = [
            line.text for block in salutation.blocks for line in block.lines
            if line.elaboration
        ]
        assert elaborations == [OPENING_ELABORATION]

    def test_scriptural_foundation_layout(self, composer):
        """Lead-in, quoted scripture, then elaboration."""
        document = composer.compose(PreferenceSet(topic="Faith", include_scriptures=True))
        section = document.get_section(SectionKey.SCRIPTURAL_FOUNDATION)

        assert [block.kind for block in section.blocks] == [
            BlockKind.PARAGRAPH,
            BlockKind.QUOTE,
            BlockKind.PARAGRAPH,
        ]
        assert section.blocks[1].lines[0].text == PRIMARY_SCRIPTURE
        assert all(line.elaboration for line in section.blocks[2].lines)
        assert f"> {PRIMARY_SCRIPTURE}" in document.render()

    def test_prophetic_quote_rendered(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith", include_quotes=True))
        assert f"> {PROPHETIC_QUOTE}" in document.render()

    def test_key_concepts_are_bullets(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith", include_concepts=True))
        section = document.get_section(SectionKey.KEY_CONCEPTS)
        assert section.blocks[0].kind == BlockKind.BULLETS
        assert "• Faith is the foundation of all righteous action" in section.render()


class TestFormats:
    """Tests for format-driven layout."""

    def _kinds(self, document):
        return (
            document.get_section(SectionKey.INTRODUCTION).blocks[0].kind,
            document.get_section(SectionKey.APPLICATION).blocks[0].kind,
        )

    def test_full_format(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith", format=TalkFormat.FULL))
        assert self._kinds(document) == (BlockKind.PARAGRAPH, BlockKind.PARAGRAPH)

    def test_outline_format(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith", format=TalkFormat.OUTLINE))
        assert self._kinds(document) == (BlockKind.BULLETS, BlockKind.BULLETS)

    def test_hybrid_format(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith", format=TalkFormat.HYBRID))
        assert self._kinds(document) == (BlockKind.PARAGRAPH, BlockKind.BULLETS)

    def test_personal_experience_in_application(self, composer):
        """Personal experiences add a line to the application."""
        plain = composer.compose(PreferenceSet(topic="Faith"))
        personal = composer.compose(
            PreferenceSet(topic="Faith", personal_experiences=True)
        )

        plain_lines = plain.get_section(SectionKey.APPLICATION).blocks[0].lines
        personal_lines = personal.get_section(SectionKey.APPLICATION).blocks[0].lines
        assert len(personal_lines) == len(plain_lines) + 1
        assert "Faith" in personal_lines[-1].text


class TestAudience:
    """Tests for audience salutations."""

    def test_youth_salutation(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith", audience=Audience.YOUTH))
        assert "# Faith\n\nDear young men and young women," in document.render()

    def test_default_salutation(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith"))
        assert "Dear Brothers and Sisters," in document.render()


class TestSpeakerNotes:
    """Tests for speaker notes."""

    def test_notes_not_rendered(self, composer, full_preferences):
        """Speaker notes stay out of the talk text."""
        document = composer.compose(full_preferences)
        assert "Mention my mission." in document.speaker_notes
        assert "Mention my mission." not in document.render()

    def test_length_note(self, composer, full_preferences):
        document = composer.compose(full_preferences)
        assert document.target_minutes == 10
        assert any("1300 words" in note for note in document.speaker_notes)

    @pytest.mark.parametrize("length", list(TalkLength))
    def test_length_note_uses_guidelines(self, composer, length):
        """The word budget comes from the length guidelines."""
        document = composer.compose(PreferenceSet(topic="Faith", length=length))
        guide = get_length_config(length)

        assert f"{guide['target_words']} words" in document.speaker_notes[0]
        assert document.target_minutes == guide["minutes"]

    def test_no_notes_without_preferences(self, composer):
        document = composer.compose(PreferenceSet(topic="Faith"))
        assert document.speaker_notes == ()
        assert document.target_minutes is None

    def test_notes_can_be_disabled(self, full_preferences):
        composer = TalkComposer(ComposerConfig(include_speaker_notes=False))
        assert composer.compose(full_preferences).speaker_notes == ()


class TestComposeFunction:
    """Tests for the module-level compose helper."""

    def test_matches_composer(self, full_preferences):
        assert compose(full_preferences) == TalkComposer().compose(full_preferences)
