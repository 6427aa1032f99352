"""Transformations that shorten or lengthen a talk."""

from typing import Optional

from talk_assistant.models.document import (
    Block,
    Document,
    Section,
    SectionKey,
)

from ..models import Intent
from .base import Transformation, TransformationOutcome

# Inserted at the end of the section that precedes the application
REFLECTION_PARAGRAPHS: tuple[tuple[str, ...], ...] = (
    (
        "As we reflect on these truths, it helps to remember that spiritual "
        "growth rarely happens all at once.",
        "It comes line upon line, as we return again and again to the things "
        "that matter most.",
    ),
    (
        "Each of us is at a different place on the path.",
        "Wherever we stand today, the Lord meets us there and invites us to "
        "take the next step.",
    ),
    (
        "I have found that the quiet moments of pondering are often when "
        "these truths sink deepest into my heart.",
        "Making room for those moments is part of living what we learn.",
    ),
)

# Inserted at the end of the testimony, ahead of the benediction
CLOSING_PARAGRAPHS: tuple[tuple[str, ...], ...] = (
    (
        "As I close, I invite each of us to consider one small thing we can "
        "do this week.",
        "Small and simple things can bring to pass great things in our lives "
        "and in the lives of those we love.",
    ),
    (
        "I am grateful for a loving Heavenly Father who is patient with us "
        "as we learn.",
        "His hand is in our lives, even when we do not see it right away.",
    ),
    (
        "May we go forward with hope, trusting that our efforts matter.",
        "The Lord will magnify what we offer Him.",
    ),
)


def _existing_text(document: Document) -> set[str]:
    return {line.text for _, _, line in document.iter_lines()}


def _next_unused(
    pool: tuple[tuple[str, ...], ...], document: Document
) -> Optional[tuple[str, ...]]:
    """Get the first paragraph from the pool not already in the document."""
    existing = _existing_text(document)
    for sentences in pool:
        if sentences[0] not in existing:
            return sentences
    return None


def _append_block(section: Section, block: Block) -> Section:
    return section.with_blocks(section.blocks + (block,))


class ShortenTransformation(Transformation):
    """Removes elaboration sentences while keeping the talk's structure."""

    intent = Intent.SHORTEN

    def apply(self, document: Document, instruction: str = "") -> TransformationOutcome:
        removed_total = 0
        changes = []
        sections = []

        for section in document.sections:
            blocks = []
            removed = 0
            for block in section.blocks:
                kept = tuple(line for line in block.lines if not line.elaboration)
                removed += len(block.lines) - len(kept)
                if kept or block.is_empty:
                    blocks.append(block.model_copy(update={"lines": kept}))

            if removed:
                changes.append(
                    f"Removed {removed} elaboration line(s) from {section.key.value}"
                )
                removed_total += removed
            sections.append(section.with_blocks(tuple(blocks)))

        if not removed_total:
            return self._no_op(
                document,
                "The talk is already as short as I can make it without cutting "
                "section headers, your testimony, or the closing.",
            )

        return TransformationOutcome(
            document=document.model_copy(update={"sections": tuple(sections)}),
            response_text=(
                f"I've made the talk shorter by removing {removed_total} supporting "
                f"sentence(s). Section headers, your testimony, and the closing "
                f"are unchanged."
            ),
            changes_summary=changes,
        )


class LengthenTransformation(Transformation):
    """
    Adds a reflective paragraph before the application and a closing
    paragraph before the benediction.

    Each call inserts the next paragraph from a fixed pool that the talk
    does not already contain. Missing anchor sections are skipped.
    """

    intent = Intent.LENGTHEN

    def apply(self, document: Document, instruction: str = "") -> TransformationOutcome:
        updated = document
        changes = []

        application_index = updated.index_of(SectionKey.APPLICATION)
        if application_index:
            reflection = _next_unused(REFLECTION_PARAGRAPHS, updated)
            if reflection:
                target = updated.sections[application_index - 1]
                updated = updated.replace_section(
                    _append_block(target, Block.paragraph(*reflection, elaboration=True))
                )
                changes.append("Added a reflective paragraph before the application")

        testimony = updated.get_section(SectionKey.TESTIMONY)
        if testimony is not None and updated.has_section(SectionKey.CLOSING):
            closing = _next_unused(CLOSING_PARAGRAPHS, updated)
            if closing:
                updated = updated.replace_section(
                    _append_block(testimony, Block.paragraph(*closing, elaboration=True))
                )
                changes.append("Added a closing paragraph before the benediction")

        if not changes:
            return self._no_op(
                document,
                "I couldn't find a place to add more detail without repeating "
                "myself, so the talk is unchanged.",
            )

        return TransformationOutcome(
            document=updated,
            response_text=(
                "I've made the talk longer with more detail: "
                + "; ".join(change[0].lower() + change[1:] for change in changes)
                + "."
            ),
            changes_summary=changes,
        )
