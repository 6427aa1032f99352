"""Transformation that adds scripture citations."""

from talk_assistant.models.document import Block, Document, SectionKey

from ..models import Intent
from .base import Transformation, TransformationOutcome

ADDITIONAL_SCRIPTURES: tuple[str, ...] = (
    '"Now faith is the substance of things hoped for, the evidence of things '
    'not seen." - Hebrews 11:1',
    '"I can do all things through Christ which strengtheneth me." - Philippians 4:13',
    '"Ask, and it shall be given you; seek, and ye shall find; knock, and it '
    'shall be opened unto you." - Matthew 7:7',
    '"When ye are in the service of your fellow beings ye are only in the '
    'service of your God." - Mosiah 2:17',
    '"Adam fell that men might be; and men are, that they might have joy." - 2 Nephi 2:25',
)


def citation_reference(citation: str) -> str:
    """Get the reference part of a citation, e.g. 'Hebrews 11:1'."""
    return citation.rsplit(" - ", 1)[-1]


class AddScriptureTransformation(Transformation):
    """
    Adds one citation to the scriptural foundation per call.

    The new citation goes directly after the section's first citation.
    Talks composed without a scriptural foundation are left unchanged.
    """

    intent = Intent.ADD_SCRIPTURE

    def apply(self, document: Document, instruction: str = "") -> TransformationOutcome:
        section = document.get_section(SectionKey.SCRIPTURAL_FOUNDATION)
        if section is None:
            return self._no_op(
                document,
                "This talk doesn't have a scriptural foundation section, so I "
                "left it unchanged. Compose the talk with scripture references "
                "included to add more.",
            )

        existing = {line.text for block in section.citations() for line in block.lines}
        citation = next((c for c in ADDITIONAL_SCRIPTURES if c not in existing), None)
        if citation is None:
            return self._no_op(
                document,
                "The scriptural foundation already includes every additional "
                "scripture I can suggest, so the talk is unchanged.",
            )

        blocks = list(section.blocks)
        first = next((i for i, block in enumerate(blocks) if block.is_citation), None)
        insert_at = len(blocks) if first is None else first + 1
        blocks.insert(insert_at, Block.quote(citation))

        reference = citation_reference(citation)
        return TransformationOutcome(
            document=document.replace_section(section.with_blocks(tuple(blocks))),
            response_text=(
                f"I've added another scripture to the scriptural foundation: {reference}."
            ),
            changes_summary=[f"Added {reference} to scriptural-foundation"],
        )
