"""Wording transformations: vocabulary simplification and generic touch-ups."""

import re
from typing import Optional

from talk_assistant.models.document import Document, Section, SectionKey

from ..models import Intent
from .base import Transformation, TransformationOutcome

# Whole-word, case-sensitive replacements
SIMPLE_VOCABULARY: dict[str, str] = {
    "pondered": "thought about",
    "significance": "meaning",
    "opportunity": "chance",
    "particular": "special",
    "consistent": "steady",
    "righteous": "good",
    "foundation": "base",
    "strengthens": "builds up",
    "principles": "teachings",
    "principle": "teaching",
    "guidance": "help",
    "align": "fit",
}

_VOCABULARY_PATTERN = re.compile(
    r"\b(" + "|".join(re.escape(word) for word in SIMPLE_VOCABULARY) + r")\b"
)

# Applied in order; the first phrase found in the testimony is replaced
TESTIMONY_TOUCH_UPS: tuple[tuple[str, str], ...] = (
    ("I want to bear", "I would like to bear"),
    ("I know that", "I testify that"),
    ("peace and direction", "peace and guidance"),
)


class SimplifyLanguageTransformation(Transformation):
    """
    Replaces elevated words with plainer synonyms.

    Paragraphs and bullet points are rewritten. Quoted scripture, the
    title and section headings keep their exact wording.
    """

    intent = Intent.SIMPLIFY_LANGUAGE

    def apply(self, document: Document, instruction: str = "") -> TransformationOutcome:
        replaced: dict[str, int] = {}

        def substitute(match: re.Match) -> str:
            word = match.group(1)
            replaced[word] = replaced.get(word, 0) + 1
            return SIMPLE_VOCABULARY[word]

        sections = []
        for section in document.sections:
            blocks = []
            for block in section.blocks:
                if block.is_citation:
                    blocks.append(block)
                    continue
                lines = tuple(
                    line.model_copy(
                        update={"text": _VOCABULARY_PATTERN.sub(substitute, line.text)}
                    )
                    for line in block.lines
                )
                blocks.append(block.model_copy(update={"lines": lines}))
            sections.append(section.with_blocks(tuple(blocks)))

        if not replaced:
            return self._no_op(
                document,
                "The language in this talk is already simple, so I didn't change anything.",
            )

        total = sum(replaced.values())
        examples = ", ".join(
            f'"{word}" → "{SIMPLE_VOCABULARY[word]}"' for word in list(replaced)[:3]
        )
        return TransformationOutcome(
            document=document.model_copy(update={"sections": tuple(sections)}),
            response_text=(
                f"I've made the language simpler, replacing {total} word(s) with "
                f"plainer ones ({examples})."
            ),
            changes_summary=[
                f"Replaced '{word}' with '{SIMPLE_VOCABULARY[word]}' ({count}x)"
                for word, count in replaced.items()
            ],
        )


def _find_touch_up(section: Section) -> Optional[tuple[int, int, str, str]]:
    """Locate the first applicable touch-up as (block, line, old, new)."""
    for old, new in TESTIMONY_TOUCH_UPS:
        for block_index, block in enumerate(section.blocks):
            if block.is_citation:
                continue
            for line_index, line in enumerate(block.lines):
                if old in line.text:
                    return block_index, line_index, old, new
    return None


class GenericRevisionTransformation(Transformation):
    """Makes one small wording touch-up in the testimony."""

    intent = Intent.GENERIC_REVISION

    def apply(self, document: Document, instruction: str = "") -> TransformationOutcome:
        acknowledgment = f'I\'ve considered your request: "{instruction}".'

        testimony = document.get_section(SectionKey.TESTIMONY)
        touch_up = _find_touch_up(testimony) if testimony is not None else None
        if touch_up is None:
            return self._no_op(
                document,
                f"{acknowledgment} I don't have a safe general edit left to make, "
                f"so the talk is unchanged. Try asking to make it shorter, longer, "
                f"or simpler, or to add a scripture.",
            )

        block_index, line_index, old, new = touch_up
        block = testimony.blocks[block_index]
        lines = list(block.lines)
        lines[line_index] = lines[line_index].model_copy(
            update={"text": lines[line_index].text.replace(old, new, 1)}
        )
        blocks = list(testimony.blocks)
        blocks[block_index] = block.model_copy(update={"lines": tuple(lines)})

        return TransformationOutcome(
            document=document.replace_section(testimony.with_blocks(tuple(blocks))),
            response_text=(
                f'{acknowledgment} I made a small wording touch-up in the testimony '
                f'("{old}" → "{new}"). Would you like me to revise a specific '
                f"section or add more detail to certain points?"
            ),
            changes_summary=[f"Testimony: replaced '{old}' with '{new}'"],
        )
