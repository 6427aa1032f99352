"""Structured talk document models."""

from collections.abc import Iterator
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SectionKey(str, Enum):
    """Stable section labels, in talk order."""

    SALUTATION = "salutation"
    INTRODUCTION = "introduction"
    SCRIPTURAL_FOUNDATION = "scriptural-foundation"
    PROPHETIC_GUIDANCE = "prophetic-guidance"
    KEY_CONCEPTS = "key-concepts"
    APPLICATION = "application"
    TESTIMONY = "testimony"
    CLOSING = "closing"


# Sections that exist only when requested at composition time
CONDITIONAL_SECTIONS: frozenset[SectionKey] = frozenset({
    SectionKey.SCRIPTURAL_FOUNDATION,
    SectionKey.PROPHETIC_GUIDANCE,
    SectionKey.KEY_CONCEPTS,
})


class BlockKind(str, Enum):
    """How a block is rendered."""

    PARAGRAPH = "paragraph"  # Lines joined into one paragraph
    BULLETS = "bullets"  # One "• " item per line
    QUOTE = "quote"  # One "> " line per line


# ============================================================================
# Building Blocks
# ============================================================================


class Line(BaseModel):
    """A sentence, bullet item or quoted line."""

    model_config = ConfigDict(frozen=True)

    text: str
    elaboration: bool = Field(
        default=False,
        description="Supporting sentence that can be cut when shortening",
    )


class Block(BaseModel):
    """A paragraph, bullet list or quotation inside a section."""

    model_config = ConfigDict(frozen=True)

    kind: BlockKind = BlockKind.PARAGRAPH
    lines: tuple[Line, ...] = ()

    @classmethod
    def paragraph(cls, *sentences: str, elaboration: bool = False) -> "Block":
        return cls(
            kind=BlockKind.PARAGRAPH,
            lines=tuple(Line(text=s, elaboration=elaboration) for s in sentences),
        )

    @classmethod
    def bullets(cls, *items: str) -> "Block":
        return cls(kind=BlockKind.BULLETS, lines=tuple(Line(text=i) for i in items))

    @classmethod
    def quote(cls, text: str) -> "Block":
        return cls(kind=BlockKind.QUOTE, lines=(Line(text=text),))

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def is_citation(self) -> bool:
        return self.kind == BlockKind.QUOTE

    def text_lines(self) -> list[str]:
        return [line.text for line in self.lines]

    def render(self) -> str:
        """Render the block using the talk text markers."""
        if self.kind == BlockKind.BULLETS:
            return "\n".join(f"• {line.text}" for line in self.lines)
        if self.kind == BlockKind.QUOTE:
            return "\n".join(f"> {line.text}" for line in self.lines)
        return " ".join(line.text for line in self.lines)

    def word_count(self) -> int:
        return sum(len(line.text.split()) for line in self.lines)


class Section(BaseModel):
    """A named section of the talk."""

    model_config = ConfigDict(frozen=True)

    key: SectionKey
    heading: Optional[str] = Field(
        default=None,
        description="Rendered as a '## ' header; None for unheaded sections",
    )
    blocks: tuple[Block, ...] = ()

    def citations(self) -> list[Block]:
        """Get the quoted citations in this section."""
        return [block for block in self.blocks if block.is_citation]

    def with_blocks(self, blocks: tuple[Block, ...]) -> "Section":
        """Return a copy of this section holding the given blocks."""
        return self.model_copy(update={"blocks": tuple(blocks)})

    def render(self) -> str:
        parts = []
        if self.heading:
            parts.append(f"## {self.heading}")
        parts.extend(block.render() for block in self.blocks if not block.is_empty)
        return "\n\n".join(parts)

    def word_count(self) -> int:
        return sum(block.word_count() for block in self.blocks)


# ============================================================================
# Document
# ============================================================================


class Document(BaseModel):
    """
    A complete talk.

    Documents are immutable values: every edit produces a new Document,
    so callers can keep earlier versions around for undo and comparison.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Talk title, rendered as the leading '# ' line")
    sections: tuple[Section, ...] = ()

    # Not part of the rendered talk
    target_minutes: Optional[int] = None
    speaker_notes: tuple[str, ...] = ()

    def get_section(self, key: SectionKey) -> Optional[Section]:
        """Get a section by key."""
        for section in self.sections:
            if section.key == key:
                return section
        return None

    def has_section(self, key: SectionKey) -> bool:
        return self.get_section(key) is not None

    def section_keys(self) -> list[SectionKey]:
        return [section.key for section in self.sections]

    def index_of(self, key: SectionKey) -> Optional[int]:
        for i, section in enumerate(self.sections):
            if section.key == key:
                return i
        return None

    def replace_section(self, section: Section) -> "Document":
        """Return a copy with the section of the same key replaced.

        A section whose key is not present is not added.
        """
        index = self.index_of(section.key)
        if index is None:
            return self
        sections = list(self.sections)
        sections[index] = section
        return self.model_copy(update={"sections": tuple(sections)})

    def iter_lines(self) -> Iterator[tuple[Section, Block, Line]]:
        for section in self.sections:
            for block in section.blocks:
                for line in block.lines:
                    yield section, block, line

    def citation_count(self) -> int:
        return sum(len(section.citations()) for section in self.sections)

    def closing_line(self) -> Optional[str]:
        """Get the final line of the closing section (the benediction)."""
        closing = self.get_section(SectionKey.CLOSING)
        if closing is None:
            return None
        lines = [line.text for block in closing.blocks for line in block.lines]
        return lines[-1] if lines else None

    def render(self) -> str:
        """Render the talk as marked-up plain text."""
        parts = [f"# {self.title}"]
        parts.extend(
            rendered for rendered in (s.render() for s in self.sections) if rendered
        )
        return "\n\n".join(parts)

    def word_count(self) -> int:
        return sum(section.word_count() for section in self.sections)

    def estimated_duration_minutes(self, words_per_minute: int = 130) -> float:
        """Estimate speaking time."""
        return self.word_count() / words_per_minute
