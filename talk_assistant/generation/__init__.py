"""Talk generation module for composing talks from preferences."""

from .composer import ComposerConfig, TalkComposer, compose
from .templates import (
    FORMAT_LAYOUTS,
    LENGTH_GUIDELINES,
    SECTION_TEMPLATES,
    FormatLayout,
    SectionTemplate,
    get_format_layout,
    get_length_config,
    get_salutation,
    get_section_template,
    get_section_templates,
)

__all__ = [
    # Composer
    "TalkComposer",
    "ComposerConfig",
    "compose",
    # Templates
    "SectionTemplate",
    "SECTION_TEMPLATES",
    "FORMAT_LAYOUTS",
    "LENGTH_GUIDELINES",
    "FormatLayout",
    "get_format_layout",
    "get_length_config",
    "get_salutation",
    "get_section_template",
    "get_section_templates",
]
