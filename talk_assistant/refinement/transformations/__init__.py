"""Edit policies applied to a talk for each classified intent."""

from .base import Transformation, TransformationOutcome
from .language import (
    SIMPLE_VOCABULARY,
    TESTIMONY_TOUCH_UPS,
    GenericRevisionTransformation,
    SimplifyLanguageTransformation,
)
from .length import (
    CLOSING_PARAGRAPHS,
    REFLECTION_PARAGRAPHS,
    LengthenTransformation,
    ShortenTransformation,
)
from .registry import TransformationRegistry
from .scripture import ADDITIONAL_SCRIPTURES, AddScriptureTransformation

__all__ = [
    # Base
    "Transformation",
    "TransformationOutcome",
    "TransformationRegistry",
    # Transformations
    "ShortenTransformation",
    "LengthenTransformation",
    "AddScriptureTransformation",
    "SimplifyLanguageTransformation",
    "GenericRevisionTransformation",
    # Wording pools
    "ADDITIONAL_SCRIPTURES",
    "CLOSING_PARAGRAPHS",
    "REFLECTION_PARAGRAPHS",
    "SIMPLE_VOCABULARY",
    "TESTIMONY_TOUCH_UPS",
]
