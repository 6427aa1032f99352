"""Registry mapping intents to transformations."""

import logging
from collections.abc import Iterable
from typing import Optional

from ..models import Intent
from .base import Transformation
from .language import GenericRevisionTransformation, SimplifyLanguageTransformation
from .length import LengthenTransformation, ShortenTransformation
from .scripture import AddScriptureTransformation

logger = logging.getLogger(__name__)


class TransformationRegistry:
    """
    Looks up the transformation for a classified intent.

    Usage:
        registry = TransformationRegistry.default()
        outcome = registry.get(Intent.SHORTEN).apply(document)

        # Swap in a custom edit policy
        registry.register(MyShortenTransformation())
    """

    def __init__(self, transformations: Optional[Iterable[Transformation]] = None):
        self._transformations: dict[Intent, Transformation] = {}
        for transformation in transformations or ():
            self.register(transformation)

    @classmethod
    def default(cls) -> "TransformationRegistry":
        """Create a registry holding the built-in transformation for every intent."""
        return cls([
            ShortenTransformation(),
            LengthenTransformation(),
            AddScriptureTransformation(),
            SimplifyLanguageTransformation(),
            GenericRevisionTransformation(),
        ])

    def register(
        self, transformation: Transformation, intent: Optional[Intent] = None
    ) -> None:
        """Register a transformation, replacing any existing one for the intent."""
        key = intent or transformation.intent
        if key in self._transformations:
            logger.debug(f"Replacing transformation for {key.value}")
        self._transformations[key] = transformation

    def get(self, intent: Intent) -> Transformation:
        """Get the transformation for an intent."""
        try:
            return self._transformations[intent]
        except KeyError:
            raise KeyError(f"No transformation registered for intent: {intent.value}") from None

    def intents(self) -> list[Intent]:
        return list(self._transformations.keys())

    def __contains__(self, intent: object) -> bool:
        return intent in self._transformations

    def __len__(self) -> int:
        return len(self._transformations)
