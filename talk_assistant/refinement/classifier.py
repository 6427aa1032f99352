"""Intent classification for refinement instructions."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .models import Intent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentRule:
    """Maps a set of trigger phrases to an intent."""

    intent: Intent
    keywords: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """Check for any keyword as a case-insensitive substring."""
        lowered = text.lower()
        return any(keyword.lower() in lowered for keyword in self.keywords)


# Evaluated in order; the first matching rule wins
KEYWORD_RULES: tuple[IntentRule, ...] = (
    IntentRule(Intent.SHORTEN, ("shorter",)),
    IntentRule(Intent.LENGTHEN, ("longer", "more detail")),
    IntentRule(Intent.ADD_SCRIPTURE, ("scripture",)),
    IntentRule(Intent.SIMPLIFY_LANGUAGE, ("simple", "basic")),
)


class IntentClassifier(ABC):
    """Abstract base class for instruction classifiers.

    Implementations must be total: every string, including the empty
    string, maps to exactly one Intent.
    """

    @abstractmethod
    def classify(self, instruction: str) -> Intent:
        """
        Classify a refinement instruction.

        Args:
            instruction: Free-form user instruction

        Returns:
            The single Intent for this instruction
        """
        pass


class KeywordIntentClassifier(IntentClassifier):
    """
    Rule-table classifier using case-insensitive substring matching.

    Usage:
        classifier = KeywordIntentClassifier()
        classifier.classify("Can you make this shorter?")  # Intent.SHORTEN
    """

    def __init__(
        self,
        rules: Optional[tuple[IntentRule, ...]] = None,
        default: Intent = Intent.GENERIC_REVISION,
    ):
        self.rules = KEYWORD_RULES if rules is None else tuple(rules)
        self.default = default

    def classify(self, instruction: str) -> Intent:
        for rule in self.rules:
            if rule.matches(instruction):
                logger.debug(f"Classified as {rule.intent.value}: {instruction!r}")
                return rule.intent

        logger.debug(f"No rule matched, using {self.default.value}: {instruction!r}")
        return self.default


def classify(instruction: str) -> Intent:
    """Classify an instruction with the default keyword rules."""
    return KeywordIntentClassifier().classify(instruction)
