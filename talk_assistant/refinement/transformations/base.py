"""Base classes for talk transformations."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from talk_assistant.models.document import Document

from ..models import Intent

logger = logging.getLogger(__name__)


@dataclass
class TransformationOutcome:
    """Result of applying a transformation to a document."""

    document: Document
    response_text: str
    changed: bool = True
    changes_summary: list[str] = field(default_factory=list)


class Transformation(ABC):
    """
    Abstract base class for intent transformations.

    A transformation is a pure edit policy: it never mutates the input
    document and never raises on a well-formed one. When its target is
    missing it returns the input unchanged with ``changed=False``.
    """

    intent: Intent

    @abstractmethod
    def apply(self, document: Document, instruction: str = "") -> TransformationOutcome:
        """
        Apply this transformation.

        Args:
            document: The current talk
            instruction: The user's instruction, for acknowledgment text

        Returns:
            TransformationOutcome with the new document and a response
        """
        pass

    def _no_op(self, document: Document, response_text: str) -> TransformationOutcome:
        """Build an outcome that leaves the document as it was."""
        logger.debug(f"{type(self).__name__} made no change")
        return TransformationOutcome(
            document=document,
            response_text=response_text,
            changed=False,
        )
