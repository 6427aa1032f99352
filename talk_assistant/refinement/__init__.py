"""
Refinement Engine for iterative talk improvement.

This module turns free-form chat instructions into edits of a composed
talk, with support for:
- Rule-based intent classification (pluggable)
- Shortening, lengthening, adding scripture and simplifying language
- An append-only conversation log
- Undo/redo over document snapshots

Usage:
    from talk_assistant.refinement import RefinementEngine

    engine = RefinementEngine()
    await engine.start(PreferenceSet(topic="Faith", include_scriptures=True))
    result = await engine.submit_instruction("add a scripture")
    print(result.response_text)
"""

from .classifier import (
    KEYWORD_RULES,
    IntentClassifier,
    IntentRule,
    KeywordIntentClassifier,
    classify,
)
from .engine import RefinementEngine
from .history import RefinementHistory, RefinementHistoryEntry
from .models import (
    Intent,
    NoOpReason,
    NoOpResult,
    RefinementConfig,
    RefinementResult,
    SessionState,
    SubmissionResult,
)
from .transformations import (
    Transformation,
    TransformationOutcome,
    TransformationRegistry,
)

__all__ = [
    # Core
    "RefinementEngine",
    "RefinementConfig",
    "SessionState",
    # Classification
    "Intent",
    "IntentClassifier",
    "IntentRule",
    "KeywordIntentClassifier",
    "KEYWORD_RULES",
    "classify",
    # Transformations
    "Transformation",
    "TransformationOutcome",
    "TransformationRegistry",
    # Results
    "RefinementResult",
    "NoOpResult",
    "NoOpReason",
    "SubmissionResult",
    # History
    "RefinementHistory",
    "RefinementHistoryEntry",
]
