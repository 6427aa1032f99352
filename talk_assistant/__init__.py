"""Talk Assistant: compose a talk from preferences and refine it through chat."""

__version__ = "0.1.0"
