"""banwatch: LLM-backed banned-content checks for user text."""

__version__ = "0.1.0"
