"""Language utilities for the content planner.

Rejection messages and CLI prompts are shown in the dashboard language
(Spanish by default). Keeping the enum in the domain layer lets services and
the CLI share it without importing each other.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    ENGLISH = "en"
    SPANISH = "es"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the dashboard."""

        return cls.SPANISH

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "Spanish" if self is Language.SPANISH else "English"
