"""Root of the typescope exception hierarchy."""

from typing import Mapping, Optional


class TypescopeError(Exception):
    """An error typescope raises deliberately.

    ``message`` is the one-line summary; ``details`` holds the structured
    context (file path, reason, config key) appended when the error is
    printed, e.g. ``Failed to parse swift file: A.swift (reason=...)``.
    """

    def __init__(self, message: str, details: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details) if details else {}

    def __str__(self) -> str:
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})" if context else self.message
