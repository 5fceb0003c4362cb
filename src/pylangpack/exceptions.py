"""Custom exception hierarchy for pylangpack."""

from __future__ import annotations


class LanguagePackError(Exception):
    """Base exception for all pylangpack errors."""


class LanguagePackConfigError(LanguagePackError):
    """Invalid or missing configuration."""


class LanguagePackValidationError(LanguagePackError, ValueError):
    """Unknown or inactive language or module, or a malformed module key.

    Raised before any network or filesystem access takes place.
    """


class LanguagePackStateError(LanguagePackError):
    """A registry prerequisite is missing (e.g. no base URL resolved yet)."""


class LanguagePackTransportError(LanguagePackError):
    """Network-level failure (connection, timeout, protocol error).

    Non-200 responses are not errors at this layer; they are returned to the
    caller, which logs and handles them.
    """

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class LanguagePackDecodeError(LanguagePackError):
    """Mirror index could not be decompressed or parsed."""


class LanguagePackExtractionError(LanguagePackError):
    """Archive unreadable, entry malformed or unsafe, or a write failed."""

    def __init__(self, message: str, *, entry: str = "") -> None:
        self.entry = entry
        super().__init__(message)
