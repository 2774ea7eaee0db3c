"""
Exception types shared across the tagger.

Every failure that the tagging pipeline knows how to report is a
NoteTaggerError. The orchestrator catches these at its boundary and turns
them into user-visible messages, so nothing in this hierarchy should ever
reach a caller that is processing a batch of notes.
"""

from typing import Optional


class NoteTaggerError(Exception):
    """Base class for tagger failures."""


class ConfigError(NoteTaggerError):
    """Missing credential or invalid setting. The user has to fix settings."""


class ProviderError(NoteTaggerError):
    """
    Provider call failed: non-success HTTP status or transport fault.

    Attributes:
        provider: Display name of the backend (e.g. "OpenAI")
        status_code: HTTP status when the server answered, else None
    """

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{provider} error: {message}")
        self.provider = provider
        self.status_code = status_code


class DocumentStoreError(NoteTaggerError):
    """A note could not be read from or written to the store."""
