"""
AI note tagger.

Proposes tags for Markdown notes with an OpenAI or Claude model and merges
them into each note's front matter.
"""

from .errors import ConfigError, DocumentStoreError, NoteTaggerError, ProviderError

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "DocumentStoreError",
    "NoteTaggerError",
    "ProviderError",
    "__version__",
]
