"""Note storage backends."""

from .store import (
    DocumentStore,
    LocalDocumentStore,
    is_markdown_path,
)

__all__ = [
    "DocumentStore",
    "LocalDocumentStore",
    "is_markdown_path",
]
