"""
Document store abstraction for notes.

The tagger only needs three things from wherever notes live: read a note,
write it back, and list all notes for batch runs. DocumentStore captures
that; LocalDocumentStore serves a vault directory of Markdown files.
"""

from pathlib import Path
from typing import List, Protocol

from ..errors import DocumentStoreError


MARKDOWN_SUFFIX = ".md"


# ============================================================================
# DocumentStore Protocol
# ============================================================================

class DocumentStore(Protocol):
    """
    Protocol for reading and writing notes.

    Paths are POSIX-style strings relative to the store root.
    """

    def read(self, path: str) -> str:
        """
        Return the full text of a note.

        Raises:
            DocumentStoreError: If the note does not exist or cannot be read
        """
        ...

    def write(self, path: str, text: str) -> None:
        """
        Replace the full text of a note.

        Raises:
            DocumentStoreError: If the note cannot be written
        """
        ...

    def list_documents(self) -> List[str]:
        """Return every note path, in a stable order."""
        ...


# ============================================================================
# LocalDocumentStore Implementation
# ============================================================================

def is_markdown_path(path: str) -> bool:
    return path.lower().endswith(MARKDOWN_SUFFIX)


class LocalDocumentStore:
    """
    DocumentStore over a local vault directory.

    Hidden directories (such as `.obsidian` or `.git`) are skipped when
    listing notes.
    """

    def __init__(self, root: Path):
        """
        Initialize the store with a vault directory.

        Args:
            root: Path to the vault root directory

        Raises:
            FileNotFoundError: If the directory does not exist
            NotADirectoryError: If root is not a directory
        """
        self.root = Path(root).resolve()
        if not self.root.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        if not self.root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

    def _resolve(self, path: str) -> Path:
        file_path = (self.root / path).resolve()
        if file_path != self.root and self.root not in file_path.parents:
            raise DocumentStoreError(f"Path escapes vault: {path}")
        return file_path

    def relative(self, path: Path) -> str:
        """Convert a filesystem path to a store path."""
        return Path(path).resolve().relative_to(self.root).as_posix()

    def list_documents(self) -> List[str]:
        """List all Markdown notes recursively under the vault."""
        notes = []
        for path in self.root.rglob(f"*{MARKDOWN_SUFFIX}"):
            rel = path.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if path.is_file():
                notes.append(rel.as_posix())
        return sorted(notes)

    def read(self, path: str) -> str:
        """Read a note as UTF-8 text."""
        file_path = self._resolve(path)
        if not file_path.is_file():
            raise DocumentStoreError(f"Note not found: {path}")
        try:
            with open(file_path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentStoreError(f"Could not read {path}: {e}")

    def write(self, path: str, text: str) -> None:
        """Write a note as UTF-8 text, keeping its line endings as given."""
        file_path = self._resolve(path)
        try:
            with open(file_path, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
        except OSError as e:
            raise DocumentStoreError(f"Could not write {path}: {e}")
