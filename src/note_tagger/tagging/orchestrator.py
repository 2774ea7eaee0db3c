"""
Tagging pipeline for one note or a whole vault.

Each note goes through the same steps:

    IDLE -> READING -> PROMPTING -> PARSING -> FILTERING -> (PREVIEW | MERGING) -> DONE

FAILED is reached when the note cannot be read, the provider call fails, or
the confirmed tags cannot be written. A failed note is never modified.

Example:
    store = LocalDocumentStore(Path("~/vault").expanduser())
    orchestrator = TaggingOrchestrator(store, load_settings(settings_path))
    outcome = orchestrator.tag_document("inbox/meeting.md")
    print(outcome.message)
"""

import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from ..errors import NoteTaggerError
from ..metadata import extract_existing_tags, merge_tags, strip_frontmatter, unique_tags
from ..storage import DocumentStore
from .providers import ProviderClient


PROGRESS_INTERVAL = 10

ConfirmCallback = Callable[[str, List[str]], Sequence[str]]
NotifyCallback = Callable[[str], None]


class TaggingState(str, Enum):
    """Where a note is in the tagging pipeline."""
    IDLE = "idle"
    READING = "reading"
    PROMPTING = "prompting"
    PARSING = "parsing"
    FILTERING = "filtering"
    PREVIEW = "preview"
    MERGING = "merging"
    DONE = "done"
    FAILED = "failed"


@dataclass
class TaggingOutcome:
    """Result of running the pipeline on one note."""
    path: str
    state: TaggingState = TaggingState.IDLE
    existing_tags: List[str] = field(default_factory=list)
    proposed_tags: List[str] = field(default_factory=list)
    applied_tags: List[str] = field(default_factory=list)
    error: Optional[str] = None
    status_code: Optional[int] = None
    message: str = ""

    @property
    def failed(self) -> bool:
        return self.state is TaggingState.FAILED

    @property
    def needs_confirmation(self) -> bool:
        return self.state is TaggingState.PREVIEW


@dataclass
class BatchResult:
    """Counters and per-note outcomes of a batch run."""
    total: int = 0
    processed: int = 0
    errors: int = 0
    outcomes: List[TaggingOutcome] = field(default_factory=list)

    @property
    def summary(self) -> str:
        return f"Batch processing complete. Processed: {self.processed}, Errors: {self.errors}"


def _print_notice(message: str) -> None:
    print(message)


class TaggingOrchestrator:
    """
    Runs the tagging pipeline against a document store.

    Settings are an explicit value: when they change, assign a fresh
    TaggerSettings to `settings` and the next note uses it.

    Attributes:
        store: Where notes are read from and written to
        settings: TaggerSettings used for every call
        client: ProviderClient that talks to the model
        confirm: Optional callback(path, proposed_tags) -> selected tags,
            used when auto-apply is off. Without it, notes stop in PREVIEW
        notify: Callback receiving user-facing messages
        verbose: If True, print progress to stderr
    """

    def __init__(
        self,
        store: DocumentStore,
        settings,
        client: Optional[ProviderClient] = None,
        confirm: Optional[ConfirmCallback] = None,
        notify: Optional[NotifyCallback] = None,
        verbose: bool = False
    ):
        self.store = store
        self.settings = settings
        self.client = client or ProviderClient(verbose=verbose)
        self.confirm = confirm
        self.notify = notify or _print_notice
        self.verbose = verbose

    def _fail(self, outcome: TaggingOutcome, error: str) -> TaggingOutcome:
        outcome.state = TaggingState.FAILED
        outcome.error = error
        outcome.message = f"Error: {error}"
        self.notify(outcome.message)
        return outcome

    def _done(self, outcome: TaggingOutcome, message: str) -> TaggingOutcome:
        outcome.state = TaggingState.DONE
        outcome.message = message
        self.notify(message)
        return outcome

    def tag_document(self, path: str) -> TaggingOutcome:
        """
        Generate tags for one note and apply or propose them.

        Args:
            path: Note path within the store

        Returns:
            TaggingOutcome describing the final state. Errors are reported
            in the outcome, never raised.
        """
        outcome = TaggingOutcome(path=path)

        outcome.state = TaggingState.READING
        try:
            content = self.store.read(path)
        except NoteTaggerError as e:
            return self._fail(outcome, str(e))
        body = strip_frontmatter(content)
        outcome.existing_tags = extract_existing_tags(content)

        outcome.state = TaggingState.PROMPTING
        try:
            config = self.settings.provider_config()
        except NoteTaggerError as e:
            return self._fail(outcome, str(e))
        result = self.client.generate(body, config)
        if not result.ok:
            outcome.status_code = getattr(result.exception, "status_code", None)
            return self._fail(outcome, result.error)

        outcome.state = TaggingState.PARSING
        tags = result.tags
        if not tags:
            return self._done(outcome, "No tags generated")

        outcome.state = TaggingState.FILTERING
        tags = unique_tags(tags)
        if self.settings.exclude_existing_tags:
            existing = {tag.lower() for tag in outcome.existing_tags}
            tags = [tag for tag in tags if tag.lower() not in existing]
        outcome.proposed_tags = tags
        if not tags:
            return self._done(outcome, "No new tags to add")

        if self.settings.auto_apply_tags:
            return self._merge(outcome, tags)

        outcome.state = TaggingState.PREVIEW
        if self.confirm is None:
            outcome.message = f"Proposed {len(tags)} tags: {', '.join(tags)}"
            return outcome

        selected = [tag for tag in unique_tags(self.confirm(path, list(tags))) if tag in tags]
        if not selected:
            return self._done(outcome, "No tags selected")
        return self._merge(outcome, selected)

    def apply_tags(self, path: str, tags: Sequence[str]) -> TaggingOutcome:
        """
        Merge a confirmed set of tags into a note.

        Used after a PREVIEW outcome once the user has picked which proposed
        tags to keep.

        Args:
            path: Note path within the store
            tags: Tags to add

        Returns:
            TaggingOutcome in DONE or FAILED state
        """
        outcome = TaggingOutcome(path=path, proposed_tags=list(tags))
        if not tags:
            return self._done(outcome, "No tags selected")
        return self._merge(outcome, list(tags))

    def _merge(self, outcome: TaggingOutcome, tags: List[str]) -> TaggingOutcome:
        outcome.state = TaggingState.MERGING
        try:
            # Re-read so edits made while the provider was busy are kept
            content = self.store.read(outcome.path)
            updated = merge_tags(content, tags)
            if updated != content:
                self.store.write(outcome.path, updated)
        except NoteTaggerError as e:
            return self._fail(outcome, str(e))

        outcome.applied_tags = list(tags)
        return self._done(outcome, f"Added {len(tags)} tags: {', '.join(tags)}")

    def tag_documents(self, paths: Optional[Sequence[str]] = None) -> BatchResult:
        """
        Run the pipeline over many notes, one after another.

        A failing note is counted and skipped; it never stops the batch.

        Args:
            paths: Notes to process. Defaults to every note in the store

        Returns:
            BatchResult with processed/error counts and per-note outcomes
        """
        if paths is None:
            paths = self.store.list_documents()
        paths = list(paths)

        result = BatchResult(total=len(paths))
        start_time = time.time()

        for i, path in enumerate(paths, 1):
            try:
                outcome = self.tag_document(path)
            except Exception as e:
                outcome = TaggingOutcome(path=path)
                self._fail(outcome, f"{type(e).__name__}: {e}")

            result.outcomes.append(outcome)
            if outcome.failed:
                result.errors += 1
                if self.verbose:
                    print(f"  ✗ {path}: {outcome.error}", file=sys.stderr)
            else:
                result.processed += 1

            if self.verbose and i % PROGRESS_INTERVAL == 0:
                elapsed = time.time() - start_time
                print(
                    f"[{i}/{len(paths)}] Processed {result.processed} notes "
                    f"({result.errors} errors), elapsed {elapsed:.1f}s",
                    file=sys.stderr,
                )

        self.notify(result.summary)
        return result
