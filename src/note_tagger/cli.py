"""
Command-line front end for the note tagger.

Usage:
    note-tagger --vault ~/notes note inbox/meeting.md
    note-tagger --vault ~/notes --auto-apply all --yes --report tags.csv

Settings are read from --settings, or from .note-tagger.json in the vault
root when present. API keys can also come from OPENAI_API_KEY and
ANTHROPIC_API_KEY, including a .env file in the working directory.
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import find_dotenv, load_dotenv

from .config import TaggerSettings, load_settings
from .errors import ConfigError
from .storage import LocalDocumentStore, is_markdown_path
from .tagging import Provider, TaggingOrchestrator
from .utils import write_report


SETTINGS_FILENAME = ".note-tagger.json"


def prompt_selection(
    path: str,
    tags: List[str],
    input_func: Optional[Callable[[str], str]] = None
) -> List[str]:
    """
    Ask the user which proposed tags to keep.

    Accepts "y"/empty for all, "n" for none, or a comma-separated subset.

    Args:
        path: Note being tagged
        tags: Proposed tags
        input_func: Reads one answer line (replaceable in tests)

    Returns:
        Selected tags, in proposal order
    """
    print(f"\nGenerated tags for {path}:")
    for tag in tags:
        print(f"  - {tag}")

    input_func = input_func or input
    answer = input_func("Apply tags? [Y/n/comma-separated subset] ").strip()
    if not answer or answer.lower() in ("y", "yes"):
        return list(tags)
    if answer.lower() in ("n", "no"):
        return []

    chosen = {item.strip().lower() for item in answer.split(",")}
    return [tag for tag in tags if tag in chosen]


def confirm_batch(count: int, input_func: Optional[Callable[[str], str]] = None) -> bool:
    """Warn about cost before a batch run and ask to proceed."""
    print(f"This will generate tags for all {count} notes in your vault.")
    print("This may take a while and consume API credits.")
    input_func = input_func or input
    answer = input_func("Proceed? [y/N] ").strip().lower()
    return answer in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="note-tagger",
        description="Generate tags for Markdown notes with OpenAI or Claude"
    )
    parser.add_argument(
        "--vault",
        type=Path,
        default=Path("."),
        help="Vault root directory (default: current directory)"
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help=f"Settings JSON file (default: <vault>/{SETTINGS_FILENAME})"
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in Provider],
        help="Override the configured provider"
    )
    parser.add_argument(
        "--auto-apply",
        action="store_true",
        help="Apply generated tags without asking"
    )
    parser.add_argument(
        "--no-exclude-existing",
        action="store_true",
        help="Keep generated tags the note already has"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed progress"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    note_parser = subparsers.add_parser("note", help="Generate tags for one note")
    note_parser.add_argument("path", help="Note path (relative to the vault, or absolute)")

    all_parser = subparsers.add_parser("all", help="Generate tags for every note in the vault")
    all_parser.add_argument(
        "--yes",
        action="store_true",
        help="Skip the batch confirmation prompt"
    )
    all_parser.add_argument(
        "--report",
        type=Path,
        help="Write a CSV report of the batch run"
    )

    return parser


def resolve_settings(args: argparse.Namespace) -> TaggerSettings:
    settings_path = args.settings or (args.vault / SETTINGS_FILENAME)
    settings = load_settings(settings_path)
    settings = settings.with_overrides(
        default_provider=args.provider,
        auto_apply_tags=True if args.auto_apply else None,
        exclude_existing_tags=False if args.no_exclude_existing else None,
    )
    return settings.validate()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for the note tagger."""
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv(find_dotenv(usecwd=True))

    try:
        settings = resolve_settings(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        store = LocalDocumentStore(args.vault)
    except (FileNotFoundError, NotADirectoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Vault: {store.root}", file=sys.stderr)
        print(f"Provider: {settings.default_provider}", file=sys.stderr)

    orchestrator = TaggingOrchestrator(
        store,
        settings,
        confirm=None if settings.auto_apply_tags else prompt_selection,
        notify=print,
        verbose=args.verbose,
    )

    if args.command == "note":
        path = Path(args.path)
        try:
            note = store.relative(path) if path.is_absolute() else path.as_posix()
        except ValueError:
            print(f"Error: {path} is not inside the vault {store.root}", file=sys.stderr)
            return 1
        if not is_markdown_path(note):
            print("Error: Active file is not a markdown file", file=sys.stderr)
            return 1
        outcome = orchestrator.tag_document(note)
        return 1 if outcome.failed else 0

    notes = store.list_documents()
    if not notes:
        print("No notes found")
        return 0

    if not (args.yes or settings.batch_processing) and not confirm_batch(len(notes)):
        print("Cancelled")
        return 0

    print(f"Processing {len(notes)} files...")
    result = orchestrator.tag_documents(notes)

    if args.report:
        write_report(result, args.report, verbose=args.verbose)

    return 1 if result.errors else 0


if __name__ == "__main__":
    sys.exit(main())
