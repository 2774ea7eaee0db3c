#!/usr/bin/env python3
"""
CLI wrapper for tagging notes in a vault.

Equivalent to the installed `note-tagger` command.
"""

import sys

from note_tagger.cli import main


if __name__ == "__main__":
    sys.exit(main())
