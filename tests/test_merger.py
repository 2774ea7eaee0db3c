"""
Tests for merging tags into front matter.
"""
import pytest

from note_tagger.metadata import extract_existing_tags, format_tags_field, merge_tags
from note_tagger.tagging import parse_model_reply


NOTES = [
    "# Title\nHello world",
    "---\ntitle: Note\n---\nBody\n",
    '---\ntitle: Note\ntags: ["a"]\ndate: 2024-01-01\n---\nBody\n',
    "---\ntags:\n  - a\n  - b\ntitle: x\n---\nBody",
    "---\ntags: a, b\n---\nBody",
    "---\n---\nBody",
    "---\r\ntitle: Note\r\n---\r\nBody\r\n",
]


class TestMergeTags:
    """Tests for merge_tags."""

    def test_creates_header_when_missing(self):
        """Test header synthesis for a note without front matter."""
        result = merge_tags("# Title\nHello world", ["intro", "notes"])
        assert result == '---\ntags: ["intro", "notes"]\n---\n\n# Title\nHello world'

    def test_new_header_is_deduplicated(self):
        """Test that repeated new tags collapse in a synthesized header."""
        result = merge_tags("Body", ["a", "b", "a"])
        assert result == '---\ntags: ["a", "b"]\n---\n\nBody'

    def test_no_tags_and_no_header_is_unchanged(self):
        """Test that merging nothing into a plain note is a no-op."""
        assert merge_tags("Body", []) == "Body"

    def test_replaces_inline_list_in_place(self):
        """Test inline list update keeps other fields where they are."""
        content = "---\ntitle: Note\ntags: [a]\ndate: 2024-01-01\n---\nBody\n"
        result = merge_tags(content, ["b"])
        assert result == '---\ntitle: Note\ntags: ["a", "b"]\ndate: 2024-01-01\n---\nBody\n'

    def test_replaces_block_list_in_place(self):
        """Test block list is rewritten without swallowing the next field."""
        content = "---\ntags:\n  - a\n  - b\ntitle: x\n---\nBody"
        result = merge_tags(content, ["c"])
        assert result == '---\ntags: ["a", "b", "c"]\ntitle: x\n---\nBody'

    def test_replaces_block_list_at_end_of_header(self):
        """Test block list as the last header field."""
        content = "---\ntitle: x\ntags:\n  - a\n---\nBody"
        result = merge_tags(content, ["b"])
        assert result == '---\ntitle: x\ntags: ["a", "b"]\n---\nBody'

    def test_replaces_scalar_value(self):
        """Test scalar tags value is rewritten rather than duplicated."""
        result = merge_tags("---\ntags: a, b\n---\nBody", ["c"])
        assert result == '---\ntags: ["a", "b", "c"]\n---\nBody'

    def test_appends_field_to_header(self):
        """Test header without tags gets a new field at the end."""
        result = merge_tags("---\ntitle: x\n---\nBody", ["a"])
        assert result == '---\ntitle: x\ntags: ["a"]\n---\nBody'

    def test_empty_header(self):
        """Test header with no fields at all."""
        assert merge_tags("---\n---\nBody", ["a"]) == '---\ntags: ["a"]\n---\nBody'

    def test_existing_order_is_kept(self):
        """Test existing tags stay first, new tags follow in given order."""
        content = '---\ntags: ["b", "a"]\n---\n'
        result = merge_tags(content, ["c", "a", "d"])
        assert extract_existing_tags(result) == ["b", "a", "c", "d"]

    def test_nothing_new_leaves_note_untouched(self):
        """Test that already-present tags do not reformat the field."""
        content = "---\ntags:\n  - a\n  - b\n---\nBody"
        assert merge_tags(content, ["a", "b"]) == content

    def test_body_is_preserved(self):
        """Test body text, including look-alike fields, is not touched."""
        content = "---\ntitle: t\n---\ntags: [z]\n\n---\nmore\n"
        result = merge_tags(content, ["a"])
        assert result == '---\ntitle: t\ntags: ["a"]\n---\ntags: [z]\n\n---\nmore\n'

    def test_crlf_header_keeps_line_endings(self):
        """Test appended field uses the header's line endings."""
        content = "---\r\ntitle: Note\r\n---\r\nBody\r\n"
        result = merge_tags(content, ["a"])
        assert result == '---\r\ntitle: Note\r\ntags: ["a"]\r\n---\r\nBody\r\n'

    @pytest.mark.parametrize("content", NOTES)
    def test_idempotent(self, content):
        """Test applying the same tags twice equals applying them once."""
        tags = ["intro", "a", "notes"]
        once = merge_tags(content, tags)
        assert merge_tags(once, tags) == once

    @pytest.mark.parametrize("content", NOTES)
    def test_merged_tags_read_back(self, content):
        """Test every merged tag can be read back from the header."""
        result = merge_tags(content, ["intro", "notes"])
        existing = extract_existing_tags(result)
        assert "intro" in existing
        assert "notes" in existing

    def test_bracket_in_tag_reads_back(self):
        """Test a generated tag containing brackets survives the header round trip."""
        tags = parse_model_reply("notes, arr[i]", 5)
        once = merge_tags("Body", tags)

        assert once == '---\ntags: ["notes", "arr[i]"]\n---\n\nBody'
        assert extract_existing_tags(once) == ["notes", "arr[i]"]

    def test_bracket_in_tag_is_idempotent(self):
        """Test merging a bracketed tag twice equals merging it once."""
        tags = parse_model_reply("notes, arr[i]", 5)
        once = merge_tags("---\ntitle: x\n---\nBody", tags)

        assert merge_tags(once, tags) == once
        assert merge_tags(once, ["more"]) == (
            '---\ntitle: x\ntags: ["notes", "arr[i]", "more"]\n---\nBody'
        )


class TestFormatTagsField:
    """Tests for the inline field renderer."""

    def test_format(self):
        assert format_tags_field(["a", "b"]) == 'tags: ["a", "b"]'

    def test_format_empty(self):
        assert format_tags_field([]) == "tags: []"
