"""
Tests for front matter parsing.
"""
import pytest

from note_tagger.metadata import (
    extract_existing_tags,
    split_frontmatter,
    strip_frontmatter,
)


class TestExtractExistingTags:
    """Tests for reading tags out of the header."""

    def test_inline_quoted_list(self):
        """Test inline list with double quotes."""
        content = '---\ntags: ["a", "b"]\n---\nBody'
        assert extract_existing_tags(content) == ["a", "b"]

    def test_block_list(self):
        """Test block list form."""
        content = "---\ntags:\n  - a\n  - b\n---\nBody"
        assert extract_existing_tags(content) == ["a", "b"]

    def test_block_list_followed_by_field(self):
        """Test block list stops at the next field."""
        content = "---\ntags:\n- one\n- 'two'\ntitle: Note\n---\nBody"
        assert extract_existing_tags(content) == ["one", "two"]

    def test_inline_unquoted_and_single_quoted(self):
        """Test mixed quoting in an inline list."""
        content = "---\ntitle: x\ntags: [plain, 'single', \"double\"]\n---\n"
        assert extract_existing_tags(content) == ["plain", "single", "double"]

    def test_scalar_value(self):
        """Test a bare comma-separated value."""
        content = "---\ntags: alpha, beta\n---\nBody"
        assert extract_existing_tags(content) == ["alpha", "beta"]

    def test_empty_inline_list(self):
        """Test that an empty list yields no tags."""
        assert extract_existing_tags("---\ntags: []\n---\nBody") == []

    def test_no_header(self):
        """Test a note without front matter."""
        assert extract_existing_tags("# Title\nHello world") == []

    def test_header_without_tags(self):
        """Test a header with no tags field."""
        assert extract_existing_tags("---\ntitle: Note\n---\nBody") == []

    def test_body_is_not_scanned(self):
        """Test that a tags line in the body is ignored."""
        content = "---\ntitle: Note\n---\ntags: [not, these]\n"
        assert extract_existing_tags(content) == []

    def test_body_without_header_is_not_scanned(self):
        """Test that tags in a header-less note body are ignored."""
        assert extract_existing_tags("tags: [x]\nmore text") == []

    def test_crlf_line_endings(self):
        """Test Windows line endings."""
        content = "---\r\ntags:\r\n  - a\r\n  - b\r\n---\r\nBody"
        assert extract_existing_tags(content) == ["a", "b"]

    def test_similar_key_is_not_tags(self):
        """Test that keys ending in 'tags' are not mistaken for tags."""
        content = "---\nmytags: [x]\n---\nBody"
        assert extract_existing_tags(content) == []

    def test_quoted_item_with_bracket(self):
        """Test a closing bracket inside a quoted item does not end the list."""
        content = '---\ntags: ["notes", "arr[i]"]\ntitle: x\n---\nBody'
        assert extract_existing_tags(content) == ["notes", "arr[i]"]

    def test_quoted_item_with_comma(self):
        """Test a comma inside a quoted item does not split it."""
        content = "---\ntags: ['a, b', c]\n---\nBody"
        assert extract_existing_tags(content) == ["a, b", "c"]

    def test_unquoted_apostrophe(self):
        """Test an apostrophe inside an unquoted item."""
        content = "---\ntags: [it's, x]\n---\nBody"
        assert extract_existing_tags(content) == ["it's", "x"]


class TestSplitFrontmatter:
    """Tests for separating header and body."""

    @pytest.mark.parametrize("content, expected", [
        ("---\ntitle: x\n---\n\n# Title", ("title: x", "\n# Title")),
        ("---\n---\nBody", ("", "Body")),
        ("---\ntitle: x\n---", ("title: x", "")),
        ("# No header\n---\n", (None, "# No header\n---\n")),
    ])
    def test_split(self, content, expected):
        """Test header/body split for common shapes."""
        assert split_frontmatter(content) == expected

    def test_unterminated_header_is_body(self):
        """Test that a header without a closing delimiter is not a header."""
        content = "---\ntitle: x\nno closing line"
        assert split_frontmatter(content) == (None, content)

    def test_strip_frontmatter(self):
        """Test that stripping leaves the body untouched."""
        content = "---\ntags: [a]\n---\nLine 1\n---\nLine 2\n"
        assert strip_frontmatter(content) == "Line 1\n---\nLine 2\n"
