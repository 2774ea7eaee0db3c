"""
Tests for parsing model replies into tags.
"""
from note_tagger.tagging import MAX_TAG_LENGTH, parse_model_reply


class TestParseModelReply:
    """Tests for parse_model_reply."""

    def test_example_reply(self):
        """Test trimming, lowercasing, empty entries and the cap together."""
        reply = "Go, , Databases, Systems-Engineering, Go"
        assert parse_model_reply(reply, 3) == ["go", "databases", "systems-engineering"]

    def test_repeats_are_kept(self):
        """Test that no dedup happens at parse time."""
        assert parse_model_reply("Go, go, Rust", 5) == ["go", "go", "rust"]

    def test_length_limit(self):
        """Test entries over the length limit are dropped."""
        ok = "a" * MAX_TAG_LENGTH
        too_long = "b" * (MAX_TAG_LENGTH + 1)
        assert parse_model_reply(f"{too_long}, {ok}, short", 5) == [ok, "short"]

    def test_cap_applies_after_filtering(self):
        """Test dropped entries do not count toward max_tags."""
        assert parse_model_reply(" , x, , y, z", 2) == ["x", "y"]

    def test_quotes_are_removed(self):
        """Test wrapping quotes do not end up in tags."""
        assert parse_model_reply('"Machine Learning", \'AI\', `ml`', 5) == [
            "machine learning", "ai", "ml"
        ]

    def test_empty_reply(self):
        """Test an empty reply gives no tags."""
        assert parse_model_reply("", 5) == []
        assert parse_model_reply("  ,  , ", 5) == []

    def test_multiline_reply(self):
        """Test surrounding whitespace and newlines are trimmed."""
        assert parse_model_reply("\nNotes,\n Reading \n", 5) == ["notes", "reading"]

    def test_never_exceeds_cap(self):
        """Test output length against the cap."""
        reply = ", ".join(f"tag{i}" for i in range(20))
        for cap in range(1, 11):
            assert len(parse_model_reply(reply, cap)) == cap
