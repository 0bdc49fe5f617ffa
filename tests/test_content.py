"""
test_content.py
---------------
Unit tests for journalsite.content: frontmatter splitting, parsing,
date validation and the escaped frontmatter writer.
"""
import datetime as dt
from zoneinfo import ZoneInfo

import pytest

from journalsite.content import (
    Frontmatter,
    dump_frontmatter,
    extract_frontmatter,
    parse_date,
    split_frontmatter,
)
from journalsite.errors import ContentError, FrontmatterError


class TestSplitFrontmatter:
    """Test split_frontmatter function."""

    @pytest.mark.parametrize(
        "content",
        [
            b"",
            b"# Heading\n\nJust a body.\n",
            b"--- \ntitle: spaced\n---\n",
            b"----\ntitle: four\n---\n",
            b"\n---\ntitle: late\n---\n",
            b"---title: inline\n---\n",
        ],
    )
    def test_no_opening_delimiter_returns_input(self, content):
        """Anything not starting with exactly '---\\n' is all body."""
        block, body = split_frontmatter(content)
        assert block is None
        assert body is content

    def test_closing_delimiter_in_middle(self):
        block, body = split_frontmatter(b"---\ntitle: Hi\n---\nBody\n---\nmore\n")
        assert block == b"title: Hi"
        assert body == b"Body\n---\nmore\n"

    def test_trailing_closing_delimiter_at_eof(self):
        block, body = split_frontmatter(b"---\ntitle: Only\n---")
        assert block == b"title: Only"
        assert body == b""

    def test_no_closing_delimiter_is_lenient(self):
        content = b"---\ntitle: Open\n\nBody without a fence\n"
        block, body = split_frontmatter(content)
        assert block is None
        assert body == content


class TestExtractFrontmatter:
    """Test extract_frontmatter function."""

    def test_no_frontmatter_gives_defaults(self):
        content = b"Plain *markdown*\n"
        meta, body = extract_frontmatter(content)
        assert meta == Frontmatter()
        assert body == content

    def test_all_fields(self):
        content = (
            b"---\n"
            b"title: Hello World\n"
            b"description: A greeting\n"
            b"date: 2024-01-15\n"
            b"template: landing\n"
            b"draft: true\n"
            b"---\n"
            b"Body text\n"
        )
        meta, body = extract_frontmatter(content)
        assert meta.title == "Hello World"
        assert meta.description == "A greeting"
        assert meta.date == "2024-01-15"
        assert meta.template == "landing"
        assert meta.draft is True
        assert body == b"Body text\n"

    def test_unknown_keys_ignored(self):
        meta, _ = extract_frontmatter(b"---\ntitle: Tagged\ntags: [a, b]\nauthor: me\n---\n")
        assert meta.title == "Tagged"
        assert meta == Frontmatter(title="Tagged")

    def test_empty_values_use_defaults(self):
        meta, _ = extract_frontmatter(b"---\ntitle:\ndate:\n---\nx\n")
        assert meta.title == ""
        assert meta.date == ""
        assert meta.draft is False

    def test_quoted_date_accepted(self):
        meta, _ = extract_frontmatter(b"---\ndate: '2024-02-29'\n---\n")
        assert meta.date == "2024-02-29"

    def test_non_string_title_is_stringified(self):
        meta, _ = extract_frontmatter(b"---\ntitle: 1984\n---\n")
        assert meta.title == "1984"

    def test_malformed_yaml_is_fatal(self):
        with pytest.raises(FrontmatterError, match="invalid YAML"):
            extract_frontmatter(b"---\ntitle: [unclosed\n---\nBody\n")

    def test_non_mapping_is_fatal(self):
        with pytest.raises(FrontmatterError, match="mapping"):
            extract_frontmatter(b"---\n- one\n- two\n---\n")

    @pytest.mark.parametrize("value", ["2024-13-01", "2023-02-29", "2024-1-5", "15/01/2024", "yesterday"])
    def test_invalid_date_is_fatal_and_named(self, value):
        content = f"---\ndate: {value}\n---\n".encode()
        with pytest.raises(FrontmatterError) as excinfo:
            extract_frontmatter(content)
        assert value in str(excinfo.value)

    def test_frontmatter_error_is_content_error(self):
        with pytest.raises(ContentError):
            extract_frontmatter(b"---\ndate: nope\n---\n")


class TestDumpFrontmatter:
    """Test the escaped frontmatter writer."""

    def test_only_non_empty_fields(self):
        text = dump_frontmatter(Frontmatter(title="Hello"))
        assert text == "---\ntitle: Hello\n---\n\n"

    def test_nothing_to_write(self):
        assert dump_frontmatter(Frontmatter()) == ""

    def test_field_order(self):
        text = dump_frontmatter(Frontmatter(title="t", description="d", date="2024-01-01", template="p"))
        keys = [line.split(":", 1)[0] for line in text.splitlines()[1:-2]]
        assert keys == ["title", "description", "date", "template"]

    @pytest.mark.parametrize(
        "meta",
        [
            Frontmatter(title="Plain title", date="2024-01-01"),
            Frontmatter(title='Colons: "quotes" & <tags>', description="yes"),
            Frontmatter(title="true", description="null", template="blog-post"),
            Frontmatter(title="- starts like a list", description="# not a comment", date="1999-12-31"),
            Frontmatter(title="Ünïcødé ✓", description="line one\nline two"),
        ],
    )
    def test_round_trip(self, meta):
        body = b"Body stays the same.\n"
        source = dump_frontmatter(meta).encode("utf-8") + body
        again, again_body = extract_frontmatter(source)
        assert again.title == meta.title
        assert again.description == meta.description
        assert again.date == meta.date
        assert again.template == meta.template
        assert again_body == b"\n" + body


class TestParseDate:
    def test_midnight_in_zone(self):
        tz = ZoneInfo("America/Los_Angeles")
        value = parse_date("2024-01-01", tz)
        assert value == dt.datetime(2024, 1, 1, tzinfo=tz)
        assert value.utcoffset() == dt.timedelta(hours=-8)

    def test_invalid(self):
        with pytest.raises(FrontmatterError):
            parse_date("2024-02-30", ZoneInfo("UTC"))
