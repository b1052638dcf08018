"""Tests for header parsing."""

import pytest

from mhtml2html.processor.errors import MissingHeaderContext
from mhtml2html.processor.headers import HeaderParser, HeaderRecord, split_content_type


class TestHeaderRecord:
    """Tests for HeaderRecord class."""

    def test_case_insensitive_lookup(self):
        """Test that lookups ignore case."""
        record = HeaderRecord()
        record["Content-Type"] = "text/html"

        assert record["content-type"] == "text/html"
        assert record.get("CONTENT-TYPE") == "text/html"
        assert "content-TYPE" in record

    def test_keeps_first_spelling(self):
        """Test that the first field name spelling is kept."""
        record = HeaderRecord()
        record["Content-ID"] = "<a>"
        record["content-id"] = "<b>"

        assert list(record) == ["Content-ID"]
        assert record["Content-ID"] == "<b>"

    def test_delete(self):
        """Test deleting a field."""
        record = HeaderRecord()
        record["Subject"] = "x"
        del record["SUBJECT"]

        assert len(record) == 0


class TestHeaderParser:
    """Tests for HeaderParser class."""

    def test_field(self):
        """Test a simple field line."""
        record = HeaderRecord()
        HeaderParser().feed("Content-Location: https://example.com/a:b\r\n", record)

        assert record["Content-Location"] == "https://example.com/a:b"

    def test_continuation(self):
        """Test that folded lines extend the last field."""
        record = HeaderRecord()
        parser = HeaderParser()

        parser.feed("Content-Type: multipart/related;\n", record)
        parser.feed('\ttype="text/html";\n', record)
        parser.feed(' boundary="b: 1"\n', record)

        assert record["Content-Type"] == 'multipart/related;type="text/html";boundary="b: 1"'
        assert parser.last_field == "Content-Type"

    def test_line_without_colon_continues(self):
        """Test that a line without a colon is a continuation."""
        record = HeaderRecord()
        parser = HeaderParser()

        parser.feed("Subject: first\n", record)
        parser.feed("second\n", record)

        assert record["Subject"] == "firstsecond"

    def test_continuation_without_field(self):
        """Test that a leading continuation line raises."""
        with pytest.raises(MissingHeaderContext) as exc_info:
            HeaderParser().feed("  orphan\n", HeaderRecord(), line_number=4)

        assert exc_info.value.line == 4
        assert "line 4" in str(exc_info.value)


class TestSplitContentType:
    """Tests for split_content_type function."""

    def test_quoted_params(self):
        """Test quoted parameter values."""
        media_type, params = split_content_type(
            'multipart/related;type="text/html";boundary="----Boundary--x----"'
        )

        assert media_type == "multipart/related"
        assert params == {"type": "text/html", "boundary": "----Boundary--x----"}

    def test_unquoted_params(self):
        """Test unquoted parameter values and case."""
        media_type, params = split_content_type("Text/HTML; Charset=GBK")

        assert media_type == "text/html"
        assert params == {"charset": "GBK"}

    def test_no_params(self):
        """Test a bare media type."""
        assert split_content_type("image/png") == ("image/png", {})

    def test_first_param_wins(self):
        """Test that a repeated parameter keeps its first value."""
        _, params = split_content_type("text/html; charset=utf-8; charset=latin1")

        assert params["charset"] == "utf-8"
