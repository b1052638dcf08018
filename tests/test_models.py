"""Tests for data models."""

import pytest

from mhtml2html.models.archive import (
    Asset,
    BatchResult,
    ConversionResult,
    ParsedArchive,
)


class TestAsset:
    """Tests for Asset dataclass."""

    def test_type_checks(self):
        """Test root, stylesheet and image detection."""
        html = Asset("quoted-printable", "text/html", location="index.html")
        css = Asset("quoted-printable", "text/css", location="site.css")
        svg = Asset("base64", "image/svg+xml", location="icon.svg")

        assert html.is_root_type is True
        assert html.is_stylesheet is False
        assert css.is_stylesheet is True
        assert css.is_image is False
        assert svg.is_image is True

    def test_size(self):
        """Test payload size for text and bytes."""
        text = Asset("7bit", "text/plain", data="hé")
        binary = Asset("base64", "image/png", data=b"\x00\x01\x02")

        assert text.size == 3
        assert binary.size == 3

    def test_str(self):
        """Test string representation."""
        asset = Asset("base64", "image/png", id="<a@b>", data=b"1234")

        assert str(asset) == "<a@b> (image/png, base64, 4 B)"


class TestParsedArchive:
    """Tests for ParsedArchive dataclass."""

    def test_build_is_read_only(self, sample_parsed_archive: ParsedArchive):
        """Test that built indexes cannot be modified."""
        with pytest.raises(TypeError):
            sample_parsed_archive.media["other.css"] = Asset("7bit", "text/css")

    def test_build_copies_input(self):
        """Test that later changes to the input maps are not visible."""
        media = {"index.html": Asset("7bit", "text/html", location="index.html")}
        archive = ParsedArchive.build(frames={}, media=media, index="index.html")

        media["late.css"] = Asset("7bit", "text/css")

        assert "late.css" not in archive.media

    def test_root(self, sample_parsed_archive: ParsedArchive):
        """Test root lookup."""
        assert sample_parsed_archive.root is sample_parsed_archive.media["index.html"]

    def test_assets_are_distinct(self):
        """Test that an asset in both indexes is listed once."""
        shared = Asset("7bit", "text/html", id="<root>", location="index.html")
        frame = Asset("7bit", "text/html", id="<frame>")
        archive = ParsedArchive.build(
            frames={"<root>": shared, "<frame>": frame},
            media={"index.html": shared},
            index="index.html",
        )

        assert archive.assets == [shared, frame]

    def test_to_dict(self, sample_parsed_archive: ParsedArchive):
        """Test summary dictionary."""
        summary = sample_parsed_archive.to_dict()

        assert summary["index"] == "index.html"
        assert summary["media"] == 2
        assert summary["frames"] == 0
        assert summary["duplicates"] == []
        assert summary["total_size"] == sample_parsed_archive.total_size


class TestBatchResult:
    """Tests for BatchResult dataclass."""

    def test_counts(self):
        """Test successful and failed counts."""
        result = BatchResult(results=[
            ConversionResult(source="a.mhtml", success=True),
            ConversionResult(source="b.mhtml", success=True),
            ConversionResult(source="c.mhtml", success=False, error="broken"),
        ])

        assert result.successful == 2
        assert result.failed == 1
        assert result.success_rate == pytest.approx(66.67, rel=0.01)

    def test_success_rate_zero(self):
        """Test success rate with no results."""
        assert BatchResult().success_rate == 0.0
