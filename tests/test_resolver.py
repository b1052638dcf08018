"""Tests for CSS reference resolution."""

import logging

import pytest

from mhtml2html.models.archive import Asset
from mhtml2html.processor.resolver import (
    absolute_url,
    resolve_references,
    resolve_stylesheet,
)


@pytest.fixture
def media() -> dict[str, Asset]:
    """Create a small media index of stylesheets and images."""
    return {
        "site/css/main.css": Asset(
            "quoted-printable",
            "text/css",
            location="site/css/main.css",
            data='@import url("parts/fonts.css");\nh1 { background: url(../img/h.png); }',
        ),
        "site/css/parts/fonts.css": Asset(
            "quoted-printable",
            "text/css",
            location="site/css/parts/fonts.css",
            data="@font-face { src: url('../../fonts/a.woff2'); }",
        ),
        "site/img/h.png": Asset("base64", "image/png", location="site/img/h.png", data=b"PNG"),
        "site/fonts/a.woff2": Asset(
            "base64", "font/woff2", location="site/fonts/a.woff2", data=b"wOF2"
        ),
    }


class TestAbsoluteUrl:
    """Tests for absolute_url function."""

    def test_parent_directory(self):
        """Test resolving a reference that climbs one level."""
        assert absolute_url("a/b/c.css", "../d.png") == "a/d.png"

    def test_scheme_passthrough(self):
        """Test that references with a scheme are unchanged."""
        assert absolute_url("a/b/c.css", "http://x/y.png") == "http://x/y.png"

    @pytest.mark.parametrize("reference", [
        "data:image/png;base64,AAAA",
        "https://cdn.example.com/x.css",
        "cid:frame@x",
    ])
    def test_other_schemes(self, reference: str):
        """Test passthrough of other absolute references."""
        assert absolute_url("index.html", reference) == reference

    def test_same_directory(self):
        """Test a sibling reference and a dot segment."""
        assert absolute_url("a/b/c.css", "./d.png") == "a/b/d.png"
        assert absolute_url("a/b/c.css", "d.png") == "a/b/d.png"

    def test_full_location_base(self):
        """Test resolving against an http location."""
        base = "https://example.com/static/css/site.css"

        assert absolute_url(base, "../img/x.png") == "https://example.com/static/img/x.png"

    def test_climb_past_root(self):
        """Test that extra parent segments stop at the top."""
        assert absolute_url("a/b.css", "../../x.png") == "x.png"


class TestResolveReferences:
    """Tests for resolve_references function."""

    def test_embeds_known_reference(self, media: dict[str, Asset]):
        """Test that a located reference becomes a base64 data URI."""
        result = resolve_references(media, "site/index.html", "background: url(img/h.png)")

        assert result == "background: url('data:image/png;base64,UE5H')"

    def test_unknown_reference_unchanged(self, media: dict[str, Asset]):
        """Test that references outside media are left as written."""
        text = 'background: url("missing.png") no-repeat'

        assert resolve_references(media, "site/index.html", text) == text

    def test_multiple_references(self, media: dict[str, Asset]):
        """Test several url() rules in one text."""
        text = "a{b:url(img/h.png)} c{d:url('fonts/a.woff2')}"

        result = resolve_references(media, "site/x.html", text)

        assert result == (
            "a{b:url('data:image/png;base64,UE5H')} "
            "c{d:url('data:font/woff2;base64,d09GMg==')}"
        )

    def test_reference_at_start(self, media: dict[str, Asset]):
        """Test a url() rule at the very beginning of the text."""
        assert resolve_references(media, "site/x.html", "url(img/h.png)").startswith(
            "url('data:image/png"
        )

    def test_unclosed_rule(self, media: dict[str, Asset]):
        """Test that an unterminated url( stops rewriting."""
        text = "background: url(img/h.png"

        assert resolve_references(media, "site/x.html", text) == text

    def test_nested_stylesheet(self, media: dict[str, Asset]):
        """Test that imported stylesheets are resolved against their own location."""
        result = resolve_references(media, "site/index.html", "@import url(css/main.css);")

        fonts = media["site/css/parts/fonts.css"].data
        main = media["site/css/main.css"].data
        assert "data:font/woff2;base64," in fonts
        assert "data:text/css;base64," in main
        assert "data:image/png;base64,UE5H" in main
        assert result.startswith("@import url('data:text/css;base64,")

    def test_self_reference(self):
        """Test that a stylesheet importing itself terminates."""
        media = {
            "loop.css": Asset(
                "quoted-printable",
                "text/css",
                location="loop.css",
                data='@import url("loop.css");',
            )
        }

        result = resolve_references(media, "index.html", "@import url(loop.css);")

        assert result.startswith("@import url('data:text/css;base64,")

    def test_unencodable_reference_kept(self, caplog):
        """Test that a reference whose data cannot be encoded is kept."""
        media = {"bad.css": Asset("7bit", "text/css", location="bad.css", data="\udcff")}

        with caplog.at_level(logging.WARNING, logger="mhtml2html"):
            result = resolve_references(media, "index.html", "url(bad.css)")

        assert result == "url(bad.css)"
        assert "bad.css" in caplog.text


class TestResolveStylesheet:
    """Tests for resolve_stylesheet function."""

    def test_resolves_in_place(self, media: dict[str, Asset]):
        """Test that the stored stylesheet is rewritten."""
        css = resolve_stylesheet(media, "site/css/parts/fonts.css")

        assert css == media["site/css/parts/fonts.css"].data
        assert css.startswith("@font-face { src: url('data:font/woff2;base64,")

    def test_binary_stylesheet(self):
        """Test a stylesheet held as bytes."""
        media = {"a.css": Asset("base64", "text/css", location="a.css", data=b"p{}")}

        assert resolve_stylesheet(media, "a.css") == "p{}"
