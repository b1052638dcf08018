"""Pytest configuration and shared fixtures."""

import pytest
from pathlib import Path

from mhtml2html.models.archive import Asset, ParsedArchive

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@pytest.fixture
def png_base64() -> str:
    """Base64 text of a tiny PNG image."""
    return PNG_BASE64


@pytest.fixture
def sample_archive() -> str:
    """Create a page archive with a stylesheet and an image."""
    return f"""From: <Saved by Blink>
Snapshot-Content-Location: https://example.com/index.html
Subject: Example Page
MIME-Version: 1.0
Content-Type: multipart/related;
\ttype="text/html";
\tboundary="----MultipartBoundary--abc----"

------MultipartBoundary--abc----
Content-Type: text/html
Content-ID: <frame-root@mhtml.blink>
Content-Transfer-Encoding: quoted-printable
Content-Location: https://example.com/index.html

<html><head><link rel=3D"stylesheet" href=3D"https://example.com/css/site.css=
"></head><body><img src=3D"https://example.com/img/logo.png"><p style=3D"back=
ground: url(img/logo.png)">Hello</p></body></html>

------MultipartBoundary--abc----
Content-Type: text/css
Content-Transfer-Encoding: quoted-printable
Content-Location: https://example.com/css/site.css

body {{ background: url("../img/logo.png"); }}

------MultipartBoundary--abc----
Content-Type: image/png
Content-Transfer-Encoding: base64
Content-Location: https://example.com/img/logo.png

{PNG_BASE64}

------MultipartBoundary--abc------
"""


@pytest.fixture
def simple_archive() -> str:
    """Create an archive with relative locations and a base64 image."""
    return f"""MIME-Version: 1.0
Content-Type: multipart/related; boundary="simple"

--simple
Content-Type: text/html
Content-Transfer-Encoding: 7bit
Content-Location: index.html

<html><body><img src="img/logo.png"></body></html>
--simple
Content-Type: image/png
Content-Transfer-Encoding: base64
Content-Location: img/logo.png

{PNG_BASE64}
--simple--
"""


@pytest.fixture
def frame_archive() -> str:
    """Create an archive whose root embeds a cid: frame."""
    return """MIME-Version: 1.0
Content-Type: multipart/related; boundary=frames

--frames
Content-Type: text/html
Content-Transfer-Encoding: 7bit
Content-Location: https://example.com/outer.html

<html><head></head><body><iframe src="cid:frame-1@mhtml.blink"></iframe></body></html>
--frames
Content-Type: text/html
Content-ID: <frame-1@mhtml.blink>
Content-Transfer-Encoding: quoted-printable

<html><head></head><body><p class=3D"inner">Inner frame</p></body></html>
--frames--
"""


@pytest.fixture
def duplicate_archive() -> str:
    """Create an archive with two parts at the same location."""
    return """MIME-Version: 1.0
Content-Type: multipart/related; boundary="dup"

--dup
Content-Type: text/html
Content-Transfer-Encoding: 7bit
Content-Location: index.html

<html><body><p>root</p></body></html>
--dup
Content-Type: text/css
Content-Transfer-Encoding: 7bit
Content-Location: style.css

p { color: red; }
--dup
Content-Type: text/css
Content-Transfer-Encoding: 7bit
Content-Location: style.css

p { color: blue; }
--dup--
"""


@pytest.fixture
def sample_parsed_archive() -> ParsedArchive:
    """Create a parsed archive built directly from assets."""
    root = Asset(
        transfer_encoding="quoted-printable",
        mime_type="text/html",
        location="index.html",
        data='<html><head><style>p { background: url("bg.png"); }</style></head>'
        '<body><p>Hi</p></body></html>',
    )
    image = Asset(
        transfer_encoding="base64",
        mime_type="image/png",
        location="bg.png",
        data=b"\x89PNG\r\n\x1a\n",
    )
    return ParsedArchive.build(
        frames={},
        media={"index.html": root, "bg.png": image},
        index="index.html",
    )


@pytest.fixture
def archive_file(tmp_path: Path, sample_archive: str) -> Path:
    """Write the sample archive to disk."""
    path = tmp_path / "page.mhtml"
    path.write_bytes(sample_archive.encode("utf-8"))
    return path


# Markers for test categories
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that exercise parse and convert end to end"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
