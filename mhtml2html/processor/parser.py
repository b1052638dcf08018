"""State-machine parser splitting an archive into assets."""

from enum import Enum
from typing import Any, Callable

from mhtml2html.models.archive import BASE64, Asset, CursorState, ParsedArchive
from mhtml2html.processor.charsets import CHARSETS, DEFAULT_CHARSET, CharsetRegistry
from mhtml2html.processor.errors import (
    ExpectedBoundary,
    MissingBoundary,
    MissingContentType,
    MissingIdentifier,
    MissingTransferEncoding,
    RootNotFound,
)
from mhtml2html.processor.headers import HeaderParser, HeaderRecord, split_content_type
from mhtml2html.processor.lines import LineReader
from mhtml2html.processor.transfer import decode_base64, is_textual, normalize_text
from mhtml2html.utils.logging import logger


class ParserState(Enum):
    """States of the archive parser."""

    DOCUMENT_HEADERS = "document_headers"
    PART_HEADERS = "part_headers"
    PART_DATA = "part_data"
    END = "end"


class ArchiveParser:
    """Splits an MHTML archive into a root document and its resources.

    One instance parses one archive. Structural problems raise immediately
    and no partial result is returned.
    """

    def __init__(
        self,
        text: str | bytes,
        charset_default: str = DEFAULT_CHARSET,
        registry: CharsetRegistry = CHARSETS,
    ) -> None:
        """Initialize parser.

        Args:
            text: Archive text. Bytes are read one byte per character.
            charset_default: Charset for parts that declare none.
            registry: Charset registry used for decoding.
        """
        if isinstance(text, bytes):
            text = text.decode("latin-1")

        self.charset_default = charset_default
        self.registry = registry
        self.cursor = CursorState()
        self.reader = LineReader(text, self.cursor, registry)

        self.state = ParserState.DOCUMENT_HEADERS
        self.headers = HeaderRecord()
        self.boundary: str | None = None
        self.index: str | None = None
        self.media: dict[str, Asset] = {}
        self.frames: dict[str, Asset] = {}
        self.duplicates: list[str] = []

        self._asset: Asset | None = None
        self._part_headers = HeaderRecord()
        self._header_parser = HeaderParser()
        self._closed = False

    def parse(
        self,
        html_only: bool = False,
        tree_builder: Callable[[str], Any] | None = None,
    ) -> Any:
        """Run the state machine to completion.

        Args:
            html_only: Stop after the root document and return its tree.
            tree_builder: Builds a tree from HTML text; required with html_only.

        Returns:
            ParsedArchive, or the built root tree when html_only is set.
        """
        while self.state != ParserState.END:
            if self.state == ParserState.DOCUMENT_HEADERS:
                self._document_headers()
            elif self.state == ParserState.PART_HEADERS:
                self._part_headers_step()
            elif self.state == ParserState.PART_DATA:
                self._part_data()
                if html_only and self.index is not None:
                    root = self.media[self.index]
                    logger.debug(f"Root document {self.index} decoded, skipping remaining parts")
                    return tree_builder(root.data) if tree_builder else root.data

        logger.debug(
            f"Parsed archive: {len(self.media)} located, {len(self.frames)} identified, "
            f"{len(self.duplicates)} duplicate parts, {self.cursor.line} lines"
        )
        return ParsedArchive.build(
            frames=self.frames,
            media=self.media,
            index=self.index or "",
            duplicates=self.duplicates,
            headers=dict(self.headers.items()),
        )

    def _document_headers(self) -> None:
        """Read top-level headers, then the boundary and the first delimiter."""
        line = self.reader.read_line()
        if line.strip():
            self._header_parser.feed(line, self.headers, self.cursor.line)
            return

        content_type = self.headers.get("Content-Type")
        if content_type is None:
            raise MissingContentType("Missing document content type", self.cursor.line)

        _, params = split_content_type(content_type)
        boundary = params.get("boundary")
        if not boundary:
            raise MissingBoundary("Missing boundary from document headers", self.cursor.line)
        self.boundary = boundary

        self.reader.skip_whitespace()
        line = self.reader.read_line()
        if boundary not in line:
            raise ExpectedBoundary("Expected boundary", self.cursor.line)

        self._start_part()

    def _part_headers_step(self) -> None:
        """Read one part header line; on the blank line, register the asset."""
        line = self.reader.read_line()
        if line.strip():
            self._header_parser.feed(line, self._part_headers, self.cursor.line)
            return

        fields = self._part_headers
        encoding = fields.get("Content-Transfer-Encoding")
        content_type = fields.get("Content-Type")
        part_id = fields.get("Content-ID")
        location = fields.get("Content-Location")

        if encoding is None:
            raise MissingTransferEncoding("Content-Transfer-Encoding not provided", self.cursor.line)
        if content_type is None:
            raise MissingContentType("Content-Type not provided", self.cursor.line)
        if part_id is None and location is None:
            raise MissingIdentifier("ID or location header not provided", self.cursor.line)

        mime_type, params = split_content_type(content_type)
        if not mime_type:
            raise MissingContentType("Content-Type is empty", self.cursor.line)

        # The first part is the document
        if self.index is None:
            if location is None or mime_type != "text/html":
                raise RootNotFound("Index not found", self.cursor.line)
            self.index = location

        asset = Asset(
            transfer_encoding=encoding.strip().lower(),
            mime_type=mime_type,
            id=part_id,
            location=location,
            charset=params.get("charset"),
        )

        if part_id is not None:
            self.frames.setdefault(part_id, asset)

        if location is not None:
            if location in self.media:
                self.duplicates.append(location)
                logger.debug(f"Ignoring duplicate part for {location}; line {self.cursor.line}")
            else:
                self.media[location] = asset

        self._asset = asset
        self.reader.skip_whitespace()
        self.state = ParserState.PART_DATA

    def _part_data(self) -> None:
        """Collect part body lines up to the next boundary and decode them."""
        asset = self._asset
        boundary = self.boundary or ""
        charset = asset.charset or self.charset_default
        chunks: list[str] = []

        line = self.reader.read_line(asset.transfer_encoding, charset)
        while boundary not in line:
            chunks.append(line)
            line = self.reader.read_line(asset.transfer_encoding, charset)

        self._closed = line.strip().endswith(boundary + "--")
        asset.data = self._finish_payload(asset, "".join(chunks), charset)

        if self._closed or self.reader.only_whitespace_left():
            self.state = ParserState.END
        else:
            self._start_part()

    def _finish_payload(self, asset: Asset, data: str, charset: str) -> str | bytes:
        """Turn accumulated body text into the asset payload."""
        if asset.transfer_encoding == BASE64:
            payload = decode_base64(data)
            if is_textual(asset.mime_type):
                return self.registry.decode(payload, charset)
            return payload
        # Best effort only; text that is not a byte string stays as decoded
        return normalize_text(data)

    def _start_part(self) -> None:
        self._part_headers = HeaderRecord()
        self._header_parser = HeaderParser()
        self.state = ParserState.PART_HEADERS
