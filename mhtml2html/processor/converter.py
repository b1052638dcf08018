"""Archive-to-document conversion entry points."""

from functools import partial
from typing import Any, Callable, Mapping

from bs4 import BeautifulSoup

from mhtml2html.models.archive import ParsedArchive
from mhtml2html.processor.charsets import CHARSETS, DEFAULT_CHARSET, CharsetRegistry
from mhtml2html.processor.embedder import DocumentEmbedder
from mhtml2html.processor.errors import InvalidArchiveShape, InvalidRootAsset
from mhtml2html.processor.parser import ArchiveParser
from mhtml2html.utils.logging import logger

TreeBuilder = Callable[[str], BeautifulSoup]

DEFAULT_PARSER = "html.parser"
DEFAULT_MAX_FRAME_DEPTH = 8


def make_tree_builder(parser: str = DEFAULT_PARSER) -> TreeBuilder:
    """Create a tree builder backed by BeautifulSoup.

    Args:
        parser: BeautifulSoup parser name (html.parser, lxml, html5lib).

    Returns:
        Callable building a document from HTML text.
    """

    def build(text: str) -> BeautifulSoup:
        return BeautifulSoup(text, parser)

    return build


default_tree_builder = make_tree_builder()


class MHTMLConverter:
    """Converts MHTML archives into self-contained HTML documents.

    Nested frames are only converted when ``recurse_frames`` is set. Archives
    are assumed to be acyclic; ``max_frame_depth`` bounds the recursion for
    archives whose frames reference each other.
    """

    def __init__(
        self,
        recurse_frames: bool = False,
        charset_default: str = DEFAULT_CHARSET,
        tree_builder: TreeBuilder | None = None,
        max_frame_depth: int = DEFAULT_MAX_FRAME_DEPTH,
        registry: CharsetRegistry = CHARSETS,
    ) -> None:
        """Initialize converter.

        Args:
            recurse_frames: Embed nested cid: frames as data URIs.
            charset_default: Charset for parts that declare none.
            tree_builder: Builds a document from HTML text.
            max_frame_depth: Deepest frame nesting that is still converted.
            registry: Charset registry used for decoding.
        """
        self.recurse_frames = recurse_frames
        self.charset_default = charset_default
        self.tree_builder = tree_builder or default_tree_builder
        self.max_frame_depth = max_frame_depth
        self.registry = registry

    def parse(self, text: str | bytes, html_only: bool = False) -> Any:
        """Parse an archive.

        Args:
            text: Archive text or raw bytes.
            html_only: Return only the root document tree.

        Returns:
            ParsedArchive, or a BeautifulSoup document when html_only is set.
        """
        parser = ArchiveParser(text, self.charset_default, self.registry)
        return parser.parse(html_only=html_only, tree_builder=self.tree_builder)

    def convert(self, archive: str | bytes | ParsedArchive | Mapping[str, Any]) -> BeautifulSoup:
        """Convert an archive into a document with all resources embedded.

        Args:
            archive: Raw archive text or bytes, a ParsedArchive, or a mapping
                with ``frames``, ``media`` and ``index`` keys.

        Returns:
            The converted document.

        Raises:
            InvalidArchiveShape: If archive has none of the accepted forms.
            InvalidRootAsset: If the index does not name an HTML asset.
        """
        return self._convert(self._coerce(archive), depth=0)

    def _convert(self, archive: ParsedArchive, depth: int) -> BeautifulSoup:
        root = archive.media.get(archive.index)
        if root is None or not root.is_root_type:
            raise InvalidRootAsset("MHTML error: invalid index")

        html = root.data
        if isinstance(html, bytes):
            html = self.registry.decode(html, root.charset or self.charset_default)

        document = self.tree_builder(html)

        frame_converter = None
        if self.recurse_frames:
            frame_converter = partial(self._convert_frame, depth=depth + 1)

        return DocumentEmbedder(archive, frame_converter).embed(document)

    def _convert_frame(self, archive: ParsedArchive, depth: int) -> BeautifulSoup | None:
        if depth > self.max_frame_depth:
            logger.warning(
                f"Frame nesting deeper than {self.max_frame_depth} at {archive.index}, "
                "leaving frame unconverted"
            )
            return None
        return self._convert(archive, depth)

    def _coerce(self, archive: Any) -> ParsedArchive:
        """Accept the supported archive forms."""
        if isinstance(archive, (str, bytes)):
            return self.parse(archive)
        if isinstance(archive, ParsedArchive):
            return archive
        if isinstance(archive, Mapping):
            frames = archive.get("frames")
            media = archive.get("media")
            index = archive.get("index")
            if not isinstance(frames, Mapping):
                raise InvalidArchiveShape("MHTML error: invalid frames")
            if not isinstance(media, Mapping):
                raise InvalidArchiveShape("MHTML error: invalid media")
            if not isinstance(index, str):
                raise InvalidArchiveShape("MHTML error: invalid index")
            return ParsedArchive.build(frames=dict(frames), media=dict(media), index=index)
        raise InvalidArchiveShape(
            f"Expected archive text or parsed archive, got {type(archive).__name__}"
        )


def parse(
    text: str | bytes,
    html_only: bool = False,
    charset_default: str = DEFAULT_CHARSET,
    tree_builder: TreeBuilder | None = None,
) -> Any:
    """Parse an MHTML archive.

    Args:
        text: Archive text or raw bytes.
        html_only: Return only the root document tree, skipping other parts.
        charset_default: Charset for parts that declare none.
        tree_builder: Builds a document from HTML text.

    Returns:
        ParsedArchive, or a BeautifulSoup document when html_only is set.
    """
    converter = MHTMLConverter(charset_default=charset_default, tree_builder=tree_builder)
    return converter.parse(text, html_only=html_only)


def convert(
    archive: str | bytes | ParsedArchive | Mapping[str, Any],
    recurse_frames: bool = False,
    charset_default: str = DEFAULT_CHARSET,
    tree_builder: TreeBuilder | None = None,
    max_frame_depth: int = DEFAULT_MAX_FRAME_DEPTH,
) -> BeautifulSoup:
    """Convert an MHTML archive into a self-contained document.

    Args:
        archive: Raw archive or the result of parse().
        recurse_frames: Embed nested cid: frames as data URIs.
        charset_default: Charset for parts that declare none.
        tree_builder: Builds a document from HTML text.
        max_frame_depth: Deepest frame nesting that is still converted.

    Returns:
        The converted BeautifulSoup document.
    """
    converter = MHTMLConverter(
        recurse_frames=recurse_frames,
        charset_default=charset_default,
        tree_builder=tree_builder,
        max_frame_depth=max_frame_depth,
    )
    return converter.convert(archive)
