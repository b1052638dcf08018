"""Embedding of archived resources into a document tree."""

from collections import deque
from enum import Enum
from typing import Callable

from bs4 import BeautifulSoup, Tag

from mhtml2html.models.archive import ParsedArchive
from mhtml2html.processor.datauri import html_data_uri, to_data_uri
from mhtml2html.processor.errors import DataURIError
from mhtml2html.processor.resolver import resolve_references, resolve_stylesheet
from mhtml2html.utils.logging import logger

FrameConverter = Callable[[ParsedArchive], "BeautifulSoup | None"]


class NodeKind(Enum):
    """Element kinds with their own embedding rule."""

    HEAD = "head"
    STYLESHEET_LINK = "link"
    INLINE_STYLE = "style"
    IMAGE = "img"
    FRAME = "iframe"
    GENERIC = "generic"


def classify(tag: Tag) -> NodeKind:
    """Decide the embedding rule for an element by its tag name."""
    name = (tag.name or "").lower()
    if name == "head":
        return NodeKind.HEAD
    elif name == "link":
        return NodeKind.STYLESHEET_LINK
    elif name == "style":
        return NodeKind.INLINE_STYLE
    elif name == "img":
        return NodeKind.IMAGE
    elif name == "iframe":
        return NodeKind.FRAME
    return NodeKind.GENERIC


class DocumentEmbedder:
    """Rewrites a document tree so it no longer references archive parts.

    Walks the tree breadth-first and inlines stylesheets, images and
    (optionally) nested frames as data URIs.
    """

    def __init__(
        self,
        archive: ParsedArchive,
        frame_converter: FrameConverter | None = None,
    ) -> None:
        """Initialize embedder.

        Args:
            archive: Parsed archive the document was built from.
            frame_converter: Converts a frame archive into a document; frames
                are left alone when None.
        """
        self.archive = archive
        self.media = archive.media
        self.frames = archive.frames
        self.index = archive.index
        self.frame_converter = frame_converter

    def embed(self, document: BeautifulSoup) -> BeautifulSoup:
        """Embed resources into a document in place.

        Args:
            document: Tree built from the root asset.

        Returns:
            The same document.
        """
        nodes: deque[Tag] = deque([document])

        while nodes:
            node = nodes.popleft()
            for child in list(node.children):
                if not isinstance(child, Tag):
                    continue

                # Rewritten resources cannot match their integrity hashes
                child.attrs.pop("integrity", None)

                if not self._embed_node(document, child, classify(child)):
                    nodes.append(child)

        return document

    def _embed_node(self, document: BeautifulSoup, tag: Tag, kind: NodeKind) -> bool:
        """Apply the rule for one element.

        Returns:
            True if the element was replaced and must not be visited.
        """
        if kind == NodeKind.HEAD:
            self._embed_head(document, tag)
        elif kind == NodeKind.STYLESHEET_LINK:
            return self._embed_link(document, tag)
        elif kind == NodeKind.INLINE_STYLE:
            return self._embed_style(document, tag)
        elif kind == NodeKind.IMAGE:
            self._embed_image(tag)
        elif kind == NodeKind.FRAME:
            self._embed_frame(tag)
        else:
            self._resolve_style_attribute(tag)
        return False

    def _embed_head(self, document: BeautifulSoup, head: Tag) -> None:
        # Links should open in the outer frame
        base = document.new_tag("base", attrs={"target": "_parent"})
        head.insert(0, base)

    def _embed_link(self, document: BeautifulSoup, link: Tag) -> bool:
        href = link.get("href")
        asset = self.media.get(href) if isinstance(href, str) else None
        if asset is None or not asset.is_stylesheet:
            return False

        link.replace_with(self._new_style(document, resolve_stylesheet(self.media, href)))
        return True

    def _embed_style(self, document: BeautifulSoup, style: Tag) -> bool:
        css = resolve_references(self.media, self.index, style.get_text())
        style.replace_with(self._new_style(document, css))
        return True

    def _embed_image(self, img: Tag) -> None:
        src = img.get("src")
        asset = self.media.get(src) if isinstance(src, str) else None
        if asset is not None and asset.is_image:
            try:
                img["src"] = to_data_uri(asset)
            except DataURIError as e:
                logger.warning(f"Keeping original image source {src}: {e}")

        self._resolve_style_attribute(img)

    def _embed_frame(self, iframe: Tag) -> None:
        src = iframe.get("src")
        if self.frame_converter is None or not isinstance(src, str) or "cid:" not in src:
            return

        frame_id = f"<{src.split('cid:', 1)[1]}>"
        frame = self.frames.get(frame_id)
        if frame is None or not frame.is_root_type:
            return

        # Narrowed copy; the parent's maps stay untouched
        media = dict(self.media)
        media[frame_id] = frame
        frame_archive = ParsedArchive.build(frames=dict(self.frames), media=media, index=frame_id)

        frame_document = self.frame_converter(frame_archive)
        if frame_document is None:
            return

        try:
            iframe["src"] = html_data_uri(str(frame_document))
        except DataURIError as e:
            logger.warning(f"Keeping original frame source {src}: {e}")

    def _resolve_style_attribute(self, tag: Tag) -> None:
        style = tag.get("style")
        if isinstance(style, str) and style:
            tag["style"] = resolve_references(self.media, self.index, style)

    def _new_style(self, document: BeautifulSoup, css: str) -> Tag:
        style = document.new_tag("style", attrs={"type": "text/css"})
        style.string = css
        return style
