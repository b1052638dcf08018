"""Archive processing: parsing, decoding, reference resolution and embedding."""

from mhtml2html.processor.charsets import CHARSETS, CharsetDecoder, CharsetRegistry
from mhtml2html.processor.converter import MHTMLConverter, convert, parse
from mhtml2html.processor.datauri import to_data_uri
from mhtml2html.processor.embedder import DocumentEmbedder, NodeKind
from mhtml2html.processor.parser import ArchiveParser
from mhtml2html.processor.resolver import absolute_url, resolve_references

__all__ = [
    "CHARSETS",
    "CharsetDecoder",
    "CharsetRegistry",
    "ArchiveParser",
    "DocumentEmbedder",
    "NodeKind",
    "MHTMLConverter",
    "absolute_url",
    "resolve_references",
    "to_data_uri",
    "parse",
    "convert",
]
