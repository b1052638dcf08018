"""Convert MHTML web archives into self-contained HTML documents."""

from mhtml2html.models.archive import Asset, ParsedArchive
from mhtml2html.processor.converter import MHTMLConverter, convert, parse
from mhtml2html.processor.errors import (
    DataURIError,
    ExpectedBoundary,
    InvalidArchiveShape,
    InvalidBase64,
    InvalidRootAsset,
    MHTMLError,
    MissingBoundary,
    MissingContentType,
    MissingHeaderContext,
    MissingIdentifier,
    MissingTransferEncoding,
    RootNotFound,
    UnexpectedEndOfInput,
)

__version__ = "1.0.0"

__all__ = [
    "parse",
    "convert",
    "MHTMLConverter",
    "Asset",
    "ParsedArchive",
    "MHTMLError",
    "UnexpectedEndOfInput",
    "MissingHeaderContext",
    "MissingBoundary",
    "ExpectedBoundary",
    "MissingTransferEncoding",
    "MissingContentType",
    "MissingIdentifier",
    "RootNotFound",
    "InvalidBase64",
    "InvalidArchiveShape",
    "InvalidRootAsset",
    "DataURIError",
]
