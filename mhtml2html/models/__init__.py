"""Data models for archive processing."""

from mhtml2html.models.archive import (
    Asset,
    BatchResult,
    ConversionResult,
    CursorState,
    ParsedArchive,
)

__all__ = ["Asset", "CursorState", "ParsedArchive", "ConversionResult", "BatchResult"]
