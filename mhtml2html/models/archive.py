"""Data models for parsed web archives."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

QUOTED_PRINTABLE = "quoted-printable"
BASE64 = "base64"

ROOT_MIME_TYPE = "text/html"
STYLESHEET_MIME_TYPE = "text/css"


@dataclass
class Asset:
    """Decoded representation of one archive part."""

    transfer_encoding: str  # quoted-printable, base64, or anything else (identity)
    mime_type: str  # Media type without parameters, e.g. "image/png"
    id: str | None = None  # Content-ID, angle brackets kept
    location: str | None = None  # Content-Location
    charset: str | None = None  # charset= parameter of Content-Type
    data: str | bytes = ""

    @property
    def is_root_type(self) -> bool:
        """Check if this asset is an HTML document."""
        return self.mime_type == ROOT_MIME_TYPE

    @property
    def is_stylesheet(self) -> bool:
        """Check if this asset is a CSS stylesheet."""
        return self.mime_type == STYLESHEET_MIME_TYPE

    @property
    def is_image(self) -> bool:
        """Check if this asset is an image."""
        return "image" in self.mime_type

    @property
    def size(self) -> int:
        """Payload size in bytes (UTF-8 for text payloads)."""
        if isinstance(self.data, bytes):
            return len(self.data)
        return len(self.data.encode("utf-8", errors="replace"))

    def __str__(self) -> str:
        """Human-readable representation."""
        key = self.location or self.id or "?"
        return f"{key} ({self.mime_type}, {self.transfer_encoding}, {self.size} B)"


@dataclass
class CursorState:
    """Mutable read position within one archive text."""

    offset: int = 0
    line: int = 0


@dataclass(frozen=True)
class ParsedArchive:
    """Immutable result of parsing an archive.

    ``media`` maps Content-Location to Asset, ``frames`` maps Content-ID to
    Asset and ``index`` is the location of the root HTML document.
    ``duplicates`` lists locations whose later parts were dropped because an
    earlier part already claimed them.
    """

    frames: Mapping[str, Asset]
    media: Mapping[str, Asset]
    index: str
    duplicates: tuple[str, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        frames: dict[str, Asset],
        media: dict[str, Asset],
        index: str,
        duplicates: list[str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> "ParsedArchive":
        """Freeze parser bookkeeping into a read-only archive."""
        return cls(
            frames=MappingProxyType(dict(frames)),
            media=MappingProxyType(dict(media)),
            index=index,
            duplicates=tuple(duplicates or ()),
            headers=MappingProxyType(dict(headers or {})),
        )

    @property
    def root(self) -> Asset | None:
        """The root HTML asset, if present."""
        return self.media.get(self.index)

    @property
    def assets(self) -> list[Asset]:
        """All distinct assets, locations first, then id-only frames."""
        seen: set[int] = set()
        result: list[Asset] = []
        for asset in list(self.media.values()) + list(self.frames.values()):
            if id(asset) not in seen:
                seen.add(id(asset))
                result.append(asset)
        return result

    @property
    def total_size(self) -> int:
        """Total decoded payload size of all assets."""
        return sum(a.size for a in self.assets)

    def to_dict(self) -> dict[str, Any]:
        """Summarize archive contents for logs and reports."""
        return {
            "index": self.index,
            "media": len(self.media),
            "frames": len(self.frames),
            "duplicates": list(self.duplicates),
            "total_size": self.total_size,
        }


@dataclass
class ConversionResult:
    """Outcome of converting one archive file."""

    source: str
    success: bool
    output: str | None = None
    assets: int = 0
    error: str | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class BatchResult:
    """Result of converting several archive files."""

    results: list[ConversionResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def successful(self) -> int:
        """Number of archives converted."""
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        """Number of archives that failed."""
        return len(self.results) - self.successful

    @property
    def success_rate(self) -> float:
        """Percentage of successful conversions."""
        if not self.results:
            return 0.0
        return (self.successful / len(self.results)) * 100
