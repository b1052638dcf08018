"""Content-Transfer-Encoding decoding for archive parts."""

import base64
import binascii
import re

from mhtml2html.models.archive import BASE64, QUOTED_PRINTABLE
from mhtml2html.processor.charsets import CHARSETS, DEFAULT_CHARSET, CharsetRegistry
from mhtml2html.processor.errors import InvalidBase64

# RFC 2045 6.7 rule 3: trailing whitespace was added in transport
_TRAILING_WHITESPACE = re.compile(r"[\t ]+$", re.MULTILINE)
# Soft line breaks; CRLF, bare CR and bare LF are all accepted
_SOFT_BREAK = re.compile(r"=(?:\r\n?|\n|\Z)")
# A run of consecutive =XX escapes forms one byte sequence, so multi-byte
# characters split across escapes decode together
_ESCAPE_RUN = re.compile(r"(?:=[0-9A-Fa-f]{2})+")

# Non text/* media types whose payload is still text
TEXTUAL_TYPES = {
    "application/javascript",
    "application/x-javascript",
    "application/ecmascript",
    "application/json",
    "application/xml",
    "application/xhtml+xml",
    "image/svg+xml",
}


def is_textual(mime_type: str) -> bool:
    """Check if a media type carries text rather than binary data."""
    return (
        mime_type.startswith("text/")
        or mime_type in TEXTUAL_TYPES
        or mime_type.endswith("+xml")
    )


def decode_quoted_printable(
    text: str,
    charset: str | None = DEFAULT_CHARSET,
    registry: CharsetRegistry = CHARSETS,
) -> str:
    """Decode quoted-printable text.

    Escaped bytes are decoded with the decoder registered for ``charset``.
    Text outside escapes is kept as is.

    Args:
        text: Quoted-printable encoded text.
        charset: Charset label of the escaped bytes.
        registry: Charset registry to look the label up in.

    Returns:
        Decoded text.
    """
    decoder = registry.get_decoder(charset)

    def _decode_run(match: re.Match[str]) -> str:
        return decoder.decode(bytes.fromhex(match.group(0).replace("=", "")))

    text = _TRAILING_WHITESPACE.sub("", text)
    text = _SOFT_BREAK.sub("", text)
    return _ESCAPE_RUN.sub(_decode_run, text)


def decode_base64(text: str) -> bytes:
    """Decode base64 text, ignoring embedded whitespace.

    Args:
        text: Base64 text in the standard alphabet.

    Returns:
        Decoded bytes.

    Raises:
        InvalidBase64: If the text is not valid base64.
    """
    try:
        return base64.b64decode("".join(text.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidBase64(f"Invalid base64 payload: {e}") from e


def decode_transfer(
    text: str,
    encoding: str | None,
    charset: str | None = DEFAULT_CHARSET,
) -> str | bytes:
    """Reverse a Content-Transfer-Encoding.

    Args:
        text: Encoded part body.
        encoding: Transfer encoding tag; unknown or missing tags are identity.
        charset: Charset label for quoted-printable escapes.

    Returns:
        Decoded text, or bytes for base64.
    """
    tag = (encoding or "").strip().lower()
    if tag == QUOTED_PRINTABLE:
        return decode_quoted_printable(text, charset)
    if tag == BASE64:
        return decode_base64(text)
    return text


def normalize_text(data: str) -> str:
    """Re-read a one-byte-per-character string as UTF-8.

    Archives read byte-for-byte carry UTF-8 sequences as Latin-1
    characters. When the text is not such a string it is returned unchanged.

    Args:
        data: Assembled part text.

    Returns:
        Normalized text, or ``data`` itself.
    """
    try:
        return data.encode("latin-1").decode("utf-8")
    except UnicodeError:
        return data
