"""Serialization of assets into data URIs."""

import base64
from urllib.parse import quote

from mhtml2html.models.archive import QUOTED_PRINTABLE, Asset
from mhtml2html.processor.errors import DataURIError

# Characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "-_.!~*'()"


def to_data_uri(asset: Asset, force_base64: bool = False) -> str:
    """Build a data URI carrying an asset's payload.

    Quoted-printable assets were text to begin with and are embedded as
    percent-encoded UTF-8; everything else is embedded as base64.

    Args:
        asset: Asset to embed.
        force_base64: Use base64 even for quoted-printable assets.

    Returns:
        ``data:<mime>;base64,<payload>`` or ``data:<mime>;charset=utf-8,<text>``.

    Raises:
        DataURIError: If the payload cannot be encoded.
    """
    data = asset.data
    try:
        if asset.transfer_encoding == QUOTED_PRINTABLE and not force_base64:
            text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
            return f"data:{asset.mime_type};charset=utf-8,{quote(text, safe=URI_COMPONENT_SAFE)}"

        payload = data if isinstance(data, bytes) else data.encode("utf-8")
        return f"data:{asset.mime_type};base64,{base64.b64encode(payload).decode('ascii')}"
    except UnicodeError as e:
        key = asset.location or asset.id
        raise DataURIError(f"Cannot encode {key} as data URI: {e}") from e


def html_data_uri(html: str) -> str:
    """Build a data URI for a serialized HTML document.

    Raises:
        DataURIError: If the document cannot be encoded.
    """
    try:
        return f"data:text/html;charset=utf-8,{quote(html, safe=URI_COMPONENT_SAFE)}"
    except UnicodeError as e:
        raise DataURIError(f"Cannot encode frame document as data URI: {e}") from e
