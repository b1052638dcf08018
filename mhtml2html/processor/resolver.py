"""Rewriting of CSS url() references into embedded data URIs."""

import re
from typing import AbstractSet, Mapping

from mhtml2html.models.archive import Asset
from mhtml2html.processor.datauri import to_data_uri
from mhtml2html.processor.errors import DataURIError
from mhtml2html.utils.logging import logger

CSS_URL_RULE = "url("

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_QUOTES = re.compile(r"[\"']")


def absolute_url(base: str, relative: str) -> str:
    """Resolve a reference against the location of the referring resource.

    Args:
        base: Location of the resource containing the reference.
        relative: Reference as written.

    Returns:
        The reference itself if it has a scheme, otherwise the base
        directory with the reference's path segments applied.
    """
    if _SCHEME.match(relative):
        return relative

    stack = base.split("/")
    stack.pop()

    for segment in relative.split("/"):
        if segment == ".":
            continue
        elif segment == "..":
            if stack:
                stack.pop()
        else:
            stack.append(segment)

    return "/".join(stack)


def resolve_references(
    media: Mapping[str, Asset],
    base: str,
    text: str,
    _resolving: AbstractSet[str] = frozenset(),
) -> str:
    """Replace url() references found in media with data URIs.

    Referenced stylesheets are resolved against their own location first,
    so chained imports end up fully embedded. Stylesheets already being
    resolved further up are embedded as they are.

    Args:
        media: Assets by location.
        base: Location the references are relative to.
        text: CSS text, a stylesheet or an inline style attribute.

    Returns:
        Rewritten text. References that are not in media, or that cannot be
        encoded, are left as written.
    """
    pieces: list[str] = []
    pos = 0

    while True:
        start = text.find(CSS_URL_RULE, pos)
        if start == -1:
            break
        start += len(CSS_URL_RULE)
        end = text.find(")", start)
        if end == -1:
            break

        reference = text[start:end]
        pieces.append(text[pos:start])
        pieces.append(_embed_reference(media, base, reference, _resolving))
        pos = end

    pieces.append(text[pos:])
    return "".join(pieces)


def resolve_stylesheet(media: Mapping[str, Asset], location: str) -> str:
    """Resolve a stored stylesheet in place and return its text.

    Args:
        media: Assets by location.
        location: Location of a text/css asset in media.

    Returns:
        Stylesheet text with its references embedded.
    """
    asset = media[location]
    if isinstance(asset.data, str):
        asset.data = resolve_references(media, location, asset.data, frozenset({location}))
        return asset.data
    return asset.data.decode("utf-8", errors="replace")


def _embed_reference(
    media: Mapping[str, Asset],
    base: str,
    reference: str,
    resolving: AbstractSet[str],
) -> str:
    path = absolute_url(base, _QUOTES.sub("", reference).strip())
    asset = media.get(path)
    if asset is None:
        return reference

    if asset.is_stylesheet and path not in resolving and isinstance(asset.data, str):
        asset.data = resolve_references(media, path, asset.data, resolving | {path})

    try:
        return f"'{to_data_uri(asset, force_base64=True)}'"
    except DataURIError as e:
        logger.warning(str(e))
        return reference
