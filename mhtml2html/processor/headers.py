"""MIME header accumulation with continuation lines."""

import re
from typing import Iterator, MutableMapping

from mhtml2html.processor.errors import MissingHeaderContext

_PARAM = re.compile(r'''\s*;\s*([A-Za-z0-9_.*-]+)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^;\s]+))''')


class HeaderRecord(MutableMapping[str, str]):
    """Header fields with case-insensitive lookup.

    Field names keep the spelling of their first occurrence.
    """

    def __init__(self) -> None:
        self._fields: dict[str, tuple[str, str]] = {}

    def __getitem__(self, name: str) -> str:
        return self._fields[name.lower()][1]

    def __setitem__(self, name: str, value: str) -> None:
        key = name.lower()
        original = self._fields[key][0] if key in self._fields else name
        self._fields[key] = (original, value)

    def __delitem__(self, name: str) -> None:
        del self._fields[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"HeaderRecord({dict(self.items())!r})"


class HeaderParser:
    """Splits header lines into a record.

    Remembers the last field seen so continuation lines can be appended to
    it. Use one parser per header block.
    """

    def __init__(self) -> None:
        self.last_field: str | None = None

    def feed(self, line: str, record: MutableMapping[str, str], line_number: int | None = None) -> None:
        """Add one header line to a record.

        Args:
            line: Raw header line.
            record: Record receiving the field.
            line_number: Line number for error messages.

        Raises:
            MissingHeaderContext: If a continuation line has no field to extend.
        """
        colon = line.find(":")
        folded = line[:1] in (" ", "\t")

        if colon > -1 and not folded:
            self.last_field = line[:colon].strip()
            record[self.last_field] = line[colon + 1:].strip()
            return

        if self.last_field is None:
            raise MissingHeaderContext("Missing MHTML headers", line_number)
        record[self.last_field] += line.strip()


def split_content_type(value: str) -> tuple[str, dict[str, str]]:
    """Split a Content-Type value into media type and parameters.

    Args:
        value: Header value, e.g. ``text/html; charset="utf-8"``.

    Returns:
        Lower-cased media type and a dict of lower-cased parameter names.
    """
    media_type, _, rest = value.partition(";")
    params: dict[str, str] = {}
    for match in _PARAM.finditer(";" + rest):
        name = match.group(1).lower()
        params.setdefault(name, next(g for g in match.groups()[1:] if g is not None))
    return media_type.strip().lower(), params
