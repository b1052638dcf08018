"""Line-oriented reading over raw archive text."""

import re

from mhtml2html.models.archive import BASE64, QUOTED_PRINTABLE, CursorState
from mhtml2html.processor.charsets import CHARSETS, DEFAULT_CHARSET, CharsetRegistry
from mhtml2html.processor.errors import UnexpectedEndOfInput
from mhtml2html.processor.transfer import decode_quoted_printable

_BLANK_TAIL = re.compile(r"\s*\Z")


class LineReader:
    """Produces logical lines from archive text.

    The read position lives in a ``CursorState`` owned by the caller, so the
    parser can report line numbers in its errors.
    """

    def __init__(
        self,
        text: str,
        cursor: CursorState | None = None,
        registry: CharsetRegistry = CHARSETS,
    ) -> None:
        """Initialize reader.

        Args:
            text: Complete archive text.
            cursor: Read position; a fresh cursor at offset 0 by default.
            registry: Charset registry for quoted-printable lines.
        """
        self.text = text
        self.cursor = cursor or CursorState()
        self.registry = registry

    @property
    def at_end(self) -> bool:
        """Check if all input has been consumed."""
        return self.cursor.offset >= len(self.text)

    def only_whitespace_left(self) -> bool:
        """Check if nothing but whitespace remains."""
        return _BLANK_TAIL.match(self.text, self.cursor.offset) is not None

    def read_line(
        self,
        encoding: str | None = None,
        charset: str | None = DEFAULT_CHARSET,
    ) -> str:
        """Read the next logical line.

        Args:
            encoding: Transfer encoding of the surrounding part. Quoted-printable
                lines are unfolded and decoded, base64 lines are trimmed,
                anything else is returned raw with its terminator.
            charset: Charset label for quoted-printable escapes.

        Returns:
            The line.

        Raises:
            UnexpectedEndOfInput: If no input is left.
        """
        if encoding == QUOTED_PRINTABLE:
            return self._read_quoted_printable(charset)

        line = self._read_physical()
        if encoding == BASE64:
            return line.strip()
        return line

    def skip_whitespace(self) -> None:
        """Discard whitespace up to the next non-whitespace character.

        Raises:
            UnexpectedEndOfInput: If input ends before such a character.
        """
        text = self.text
        offset = self.cursor.offset
        while offset < len(text) and text[offset].isspace():
            if text[offset] == "\n":
                self.cursor.line += 1
            offset += 1
        self.cursor.offset = offset

        if offset >= len(text):
            raise UnexpectedEndOfInput("Unexpected end of input", self.cursor.line)

    def _read_physical(self) -> str:
        """Read up to and including the next line feed."""
        start = self.cursor.offset
        if start >= len(self.text):
            raise UnexpectedEndOfInput("Unexpected end of input", self.cursor.line)

        end = self.text.find("\n", start)
        end = len(self.text) if end == -1 else end + 1

        self.cursor.offset = end
        self.cursor.line += 1
        return self.text[start:end]

    def _read_quoted_printable(self, charset: str | None) -> str:
        """Join soft-broken physical lines into one line and decode it.

        Multi-byte characters may be split across a soft break, so the
        escapes must be decoded as one sequence.
        """
        merged = ""
        while True:
            line = self._read_physical().replace("\r", "")
            if line.endswith("=\n"):
                merged += line[:-2]
                continue
            merged += line
            break
        return decode_quoted_printable(merged, charset, self.registry)
