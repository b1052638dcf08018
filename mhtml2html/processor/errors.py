"""Exceptions raised while parsing and converting archives."""


class MHTMLError(Exception):
    """Base class for archive errors.

    Args:
        message: Description of the problem.
        line: Line number where parsing stopped, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message}; line {line}"
        super().__init__(message)


class UnexpectedEndOfInput(MHTMLError):
    """Raised when the archive ends in the middle of a construct."""

    pass


class MissingHeaderContext(MHTMLError):
    """Raised when a continuation line appears before any header field."""

    pass


class MissingBoundary(MHTMLError):
    """Raised when the document Content-Type declares no boundary."""

    pass


class ExpectedBoundary(MHTMLError):
    """Raised when the first part does not start with the boundary."""

    pass


class MissingTransferEncoding(MHTMLError):
    """Raised when a part has no Content-Transfer-Encoding."""

    pass


class MissingContentType(MHTMLError):
    """Raised when the document or a part has no Content-Type."""

    pass


class MissingIdentifier(MHTMLError):
    """Raised when a part has neither Content-ID nor Content-Location."""

    pass


class RootNotFound(MHTMLError):
    """Raised when the first part is not a located HTML document."""

    pass


class InvalidBase64(MHTMLError):
    """Raised when a base64 payload cannot be decoded."""

    pass


class InvalidArchiveShape(MHTMLError):
    """Raised when convert() receives neither text nor a parsed archive."""

    pass


class InvalidRootAsset(MHTMLError):
    """Raised when the root location does not name an HTML asset."""

    pass


class DataURIError(MHTMLError):
    """Raised when an asset cannot be serialized into a data URI."""

    pass
