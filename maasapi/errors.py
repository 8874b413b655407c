"""Error types raised by the MAAS API client."""

from typing import Optional


class MAASError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def annotate(self, context: str) -> "MAASError":
        """Return a copy of this error with context prefixed to the message.

        The copy keeps the error class, so kind checks still succeed, and
        chains this error as its cause.

        Args:
            context: Short description of where the error happened (e.g. 'machine 2')

        Returns:
            New error of the same class
        """
        annotated = self.__class__.__new__(self.__class__)
        annotated.__dict__.update(self.__dict__)
        MAASError.__init__(annotated, f"{context}: {self.message}", cause=self)
        return annotated


class DeserializationError(MAASError):
    """A response payload did not have the expected shape."""


class UnsupportedVersionError(MAASError):
    """No decoder is declared at or below the requested API version."""


class NoMatchError(MAASError):
    """The requested resource was not found."""


class BadRequestError(MAASError):
    """The server rejected the request as invalid or conflicting."""


class PermissionDeniedError(MAASError):
    """The authenticated user may not perform the request."""


class CannotCompleteError(MAASError):
    """The server could not complete the request right now."""


class UnexpectedError(MAASError):
    """An error response the client has no specific handling for."""

    def __init__(self, cause: BaseException):
        super().__init__(f"unexpected: {cause}", cause=cause)


class ServerError(MAASError):
    """Non-2xx HTTP response from the MAAS server."""

    def __init__(self, status_code: int, status_text: str, body_message: str):
        self.status_code = status_code
        self.status_text = status_text
        self.body_message = body_message
        super().__init__(f"ServerError: {status_code} {status_text} ({body_message})")


def wrap_with_deserialization_error(err: BaseException, fmt: str, *args) -> DeserializationError:
    """Wrap an underlying error as a DeserializationError.

    Args:
        err: The underlying cause
        fmt: printf-style message format
        *args: Format arguments

    Returns:
        DeserializationError whose message is '<message>: <err>'
    """
    message = fmt % args if args else fmt
    return DeserializationError(f"{message}: {err}", cause=err)


def _caused_by(err: Optional[BaseException], error_class: type) -> bool:
    while err is not None:
        if isinstance(err, error_class):
            return True
        err = err.__cause__
    return False


def is_deserialization_error(err: Optional[BaseException]) -> bool:
    return _caused_by(err, DeserializationError)


def is_unsupported_version_error(err: Optional[BaseException]) -> bool:
    return _caused_by(err, UnsupportedVersionError)


def is_no_match_error(err: Optional[BaseException]) -> bool:
    return _caused_by(err, NoMatchError)


def is_bad_request_error(err: Optional[BaseException]) -> bool:
    return _caused_by(err, BadRequestError)


def is_permission_error(err: Optional[BaseException]) -> bool:
    return _caused_by(err, PermissionDeniedError)


def is_cannot_complete_error(err: Optional[BaseException]) -> bool:
    return _caused_by(err, CannotCompleteError)


def is_unexpected_error(err: Optional[BaseException]) -> bool:
    return _caused_by(err, UnexpectedError)
