"""Application-level errors shown to the user.

The transport raises ``services.ServiceError`` subclasses; everything above
it only ever sees an ``AppError`` produced by :func:`map_service_error`.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services import ServiceError


class AppError(Exception):
    """Base class for errors carrying a human-readable description."""

    prefix = "An internal error occurred"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(self.description)

    @property
    def description(self) -> str:
        return f"{self.prefix}:\n{self.detail}"


class InvalidURLError(AppError):
    prefix = "A network call failed due to an invalid URL"


class BadResponseError(AppError):
    prefix = "A network call failed due to a bad response"

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Status {status}")


class DecodingError(AppError):
    prefix = "A network call failed due to bad decoding"


class NetworkError(AppError):
    prefix = "A network call failed"


class InternalError(AppError):
    pass


def map_service_error(error: "ServiceError") -> AppError:
    """Translates a transport failure into the matching AppError."""
    from services import BadResponse, DecodingFailure, InvalidURL, NetworkFailure

    if isinstance(error, InvalidURL):
        return InvalidURLError(error.url)
    if isinstance(error, BadResponse):
        return BadResponseError(error.status)
    if isinstance(error, DecodingFailure):
        return DecodingError(str(error))
    if isinstance(error, NetworkFailure):
        return NetworkError(str(error))
    return InternalError(str(error))
