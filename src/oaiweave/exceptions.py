"""Custom exception classes for the oaiweave library.

OAI-PMH reports protocol-level failures inside an HTTP 200 response, so the
hierarchy keeps transport failures, decoding failures and server-reported
protocol errors apart. Protocol error codes follow the OAI-PMH 2.0
specification:
https://www.openarchives.org/OAI/openarchivesprotocol.html#ErrorConditions
"""

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .models.envelope import OaiResponse


class OaiWeaveError(Exception):
    """Base exception class for all oaiweave errors."""

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        request: httpx.Request | None = None,
    ):
        """Initializes the base exception.

        Args:
            message: The error message.
            response: Optional httpx.Response object associated with the error.
            request: Optional httpx.Request object associated with the error.
        """
        super().__init__(message)
        self.message = message
        self.response = response
        self.request = request

    def __str__(self) -> str:
        if self.response is not None:
            url_info = getattr(getattr(self.response, "request", None), "url", "N/A")
            return (
                f"{self.message} (Status: {self.response.status_code}, URL: {url_info})"
            )
        if isinstance(self.request, httpx.Request):
            return f"{self.message} (URL: {self.request.url})"
        return self.message


# --- Transport --- #


class TransportError(OaiWeaveError):
    """Represents a failure to obtain a response body from the repository."""


class APIError(TransportError):
    """Represents a non-2xx HTTP status returned by the repository."""


class NotFoundError(APIError):
    """Represents a 404 Not Found, usually a wrong base URL."""


class TimeoutError(TransportError):
    """Represents a request timeout error.

    This error is raised when an HTTP request does not complete within the configured timeout.
    """

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


class NetworkError(TransportError):
    """Represents a network connection error (e.g., DNS resolution failure, connection refused)."""

    def __init__(self, message: str, *, request: httpx.Request | None = None):
        super().__init__(message, request=request, response=None)


# --- Decoding --- #


class DecodeError(OaiWeaveError):
    """Base class for failures while turning markup into models."""

    def __init__(self, message: str):
        super().__init__(message, response=None)


class MarkupError(DecodeError):
    """The payload is not well-formed XML."""


class SchemaError(DecodeError):
    """A required structural element or field is missing or invalid."""


class TargetTypeError(DecodeError, TypeError):
    """The decode target is not a pydantic model class or instance."""


# --- Client-side --- #


class ValidationError(OaiWeaveError):
    """Represents invalid request options, detected before a request is sent."""


class ConfigurationError(OaiWeaveError):
    """Represents an error in the library's configuration."""

    def __init__(self, message: str):
        super().__init__(message, response=None)


# --- OAI-PMH protocol errors --- #


class ProtocolError(OaiWeaveError):
    """An error block reported by the repository inside a well-formed envelope.

    Attributes:
        code: The OAI-PMH error code, e.g. ``idDoesNotExist``.
        message: The human-readable message, verbatim.
        envelope: The partially decoded response, kept so callers can log
            the response date and request echo.
    """

    code: str = ""

    def __init__(
        self,
        code: str,
        message: str = "",
        *,
        envelope: "OaiResponse | None" = None,
        response: httpx.Response | None = None,
    ):
        super().__init__(message, response=response)
        self.code = code
        self.envelope = envelope

    def __str__(self) -> str:
        if self.message:
            return f"{self.code}: {self.message}"
        return self.code


class BadArgumentError(ProtocolError):
    """Illegal, missing, repeated or malformed request arguments."""

    code = "badArgument"


class BadResumptionTokenError(ProtocolError):
    """The resumption token is invalid or expired."""

    code = "badResumptionToken"


class BadVerbError(ProtocolError):
    """The verb is missing, repeated or not a legal OAI-PMH verb."""

    code = "badVerb"


class CannotDisseminateFormatError(ProtocolError):
    """The metadata format is not supported by the item or the repository."""

    code = "cannotDisseminateFormat"


class IdDoesNotExistError(ProtocolError):
    """The identifier is unknown or illegal in this repository."""

    code = "idDoesNotExist"


class NoRecordsMatchError(ProtocolError):
    """The combination of from, until, set and metadataPrefix is empty."""

    code = "noRecordsMatch"


class NoMetadataFormatsError(ProtocolError):
    """There are no metadata formats available for the item."""

    code = "noMetadataFormats"


class NoSetHierarchyError(ProtocolError):
    """The repository does not support sets."""

    code = "noSetHierarchy"


PROTOCOL_ERRORS: dict[str, type[ProtocolError]] = {
    cls.code: cls
    for cls in (
        BadArgumentError,
        BadResumptionTokenError,
        BadVerbError,
        CannotDisseminateFormatError,
        IdDoesNotExistError,
        NoRecordsMatchError,
        NoMetadataFormatsError,
        NoSetHierarchyError,
    )
}
"""Maps each OAI-PMH error code to its exception class."""
