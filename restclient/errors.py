"""Error taxonomy for REST calls.

Every failure of a request surfaces as one of three ``RestError`` subclasses:

- RestIOError: the network exchange could not be completed
- RestHttpError: the service answered with a status of 400 or above
- RestParseError: the body arrived but the transformer could not decode it
"""

from enum import Enum


class RestErrorClass(str, Enum):
    """Classification of REST errors for metrics and logging."""

    TRANSPORT = "TRANSPORT"
    HTTP_STATUS = "HTTP_STATUS"
    PARSE = "PARSE"


def describe_exception(exc: BaseException) -> str:
    """Render an exception as ``"<Type>: <text>"``."""
    text = str(exc)
    if not text:
        return type(exc).__name__
    return f"{type(exc).__name__}: {text}"


class RestError(Exception):
    """Base exception for REST client errors.

    Callers can catch this to handle any failed call, or one of the
    subclasses to tell the failure kinds apart.
    """

    error_class: RestErrorClass

    def __init__(self, message: str, *, endpoint_name: str, url: str) -> None:
        """Initialize the REST error.

        Args:
            message: Human-readable error message.
            endpoint_name: Name of the endpoint the request targeted.
            url: Resolved URL of the request.
        """
        super().__init__(message)
        self.message = message
        self.endpoint_name = endpoint_name
        self.url = url

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "endpoint_name": self.endpoint_name,
            "url": self.url,
        }


class RestIOError(RestError):
    """The network exchange failed.

    Raised on connection refused, connection reset, premature end of the
    response stream and similar transport failures. The transport exception
    is kept as ``cause`` and chained as ``__cause__``.
    """

    error_class = RestErrorClass.TRANSPORT

    def __init__(self, cause: Exception, *, endpoint_name: str, url: str) -> None:
        super().__init__(describe_exception(cause), endpoint_name=endpoint_name, url=url)
        self.cause = cause


class RestHttpError(RestError):
    """The service responded with an error status (400 and above).

    Attributes:
        status_code: HTTP status code of the response.
        reason_phrase: Reason phrase of the status line.
        detail_text: Body of the error response, or None if it was empty
            or could not be read.
    """

    error_class = RestErrorClass.HTTP_STATUS

    def __init__(
        self,
        status_code: int,
        reason_phrase: str,
        *,
        endpoint_name: str,
        url: str,
        detail_text: str | None = None,
    ) -> None:
        super().__init__(
            f"{status_code} {reason_phrase}", endpoint_name=endpoint_name, url=url
        )
        self.status_code = status_code
        self.reason_phrase = reason_phrase
        self.detail_text = detail_text

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation including status details.
        """
        result = super().to_dict()
        result["status_code"] = self.status_code
        result["reason_phrase"] = self.reason_phrase
        return result


class RestParseError(RestError):
    """A transformer failed while decoding a successful response body."""

    error_class = RestErrorClass.PARSE

    def __init__(self, cause: Exception, *, endpoint_name: str, url: str) -> None:
        super().__init__(describe_exception(cause), endpoint_name=endpoint_name, url=url)
        self.cause = cause


class EmptyResultError(LookupError):
    """Raised when unwrapping a result that has no content (HTTP 204)."""
