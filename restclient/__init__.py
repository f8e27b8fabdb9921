"""Single-endpoint REST client with typed errors, metrics and bounded logging.

This package provides:
- RestClient: GET/POST against one named upstream service
- A typed error taxonomy (transport, HTTP status, parse)
- Charset resolution and transformer-based body decoding
- Request timing and error counting per endpoint
- Truncated payload previews in structured logs
"""

from restclient.charset import resolve_charset
from restclient.classify import ResponseClass, classify_status
from restclient.client import RestClient
from restclient.config import RestClientConfig
from restclient.decode import decode_body, read_text
from restclient.errors import (
    EmptyResultError,
    RestError,
    RestErrorClass,
    RestHttpError,
    RestIOError,
    RestParseError,
)
from restclient.metrics import ErrorCounter, MetricRegistry, RequestTimer, error_rate
from restclient.models import Endpoint, Result
from restclient.truncate import truncate_preview


__version__ = "0.1.0"

__all__ = [
    # Client
    "RestClient",
    "RestClientConfig",
    # Models
    "Endpoint",
    "Result",
    # Errors
    "RestError",
    "RestErrorClass",
    "RestIOError",
    "RestHttpError",
    "RestParseError",
    "EmptyResultError",
    # Decoding
    "ResponseClass",
    "classify_status",
    "resolve_charset",
    "decode_body",
    "read_text",
    # Metrics
    "MetricRegistry",
    "RequestTimer",
    "ErrorCounter",
    "error_rate",
    # Logging
    "truncate_preview",
    "__version__",
]
