"""Redaction of secrets in request log events.

Request headers and URLs are logged with every completed request. Values that
carry credentials are replaced with ``[REDACTED]`` before they reach a log
processor.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


REDACTED_VALUE = "[REDACTED]"

# Compared lowercased
SENSITIVE_HEADERS = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "cookie",
        "x-api-key",
        "x-auth-token",
    }
)

SENSITIVE_QUERY_PARAMS = frozenset(
    {
        "access_token",
        "api_key",
        "apikey",
        "password",
        "token",
    }
)


def is_sensitive_header(header_name: str) -> bool:
    """Whether a header value must be kept out of logs and config."""
    return header_name.lower() in SENSITIVE_HEADERS


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Copy a request header snapshot with credential values masked.

    Args:
        headers: Headers as sent with the request.

    Returns:
        New dictionary for the ``headers`` field of a log event.
    """
    return {
        key: REDACTED_VALUE if is_sensitive_header(key) else value
        for key, value in headers.items()
    }


def redact_url(url: str) -> str:
    """Mask userinfo and token-like query parameters in a request URL.

    ``https://user:pw@host/a?token=x&page=2`` is logged as
    ``https://[REDACTED]@host/a?token=[REDACTED]&page=2``. A query without
    sensitive parameters is left byte-for-byte as it was.
    """
    parts = urlsplit(url)

    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{REDACTED_VALUE}@{netloc.rpartition('@')[2]}"

    query = parts.query
    pairs = parse_qsl(query, keep_blank_values=True)
    if any(key.lower() in SENSITIVE_QUERY_PARAMS for key, _ in pairs):
        masked = [
            (key, REDACTED_VALUE if key.lower() in SENSITIVE_QUERY_PARAMS else val)
            for key, val in pairs
        ]
        query = urlencode(masked, safe="[]")

    return urlunsplit(parts._replace(netloc=netloc, query=query))
