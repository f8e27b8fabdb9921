"""REST client for a single named upstream endpoint."""

import base64
import threading
from typing import TypeVar

import httpx
import structlog

from restclient.charset import resolve_charset
from restclient.classify import ResponseClass, classify_status
from restclient.config import RestClientConfig
from restclient.constants import (
    AUTHORIZATION_HEADER,
    DEFAULT_PAYLOAD_LOG_LENGTH,
    ERRORS_METRIC,
    REQUESTS_METRIC,
)
from restclient.decode import Transformer, decode_body, read_text
from restclient.errors import RestError, RestHttpError, RestIOError
from restclient.metrics import (
    ErrorCounter,
    MetricRegistry,
    RequestTimer,
    endpoint_metric_name,
    error_rate,
)
from restclient.models import Endpoint, Result
from restclient.redact import redact_headers, redact_url
from restclient.truncate import truncate_preview


T = TypeVar("T")

# Failures of the network exchange itself, as raised by httpx or the OS
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.StreamError, httpx.InvalidURL, OSError)


class RestClient:
    """HTTP client bound to one upstream endpoint.

    Provides GET and POST operations that:
    - Resolve paths against the endpoint root URL
    - Send the client's headers (snapshotted per request)
    - Decode bodies in the charset declared by the response
    - Raise RestIOError, RestHttpError or RestParseError on failure
    - Time every request and count every failure
    - Log a truncated payload preview for successful requests
    """

    def __init__(
        self,
        endpoint_name: str,
        root_url: str,
        metrics: MetricRegistry | None = None,
        *,
        headers: dict[str, str] | None = None,
        payload_log_length: int = DEFAULT_PAYLOAD_LOG_LENGTH,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the REST client.

        Args:
            endpoint_name: Name used in logs, metrics and errors.
            root_url: Base URL that request paths resolve against.
            metrics: Registry for the request timer and error counter.
                Defaults to the process-wide registry.
            headers: Headers sent with every request.
            payload_log_length: Maximum length of logged payload previews.
            transport: Custom httpx transport, mainly for tests.
        """
        self._endpoint = Endpoint(name=endpoint_name, root_url=root_url)
        self._headers: dict[str, str] = dict(headers or {})
        self._headers_lock = threading.Lock()
        self._payload_log_length = payload_log_length
        self._transport = transport

        registry = metrics if metrics is not None else MetricRegistry.get_instance()
        self._metrics = registry
        self._request_timing = registry.timer(
            endpoint_metric_name(endpoint_name, REQUESTS_METRIC)
        )
        self._error_counter = registry.counter(
            endpoint_metric_name(endpoint_name, ERRORS_METRIC)
        )

        self._log = structlog.get_logger(f"{__name__}.{endpoint_name}").bind(
            component="rest_client",
            endpoint=endpoint_name,
        )

    @classmethod
    def from_config(
        cls,
        config: RestClientConfig,
        metrics: MetricRegistry | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> "RestClient":
        """Create a client from a validated configuration.

        Args:
            config: Endpoint configuration.
            metrics: Metric registry to use.
            transport: Custom httpx transport.

        Returns:
            Configured RestClient.
        """
        return cls(
            config.endpoint_name,
            config.root_url,
            metrics,
            headers=config.default_headers,
            payload_log_length=config.payload_log_length,
            transport=transport,
        )

    @property
    def endpoint(self) -> Endpoint:
        """Identity of the upstream endpoint."""
        return self._endpoint

    @property
    def endpoint_name(self) -> str:
        """Name of the upstream endpoint."""
        return self._endpoint.name

    @property
    def url(self) -> str:
        """Root URL of the upstream endpoint."""
        return self._endpoint.root_url

    @property
    def headers(self) -> dict[str, str]:
        """Copy of the headers sent with every request."""
        return self._snapshot_headers()

    @property
    def request_timing(self) -> RequestTimer:
        """Timer recording every completed request."""
        return self._request_timing

    @property
    def error_counter(self) -> ErrorCounter:
        """Counter of failed requests."""
        return self._error_counter

    @property
    def error_rate(self) -> float:
        """Failed requests divided by timed requests."""
        return error_rate(self._request_timing, self._error_counter)

    def set_header(self, name: str, value: str) -> None:
        """Set a header on all subsequent requests, replacing any prior value."""
        with self._headers_lock:
            self._headers[name] = value

    def set_basic_auth(self, username: str, password: str) -> None:
        """Send HTTP basic-auth credentials with all subsequent requests.

        Args:
            username: User name.
            password: Password.
        """
        token = base64.b64encode(f"{username}:{password}".encode()).decode("ascii")
        self.set_header(AUTHORIZATION_HEADER, f"Basic {token}")

    def set_payload_log_length(self, payload_log_length: int) -> None:
        """Set the maximum length of logged payload previews."""
        self._payload_log_length = payload_log_length

    def get_text(self, path: str) -> str:
        """GET a path and return the body as text.

        Args:
            path: Path relative to the root URL.

        Returns:
            Decoded response body.

        Raises:
            RestError: If the request fails.
            EmptyResultError: If the response has no content (204).
        """
        return self.get(path, read_text).get()

    def get(self, path: str, transformer: Transformer[T]) -> Result[T]:
        """GET a path and decode the body with a transformer.

        Args:
            path: Path relative to the root URL.
            transformer: Function from text stream to result, e.g. ``json.load``.

        Returns:
            Present result with the decoded body, or absent for 204.

        Raises:
            RestError: If the request fails.
        """
        return self._execute("GET", path, transformer)

    def post_text(self, path: str, body_text: str) -> Result[str]:
        """POST text (UTF-8 encoded) and return the response body as text.

        Args:
            path: Path relative to the root URL.
            body_text: Request body.

        Returns:
            Present result with the response body, or absent for 204.

        Raises:
            RestError: If the request fails.
        """
        return self._execute("POST", path, read_text, content=body_text.encode("utf-8"))

    def _snapshot_headers(self) -> dict[str, str]:
        with self._headers_lock:
            return dict(self._headers)

    def _execute(
        self,
        method: str,
        path: str,
        transformer: Transformer[T],
        content: bytes | None = None,
    ) -> Result[T]:
        """Execute one request inside the request timer.

        Args:
            method: HTTP method.
            path: Path relative to the root URL.
            transformer: Body transformer.
            content: Request body for POST.

        Returns:
            Decoded result.
        """
        url = self._endpoint.resolve(path)
        headers = self._snapshot_headers()
        log = self._log.bind(method=method, url=redact_url(url))

        try:
            with self._request_timing.time() as timer:
                try:
                    with httpx.Client(
                        follow_redirects=True,
                        transport=self._transport,
                    ) as client:
                        with client.stream(
                            method, url, headers=headers, content=content
                        ) as response:
                            status_code = response.status_code
                            result = self._read_response(response, url, transformer)
                except TRANSPORT_ERRORS as e:
                    raise RestIOError(
                        e, endpoint_name=self.endpoint_name, url=url
                    ) from e

                log.debug(
                    "request_complete",
                    status_code=status_code,
                    duration_ms=round(timer.elapsed_ms, 2),
                    payload=truncate_preview(result, self._payload_log_length),
                    headers=redact_headers(headers),
                )
                return result
        except RestError as e:
            self._record_failure(e, log)
            raise

    def _read_response(
        self,
        response: httpx.Response,
        url: str,
        transformer: Transformer[T],
    ) -> Result[T]:
        """Classify a response and decode its body.

        Args:
            response: Open streaming response.
            url: Request URL for error context.
            transformer: Body transformer.

        Returns:
            Decoded result, absent for 204.

        Raises:
            RestHttpError: If the status is 400 or above.
            RestParseError: If the transformer fails.
        """
        outcome = classify_status(response.status_code)

        if outcome == ResponseClass.HTTP_ERROR:
            raise RestHttpError(
                response.status_code,
                response.reason_phrase,
                endpoint_name=self.endpoint_name,
                url=url,
                detail_text=self._read_error_detail(response),
            )

        if outcome == ResponseClass.SUCCESS_EMPTY:
            return Result.absent()

        body = response.read()
        charset = resolve_charset(response.headers.get("content-type"))
        return Result.present(
            decode_body(
                body,
                charset,
                transformer,
                endpoint_name=self.endpoint_name,
                url=url,
            )
        )

    def _read_error_detail(self, response: httpx.Response) -> str | None:
        """Read an error response body, or None if empty or unreadable."""
        try:
            body = response.read()
        except TRANSPORT_ERRORS:
            return None
        if not body:
            return None
        return body.decode("utf-8", errors="replace")

    def _record_failure(
        self,
        error: RestError,
        log: structlog.stdlib.BoundLogger,
    ) -> None:
        """Count a failed request and log it.

        Args:
            error: The error about to be raised.
            log: Bound logger.
        """
        self._error_counter.mark()
        self._metrics.counter(
            endpoint_metric_name(
                self.endpoint_name, ERRORS_METRIC, error.error_class.value.lower()
            )
        ).mark()
        log.warning(
            "request_failed",
            error_class=error.error_class.value,
            error=error.message,
            status_code=error.status_code if isinstance(error, RestHttpError) else None,
        )
