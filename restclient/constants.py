"""HTTP constants for the REST client.

Centralizes status codes and defaults shared across modules.
"""

# HTTP Status Codes
HTTP_STATUS_NO_CONTENT = 204
HTTP_STATUS_BAD_REQUEST = 400

# Charset resolution
DEFAULT_CHARSET = "utf-8"
CHARSET_MARKER = "; charset="

# Logging
DEFAULT_PAYLOAD_LOG_LENGTH = 100
NO_CONTENT_PREVIEW = "No content"

# Metric naming
METRIC_PREFIX = "RestClient"
REQUESTS_METRIC = "requests"
ERRORS_METRIC = "errors"

# Headers
AUTHORIZATION_HEADER = "Authorization"
