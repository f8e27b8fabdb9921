"""Response status classification."""

from enum import Enum

from restclient.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_NO_CONTENT


class ResponseClass(str, Enum):
    """Outcome class of a final (post-redirect) HTTP status.

    - SUCCESS_WITH_BODY: Body is decoded and returned
    - SUCCESS_EMPTY: 204 No Content, nothing to decode
    - HTTP_ERROR: Status 400 and above
    """

    SUCCESS_WITH_BODY = "SUCCESS_WITH_BODY"
    SUCCESS_EMPTY = "SUCCESS_EMPTY"
    HTTP_ERROR = "HTTP_ERROR"


def classify_status(status_code: int) -> ResponseClass:
    """Classify an HTTP status code.

    Redirects are followed by the transport, so 3xx codes only reach this
    function if the transport gave up on them; they count as success.

    Args:
        status_code: Final HTTP status code.

    Returns:
        The outcome class for the status.
    """
    if status_code >= HTTP_STATUS_BAD_REQUEST:
        return ResponseClass.HTTP_ERROR
    if status_code == HTTP_STATUS_NO_CONTENT:
        return ResponseClass.SUCCESS_EMPTY
    return ResponseClass.SUCCESS_WITH_BODY
