"""Bounded previews of decoded results for diagnostic logging."""

from restclient.constants import NO_CONTENT_PREVIEW
from restclient.models import Result


def truncate_preview(result: Result[object], max_length: int) -> str:
    """Render a result as a string of at most ``max_length`` characters.

    The cut is hard, without an ellipsis.

    Args:
        result: Decoded result of a request.
        max_length: Maximum preview length.

    Returns:
        ``"No content"`` for an absent result, else the truncated text.
    """
    if not result.is_present:
        return NO_CONTENT_PREVIEW
    text = str(result.get())
    if len(text) > max_length:
        return text[: max(max_length, 0)]
    return text
