"""Response body decoding through caller-supplied transformers."""

import io
from collections.abc import Callable
from typing import TextIO, TypeVar

from restclient.errors import RestParseError


T = TypeVar("T")

Transformer = Callable[[TextIO], T]


def read_text(reader: TextIO) -> str:
    """Default transformer: read the whole stream into one string."""
    return reader.read()


def decode_body(
    body: bytes,
    charset: str,
    transformer: Transformer[T],
    *,
    endpoint_name: str,
    url: str,
) -> T:
    """Decode a response body with a transformer.

    The body is exposed to the transformer as a text stream in the given
    charset. The stream is closed once the transformer returns or raises.

    Args:
        body: Raw response body.
        charset: Codec name from ``resolve_charset``.
        transformer: Function from text stream to result.
        endpoint_name: Endpoint name for error context.
        url: Request URL for error context.

    Returns:
        Whatever the transformer returns.

    Raises:
        RestParseError: If the transformer raises.
    """
    with io.TextIOWrapper(io.BytesIO(body), encoding=charset, newline="") as reader:
        try:
            return transformer(reader)
        except Exception as e:
            raise RestParseError(e, endpoint_name=endpoint_name, url=url) from e
