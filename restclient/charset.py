"""Charset resolution from Content-Type headers."""

import codecs

from restclient.constants import CHARSET_MARKER, DEFAULT_CHARSET


def resolve_charset(content_type: str | None) -> str:
    """Resolve the text encoding declared by a Content-Type header.

    Everything after ``"; charset="`` is taken as the charset name. A missing
    header, a missing marker, an unknown charset or a codec that does not
    decode bytes to text (such as ``base64``) falls back to UTF-8.

    Args:
        content_type: Raw Content-Type header value, if any.

    Returns:
        Canonical codec name usable with ``bytes.decode``.
    """
    if not content_type or CHARSET_MARKER not in content_type:
        return DEFAULT_CHARSET

    name = content_type[content_type.index(CHARSET_MARKER) + len(CHARSET_MARKER) :]
    name = name.strip().strip('"')
    if not name:
        return DEFAULT_CHARSET

    try:
        canonical = codecs.lookup(name).name
        # bytes-to-bytes codecs like base64 or zlib raise LookupError here
        b"".decode(canonical)
    except LookupError:
        return DEFAULT_CHARSET
    return canonical
