"""Object key naming helpers."""

import re
from urllib.parse import quote

UNNAMED = "unnamed"

# Characters that would break out of a quoted header parameter
_HEADER_UNSAFE_RE = re.compile(r'["\\\r\n\x00-\x1f\x7f]')


def make_object_key(original_name: str, millis: int) -> str:
    """Build the object key for an upload: '{epoch_millis}-{name}'.

    Only the final path segment of the uploaded name is kept, browsers on
    some platforms send full client paths.
    """
    return f"{millis}-{basename(original_name) or UNNAMED}"


def basename(key: str) -> str:
    """Final path segment of a key, for '/' and '\\' separators."""
    return re.split(r"[/\\]", key)[-1]


def download_filename(key: str) -> str:
    """Filename offered to the client for a download.

    Taken from the final path segment of the key with quote, backslash and
    control characters removed, never from the raw key.
    """
    name = _HEADER_UNSAFE_RE.sub("", basename(key))
    return name or UNNAMED


def content_disposition(filename: str) -> str:
    """Content-Disposition value for an attachment download.

    Non-ASCII names are sent in the RFC 5987 ``filename*`` form since header
    values are latin-1 on the wire.
    """
    if filename.isascii():
        return f'attachment; filename="{filename}"'
    return f"attachment; filename*=utf-8''{quote(filename)}"
