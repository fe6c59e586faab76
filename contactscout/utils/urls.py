# contactscout/utils/urls.py
import re
from typing import Optional
from urllib.parse import urlsplit

SCHEME_REGEX = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")

# schemes that need a host; browsers accept them with any number of
# slashes after the colon ("http:example.com" == "http://example.com")
HOST_SCHEMES = {"http", "https", "ws", "wss", "ftp"}


def _split(value: str):
    try:
        parts = urlsplit(value)
        # accessing .port validates it
        parts.port
    except ValueError:
        return None
    return parts


def normalize_url(value: str) -> Optional[str]:
    """
    Absolute URL to request for ``value``, or None if it does not parse.

    Host-based schemes are rewritten to the ``scheme://host...`` form,
    anything else with a valid scheme is returned unchanged.
    """
    if not value or not isinstance(value, str):
        return None
    parts = _split(value)
    if parts is None or not parts.scheme or not SCHEME_REGEX.match(parts.scheme):
        return None

    scheme = parts.scheme.lower()
    if scheme not in HOST_SCHEMES:
        return value

    rest = value[len(parts.scheme) + 1:].lstrip("/\\")
    if not rest:
        return None
    url = f"{scheme}://{rest}"
    parts = _split(url)
    if parts is None or not parts.hostname:
        return None
    if any(ch.isspace() for ch in parts.netloc):
        return None
    return url


def is_valid_url(value: str) -> bool:
    """True if ``value`` parses as an absolute URL."""
    return normalize_url(value) is not None
