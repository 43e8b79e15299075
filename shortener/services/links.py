"""Short link construction."""

from typing import Mapping, Optional
from urllib.parse import quote


def build_short_url(url_id: str, base_url: str, prefix: str) -> str:
    """Build the complete short URL, e.g. ``https://sho.rt/r/3d6a2e60``.

    Args:
        url_id: The hash-derived identifier
        base_url: Scheme and host, with or without a trailing slash
        prefix: Path prefix the redirect route is mounted under

    Returns:
        Complete short URL
    """
    base = base_url.rstrip("/")
    prefix = prefix.strip("/")
    if prefix:
        return f"{base}/{prefix}/{url_id}"
    return f"{base}/{url_id}"


def request_base_url(
    headers: Mapping[str, str],
    request_scheme: str,
    request_host: str,
    configured_base_url: Optional[str] = None,
) -> str:
    """Work out the scheme and host short links should point at.

    Priority:
    1. Configured base URL
    2. X-Forwarded-Proto / X-Forwarded-Host from a proxy
    3. Request scheme + Host header
    """
    if configured_base_url:
        return configured_base_url.rstrip("/")

    scheme = request_scheme or "http"
    if headers.get("x-forwarded-proto", "").lower() == "https":
        scheme = "https"
    host = headers.get("x-forwarded-host") or headers.get("host") or request_host
    return f"{scheme}://{host}"


def location_header(original_url: str) -> str:
    """Render a stored URL as a ``Location`` header value.

    Printable ASCII passes through untouched, spaces and reserved characters
    included. Non-ASCII characters are percent-encoded as UTF-8 and control
    characters are escaped so they cannot break the header.
    """
    return "".join(
        char if " " <= char < "\x7f" else quote(char, safe="")
        for char in original_url
    )
