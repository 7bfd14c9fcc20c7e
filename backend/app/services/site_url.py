"""
Site URL validation - check the requested siteUrl and derive its domain.
"""
import ipaddress
import re
from typing import Optional
from urllib.parse import urlparse

from app.errors import SiteUrlError

ALLOWED_SCHEMES = ("http", "https")

# Dot-separated labels after IDNA encoding; a trailing dot is allowed
HOST_PATTERN = re.compile(r"^[a-z0-9_-]+(\.[a-z0-9_-]+)*\.?$")


def parse_site_url(url: Optional[str]) -> str:
    """
    Validate siteUrl and return its domain.

    The domain is the hostname with a leading "www." removed.

    Raises:
        SiteUrlError: if the URL is missing or not an absolute http(s) URL
    """
    if not url or not url.strip():
        raise SiteUrlError("Missing required parameter: siteUrl.")

    try:
        parsed = urlparse(url.strip())
        hostname = parsed.hostname
        # Raises ValueError for a non-numeric or out-of-range port
        parsed.port
        if hostname and not _is_valid_host(hostname):
            raise ValueError(f"Invalid host: {hostname}")
    except ValueError:
        raise SiteUrlError("Invalid siteUrl.")

    # Check scheme
    if parsed.scheme not in ALLOWED_SCHEMES:
        raise SiteUrlError("Invalid siteUrl.")

    # Check for empty host
    if not hostname:
        raise SiteUrlError("Invalid siteUrl.")

    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname


def _is_valid_host(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass
    # UnicodeError is a ValueError; raised for labels IDNA cannot encode
    ascii_host = hostname.encode("idna").decode("ascii")
    return bool(HOST_PATTERN.match(ascii_host))
