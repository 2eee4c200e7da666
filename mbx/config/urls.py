"""API base URL validation."""

from __future__ import annotations

import re
from urllib.parse import urlsplit, urlunsplit

_REPEATED_SLASHES = re.compile(r"/{2,}")


class ConfigError(ValueError):
    """Invalid or missing client configuration."""


def normalize_api_url(raw: str | None) -> str:
    """Validate the API base URL and normalize its path.

    Repeated slashes in the path collapse to one and a trailing slash is
    dropped, so request paths can be appended with a single "/".

    Raises:
        ConfigError: If the URL is missing, unparsable or not http(s).
    """
    if not raw or not raw.strip():
        raise ConfigError('invalid argument for "--api" flag (required)')

    try:
        parts = urlsplit(raw.strip())
    except ValueError as e:
        raise ConfigError(f"invalid API endpoint: {e}") from e

    if parts.scheme not in ("http", "https"):
        raise ConfigError("invalid scheme: must be http or https")
    if not parts.netloc:
        raise ConfigError("invalid API endpoint: missing host")

    path = _REPEATED_SLASHES.sub("/", parts.path)
    if path.endswith("/"):
        path = path[:-1]

    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))
