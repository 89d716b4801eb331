"""Upstream backend configuration and utilities."""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import httpx

from .exceptions import ConfigurationError

logger = logging.getLogger("chatbridge")

DEFAULT_TIMEOUT = 60
RESPONSES_PATH = "/responses"


@dataclass
class Backend:
    """Represents the Responses API upstream."""

    name: str
    base_url: str
    api_key: str
    timeout: Optional[float]
    target_model: Optional[str]

    def build_url(self, path: str = RESPONSES_PATH, query: str = "") -> str:
        """Build the full URL for a backend request."""
        base = self.base_url.rstrip("/")
        normalized_path = path or ""
        if not normalized_path.startswith("/"):
            normalized_path = f"/{normalized_path}"
        url = f"{base}{normalized_path}"
        if query:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{query}"
        return url


def backend_from_config(config: Mapping[str, Any]) -> Backend:
    """Build the upstream backend from the ``upstream`` config block."""
    upstream = config.get("upstream") or {}
    if not isinstance(upstream, Mapping):
        raise ConfigurationError("'upstream' must be a mapping")

    base_url = str(upstream.get("base_url") or "").strip()
    if not base_url:
        raise ConfigurationError("upstream.base_url is required")

    raw_timeout = upstream.get("timeout")
    try:
        timeout = float(raw_timeout) if raw_timeout is not None else None
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid upstream.timeout: {raw_timeout!r}") from exc

    target_model = str(upstream.get("target_model") or "").strip() or None

    return Backend(
        name=str(upstream.get("name") or "responses-upstream"),
        base_url=base_url,
        api_key=str(upstream.get("api_key") or ""),
        timeout=timeout,
        target_model=target_model,
    )


HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
}


def format_httpx_error(exc: Any, backend: Backend, url: Optional[str] = None) -> str:
    """Produce a detailed, user-facing description of an httpx error."""
    parts = [exc.__class__.__name__]
    message = str(exc).strip()
    if message:
        parts.append(message)

    request = None
    try:
        request = exc.request
    except (AttributeError, RuntimeError):
        # httpx raises RuntimeError when no request is attached
        request = None
    if request is not None:
        parts.append(f"request={request.method} {request.url}")
    elif url:
        parts.append(f"url={url}")

    if isinstance(exc, httpx.TimeoutException):
        timeout = backend.timeout or DEFAULT_TIMEOUT
        parts.append(f"timeout={timeout}s")

    return "; ".join(parts)


def build_outbound_headers(
    incoming: Mapping[str, str], backend_api_key: str
) -> dict[str, str]:
    """Build headers for outbound requests to the upstream."""
    headers: dict[str, str] = {}
    normalized_keys: set[str] = set()
    for key, value in incoming.items():
        key_lower = key.lower()
        # Strip hop-by-hop headers and headers recomputed for the new body
        if key_lower in HOP_BY_HOP_HEADERS or key_lower in {
            "authorization",
            "host",
            "content-length",
            "content-type",
            "accept-encoding"
        }:
            continue
        if key_lower in normalized_keys:
            continue
        headers[key] = value
        normalized_keys.add(key_lower)

    headers["Content-Type"] = "application/json"
    if backend_api_key:
        headers["Authorization"] = f"Bearer {backend_api_key}"
    # Explicitly request uncompressed responses
    headers["Accept-Encoding"] = "identity"
    return headers


def filter_response_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Filter response headers, removing hop-by-hop headers."""
    filtered: dict[str, str] = {}
    for key, value in headers.items():
        key_lower = key.lower()
        # Drop headers FastAPI will recompute or that no longer match the payload
        if key_lower in HOP_BY_HOP_HEADERS or key_lower in {
            "content-length",
            "transfer-encoding",
            "content-encoding"
        }:
            continue
        filtered[key] = value
    return filtered
