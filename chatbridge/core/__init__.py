"""Core module initialization."""

from .backend import (
    Backend,
    backend_from_config,
    build_outbound_headers,
    filter_response_headers,
    format_httpx_error,
)
from .exceptions import (
    BridgeError,
    ConfigurationError,
    InvalidRequestError,
    StreamMappingError,
    UpstreamError,
)
from .sse import detect_sse_stream_error, split_data_line
from .upstream_transport import (
    clear_upstream_transports,
    get_upstream_transport,
    register_upstream_transport,
)

__all__ = [
    "Backend",
    "BridgeError",
    "ConfigurationError",
    "InvalidRequestError",
    "StreamMappingError",
    "UpstreamError",
    "backend_from_config",
    "build_outbound_headers",
    "clear_upstream_transports",
    "detect_sse_stream_error",
    "filter_response_headers",
    "format_httpx_error",
    "get_upstream_transport",
    "register_upstream_transport",
    "split_data_line",
]
