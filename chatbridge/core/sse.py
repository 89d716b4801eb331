"""SSE (Server-Sent Events) line framing utilities and error detection."""

import json
from typing import Optional

DATA_PREFIX = "data:"
DATA_PREFIX_WITH_SPACE = "data: "
DONE_LINE = "data: [DONE]"


def split_data_line(line: str) -> Optional[str]:
    """Return the payload of a ``data:`` line, or None for other framing.

    The prefix is matched with its trailing space first, then without.
    """
    if line.startswith(DATA_PREFIX_WITH_SPACE):
        return line[len(DATA_PREFIX_WITH_SPACE):]
    if line.startswith(DATA_PREFIX):
        return line[len(DATA_PREFIX):]
    return None


def format_data_line(payload: str) -> str:
    """Wrap a serialized payload as an SSE data line."""
    return f"{DATA_PREFIX_WITH_SPACE}{payload}"


def detect_sse_stream_error(line: str) -> Optional[str]:
    """
    Check if a single SSE line carries an upstream error event.

    Returns an error message if an error is detected, None otherwise.

    Detects patterns like:
    - Responses-style: data: {"type":"error","message":...} or
      data: {"type":"response.failed","response":{"error":{...}}}
    - Generic: data: {"error":{...}}
    """
    payload = split_data_line(line.strip())
    if payload is None:
        return None
    payload = payload.strip()
    if not payload or payload == "[DONE]":
        return None

    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError:
        return None

    if not isinstance(parsed, dict):
        return None

    event_type = parsed.get("type")
    if event_type == "error":
        message = parsed.get("message")
        error_obj = parsed.get("error")
        if not message and isinstance(error_obj, dict):
            message = error_obj.get("message")
        code = parsed.get("code", "unknown")
        return f"SSE stream error: {message or 'unknown error'} (code={code})"

    if event_type == "response.failed":
        response = parsed.get("response")
        error_obj = response.get("error") if isinstance(response, dict) else None
        if isinstance(error_obj, dict):
            error_msg = error_obj.get("message") or str(error_obj)
            return f"SSE stream error: {error_msg} (code={error_obj.get('code', 'unknown')})"
        return "SSE stream error: response failed"

    error_obj = parsed.get("error")
    if isinstance(error_obj, dict):
        error_msg = error_obj.get("message") or str(error_obj)
        error_type = error_obj.get("type", "unknown")
        return f"SSE stream error: {error_msg} (type={error_type})"

    return None
