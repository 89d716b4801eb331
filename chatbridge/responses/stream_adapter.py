"""Stream adapter for converting Responses API SSE lines to Chat Completions chunks.

Each upstream line is converted on its own, with no state carried between
lines:

Responses API line:
    data: {"id":"resp_1","output":[{"type":"message","role":"assistant",
           "content":[{"type":"text","text":"Hello"}]}]}

Chat Completions line:
    data: {"object":"chat.completion.chunk","id":"resp_1","choices":[{"index":0,
           "delta":{"role":"assistant","content":"Hello"},"finish_reason":null}]}

Empty lines, the ``data: [DONE]`` terminator, non-``data:`` framing and
payloads that are not JSON objects are forwarded untouched. A ``null`` payload
converts like an empty object.
"""

import json
import logging
from typing import Any, AsyncIterator, Iterator

from ..core.exceptions import StreamMappingError
from ..core.sse import DONE_LINE, detect_sse_stream_error, format_data_line, split_data_line
from ..types.chat import ChatCompletionChunk, Delta, ToolCall
from ..types.responses import (
    FunctionCallItem,
    MessageItem,
    decode_items,
    optional_int,
    optional_str,
)
from .usage import convert_stream_usage

logger = logging.getLogger("chatbridge")

CHAT_COMPLETION_CHUNK_OBJECT = "chat.completion.chunk"


def convert_stream_line(line: str) -> str:
    """Convert one Responses API stream line to a Chat Completions chunk line.

    Args:
        line: A single line of the upstream stream, without its newline

    Returns:
        The converted ``data: {...}`` line, or ``line`` unchanged when it is
        not a JSON data line

    Raises:
        StreamMappingError: If the converted chunk cannot be serialized
    """
    if line == "" or line == DONE_LINE:
        return line

    payload = split_data_line(line)
    if payload is None:
        return line

    try:
        event = json.loads(payload)
    except json.JSONDecodeError:
        logger.debug(f"StreamAdapter: Failed to parse: {payload[:100]}")
        return line

    # A null payload is an event with no fields
    if event is None:
        event = {}
    if not isinstance(event, dict):
        logger.debug(f"StreamAdapter: Payload is not an object: {payload[:100]}")
        return line

    chunk = _build_chunk(event)
    try:
        # ASCII output keeps lone surrogates from upstream escapes encodable
        serialized = json.dumps(chunk, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise StreamMappingError(f"marshal chat completion chunk: {exc}") from exc

    return format_data_line(serialized)


def _build_chunk(event: dict[str, Any]) -> ChatCompletionChunk:
    chunk: ChatCompletionChunk = {"object": CHAT_COMPLETION_CHUNK_OBJECT}

    event_id = optional_str(event.get("id"))
    if event_id is not None:
        chunk["id"] = event_id
    created = optional_int(event.get("created"))
    if created is not None:
        chunk["created"] = created
    model = optional_str(event.get("model"))
    if model is not None:
        chunk["model"] = model

    chunk["choices"] = [{
        "index": 0,
        "delta": _build_delta(event.get("output")),
        # Always explicit on a chunk: null when the event carries none
        "finish_reason": optional_str(event.get("finish_reason")),
    }]

    usage = convert_stream_usage(event.get("usage"))
    if usage is not None:
        chunk["usage"] = usage

    return chunk


def _build_delta(output: Any) -> Delta:
    """Build a delta from the event's output items.

    Later items overwrite earlier ones: the delta carries the last message text
    and the last function call, never a concatenation.
    """
    delta: Delta = {}
    for item in decode_items(output) or []:
        if isinstance(item, MessageItem):
            if item.role is not None:
                delta["role"] = item.role
            texts = item.texts()
            if texts:
                delta["content"] = texts[-1]
        elif isinstance(item, FunctionCallItem):
            tool_call: ToolCall = {"index": 0, "type": "function", "function": {}}
            if item.call_id is not None:
                tool_call["id"] = item.call_id
            if item.name is not None:
                tool_call["function"]["name"] = item.name
            if item.arguments is not None:
                tool_call["function"]["arguments"] = item.arguments
            delta["tool_calls"] = [tool_call]
    return delta


class ResponsesToChatStreamAdapter:
    """Converts a Responses API SSE byte stream to Chat Completions SSE.

    The only state kept is the trailing partial line of the last chunk, so
    that lines split across network reads are converted whole. Every line is
    then converted independently by :func:`convert_stream_line`.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self.lines_seen = 0

    async def adapt_stream(
        self,
        upstream: AsyncIterator[bytes],
    ) -> AsyncIterator[bytes]:
        """Transform an upstream Responses stream into chat completion lines.

        Args:
            upstream: The incoming Responses API SSE stream

        Yields:
            Converted lines, each terminated by a newline
        """
        async for chunk in upstream:
            for line in self._feed(chunk):
                yield self._convert(line)

        for line in self._flush():
            yield self._convert(line)

        logger.debug(f"StreamAdapter: Converted {self.lines_seen} lines")

    def _feed(self, chunk: bytes) -> Iterator[str]:
        self._buffer.extend(chunk)
        while True:
            newline = self._buffer.find(b"\n")
            if newline < 0:
                return
            raw = bytes(self._buffer[:newline])
            del self._buffer[:newline + 1]
            yield self._decode(raw)

    def _flush(self) -> Iterator[str]:
        if not self._buffer:
            return
        raw = bytes(self._buffer)
        self._buffer.clear()
        yield self._decode(raw)

    @staticmethod
    def _decode(raw: bytes) -> str:
        return raw.decode("utf-8", errors="replace").rstrip("\r")

    def _convert(self, line: str) -> bytes:
        self.lines_seen += 1
        stream_error = detect_sse_stream_error(line)
        if stream_error:
            logger.warning(f"StreamAdapter: Upstream reported {stream_error}")
        return f"{convert_stream_line(line)}\n".encode("utf-8")


async def adapt_responses_stream(
    upstream: AsyncIterator[bytes],
) -> AsyncIterator[bytes]:
    """Convenience function to adapt a Responses stream.

    Args:
        upstream: Input Responses API stream

    Yields:
        Chat Completions SSE lines
    """
    adapter = ResponsesToChatStreamAdapter()
    async for line in adapter.adapt_stream(upstream):
        yield line
