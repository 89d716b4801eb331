"""Types for the Responses API side of the bridge.

The Responses schema is not owned by this project and upstream documents may
carry fields we have never seen, so documents stay plain dicts. Items inside
``input`` / ``output`` are decoded into a small closed set of tagged variants:

- MessageItem: ``{"type": "message", "role", "content": [parts]}``
- FunctionCallItem: ``{"type": "function_call", "call_id", "name", "arguments"}``
- FunctionCallOutputItem: ``{"type": "function_call_output", "call_id", "output"}``

Anything else decodes to IgnoredItem. Decoding never raises: a field of the
wrong type is treated as absent and does not affect its siblings.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Sequence, Union
from typing_extensions import TypedDict


# =============================================================================
# Item Type Tags
# =============================================================================

ITEM_MESSAGE = "message"
ITEM_FUNCTION_CALL = "function_call"
ITEM_FUNCTION_CALL_OUTPUT = "function_call_output"

CONTENT_TEXT = "text"


# =============================================================================
# Document Shapes
# =============================================================================

class TextPart(TypedDict):
    """The only content part the bridge interprets."""
    type: Literal["text"]
    text: str


class FunctionTool(TypedDict, total=False):
    """A flattened function tool definition."""
    type: Literal["function"]
    name: str
    description: str
    parameters: dict[str, Any]
    strict: bool


class ResponsesUsage(TypedDict, total=False):
    """Token usage as reported by a Responses upstream.

    Only ``input_tokens``, ``output_tokens`` and ``cache_read_input_tokens``
    are read for the chat usage block; ``output_tokens_details`` supplies the
    reasoning count when present.
    """
    input_tokens: int
    output_tokens: int
    cache_read_input_tokens: int
    output_tokens_details: dict[str, int]


class ResponsesRequest(TypedDict, total=False):
    """Request document sent to a Responses upstream."""
    model: str
    stream: bool
    store: bool
    input: list[dict[str, Any]]
    max_tokens: int
    temperature: float
    top_p: float
    presence_penalty: float
    frequency_penalty: float
    stop: Any
    tools: list[FunctionTool]
    tool_choice: Any


# =============================================================================
# Field Decoding
# =============================================================================

def optional_str(value: Any) -> Optional[str]:
    """Return ``value`` if it is a string, else None."""
    return value if isinstance(value, str) else None


def optional_int(value: Any) -> Optional[int]:
    """Return ``value`` as an int if it is a finite number, else None.

    Floats are truncated toward zero. Booleans are not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    return None


# =============================================================================
# Item Variants
# =============================================================================

@dataclass(frozen=True)
class MessageItem:
    """A message item. ``content`` keeps only mapping-shaped parts."""

    role: Optional[str] = None
    content: Optional[Sequence[Mapping[str, Any]]] = None

    def texts(self) -> list[str]:
        """Return the text of every "text" part, in order."""
        if not self.content:
            return []
        texts: list[str] = []
        for part in self.content:
            if part.get("type") != CONTENT_TEXT:
                continue
            text = part.get("text")
            if isinstance(text, str):
                texts.append(text)
        return texts

    def to_dict(self) -> dict[str, Any]:
        item: dict[str, Any] = {"type": ITEM_MESSAGE}
        if self.role is not None:
            item["role"] = self.role
        if self.content is not None:
            item["content"] = [dict(part) for part in self.content]
        return item


@dataclass(frozen=True)
class FunctionCallItem:
    """A request from the model to invoke a function."""

    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        item: dict[str, Any] = {"type": ITEM_FUNCTION_CALL}
        if self.call_id is not None:
            item["call_id"] = self.call_id
        if self.name is not None:
            item["name"] = self.name
        if self.arguments is not None:
            item["arguments"] = self.arguments
        return item


@dataclass(frozen=True)
class FunctionCallOutputItem:
    """The result of a function call, correlated by ``call_id``."""

    call_id: Optional[str] = None
    output: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        item: dict[str, Any] = {"type": ITEM_FUNCTION_CALL_OUTPUT}
        if self.call_id is not None:
            item["call_id"] = self.call_id
        if self.output is not None:
            item["output"] = self.output
        return item


@dataclass(frozen=True)
class IgnoredItem:
    """An item the bridge does not translate (unknown type or not an object)."""

    item_type: Optional[str] = None
    raw: Any = field(default=None, compare=False, repr=False)


ResponseItem = Union[MessageItem, FunctionCallItem, FunctionCallOutputItem, IgnoredItem]


def _decode_parts(value: Any) -> Optional[tuple[Mapping[str, Any], ...]]:
    if not isinstance(value, list):
        return None
    return tuple(part for part in value if isinstance(part, Mapping))


def decode_item(raw: Any) -> ResponseItem:
    """Decode one ``input``/``output`` element into its tagged variant."""
    if not isinstance(raw, Mapping):
        return IgnoredItem(raw=raw)

    item_type = optional_str(raw.get("type"))
    if item_type == ITEM_MESSAGE:
        return MessageItem(
            role=optional_str(raw.get("role")),
            content=_decode_parts(raw.get("content")),
        )
    if item_type == ITEM_FUNCTION_CALL:
        return FunctionCallItem(
            call_id=optional_str(raw.get("call_id")),
            name=optional_str(raw.get("name")),
            arguments=optional_str(raw.get("arguments")),
        )
    if item_type == ITEM_FUNCTION_CALL_OUTPUT:
        return FunctionCallOutputItem(
            call_id=optional_str(raw.get("call_id")),
            output=optional_str(raw.get("output")),
        )
    return IgnoredItem(item_type=item_type, raw=raw)


def decode_items(value: Any) -> Optional[list[ResponseItem]]:
    """Decode an item list, or return None when ``value`` is not a list."""
    if not isinstance(value, list):
        return None
    return [decode_item(raw) for raw in value]
