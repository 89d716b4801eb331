"""Types for the Chat Completions side of the bridge.

These follow the OpenAI Chat Completions wire format. They are plain
``TypedDict`` shapes over the dicts exchanged as JSON, so requests decoded
from a client body and responses built by the translator can be passed
around without conversion.
"""

from typing import Any, Literal
from typing_extensions import TypedDict


Role = Literal["system", "user", "assistant", "tool"]
"""Roles accepted in a chat message."""


class FunctionCall(TypedDict, total=False):
    """The function half of a tool call.

    Attributes:
        name: Name of the function to call.
        arguments: JSON-encoded argument string. Kept as opaque text and
            never parsed by the bridge.
    """
    name: str
    arguments: str


class ToolCall(TypedDict, total=False):
    """A tool call requested by the assistant.

    Attributes:
        id: Identifier matched by the ``tool_call_id`` of the tool result and
            by ``call_id`` on the Responses side.
        type: Always "function".
        function: The function name and its arguments.
        index: Position within ``tool_calls``; only set on streamed deltas.
    """
    id: str
    type: str
    function: FunctionCall
    index: int


class ContentPart(TypedDict, total=False):
    """A structured content part. Only "text" parts are interpreted."""
    type: str
    text: str


class ChatMessage(TypedDict, total=False):
    """A message in a chat conversation.

    Attributes:
        role: One of system, user, assistant, tool.
        content: A plain string or a list of already structured parts.
        name: Optional speaker name.
        tool_calls: Tool calls requested by an assistant message.
        tool_call_id: Set on tool messages, naming the call they answer.
    """
    role: str
    content: str | list[ContentPart] | None
    name: str | None
    tool_calls: list[ToolCall] | None
    tool_call_id: str | None


class ToolFunction(TypedDict, total=False):
    """Function definition inside a chat tool."""
    name: str
    description: str
    parameters: dict[str, Any]
    strict: bool


class ChatTool(TypedDict, total=False):
    """A tool definition in the nested chat format."""
    type: str
    function: ToolFunction


class ChatCompletionRequest(TypedDict, total=False):
    """A Chat Completions request body.

    Only ``model`` and ``messages`` are expected on every request. The
    generation parameters are optional and absent keys mean "not set".
    """
    model: str
    messages: list[ChatMessage]
    max_tokens: int | None
    max_completion_tokens: int | None
    temperature: float | None
    top_p: float | None
    n: int | None
    stream: bool | None
    stop: str | list[str] | None
    presence_penalty: float | None
    frequency_penalty: float | None
    logit_bias: dict[str, float] | None
    user: str | None
    tools: list[ChatTool] | None
    tool_choice: str | dict[str, Any] | None
    store: bool | None


class Delta(TypedDict, total=False):
    """The incremental fields carried by one streamed chunk."""
    role: str
    content: str
    tool_calls: list[ToolCall]


class Choice(TypedDict, total=False):
    """A choice in a chat completion or chunk.

    Attributes:
        index: Always 0; the bridge never produces more than one choice.
        message: The assembled message (non-streaming).
        delta: The incremental update (streaming).
        finish_reason: Why generation stopped, or None.
        logprobs: Log probability information, never populated here.
    """
    index: int
    message: ChatMessage
    delta: Delta
    finish_reason: str | None
    logprobs: dict[str, Any] | None


class PromptTokensDetails(TypedDict, total=False):
    cached_tokens: int


class CompletionTokensDetails(TypedDict, total=False):
    reasoning_tokens: int


class Usage(TypedDict, total=False):
    """Token usage in Chat Completions form.

    ``total_tokens`` is always derived from the other two counts.
    """
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    prompt_tokens_details: PromptTokensDetails
    completion_tokens_details: CompletionTokensDetails


class ChatCompletionResponse(TypedDict, total=False):
    """A complete (non-streaming) chat completion response."""
    id: str
    object: str
    created: int
    model: str
    choices: list[Choice]
    usage: Usage


class ChatCompletionChunk(TypedDict, total=False):
    """A streamed chat completion chunk."""
    id: str
    object: str
    created: int
    model: str
    choices: list[Choice]
    usage: Usage
