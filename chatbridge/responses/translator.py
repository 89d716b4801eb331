"""Translation between Chat Completions and the Responses API.

This module handles:
1. Converting Chat Completions requests to Responses API request documents
2. Converting Responses API response documents to Chat Completions responses
3. Tool definition and tool call translation

Both directions are pure: they read their input, build a fresh result and
never raise on malformed input. Fields of an unexpected type are treated as
absent.
"""

import logging
from typing import Any, Mapping, Optional

from ..types.chat import ChatCompletionResponse, ChatMessage, Choice, ToolCall
from ..types.responses import (
    FunctionCallItem,
    FunctionCallOutputItem,
    FunctionTool,
    MessageItem,
    ResponsesRequest,
    decode_items,
    optional_int,
    optional_str,
)
from .content import normalize_message_content, text_part
from .usage import convert_usage

logger = logging.getLogger("chatbridge")

CHAT_COMPLETION_OBJECT = "chat.completion"

# Generation parameters forwarded unchanged when set
PASSTHROUGH_PARAMS = (
    "temperature",
    "top_p",
    "presence_penalty",
    "frequency_penalty",
    "stop",
)


# =============================================================================
# Chat Completions → Responses API
# =============================================================================


def chat_completions_to_responses(request: Mapping[str, Any]) -> ResponsesRequest:
    """Convert a Chat Completions request to a Responses API request document.

    Args:
        request: The Chat Completions request body

    Returns:
        Responses API request document. Optional fields that were absent or
        None on the request are omitted rather than set to null.
    """
    result: ResponsesRequest = {}

    model = request.get("model")
    if model is not None:
        result["model"] = model

    for key in ("stream", "store"):
        if request.get(key) is not None:
            result[key] = request[key]

    messages = request.get("messages")
    input_items: list[dict[str, Any]] = []
    if isinstance(messages, list):
        for message in messages:
            if not isinstance(message, Mapping):
                logger.debug("Translator: Skipping non-object message")
                continue
            input_items.extend(_convert_message_to_items(message))

    if input_items:
        result["input"] = input_items

    # max_tokens wins over max_completion_tokens; the two are never merged
    if request.get("max_tokens") is not None:
        result["max_tokens"] = request["max_tokens"]
    elif request.get("max_completion_tokens") is not None:
        result["max_tokens"] = request["max_completion_tokens"]

    for key in PASSTHROUGH_PARAMS:
        if request.get(key) is not None:
            result[key] = request[key]

    tools = request.get("tools")
    if isinstance(tools, list) and tools:
        result["tools"] = _convert_tools(tools)

    if request.get("tool_choice") is not None:
        result["tool_choice"] = request["tool_choice"]

    return result


def _convert_message_to_items(message: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Convert one chat message into zero or more Responses input items."""
    role = message.get("role")
    content = message.get("content")

    if role == "system":
        # System content is only forwarded as a non-empty plain string
        parts = [text_part(content)] if isinstance(content, str) and content else None
        return [MessageItem(role="system", content=parts).to_dict()]

    if role == "user":
        return [MessageItem(
            role="user",
            content=normalize_message_content(content),
        ).to_dict()]

    if role == "assistant":
        tool_calls = message.get("tool_calls")
        if isinstance(tool_calls, list) and tool_calls:
            # Tool calls take priority; the message text is dropped
            return [
                _convert_tool_call_to_item(tool_call).to_dict()
                for tool_call in tool_calls
                if isinstance(tool_call, Mapping)
            ]
        return [MessageItem(
            role="assistant",
            content=normalize_message_content(content),
        ).to_dict()]

    if role == "tool":
        # TODO: forward structured tool output once the upstream accepts it
        return [FunctionCallOutputItem(
            call_id=optional_str(message.get("tool_call_id")) or "",
            output=optional_str(content),
        ).to_dict()]

    logger.debug(f"Translator: Dropping message with unsupported role: {role!r}")
    return []


def _convert_tool_call_to_item(tool_call: Mapping[str, Any]) -> FunctionCallItem:
    function = tool_call.get("function")
    if not isinstance(function, Mapping):
        function = {}
    return FunctionCallItem(
        call_id=optional_str(tool_call.get("id")) or "",
        name=optional_str(function.get("name")) or "",
        arguments=optional_str(function.get("arguments")) or "",
    )


def _convert_tools(tools: list[Any]) -> list[FunctionTool]:
    """Flatten Chat Completions tool definitions into Responses API tools."""
    converted: list[FunctionTool] = []
    for tool in tools:
        if not isinstance(tool, Mapping):
            continue
        function = tool.get("function")
        if not isinstance(function, Mapping):
            function = {}

        flat: FunctionTool = {
            "type": "function",
            "name": optional_str(function.get("name")) or "",
        }
        if function.get("description"):
            flat["description"] = function["description"]
        if function.get("parameters") is not None:
            flat["parameters"] = function["parameters"]
        if function.get("strict") is not None:
            flat["strict"] = function["strict"]
        converted.append(flat)
    return converted


# =============================================================================
# Responses API → Chat Completions
# =============================================================================


def response_to_chat_completion(document: Mapping[str, Any]) -> ChatCompletionResponse:
    """Convert a Responses API response document to a Chat Completions response.

    All ``message`` items in ``output`` are merged into one assistant message
    whose text parts are concatenated in order, and every ``function_call``
    item becomes one tool call. When ``output`` is missing there is nothing to
    assemble and ``choices`` is empty.

    Args:
        document: The Responses API response document

    Returns:
        Chat Completions response with at most one choice
    """
    response: ChatCompletionResponse = {
        "id": optional_str(document.get("id")) or "",
        "object": CHAT_COMPLETION_OBJECT,
        "created": optional_int(document.get("created")) or 0,
        "model": optional_str(document.get("model")) or "",
        "choices": [],
    }

    items = decode_items(document.get("output"))
    if items is not None:
        response["choices"].append(_build_choice(items, document))

    usage = convert_usage(document.get("usage"))
    if usage is not None:
        response["usage"] = usage

    return response


def _build_choice(items: list[Any], document: Mapping[str, Any]) -> Choice:
    text_parts: list[str] = []
    tool_calls: list[ToolCall] = []

    for item in items:
        if isinstance(item, MessageItem):
            text_parts.extend(item.texts())
        elif isinstance(item, FunctionCallItem):
            tool_calls.append({
                "id": item.call_id or "",
                "type": "function",
                "function": {
                    "name": item.name or "",
                    "arguments": item.arguments or "",
                },
            })
        else:
            logger.debug(f"Translator: Ignoring output item: {item!r}")

    message: ChatMessage = {"role": "assistant"}
    content = "".join(text_parts)
    if content:
        message["content"] = content
    if tool_calls:
        message["tool_calls"] = tool_calls

    return {
        "index": 0,
        "message": message,
        # finish_reason lives at the top level of the document, not per item
        "finish_reason": optional_str(document.get("finish_reason")),
    }
