"""Tests for the Chat Completions <-> Responses translator."""

from chatbridge.responses.translator import (
    chat_completions_to_responses,
    response_to_chat_completion,
)


# =============================================================================
# chat_completions_to_responses() tests
# =============================================================================


class TestChatCompletionsToResponses:
    """Tests for translating chat requests to Responses request documents."""

    def test_simple_user_message(self):
        """Test the minimal request maps to a single message item."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{"role": "user", "content": "hi"}],
        })

        assert result == {
            "model": "m",
            "input": [{
                "type": "message",
                "role": "user",
                "content": [{"type": "text", "text": "hi"}],
            }],
        }

    def test_stream_and_store_copied_when_present(self):
        """Test stream/store are copied, including False values."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [],
            "stream": True,
            "store": False,
        })

        assert result["stream"] is True
        assert result["store"] is False

    def test_absent_optional_fields_are_omitted(self):
        """Test absent or null optional fields never appear as null."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [],
            "stream": None,
            "temperature": None,
        })

        assert result == {"model": "m"}

    def test_empty_input_is_omitted(self):
        """Test the input key is dropped when no item was produced."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{"role": "developer", "content": "ignored"}],
        })

        assert "input" not in result

    def test_system_message_with_text(self):
        """Test non-empty system text becomes a text part."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{"role": "system", "content": "Be brief."}],
        })

        assert result["input"] == [{
            "type": "message",
            "role": "system",
            "content": [{"type": "text", "text": "Be brief."}],
        }]

    def test_system_message_without_usable_content(self):
        """Test empty or structured system content leaves no content field."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [
                {"role": "system", "content": ""},
                {"role": "system", "content": [{"type": "text", "text": "x"}]},
            ],
        })

        assert result["input"] == [
            {"type": "message", "role": "system"},
            {"type": "message", "role": "system"},
        ]

    def test_user_structured_content_filters_malformed_parts(self):
        """Test list content keeps only object parts, in order."""
        image = {"type": "image_url", "image_url": {"url": "https://x/y.png"}}
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{
                "role": "user",
                "content": [{"type": "text", "text": "look"}, "junk", 3, image],
            }],
        })

        assert result["input"][0]["content"] == [
            {"type": "text", "text": "look"},
            image,
        ]

    def test_user_message_without_content(self):
        """Test a user message with null content has no content field."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{"role": "user", "content": None}],
        })

        assert result["input"] == [{"type": "message", "role": "user"}]

    def test_assistant_text_message(self):
        """Test an assistant message without tool calls."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{"role": "assistant", "content": "Sure."}],
        })

        assert result["input"] == [{
            "type": "message",
            "role": "assistant",
            "content": [{"type": "text", "text": "Sure."}],
        }]

    def test_assistant_tool_calls_become_function_call_items(self):
        """Test each tool call becomes one item and the content is dropped."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{
                "role": "assistant",
                "content": "Let me check.",
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "lookup", "arguments": "{\"q\":\"a\"}"},
                    },
                    {
                        "id": "call_2",
                        "type": "function",
                        "function": {"name": "fetch", "arguments": "{}"},
                    },
                ],
            }],
        })

        assert result["input"] == [
            {
                "type": "function_call",
                "call_id": "call_1",
                "name": "lookup",
                "arguments": "{\"q\":\"a\"}",
            },
            {
                "type": "function_call",
                "call_id": "call_2",
                "name": "fetch",
                "arguments": "{}",
            },
        ]
        assert all("content" not in item for item in result["input"])

    def test_arguments_are_forwarded_as_opaque_text(self):
        """Test invalid JSON arguments are not parsed or rejected."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{
                "role": "assistant",
                "tool_calls": [{
                    "id": "call_1",
                    "type": "function",
                    "function": {"name": "f", "arguments": "{not json"},
                }],
            }],
        })

        assert result["input"][0]["arguments"] == "{not json"

    def test_tool_message_becomes_function_call_output(self):
        """Test tool results correlate through call_id."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{"role": "tool", "tool_call_id": "call_1", "content": "42"}],
        })

        assert result["input"] == [{
            "type": "function_call_output",
            "call_id": "call_1",
            "output": "42",
        }]

    def test_tool_message_structured_content_is_dropped(self):
        """Test non-string tool content yields no output field."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [{
                "role": "tool",
                "tool_call_id": "call_1",
                "content": [{"type": "text", "text": "42"}],
            }],
        })

        assert result["input"] == [{"type": "function_call_output", "call_id": "call_1"}]

    def test_message_order_is_preserved(self):
        """Test a full tool round trip keeps the message order."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [
                {"role": "system", "content": "sys"},
                {"role": "user", "content": "q"},
                {
                    "role": "assistant",
                    "tool_calls": [{
                        "id": "c1",
                        "type": "function",
                        "function": {"name": "f", "arguments": "{}"},
                    }],
                },
                {"role": "tool", "tool_call_id": "c1", "content": "r"},
                {"role": "assistant", "content": "a"},
            ],
        })

        assert [item["type"] for item in result["input"]] == [
            "message",
            "message",
            "function_call",
            "function_call_output",
            "message",
        ]
        assert [item.get("role") for item in result["input"]] == [
            "system", "user", None, None, "assistant",
        ]

    def test_max_tokens_preferred_over_max_completion_tokens(self):
        """Test max_tokens wins when both limits are set."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [],
            "max_tokens": 100,
            "max_completion_tokens": 200,
        })

        assert result["max_tokens"] == 100
        assert "max_completion_tokens" not in result

    def test_max_completion_tokens_used_as_fallback(self):
        """Test max_completion_tokens is used when max_tokens is absent."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [],
            "max_completion_tokens": 200,
        })

        assert result["max_tokens"] == 200

    def test_generation_parameters_pass_through(self):
        """Test sampling parameters, stop and tool_choice are copied unchanged."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [],
            "temperature": 0.2,
            "top_p": 0.9,
            "presence_penalty": 0.5,
            "frequency_penalty": -0.5,
            "stop": ["END"],
            "tool_choice": {"type": "function", "function": {"name": "f"}},
        })

        assert result["temperature"] == 0.2
        assert result["top_p"] == 0.9
        assert result["presence_penalty"] == 0.5
        assert result["frequency_penalty"] == -0.5
        assert result["stop"] == ["END"]
        assert result["tool_choice"] == {"type": "function", "function": {"name": "f"}}

    def test_unsupported_parameters_are_not_forwarded(self):
        """Test logit_bias, n and user stay on the chat side."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [],
            "logit_bias": {"50256": -100},
            "n": 1,
            "user": "u-1",
        })

        assert result == {"model": "m"}

    def test_tools_are_flattened(self):
        """Test nested chat tools become flat Responses tools."""
        params = {"type": "object", "properties": {"q": {"type": "string"}}}
        result = chat_completions_to_responses({
            "model": "m",
            "messages": [],
            "tools": [
                {
                    "type": "function",
                    "function": {
                        "name": "lookup",
                        "description": "Look something up",
                        "parameters": params,
                        "strict": False,
                    },
                },
                {"type": "function", "function": {"name": "bare", "description": ""}},
            ],
        })

        assert result["tools"] == [
            {
                "type": "function",
                "name": "lookup",
                "description": "Look something up",
                "parameters": params,
                "strict": False,
            },
            {"type": "function", "name": "bare"},
        ]

    def test_empty_tools_list_is_omitted(self):
        """Test an empty tools list produces no tools key."""
        result = chat_completions_to_responses({"model": "m", "messages": [], "tools": []})

        assert "tools" not in result

    def test_malformed_messages_are_skipped(self):
        """Test non-object messages do not break the mapping."""
        result = chat_completions_to_responses({
            "model": "m",
            "messages": ["hello", None, {"role": "user", "content": "ok"}],
        })

        assert len(result["input"]) == 1
        assert result["input"][0]["role"] == "user"


# =============================================================================
# response_to_chat_completion() tests
# =============================================================================


class TestResponseToChatCompletion:
    """Tests for translating Responses documents to chat completions."""

    def test_single_text_message(self):
        """Test a single message item yields the assistant content."""
        result = response_to_chat_completion({
            "output": [{"type": "message", "content": [{"type": "text", "text": "hello"}]}],
        })

        assert len(result["choices"]) == 1
        choice = result["choices"][0]
        assert choice["index"] == 0
        assert choice["message"]["role"] == "assistant"
        assert choice["message"]["content"] == "hello"
        assert "tool_calls" not in choice["message"]

    def test_identity_fields_and_object_tag(self):
        """Test id/created/model are copied and object is fixed."""
        result = response_to_chat_completion({
            "id": "resp_1",
            "created": 1700000000.9,
            "model": "gpt-x",
            "object": "response",
            "output": [],
        })

        assert result["id"] == "resp_1"
        assert result["created"] == 1700000000
        assert result["model"] == "gpt-x"
        assert result["object"] == "chat.completion"

    def test_wrongly_typed_fields_are_treated_as_absent(self):
        """Test bad field types fall back to defaults without failing."""
        result = response_to_chat_completion({
            "id": 12,
            "created": "yesterday",
            "model": ["m"],
            "finish_reason": 7,
            "output": [],
        })

        assert result["id"] == ""
        assert result["created"] == 0
        assert result["model"] == ""
        assert result["choices"][0]["finish_reason"] is None

    def test_message_items_are_concatenated(self):
        """Test text from several message items merges without separator."""
        result = response_to_chat_completion({
            "output": [
                {"type": "message", "content": [{"type": "text", "text": "ab"}]},
                {"type": "message", "content": [
                    {"type": "text", "text": "cd"},
                    {"type": "refusal", "refusal": "no"},
                    {"type": "text", "text": "ef"},
                ]},
            ],
        })

        assert result["choices"][0]["message"]["content"] == "abcdef"

    def test_function_calls_become_tool_calls(self):
        """Test function_call items map to tool calls in order."""
        result = response_to_chat_completion({
            "output": [
                {"type": "function_call", "call_id": "c1", "name": "f", "arguments": "{}"},
                {"type": "function_call", "call_id": "c2", "name": "g", "arguments": "{\"x\":1}"},
            ],
            "finish_reason": "tool_calls",
        })

        message = result["choices"][0]["message"]
        assert "content" not in message
        assert message["tool_calls"] == [
            {"id": "c1", "type": "function", "function": {"name": "f", "arguments": "{}"}},
            {"id": "c2", "type": "function", "function": {"name": "g", "arguments": "{\"x\":1}"}},
        ]
        assert result["choices"][0]["finish_reason"] == "tool_calls"

    def test_text_and_tool_calls_together(self):
        """Test mixed output keeps both content and tool calls."""
        result = response_to_chat_completion({
            "output": [
                {"type": "message", "content": [{"type": "text", "text": "Checking"}]},
                {"type": "function_call", "call_id": "c1", "name": "f", "arguments": "{}"},
            ],
        })

        message = result["choices"][0]["message"]
        assert message["content"] == "Checking"
        assert len(message["tool_calls"]) == 1

    def test_empty_text_leaves_content_unset(self):
        """Test content is omitted when the concatenated text is empty."""
        result = response_to_chat_completion({
            "output": [{"type": "message", "content": [{"type": "text", "text": ""}]}],
        })

        assert result["choices"][0]["message"] == {"role": "assistant"}

    def test_unknown_and_malformed_items_are_ignored(self):
        """Test unknown item types and non-objects are skipped."""
        result = response_to_chat_completion({
            "output": [
                {"type": "reasoning", "summary": []},
                "garbage",
                {"type": "message", "content": "not a list"},
                {"type": "message", "content": [{"type": "text", "text": "ok"}]},
            ],
        })

        assert result["choices"][0]["message"]["content"] == "ok"

    def test_missing_output_yields_no_choices(self):
        """Test a document without output has an empty choice list."""
        result = response_to_chat_completion({"id": "resp_1"})

        assert result["choices"] == []

    def test_finish_reason_defaults_to_none(self):
        """Test finish_reason is present but null when not reported."""
        result = response_to_chat_completion({"output": []})

        assert "finish_reason" in result["choices"][0]
        assert result["choices"][0]["finish_reason"] is None

    def test_usage_is_remapped(self):
        """Test usage fields are renamed and total is derived."""
        result = response_to_chat_completion({
            "output": [],
            "usage": {"input_tokens": 10, "output_tokens": 5, "total_tokens": 999},
        })

        assert result["usage"] == {
            "prompt_tokens": 10,
            "completion_tokens": 5,
            "total_tokens": 15,
        }

    def test_usage_with_cache_reads(self):
        """Test cached token detail appears for positive cache reads."""
        result = response_to_chat_completion({
            "usage": {"input_tokens": 10, "output_tokens": 5, "cache_read_input_tokens": 4},
        })

        assert result["usage"]["prompt_tokens_details"] == {"cached_tokens": 4}

    def test_usage_absent(self):
        """Test no usage key when the document has none."""
        result = response_to_chat_completion({"output": []})

        assert "usage" not in result


# =============================================================================
# Round trip
# =============================================================================


def test_plain_text_round_trip_preserves_content():
    """Test request items echoed as output come back as the same text."""
    request = chat_completions_to_responses({
        "model": "m",
        "messages": [{"role": "assistant", "content": "The answer is 42."}],
    })

    result = response_to_chat_completion({"output": request["input"]})

    assert result["choices"][0]["message"]["content"] == "The answer is 42."
