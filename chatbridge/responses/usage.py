"""Usage statistics translation from Responses to Chat Completions."""

from typing import Any, Mapping, Optional

from ..types.chat import Usage
from ..types.responses import optional_int


def convert_usage(usage: Any) -> Optional[Usage]:
    """Convert a Responses usage block to Chat Completions format.

    Missing or non-numeric counts become 0. ``total_tokens`` is always the sum
    of prompt and completion tokens, whatever the upstream reported. The
    cached-token detail is only attached when the cache read count is
    strictly positive, and likewise for reasoning tokens.

    Args:
        usage: The upstream ``usage`` value, of any type

    Returns:
        Chat Completions usage, or None when ``usage`` is not an object
    """
    if not isinstance(usage, Mapping):
        return None

    prompt_tokens = optional_int(usage.get("input_tokens")) or 0
    completion_tokens = optional_int(usage.get("output_tokens")) or 0
    result: Usage = {
        "prompt_tokens": prompt_tokens,
        "completion_tokens": completion_tokens,
        "total_tokens": prompt_tokens + completion_tokens,
    }

    cached_tokens = optional_int(usage.get("cache_read_input_tokens"))
    if cached_tokens is not None and cached_tokens > 0:
        result["prompt_tokens_details"] = {"cached_tokens": cached_tokens}

    output_details = usage.get("output_tokens_details")
    if isinstance(output_details, Mapping):
        reasoning_tokens = optional_int(output_details.get("reasoning_tokens"))
        if reasoning_tokens is not None and reasoning_tokens > 0:
            result["completion_tokens_details"] = {
                "reasoning_tokens": reasoning_tokens,
            }

    return result


def convert_stream_usage(usage: Any) -> Optional[Usage]:
    """Convert a usage block carried on a stream event.

    Unlike :func:`convert_usage`, counts are only emitted when the upstream
    sent them, ``total_tokens`` only when both are known, and no token
    details are mapped.
    """
    if not isinstance(usage, Mapping):
        return None

    result: Usage = {}
    prompt_tokens = optional_int(usage.get("input_tokens"))
    if prompt_tokens is not None:
        result["prompt_tokens"] = prompt_tokens
    completion_tokens = optional_int(usage.get("output_tokens"))
    if completion_tokens is not None:
        result["completion_tokens"] = completion_tokens
    if prompt_tokens is not None and completion_tokens is not None:
        result["total_tokens"] = prompt_tokens + completion_tokens
    return result
