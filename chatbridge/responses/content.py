"""Normalization of chat message content into Responses content parts."""

from typing import Any, Mapping, Optional

from ..types.responses import CONTENT_TEXT


def text_part(text: str) -> dict[str, Any]:
    """Build a single text content part."""
    return {"type": CONTENT_TEXT, "text": text}


def normalize_message_content(content: Any) -> Optional[list[Mapping[str, Any]]]:
    """Convert chat ``content`` into a list of content parts.

    - None stays None so the caller can omit the field.
    - A plain string becomes one text part.
    - A list is passed through element-wise, keeping only elements that are
      already key/value documents. Other elements are dropped silently.
    - Anything else is treated as absent.
    """
    if content is None:
        return None
    if isinstance(content, str):
        return [text_part(content)]
    if isinstance(content, list):
        return [part for part in content if isinstance(part, Mapping)]
    return None
