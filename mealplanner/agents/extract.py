"""Extract assistant text from a list-messages payload.

Service generations disagree on the shape, so everything here is tolerant:
  - the list lives under ``data``, under ``messages``, or is the payload
  - ``content`` is a string, or a list of blocks shaped as
      {"type": "text", "text": "..."}
      {"type": "output_text", "text": "..."}
      {"type": "text", "text": {"value": "..."}}
      {"text": {"value": "..."}}
Unrecognised messages and blocks are skipped.

Every assistant message contributes, in list order, so a reply split across
several messages is never dropped. Blocks are joined with a newline.
"""

from __future__ import annotations

from typing import Any

_TEXT_BLOCK_TYPES = frozenset({"text", "output_text"})


def messages_from_payload(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "messages"):
            value = payload.get(key)
            if isinstance(value, list):
                return value
    return []


def block_text(block: Any) -> str | None:
    """Text of one content block, or None if it carries none."""
    if not isinstance(block, dict):
        return None
    text = block.get("text")
    if isinstance(text, str):
        return text if block.get("type") in _TEXT_BLOCK_TYPES else None
    if isinstance(text, dict) and isinstance(text.get("value"), str):
        return text["value"]
    return None


def _is_assistant(message: Any) -> bool:
    return isinstance(message, dict) and str(message.get("role") or "").lower() == "assistant"


def message_texts(message: dict[str, Any]) -> list[str]:
    content = message.get("content")
    if isinstance(content, str):
        return [content]
    if isinstance(content, list):
        return [t for t in (block_text(b) for b in content) if t is not None]
    return []


def extract_assistant_text(payload: Any) -> str:
    """Flattened, trimmed assistant text; "" when there is none."""
    parts: list[str] = []
    for message in messages_from_payload(payload):
        if _is_assistant(message):
            parts.extend(message_texts(message))
    return "\n".join(parts).strip()
