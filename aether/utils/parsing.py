"""Shared parsing helpers for generation-service replies."""

import re

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


def strip_fences(text: str) -> str:
    """Strip markdown code fences from LLM output if present."""
    match = _FENCE_RE.search(text)
    return match.group(1).strip() if match else text.strip()


def response_text(response) -> str:
    """Return the text of a chat model reply.

    ``content`` is either a plain string or a list of content parts
    (strings or ``{"type": "text", "text": ...}`` dicts); the text parts
    are concatenated. Anything else counts as no text.
    """
    content = getattr(response, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""
