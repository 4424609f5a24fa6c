"""Generation Client: turns a natural-language request into a markup/style/logic triple.

Response contract:
{
  "markup": "string (required)",
  "style": "string (required)",
  "logic": "string (required)",
  "explanation": "string (optional, informational)"
}

A reply that does not satisfy the contract is rejected as a whole; there is
no partial fallback and no automatic retry.
"""

import json
import sys

from langchain_anthropic import ChatAnthropic
from langchain_google_genai import ChatGoogleGenerativeAI

from aether.config import get_config
from aether.errors import EmptyResponse, GenerationFailed, MalformedResponse
from aether.state import FIELDS, GenerationResponse
from aether.utils.parsing import response_text, strip_fences

SYSTEM_PROMPT = """\
You are an expert Frontend Developer.
Your task is to generate or modify HTML, CSS, and JavaScript based on the user's request.
Return the result as a single JSON object with the string fields 'markup' (HTML), \
'style' (CSS) and 'logic' (JavaScript), plus an optional 'explanation' string.
- markup is the HTML body content only. Do not include html, head or body tags.
- style is raw CSS. Tailwind and other frameworks are NOT available in the preview.
- logic is plain JavaScript that runs after the markup has been parsed.
Ensure the CSS makes the result look modern and beautiful.
If the user provides current code context, modify it. If not, create from scratch.
Respond ONLY with the JSON object. No markdown fences, no commentary.
"""

RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "markup": {
            "type": "string",
            "description": "The HTML body content (do not include html/head/body tags)",
        },
        "style": {"type": "string", "description": "The CSS styles"},
        "logic": {"type": "string", "description": "The JavaScript logic"},
        "explanation": {"type": "string", "description": "Brief explanation of changes"},
    },
    "required": list(FIELDS),
}

PROVIDERS = {"google", "anthropic"}


def _build_user_prompt(instruction: str, context: str | None = None) -> str:
    """Construct the user prompt from the instruction and optional current-state context."""
    parts = [f"## Request\n{instruction}"]
    if context:
        parts.append(f"\n## Current Context\n```json\n{context}\n```")
    return "\n".join(parts)


def _validate_response(data) -> GenerationResponse:
    """Validate the parsed reply and return it as a GenerationResponse."""
    if not isinstance(data, dict):
        raise MalformedResponse(
            f"Generation response must be a JSON object, got {type(data).__name__}."
        )

    missing = [name for name in FIELDS if name not in data]
    if missing:
        raise MalformedResponse(f"Generation response missing required fields: {missing}")

    for name in FIELDS:
        if not isinstance(data[name], str):
            raise MalformedResponse(
                f"Field '{name}' must be a string, got {type(data[name]).__name__}."
            )

    result: GenerationResponse = {name: data[name] for name in FIELDS}

    explanation = data.get("explanation")
    if explanation is not None:
        if not isinstance(explanation, str):
            raise MalformedResponse(
                f"Field 'explanation' must be a string, got {type(explanation).__name__}."
            )
        result["explanation"] = explanation

    return result


def parse_response(text: str) -> GenerationResponse:
    """Parse raw reply text into a GenerationResponse.

    Raises EmptyResponse when there is no text and MalformedResponse when
    the text is not a JSON object of the required shape.
    """
    if not text or not text.strip():
        raise EmptyResponse("No response text from the generation service.")

    content = strip_fences(text)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise MalformedResponse(f"Generation response is not valid JSON: {exc}") from exc

    return _validate_response(data)


def _build_llm(config: dict):
    """Instantiate the configured chat model."""
    provider = config.get("generation_provider", "google")
    model_name = config["generation_model"]
    temperature = config.get("generation_temperature", 0.7)

    if provider == "google":
        return ChatGoogleGenerativeAI(
            model=model_name,
            temperature=temperature,
            response_mime_type="application/json",
            response_schema=RESPONSE_SCHEMA,
        )
    if provider == "anthropic":
        return ChatAnthropic(model=model_name, temperature=temperature)

    raise ValueError(
        f"Unknown generation_provider '{provider}'. Must be one of: {PROVIDERS}"
    )


class GenerationClient:
    """Sends one request to the generation service and enforces the response contract.

    The client never touches source state; it only returns a proposed
    replacement or raises a GenerationError.
    """

    def __init__(self, config: dict | None = None):
        self._config = config

    async def generate(self, instruction: str, context: str | None = None) -> GenerationResponse:
        config = self._config if self._config is not None else get_config()

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": _build_user_prompt(instruction, context)},
        ]

        try:
            llm = _build_llm(config)
            response = await llm.ainvoke(messages)
        except Exception as exc:
            print(f"[Aether] Generation service error: {exc!r}", file=sys.stderr)
            raise GenerationFailed(exc) from exc

        return parse_response(response_text(response))
