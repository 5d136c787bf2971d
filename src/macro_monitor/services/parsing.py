"""Food text extraction using LLMs."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Protocol

import openai
from pydantic import ValidationError

from macro_monitor.domain.errors import UpstreamError
from macro_monitor.domain.parsing import ParsedItem

_logger = logging.getLogger(__name__)

PARSE_INSTRUCTIONS = (
    "You are a nutrition logging parser. "
    "Split the user's text into individual foods. For each food return a "
    "short USDA-style search query, a display name, the quantity, the unit "
    "(for example g, oz, cup, tbsp, egg, slice or serving), explicit grams "
    "only when the user stated a mass, and notes describing any uncertainty. "
    "If ambiguous, make a best guess."
)

PARSE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "query": {"type": "string"},
                    "display": {"type": "string"},
                    "quantity": {"anyOf": [{"type": "number"}, {"type": "null"}]},
                    "unit": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                    "grams": {"anyOf": [{"type": "number"}, {"type": "null"}]},
                    "notes": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                },
                "required": ["query", "display", "quantity", "unit", "grams", "notes"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"```\s*$")


class TextClient(Protocol):
    """Interface for LLM text extraction."""

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        instructions: str,
        text: str,
        schema: dict[str, object],
    ) -> str:
        """Return the model's raw output text."""


@dataclass
class ParseService:
    """Turns free text into sanitized parsed items."""

    client: TextClient
    model: str
    store: bool = False

    async def parse(self, text: str) -> list[ParsedItem]:
        """Extract food items from user text via the configured client."""
        try:
            output = await self.client.extract(
                model=self.model,
                store=self.store,
                instructions=PARSE_INSTRUCTIONS,
                text=text,
                schema=PARSE_SCHEMA,
            )
        except openai.OpenAIError as exc:
            _logger.warning("Text extraction failed: %s", exc)
            raise UpstreamError(f"Text extraction failed: {exc}") from exc
        if not output.strip():
            raise UpstreamError("Text extraction returned an empty response")

        try:
            payload = parse_json_payload(output)
        except ValueError as exc:
            _logger.warning("Failed to parse extraction output: %.800s", output)
            raise UpstreamError(f"Failed to parse extraction JSON: {exc}") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
            raise UpstreamError("Extraction JSON missing required 'items' array")
        return sanitize_items(payload["items"])


def sanitize_items(raw_items: list[object]) -> list[ParsedItem]:
    """Normalize loosely shaped model items, dropping unusable entries."""
    items: list[ParsedItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        query = str(raw.get("query") or raw.get("display") or "").strip()
        display = str(raw.get("display") or raw.get("query") or "").strip()
        if not query:
            continue
        quantity = raw.get("quantity")
        try:
            items.append(
                ParsedItem(
                    name=display,
                    query=query,
                    quantity=1 if quantity is None else quantity,
                    unit=raw.get("unit") or "serving",
                    explicit_grams=raw.get("grams"),
                    notes=raw.get("notes"),
                )
            )
        except ValidationError:
            _logger.info("Dropping unusable parsed item: %s", raw)
    return items


def parse_json_payload(text: str) -> object:
    """Parse JSON from model output, tolerating fences and surrounding prose."""
    cleaned = _FENCE_END.sub("", _FENCE_START.sub("", text.strip())).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    starts = [index for index in (cleaned.find("{"), cleaned.find("[")) if index >= 0]
    if not starts:
        raise ValueError("No JSON object/array found in model output")
    start = min(starts)
    opener = cleaned[start]
    closer = "}" if opener == "{" else "]"

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(cleaned)):
        char = cleaned[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return json.loads(cleaned[start : index + 1])
    raise ValueError("Unbalanced JSON in model output")
