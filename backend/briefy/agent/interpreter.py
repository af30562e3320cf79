import json
import logging
import re
from collections.abc import Callable
from typing import Any

from briefy.agent.errors import MalformedJsonError, NoJsonFoundError, UnsupportedContentTypeError

logger = logging.getLogger(__name__)

Extractor = Callable[[str], str | None]

_FENCED_OBJECT_RE = re.compile(r"```(?:json)?\s*(\{[\s\S]*?\})\s*```", re.IGNORECASE)
_GREEDY_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

JSON_CONTENT_TYPES = ("flowchart", "tasks")
OFFENDING_TEXT_PREVIEW = 300


def fenced_object(text: str) -> str | None:
    """JSON object inside the first markdown code fence."""
    match = _FENCED_OBJECT_RE.search(text)
    return match.group(1) if match else None


def brace_span(text: str) -> str | None:
    """Everything from the first '{' to the last '}'."""
    match = _GREEDY_OBJECT_RE.search(text)
    return match.group(0) if match else None


def first_of(*extractors: Extractor) -> Extractor:
    """Combine extractors; the first one that finds something wins."""

    def extract(text: str) -> str | None:
        for extractor in extractors:
            found = extractor(text)
            if found is not None:
                return found
        return None

    return extract


extract_json_text = first_of(fenced_object, brace_span)


def parse_json_payload(content_type: str, raw_text: str) -> Any:
    json_text = extract_json_text(raw_text or "")
    if json_text is None:
        logger.error("No JSON found in %s response. Full response: %s", content_type, raw_text)
        raise NoJsonFoundError("Resposta da IA não contém JSON válido", raw_text=raw_text)

    json_text = json_text.strip()
    try:
        payload = json.loads(json_text, strict=False)
    except json.JSONDecodeError as e:
        logger.error("Invalid %s JSON: %s. Text that failed: %s", content_type, e, json_text)
        preview = json_text[:OFFENDING_TEXT_PREVIEW]
        if len(json_text) > OFFENDING_TEXT_PREVIEW:
            preview += "..."
        raise MalformedJsonError(
            f"JSON {content_type} inválido: {e.msg} (linha {e.lineno}, coluna {e.colno}) em: {preview}",
            raw_text=raw_text,
        ) from e

    logger.info("Parsed %s JSON successfully", content_type)
    return payload


def interpret(content_type: str, raw_text: str) -> str | Any:
    """Turn raw model output into content: text for 'pr', parsed JSON otherwise."""
    if content_type == "pr":
        return (raw_text or "").strip()
    if content_type in JSON_CONTENT_TYPES:
        return parse_json_payload(content_type, raw_text)
    raise UnsupportedContentTypeError(f"Tipo de conteúdo não suportado: {content_type}", raw_text=raw_text)
