"""Builds the text payload returned by every tool.

Layout of a response::

    NOTES:            (only when there are warnings)
      - ...

    { ...data as indented JSON, nulls removed... }

    SUGGESTED NEXT ACTIONS:   (only when there are actions)
      - ...

    FIELD DESCRIPTIONS:
    { ...descriptions of the fields present in the data... }
"""

from __future__ import annotations

import json
from typing import Any

from pydantic_core import to_jsonable_python

ToolResponse = dict[str, list[dict[str, str]]]


def remove_null_fields(obj: Any) -> Any:
    """Recursively drop None values from dicts and lists."""
    if isinstance(obj, list):
        return [remove_null_fields(item) for item in obj if item is not None]
    if isinstance(obj, dict):
        return {key: remove_null_fields(value) for key, value in obj.items() if value is not None}
    return obj


def _collect_field_names(obj: Any, fields: set[str]) -> set[str]:
    if isinstance(obj, list):
        for item in obj:
            _collect_field_names(item, fields)
    elif isinstance(obj, dict):
        for key, value in obj.items():
            fields.add(key)
            _collect_field_names(value, fields)
    return fields


def filter_field_descriptions(descriptions: dict[str, str], data: Any) -> dict[str, str]:
    """Keep only descriptions for keys that appear somewhere in ``data``."""
    present = _collect_field_names(data, set())
    return {key: text for key, text in descriptions.items() if key in present}


def _text_response(text: str) -> ToolResponse:
    return {"content": [{"type": "text", "text": text}]}


def build_tool_response(
    data: Any,
    field_descriptions: dict[str, str],
    next_actions: list[str] | None = None,
    warnings: list[str] | None = None,
) -> ToolResponse:
    """Render a tool result as text for a language model.

    Args:
        data: Payload; pydantic models are serialized in JSON mode
        field_descriptions: Glossary, filtered to the fields present in the payload
        next_actions: Suggested follow-up tool calls
        warnings: Notes about missing or partial data

    Returns:
        Tool response with a single text content block
    """
    cleaned = remove_null_fields(to_jsonable_python(data))
    descriptions = filter_field_descriptions(field_descriptions, cleaned)

    parts: list[str] = []
    if warnings:
        parts.append("NOTES:")
        parts.extend(f"  - {warning}" for warning in warnings)
        parts.append("")

    parts.append(json.dumps(cleaned, indent=2, ensure_ascii=False))

    if next_actions:
        parts.append("")
        parts.append("SUGGESTED NEXT ACTIONS:")
        parts.extend(f"  - {action}" for action in next_actions)

    parts.append("")
    parts.append("FIELD DESCRIPTIONS:")
    parts.append(json.dumps(descriptions, indent=2, ensure_ascii=False))

    return _text_response("\n".join(parts))


def build_empty_response(resource_type: str, suggestion: str | None = None) -> ToolResponse:
    parts = [f"No {resource_type} found."]
    if suggestion:
        parts.extend(["", f"Suggestion: {suggestion}"])
    return _text_response("\n".join(parts))
