from __future__ import annotations

from dataclasses import dataclass

import fastjsonschema  # type: ignore[import-untyped]
from fastjsonschema import JsonSchemaException


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


QUOTES_SCHEMA: dict[str, object] = {
    "type": "object",
    "required": ["quotes"],
    "additionalProperties": False,
    "properties": {
        "quotes": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "text"],
                "additionalProperties": False,
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "text": {"type": "string", "minLength": 1},
                    "author": {"type": "string"},
                },
            },
        }
    },
}

_validator = fastjsonschema.compile(QUOTES_SCHEMA)


def validate_payload(payload: dict[str, object]) -> list[ValidationIssue]:
    try:
        _validator(payload)
    except JsonSchemaException as exc:
        path = ".".join(str(part) for part in exc.path) if exc.path else ""
        return [ValidationIssue(path=path, message=exc.message)]
    return []
