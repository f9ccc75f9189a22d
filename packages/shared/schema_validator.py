"""
Validate serialized report documents against schemas/report-document.schema.json.

The schema pins the contract between the layout engine and any renderer: page
indexes start at 1, every draw command is either a text or a table command with
no extra keys, table rows carry string cells and an optional badge whose level
is one of the known badge levels, and total_pages is null only before footer
stamping.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

_SCHEMA_PATH = Path(__file__).resolve().parent.parent.parent / "schemas" / "report-document.schema.json"
_validator: jsonschema.Draft202012Validator | None = None


def _get_validator() -> jsonschema.Draft202012Validator:
    global _validator
    if _validator is None:
        with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
            schema = json.load(f)
        jsonschema.Draft202012Validator.check_schema(schema)
        _validator = jsonschema.Draft202012Validator(schema)
    return _validator


def validate_document(data: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate a Document dumped with model_dump(mode="json").
    Returns (is_valid, messages), each message prefixed with the failing JSON path.
    """
    errors = sorted(_get_validator().iter_errors(data), key=lambda e: list(e.absolute_path))
    messages = [f"{'→'.join(str(p) for p in e.absolute_path)}: {e.message}" for e in errors]
    return (len(messages) == 0, messages)
