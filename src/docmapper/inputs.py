"""Load dependency records from a pre-extracted dependency-scan JSON file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from collections.abc import Iterable

from jsonschema import Draft202012Validator

from .models import DependencyRecord

DEPENDENCY_SCAN_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["dependencies"],
    "properties": {
        "dependencies": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["ecosystem", "dependency"],
                "properties": {
                    "ecosystem": {"type": "string", "minLength": 1},
                    "dependency": {
                        "type": "object",
                        "required": ["name"],
                        "properties": {
                            "name": {"type": "string", "minLength": 1},
                            "version": {"type": ["string", "null"]},
                            "source": {"type": ["string", "null"]},
                        },
                    },
                    "manifest_path": {"type": ["string", "null"]},
                    "metadata": {
                        "type": "object",
                        "properties": {"dev_dependency": {"type": "boolean"}},
                    },
                },
            },
        },
    },
}


class InputFormatError(ValueError):
    """Raised when a dependency-scan file is unreadable or malformed."""


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def parse_dependency_scan(document: Any) -> list[DependencyRecord]:
    """Validate a decoded dependency-scan document and convert its entries."""
    if not isinstance(document, dict) or not isinstance(document.get("dependencies"), list):
        raise InputFormatError("Invalid JSON format: missing dependencies array")

    validator = Draft202012Validator(DEPENDENCY_SCAN_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: list(e.path))
    if errors:
        raise InputFormatError("Invalid JSON format:\n" + _format_errors(errors))

    return [DependencyRecord.from_descriptor(item) for item in document["dependencies"]]


def load_dependencies_from_json(path: Path) -> list[DependencyRecord]:
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise InputFormatError(f"Failed to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InputFormatError(f"Invalid JSON in {path}: {exc}") from exc
    return parse_dependency_scan(document)
