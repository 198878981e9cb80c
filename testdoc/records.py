"""Loading of method records exported by an upstream source parser."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from .models import ClassRecord, MethodRecord


class RecordsError(RuntimeError):
    """Raised when a records document is malformed."""


def load_records(path: Path) -> List[ClassRecord]:
    """Read a JSON or YAML records document from disk."""
    if not path.exists():
        raise FileNotFoundError(f"Records file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise RecordsError(f"{path.name} is not valid UTF-8: {exc}") from exc
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise RecordsError(f"Failed to parse {path.name}: {exc}") from exc
    return parse_records(data)


def parse_records(data: Any) -> List[ClassRecord]:
    """Build class records from ``{"classes": [...]}`` or a bare list of classes."""
    if data is None:
        return []
    if isinstance(data, Mapping):
        data = data.get("classes", [])
    if not isinstance(data, list):
        raise RecordsError("Records document must contain a list of classes")
    return [_parse_class(item, index) for index, item in enumerate(data)]


def _parse_class(item: Any, index: int) -> ClassRecord:
    if not isinstance(item, Mapping):
        raise RecordsError(f"Class entry #{index} must be a mapping")
    class_name = item.get("class_name")
    if not isinstance(class_name, str) or not class_name:
        raise RecordsError(f"Class entry #{index} is missing 'class_name'")
    methods = item.get("methods") or []
    if not isinstance(methods, list):
        raise RecordsError(f"Class {class_name} has a non-list 'methods' entry")
    return ClassRecord(
        class_name=class_name,
        package_name=str(item.get("package_name") or ""),
        methods=tuple(_parse_method(method, class_name) for method in methods),
    )


def _parse_method(item: Any, class_name: str) -> MethodRecord:
    if not isinstance(item, Mapping):
        raise RecordsError(f"Method entries of {class_name} must be mappings")
    name = item.get("name")
    if not isinstance(name, str) or not name:
        raise RecordsError(f"A method of {class_name} is missing 'name'")
    body = item.get("body_text")
    tags = item.get("tags") or []
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, list):
        raise RecordsError(f"Tags of {class_name}.{name} must be a list")
    return MethodRecord(
        name=name,
        body_text=body if isinstance(body, str) else None,
        tags=tuple(str(tag) for tag in tags),
    )


def records_to_dict(classes: List[ClassRecord]) -> Dict[str, Any]:
    return {
        "classes": [
            {
                "class_name": record.class_name,
                "package_name": record.package_name,
                "methods": [
                    {"name": method.name, "body_text": method.body_text, "tags": list(method.tags)}
                    for method in record.methods
                ],
            }
            for record in classes
        ]
    }


__all__ = ["RecordsError", "load_records", "parse_records", "records_to_dict"]
