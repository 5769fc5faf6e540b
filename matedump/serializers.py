from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Callable, Dict, Optional

from .models import NothingToSerialize

EXPORT_NAMES = {"json": "metadata.json", "csv": "metadata.csv"}


def _require(record: Optional[Mapping[str, object]]) -> Mapping[str, object]:
    if record is None:
        raise NothingToSerialize("Nothing to serialize: extract a blob first")
    if not isinstance(record, Mapping):
        raise TypeError(f"expected a metadata mapping, got {type(record).__name__}")
    return record


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_json(record: Optional[Mapping[str, object]]) -> str:
    data = _require(record)
    return json.dumps(dict(data.items()), indent=2, ensure_ascii=False)


def to_csv(record: Optional[Mapping[str, object]]) -> str:
    data = _require(record)
    lines = ["key,value"]
    for key, value in data.items():
        safe_value = _stringify(value).replace('"', '""')
        lines.append(f'"{key}","{safe_value}"')
    return "\n".join(lines)


SERIALIZERS: Dict[str, Callable[[Optional[Mapping[str, object]]], str]] = {
    "json": to_json,
    "csv": to_csv,
}


def serialize(record: Optional[Mapping[str, object]], fmt: str = "json") -> str:
    try:
        serializer = SERIALIZERS[fmt]
    except KeyError:
        raise ValueError(f"Unsupported output format: {fmt}") from None
    return serializer(record)
