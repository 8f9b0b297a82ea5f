"""JSON exporter for earthquake records and risk assessments."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any


def to_jsonable(data: Any) -> Any:
    """Convert a dataclass instance, or a list of them, to plain JSON types."""
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    if is_dataclass(data) and not isinstance(data, type):
        return asdict(data)
    return data


def export_json(
    data: Any,
    output_path: Path,
    indent: int = 2,
) -> Path:
    """Export records or an assessment to a JSON file."""
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(to_jsonable(data), f, indent=indent, ensure_ascii=False)
    return output_path
