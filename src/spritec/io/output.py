"""Resource description JSON read/write."""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import json

from ..model.resources import ResourceFile

__all__ = ["write_resource_file", "load_resource_file"]


def write_resource_file(
    resources: ResourceFile, output_path: Path, indent: int | None = None
) -> int:
    """Write the description atomically; returns bytes written."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    separators = (",", ":") if indent is None else (",", ": ")
    text = json.dumps(resources.to_dict(), indent=indent, separators=separators)
    tmp_path = output_path.with_suffix(output_path.suffix + ".tmp")
    tmp_path.write_text(text, encoding="utf-8")
    tmp_path.replace(output_path)
    return len(text.encode("utf-8"))


def load_resource_file(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Root of resource file must be an object")
    return data
