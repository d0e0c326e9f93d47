"""Compiler configuration files (YAML or JSON).

Keys mirror the ``build`` command line; paths are resolved against the
directory holding the configuration file.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import json

import yaml

__all__ = ["CONFIG_KEYS", "load_config"]

PATH_KEYS = {"output", "images", "manifest"}
INT_KEYS = {"hitmap_compression", "walkmap_scale", "indent"}
CONFIG_KEYS = PATH_KEYS | INT_KEYS | {"inputs"}


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        data: Any = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("Root of configuration must be an object")
    return _parse_config_dict(data, p.parent)


def _parse_config_dict(data: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
    unknown = sorted(set(data) - CONFIG_KEYS)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
    out: Dict[str, Any] = {}
    for key in PATH_KEYS & set(data):
        if data[key] is not None:
            out[key] = base_dir / str(data[key])
    for key in INT_KEYS & set(data):
        value = data[key]
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'{key}' must be an integer")
        if value < (0 if key == "indent" else 1):
            raise ValueError(f"'{key}' out of range: {value}")
        out[key] = value
    if "inputs" in data:
        inputs = data["inputs"]
        if isinstance(inputs, str):
            inputs = [inputs]
        if not isinstance(inputs, list):
            raise ValueError("'inputs' must be a path or a list of paths")
        out["inputs"] = [base_dir / str(i) for i in inputs]
    return out
