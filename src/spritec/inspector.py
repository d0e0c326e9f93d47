"""Inspection of an emitted resource description.

Public functions:
- inspect_resource_file(path, image_dir=None) -> dict
- validate_resource_file(info) -> list[str]
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .io.codec import image_path
from .io.output import load_resource_file
from .model.resources import ResourceImageType

__all__ = ["inspect_resource_file", "validate_resource_file"]


def _walk_groups(groups: List[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
    for g in groups:
        yield g
        yield from _walk_groups(g.get("children", []))


def _type_name(value: Any) -> str:
    try:
        return ResourceImageType(value).name.lower()
    except ValueError:
        return f"unknown({value})"


def _image_refs(sprite: Dict[str, Any]) -> Iterator[str]:
    if "image" in sprite:
        yield sprite["image"]
    for frame in sprite.get("frames", []):
        yield frame["image"]


def inspect_resource_file(
    path: str | Path, image_dir: Optional[str | Path] = None
) -> Dict[str, Any]:
    data = load_resource_file(path)
    groups = list(_walk_groups(data.get("groups", [])))
    images = data.get("images", [])

    hash_counts = Counter(i.get("hash") for i in images)
    known = set(hash_counts)
    sprite_types: Counter[str] = Counter()
    unresolved: List[str] = []
    for g in groups:
        for s in g.get("sprites", []):
            sprite_types[_type_name(s.get("type"))] += 1
            for ref in _image_refs(s):
                if ref not in known:
                    unresolved.append(f"{g.get('name')}/{s.get('name')}:{ref}")

    missing: List[str] = []
    if image_dir is not None:
        base = Path(image_dir)
        missing = sorted(h for h in known if not image_path(base, h).exists())

    return {
        "file": str(path),
        "groups": len(groups),
        "sprites": dict(sorted(sprite_types.items())),
        "images": len(images),
        "hitmaps": sum(1 for i in images if i.get("hitmap")),
        "duplicate_hashes": sorted(h for h, n in hash_counts.items() if n > 1),
        "unresolved_images": unresolved,
        "missing_files": missing,
    }


def validate_resource_file(info: Dict[str, Any]) -> List[str]:
    problems: List[str] = []
    for h in info.get("duplicate_hashes", []):
        problems.append(f"Duplicate image hash {h}")
    for ref in info.get("unresolved_images", []):
        problems.append(f"Unresolved image reference {ref}")
    for h in info.get("missing_files", []):
        problems.append(f"Missing image file for {h}")
    for name in info.get("sprites", {}):
        if name.startswith("unknown("):
            problems.append(f"Unknown sprite type {name}")
    return problems
