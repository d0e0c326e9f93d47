"""Optional build manifest.

A small JSON summary written next to the resource description when asked
for: which documents went in, what came out, and the sha256 of the emitted
file so build systems can detect changes without parsing it.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Sequence
import json

from .model.resources import ResourceFile, ResourceImageType

__all__ = ["build_manifest", "manifest_dict", "sprite_counts"]


def sprite_counts(resources: ResourceFile) -> dict[str, int]:
    counter: Counter[str] = Counter(
        ResourceImageType(s.type).name.lower()
        for g in resources.groups
        for s in g.iter_sprites()
    )
    return dict(sorted(counter.items()))


def _count_groups(groups) -> int:
    return sum(1 + _count_groups(g.children) for g in groups)


def manifest_dict(
    resources: ResourceFile,
    *,
    documents: Sequence[str],
    resource_file: str | None = None,
    file_sha256: str | None = None,
    dedup_hits: int = 0,
) -> dict[str, Any]:
    return {
        "version": 1,
        "documents": list(documents),
        "resource_file": resource_file,
        "sha256": file_sha256,
        "counts": {
            "groups": _count_groups(resources.groups),
            "sprites": sprite_counts(resources),
            "images": len(resources.images),
            "hitmaps": sum(1 for i in resources.images if i.hitmap is not None),
            "dedup_hits": dedup_hits,
        },
    }


def build_manifest(
    resources: ResourceFile,
    output_path: Path,
    *,
    documents: Sequence[str],
    resource_file: str | None = None,
    file_sha256: str | None = None,
    dedup_hits: int = 0,
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    data = manifest_dict(
        resources,
        documents=documents,
        resource_file=resource_file,
        file_sha256=file_sha256,
        dedup_hits=dedup_hits,
    )
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, sort_keys=True)
        f.write("\n")
    return output_path
