"""High-level API for spritec.

``compile_documents`` is the pure conversion of already-decoded documents;
``compile_resources`` adds discovery, PSD decoding and output on top of it.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from .compiler.constants import HITMAP_COMPRESSION, WALKMAP_SCALE
from .compiler.registry import ImageCodec, ImageRegistry
from .compiler.walker import LayerTreeWalker
from .inspector import inspect_resource_file, validate_resource_file
from .io.codec import PngImageCodec
from .io.output import write_resource_file
from .io.psd import find_documents, load_document
from .logging import get_logger
from .manifest import build_manifest, sprite_counts
from .model.layers import Document
from .model.resources import ResourceFile, ResourceGroup
from .reporting import COMPILE_TASK, WRITE_TASK, get_reporter, task

__all__ = [
    "CompileOptions",
    "CompileResult",
    "compile_documents",
    "compile_resources",
    "inspect_resources",
]


@dataclass(slots=True)
class CompileOptions:
    inputs: List[Path]
    output_path: Path
    # Defaults to an "images" directory next to the output file
    image_dir: Path | None = None
    # Optional path; when provided a manifest JSON is written after the build
    manifest_path: Path | None = None
    hitmap_compression: int = HITMAP_COMPRESSION
    walkmap_scale: int = WALKMAP_SCALE
    # None writes compact JSON
    indent: int | None = None
    # Walk and hash everything but persist nothing
    dry_run: bool = False

    @property
    def resolved_image_dir(self) -> Path:
        if self.image_dir is not None:
            return self.image_dir
        return self.output_path.parent / "images"


@dataclass(slots=True)
class CompileResult:
    resources: ResourceFile
    documents: List[str] = field(default_factory=list)
    output_file: Path | None = None
    bytes_written: int = 0
    images_written: int = 0


def compile_documents(
    documents: Iterable[Document],
    registry: ImageRegistry,
    *,
    walkmap_scale: int = WALKMAP_SCALE,
    total: Optional[int] = None,
) -> ResourceFile:
    """Walk each document in order into one resource description.

    The registry is shared by all documents, so identical pixels in
    different documents resolve to one image.
    """
    rep = get_reporter()
    walker = LayerTreeWalker(registry, walkmap_scale=walkmap_scale)
    groups: List[ResourceGroup] = []
    with task(COMPILE_TASK, "Compile documents", total) as final:
        count = 0
        for document in documents:
            doc_groups = walker.walk_document(document)
            groups.extend(doc_groups)
            count += 1
            rep.advance(COMPILE_TASK, current_item=document.name)
            rep.verbose(
                f"Document summary: name={document.name} groups={len(doc_groups)}"
                f" images={len(registry)}"
            )
        final.update(documents=count, groups=len(groups), images=len(registry))
    return ResourceFile(groups=groups, images=registry.images)


def _load_all(paths: Sequence[Path]) -> Iterable[Document]:
    for p in paths:
        yield load_document(p)


def compile_resources(
    options: CompileOptions, codec: Optional[ImageCodec] = None
) -> CompileResult:
    logger = get_logger()
    rep = get_reporter()
    paths = find_documents(options.inputs)
    if not paths:
        raise FileNotFoundError(
            "No layered documents found in: "
            + ", ".join(str(p) for p in options.inputs)
        )
    if codec is None and not options.dry_run:
        codec = PngImageCodec(options.resolved_image_dir)
    registry = ImageRegistry(
        None if options.dry_run else codec,
        hitmap_compression=options.hitmap_compression,
    )
    try:
        resources = compile_documents(
            _load_all(paths),
            registry,
            walkmap_scale=options.walkmap_scale,
            total=len(paths),
        )
        result = CompileResult(
            resources=resources,
            documents=[p.stem for p in paths],
            images_written=0 if options.dry_run else len(registry),
        )
        counts = " ".join(
            f"{k}={v}" for k, v in sprite_counts(resources).items()
        )
        rep.status(
            f"Compile summary: documents={len(paths)}"
            f" groups={len(resources.groups)} images={len(resources.images)}"
            f" dedup_hits={registry.hits} {counts}".rstrip()
        )
        if options.dry_run:
            logger.info("Dry run: nothing written")
            return result

        with task(WRITE_TASK, "Write resource file") as final:
            result.bytes_written = write_resource_file(
                resources, options.output_path, indent=options.indent
            )
            result.output_file = options.output_path
            final.update(
                bytes=result.bytes_written, images=result.images_written
            )
    except Exception:
        # No partial bundles: drop the rasters this run created.
        if isinstance(codec, PngImageCodec):
            codec.discard()
        raise
    rep.status(
        f"Write summary: file={options.output_path.name}"
        f" bytes={result.bytes_written} images={result.images_written}"
    )
    if options.manifest_path is not None:
        file_sha256 = hashlib.sha256(options.output_path.read_bytes()).hexdigest()
        build_manifest(
            resources,
            options.manifest_path,
            documents=result.documents,
            resource_file=options.output_path.name,
            file_sha256=file_sha256,
            dedup_hits=registry.hits,
        )
        rep.status(
            f"Manifest summary: file={options.manifest_path.name}"
            f" sha256={file_sha256[:12]}"
        )
    return result


def inspect_resources(
    path: str | Path, image_dir: str | Path | None = None
) -> tuple[dict[str, Any], list[str]]:
    info = inspect_resource_file(path, image_dir)
    return info, validate_resource_file(info)
