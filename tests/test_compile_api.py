"""End-to-end compile through the API with in-memory documents.

PSD decoding is replaced by monkeypatching ``spritec.api.load_document`` so
the tests exercise discovery, registry, PNG persistence and JSON output.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from PIL import Image

from layer_helper import group, raster, solid
from spritec import api
from spritec.api import CompileOptions, compile_documents, compile_resources
from spritec.compiler.registry import ImageRegistry
from spritec.errors import UnrecognizedTagError
from spritec.io.codec import PngImageCodec
from spritec.model.layers import Document
from spritec.reporting import SilentReporter, set_reporter


@pytest.fixture(autouse=True)
def _quiet():
    set_reporter(SilentReporter())


DOCS = {
    "village": Document(
        "village",
        (group("houses", raster("inn", 4, 4, 10, 10, color=(10, 20, 30))),),
    ),
    "forest": Document(
        "forest",
        (
            group(
                "trees",
                raster("oak", 4, 4, 0, 0, color=(10, 20, 30)),
                raster("pine", 2, 2, 0, 0, color=(0, 90, 0)),
            ),
        ),
    ),
}


def _inputs(tmp_path: Path, monkeypatch, docs=DOCS) -> Path:
    src = tmp_path / "psd"
    src.mkdir()
    for name in docs:
        (src / f"{name}.psd").write_bytes(b"")
    (src / "notes.txt").write_text("ignored")
    monkeypatch.setattr(api, "load_document", lambda p: docs[Path(p).stem])
    return src


def test_cross_document_dedup(tmp_path: Path):
    images = tmp_path / "images"
    reg = ImageRegistry(PngImageCodec(images))
    resources = compile_documents(
        [DOCS["village"], DOCS["forest"]], reg, total=2
    )
    inn = resources.groups[0].sprites[0]
    oak = resources.groups[1].sprites[0]
    assert inn.name != oak.name
    assert inn.image == oak.image
    assert len(resources.images) == 2
    assert sorted(p.name for p in images.iterdir()) == sorted(
        f"{i.hash}.png" for i in resources.images
    )


def test_persisted_png_is_lossless(tmp_path: Path):
    reg = ImageRegistry(PngImageCodec(tmp_path))
    resources = compile_documents([DOCS["village"]], reg)
    h = resources.images[0].hash
    with Image.open(tmp_path / f"{h}.png") as im:
        assert im.mode == "RGBA"
        assert im.size == (4, 4)
        assert im.getpixel((0, 0)) == (10, 20, 30, 255)


def test_compile_resources_writes_bundle(tmp_path: Path, monkeypatch):
    src = _inputs(tmp_path, monkeypatch)
    out = tmp_path / "out" / "resources.json"
    manifest = tmp_path / "out" / "manifest.json"
    result = compile_resources(
        CompileOptions(inputs=[src], output_path=out, manifest_path=manifest)
    )
    # documents are processed in name order
    assert result.documents == ["forest", "village"]
    data = json.loads(out.read_text())
    assert [g["name"] for g in data["groups"]] == ["trees", "houses"]
    assert len(data["images"]) == 2
    assert result.bytes_written == len(out.read_bytes())
    assert result.images_written == 2
    for image in data["images"]:
        assert (tmp_path / "out" / "images" / f"{image['hash']}.png").exists()
    m = json.loads(manifest.read_text())
    assert m["documents"] == ["forest", "village"]
    assert m["counts"]["images"] == 2
    assert m["counts"]["dedup_hits"] == 1
    assert m["counts"]["sprites"] == {"frame": 3}
    assert len(m["sha256"]) == 64


def test_dry_run_writes_nothing(tmp_path: Path, monkeypatch):
    src = _inputs(tmp_path, monkeypatch)
    out = tmp_path / "out" / "resources.json"
    result = compile_resources(
        CompileOptions(inputs=[src], output_path=out, dry_run=True)
    )
    assert not out.exists()
    assert not (tmp_path / "out").exists()
    assert len(result.resources.images) == 2
    assert result.output_file is None


def test_failure_leaves_no_bundle(tmp_path: Path, monkeypatch):
    docs = {
        "a": Document("a", (group("g", raster("fine", 2, 2)),)),
        "b": Document("b", (group("g", raster("thing:bogus", 2, 2)),)),
    }
    src = _inputs(tmp_path, monkeypatch, docs)
    out = tmp_path / "out" / "resources.json"
    with pytest.raises(UnrecognizedTagError):
        compile_resources(CompileOptions(inputs=[src], output_path=out))
    assert not out.exists()
    images = tmp_path / "out" / "images"
    assert not images.exists() or not any(images.iterdir())


def test_failed_rebuild_keeps_images_of_previous_bundle(tmp_path: Path, monkeypatch):
    docs = {"a": Document("a", (group("g", raster("fine", 2, 2)),))}
    src = _inputs(tmp_path, monkeypatch, docs)
    out = tmp_path / "out" / "resources.json"
    compile_resources(CompileOptions(inputs=[src], output_path=out))
    images = tmp_path / "out" / "images"
    before = sorted(p.name for p in images.iterdir())
    assert len(before) == 1

    docs["b"] = Document(
        "b",
        (
            group(
                "g",
                raster("fresh", 3, 3, color=(1, 2, 3)),
                raster("thing:bogus", 2, 2),
            ),
        ),
    )
    (src / "b.psd").write_bytes(b"")
    with pytest.raises(UnrecognizedTagError):
        compile_resources(CompileOptions(inputs=[src], output_path=out))
    # the previous bundle stays intact, the new raster is gone
    assert sorted(p.name for p in images.iterdir()) == before
    assert out.exists()


def test_decoder_failure_discards_written_images(tmp_path: Path, monkeypatch):
    src = _inputs(tmp_path, monkeypatch)

    def load(path):
        if Path(path).stem == "village":
            raise ValueError("corrupt document")
        return DOCS[Path(path).stem]

    monkeypatch.setattr(api, "load_document", load)
    out = tmp_path / "out" / "resources.json"
    with pytest.raises(ValueError, match="corrupt"):
        compile_resources(CompileOptions(inputs=[src], output_path=out))
    assert not out.exists()
    images = tmp_path / "out" / "images"
    assert not images.exists() or not any(images.iterdir())


def test_codec_leaves_existing_files_alone(tmp_path: Path):
    existing = tmp_path / "abc.png"
    existing.write_bytes(b"kept")
    codec = PngImageCodec(tmp_path)
    raster_data = solid(2, 2)
    codec.save("abc", raster_data, raster_data.pixels)
    codec.save("def", raster_data, raster_data.pixels)
    assert codec.written == [tmp_path / "def.png"]
    codec.discard()
    assert existing.read_bytes() == b"kept"
    assert not (tmp_path / "def.png").exists()


def test_no_documents_found(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        compile_resources(
            CompileOptions(inputs=[tmp_path], output_path=tmp_path / "r.json")
        )
