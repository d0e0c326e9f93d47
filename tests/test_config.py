import json
from pathlib import Path

import pytest

from spritec.config import load_config


def test_yaml_config_resolves_paths(tmp_path: Path):
    cfg = tmp_path / "conf" / "spritec.yml"
    cfg.parent.mkdir()
    cfg.write_text(
        "inputs: art\noutput: out/res.json\nimages: out/img\nwalkmap_scale: 4\n"
    )
    data = load_config(cfg)
    assert data["inputs"] == [cfg.parent / "art"]
    assert data["output"] == cfg.parent / "out" / "res.json"
    assert data["images"] == cfg.parent / "out" / "img"
    assert data["walkmap_scale"] == 4


def test_json_config(tmp_path: Path):
    cfg = tmp_path / "spritec.json"
    cfg.write_text(json.dumps({"inputs": ["a", "b"], "hitmap_compression": 8}))
    data = load_config(cfg)
    assert data["inputs"] == [tmp_path / "a", tmp_path / "b"]
    assert data["hitmap_compression"] == 8


@pytest.mark.parametrize(
    "body",
    [
        {"unknown": 1},
        {"walkmap_scale": 0},
        {"hitmap_compression": "4"},
        {"inputs": 3},
    ],
)
def test_invalid_config(tmp_path: Path, body):
    cfg = tmp_path / "spritec.json"
    cfg.write_text(json.dumps(body))
    with pytest.raises(ValueError):
        load_config(cfg)


def test_missing_config(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")
