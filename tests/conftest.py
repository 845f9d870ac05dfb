"""
Pytest configuration and shared fixtures.
"""

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from comfydeck.config import RuntimePaths


@pytest.fixture(autouse=True)
def clean_env_for_tests(monkeypatch):
    """Clean environment variables for test isolation.

    Ensures tests don't accidentally read the user's real configuration
    by clearing COMFYDECK_* and XDG_CONFIG_HOME environment variables.
    """
    monkeypatch.delenv("COMFYDECK_HOME", raising=False)
    monkeypatch.delenv("COMFYDECK_COMFYUI_URL", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)


@pytest.fixture
def write_json():
    """Write a JSON document to a path and return the path."""

    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def model_tree(tmp_path):
    """Model folders with a few files each.

    checkpoints/ holds two checkpoints (one in a subfolder) and a preview image,
    loras/ holds one LoRA.
    """
    models = tmp_path / "models"
    checkpoints = models / "checkpoints"
    (checkpoints / "sdxl").mkdir(parents=True)
    (checkpoints / "v1-5.safetensors").write_bytes(b"")
    (checkpoints / "sdxl" / "base.CKPT").write_bytes(b"")
    (checkpoints / "preview.png").write_bytes(b"")

    loras = models / "loras"
    loras.mkdir()
    (loras / "detail.safetensors").write_bytes(b"")

    return models


@pytest.fixture
def home(tmp_path, model_tree, write_json):
    """A configured home directory."""
    home_dir = tmp_path / "home"
    paths = RuntimePaths.from_home(home_dir)
    write_json(
        paths.model_dirs_file,
        {
            "checkpoint": {
                "folder_path": str(model_tree / "checkpoints"),
                "filetypes": [".safetensors", ".ckpt"],
            },
            "lora": {
                "folder_path": str(model_tree / "loras"),
                "filetypes": [".safetensors"],
            },
        },
    )
    write_json(
        paths.selects_file,
        {
            "sampler": ["euler", "euler_ancestral", "dpmpp_2m"],
            "scheduler": ["normal", "karras"],
        },
    )
    (paths.workflows_dir).mkdir()
    (paths.workflows_dir / "txt2img.json").write_text("{}")
    (paths.workflows_dir / "notes.txt").write_text("not a workflow")
    return home_dir
