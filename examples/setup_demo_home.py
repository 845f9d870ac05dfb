"""
Sample script to create a demo home directory.
Creates fake model folders, selects.json and a couple of workflows, then
prints the catalog Comfydeck builds from them.
"""

import argparse
import json
from pathlib import Path

from comfydeck import RuntimeContext
from comfydeck.config import RuntimePaths

DEMO_MODELS = {
    "checkpoint": ["sd_xl_base_1.0.safetensors", "sd15/v1-5-pruned.ckpt"],
    "lora": ["add_detail.safetensors", "styles/watercolor.safetensors"],
    "vae": ["sdxl_vae.safetensors"],
}

DEMO_SELECTS = {
    "sampler": ["euler", "euler_ancestral", "dpmpp_2m", "dpmpp_2m_sde"],
    "scheduler": ["normal", "karras", "exponential"],
}


def create_demo_home(home: Path) -> RuntimePaths:
    """Write model files, model_dirs.json, selects.json and workflows under home."""
    paths = RuntimePaths.from_home(home)
    models_root = home / "models"

    model_dirs = {}
    for asset_type, files in DEMO_MODELS.items():
        folder = models_root / asset_type
        for name in files:
            model_file = folder / name
            model_file.parent.mkdir(parents=True, exist_ok=True)
            model_file.touch()
        model_dirs[asset_type] = {
            "folder_path": str(folder),
            "filetypes": [".safetensors", ".ckpt"],
        }

    paths.model_dirs_file.write_text(json.dumps(model_dirs, indent=2))
    paths.selects_file.write_text(json.dumps(DEMO_SELECTS, indent=2))

    paths.workflows_dir.mkdir(exist_ok=True)
    for name in ("txt2img.json", "img2img.json"):
        (paths.workflows_dir / name).write_text("{}")

    return paths


def main():
    parser = argparse.ArgumentParser(description="Create a demo Comfydeck home directory")
    parser.add_argument("home", help="Directory to create")
    parser.add_argument("--probe", action="store_true", help="Also probe ComfyUI")
    args = parser.parse_args()

    home = Path(args.home)
    home.mkdir(parents=True, exist_ok=True)
    create_demo_home(home)

    context = RuntimeContext.create(home=home).startup(probe=args.probe)
    print(json.dumps(context.snapshot(), indent=2))


if __name__ == "__main__":
    main()
