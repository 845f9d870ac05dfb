"""Configuration and environment handling for Comfydeck."""

from __future__ import annotations

import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, RootModel, ValidationError, field_validator

from comfydeck.exceptions import ConfigError

__all__ = [
    "AppConfig",
    "AssetTypeConfig",
    "ModelDirConfig",
    "RuntimePaths",
    "UNCONFIGURED_CHECKPOINT_PATH",
    "ensure_model_dirs_config",
    "get_home_dir",
    "load_model_dir_config",
]

logger = logging.getLogger(__name__)

# Placeholder shipped in the example model_dirs.json
UNCONFIGURED_CHECKPOINT_PATH = "path/to/checkpoints/folder"

_TEMPLATE_RESOURCE = "data/model_dirs.example.json"

# Forbidden system directories that cannot be used as the home directory
_FORBIDDEN_PATHS = frozenset(["/", "/etc", "/sys", "/dev", "/bin", "/sbin", "/usr", "/var", "/boot", "/proc"])


def _normalise_extension(ext: str) -> str:
    ext = ext.strip().lower()
    if not ext:
        return ext
    return ext if ext.startswith(".") else f".{ext}"


class AssetTypeConfig(BaseModel):
    """Folder and accepted file extensions for one asset type."""

    folder_path: str
    filetypes: set[str] = Field(default_factory=set)

    @field_validator("filetypes", mode="before")
    @classmethod
    def _lower_case_extensions(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            return {_normalise_extension(ext) for ext in value if isinstance(ext, str) and ext.strip()}
        return value


class ModelDirConfig(RootModel[dict[str, AssetTypeConfig]]):
    """Mapping from asset type name to its folder configuration.

    Mirrors model_dirs.json, e.g.::

        {"checkpoint": {"folder_path": "/models/checkpoints", "filetypes": [".safetensors"]}}
    """

    def items(self):
        return self.root.items()

    def __contains__(self, asset_type: object) -> bool:
        return asset_type in self.root

    def __getitem__(self, asset_type: str) -> AssetTypeConfig:
        return self.root[asset_type]

    def __len__(self) -> int:
        return len(self.root)

    def is_unconfigured(self) -> bool:
        """Check whether the user still has to set up model folders.

        The configuration counts as unconfigured when there is no checkpoint
        entry or when it still points at the placeholder folder.
        """
        checkpoint = self.root.get("checkpoint")
        return checkpoint is None or checkpoint.folder_path == UNCONFIGURED_CHECKPOINT_PATH


class AppConfig(BaseModel):
    """General application configuration read from config.json."""

    comfyui_url: str = Field(
        default="http://127.0.0.1:8188",
        description="Base URL of the ComfyUI backend",
    )

    host: str = Field(
        default="0.0.0.0",
        description="Host the HTTP API binds to",
    )

    port: int = Field(
        default=3000,
        description="Port the HTTP API listens on",
    )

    @classmethod
    def load(cls, path: str | Path) -> AppConfig:
        """Load configuration from a JSON file.

        A missing file yields the defaults. Unknown keys are ignored.

        Environment variables:
        - COMFYDECK_COMFYUI_URL: Overrides comfyui_url from the file

        Raises:
            ConfigError: If the file exists but is not a valid configuration
        """
        config_path = Path(path)
        data: dict[str, Any] = {}
        if config_path.exists():
            data = _read_json_object(config_path)

        env_url = os.environ.get("COMFYDECK_COMFYUI_URL")
        if env_url:
            data["comfyui_url"] = env_url

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(config_path, str(e)) from e


class RuntimePaths(BaseModel):
    """Locations of every file and folder Comfydeck reads at startup."""

    home: Path
    config_file: Path
    model_dirs_file: Path
    selects_file: Path
    workflows_dir: Path

    @classmethod
    def from_home(cls, home: str | Path) -> RuntimePaths:
        """Derive all runtime paths from a home directory."""
        home_path = Path(home)
        return cls(
            home=home_path,
            config_file=home_path / "config.json",
            model_dirs_file=home_path / "model_dirs.json",
            selects_file=home_path / "selects.json",
            workflows_dir=home_path / "workflows",
        )


def _validate_home_dir(home_path: Path) -> None:
    """Validate that the home directory is not a dangerous system path.

    Raises:
        ValueError: If path is a forbidden system directory
    """
    resolved_str = str(home_path.resolve())

    for forbidden in _FORBIDDEN_PATHS:
        if resolved_str == forbidden or resolved_str.rstrip("/") == forbidden:
            raise ValueError(f"COMFYDECK_HOME cannot be set to system directory: {forbidden}")


def get_home_dir() -> Path:
    """Get the directory holding Comfydeck configuration and workflows.

    Resolution priority:
    1. COMFYDECK_HOME environment variable (if set)
    2. XDG_CONFIG_HOME/comfydeck (if XDG_CONFIG_HOME is set)
    3. ~/.config/comfydeck (fallback)

    Raises:
        ValueError: If COMFYDECK_HOME points to a system directory
    """
    # Priority 1: COMFYDECK_HOME environment variable
    comfydeck_home = os.environ.get("COMFYDECK_HOME")
    if comfydeck_home:
        home_path = Path(comfydeck_home).expanduser().resolve()
        _validate_home_dir(home_path)
        return home_path

    # Priority 2: XDG_CONFIG_HOME/comfydeck
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home).expanduser() / "comfydeck"

    # Priority 3: ~/.config/comfydeck (fallback)
    return Path.home() / ".config" / "comfydeck"


def _read_json_object(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(path, str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(path, "top-level value must be a JSON object")
    return data


def ensure_model_dirs_config(model_dirs_file: str | Path, template: str | Path | None = None) -> bool:
    """Create model_dirs.json from the shipped template if it does not exist.

    The template is copied byte for byte; an existing file is never touched.

    Args:
        model_dirs_file: Target path of model_dirs.json
        template: Optional template path. Defaults to the packaged example.

    Returns:
        True if the file was created, False if it already existed

    Raises:
        ConfigError: If the template cannot be read or the file cannot be written
    """
    target = Path(model_dirs_file)
    if target.exists():
        return False

    try:
        if template is None:
            content = resources.files("comfydeck").joinpath(_TEMPLATE_RESOURCE).read_bytes()
        else:
            content = Path(template).read_bytes()

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    except OSError as e:
        raise ConfigError(target, f"cannot create from template: {e}") from e
    logger.info(f"Created {target.name} from the example template")
    return True


def load_model_dir_config(path: str | Path) -> ModelDirConfig:
    """Read and validate model_dirs.json.

    Raises:
        ConfigError: If the file is missing, not JSON, or does not match the schema
    """
    config_path = Path(path)
    data = _read_json_object(config_path)
    try:
        return ModelDirConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(config_path, str(e)) from e
