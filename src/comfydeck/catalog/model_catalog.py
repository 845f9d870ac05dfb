"""
ModelCatalogBuilder - Catalog of model files per asset type.

This module scans the folders configured in model_dirs.json and builds a
mapping from asset type name (checkpoint, lora, ...) to the model files
found there.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from comfydeck.catalog.walker import walk
from comfydeck.config import ensure_model_dirs_config, load_model_dir_config

__all__ = ["CatalogReport", "ModelCatalog", "ModelCatalogBuilder", "ScanErrorKind", "ScanFailure"]

logger = logging.getLogger(__name__)

# Asset type name -> file paths relative to the asset type folder
ModelCatalog = dict[str, list[str]]


class ScanErrorKind(Enum):
    """Why an asset type folder could not be scanned.

    - not_found: The configured folder does not exist
    - io_error: The folder exists but listing it failed
    """

    NOT_FOUND = "not_found"
    IO_ERROR = "io_error"


class ScanFailure(BaseModel):
    """An asset type that was skipped during the scan."""

    asset_type: str
    folder_path: str
    kind: ScanErrorKind
    detail: str = ""


class CatalogReport(BaseModel):
    """Outcome of one catalog build."""

    catalog: ModelCatalog = Field(default_factory=dict)
    failures: list[ScanFailure] = []
    unconfigured: bool = False


class ModelCatalogBuilder:
    """Build the model catalog from model_dirs.json.

    Types whose folder could not be scanned are left out of the catalog, so a
    missing key means "misconfigured" while an empty list means "configured
    but empty".
    """

    def __init__(self, model_dirs_file: str | Path, template: str | Path | None = None) -> None:
        """Initialize the builder.

        Args:
            model_dirs_file: Path to model_dirs.json
            template: Template copied when model_dirs.json is missing.
                Defaults to the example shipped with the package.
        """
        self.model_dirs_file = Path(model_dirs_file)
        self.template = template

    def ensure_config(self) -> bool:
        """Create model_dirs.json from the template on first run.

        Call once at startup; build() and build_report() only read.

        Returns:
            True if the file was just created
        """
        return ensure_model_dirs_config(self.model_dirs_file, self.template)

    def build_report(self) -> CatalogReport:
        """Scan every configured folder and report per-type failures.

        Raises:
            ConfigError: If model_dirs.json is missing, not valid JSON or has the wrong shape
        """
        config = load_model_dir_config(self.model_dirs_file)

        if config.is_unconfigured():
            logger.warning(f"{self.model_dirs_file.name} not configured, you will be unable to select models until it is set.")
            return CatalogReport(unconfigured=True)

        catalog: ModelCatalog = {}
        failures: list[ScanFailure] = []

        for asset_type, asset_config in config.items():
            try:
                catalog[asset_type] = walk(asset_config.folder_path, asset_config.filetypes)
            except FileNotFoundError:
                logger.warning(f"Invalid directory for {asset_type} in {self.model_dirs_file.name}: {asset_config.folder_path}")
                failures.append(
                    ScanFailure(
                        asset_type=asset_type,
                        folder_path=asset_config.folder_path,
                        kind=ScanErrorKind.NOT_FOUND,
                    )
                )
            except OSError as e:
                logger.error(f"Error reading {asset_type} folder {asset_config.folder_path}: {e}")
                failures.append(
                    ScanFailure(
                        asset_type=asset_type,
                        folder_path=asset_config.folder_path,
                        kind=ScanErrorKind.IO_ERROR,
                        detail=str(e),
                    )
                )

        logger.info(f"Loaded {len(catalog)} model types.")

        return CatalogReport(catalog=catalog, failures=failures)

    def build(self) -> ModelCatalog:
        """Build the model catalog.

        Returns:
            Mapping from asset type name to relative file paths
        """
        return self.build_report().catalog
