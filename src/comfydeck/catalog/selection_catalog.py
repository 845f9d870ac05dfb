"""
SelectionCatalog - Model catalog overlaid with manually curated selections.

The manual selection file (selects.json) holds option lists for the front
end, such as samplers or schedulers. Its keys replace same-named entries
of the model catalog entirely.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from comfydeck.catalog.model_catalog import ModelCatalogBuilder
from comfydeck.exceptions import SelectionFileError

__all__ = ["SelectionCatalogMerger", "load_selection_file", "merge_selections"]

logger = logging.getLogger(__name__)


def load_selection_file(path: str | Path) -> dict[str, Any]:
    """Read the manual selection file.

    Raises:
        SelectionFileError: If the file is missing, unreadable or not a JSON object
    """
    selects_path = Path(path)
    try:
        data = json.loads(selects_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SelectionFileError(selects_path, "file not found") from e
    except (OSError, json.JSONDecodeError) as e:
        raise SelectionFileError(selects_path, str(e)) from e

    if not isinstance(data, dict):
        raise SelectionFileError(selects_path, "top-level value must be a JSON object")
    return data


def merge_selections(model_catalog: Mapping[str, Any], manual: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay manual selections onto the model catalog.

    Keys present in ``manual`` replace the whole model catalog entry rather
    than being merged item by item. Neither input is modified.
    """
    merged: dict[str, Any] = dict(model_catalog)
    merged.update(manual)
    return merged


class SelectionCatalogMerger:
    """Combine the scanned model catalog with selects.json."""

    def __init__(self, selects_file: str | Path, model_builder: ModelCatalogBuilder) -> None:
        """Initialize the merger.

        Args:
            selects_file: Path to the manual selection file
            model_builder: Builder providing the scanned model catalog
        """
        self.selects_file = Path(selects_file)
        self.model_builder = model_builder

    def build_selections(self) -> dict[str, Any]:
        """Build the merged selection catalog.

        The selection file is read before any folder is scanned so that a
        broken file fails fast.

        Raises:
            SelectionFileError: If the selection file is missing or malformed
        """
        manual = load_selection_file(self.selects_file)
        model_catalog = self.model_builder.build()

        merged = merge_selections(model_catalog, manual)
        overridden = sorted(set(manual) & set(model_catalog))
        if overridden:
            logger.debug(f"{self.selects_file.name} overrides scanned types: {', '.join(overridden)}")
        return merged
