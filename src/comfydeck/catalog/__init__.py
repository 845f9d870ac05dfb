"""
Comfydeck Catalog module

Provides the builders that discover model files, manual selections and
workflows on disk.
"""

from .model_catalog import CatalogReport, ModelCatalog, ModelCatalogBuilder, ScanErrorKind, ScanFailure
from .selection_catalog import SelectionCatalogMerger, load_selection_file, merge_selections
from .walker import walk
from .workflow_registry import WorkflowRegistry

__all__ = [
    "CatalogReport",
    "ModelCatalog",
    "ModelCatalogBuilder",
    "ScanErrorKind",
    "ScanFailure",
    "SelectionCatalogMerger",
    "WorkflowRegistry",
    "load_selection_file",
    "merge_selections",
    "walk",
]
