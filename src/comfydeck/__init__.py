"""
Comfydeck - Runtime catalog for a ComfyUI front end.

Discovers workflows and model files on disk, merges them with manually
curated selections and checks whether the ComfyUI backend is reachable.

Examples:
    >>> from comfydeck import RuntimeContext
    >>> context = RuntimeContext.create().startup()
    >>> context.selects["checkpoint"]
    ['sd_xl_base_1.0.safetensors']
"""

from comfydeck.catalog import ModelCatalogBuilder, SelectionCatalogMerger, WorkflowRegistry, walk
from comfydeck.context import RuntimeContext
from comfydeck.health import HealthStatus, probe
from comfydeck.network import resolve_local_ip

__version__ = "0.1.0"
__all__ = [
    "HealthStatus",
    "ModelCatalogBuilder",
    "RuntimeContext",
    "SelectionCatalogMerger",
    "WorkflowRegistry",
    "probe",
    "resolve_local_ip",
    "walk",
]
