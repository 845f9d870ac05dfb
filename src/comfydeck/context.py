"""
Runtime state shared by the HTTP API and the CLI.

A RuntimeContext is created once at startup and handed to whatever needs
the discovered workflows, selections or backend status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from comfydeck.catalog import ModelCatalogBuilder, SelectionCatalogMerger, WorkflowRegistry
from comfydeck.config import AppConfig, RuntimePaths, get_home_dir
from comfydeck.health import BackendProber, HealthStatus
from comfydeck.logger import logger
from comfydeck.network import LOOPBACK_ADDRESS, resolve_local_ip

__all__ = ["RuntimeContext"]


@dataclass
class RuntimeContext:
    """Catalogs and status discovered at startup."""

    paths: RuntimePaths
    config: AppConfig
    workflows: list[str] = field(default_factory=list)
    selects: dict[str, Any] = field(default_factory=dict)
    health: HealthStatus | None = None
    local_ip: str = LOOPBACK_ADDRESS
    prober: BackendProber = field(default_factory=BackendProber, repr=False)

    @classmethod
    def create(cls, home: str | Path | None = None, prober: BackendProber | None = None) -> RuntimeContext:
        """Resolve paths and load config.json.

        Args:
            home: Home directory. Defaults to get_home_dir().
            prober: Prober used for health checks

        Raises:
            ConfigError: If config.json is invalid
        """
        paths = RuntimePaths.from_home(home if home is not None else get_home_dir())
        config = AppConfig.load(paths.config_file)
        return cls(paths=paths, config=config, prober=prober or BackendProber())

    def model_builder(self) -> ModelCatalogBuilder:
        return ModelCatalogBuilder(self.paths.model_dirs_file)

    def ensure_model_dirs(self) -> bool:
        """Create model_dirs.json from the example on first run.

        Raises:
            ConfigError: If the file cannot be created
        """
        return self.model_builder().ensure_config()

    def refresh_workflows(self) -> list[str]:
        """Rescan the workflow folder, keeping the old list if it cannot be read."""
        try:
            self.paths.home.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating home directory {self.paths.home}: {e}")
            return self.workflows
        workflows = WorkflowRegistry(self.paths.workflows_dir).ensure_and_list()
        if workflows is not None:
            self.workflows = workflows
        return self.workflows

    def refresh_selects(self) -> dict[str, Any]:
        """Rebuild the selection catalog.

        Raises:
            SelectionFileError: If selects.json is missing or malformed
            ConfigError: If model_dirs.json is missing or malformed
        """
        merger = SelectionCatalogMerger(self.paths.selects_file, self.model_builder())
        self.selects = merger.build_selections()
        return self.selects

    def refresh_health(self) -> HealthStatus:
        """Probe the ComfyUI backend."""
        self.health = self.prober.probe(self.config.comfyui_url)
        return self.health

    def refresh_local_ip(self) -> str:
        self.local_ip = resolve_local_ip()
        return self.local_ip

    def startup(self, probe: bool = True) -> RuntimeContext:
        """Run every startup step in order.

        model_dirs.json is bootstrapped here rather than on every build, so
        a file deleted while running is reported by the next refresh instead
        of being recreated.

        Args:
            probe: Whether to probe the ComfyUI backend
        """
        self.refresh_workflows()
        self.ensure_model_dirs()
        self.refresh_selects()
        if probe:
            self.refresh_health()
        self.refresh_local_ip()
        logger.debug(f"Startup complete: {len(self.workflows)} workflows, {len(self.selects)} selection types, local IP {self.local_ip}")
        return self

    def snapshot(self) -> dict[str, Any]:
        """Plain data view of the current state."""
        return {
            "workflows": list(self.workflows),
            "selects": dict(self.selects),
            "health": self.health.model_dump() if self.health else None,
            "local_ip": self.local_ip,
        }
