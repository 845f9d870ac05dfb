"""
WorkflowRegistry - Workflow JSON files available to the front end.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

__all__ = ["WorkflowRegistry"]

logger = logging.getLogger(__name__)

WORKFLOW_EXTENSION = ".json"


class WorkflowRegistry:
    """Ensure the workflow folder exists and list the workflows inside it."""

    def __init__(self, workflows_dir: str | Path) -> None:
        self.workflows_dir = Path(workflows_dir)

    def ensure_and_list(self) -> list[str] | None:
        """Create the workflow folder if needed and list its JSON files.

        Only direct children are listed; subfolders are not searched.

        Returns:
            Workflow file names in directory listing order. An empty list if
            the folder was just created. None if the folder could not be read,
            meaning the caller should keep whatever it had before.
        """
        if not self.workflows_dir.exists():
            # Only the last level is created
            try:
                self.workflows_dir.mkdir()
            except OSError as e:
                logger.error(f"Error creating workflows folder {self.workflows_dir}: {e}")
                return None
            logger.info("Workflow folder not found, creating...")
            return []

        try:
            with os.scandir(self.workflows_dir) as entries:
                workflows = [
                    entry.name
                    for entry in entries
                    if entry.is_file() and os.path.splitext(entry.name)[1].lower() == WORKFLOW_EXTENSION
                ]
        except OSError as e:
            logger.error(f"Error reading workflows folder {self.workflows_dir}: {e}")
            return None

        logger.info(f"Found {len(workflows)} workflows in the workflow folder.")
        return workflows
