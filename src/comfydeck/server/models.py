"""
Comfydeck API data model definitions
"""

from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model"""

    status: str = "ok"


class WorkflowsResponse(BaseModel):
    """Workflow list response model"""

    workflows: list[str]


class SelectsResponse(BaseModel):
    """Selection catalog response model"""

    selects: dict[str, Any]


class RefreshResponse(BaseModel):
    """Response model for the refresh endpoint"""

    status: str = "ok"
    workflow_count: int
    select_count: int
