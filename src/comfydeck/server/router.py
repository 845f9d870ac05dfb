"""Comfydeck API router.

Read-only endpoints over the runtime catalog, plus a refresh trigger.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from comfydeck.context import RuntimeContext
from comfydeck.exceptions import ComfydeckError
from comfydeck.health import HealthStatus

from .dependencies import get_context, verify_csrf_header
from .models import HealthResponse, RefreshResponse, SelectsResponse, WorkflowsResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ContextDep = Annotated[RuntimeContext, Depends(get_context)]


@router.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
async def health_check() -> HealthResponse:
    """Health check endpoint

    Returns:
        HealthResponse: Always returns {"status": "ok"}
    """
    return HealthResponse()


@router.get("/api/v1/workflows", response_model=WorkflowsResponse, tags=["Catalog"])
async def list_workflows(context: ContextDep) -> WorkflowsResponse:
    """Workflow file names found at the last refresh."""
    return WorkflowsResponse(workflows=context.workflows)


@router.get("/api/v1/selects", response_model=SelectsResponse, tags=["Catalog"])
async def list_selects(context: ContextDep) -> SelectsResponse:
    """Merged selection catalog built at the last refresh."""
    return SelectsResponse(selects=context.selects)


@router.get("/api/v1/comfyui", response_model=HealthStatus, tags=["System"])
def comfyui_status(context: ContextDep) -> HealthStatus:
    """Last ComfyUI probe result, probing now if there is none yet."""
    if context.health is None:
        return context.refresh_health()
    return context.health


@router.post(
    "/api/v1/refresh",
    response_model=RefreshResponse,
    tags=["Catalog"],
    dependencies=[Depends(verify_csrf_header)],
)
def refresh(context: ContextDep) -> RefreshResponse:
    """Rescan workflows and rebuild the selection catalog."""
    context.refresh_workflows()
    try:
        context.refresh_selects()
    except ComfydeckError as e:
        logger.error(f"Error refreshing selections: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return RefreshResponse(workflow_count=len(context.workflows), select_count=len(context.selects))
