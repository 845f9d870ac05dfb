"""
Comfydeck HTTP API.
"""

from fastapi import FastAPI

from comfydeck.context import RuntimeContext

from .router import router

__all__ = ["create_app", "router"]


def create_app(context: RuntimeContext) -> FastAPI:
    """Create the API application serving the given context."""
    app = FastAPI(
        title="Comfydeck API",
        description="Workflows, model selections and backend status for the Comfydeck front end",
        version="0.1.0",
        docs_url="/docs",
        redoc_url=None,
    )
    app.state.context = context
    app.include_router(router)
    return app
