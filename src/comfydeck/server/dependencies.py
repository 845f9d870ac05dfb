"""
FastAPI dependency injection for the Comfydeck API.

The RuntimeContext is stored on the application state by create_app().
"""

from __future__ import annotations

from fastapi import Header, HTTPException, Request

from comfydeck.context import RuntimeContext


def get_context(request: Request) -> RuntimeContext:
    """Get the RuntimeContext the app was created with."""
    return request.app.state.context


def verify_csrf_header(x_requested_with: str | None = Header(None)) -> None:
    """Verify X-Requested-With header for CSRF protection.

    This header cannot be set by cross-origin requests without CORS preflight.

    Raises:
        HTTPException: 403 if header is missing or invalid
    """
    if x_requested_with != "XMLHttpRequest":
        raise HTTPException(
            status_code=403,
            detail="Missing or invalid X-Requested-With header",
        )
