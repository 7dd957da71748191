"""
Health Check Endpoints

Liveness text at the root path and a JSON status endpoint.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/")
async def root() -> PlainTextResponse:
    return PlainTextResponse("I'm working")


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """
    Basic health check endpoint.
    Returns 200 if application is running. The upstream is not contacted.
    """
    settings = request.app.state.settings
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version,
            "upstream": settings.upstream_base_url,
        },
    )
