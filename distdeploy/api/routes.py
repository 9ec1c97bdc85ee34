"""Liveness endpoint for the deployer service."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness and run state")
def health(request: Request) -> Dict[str, Any]:
    container = request.app.state.container
    return {
        "status": "ok",
        "version": container.settings.version,
        "busy": container.deployment_service.busy,
    }
