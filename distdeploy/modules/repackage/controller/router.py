"""FastAPI routes that trigger repackage runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, Request

from distdeploy.modules.repackage.domain import (
    DeploymentFailedError,
    FailurePolicy,
    RepackageError,
    RunInProgressError,
    StrategyKind,
)
from distdeploy.modules.repackage.service import DeploymentService

router = APIRouter(prefix="/repackage", tags=["repackage"])
log = logging.getLogger(__name__)


def get_service(request: Request) -> DeploymentService:
    container = getattr(request.app.state, "container", None)
    if not container or not getattr(container, "deployment_service", None):
        raise HTTPException(status_code=500, detail="Deployment service not initialized.")
    return container.deployment_service


@router.get("/status")
def status(svc: DeploymentService = Depends(get_service)) -> Dict[str, Any]:
    return {"busy": svc.busy}


@router.post("/deployments")
def run_deployment(
    payload: Optional[Dict[str, Any]] = Body(None),
    svc: DeploymentService = Depends(get_service),
) -> Dict[str, Any]:
    payload = payload or {}
    strategy = payload.get("strategy") or svc.settings.post_process
    policy = payload.get("failure_policy") or payload.get("failurePolicy") or svc.settings.failure_policy
    try:
        strategy = StrategyKind(strategy)
    except ValueError:
        allowed = ", ".join(kind.value for kind in StrategyKind)
        raise HTTPException(status_code=400, detail=f"strategy must be one of: {allowed}")
    try:
        policy = FailurePolicy(policy)
    except ValueError:
        allowed = ", ".join(item.value for item in FailurePolicy)
        raise HTTPException(status_code=400, detail=f"failure_policy must be one of: {allowed}")
    dry_run = payload.get("dry_run", payload.get("dryRun", False))
    if not isinstance(dry_run, bool):
        raise HTTPException(status_code=400, detail="dry_run must be a JSON boolean")
    archive = payload.get("archive")
    if archive is not None and not isinstance(archive, str):
        raise HTTPException(status_code=400, detail="archive must be a path string")

    try:
        report = svc.run(
            strategy=strategy,
            failure_policy=policy,
            archive=Path(archive) if archive else None,
            dry_run=dry_run,
        )
    except RunInProgressError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except DeploymentFailedError as exc:
        raise HTTPException(status_code=502, detail=exc.report.to_dict())
    except (RepackageError, OSError, httpx.HTTPError) as exc:
        log.exception("Repackage run failed")
        raise HTTPException(status_code=500, detail=str(exc))
    return report.to_dict()
