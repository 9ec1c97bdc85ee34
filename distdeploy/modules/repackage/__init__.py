"""Repackage module exports."""

from .service import DeploymentService
from .controller import router as repackage_router

__all__ = ["DeploymentService", "repackage_router"]
