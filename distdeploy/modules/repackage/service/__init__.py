from .manager import DeploymentService
from .orchestrator import DeployCollaborator, DeploymentOrchestrator

__all__ = ["DeploymentService", "DeployCollaborator", "DeploymentOrchestrator"]
