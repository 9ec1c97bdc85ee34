from .artifact import (
    MavenArtifact,
    artifact_id_for,
    component_name,
    derive_version,
    is_component_jar,
    sources_jar_name,
)
from .errors import (
    ArchiveError,
    DeploymentFailedError,
    DistributionLayoutError,
    MavenNotConfiguredError,
    RepackageError,
    RunInProgressError,
    WorkspaceError,
)
from .models import (
    DeploymentReport,
    DeployRequest,
    FailurePolicy,
    PipelineContext,
    ScanResult,
    StrategyKind,
)

__all__ = [
    "MavenArtifact",
    "artifact_id_for",
    "component_name",
    "derive_version",
    "is_component_jar",
    "sources_jar_name",
    "ArchiveError",
    "DeploymentFailedError",
    "DistributionLayoutError",
    "MavenNotConfiguredError",
    "RepackageError",
    "RunInProgressError",
    "WorkspaceError",
    "DeploymentReport",
    "DeployRequest",
    "FailurePolicy",
    "PipelineContext",
    "ScanResult",
    "StrategyKind",
]
