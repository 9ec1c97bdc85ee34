"""Dataclasses passed between the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .artifact import MavenArtifact


class StrategyKind(str, Enum):
    INDEPENDENT = "independent"
    FAT = "fat"


class FailurePolicy(str, Enum):
    STOP = "stop"
    RAISE = "raise"


@dataclass
class PipelineContext:
    workspace: Path
    distribution_root: Path
    version: str


@dataclass
class ScanResult:
    artifacts: List[MavenArtifact] = field(default_factory=list)
    missing_sources: List[MavenArtifact] = field(default_factory=list)


@dataclass
class DeployRequest:
    """Arguments handed to the deploy collaborator for one artifact."""

    artifact_id: str
    version: str
    file: Path
    sources: Optional[Path] = None
    packaging: str = "jar"


@dataclass
class DeploymentReport:
    version: str
    strategy: str
    artifacts: List[str] = field(default_factory=list)
    deployed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    missing_sources: List[str] = field(default_factory=list)
    failed: Optional[str] = None
    failed_exit_code: Optional[int] = None
    dry_run: bool = False
    requests: List[DeployRequest] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "strategy": self.strategy,
            "artifacts": list(self.artifacts),
            "deployed": list(self.deployed),
            "skipped": list(self.skipped),
            "missing_sources": list(self.missing_sources),
            "failed": self.failed,
            "failed_exit_code": self.failed_exit_code,
            "dry_run": self.dry_run,
            "ok": self.ok,
            "requests": [
                {
                    "artifact_id": request.artifact_id,
                    "file": str(request.file),
                    "sources": str(request.sources) if request.sources else None,
                }
                for request in self.requests
            ],
        }
