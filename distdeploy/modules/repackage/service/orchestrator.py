"""End-to-end pipeline: workspace, extraction, scan, post-process, deploy."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Protocol

from distdeploy.modules.repackage.archive import contains_any, unpack_archive
from distdeploy.modules.repackage.domain import (
    DeploymentFailedError,
    DeploymentReport,
    DeployRequest,
    DistributionLayoutError,
    FailurePolicy,
    MavenArtifact,
    PipelineContext,
    WorkspaceError,
    derive_version,
)
from distdeploy.modules.repackage.fileget import DistributionDownloader
from distdeploy.modules.repackage.postprocess import PostProcessStrategy
from distdeploy.modules.repackage.scanner import DistributionScanner
from distdeploy.settings import Settings


class DeployCollaborator(Protocol):
    def ensure_ready(self) -> None:  # pragma: no cover - interface
        ...

    def deploy(self, request: DeployRequest) -> int:  # pragma: no cover - interface
        ...


class DeploymentOrchestrator:
    """Drive one run of the repackage pipeline.

    Deployment is strictly sequential and stops at the first non-zero exit
    status. Under ``FailurePolicy.STOP`` that stop is silent: the report
    records the failed and skipped artifacts but nothing is raised.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        downloader: DistributionDownloader,
        scanner: DistributionScanner,
        deployer: DeployCollaborator,
        strategy: PostProcessStrategy,
        failure_policy: FailurePolicy = FailurePolicy.STOP,
        workspace: Optional[Path] = None,
    ) -> None:
        self.settings = settings
        self.downloader = downloader
        self.scanner = scanner
        self.deployer = deployer
        self.strategy = strategy
        self.failure_policy = FailurePolicy(failure_policy)
        self.workspace = Path(workspace or settings.workspace_dir)
        self.log = logging.getLogger(self.__class__.__name__)

    def run(self, *, archive: Optional[Path] = None, dry_run: bool = False) -> DeploymentReport:
        if not dry_run:
            self.deployer.ensure_ready()

        workspace = self.prepare_workspace(archive)
        extract_dir = self.acquire_distribution(workspace, archive)
        root = self.locate_distribution_root(extract_dir)
        version = derive_version(root.name, self.settings.name_prefix)
        if version == root.name:
            self.log.warning(
                "Distribution %s does not start with %s, using the full name as version",
                root.name,
                self.settings.name_prefix,
            )
        self.log.info("Distribution %s version=%s", root, version)

        context = PipelineContext(workspace=workspace, distribution_root=root, version=version)
        scan = self.scanner.scan(root, version)
        if scan.missing_sources:
            self.log.info("%d component(s) have no source tree", len(scan.missing_sources))

        artifacts = self.strategy.apply(scan.artifacts, context)
        self.log.info(
            "Post-process %s produced %d artifact(s)",
            self.strategy.kind.value,
            len(artifacts),
        )

        report = DeploymentReport(version=version, strategy=self.strategy.kind.value, dry_run=dry_run)
        requests = self._build_requests(artifacts, version, report)
        self.report_missing_sources(artifacts, report)

        if dry_run:
            report.skipped = [request.artifact_id for request in requests]
            self.log.info("Dry run, %d artifact(s) not deployed", len(requests))
            return report

        self.deploy_all(requests, report)
        if not report.ok and self.failure_policy is FailurePolicy.RAISE:
            raise DeploymentFailedError(report)
        return report

    def prepare_workspace(self, archive: Optional[Path] = None) -> Path:
        self.log.info("Preparing build directory %s", self.workspace.absolute())
        workspace = self.workspace
        if archive is not None:
            resolved_ws = workspace.resolve()
            if resolved_ws in Path(archive).resolve().parents:
                raise WorkspaceError(f"archive {archive} lives inside workspace {workspace}")
        try:
            if workspace.exists():
                shutil.rmtree(workspace)
            workspace.mkdir(parents=True)
        except OSError as exc:
            raise WorkspaceError(f"cannot reset workspace {workspace}: {exc}") from exc
        return workspace

    def acquire_distribution(self, workspace: Path, archive: Optional[Path] = None) -> Path:
        if archive is None:
            archive = workspace / self.settings.distribution_archive_name
            self.downloader.download(self.settings.distribution_url, archive)
        else:
            self.log.info("Using local distribution archive %s", archive)

        extract_dir = workspace / self.settings.extract_dir_name
        extract_dir.mkdir(parents=True, exist_ok=True)
        self.log.info("Extracting distribution")
        unpack_archive(
            Path(archive),
            extract_dir,
            skip=contains_any(self.settings.extract_exclude_tokens),
        )
        return extract_dir

    def locate_distribution_root(self, extract_dir: Path) -> Path:
        candidates = sorted(path for path in extract_dir.iterdir() if path.is_dir())
        if not candidates:
            raise DistributionLayoutError(f"no distribution directory found in {extract_dir}")
        if len(candidates) > 1:
            self.log.warning(
                "Several top-level directories in %s, using %s",
                extract_dir,
                candidates[0].name,
            )
        return candidates[0]

    def report_missing_sources(self, artifacts: List[MavenArtifact], report: DeploymentReport) -> None:
        for artifact in artifacts:
            if not artifact.has_sources:
                self.log.warning("Missing source artifact for: %s", artifact.jar)
                report.missing_sources.append(artifact.artifact_id(report.version))

    def deploy_all(self, requests: List[DeployRequest], report: DeploymentReport) -> None:
        self.log.info("Deploying artifacts")
        for index, request in enumerate(requests):
            self.log.info("Deploying %s", request.artifact_id)
            exit_code = self.deployer.deploy(request)
            if exit_code != 0:
                report.failed = request.artifact_id
                report.failed_exit_code = exit_code
                report.skipped = [pending.artifact_id for pending in requests[index + 1:]]
                self.log.error(
                    "Deploy of %s failed (exit=%s), %d artifact(s) left undeployed",
                    request.artifact_id,
                    exit_code,
                    len(report.skipped),
                )
                return
            report.deployed.append(request.artifact_id)
        self.log.info("Deployed %d artifact(s)", len(report.deployed))

    def _build_requests(
        self,
        artifacts: List[MavenArtifact],
        version: str,
        report: DeploymentReport,
    ) -> List[DeployRequest]:
        requests = [
            DeployRequest(
                artifact_id=artifact.artifact_id(version),
                version=version,
                file=artifact.jar,
                sources=artifact.sources_jar,
                packaging=self.settings.maven_packaging,
            )
            for artifact in artifacts
        ]
        report.artifacts = [request.artifact_id for request in requests]
        report.requests = requests
        return requests
