"""Service facade used by the CLI and the HTTP API."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from distdeploy.modules.repackage.deploy import MavenDeployExecutor
from distdeploy.modules.repackage.domain import (
    DeploymentReport,
    FailurePolicy,
    RunInProgressError,
    StrategyKind,
)
from distdeploy.modules.repackage.fileget import DistributionDownloader
from distdeploy.modules.repackage.postprocess import build_strategy
from distdeploy.modules.repackage.scanner import DistributionScanner
from distdeploy.settings import Settings

from .orchestrator import DeploymentOrchestrator

log = logging.getLogger(__name__)


class DeploymentService:
    """Assemble an orchestrator per run and allow one run at a time.

    Every run resets the same workspace directory, so overlapping runs are
    rejected with ``RunInProgressError`` rather than queued.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        downloader: Optional[DistributionDownloader] = None,
        scanner: Optional[DistributionScanner] = None,
        executor: Optional[MavenDeployExecutor] = None,
    ) -> None:
        self.settings = settings
        self.downloader = downloader or DistributionDownloader(settings)
        self.scanner = scanner or DistributionScanner(settings.name_prefix)
        self.executor = executor or MavenDeployExecutor(settings)
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def build_orchestrator(
        self,
        strategy: StrategyKind | str,
        failure_policy: FailurePolicy | str = FailurePolicy.STOP,
        workspace: Optional[Path] = None,
    ) -> DeploymentOrchestrator:
        return DeploymentOrchestrator(
            self.settings,
            downloader=self.downloader,
            scanner=self.scanner,
            deployer=self.executor,
            strategy=build_strategy(strategy, self.settings),
            failure_policy=FailurePolicy(failure_policy),
            workspace=workspace,
        )

    def run(
        self,
        *,
        strategy: StrategyKind | str,
        failure_policy: FailurePolicy | str = FailurePolicy.STOP,
        archive: Optional[Path] = None,
        workspace: Optional[Path] = None,
        dry_run: bool = False,
    ) -> DeploymentReport:
        orchestrator = self.build_orchestrator(strategy, failure_policy, workspace)
        if not self._lock.acquire(blocking=False):
            raise RunInProgressError("a deployment run is already in progress")
        try:
            log.info(
                "Starting run strategy=%s policy=%s dry_run=%s archive=%s",
                orchestrator.strategy.kind.value,
                orchestrator.failure_policy.value,
                dry_run,
                archive or self.settings.distribution_url,
            )
            return orchestrator.run(archive=archive, dry_run=dry_run)
        finally:
            self._lock.release()
