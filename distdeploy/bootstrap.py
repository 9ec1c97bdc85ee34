"""Wire plain-Python services from a Settings instance."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from distdeploy.modules.repackage.deploy import MavenDeployExecutor
from distdeploy.modules.repackage.fileget import DistributionDownloader
from distdeploy.modules.repackage.scanner import DistributionScanner
from distdeploy.modules.repackage.service import DeploymentService

from .settings import Settings

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires the pipeline services with shared settings."""

    settings: Settings
    maven_home: Optional[str] = None
    downloader: DistributionDownloader = field(init=False)
    scanner: DistributionScanner = field(init=False)
    executor: MavenDeployExecutor = field(init=False)
    deployment_service: DeploymentService = field(init=False)

    def __post_init__(self) -> None:
        self.downloader = DistributionDownloader(self.settings)
        self.scanner = DistributionScanner(self.settings.name_prefix)
        self.executor = MavenDeployExecutor(self.settings, maven_home=self.maven_home)
        self.deployment_service = DeploymentService(
            self.settings,
            downloader=self.downloader,
            scanner=self.scanner,
            executor=self.executor,
        )
        log.debug(
            "Services wired workspace=%s prefix=%s maven_home=%s",
            self.settings.workspace_dir,
            self.settings.name_prefix,
            self.executor.maven_home or "-",
        )

    def close(self) -> None:
        """Release the downloader's HTTP connection pool."""
        self.downloader.close()
