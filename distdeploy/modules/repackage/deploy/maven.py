"""Run ``mvn deploy:deploy-file`` for one artifact at a time."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Optional

from distdeploy.modules.repackage.domain import DeployRequest, MavenNotConfiguredError
from distdeploy.settings import Settings

DEPLOY_GOAL = "deploy:deploy-file"


class MavenDeployExecutor:
    """Deploy collaborator backed by the Maven command line."""

    def __init__(self, settings: Settings, maven_home: Optional[str] = None) -> None:
        self.settings = settings
        # MAVEN_HOME from the environment wins over an explicit fallback
        self.maven_home = settings.maven_home or maven_home
        self.log = logging.getLogger(self.__class__.__name__)

    def resolve_mvn_bin(self) -> Path:
        if not self.maven_home:
            raise MavenNotConfiguredError(
                "Maven home is not configured; set MAVEN_HOME or pass it as an argument"
            )
        executable = "mvn.cmd" if os.name == "nt" else "mvn"
        return Path(self.maven_home) / "bin" / executable

    def ensure_ready(self) -> None:
        self.resolve_mvn_bin()

    def build_command(self, request: DeployRequest) -> List[str]:
        args = [
            DEPLOY_GOAL,
            f"-DgroupId={self.settings.maven_group_id}",
            f"-DartifactId={request.artifact_id}",
            f"-Dversion={request.version}",
            f"-Dpackaging={request.packaging}",
            f"-DrepositoryId={self.settings.maven_repository_id}",
            f"-Durl={self.settings.maven_repository_url}",
            f"-Dfile={request.file.absolute()}",
        ]
        if request.sources is not None:
            args.append(f"-Dsources={request.sources.absolute()}")
        mvn = str(self.resolve_mvn_bin())
        if os.name == "nt":
            return ["cmd", "/c", mvn] + args
        return [mvn] + args

    def deploy(self, request: DeployRequest) -> int:
        """Run deploy-file and return its exit status. No timeout is applied."""
        command = self.build_command(request)
        self.log.info("Executing mvn cmd=%s", command)
        completed = subprocess.run(
            command,
            capture_output=True,
            text=True,
            stdin=subprocess.DEVNULL,
        )
        if completed.stdout:
            self.log.info("mvn stdout: %s", completed.stdout.strip())
        if completed.stderr:
            self.log.warning("mvn stderr: %s", completed.stderr.strip())
        if completed.returncode != 0:
            self.log.error(
                "mvn deploy-file failed artifact=%s exit=%s",
                request.artifact_id,
                completed.returncode,
            )
        return completed.returncode
