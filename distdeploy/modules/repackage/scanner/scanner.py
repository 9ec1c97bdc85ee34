"""Discover component jars in an extracted distribution and build source jars."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List

from distdeploy.modules.repackage.archive import pack_directory
from distdeploy.modules.repackage.domain import (
    DistributionLayoutError,
    MavenArtifact,
    ScanResult,
    component_name,
    is_component_jar,
    sources_jar_name,
)
from distdeploy.modules.repackage.domain.constants import LIB_DIR, SRC_DIR

Packer = Callable[[Path, Path], int]


class DistributionScanner:
    """Build the working set from ``<root>/lib`` and ``<root>/src``."""

    def __init__(self, name_prefix: str, packer: Packer = pack_directory) -> None:
        self.name_prefix = name_prefix
        self.packer = packer
        self.log = logging.getLogger(self.__class__.__name__)

    def scan(self, root: Path, version: str) -> ScanResult:
        lib_dir = root / LIB_DIR
        if not lib_dir.is_dir():
            raise DistributionLayoutError(f"{root} has no {LIB_DIR}/ directory")

        artifacts = self.discover_jars(lib_dir)
        self.log.info("Discovered %d component jars under %s", len(artifacts), lib_dir)

        src_dir = root / SRC_DIR
        if src_dir.is_dir():
            self.log.info("Source directory exists. Making source artifacts")
            for artifact in artifacts:
                self._attach_sources(artifact, src_dir, version)
        else:
            self.log.info("No %s/ directory in %s, skipping source artifacts", SRC_DIR, root)

        missing = [artifact for artifact in artifacts if not artifact.has_sources]
        return ScanResult(artifacts=artifacts, missing_sources=missing)

    def discover_jars(self, lib_dir: Path) -> List[MavenArtifact]:
        jars = sorted(
            (
                path
                for path in lib_dir.rglob("*")
                if path.is_file() and is_component_jar(path.name, self.name_prefix)
            ),
            key=lambda path: path.relative_to(lib_dir).as_posix(),
        )
        return [MavenArtifact(jar=jar) for jar in jars]

    def _attach_sources(self, artifact: MavenArtifact, src_dir: Path, version: str) -> None:
        component = component_name(artifact.jar.name, self.name_prefix, version)
        tree = src_dir / component
        if not tree.is_dir():
            self.log.debug("No source tree for component %s", component)
            return
        sources_jar = src_dir / sources_jar_name(self.name_prefix, component, version)
        sources_jar.unlink(missing_ok=True)
        self.packer(tree, sources_jar)
        artifact.attach_sources(sources_jar)
