"""Post-processing strategies applied between discovery and deployment."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Protocol, Sequence

from distdeploy.modules.repackage.archive import pack_directory, starts_with_any, unpack_archive
from distdeploy.modules.repackage.domain import MavenArtifact, PipelineContext, StrategyKind
from distdeploy.modules.repackage.domain.constants import JAR_SUFFIX, SOURCES_SUFFIX
from distdeploy.settings import Settings


class PostProcessStrategy(Protocol):
    """Transforms the working set; the result replaces it wholesale."""

    kind: StrategyKind

    def apply(
        self, artifacts: List[MavenArtifact], context: PipelineContext
    ) -> List[MavenArtifact]:  # pragma: no cover - interface
        ...


class IndependentStrategy:
    """Deploy every component jar as its own artifact."""

    kind = StrategyKind.INDEPENDENT

    def apply(self, artifacts: List[MavenArtifact], context: PipelineContext) -> List[MavenArtifact]:
        return artifacts


class FatMergeStrategy:
    """Merge all component jars and sources into one consolidated pair.

    Jars are unpacked in working-set order into a shared directory, so a path
    present in several jars ends up with the content of the last one. Entries
    under ``exclude_prefixes`` (bundled slf4j bindings by default) are dropped
    from the binary jar.
    """

    kind = StrategyKind.FAT

    def __init__(self, artifact_name: str, exclude_prefixes: Sequence[str] = ("org/slf4j/",)) -> None:
        self.artifact_name = artifact_name
        self.exclude_prefixes = tuple(exclude_prefixes)
        self.log = logging.getLogger(self.__class__.__name__)

    def apply(self, artifacts: List[MavenArtifact], context: PipelineContext) -> List[MavenArtifact]:
        if not artifacts:
            self.log.warning("Nothing to merge into %s, working set is empty", self.artifact_name)
            return []

        binary_dir = self._reset_dir(context.workspace / self.artifact_name)
        sources_dir = self._reset_dir(context.workspace / f"{self.artifact_name}-sources")
        skip = starts_with_any(self.exclude_prefixes)

        for artifact in artifacts:
            unpack_archive(artifact.jar, binary_dir, skip=skip)
            if artifact.sources_jar is not None:
                unpack_archive(artifact.sources_jar, sources_dir)

        base_name = f"{self.artifact_name}-{context.version}"
        fat_jar = context.workspace / f"{base_name}{JAR_SUFFIX}"
        fat_sources = context.workspace / f"{base_name}{SOURCES_SUFFIX}"
        pack_directory(binary_dir, fat_jar)
        pack_directory(sources_dir, fat_sources)
        self.log.info(
            "Merged %d artifacts into %s (+ %s)",
            len(artifacts),
            fat_jar.name,
            fat_sources.name,
        )
        return [MavenArtifact(jar=fat_jar, sources_jar=fat_sources)]

    def _reset_dir(self, path: Path) -> Path:
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True)
        return path


def build_strategy(kind: StrategyKind | str, settings: Settings) -> PostProcessStrategy:
    """Return the strategy for ``kind``; unknown names raise ``ValueError``."""
    kind = StrategyKind(kind)
    if kind is StrategyKind.FAT:
        return FatMergeStrategy(
            artifact_name=settings.fat_artifact_name,
            exclude_prefixes=settings.merge_exclude_prefixes,
        )
    return IndependentStrategy()
