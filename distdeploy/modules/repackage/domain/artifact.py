"""Maven artifact entity and the naming rules tying jars to sources."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import JAR_SUFFIX, SOURCES_SUFFIX


@dataclass
class MavenArtifact:
    """A component jar plus its optional sources jar.

    Identity is not stored: the publishable artifact id is computed from the
    jar file name whenever it is needed.
    """

    jar: Path
    sources_jar: Optional[Path] = None

    def attach_sources(self, sources_jar: Path) -> None:
        self.sources_jar = sources_jar

    @property
    def has_sources(self) -> bool:
        return self.sources_jar is not None

    def artifact_id(self, version: str) -> str:
        return artifact_id_for(self.jar.name, version)


def _strip_prefix(value: str, prefix: str) -> str:
    if prefix and value.startswith(prefix):
        return value[len(prefix):]
    return value


def _strip_suffix(value: str, suffix: str) -> str:
    if suffix and value.endswith(suffix):
        return value[: -len(suffix)]
    return value


def derive_version(distribution_name: str, prefix: str) -> str:
    """``gradle-4.10`` with prefix ``gradle-`` gives ``4.10``."""
    return _strip_prefix(distribution_name, prefix)


def is_component_jar(file_name: str, prefix: str) -> bool:
    return file_name.startswith(prefix) and file_name.endswith(JAR_SUFFIX)


def component_name(jar_name: str, prefix: str, version: str) -> str:
    """Bare component id used to find ``src/<component>``.

    ``gradle-core-api-4.10.jar`` -> ``core-api``.
    """
    name = _strip_prefix(jar_name, prefix)
    name = _strip_suffix(name, JAR_SUFFIX)
    return _strip_suffix(name, f"-{version}")


def sources_jar_name(prefix: str, component: str, version: str) -> str:
    return f"{prefix}{component}-{version}{SOURCES_SUFFIX}"


def artifact_id_for(jar_name: str, version: str) -> str:
    """Publishable id: the jar name without ``-<version>.jar``."""
    return _strip_suffix(jar_name, f"-{version}{JAR_SUFFIX}")
