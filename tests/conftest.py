import io
import zipfile
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

from distdeploy.settings import Settings

VERSION = "4.10"


def jar_bytes(entries: Dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return buffer.getvalue()


def write_jar(path: Path, entries: Dict[str, bytes]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(jar_bytes(entries))
    return path


def build_distribution_zip(
    target: Path,
    *,
    components: Iterable[str] = ("base-services", "core", "tooling-api"),
    with_sources: Iterable[str] = ("base-services", "core"),
    version: str = VERSION,
    extra_entries: Optional[Dict[str, bytes]] = None,
) -> Path:
    """Write a gradle-like distribution zip: lib jars, src trees, an examples dir."""
    root = f"gradle-{version}"
    with_sources = set(with_sources)
    target.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(target, "w") as zf:
        zf.writestr(f"{root}/", b"")
        zf.writestr(f"{root}/lib/", b"")
        for component in components:
            class_path = f"org/gradle/{component.replace('-', '')}/Main.class"
            zf.writestr(
                f"{root}/lib/gradle-{component}-{version}.jar",
                jar_bytes({class_path: component.encode(), "META-INF/MANIFEST.MF": component.encode()}),
            )
            if component in with_sources:
                zf.writestr(
                    f"{root}/src/{component}/org/gradle/{component.replace('-', '')}/Main.java",
                    f"class Main {{}} // {component}".encode(),
                )
        zf.writestr(f"{root}/lib/groovy-all-2.4.15.jar", jar_bytes({"groovy/Foo.class": b"g"}))
        zf.writestr(f"{root}/samples/examples/build.gradle", b"apply plugin: 'java'")
        for name, content in (extra_entries or {}).items():
            zf.writestr(name, content)
    return target


def build_settings(tmp_path: Path, **overrides) -> Settings:
    defaults = {
        "workspace_dir": str(tmp_path / "build"),
        "maven_home": str(tmp_path / "maven"),
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


class FakeDeployer:
    """Deploy collaborator returning scripted exit codes."""

    def __init__(self, exit_codes: Iterable[int] = ()) -> None:
        self.exit_codes = list(exit_codes)
        self.calls = []

    def ensure_ready(self) -> None:
        return None

    def deploy(self, request) -> int:
        self.calls.append(request)
        if len(self.calls) <= len(self.exit_codes):
            return self.exit_codes[len(self.calls) - 1]
        return 0


@pytest.fixture
def distribution_zip(tmp_path: Path) -> Path:
    return build_distribution_zip(tmp_path / "dist" / "gradle-4.10-all.zip")
