import os
import subprocess
from pathlib import Path

import pytest

from conftest import build_settings
from distdeploy.modules.repackage.deploy import MavenDeployExecutor
from distdeploy.modules.repackage.domain import DeployRequest, MavenNotConfiguredError
from distdeploy.settings import Settings

pytestmark = pytest.mark.skipif(os.name == "nt", reason="posix mvn layout")


def _request(tmp_path: Path, with_sources: bool = True) -> DeployRequest:
    jar = tmp_path / "gradle-core-4.10.jar"
    jar.write_bytes(b"jar")
    sources = None
    if with_sources:
        sources = tmp_path / "gradle-core-4.10-sources.jar"
        sources.write_bytes(b"src")
    return DeployRequest(artifact_id="gradle-core", version="4.10", file=jar, sources=sources)


def test_build_command_contains_deploy_file_arguments(tmp_path):
    executor = MavenDeployExecutor(build_settings(tmp_path, maven_home="/opt/maven"))
    request = _request(tmp_path)

    command = executor.build_command(request)

    assert command == [
        str(Path("/opt/maven") / "bin" / "mvn"),
        "deploy:deploy-file",
        "-DgroupId=consulo.internal.gradle.plugin",
        "-DartifactId=gradle-core",
        "-Dversion=4.10",
        "-Dpackaging=jar",
        "-DrepositoryId=consulo",
        "-Durl=https://maven.consulo.io/repository/snapshots/",
        f"-Dfile={request.file.absolute()}",
        f"-Dsources={request.sources.absolute()}",
    ]


def test_build_command_without_sources(tmp_path):
    executor = MavenDeployExecutor(build_settings(tmp_path, maven_home="/opt/maven"))

    command = executor.build_command(_request(tmp_path, with_sources=False))

    assert not any(arg.startswith("-Dsources=") for arg in command)


def test_explicit_maven_home_used_when_settings_have_none(tmp_path):
    settings = build_settings(tmp_path, maven_home=None)

    executor = MavenDeployExecutor(settings, maven_home="/usr/share/maven")

    assert executor.resolve_mvn_bin() == Path("/usr/share/maven/bin/mvn")


def test_configured_maven_home_wins_over_explicit_one(tmp_path):
    settings = build_settings(tmp_path, maven_home="/env/maven")

    executor = MavenDeployExecutor(settings, maven_home="/arg/maven")

    assert executor.maven_home == "/env/maven"
    assert executor.resolve_mvn_bin() == Path("/env/maven/bin/mvn")


def test_maven_home_env_var_wins_over_explicit_one(tmp_path, monkeypatch):
    monkeypatch.setenv("MAVEN_HOME", "/env/maven")
    settings = Settings(_env_file=None, workspace_dir=str(tmp_path / "build"))

    executor = MavenDeployExecutor(settings, maven_home="/arg/maven")

    assert executor.resolve_mvn_bin() == Path("/env/maven/bin/mvn")


def test_missing_maven_home_raises(tmp_path):
    executor = MavenDeployExecutor(build_settings(tmp_path, maven_home=None))

    with pytest.raises(MavenNotConfiguredError):
        executor.ensure_ready()


def test_deploy_returns_exit_code(tmp_path, monkeypatch):
    executor = MavenDeployExecutor(build_settings(tmp_path, maven_home="/opt/maven"))
    calls = []

    def fake_run(cmd, *_, **kwargs):
        calls.append((cmd, kwargs))
        return subprocess.CompletedProcess(cmd, 1, stdout="BUILD FAILURE", stderr="401 Unauthorized")

    monkeypatch.setattr(subprocess, "run", fake_run)

    exit_code = executor.deploy(_request(tmp_path))

    assert exit_code == 1
    assert calls[0][0][1] == "deploy:deploy-file"
    assert "timeout" not in calls[0][1]


def test_deploy_success(tmp_path, monkeypatch):
    executor = MavenDeployExecutor(build_settings(tmp_path, maven_home="/opt/maven"))
    monkeypatch.setattr(
        subprocess,
        "run",
        lambda cmd, *_, **__: subprocess.CompletedProcess(cmd, 0, stdout="BUILD SUCCESS", stderr=""),
    )

    assert executor.deploy(_request(tmp_path)) == 0
