from pathlib import Path

from distdeploy.modules.repackage.domain import (
    MavenArtifact,
    artifact_id_for,
    component_name,
    derive_version,
    is_component_jar,
    sources_jar_name,
)


def test_component_name_strips_prefix_suffix_and_version():
    assert component_name("tool-worker-5.2.jar", "tool-", "5.2") == "worker"
    assert component_name("gradle-tooling-api-4.10.jar", "gradle-", "4.10") == "tooling-api"


def test_component_name_keeps_foreign_version():
    # a jar carrying another version is matched under a wrong component id
    assert component_name("gradle-kotlin-dsl-1.0-rc-3.jar", "gradle-", "4.10") == "kotlin-dsl-1.0-rc-3"


def test_derive_version_from_distribution_name():
    assert derive_version("gradle-4.10", "gradle-") == "4.10"
    assert derive_version("gradle-4.10-rc-1", "gradle-") == "4.10-rc-1"


def test_sources_jar_name():
    assert sources_jar_name("gradle-", "core", "4.10") == "gradle-core-4.10-sources.jar"


def test_artifact_id_keeps_prefix():
    assert artifact_id_for("gradle-core-4.10.jar", "4.10") == "gradle-core"
    assert artifact_id_for("gradle-all-4.10.jar", "4.10") == "gradle-all"
    assert MavenArtifact(jar=Path("lib/gradle-core-4.10.jar")).artifact_id("4.10") == "gradle-core"


def test_is_component_jar():
    assert is_component_jar("gradle-core-4.10.jar", "gradle-")
    assert not is_component_jar("groovy-all-2.4.15.jar", "gradle-")
    assert not is_component_jar("gradle-core-4.10.pom", "gradle-")


def test_attach_sources():
    artifact = MavenArtifact(jar=Path("gradle-core-4.10.jar"))
    assert not artifact.has_sources

    artifact.attach_sources(Path("gradle-core-4.10-sources.jar"))

    assert artifact.has_sources
    assert artifact.sources_jar == Path("gradle-core-4.10-sources.jar")
