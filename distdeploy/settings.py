"""Runtime configuration for the distribution deployer."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration values mapped from ``DISTDEPLOY_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DISTDEPLOY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Distribution Deployer"
    version: str = "1.0.0"

    # Workspace layout
    workspace_dir: str = "build"
    extract_dir_name: str = "extract"

    # Distribution source
    distribution_url: str = "https://downloads.gradle.org/distributions/gradle-4.10-all.zip"
    distribution_archive_name: str = "gradle-distribution.zip"
    download_timeout: float = 60.0

    # Naming and filtering rules
    name_prefix: str = "gradle-"
    extract_exclude_tokens: List[str] = Field(default_factory=lambda: ["examples"])
    merge_exclude_prefixes: List[str] = Field(default_factory=lambda: ["org/slf4j/"])
    fat_artifact_name: str = "gradle-all"

    # Maven deploy-file target; MAVEN_HOME is read without the prefix
    maven_home: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("MAVEN_HOME", "maven_home"),
    )
    maven_group_id: str = "consulo.internal.gradle.plugin"
    maven_repository_id: str = "consulo"
    maven_repository_url: str = "https://maven.consulo.io/repository/snapshots/"
    maven_packaging: str = "jar"

    # Pipeline defaults
    post_process: str = "independent"
    failure_policy: str = "stop"
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
