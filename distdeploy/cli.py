"""Typer CLI entrypoint for distdeploy."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import httpx
import typer

from distdeploy.bootstrap import ServiceContainer
from distdeploy.logging_config import configure_logging
from distdeploy.modules.repackage.domain import (
    DeploymentFailedError,
    DeploymentReport,
    FailurePolicy,
    MavenNotConfiguredError,
    RepackageError,
    StrategyKind,
)
from distdeploy.settings import Settings, get_settings

app = typer.Typer(
    add_completion=False,
    help="Repackage a tool distribution into Maven artifacts and deploy them.",
    no_args_is_help=True,
)

log = logging.getLogger("distdeploy.cli")


def _bootstrap(
    maven_home: Optional[str],
    log_file: Optional[Path],
    verbose: bool,
) -> tuple[Settings, ServiceContainer]:
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, log_file=log_file)
    return settings, ServiceContainer(settings, maven_home=maven_home)


def _echo_report(report: DeploymentReport) -> None:
    typer.echo(f"version: {report.version}")
    typer.echo(f"strategy: {report.strategy}")
    typer.echo(f"artifacts: {len(report.artifacts)}")
    typer.echo(f"deployed: {len(report.deployed)}")
    typer.echo(f"skipped: {len(report.skipped)}")
    typer.echo(f"missing_sources: {len(report.missing_sources)}")
    if report.failed:
        typer.echo(f"failed: {report.failed} (exit {report.failed_exit_code})")


@app.command("deploy")
def deploy(
    maven_home: Optional[str] = typer.Argument(
        None,
        help="Maven home, used when MAVEN_HOME is not set.",
        show_default=False,
    ),
    strategy: Optional[StrategyKind] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Post-processing: publish components independently or merge into one fat jar.",
    ),
    archive: Optional[Path] = typer.Option(
        None,
        "--archive",
        help="Use a local distribution zip instead of downloading it.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workspace: Optional[Path] = typer.Option(None, "--workspace", help="Build directory (wiped first)."),
    fail_on_deploy_error: bool = typer.Option(
        False,
        "--fail-on-deploy-error",
        help="Exit non-zero when a deploy-file call fails instead of stopping quietly.",
    ),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Repackage the distribution and deploy every resulting artifact."""

    settings, container = _bootstrap(maven_home, log_file, verbose)
    policy = FailurePolicy.RAISE if fail_on_deploy_error else FailurePolicy(settings.failure_policy)
    try:
        report = container.deployment_service.run(
            strategy=strategy or settings.post_process,
            failure_policy=policy,
            archive=archive,
            workspace=workspace,
        )
    except DeploymentFailedError as exc:
        _echo_report(exc.report)
        log.error("%s", exc)
        raise typer.Exit(code=1)
    except (RepackageError, OSError, httpx.HTTPError) as exc:
        log.error("Run aborted: %s", exc)
        raise typer.Exit(code=1)
    finally:
        container.close()
    _echo_report(report)


@app.command("plan")
def plan(
    strategy: Optional[StrategyKind] = typer.Option(None, "--strategy", "-s", help="Post-processing strategy."),
    archive: Optional[Path] = typer.Option(
        None,
        "--archive",
        help="Use a local distribution zip instead of downloading it.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    workspace: Optional[Path] = typer.Option(None, "--workspace", help="Build directory (wiped first)."),
    maven_home: Optional[str] = typer.Option(None, "--maven-home", help="Maven home for printed commands."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Build the artifacts and print the deploy commands without running them."""

    settings, container = _bootstrap(maven_home, None, verbose)
    try:
        report = container.deployment_service.run(
            strategy=strategy or settings.post_process,
            archive=archive,
            workspace=workspace,
            dry_run=True,
        )
    except (RepackageError, OSError, httpx.HTTPError) as exc:
        log.error("Plan aborted: %s", exc)
        raise typer.Exit(code=1)
    finally:
        container.close()

    _echo_report(report)
    for request in report.requests:
        try:
            command = container.executor.build_command(request)
        except MavenNotConfiguredError:
            typer.echo(f"{request.artifact_id}: {request.file} sources={request.sources or '-'}")
            continue
        typer.echo(" ".join(command))


@app.command("show-config")
def show_config() -> None:
    """Print the effective settings as JSON."""

    typer.echo(json.dumps(get_settings().model_dump(), indent=2, sort_keys=True))


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
