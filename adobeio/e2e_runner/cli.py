"""CLI entry point for the e2e runner."""

import asyncio
import logging
import sys
from pathlib import Path

import typer

from adobeio.e2e_runner.context import RunContext
from adobeio.e2e_runner.errors import ConfigurationError
from adobeio.e2e_runner.orchestrator import E2EOrchestrator
from adobeio.e2e_runner.registry_loader import load_registry

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

app = typer.Typer()


@app.command()
def main(
    repositories: Path = typer.Option(  # noqa: B008
        Path("repositories.json"),
        envvar="E2E_REPOSITORIES",
        help="Registry file (JSON or YAML) describing the e2e targets",
    ),
    artifacts_dir: Path = typer.Option(  # noqa: B008
        Path(".repos"),
        envvar="E2E_ARTIFACTS_DIR",
        help="Directory target repositories are cloned into (emptied first)",
    ),
) -> None:
    """Clone each target repository and run its e2e tests."""
    logger.info("=" * 80)
    logger.info("E2E Runner - Starting")
    logger.info("=" * 80)
    logger.info(f"Registry file: {repositories}")
    logger.info(f"Artifacts directory: {artifacts_dir}")
    logger.info(f"Working directory: {Path.cwd()}")

    try:
        registry = load_registry(repositories)
    except (FileNotFoundError, ConfigurationError) as e:
        logger.error(f"Failed to load registry: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    context = RunContext.from_environ(artifacts_dir)
    orchestrator = E2EOrchestrator(context)

    try:
        result = asyncio.run(orchestrator.run(registry))
    except Exception as e:
        logger.exception("E2E run failed")
        typer.echo(f"Error running e2e tests: {e}", err=True)
        raise typer.Exit(code=1)

    logger.info("=" * 80)
    logger.info("E2E Results Summary:")
    logger.info("=" * 80)
    for target_result in result.results:
        if target_result.status == "success":
            logger.info(f"✓ {target_result.name} ({target_result.duration:.2f}s)")
        elif target_result.status == "skipped":
            logger.info(f"- {target_result.name}: skipped")
        else:
            logger.error(f"✗ {target_result.name}: {target_result.message}")

    if result.failed_target_names:
        failed = ", ".join(result.failed_target_names)
        typer.echo(f"-- some test(s) failed: {failed} --")
        raise typer.Exit(code=result.exit_code)

    typer.echo("-- all e2e tests ran successfully --")


if __name__ == "__main__":  # pragma: no cover
    app()
