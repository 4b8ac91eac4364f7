"""Orchestrator: acquire credentials, then run each target sequentially."""

import logging
import time

from adobeio.e2e_runner.context import RunContext
from adobeio.e2e_runner.credentials import acquire_credentials
from adobeio.e2e_runner.env_guard import apply_mapping, check_required, log_masked
from adobeio.e2e_runner.models.target_result import RunResult, TargetResult
from adobeio.e2e_runner.models.test_target import TestTarget, TestTargetRegistry
from adobeio.e2e_runner.process import CommandRunner, reset_directory, run_command

logger = logging.getLogger(__name__)


class E2EOrchestrator:
    """Runs the e2e tests of every target in a registry."""

    def __init__(
        self, context: RunContext, runner: CommandRunner = run_command
    ) -> None:
        """Initialize orchestrator with a run context and command runner."""
        self.context = context
        self.runner = runner

    async def run(self, registry: TestTargetRegistry) -> RunResult:
        """Run all enabled targets and aggregate their results.

        Credentials for every auth mode required by enabled targets are
        acquired once, before any target runs. A failure in one target's
        pipeline is recorded and never stops the others.

        Raises:
            ConfigurationError: If the artifacts directory contains the start
                directory, or credential inputs are missing

        """
        names = ", ".join(t.name for t in registry.targets)
        logger.info(f"-- e2e testing for {names} --")

        logger.info(f"Orchestrator: Preparing {self.context.artifacts_dir}...")
        self.context.check_artifacts_dir()
        reset_directory(self.context.artifacts_dir)

        modes = registry.required_auth_modes()
        logger.info(
            f"Orchestrator: Required auth modes: "
            f"{', '.join(sorted(m.value for m in modes)) or 'none'}"
        )
        await acquire_credentials(modes, self.context)

        results: list[TargetResult] = []
        for target in registry.targets:
            if target.disabled:
                logger.info(f"> skipping disabled target {target.name}")
                results.append(
                    TargetResult(name=target.name, status="skipped", message="disabled")
                )
                continue

            results.append(await self._run_target(target))

        run_result = RunResult(results=results)
        if run_result.failed_target_names:
            failed = ", ".join(run_result.failed_target_names)
            logger.error(f"-- some test(s) failed: {failed} --")
        else:
            logger.info("-- all e2e tests ran successfully --")

        return run_result

    async def _run_target(self, target: TestTarget) -> TargetResult:
        """Run one target's pipeline, converting any error into a failure."""
        start = time.monotonic()
        try:
            await self._run_pipeline(target)
        except Exception as e:
            logger.error(
                f"!! e2e tests for {target.name} failed: {type(e).__name__}: {e}",
                exc_info=e,
            )
            return TargetResult(
                name=target.name,
                status="failure",
                duration=time.monotonic() - start,
                message=str(e),
            )

        logger.info(f"    - done for {target.name}")
        return TargetResult(
            name=target.name, status="success", duration=time.monotonic() - start
        )

    async def _run_pipeline(self, target: TestTarget) -> None:
        """Map and check env, clone, checkout, install, and test."""
        env = self.context.env
        logger.info(
            f"> e2e tests for {target.name}, repo: {target.repository}, "
            f"branch: {target.branch}"
        )

        apply_mapping(target.map_env, env)
        logger.info(
            f"    - checking existence of env vars: {', '.join(target.required_env)}"
        )
        check_required(target.required_env, env)
        log_masked(target.required_env, env, target.do_not_log)

        workdir = self.context.artifacts_dir
        target_dir = workdir / target.name

        logger.info(f"    - cloning repo {target.repository}..")
        await self.runner(
            ["git", "clone", target.repository, target.name],
            workdir,
            self.context.subprocess_env(),
        )

        logger.info(f"    - checking out branch {target.branch}..")
        await self.runner(
            ["git", "checkout", target.branch],
            target_dir,
            self.context.subprocess_env(),
        )

        logger.info(f"    - installing: {' '.join(target.install_command)}..")
        await self.runner(
            target.install_command, target_dir, self.context.subprocess_env()
        )

        logger.info(f"    - running tests: {' '.join(target.test_command)}..")
        await self.runner(
            target.test_command, target_dir, self.context.subprocess_env()
        )
