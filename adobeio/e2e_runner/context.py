"""Explicit run context holding environment bindings and credentials."""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from adobeio.e2e_runner.errors import ConfigurationError
from adobeio.e2e_runner.models.credentials import Credential
from adobeio.e2e_runner.models.test_target import AuthMode


class RunContext(BaseModel):
    """State shared by every step of a run.

    ``env`` starts as a snapshot of the process environment. Acquired tokens
    and target env mappings are written to it, and it is handed to every
    subprocess as its environment.
    """

    env: dict[str, str] = Field(default_factory=dict, description="Env bindings")
    start_dir: Path = Field(..., description="Directory the run started from")
    artifacts_dir: Path = Field(..., description="Directory targets are cloned into")
    credentials: dict[AuthMode, Credential] = Field(
        default_factory=dict, description="Credentials acquired per auth mode"
    )

    @classmethod
    def from_environ(
        cls,
        artifacts_dir: Path,
        environ: Mapping[str, str] | None = None,
        start_dir: Path | None = None,
    ) -> "RunContext":
        """Create a context from the current process environment."""
        start = start_dir if start_dir is not None else Path.cwd()
        return cls(
            env=dict(os.environ if environ is None else environ),
            start_dir=start,
            artifacts_dir=start / artifacts_dir,
        )

    def check_artifacts_dir(self) -> None:
        """Reject an artifacts directory that contains the start directory.

        The artifacts directory is deleted and recreated at the start of a
        run, so it must not be the start directory or one of its parents.

        Raises:
            ConfigurationError: If the directory would contain the start dir

        """
        artifacts = self.artifacts_dir.resolve()
        start = self.start_dir.resolve()
        if artifacts == start or artifacts in start.parents:
            raise ConfigurationError(
                f"Artifacts directory {self.artifacts_dir} must not contain "
                f"the start directory {self.start_dir}"
            )

    def subprocess_env(self) -> dict[str, str]:
        """Environment to pass to spawned processes."""
        return dict(self.env)
