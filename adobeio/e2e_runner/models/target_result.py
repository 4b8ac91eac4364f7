"""Models for target execution results."""

from typing import Literal

from pydantic import BaseModel, Field


class TargetResult(BaseModel):
    """Outcome of running one target's pipeline."""

    name: str = Field(..., description="Target name")
    status: Literal["success", "failure", "skipped"] = Field(
        ..., description="Pipeline outcome"
    )
    duration: float = Field(default=0.0, description="Execution time in seconds")
    message: str | None = Field(
        default=None, description="Error message or skip reason"
    )


class RunResult(BaseModel):
    """Aggregated outcome of a run."""

    results: list[TargetResult] = Field(
        default_factory=list, description="Per-target results in execution order"
    )

    @property
    def failed_target_names(self) -> list[str]:
        """Names of targets whose pipeline failed, in execution order."""
        return [r.name for r in self.results if r.status == "failure"]

    @property
    def exit_code(self) -> int:
        """Process exit code for the run."""
        return 1 if self.failed_target_names else 0
