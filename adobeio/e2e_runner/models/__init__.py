"""Data models for test targets, credentials, and results."""

from adobeio.e2e_runner.models.credentials import (
    ClientCredentialsConfig,
    Credential,
    JwtOptions,
)
from adobeio.e2e_runner.models.target_result import RunResult, TargetResult
from adobeio.e2e_runner.models.test_target import (
    AuthMode,
    TestTarget,
    TestTargetRegistry,
)

__all__ = [
    "AuthMode",
    "ClientCredentialsConfig",
    "Credential",
    "JwtOptions",
    "RunResult",
    "TargetResult",
    "TestTarget",
    "TestTargetRegistry",
]
