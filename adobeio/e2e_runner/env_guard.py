"""Validate, log, and remap environment variables for a target."""

import logging
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

from adobeio.e2e_runner.errors import ConfigurationError, InvalidLoggerError

logger = logging.getLogger(__name__)

MASK = "<hidden>"


def check_required(names: Sequence[str], env: Mapping[str, str]) -> None:
    """Ensure every named env var is present and non-empty.

    Args:
        names: Env var names to check
        env: Environment to check against

    Raises:
        ConfigurationError: Listing all missing names, not only the first

    """
    missing = [name for name in names if not env.get(name)]
    if missing:
        raise ConfigurationError(f"Missing env var(s): {', '.join(missing)}")


def log_masked(
    names: Sequence[str],
    env: Mapping[str, str],
    hidden_names: Sequence[str] = (),
    log: Any = logger,
) -> None:
    """Log ``NAME=value`` for each name, masking hidden values.

    Args:
        names: Env var names to log
        env: Environment to read values from
        hidden_names: Names whose value is replaced with ``<hidden>``
        log: Object with a callable ``info`` method

    Raises:
        InvalidLoggerError: If ``log`` has no callable ``info``

    """
    if log is None or not callable(getattr(log, "info", None)):
        raise InvalidLoggerError("logger is None or logger.info is not callable")

    hidden = set(hidden_names)
    for name in names:
        value = MASK if name in hidden else env.get(name)
        log.info(f"{name}={value}")


def apply_mapping(
    mapping: Mapping[str, str] | None, env: MutableMapping[str, str]
) -> None:
    """Copy ``env[source]`` into ``env[target]`` for each mapping entry."""
    if not mapping:
        return

    for source, target in mapping.items():
        if source not in env:
            logger.warning(f"Cannot map {source} to {target}: {source} is not set")
            continue
        env[target] = env[source]
