"""Load the test target registry from a JSON or YAML file."""

import json
from collections.abc import Hashable
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from adobeio.e2e_runner.errors import ConfigurationError
from adobeio.e2e_runner.models.test_target import TestTargetRegistry


class _UniqueKeyLoader(yaml.SafeLoader):
    """Safe YAML loader that rejects duplicate mapping keys."""

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> Any:
        seen: set[Hashable] = set()
        for key_node, _ in node.value:
            key = self.construct_object(key_node, deep=deep)
            if isinstance(key, Hashable):
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        None, None, f"found duplicate key {key!r}", key_node.start_mark
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"found duplicate key {key!r}")
        result[key] = value
    return result


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() == ".json":
        return json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    return yaml.load(text, Loader=_UniqueKeyLoader)  # noqa: S506


def load_registry(path: Path) -> TestTargetRegistry:
    """Load the target registry.

    The file maps target names to their settings, in the
    ``repositories.json`` format::

        {"my-app": {"repository": "https://...", "branch": "main",
                    "requiredAuth": "jwt", "requiredEnv": ["FOO"]}}

    ``.json`` files are parsed as JSON, anything else as YAML. Duplicate keys
    are rejected.

    Args:
        path: Registry file (JSON or YAML)

    Returns:
        Validated registry, targets in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is not valid or doesn't match schema

    """
    if not path.exists():
        raise FileNotFoundError(f"Registry file not found: {path}")

    text = path.read_text()
    if not text.strip():
        raise ConfigurationError(f"Empty registry file: {path}")

    try:
        data = _parse(path, text)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(f"Invalid registry file {path}: {e}") from e

    if data is None:
        raise ConfigurationError(f"Empty registry file: {path}")

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Registry file {path} must map target names to target settings"
        )

    targets = []
    for name, fields in data.items():
        if not isinstance(fields, dict):
            raise ConfigurationError(f"Settings for target {name} must be a mapping")
        targets.append({**fields, "name": str(name)})

    try:
        return TestTargetRegistry.model_validate({"targets": targets})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid registry schema in {path}: {e}") from e
