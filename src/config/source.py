"""Reading and writing the text of a declarative block (YAML mapping)."""

from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from src.config.models import DeclaredConfig
from src.core.exceptions import InvalidConfigError


def parse_block(source: str) -> dict[str, Any]:
    """Raw mapping in the block. An empty block is an empty mapping."""
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise InvalidConfigError(f"Block is not valid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError(
            f"Block must contain key: value pairs, got {type(data).__name__}."
        )
    return data


def parse_declared_config(source: str) -> DeclaredConfig:
    data = parse_block(source)
    try:
        return DeclaredConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid board config: {e}") from e


def dump_block(data: Mapping[str, Any]) -> str:
    """Keeps the key order of 'data', so rewriting a block only touches what changed."""
    return yaml.safe_dump(
        dict(data), sort_keys=False, allow_unicode=True, default_flow_style=False
    )


def update_block(source: str, changes: Mapping[str, Any]) -> str:
    """Overlay 'changes' on the mapping in 'source'. Every other key is left as it was."""
    data = parse_block(source)
    data.update(changes)
    return dump_block(data)
