"""Run configuration for merge pipelines."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import msgspec

from .dedup import SetAction
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class MergeConfig:
    """Options for a parse, merge, sort and re-key run."""

    fields: list[str] = field(default_factory=lambda: ["year", "title"])
    action: str = SetAction.UNION.value
    sort: str | None = None
    fix_keys: bool = False
    key_fields: list[str] = field(default_factory=list)
    overwrite_keys: bool = False

    @property
    def set_action(self) -> SetAction:
        try:
            return SetAction(self.action)
        except ValueError as e:
            raise ConfigError(f"Unknown set action: {self.action}") from e


def load_config(config_path: Path) -> MergeConfig:
    """Load a merge configuration from a JSON file.

    Args:
        config_path: Path to the JSON configuration

    Returns:
        MergeConfig with defaults for any omitted option

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigError: If the JSON is invalid or has the wrong shape
    """
    logger.debug(f"Reading merge configuration: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

    try:
        config = msgspec.convert(data, type=MergeConfig)
    except msgspec.ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    if config.action not in {action.value for action in SetAction}:
        raise ConfigError(f"Unknown set action in {config_path}: {config.action}")
    return config
