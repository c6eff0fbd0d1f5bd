# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Transform configuration parsing."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal, cast

logger = logging.getLogger(__name__)

LogLevel = Literal["none", "info", "debug"]

LOG_LEVELS: tuple[LogLevel, ...] = ("none", "info", "debug")
_KNOWN_KEYS: frozenset[str] = frozenset({"log"})


class ConfigError(RuntimeError):
    """Represent missing or invalid transform configuration."""


@dataclass(frozen=True)
class Config:
    """Store read-only transform options.

    Attributes:
        log: Diagnostics level for per-class reports.
    """

    log: LogLevel = "none"

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Config":
        """Build configuration from deserialized data.

        Args:
            data: Configuration mapping.

        Returns:
            Validated configuration.

        Raises:
            ConfigError: If the mapping has unknown keys or an invalid level.
        """
        unknown_keys = sorted(set(data) - _KNOWN_KEYS)
        if unknown_keys:
            raise ConfigError(
                f"Unknown configuration key(s): {', '.join(unknown_keys)}"
            )
        raw_level = data.get("log", "none")
        if not isinstance(raw_level, str):
            raise ConfigError(f"Config 'log' must be a string, got {raw_level!r}")
        level = raw_level.lower()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"Config 'log' must be one of {', '.join(LOG_LEVELS)}, got {raw_level!r}"
            )
        return cls(log=cast(LogLevel, level))


def parse_config(text: str | None) -> Config:
    """Parse serialized JSON configuration supplied by the host.

    Args:
        text: JSON object text, or None when the host supplied no configuration.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If configuration is missing, not a JSON object, or invalid.
    """
    if text is None:
        raise ConfigError("Failed to get plugin config: no configuration supplied")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning(f"Config is not valid JSON (error={exc})")
        raise ConfigError(f"Invalid config JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")
    try:
        return Config.from_mapping(data)
    except ConfigError as exc:
        logger.warning(f"Config rejected (error={exc})")
        raise
