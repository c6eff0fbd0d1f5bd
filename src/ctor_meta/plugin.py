# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Host-facing entry points taking serialized configuration."""

import logging
from typing import Any

from rich.console import Console

from ctor_meta.config import parse_config
from ctor_meta.transformer import inject_constructor_metadata
from ctor_meta.tree import Program, dump_program, load_program

logger = logging.getLogger(__name__)


def process_transform(
    program: Program, config_text: str | None, console: Console | None = None
) -> Program:
    """Apply the constructor metadata transform for a host pipeline.

    Configuration is parsed before the tree is touched, so a rejected
    configuration leaves the program unchanged.

    Args:
        program: Parsed program root.
        config_text: JSON configuration supplied by the host.
        console: Console for diagnostics output.

    Returns:
        The same program, mutated in place.

    Raises:
        ConfigError: If the configuration is missing or invalid.
    """
    config = parse_config(config_text)
    logger.debug(f"Applying constructor metadata transform (log={config.log})")
    return inject_constructor_metadata(program, config=config, console=console)


def process_estree(
    data: Any, config_text: str | None, console: Console | None = None
) -> dict[str, Any]:
    """Apply the transform to a deserialized ESTree ``Program`` document.

    Args:
        data: ESTree JSON data.
        config_text: JSON configuration supplied by the host.
        console: Console for diagnostics output.

    Returns:
        Transformed ESTree JSON data.

    Raises:
        ConfigError: If the configuration is missing or invalid.
        TreeFormatError: If the document is not a well-formed program tree or
            nests too deeply to decode.
    """
    config = parse_config(config_text)
    program = load_program(data)
    logger.debug(
        f"Applying constructor metadata transform (log={config.log} "
        f"statements={len(program.body)})"
    )
    inject_constructor_metadata(program, config=config, console=console)
    return dump_program(program)
