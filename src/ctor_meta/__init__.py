# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for constructor metadata components."""

from ctor_meta.config import Config, ConfigError, LogLevel, parse_config
from ctor_meta.diagnostics import DiagnosticsReporter
from ctor_meta.members import CTOR_ARGS_KEY, CTOR_NAME_KEY, read_static_member
from ctor_meta.params import extract_type_name, find_constructor_params, resolve_parameter
from ctor_meta.plugin import process_estree, process_transform
from ctor_meta.transformer import (
    ConstructorMetadataVisitor,
    TransformResult,
    inject_constructor_metadata,
    process_class,
    transform_program,
)
from ctor_meta.tree import (
    Program,
    TreeFormatError,
    dump_node,
    dump_program,
    load_node,
    load_program,
)

__all__ = [
    "CTOR_ARGS_KEY",
    "CTOR_NAME_KEY",
    "Config",
    "ConfigError",
    "ConstructorMetadataVisitor",
    "DiagnosticsReporter",
    "LogLevel",
    "Program",
    "TransformResult",
    "TreeFormatError",
    "dump_node",
    "dump_program",
    "extract_type_name",
    "find_constructor_params",
    "inject_constructor_metadata",
    "load_node",
    "load_program",
    "parse_config",
    "process_class",
    "process_estree",
    "process_transform",
    "read_static_member",
    "resolve_parameter",
    "transform_program",
]
