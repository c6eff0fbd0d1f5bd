# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Inject constructor metadata members into every named class of a program."""

import logging
from dataclasses import dataclass

from rich.console import Console

from ctor_meta.config import Config
from ctor_meta.diagnostics import DiagnosticsReporter
from ctor_meta.members import ctor_args_member, ctor_name_member
from ctor_meta.params import find_constructor_params, resolve_parameter
from ctor_meta.tree import (
    ClassBody,
    ClassDeclaration,
    ClassExpression,
    Identifier,
    NodeVisitor,
    Program,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformResult:
    """Store the transformed program and pass counters.

    Args:
        program: Program root, mutated in place.
        classes_processed: Named classes that received metadata members.
        classes_skipped: Anonymous classes left untouched.
    """

    program: Program
    classes_processed: int
    classes_skipped: int


def process_class(
    class_node: ClassDeclaration | ClassExpression,
    reporter: DiagnosticsReporter | None = None,
) -> list[str] | None:
    """Append constructor metadata members to one class.

    The type-list member is appended first, then the name member. Both are
    appended even when the class declares no constructor. Members are not
    checked for prior existence, so processing a class twice duplicates them.

    Args:
        class_node: Class declaration or expression.
        reporter: Optional diagnostics reporter.

    Returns:
        Extracted constructor type names, or None for an anonymous class,
        which is left untouched.
    """
    class_name = _class_name(class_node)
    if class_name is None:
        return None
    class_body = class_node.body
    if not isinstance(class_body, ClassBody):
        logger.warning(
            f"Skipping class with unexpected body (name={class_name} "
            f"body_type={type(class_body).__name__})"
        )
        return None

    ctor_args: list[str] = []
    for param in find_constructor_params(class_body.body) or []:
        ctor_args.extend(resolve_parameter(param))

    class_body.body.append(ctor_args_member(ctor_args))
    class_body.body.append(ctor_name_member(class_name))

    if reporter is not None:
        reporter.report(class_name=class_name, ctor_args=ctor_args, class_node=class_node)
    return ctor_args


class ConstructorMetadataVisitor(NodeVisitor):
    """Walk a program and process every class declaration and expression.

    A processed class is not descended into, so classes declared inside its
    methods, field initializers, heritage clause or decorators keep their
    original members.
    """

    def __init__(self, config: Config, console: Console | None = None) -> None:
        """Initialize visitor state.

        Args:
            config: Read-only transform configuration.
            console: Console for diagnostics output.
        """
        self._reporter = DiagnosticsReporter(level=config.log, console=console)
        self.classes_processed: int = 0
        self.classes_skipped: int = 0

    def visit_ClassDeclaration(self, node: ClassDeclaration) -> None:
        self._process(node)

    def visit_ClassExpression(self, node: ClassExpression) -> None:
        self._process(node)

    def _process(self, node: ClassDeclaration | ClassExpression) -> None:
        if process_class(node, reporter=self._reporter) is None:
            self.classes_skipped += 1
            return
        self.classes_processed += 1


def transform_program(
    program: Program, config: Config | None = None, console: Console | None = None
) -> TransformResult:
    """Run one full metadata pass over a program.

    Args:
        program: Program root; mutated in place.
        config: Transform configuration; defaults apply when omitted.
        console: Console for diagnostics output.

    Returns:
        The same program with pass counters.
    """
    visitor = ConstructorMetadataVisitor(config=config or Config(), console=console)
    visitor.visit(program)
    logger.debug(
        f"Metadata pass finished (classes_processed={visitor.classes_processed} "
        f"classes_skipped={visitor.classes_skipped})"
    )
    return TransformResult(
        program=program,
        classes_processed=visitor.classes_processed,
        classes_skipped=visitor.classes_skipped,
    )


def inject_constructor_metadata(
    program: Program, config: Config | None = None, console: Console | None = None
) -> Program:
    """Run one metadata pass and return the mutated program."""
    return transform_program(program, config=config, console=console).program


def _class_name(class_node: ClassDeclaration | ClassExpression) -> str | None:
    if isinstance(class_node.id, Identifier):
        return class_node.id.name
    return None
