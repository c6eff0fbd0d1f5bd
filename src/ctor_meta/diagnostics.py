# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Level-gated console reports for processed classes."""

import logging

from rich.console import Console
from rich.pretty import pretty_repr

from ctor_meta.config import LogLevel
from ctor_meta.tree import Node

logger = logging.getLogger(__name__)

REPORT_PREFIX: str = "ctor-meta"


class DiagnosticsReporter:
    """Print what the transform discovered for each class."""

    def __init__(self, level: LogLevel = "none", console: Console | None = None) -> None:
        """Initialize reporter.

        Args:
            level: ``none`` prints nothing, ``info`` one line per class,
                ``debug`` adds a rendering of the transformed class node.
            console: Output console; standard output when omitted.
        """
        self._level = level
        self._console = console or Console()

    def report(self, class_name: str, ctor_args: list[str], class_node: Node) -> None:
        """Report one processed class.

        Args:
            class_name: Name of the processed class.
            ctor_args: Extracted constructor type names.
            class_node: Class node after metadata members were appended.
        """
        logger.debug(f"Processed class (name={class_name} ctor_args={ctor_args})")
        if self._level == "none":
            return
        summary = (
            f"{REPORT_PREFIX} - Processing class : {class_name}, "
            f"found constructor arguments : [{', '.join(ctor_args)}]"
        )
        if self._level == "info":
            self._print(summary)
            return
        self._print(
            f"\n{summary} \n ------------------ \n {pretty_repr(class_node)}\n"
        )

    def _print(self, text: str) -> None:
        self._console.print(
            text, markup=False, highlight=False, emoji=False, soft_wrap=True
        )
