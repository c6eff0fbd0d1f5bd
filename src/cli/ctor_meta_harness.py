# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Apply the constructor metadata transform to a folder of ESTree JSON trees."""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

import pathspec
from rich.console import Console
from rich.logging import RichHandler

from ctor_meta import (
    Config,
    ConfigError,
    TreeFormatError,
    dump_program,
    load_program,
    parse_config,
    transform_program,
)

logger = logging.getLogger(__name__)

TREE_FILE_GLOB: str = "*.json"


@dataclass(frozen=True)
class DiscoverySummary:
    """Represent discovery phase counters."""

    files: list[Path]
    paths_skipped_by_gitignore: int
    paths_skipped_git_dir: int


@dataclass(frozen=True)
class TransformSummary:
    """Represent transform phase counters."""

    files_transformed: int
    classes_processed: int
    classes_skipped: int
    elapsed_ms: int


class ValidationError(RuntimeError):
    """Represent user input validation failure."""


class TransformError(RuntimeError):
    """Represent transform phase failure."""


class IgnoreMatcher:
    """Match input-relative paths against the input root's .gitignore."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore matcher.
        """
        self._spec = spec

    @classmethod
    def from_input_root(cls, input_root: Path) -> "IgnoreMatcher":
        """Build matcher from the input root's .gitignore, when present.

        Args:
            input_root: Input folder.

        Returns:
            Configured ignore matcher; matches nothing without a .gitignore.

        Raises:
            OSError: If the .gitignore file cannot be read.
            UnicodeDecodeError: If the .gitignore file is not valid UTF-8.
        """
        ignore_path = input_root / ".gitignore"
        lines: list[str] = []
        if ignore_path.is_file():
            lines = ignore_path.read_text(encoding="utf-8").splitlines()
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(lines))

    def matches(self, relative_path: Path) -> bool:
        """Check whether a file or any of its parent folders is ignored.

        Args:
            relative_path: Input-relative file path.

        Returns:
            True when the path should be skipped.
        """
        if self._spec.match_file(relative_path.as_posix()):
            return True
        for parent in relative_path.parents:
            if parent == Path("."):
                continue
            if self._spec.match_file(f"{parent.as_posix()}/"):
                return True
        return False


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(prog="ctor-meta")
    parser.add_argument(
        "--input", required=True, help="Folder of ESTree Program JSON files."
    )
    parser.add_argument("--output", required=True, help="Output folder path.")
    parser.add_argument(
        "--config",
        default="{}",
        help='Transform configuration as JSON, e.g. \'{"log": "info"}\'.',
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run the transform command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning("Argument parsing failed (argv=%s)", argv)
        return 2

    try:
        config = parse_config(args.config)
    except ConfigError as exc:
        stderr.write(f"Invalid config: {exc}\n")
        return 2

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    _emit_marker(console=console, phase="validation", state="start")
    try:
        input_path, output_path = _validate_paths(
            input_path=Path(args.input), output_path=Path(args.output)
        )
    except ValidationError as exc:
        logger.warning("Validation failed (error=%s)", exc)
        stderr.write(f"{exc}\n")
        return 2
    _emit_marker(console=console, phase="validation", state="done")

    try:
        matcher = IgnoreMatcher.from_input_root(input_root=input_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to read .gitignore (error=%s)", exc)
        stderr.write(f"Failed to read .gitignore: {exc}\n")
        return 2

    _emit_marker(console=console, phase="discover", state="start")
    discovery = _discover_tree_files(input_root=input_path, matcher=matcher)
    _emit_marker(console=console, phase="discover", state="done")
    _emit_summary(
        console=console,
        summary={
            "files_discovered": len(discovery.files),
            "paths_skipped_by_gitignore": discovery.paths_skipped_by_gitignore,
            "paths_skipped_git_dir": discovery.paths_skipped_git_dir,
        },
    )

    _emit_marker(console=console, phase="transform", state="start")
    try:
        transform_summary = _transform_tree_files(
            input_root=input_path,
            output_root=output_path,
            files=discovery.files,
            config=config,
            console=console,
        )
    except TransformError as exc:
        logger.warning("Transform failed (error=%s)", exc)
        stderr.write(f"Transform failed: {exc}\n")
        return 2
    _emit_marker(console=console, phase="transform", state="done")
    _emit_summary(
        console=console,
        summary={
            "files_transformed": transform_summary.files_transformed,
            "classes_processed": transform_summary.classes_processed,
            "classes_skipped": transform_summary.classes_skipped,
            "elapsed_ms": transform_summary.elapsed_ms,
        },
    )
    console.print("status=success", highlight=False)
    return 0


def _emit_marker(console: Console, phase: str, state: str) -> None:
    console.print(f"{phase}:{state}", highlight=False)


def _emit_summary(console: Console, summary: dict[str, int]) -> None:
    fields = " ".join(f"{key}={value}" for key, value in summary.items())
    console.print(fields, highlight=False, soft_wrap=True)


def _validate_paths(input_path: Path, output_path: Path) -> tuple[Path, Path]:
    """Validate input and output folder constraints.

    Args:
        input_path: Input path from user args.
        output_path: Output path from user args.

    Returns:
        Normalized absolute input and output paths.

    Raises:
        ValidationError: If path constraints are not met.
    """
    input_abs = input_path.resolve()
    output_abs = output_path.resolve()

    if not input_abs.exists():
        raise ValidationError(f"Input path does not exist: {input_abs}")
    if not input_abs.is_dir():
        raise ValidationError(f"Input path must be a directory: {input_abs}")
    if output_abs.exists() and not output_abs.is_dir():
        raise ValidationError(f"Output path must be a directory: {output_abs}")
    if output_abs.exists() and any(output_abs.iterdir()):
        raise ValidationError(f"Output path must be empty: {output_abs}")
    if input_abs == output_abs:
        raise ValidationError("Input and output paths must not overlap")
    if input_abs in output_abs.parents or output_abs in input_abs.parents:
        raise ValidationError("Input and output paths must not overlap")
    return input_abs, output_abs


def _discover_tree_files(input_root: Path, matcher: IgnoreMatcher) -> DiscoverySummary:
    """Collect tree files beneath the input root.

    Args:
        input_root: Input folder.
        matcher: Ignore matcher instance.

    Returns:
        Sorted tree files and skip counters.
    """
    files: list[Path] = []
    skipped_by_gitignore = 0
    skipped_git_dir = 0
    for candidate in sorted(input_root.rglob(TREE_FILE_GLOB)):
        if not candidate.is_file():
            continue
        relative = candidate.relative_to(input_root)
        if ".git" in relative.parts[:-1]:
            skipped_git_dir += 1
            continue
        if matcher.matches(relative):
            skipped_by_gitignore += 1
            continue
        files.append(candidate)
    return DiscoverySummary(
        files=files,
        paths_skipped_by_gitignore=skipped_by_gitignore,
        paths_skipped_git_dir=skipped_git_dir,
    )


def _transform_tree_files(
    input_root: Path,
    output_root: Path,
    files: list[Path],
    config: Config,
    console: Console,
) -> TransformSummary:
    """Transform each tree file and write it to the mirrored output path.

    Args:
        input_root: Input folder.
        output_root: Output folder.
        files: Tree files to transform.
        config: Parsed transform configuration.
        console: Console receiving diagnostics output.

    Returns:
        Transform summary counters.

    Raises:
        TransformError: If reading, decoding or writing any file fails.
    """
    started = time.monotonic()
    transformed = 0
    classes_processed = 0
    classes_skipped = 0

    for file_path in files:
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except (
            OSError,
            UnicodeDecodeError,
            RecursionError,
            json.JSONDecodeError,
        ) as exc:
            logger.warning("Failed reading tree (path=%s error=%s)", file_path, exc)
            raise TransformError(f"{file_path}: {exc}") from exc
        try:
            program = load_program(data)
        except TreeFormatError as exc:
            logger.warning("Malformed tree (path=%s error=%s)", file_path, exc)
            raise TransformError(f"{file_path}: {exc}") from exc

        result = transform_program(program, config=config, console=console)
        classes_processed += result.classes_processed
        classes_skipped += result.classes_skipped

        destination = output_root / file_path.relative_to(input_root)
        tmp_path = destination.with_suffix(f"{destination.suffix}.tmp")
        try:
            payload = json.dumps(dump_program(result.program), indent=2) + "\n"
        except (TreeFormatError, RecursionError) as exc:
            logger.warning("Failed encoding tree (path=%s error=%s)", file_path, exc)
            raise TransformError(f"{file_path}: {exc}") from exc
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(destination)
        except OSError as exc:
            logger.warning("Failed writing tree (path=%s error=%s)", destination, exc)
            raise TransformError(f"{destination}: {exc}") from exc
        transformed += 1

    elapsed_ms = int(round((time.monotonic() - started) * 1000))
    return TransformSummary(
        files_transformed=transformed,
        classes_processed=classes_processed,
        classes_skipped=classes_skipped,
        elapsed_ms=elapsed_ms,
    )


def main() -> None:
    """Run ctor-meta CLI."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
