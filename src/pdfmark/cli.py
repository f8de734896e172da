#!/usr/bin/env python3
"""CLI tool to add bookmarks to PDFs from their headings."""

import signal
import threading
from pathlib import Path
from typing import Annotated, Any

import typer

from pdfmark.core import process_pdf
from pdfmark.errors import ExtractionFailure, PatternCompileError
from pdfmark.lines import DEFAULT_Y_TOLERANCE
from pdfmark.models import HeadingPattern
from pdfmark.patterns import (
    default_patterns,
    load_patterns,
    merge_patterns,
    set_enabled,
)

app = typer.Typer(
    name="pdfmark",
    help="Add bookmarks to PDFs by detecting numbered headings in their text.",
)


@app.command()
def main(
    source: Annotated[
        Path,
        typer.Option(
            "--from",
            "-f",
            help="Source PDF file",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--to",
            "-t",
            help="Output PDF file (required unless using --list-patterns)",
            file_okay=True,
            dir_okay=False,
            writable=True,
            resolve_path=True,
        ),
    ] = None,
    patterns_file: Annotated[
        Path | None,
        typer.Option(
            "--patterns",
            "-p",
            help="YAML file with additional heading patterns",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    disable: Annotated[
        list[str] | None,
        typer.Option(
            "--disable",
            "-d",
            help="Pattern id to switch off (repeatable), e.g. 'builtin-chapter'",
        ),
    ] = None,
    append: Annotated[
        bool,
        typer.Option(
            "--append",
            "-a",
            help="Keep the existing bookmarks and add the detected ones after them",
        ),
    ] = False,
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            help="Max baseline distance (PDF units) for text to count as one line",
            min=0.0,
        ),
    ] = DEFAULT_Y_TOLERANCE,
    list_patterns: Annotated[
        bool,
        typer.Option(
            "--list-patterns",
            help="Print the heading patterns that would be used and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose output",
        ),
    ] = False,
) -> None:
    """Detect headings in a PDF and write them as its bookmarks."""
    try:
        patterns = _resolve_patterns(patterns_file, disable or [])
    except (PatternCompileError, ValueError) as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    if list_patterns:
        _print_patterns(patterns)
        return

    if output is None:
        print("Error: --to/-t output path is required")
        raise typer.Exit(1)

    if output == source:
        print("Error: output must be a different file than the source")
        raise typer.Exit(1)

    cancel = threading.Event()
    previous = _cancel_on_interrupt(cancel)
    try:
        process_pdf(
            source=source,
            output=output,
            patterns=patterns,
            append=append,
            y_tolerance=tolerance,
            verbose=verbose,
            cancel=cancel,
        )
    except ExtractionFailure as e:
        print(f"Error: {e}")
        raise typer.Exit(1)
    finally:
        signal.signal(signal.SIGINT, previous)


def _cancel_on_interrupt(cancel: threading.Event) -> Any:
    """
    Make the first Ctrl+C set `cancel` instead of raising.

    Detection then stops after the current page and keeps partial results.
    The handler puts the previous one back, so a second Ctrl+C interrupts
    immediately. Returns the previous handler.
    """

    def on_interrupt(signum: int, frame: Any) -> None:
        cancel.set()
        signal.signal(signal.SIGINT, previous)

    previous = signal.signal(signal.SIGINT, on_interrupt)
    return previous


def _resolve_patterns(
    patterns_file: Path | None, disable: list[str]
) -> list[HeadingPattern]:
    patterns = default_patterns()
    if patterns_file is not None:
        patterns = merge_patterns(patterns, load_patterns(patterns_file))
    if disable:
        patterns = set_enabled(patterns, disable, enabled=False)
    return patterns


def _print_patterns(patterns: list[HeadingPattern]) -> None:
    for p in patterns:
        state = "on " if p.enabled else "off"
        kind = "builtin" if p.builtin else "custom"
        print(f"[{state}] L{p.level} {p.id} ({kind}): {p.label}")
        print(f"      {p.pattern}")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
