"""Core PDF processing logic."""

from collections.abc import Sequence
from pathlib import Path

import fitz  # type: ignore

from pdfmark.backend import FitzTextSource
from pdfmark.bookmarks import read_bookmarks, write_bookmarks
from pdfmark.extraction import CancelSignal, auto_generate_bookmarks
from pdfmark.lines import DEFAULT_Y_TOLERANCE
from pdfmark.models import BookmarkNode, ExtractionProgress, HeadingPattern
from pdfmark.patterns import default_patterns
from pdfmark.tree import count_nodes


def process_pdf(
    source: Path,
    output: Path,
    patterns: Sequence[HeadingPattern] | None = None,
    append: bool = False,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
    verbose: bool = False,
    cancel: CancelSignal | None = None,
) -> list[BookmarkNode]:
    """
    Generate bookmarks for `source` from its headings and save to `output`.

    With `append`, the existing outline is kept and the generated bookmarks
    are added after it. Returns the forest that was written.
    """
    print(f"Processing: {source}")

    if patterns is None:
        patterns = default_patterns()

    if verbose:
        enabled = [p for p in patterns if p.enabled]
        print(f"Using {len(enabled)} of {len(patterns)} heading pattern(s)")
        for p in enabled:
            print(f"  L{p.level}: {p.label} ({p.id})")

    def report(progress: ExtractionProgress) -> None:
        print(
            f"  Page {progress.current_page}/{progress.total_pages}: "
            f"{progress.found_count} heading(s) so far"
        )

    print("Detecting headings...")
    doc: fitz.Document = fitz.open(source)
    try:
        existing = read_bookmarks(doc) if append else []
        generated = auto_generate_bookmarks(
            FitzTextSource(doc),
            patterns,
            on_progress=report if verbose else None,
            cancel=cancel,
            y_tolerance=y_tolerance,
        )
    finally:
        doc.close()

    cancelled = cancel is not None and cancel.is_set()
    if cancelled:
        print("Warning: Heading detection was cancelled, results are partial")
    elif not generated:
        print("Warning: No headings found in the PDF")
        print("No enabled pattern matched; check the pattern set with --list-patterns")

    if verbose and append:
        print(f"Keeping {count_nodes(existing)} existing bookmark(s)")

    bookmarks = existing + generated

    print("Adding bookmarks...")
    write_bookmarks(source, bookmarks, output, verbose)

    print(f"Done! Output saved to: {output}")
    if generated:
        print(f"Added {count_nodes(generated)} bookmark(s)")

    return bookmarks
