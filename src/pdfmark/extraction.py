"""Automatic bookmark generation from document text."""

from collections.abc import Callable, Iterable
from typing import Protocol

from pdfmark.backend import TextSource
from pdfmark.errors import ExtractionFailure
from pdfmark.headings import match_heading
from pdfmark.lines import DEFAULT_Y_TOLERANCE, reconstruct_lines
from pdfmark.models import BookmarkNode, ExtractionProgress, HeadingMatch, HeadingPattern
from pdfmark.patterns import compile_patterns
from pdfmark.sequence import SequenceTracker
from pdfmark.tree import build_bookmark_tree

ProgressCallback = Callable[[ExtractionProgress], None]


class CancelSignal(Protocol):
    """Anything with is_set(), e.g. threading.Event."""

    def is_set(self) -> bool: ...


def extract_headings(
    source: TextSource,
    patterns: Iterable[HeadingPattern],
    on_progress: ProgressCallback | None = None,
    cancel: CancelSignal | None = None,
    *,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
) -> list[HeadingMatch]:
    """
    Scan every page in order and collect headings that are in sequence.

    Cancellation is checked before each page; a cancelled run returns the
    headings found so far. Any error while reading a page's text aborts the
    whole run with ExtractionFailure, since a skipped page would hide
    numbering regressions from the sequence tracker.
    """
    matchers = compile_patterns(patterns)
    if not matchers:
        return []

    total_pages = source.page_count
    headings: list[HeadingMatch] = []
    tracker = SequenceTracker()

    for page_number in range(1, total_pages + 1):
        if cancel is not None and cancel.is_set():
            break

        try:
            fragments = source.get_text_fragments(page_number)
        except Exception as e:
            raise ExtractionFailure(page_number, str(e)) from e

        for line in reconstruct_lines(fragments, y_tolerance):
            result = match_heading(line.text, matchers)
            if result is None:
                continue
            title, level = result
            if tracker.accept(level, title):
                headings.append(
                    HeadingMatch(title=title, level=level, page_number=page_number)
                )

        if on_progress is not None:
            on_progress(
                ExtractionProgress(
                    current_page=page_number,
                    total_pages=total_pages,
                    found_count=len(headings),
                )
            )

    return headings


def auto_generate_bookmarks(
    source: TextSource,
    patterns: Iterable[HeadingPattern],
    on_progress: ProgressCallback | None = None,
    cancel: CancelSignal | None = None,
    *,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
) -> list[BookmarkNode]:
    """Detect headings in `source` and return them as a bookmark forest."""
    headings = extract_headings(
        source, patterns, on_progress, cancel, y_tolerance=y_tolerance
    )
    return build_bookmark_tree(headings)
