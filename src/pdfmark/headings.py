"""Heading detection for reconstructed lines."""

from collections.abc import Sequence

from pdfmark.models import CompiledMatcher


def match_heading(
    line: str, matchers: Sequence[CompiledMatcher]
) -> tuple[str, int] | None:
    """
    Match a line against compiled patterns, most specific level first.

    Returns (title, level) for the first matcher that finds a non-empty
    title, or None. The title is the "title" group when the pattern defines
    one and it participated in the match, otherwise the whole match.
    """
    for matcher in matchers:
        m = matcher.regex.search(line)
        if not m:
            continue
        title = m.groupdict().get("title")
        if title is None:
            title = m.group(0)
        title = title.strip()
        if title:
            return title, matcher.level
    return None
