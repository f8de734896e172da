"""Numbering-sequence filter for detected headings."""

import re

_FULLWIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")

_CHAPTER_NUMBER = re.compile(r"^(?:第([0-9]+)章|Chapter\s*([0-9]+))")
_DOTTED_NUMBER = re.compile(r"^([0-9]+)[.．]")


def normalize_digits(text: str) -> str:
    """Convert fullwidth digits to ASCII."""
    return text.translate(_FULLWIDTH_DIGITS)


def extract_leading_number(title: str) -> int | None:
    """
    Extract the leading (major) number of a heading title.

    "第3章 概要" -> 3, "Chapter 3 Intro" -> 3, "9.4 Results" -> 9,
    "1.2.3 Setup" -> 1. Returns None for unnumbered titles.
    """
    normalized = normalize_digits(title.strip())
    chapter = _CHAPTER_NUMBER.match(normalized)
    if chapter:
        return int(chapter.group(1) or chapter.group(2))
    dotted = _DOTTED_NUMBER.match(normalized)
    if dotted:
        return int(dotted.group(1))
    return None


class SequenceTracker:
    """
    Track the last accepted leading number per heading level.

    A heading whose number goes backwards at its level is rejected as a
    false positive (a body-text line that happens to look like a heading).
    Accepting a heading clears the tracked numbers of all deeper levels, so
    section numbering may restart under a new chapter.

    One tracker must be shared across all pages of a document.
    """

    def __init__(self) -> None:
        self._last: dict[int, int] = {}

    def accept(self, level: int, title: str) -> bool:
        """Return True if the heading is in sequence, updating the state."""
        number = extract_leading_number(title)
        if number is None:
            return True

        prev = self._last.get(level)
        if prev is not None and number < prev:
            return False

        self._last[level] = number
        for deeper in [lvl for lvl in self._last if lvl > level]:
            del self._last[deeper]
        return True

    def last_number(self, level: int) -> int | None:
        """Last accepted number at `level`, if any."""
        return self._last.get(level)
