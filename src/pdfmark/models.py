"""Data models for pdfmark."""

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TextFragment:
    """A positioned run of text on a page.

    The transform is a PDF affine matrix (a, b, c, d, e, f); the translation
    part gives the fragment's origin in user space (y grows upward).
    """

    text: str
    transform: tuple[float, float, float, float, float, float]

    @property
    def x(self) -> float:
        return self.transform[4]

    @property
    def y(self) -> float:
        return self.transform[5]


@dataclass(frozen=True)
class ReconstructedLine:
    """A single visual line rebuilt from fragments."""

    text: str
    y: float


@dataclass(frozen=True)
class HeadingPattern:
    """A user-configurable rule for recognising heading lines."""

    id: str
    label: str
    pattern: str  # Regex source, usually with a named group "title"
    level: int  # 1 = chapter, 2 = section, 3 = subsection
    enabled: bool = True
    builtin: bool = False


@dataclass(frozen=True)
class CompiledMatcher:
    """A compiled heading pattern."""

    regex: Any  # regex.Pattern
    level: int


@dataclass(frozen=True)
class HeadingMatch:
    """A heading line accepted for a given page."""

    title: str
    level: int
    page_number: int


@dataclass(frozen=True)
class ExtractionProgress:
    """Snapshot emitted after each processed page."""

    current_page: int
    total_pages: int
    found_count: int


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class BookmarkNode:
    """A bookmark (outline entry) pointing at a 1-based page."""

    title: str
    page_number: int
    children: list["BookmarkNode"] = field(default_factory=list)
    id: str = field(default_factory=_new_id)
