# pdfmark: automatic PDF bookmarks from headings

from pdfmark.bookmarks import read_bookmarks, write_bookmarks
from pdfmark.core import process_pdf
from pdfmark.errors import ExtractionFailure, PatternCompileError
from pdfmark.extraction import auto_generate_bookmarks, extract_headings
from pdfmark.models import (
    BookmarkNode,
    ExtractionProgress,
    HeadingMatch,
    HeadingPattern,
    TextFragment,
)
from pdfmark.patterns import (
    compile_patterns,
    create_pattern,
    default_patterns,
    load_patterns,
    save_patterns,
)
from pdfmark.tree import build_bookmark_tree

__all__ = [
    "BookmarkNode",
    "ExtractionProgress",
    "HeadingMatch",
    "HeadingPattern",
    "TextFragment",
    "PatternCompileError",
    "ExtractionFailure",
    "default_patterns",
    "create_pattern",
    "compile_patterns",
    "load_patterns",
    "save_patterns",
    "extract_headings",
    "auto_generate_bookmarks",
    "build_bookmark_tree",
    "read_bookmarks",
    "write_bookmarks",
    "process_pdf",
]
