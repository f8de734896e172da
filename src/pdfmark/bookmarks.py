"""Bookmark (outline) persistence for PDFs."""

from collections.abc import Sequence
from pathlib import Path

import fitz  # type: ignore

from pdfmark.models import BookmarkNode
from pdfmark.tree import count_nodes, flatten_tree, tree_from_toc


def read_bookmarks(doc: fitz.Document) -> list[BookmarkNode]:
    """
    Get the existing outline of a PDF as a bookmark forest.

    Entries whose destination cannot be resolved point at page 1. Returns
    an empty forest if the outline cannot be read.
    """
    try:
        toc = doc.get_toc(simple=True)
    except (RuntimeError, ValueError):
        return []

    rows = []
    for level, title, page in toc:
        rows.append([level, title, page if page >= 1 else 1])
    return tree_from_toc(rows)


def write_bookmarks(
    pdf_path: Path,
    bookmarks: Sequence[BookmarkNode],
    output_path: Path,
    verbose: bool,
) -> None:
    """Replace the outline of a PDF with `bookmarks` and save it."""
    doc: fitz.Document = fitz.open(pdf_path)

    try:
        page_count = len(doc)

        # PyMuPDF format: [level, title, page]; levels never skip when
        # flattened from a tree
        toc: list[list[int | str]] = []
        for level, title, page in flatten_tree(bookmarks):
            pdf_page = int(page)
            if pdf_page < 1:
                pdf_page = 1
            if pdf_page > page_count:
                pdf_page = page_count
            toc.append([level, title, pdf_page])

        doc.set_toc(toc)  # type: ignore
        if verbose:
            if toc:
                print(f"Added {count_nodes(bookmarks)} bookmarks to PDF")
            else:
                print("No bookmarks to add, outline cleared")

        doc.save(output_path)
    finally:
        doc.close()
