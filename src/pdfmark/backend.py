"""Text retrieval from PDF documents."""

from typing import Protocol

import fitz  # type: ignore

from pdfmark.models import TextFragment


class TextSource(Protocol):
    """A document that can hand out positioned text per page."""

    @property
    def page_count(self) -> int: ...

    def get_text_fragments(self, page_number: int) -> list[TextFragment]:
        """Return the text fragments of a 1-based page."""
        ...


class FitzTextSource:
    """TextSource backed by a PyMuPDF document."""

    def __init__(self, doc: fitz.Document) -> None:
        self.doc = doc

    @property
    def page_count(self) -> int:
        return len(self.doc)

    def get_text_fragments(self, page_number: int) -> list[TextFragment]:
        page: fitz.Page = self.doc[page_number - 1]
        height = page.rect.height
        fragments: list[TextFragment] = []

        for block in page.get_text("dict")["blocks"]:
            for line in block.get("lines", []):
                for span in line["spans"]:
                    text = span["text"]
                    if not text:
                        continue
                    x, y = span["origin"]
                    # PyMuPDF measures y from the top; flip to PDF user space
                    fragments.append(
                        TextFragment(
                            text=text,
                            transform=(1.0, 0.0, 0.0, 1.0, x, height - y),
                        )
                    )

        return fragments
