"""Exceptions raised by pdfmark."""


class PatternCompileError(ValueError):
    """A heading pattern's source is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid heading pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class ExtractionFailure(RuntimeError):
    """Text retrieval for a page failed."""

    def __init__(self, page_number: int, reason: str) -> None:
        super().__init__(f"Failed to read text on page {page_number}: {reason}")
        self.page_number = page_number
        self.reason = reason
