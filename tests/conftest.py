"""Test fixtures and configuration for pdfmark tests."""

import sys
from pathlib import Path

# Add tests directory to path so pdf_builders can be imported
sys.path.insert(0, str(Path(__file__).parent))

import pytest

from pdf_builders import SAMPLE_PAGES, build_pdf

from pdfmark.models import HeadingPattern
from pdfmark.patterns import compile_patterns, default_patterns


# ============================================================================
# Pytest Fixtures
# ============================================================================


@pytest.fixture
def builtin_patterns() -> list[HeadingPattern]:
    """The default chapter/section/subsection patterns."""
    return default_patterns()


@pytest.fixture
def builtin_matchers(builtin_patterns: list[HeadingPattern]):
    """Compiled default patterns."""
    return compile_patterns(builtin_patterns)


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """A generated three-page PDF with numbered headings."""
    return build_pdf(tmp_path / "sample.pdf", SAMPLE_PAGES)


@pytest.fixture
def temp_output_pdf(tmp_path: Path) -> Path:
    """Fixture providing a temporary output PDF path (cleaned up after test)."""
    return tmp_path / "output.pdf"


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: test reads or writes real PDF files"
    )
