"""
PDF inspection helpers.

    page_count: Page count without text extraction, or None if unreadable.
    pdf_looks_valid: Whether a file parses as a PDF holding at least one page.
"""

from pathlib import Path
from typing import Optional, Union

from PyPDF2 import PdfReader


def page_count(pdf_path: Union[str, Path]) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def pdf_looks_valid(pdf_path: Union[str, Path]) -> bool:
    """
    Check that a file is a readable PDF with at least one page.

    Neither the renderer's exit code nor the file size can be trusted, so the
    file is actually parsed. Missing, empty, corrupt and zero-page files are
    all reported as invalid.
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists() or pdf_path.stat().st_size == 0:
        return False

    pages = page_count(pdf_path)
    return pages is not None and pages > 0
