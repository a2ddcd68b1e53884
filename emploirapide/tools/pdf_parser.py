"""
PDF checks for CV uploads.

Uses pypdf to make sure an uploaded CV is a readable PDF before it is sent
to storage.
"""

from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from emploirapide.errors import ValidationError


def count_pdf_pages(pdf_content: bytes) -> int:
    """
    Count the pages of a PDF document.

    Args:
        pdf_content: Raw bytes of the PDF file

    Returns:
        Number of pages, always at least 1

    Raises:
        ValidationError: If the document cannot be read or has no pages
    """
    try:
        reader = PdfReader(BytesIO(pdf_content))
        pages = len(reader.pages)
    except (PdfReadError, ValueError, KeyError) as e:
        raise ValidationError(f"PDF illisible: {e}") from e

    if pages == 0:
        raise ValidationError("Le PDF ne contient aucune page")
    return pages
