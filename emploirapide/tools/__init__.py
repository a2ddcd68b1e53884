"""
Clients for external collaborators.

- jsearch: External job search via the JSearch API
- storage: File storage (Cloudinary or local filesystem)
- pdf_parser: CV PDF checks
"""

from emploirapide.tools.jsearch import JSearchClient
from emploirapide.tools.pdf_parser import count_pdf_pages
from emploirapide.tools.storage import (
    CloudinaryStorage,
    FileStorage,
    LocalFileStorage,
    StoredFile,
    get_storage_for,
)

__all__ = [
    "JSearchClient",
    "count_pdf_pages",
    "FileStorage",
    "LocalFileStorage",
    "CloudinaryStorage",
    "StoredFile",
    "get_storage_for",
]
