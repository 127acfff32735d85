"""
Text extraction from PDFs.

Independent of normalization; shares the default pipeline's configuration.
"""

from typing import List

from .pipeline import get_default_pipeline


def extract_pages_from_pdf(data: bytes) -> List[str]:
    """
    Text of each page, in page order.

    Raises:
        InvalidArgumentError: "Failed to extract text from PDF: ..."
    """
    return get_default_pipeline().extract_pages(data)


def extract_text_from_pdf(data: bytes) -> str:
    """All page texts joined with newlines."""
    return "\n".join(extract_pages_from_pdf(data))
