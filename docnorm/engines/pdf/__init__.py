"""
PDF Writer Registry for Docnorm

Writers synthesize the single-page PDF for image uploads and validate
declared-PDF uploads.
"""

from .base import PDF_MAGIC, PDFWriter
from ..registry import EngineRegistry

PDF_WRITER_REGISTRY: EngineRegistry[PDFWriter] = EngineRegistry("PDF writer")

register_pdf_writer = PDF_WRITER_REGISTRY.register


def get_pdf_writer(name: str, config: dict) -> PDFWriter:
    """
    Get a PDF writer instance by name.

    Args:
        name: Writer identifier (must be registered)
        config: Writer-specific configuration dictionary

    Raises:
        ValueError: If writer name is not registered
    """
    return PDF_WRITER_REGISTRY.get(name, config)


# Import writers to trigger registration
from . import pikepdf_writer  # noqa: E402,F401

__all__ = ['PDF_MAGIC', 'PDFWriter', 'get_pdf_writer', 'register_pdf_writer']
