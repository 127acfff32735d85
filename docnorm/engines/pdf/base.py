"""
PDF Writer Protocol for Docnorm

Defines the contract that all PDF writers must implement.
"""

from typing import Protocol

from ..image.base import EncodedJpeg

PDF_MAGIC = b"%PDF-"


class PDFWriter(Protocol):
    """
    Protocol for PDF writers.

    PDF writers are responsible for:
    - Wrapping one JPEG image in a minimal single-page PDF
    - Validating that declared-PDF input really is a PDF byte stream
    """

    def synthesize(self, jpeg: EncodedJpeg) -> bytes:
        """
        Build a single-page PDF that displays the JPEG full-page.

        The JPEG bytes are embedded unchanged (DCTDecode).

        Args:
            jpeg: Encoded JPEG with its pixel dimensions

        Returns:
            PDF bytes starting with %PDF-
        """
        ...

    def validate(self, data: bytes) -> bytes:
        """
        Check the %PDF- header and return the bytes unchanged.

        Raises:
            InvalidFormat: If the first five bytes are not %PDF-
        """
        ...

    @property
    def name(self) -> str:
        """Writer identifier for logging and debugging (e.g. 'pikepdf')."""
        ...
