"""
pypdf text extractor for Docnorm

Reads the existing text layer of a PDF. No OCR: scanned pages without a
text layer come back as empty strings.
"""

import io
from typing import List

from pypdf import PdfReader

from . import register_text_extractor
from ...errors import InvalidArgumentError
from ...utilities import Print


@register_text_extractor("pypdf")
class PypdfExtractorFactory:
    """Factory for creating pypdf extractor instances."""

    @staticmethod
    def create(config: dict) -> "PypdfExtractor":
        return PypdfExtractor(config)


class PypdfExtractor:
    """
    pypdf implementation of the TextExtractor protocol.

    Attributes:
        strict: Passed to PdfReader; False tolerates minor structural damage
    """

    def __init__(self, config: dict):
        self.strict = config.get('strict', False)

    def extract_pages(self, data: bytes) -> List[str]:
        try:
            reader = PdfReader(io.BytesIO(data), strict=self.strict)
            pages = [page.extract_text() or "" for page in reader.pages]
        except Exception as e:
            # pypdf raises a wide mix of PdfReadError, ValueError, KeyError... on damaged input
            raise InvalidArgumentError(f"Failed to extract text from PDF: {e}") from e

        Print("DEBUG", f"Extracted text from {len(pages)} page{'s' if len(pages) != 1 else ''}")
        return pages

    @property
    def name(self) -> str:
        """Extractor identifier."""
        return "pypdf"
