"""
Text Extractor Protocol for Docnorm
"""

from typing import List, Protocol


class TextExtractor(Protocol):
    """Protocol for engines that pull the text layer out of a PDF."""

    def extract_pages(self, data: bytes) -> List[str]:
        """
        Extract text per page, in page order.

        Pages without a text layer yield an empty string.

        Raises:
            InvalidArgumentError: If the bytes cannot be parsed as a PDF
        """
        ...

    @property
    def name(self) -> str:
        """Extractor identifier (e.g. 'pypdf')."""
        ...
