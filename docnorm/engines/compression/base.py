"""
PDF Compressor Protocol for Docnorm

Defines the contract that all PDF compression strategies must implement.
"""

from pathlib import Path
from typing import Optional, Protocol


class PDFCompressor(Protocol):
    """
    Protocol for PDF compression strategies.

    Compressors are best-effort: a compressor that cannot produce output
    returns None (or raises CompressionUnavailable) and the caller keeps
    the original bytes. Any scratch files a compressor creates must be
    gone by the time compress() returns.
    """

    def compress(self, input_path: Path) -> Optional[bytes]:
        """
        Compress the PDF at input_path.

        Args:
            input_path: Path to a readable PDF file (owned by the caller)

        Returns:
            Compressed PDF bytes, or None if compression was not possible

        Raises:
            CompressionUnavailable: Optional alternative to returning None
        """
        ...

    @property
    def name(self) -> str:
        """
        Compressor identifier for logging and debugging.

        Returns:
            Unique name of this compressor (e.g., 'ghostscript', 'none')
        """
        ...
