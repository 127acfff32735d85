"""
No-op PDF compressor for Docnorm

Selected with "compressor": "none" to turn PDF compression off; declared-PDF
input is then validated and returned byte-for-byte.
"""

from pathlib import Path
from typing import Optional

from . import register_compressor


@register_compressor("none")
class NullCompressorFactory:
    """Factory for creating no-op compressor instances."""

    @staticmethod
    def create(config: dict) -> "NullCompressor":
        return NullCompressor()


class NullCompressor:
    """Never produces output."""

    def compress(self, input_path: Path) -> Optional[bytes]:
        return None

    @property
    def name(self) -> str:
        """Compressor identifier."""
        return "none"
