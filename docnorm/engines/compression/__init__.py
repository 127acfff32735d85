"""
PDF Compressor Registry for Docnorm

Usage:
    # In compressor implementation:
    @register_compressor("ghostscript")
    class GhostscriptCompressorFactory:
        @staticmethod
        def create(config: dict) -> PDFCompressor:
            return GhostscriptCompressor(config)

    # To get a compressor:
    compressor = get_compressor("ghostscript", config)
"""

from .base import PDFCompressor
from ..registry import EngineRegistry

COMPRESSOR_REGISTRY: EngineRegistry[PDFCompressor] = EngineRegistry("compressor")

register_compressor = COMPRESSOR_REGISTRY.register


def get_compressor(name: str, config: dict) -> PDFCompressor:
    """
    Get a PDF compressor instance by name.

    Raises:
        ValueError: If compressor name is not registered
    """
    return COMPRESSOR_REGISTRY.get(name, config)


# Import compressors to trigger registration
from . import ghostscript, passthrough  # noqa: E402,F401

__all__ = ['PDFCompressor', 'get_compressor', 'register_compressor']
