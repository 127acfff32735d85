"""Text extractor registry for Docnorm."""

from .base import TextExtractor
from ..registry import EngineRegistry

TEXT_EXTRACTOR_REGISTRY: EngineRegistry[TextExtractor] = EngineRegistry("text extractor")

register_text_extractor = TEXT_EXTRACTOR_REGISTRY.register


def get_text_extractor(name: str, config: dict) -> TextExtractor:
    return TEXT_EXTRACTOR_REGISTRY.get(name, config)


# Import extractors to trigger registration
from . import pypdf_extractor  # noqa: E402,F401

__all__ = ['TextExtractor', 'get_text_extractor', 'register_text_extractor']
