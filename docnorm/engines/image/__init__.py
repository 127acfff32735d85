"""Image codec registry for Docnorm."""

from .base import DecodedImage, EncodedJpeg, ImageCodec
from ..registry import EngineRegistry

IMAGE_CODEC_REGISTRY: EngineRegistry[ImageCodec] = EngineRegistry("image codec")

register_image_codec = IMAGE_CODEC_REGISTRY.register


def get_image_codec(name: str, config: dict) -> ImageCodec:
    """Get an image codec instance by name (ValueError if unknown)."""
    return IMAGE_CODEC_REGISTRY.get(name, config)


# Import codecs to trigger registration
from . import pillow_codec  # noqa: E402,F401

__all__ = ['DecodedImage', 'EncodedJpeg', 'ImageCodec', 'get_image_codec', 'register_image_codec']
