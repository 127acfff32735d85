"""
Docnorm v0.1: normalize uploaded documents (PNG/JPEG images or PDFs) into PDF.
"""

from .base64_codec import base64_to_buffer, buffer_to_base64
from .errors import (
    CompressionUnavailable,
    DecodeError,
    DocnormError,
    EncodeError,
    InvalidArgumentError,
    InvalidFormat,
    UnsupportedMediaType,
)
from .images import (
    ConversionStats,
    ImageOptimizeOptions,
    convert_images_to_webp_recursive,
    image_to_webp,
    image_to_webp_from_base64,
    image_to_webp_from_file,
    optimize_image,
    optimize_image_from_base64,
    optimize_image_from_file,
)
from .pdf_text import extract_pages_from_pdf, extract_text_from_pdf
from .pipeline import (
    DocumentKind,
    NormalizationPipeline,
    classify_mime,
    get_default_pipeline,
    normalize_cv_to_pdf,
)

__version__ = "0.1.0"

__all__ = [
    'CompressionUnavailable',
    'ConversionStats',
    'DecodeError',
    'DocnormError',
    'DocumentKind',
    'EncodeError',
    'ImageOptimizeOptions',
    'InvalidArgumentError',
    'InvalidFormat',
    'NormalizationPipeline',
    'UnsupportedMediaType',
    'base64_to_buffer',
    'buffer_to_base64',
    'classify_mime',
    'convert_images_to_webp_recursive',
    'extract_pages_from_pdf',
    'extract_text_from_pdf',
    'get_default_pipeline',
    'image_to_webp',
    'image_to_webp_from_base64',
    'image_to_webp_from_file',
    'normalize_cv_to_pdf',
    'optimize_image',
    'optimize_image_from_base64',
    'optimize_image_from_file',
]
