"""
Docnorm: normalize uploaded documents into a single canonical PDF.

This is the orchestrator that wires the engines together. Input is a byte
string plus its declared media type; output is always one of:

- a single-page PDF synthesized from a PNG/JPEG upload,
- the uploaded PDF, validated and (when Ghostscript helps) compressed,
- the original bytes unchanged, for media types that are not recognized.

Architecture:
- Factory registries for every engine family (image codec, PDF writer,
  PDF compressor, text extractor)
- Protocol-based contracts, so tests can inject fakes
- Media type classified once into a DocumentKind, then dispatched

Usage:
    from docnorm import NormalizationPipeline

    pipeline = NormalizationPipeline()
    pipeline.initialize()
    pdf_bytes = pipeline.normalize(upload_bytes, "image/png")

Or through the shared default pipeline:
    from docnorm import normalize_cv_to_pdf
    pdf_bytes = normalize_cv_to_pdf(upload_bytes, "application/pdf")
"""

import threading
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from .config import load_config, section
from .engines.compression import get_compressor
from .engines.compression.base import PDFCompressor
from .engines.image import get_image_codec
from .engines.pdf import get_pdf_writer
from .engines.text import get_text_extractor
from .errors import UnsupportedMediaType
from .processors.pdf_optimizer import PDFOptimizer
from .processors.resize import DEFAULT_MAX_SIDE, target_for_ceiling
from .utilities import Print

IMAGE_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/jpg", "image/pjpeg"})
PDF_MIME_TYPES = frozenset({"application/pdf", "application/x-pdf"})

DEFAULT_JPEG_QUALITY = 85


class DocumentKind(Enum):
    """Closed set of normalization paths."""
    IMAGE = "image"
    PDF = "pdf"
    PASSTHROUGH = "passthrough"


def classify_mime(mime: Optional[str]) -> DocumentKind:
    """
    Map a declared media type to its normalization path.

    Parameters (``; charset=...``), surrounding whitespace and case are ignored.
    """
    media_type = (mime or "").split(";", 1)[0].strip().lower()
    if media_type in IMAGE_MIME_TYPES:
        return DocumentKind.IMAGE
    if media_type in PDF_MIME_TYPES:
        return DocumentKind.PDF
    return DocumentKind.PASSTHROUGH


class NormalizationPipeline:
    """
    Main orchestrator for Docnorm.

    Image path:
    1. Decode (Pillow, EXIF orientation applied)
    2. Downscale so the longer side is at most max_image_side (Lanczos)
    3. Re-encode as JPEG
    4. Embed in a single-page PDF (pikepdf)

    PDF path:
    1. Validate the %PDF- header
    2. Compress through the configured PDFCompressor, keep the smaller result

    Attributes:
        config: Loaded configuration dictionary
        image_codec: Initialized image codec instance
        pdf_writer: Initialized PDF writer instance
        optimizer: PDFOptimizer around the configured compressor
        text_extractor: Initialized text extractor instance
        max_image_side: Downscale ceiling for the image path
        jpeg_quality: JPEG quality for the image path
        strict_mime: Reject unrecognized media types instead of passing through
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None, config: Optional[dict] = None):
        """
        Initialize pipeline with configuration.

        Args:
            config_path: Path to config.json. If None, uses the packaged default.
            config: Already-loaded configuration; takes precedence over config_path.
        """
        self.config = config if config is not None else load_config(config_path)

        processing = self.config.get('processing', {})
        self.max_image_side = processing.get('max_image_side', DEFAULT_MAX_SIDE)
        self.jpeg_quality = processing.get('jpeg_quality', DEFAULT_JPEG_QUALITY)
        self.strict_mime = processing.get('strict_mime', False)
        self.temp_dir = processing.get('temp_dir')

        self.image_codec = None
        self.pdf_writer = None
        self.optimizer = None
        self.text_extractor = None
        self._initialized = False

    def initialize(
        self,
        image_codec_name: Optional[str] = None,
        pdf_writer_name: Optional[str] = None,
        compressor: Union[str, PDFCompressor, None] = None,
        text_extractor_name: Optional[str] = None
    ) -> "NormalizationPipeline":
        """
        Initialize all engines.

        This must be called before normalize(). Names default to the
        ``processing`` block of the configuration.

        Args:
            image_codec_name: Registered image codec (default: pillow)
            pdf_writer_name: Registered PDF writer (default: pikepdf)
            compressor: Registered compressor name, or a PDFCompressor instance
            text_extractor_name: Registered text extractor (default: pypdf)

        Returns:
            self, for chaining

        Raises:
            ValueError: If a name is not registered
        """
        processing = self.config.get('processing', {})
        Print("STARTING", f"Initializing Docnorm v{self.config.get('version', '0.1.0')} pipeline")

        image_codec_name = image_codec_name or processing.get('image_codec', 'pillow')
        self.image_codec = get_image_codec(image_codec_name, section(self.config, 'image_codecs', image_codec_name))
        Print("DEBUG", f"Image codec: {self.image_codec.name}")

        pdf_writer_name = pdf_writer_name or processing.get('pdf_writer', 'pikepdf')
        self.pdf_writer = get_pdf_writer(pdf_writer_name, section(self.config, 'pdf_writers', pdf_writer_name))
        Print("DEBUG", f"PDF writer: {self.pdf_writer.name}")

        if compressor is None or isinstance(compressor, str):
            compressor_name = compressor or processing.get('compressor', 'ghostscript')
            comp_config = dict(section(self.config, 'compression', compressor_name))
            comp_config.setdefault('temp_dir', self.temp_dir)
            compressor = get_compressor(compressor_name, comp_config)
        self.optimizer = PDFOptimizer(compressor, temp_dir=self.temp_dir)
        Print("DEBUG", f"PDF compressor: {compressor.name}")

        text_extractor_name = text_extractor_name or processing.get('text_extractor', 'pypdf')
        self.text_extractor = get_text_extractor(
            text_extractor_name, section(self.config, 'text_extractors', text_extractor_name)
        )
        Print("DEBUG", f"Text extractor: {self.text_extractor.name}")

        self._initialized = True
        Print("SUCCESS", "Pipeline initialized")
        return self

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Pipeline not initialized. Call initialize() first.")

    def normalize(self, data: bytes, mime: str) -> bytes:
        """
        Normalize one document.

        Args:
            data: Uploaded bytes
            mime: Declared media type

        Returns:
            PDF bytes starting with %PDF-, or data unchanged for unrecognized types

        Raises:
            DecodeError: Image bytes could not be decoded
            InvalidFormat: Declared PDF without a %PDF- header
            EncodeError: Re-encoding failed
            UnsupportedMediaType: Unrecognized type while strict_mime is on
            RuntimeError: If the pipeline is not initialized
        """
        self._require_initialized()
        data = bytes(data)

        kind = classify_mime(mime)
        Print("STATE", f"Normalizing {len(data):,} bytes declared '{mime}' as {kind.value}")

        if kind is DocumentKind.IMAGE:
            return self._normalize_image(data)
        if kind is DocumentKind.PDF:
            return self._normalize_pdf(data)

        if self.strict_mime:
            raise UnsupportedMediaType(f"Unsupported media type: '{mime}'")
        Print("DEBUG", f"Unrecognized media type '{mime}', passing bytes through")
        return data

    def _normalize_image(self, data: bytes) -> bytes:
        decoded = self.image_codec.decode(data)

        target = target_for_ceiling(decoded.width, decoded.height, self.max_image_side)
        if target is not None:
            decoded = self.image_codec.resize(decoded, target.width, target.height)

        jpeg = self.image_codec.encode_jpeg(decoded, self.jpeg_quality)
        pdf_bytes = self.pdf_writer.synthesize(jpeg)

        Print("SUCCESS", f"Image {jpeg.width}x{jpeg.height} -> PDF ({len(pdf_bytes):,} bytes)")
        return pdf_bytes

    def _normalize_pdf(self, data: bytes) -> bytes:
        validated = self.pdf_writer.validate(data)
        result = self.optimizer.optimize(validated)
        Print("SUCCESS", f"PDF {len(data):,} -> {len(result):,} bytes")
        return result

    def extract_pages(self, data: bytes) -> List[str]:
        """Text of each page of a PDF (see docnorm.pdf_text)."""
        self._require_initialized()
        return self.text_extractor.extract_pages(bytes(data))


_default_pipeline: Optional[NormalizationPipeline] = None
_default_lock = threading.Lock()


def get_default_pipeline() -> NormalizationPipeline:
    """Shared pipeline built from the packaged configuration, created on first use."""
    global _default_pipeline
    with _default_lock:
        if _default_pipeline is None:
            _default_pipeline = NormalizationPipeline().initialize()
        return _default_pipeline


def configure_default_pipeline(config_path: Optional[Union[str, Path]] = None) -> NormalizationPipeline:
    """Replace the shared pipeline with one built from config_path."""
    global _default_pipeline
    pipeline = NormalizationPipeline(config_path=config_path).initialize()
    with _default_lock:
        _default_pipeline = pipeline
    return pipeline


def normalize_cv_to_pdf(data: bytes, mime: str) -> bytes:
    """
    Normalize an uploaded CV (or any document) to PDF with the default pipeline.

    The result either starts with %PDF- or is byte-identical to data.
    """
    return get_default_pipeline().normalize(data, mime)
