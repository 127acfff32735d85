"""
pikepdf-based PDF writer for Docnorm

Builds the smallest useful PDF around one JPEG: a single page, one Image
XObject, and a four-operator content stream that paints the image over the
whole MediaBox.

The JPEG bytes are stored untouched with /Filter /DCTDecode, so no pixel data
is re-encoded here. Page size comes from the pixel dimensions and the
configured DPI (72 DPI makes one pixel one PDF point).

Declared-PDF input is never parsed or rewritten; validate() only checks the
%PDF- header.
"""

import io
from typing import List

import pikepdf

from . import register_pdf_writer
from .base import PDF_MAGIC
from ..image.base import EncodedJpeg
from ...errors import EncodeError, InvalidFormat
from ...utilities import Print


@register_pdf_writer("pikepdf")
class PikePDFWriterFactory:
    """Factory for creating pikepdf writer instances."""

    @staticmethod
    def create(config: dict) -> "PikePDFWriter":
        return PikePDFWriter(config)


class PikePDFWriter:
    """
    pikepdf implementation of the PDFWriter protocol.

    Attributes:
        dpi: Resolution used to convert pixels to PDF points
    """

    def __init__(self, config: dict):
        """
        Initialize PDF writer with configuration.

        Args:
            config: Configuration dictionary with optional keys:
                - dpi: int - Pixel density for page sizing (default: 72)
        """
        self.dpi = config.get('dpi', 72) or 72

    def synthesize(self, jpeg: EncodedJpeg) -> bytes:
        if jpeg.width < 1 or jpeg.height < 1:
            raise EncodeError(f"Failed to process image: invalid dimensions {jpeg.width}x{jpeg.height}")

        # PDF coordinate system: origin at bottom-left, 72 points = 1 inch
        width_pt = (jpeg.width / self.dpi) * 72.0
        height_pt = (jpeg.height / self.dpi) * 72.0

        Print("DEBUG", f"Page size: {width_pt:.1f} x {height_pt:.1f} points ({jpeg.width}x{jpeg.height}px at {self.dpi} DPI)")

        buffer = io.BytesIO()
        with pikepdf.Pdf.new() as pdf:
            content_stream = b'\n'.join(self._build_image_layer(width_pt, height_pt))
            self._create_page(pdf, content_stream, jpeg, width_pt, height_pt)
            pdf.save(buffer, deterministic_id=True)

        data = buffer.getvalue()
        Print("DEBUG", f"Synthesized single-page PDF: {len(data):,} bytes")
        return data

    def validate(self, data: bytes) -> bytes:
        if data[:len(PDF_MAGIC)] != PDF_MAGIC:
            preview = bytes(data[:len(PDF_MAGIC)])
            raise InvalidFormat(
                f"Invalid PDF: expected header {PDF_MAGIC!r}, got {preview!r}"
            )
        return data

    def _build_image_layer(self, width_pt: float, height_pt: float) -> List[bytes]:
        """
        Build image drawing commands for the content stream.

        - q: Save graphics state
        - cm: Scale the unit square to the page size
        - Do: Paint XObject /Im1
        - Q: Restore graphics state
        """
        return [
            b'q',
            f'{width_pt:.2f} 0 0 {height_pt:.2f} 0 0 cm'.encode('latin-1'),
            b'/Im1 Do',
            b'Q'
        ]

    def _create_page(
        self,
        pdf: pikepdf.Pdf,
        content_stream: bytes,
        jpeg: EncodedJpeg,
        width_pt: float,
        height_pt: float
    ) -> pikepdf.Page:
        """Add the page with its image XObject and content stream to pdf."""
        # Data is already DCT-encoded; pikepdf stores it as-is
        image_stream = pikepdf.Stream(pdf, jpeg.data)
        image_stream.stream_dict[pikepdf.Name.Type] = pikepdf.Name.XObject
        image_stream.stream_dict[pikepdf.Name.Subtype] = pikepdf.Name.Image
        image_stream.stream_dict[pikepdf.Name.Width] = jpeg.width
        image_stream.stream_dict[pikepdf.Name.Height] = jpeg.height
        image_stream.stream_dict[pikepdf.Name.ColorSpace] = pikepdf.Name.DeviceRGB
        image_stream.stream_dict[pikepdf.Name.BitsPerComponent] = 8
        image_stream.stream_dict[pikepdf.Name.Filter] = pikepdf.Name.DCTDecode

        image_obj = pdf.make_indirect(image_stream)

        resources = pikepdf.Dictionary(
            XObject=pikepdf.Dictionary(Im1=image_obj)
        )
        content_obj = pdf.make_indirect(pikepdf.Stream(pdf, content_stream))

        page = pdf.add_blank_page(page_size=(width_pt, height_pt))
        page.obj.Resources = pdf.make_indirect(resources)
        page.obj.Contents = content_obj

        return page

    @property
    def name(self) -> str:
        """Writer identifier."""
        return "pikepdf"
