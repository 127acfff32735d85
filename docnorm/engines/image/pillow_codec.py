"""
Pillow image codec for Docnorm

Decodes PNG/JPEG/WebP (and anything else Pillow understands) into an upright
pixel buffer and re-encodes it to JPEG, PNG or WebP.

Decoding is two-pass: Image.verify() walks the file structure first (for PNG
this checks every chunk CRC, which a plain load() skips for IDAT data), then
a fresh handle is fully loaded. Corrupt uploads therefore fail here instead of
producing a PDF from half-decoded pixels.

Requirements:
- Pillow with libjpeg and libwebp (the PyPI wheels include both)
"""

import io
import struct
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from . import register_image_codec
from .base import DecodedImage, EncodedJpeg
from ...errors import DecodeError, EncodeError
from ...utilities import Print

# Everything Pillow raises for unreadable, truncated or hostile input
DECODE_ERRORS = (
    UnidentifiedImageError,
    OSError,
    SyntaxError,
    ValueError,
    EOFError,
    struct.error,
    Image.DecompressionBombError,
)

# Modes the rest of the pipeline works in
WORKING_MODES = ('L', 'LA', 'RGB', 'RGBA')


@register_image_codec("pillow")
class PillowCodecFactory:
    """Factory for creating Pillow codec instances."""

    @staticmethod
    def create(config: dict) -> "PillowCodec":
        return PillowCodec(config)


class PillowCodec:
    """
    Pillow implementation of the ImageCodec protocol.

    Attributes:
        apply_exif_orientation: Rotate/flip according to the EXIF Orientation tag
    """

    def __init__(self, config: dict):
        """
        Initialize codec with configuration.

        Args:
            config: Configuration dictionary with optional keys:
                - apply_exif_orientation: bool (default: True)
        """
        self.apply_exif_orientation = config.get('apply_exif_orientation', True)

    def decode(self, data: bytes) -> DecodedImage:
        if not data:
            raise DecodeError("Failed to process image: input is empty")

        try:
            with Image.open(io.BytesIO(data)) as probe:
                probe.verify()

            # verify() leaves the handle unusable, so reopen for the real load
            with Image.open(io.BytesIO(data)) as source:
                source_format = source.format
                source.load()

                # Both branches yield an image detached from the source handle
                if self.apply_exif_orientation:
                    image = ImageOps.exif_transpose(source)
                else:
                    image = source.copy()

            image = self._to_working_mode(image)

        except DECODE_ERRORS as e:
            raise DecodeError(f"Failed to process image: {e}") from e

        Print("DEBUG", f"Decoded {source_format} {image.width}x{image.height} ({image.mode})")
        return DecodedImage(image=image, source_format=source_format)

    def decode_file(self, path: Union[str, Path]) -> DecodedImage:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DecodeError(f"Failed to open image file '{path}': {e}") from e

        try:
            return self.decode(data)
        except DecodeError as e:
            raise DecodeError(f"Failed to open image file '{path}': {e}") from e

    def resize(self, image: DecodedImage, width: int, height: int) -> DecodedImage:
        Print("DEBUG", f"Resizing {image.width}x{image.height} -> {width}x{height} (Lanczos)")
        resized = image.image.resize((width, height), Image.Resampling.LANCZOS)
        return DecodedImage(image=resized, source_format=image.source_format)

    def encode_jpeg(self, image: DecodedImage, quality: int) -> EncodedJpeg:
        quality = max(1, min(100, int(quality)))
        rgb = self._flatten_to_rgb(image.image)

        buffer = io.BytesIO()
        try:
            rgb.save(buffer, format='JPEG', quality=quality)
        except (OSError, ValueError) as e:
            raise EncodeError(f"Failed to process image: JPEG encoding failed: {e}") from e

        data = buffer.getvalue()
        Print("DEBUG", f"JPEG q={quality}: {rgb.width}x{rgb.height} -> {len(data):,} bytes")
        return EncodedJpeg(data=data, width=rgb.width, height=rgb.height)

    def encode_png(self, image: DecodedImage) -> bytes:
        buffer = io.BytesIO()
        try:
            image.image.save(buffer, format='PNG')
        except (OSError, ValueError) as e:
            raise EncodeError(f"Failed to process image: PNG encoding failed: {e}") from e
        return buffer.getvalue()

    def encode_webp(self, image: DecodedImage, quality: Optional[int] = None) -> bytes:
        img = image.image
        if img.mode == 'L':
            img = img.convert('RGB')
        elif img.mode == 'LA':
            img = img.convert('RGBA')

        buffer = io.BytesIO()
        try:
            if quality is None:
                img.save(buffer, format='WEBP', lossless=True)
            else:
                img.save(buffer, format='WEBP', quality=max(1, min(100, int(quality))))
        except (OSError, ValueError, KeyError) as e:
            # KeyError: Pillow built without WebP support
            raise EncodeError(f"Failed to process image: WebP encoding failed: {e}") from e
        return buffer.getvalue()

    def _to_working_mode(self, img: Image.Image) -> Image.Image:
        """Convert palette, bilevel, CMYK and high bit-depth modes to L/LA/RGB/RGBA."""
        if img.mode in WORKING_MODES:
            return img

        original_mode = img.mode
        if img.mode == 'P' or img.mode == 'PA':
            img = img.convert('RGBA' if 'transparency' in img.info or img.mode == 'PA' else 'RGB')
        elif img.mode == '1':
            img = img.convert('L')
        else:
            img = img.convert('RGB')

        Print("DEBUG", f"Converted {original_mode} to {img.mode}")
        return img

    def _flatten_to_rgb(self, img: Image.Image) -> Image.Image:
        """Convert to RGB, compositing any alpha channel onto white."""
        if img.mode == 'RGBA':
            background = Image.new('RGB', img.size, (255, 255, 255))
            background.paste(img, mask=img.split()[3])
            return background
        elif img.mode == 'LA':
            background = Image.new('L', img.size, 255)
            background.paste(img, mask=img.split()[1])
            return background.convert('RGB')
        elif img.mode == 'RGB':
            return img
        return img.convert('RGB')

    @property
    def name(self) -> str:
        """Codec identifier."""
        return "pillow"
