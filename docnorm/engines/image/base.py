"""
Image Codec Protocol for Docnorm

Defines the contract that all raster image codecs must implement, plus the
value types that flow between the codec, the resize policy and the PDF writer.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Union

from PIL import Image


@dataclass
class DecodedImage:
    """
    A decoded raster image owned by a single normalization call.

    Attributes:
        image: Pillow image holding the pixel buffer (already upright)
        source_format: Format reported by the decoder (e.g. 'PNG', 'JPEG')
    """
    image: Image.Image
    source_format: Optional[str] = None

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


@dataclass(frozen=True)
class EncodedJpeg:
    """JPEG bytes with the pixel dimensions they encode."""
    data: bytes
    width: int
    height: int


class ImageCodec(Protocol):
    """
    Protocol for raster image codecs.

    Codecs are responsible for:
    - Decoding PNG/JPEG/WebP bytes into an upright pixel buffer
    - Resampling decoded images to a target box
    - Encoding pixel buffers back to JPEG, PNG or WebP bytes
    """

    def decode(self, data: bytes) -> DecodedImage:
        """
        Decode image bytes.

        Raises:
            DecodeError: If the bytes are not a parseable raster image
        """
        ...

    def decode_file(self, path: Union[str, Path]) -> DecodedImage:
        """
        Decode an image file from disk.

        Raises:
            DecodeError: If the file cannot be read or parsed
        """
        ...

    def resize(self, image: DecodedImage, width: int, height: int) -> DecodedImage:
        """Resample to exactly width x height."""
        ...

    def encode_jpeg(self, image: DecodedImage, quality: int) -> EncodedJpeg:
        """
        Encode as baseline JPEG. Quality outside 1-100 is clamped.

        Raises:
            EncodeError: If encoding fails
        """
        ...

    def encode_png(self, image: DecodedImage) -> bytes:
        """Encode as PNG."""
        ...

    def encode_webp(self, image: DecodedImage, quality: Optional[int] = None) -> bytes:
        """Encode as WebP; lossless when quality is None."""
        ...

    @property
    def name(self) -> str:
        """Codec identifier for logging and debugging (e.g. 'pillow')."""
        ...
