"""
Image operations that share the normalization codec.

- WebP conversion (bytes, file, Base64 inputs)
- Optimize: bounded downscale plus re-encode to JPEG/PNG/WebP
- Recursive WebP conversion of a directory tree

None of these are used by normalize(); they reuse its codec and resize
policy so behavior stays consistent (EXIF orientation, Lanczos resampling,
quality clamping).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image

from .base64_codec import base64_to_buffer
from .engines.image.base import DecodedImage, ImageCodec
from .errors import DocnormError, InvalidArgumentError
from .pipeline import get_default_pipeline
from .processors.resize import target_for_bounds
from .utilities import Print

# Extensions worth attempting even if this Pillow build does not register them
KNOWN_IMAGE_EXTENSIONS = {'jpg', 'jpeg', 'png', 'gif', 'bmp', 'ico', 'tiff', 'tif'}


@dataclass
class ImageOptimizeOptions:
    """
    Options for optimize_image.

    Attributes:
        max_width: Maximum width in pixels (0/None = no limit)
        max_height: Maximum height in pixels (0/None = no limit)
        quality: JPEG quality 1-100, only used for jpeg output
        format: 'jpeg', 'jpg', 'png', 'webp' or 'auto' (auto and unknown values give PNG)
    """
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    quality: Optional[int] = None
    format: Optional[str] = None


@dataclass
class ConversionStats:
    """Outcome of convert_images_to_webp_recursive."""
    converted: int = 0
    skipped: int = 0
    errors: int = 0
    error_messages: List[str] = field(default_factory=list)


def _codec() -> ImageCodec:
    return get_default_pipeline().image_codec


def _optimize_defaults() -> dict:
    return get_default_pipeline().config.get('optimize', {})


def image_to_webp(data: bytes) -> bytes:
    """Decode any supported image and re-encode it as lossless WebP."""
    codec = _codec()
    return codec.encode_webp(codec.decode(bytes(data)))


def image_to_webp_from_file(path: Union[str, Path]) -> bytes:
    codec = _codec()
    return codec.encode_webp(codec.decode_file(path))


def image_to_webp_from_base64(text: str) -> bytes:
    return image_to_webp(base64_to_buffer(text))


def _check_bounds(options: ImageOptimizeOptions) -> None:
    for label, value in (('max_width', options.max_width), ('max_height', options.max_height)):
        if value is not None and value < 0:
            raise InvalidArgumentError(f"{label} must be >= 0 (0 means no limit), got {value}")


def _optimize_decoded(decoded: DecodedImage, options: Optional[ImageOptimizeOptions]) -> bytes:
    codec = _codec()
    defaults = _optimize_defaults()
    options = options or ImageOptimizeOptions()
    _check_bounds(options)

    quality = options.quality if options.quality is not None else defaults.get('quality', 80)
    output_format = (options.format or defaults.get('format', 'auto')).lower()

    target = target_for_bounds(decoded.width, decoded.height, options.max_width, options.max_height)
    if target is not None:
        decoded = codec.resize(decoded, target.width, target.height)

    if output_format in ('jpeg', 'jpg'):
        out = codec.encode_jpeg(decoded, quality).data
    elif output_format == 'webp':
        out = codec.encode_webp(decoded)
    else:
        out = codec.encode_png(decoded)

    Print("DEBUG", f"Optimized to {output_format} {decoded.width}x{decoded.height}: {len(out):,} bytes")
    return out


def optimize_image(data: bytes, options: Optional[ImageOptimizeOptions] = None) -> bytes:
    """
    Resize and/or recompress an image.

    Raises:
        DecodeError: If the bytes are not a decodable image
        InvalidArgumentError: If max_width or max_height is negative
    """
    return _optimize_decoded(_codec().decode(bytes(data)), options)


def optimize_image_from_file(path: Union[str, Path], options: Optional[ImageOptimizeOptions] = None) -> bytes:
    return _optimize_decoded(_codec().decode_file(path), options)


def optimize_image_from_base64(text: str, options: Optional[ImageOptimizeOptions] = None) -> bytes:
    return optimize_image(base64_to_buffer(text), options)


def _is_potential_image(extension: str) -> bool:
    return extension in KNOWN_IMAGE_EXTENSIONS or f".{extension}" in Image.registered_extensions()


def convert_images_to_webp_recursive(dir_path: Union[str, Path]) -> ConversionStats:
    """
    Write a .webp sibling for every image under dir_path.

    Originals are kept. Files that are already WebP, are not images, or
    already have a .webp sibling are skipped. A failure on one file is
    recorded and the walk continues.

    Raises:
        InvalidArgumentError: If dir_path does not exist or is not a directory
    """
    root = Path(dir_path)
    if not root.exists():
        raise InvalidArgumentError(f"Directory does not exist: {dir_path}")
    if not root.is_dir():
        raise InvalidArgumentError(f"Path is not a directory: {dir_path}")

    codec = _codec()
    stats = ConversionStats()

    # Snapshot first so freshly written .webp files are not revisited
    files = sorted(p for p in root.rglob('*') if p.is_file())
    Print("STATE", f"Scanning {len(files)} files under {root}")

    for file_path in files:
        extension = file_path.suffix.lower().lstrip('.')

        if not extension or extension == 'webp' or not _is_potential_image(extension):
            stats.skipped += 1
            continue

        webp_path = file_path.with_suffix('.webp')
        if webp_path.exists():
            stats.skipped += 1
            continue

        try:
            webp_data = codec.encode_webp(codec.decode_file(file_path))
        except DocnormError as e:
            stats.errors += 1
            stats.error_messages.append(f"Failed to convert '{file_path}': {e}")
            continue

        try:
            webp_path.write_bytes(webp_data)
        except OSError as e:
            stats.errors += 1
            stats.error_messages.append(f"Failed to write WebP file '{webp_path}': {e}")
            continue

        stats.converted += 1
        Print("DEBUG", f"Converted {file_path.name} -> {webp_path.name}")

    Print("COMPLETED", f"WebP conversion: {stats.converted} converted, {stats.skipped} skipped, {stats.errors} errors")
    return stats
