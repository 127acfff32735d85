#!/usr/bin/env python3
"""
Command-line front end for Docnorm.

Examples:
  docnorm normalize cv.png
  docnorm normalize upload.bin --mime application/pdf --output upload.pdf
  docnorm webp photo.jpg
  docnorm optimize photo.jpg --max-width 800 --format jpeg --quality 75
  docnorm extract-text cv.pdf
  docnorm convert-dir ./assets
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from .errors import InvalidArgumentError
from .images import (
    ImageOptimizeOptions,
    convert_images_to_webp_recursive,
    image_to_webp_from_file,
    optimize_image_from_file,
)
from .pdf_text import extract_text_from_pdf
from .pipeline import configure_default_pipeline
from .utilities import Print, resource_usage


def guess_mime(path: Path) -> str:
    """Media type from the file extension, as an upload form would send it."""
    ext = path.suffix.lower()
    if ext == '.png':
        return 'image/png'
    if ext in ('.jpg', '.jpeg'):
        return 'image/jpeg'
    if ext == '.pdf':
        return 'application/pdf'
    return 'application/octet-stream'


def _report_size(label: str, before: int, after: int) -> None:
    Print("INFO", f"{label}: {before:,} -> {after:,} bytes")
    if before > 0:
        Print("INFO", f"Size change: {(1 - after / before) * 100:.1f}%")


def cmd_normalize(args, pipeline) -> int:
    data = args.input.read_bytes()
    mime = args.mime or guess_mime(args.input)
    Print("STATE", f"Input: {args.input} ({mime})")

    result = pipeline.normalize(data, mime)

    output = args.output or args.input.with_name(f"{args.input.stem}.normalized.pdf")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result)

    Print("COMPLETED", f"Saved: {output}")
    _report_size("Normalized", len(data), len(result))
    return 0


def cmd_webp(args, pipeline) -> int:
    result = image_to_webp_from_file(args.input)
    output = args.output or args.input.with_suffix('.webp')
    output.write_bytes(result)
    Print("COMPLETED", f"Saved: {output}")
    _report_size("WebP", args.input.stat().st_size, len(result))
    return 0


def cmd_optimize(args, pipeline) -> int:
    options = ImageOptimizeOptions(
        max_width=args.max_width,
        max_height=args.max_height,
        quality=args.quality,
        format=args.format
    )
    result = optimize_image_from_file(args.input, options)

    suffix = {'jpeg': '.jpg', 'jpg': '.jpg', 'webp': '.webp'}.get((args.format or 'auto').lower(), '.png')
    output = args.output or args.input.with_name(f"{args.input.stem}.optimized{suffix}")
    output.write_bytes(result)
    Print("COMPLETED", f"Saved: {output}")
    _report_size("Optimized", args.input.stat().st_size, len(result))
    return 0


def cmd_extract_text(args, pipeline) -> int:
    text = extract_text_from_pdf(args.input.read_bytes())
    if args.output:
        args.output.write_text(text, encoding='utf-8')
        Print("COMPLETED", f"Saved: {args.output}")
    else:
        sys.stdout.write(text + "\n")
    return 0


def cmd_convert_dir(args, pipeline) -> int:
    stats = convert_images_to_webp_recursive(args.directory)
    for message in stats.error_messages:
        Print("WARNING", message)
    return 0 if stats.errors == 0 else 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='docnorm',
        description='Docnorm: normalize uploaded documents into PDF',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docnorm normalize cv.png
  docnorm normalize upload.bin --mime application/pdf --output upload.pdf
  docnorm optimize photo.jpg --max-width 800 --format jpeg --quality 75
        """
    )
    parser.add_argument('--config', type=Path, default=None, help='Path to config.json')
    parser.add_argument('--stats', action='store_true', help='Log CPU and memory usage when done')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('normalize', help='Normalize an image or PDF into PDF')
    p.add_argument('input', type=Path)
    p.add_argument('--mime', default=None, help='Declared media type (default: guessed from extension)')
    p.add_argument('--output', type=Path, default=None)
    p.set_defaults(func=cmd_normalize)

    p = sub.add_parser('webp', help='Convert an image to WebP')
    p.add_argument('input', type=Path)
    p.add_argument('--output', type=Path, default=None)
    p.set_defaults(func=cmd_webp)

    p = sub.add_parser('optimize', help='Resize and/or recompress an image')
    p.add_argument('input', type=Path)
    p.add_argument('--max-width', type=int, default=None)
    p.add_argument('--max-height', type=int, default=None)
    p.add_argument('--quality', type=int, default=None, help='JPEG quality 1-100')
    p.add_argument('--format', default=None, choices=['auto', 'jpeg', 'jpg', 'png', 'webp'])
    p.add_argument('--output', type=Path, default=None)
    p.set_defaults(func=cmd_optimize)

    p = sub.add_parser('extract-text', help='Print the text layer of a PDF')
    p.add_argument('input', type=Path)
    p.add_argument('--output', type=Path, default=None)
    p.set_defaults(func=cmd_extract_text)

    p = sub.add_parser('convert-dir', help='Write .webp copies of every image under a directory')
    p.add_argument('directory', type=Path)
    p.set_defaults(func=cmd_convert_dir)

    return parser


def main(argv: Optional[list] = None) -> int:
    """Command-line entry point."""
    args = build_parser().parse_args(argv)

    try:
        pipeline = configure_default_pipeline(args.config)
        code = args.func(args, pipeline)
        if args.stats:
            Print("INFO", resource_usage())
        return code

    except FileNotFoundError as e:
        Print("FAILURE", str(e))
        return 1
    except InvalidArgumentError as e:
        Print("FAILURE", f"{e.kind}: {e}")
        return 1
    except RuntimeError as e:
        Print("FAILURE", str(e))
        return 2
    except KeyboardInterrupt:
        Print("WARNING", "Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
