#!/usr/bin/env python3
"""
Functional Test: Normalization Pipeline

This test verifies:
1. Media types are classified into image / pdf / passthrough
2. PNG and JPEG uploads become single-page PDFs with the image embedded
3. Oversized images are downscaled to the 2000 px ceiling
4. Declared PDFs are validated and never grow
5. Undecodable images and headerless PDFs fail with invalid-argument errors
6. Unrecognized media types pass through byte-for-byte (or fail in strict mode)
7. Concurrent calls do not interfere

The external compressor is replaced by fakes; no Ghostscript needed.

Usage:
    pytest tests/functional_tests/test_normalization_pipeline.py
    python tests/functional_tests/test_normalization_pipeline.py
"""

import base64
import io
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

# Add repo root to path for imports
repo_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(repo_root))

import pikepdf
from PIL import Image

from docnorm.config import load_config
from docnorm.errors import DecodeError, InvalidArgumentError, InvalidFormat, UnsupportedMediaType
from docnorm.pipeline import DocumentKind, NormalizationPipeline, classify_mime, normalize_cv_to_pdf
from docnorm.utilities import Print

# 1x1 gray+alpha PNG whose IDAT chunk CRC is wrong
MALFORMED_PNG = base64.b64decode(
    'iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO+X2O0AAAAASUVORK5CYII='
)

TINY_PDF = b"%PDF-1.4\nHello\n"


class ShrinkingCompressor:
    """Fake compressor that returns a fixed, short PDF."""

    def __init__(self, output: Optional[bytes] = b"%PDF-1.4\n"):
        self.output = output
        self.calls = 0

    def compress(self, input_path: Path) -> Optional[bytes]:
        self.calls += 1
        return self.output

    @property
    def name(self) -> str:
        return "fake-shrinking"


def make_image_bytes(size=(64, 48), fmt='PNG', mode='RGB', color=(200, 30, 30)) -> bytes:
    """Create an in-memory test image."""
    img = Image.new(mode, size, color=color)
    buffer = io.BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def make_pipeline(compressor=None, **processing) -> NormalizationPipeline:
    config = load_config()
    config['processing'].update(processing)
    return NormalizationPipeline(config=config).initialize(compressor=compressor or "none")


def embedded_image_info(pdf_bytes: bytes) -> dict:
    """Page count, MediaBox and /Im1 attributes of a synthesized PDF."""
    with pikepdf.Pdf.open(io.BytesIO(pdf_bytes)) as pdf:
        page = pdf.pages[0].obj
        image = page.Resources.XObject.Im1
        return {
            'pages': len(pdf.pages),
            'mediabox': [float(v) for v in page.MediaBox],
            'width': int(image.Width),
            'height': int(image.Height),
            'filter': str(image.Filter),
        }


def test_classify_mime():
    Print("HEADER", "Testing media type classification")

    for mime in ("image/png", "image/jpeg", "image/jpg", "image/pjpeg", "IMAGE/PNG", " image/jpeg "):
        assert classify_mime(mime) is DocumentKind.IMAGE, mime
    for mime in ("application/pdf", "application/x-pdf", "application/pdf; charset=binary"):
        assert classify_mime(mime) is DocumentKind.PDF, mime
    for mime in ("text/plain", "image/webp", "image/gif", "application/octet-stream", "", None):
        assert classify_mime(mime) is DocumentKind.PASSTHROUGH, mime

    # Upper-case PDF type still takes the PDF path
    try:
        make_pipeline().normalize(b"hello", "APPLICATION/PDF")
    except InvalidFormat:
        pass
    else:
        raise AssertionError("Expected InvalidFormat for upper-case PDF media type")

    Print("SUCCESS", "Classification correct")


def test_png_becomes_single_page_pdf():
    Print("HEADER", "Testing PNG -> PDF")
    pipeline = make_pipeline()

    out = pipeline.normalize(make_image_bytes((64, 48), 'PNG'), "image/png")

    assert out.startswith(b"%PDF-")
    info = embedded_image_info(out)
    assert info['pages'] == 1
    assert info['width'] == 64 and info['height'] == 48
    assert info['filter'] == '/DCTDecode'
    # 72 DPI: one pixel per point
    assert info['mediabox'] == [0.0, 0.0, 64.0, 48.0]
    Print("SUCCESS", f"PDF: {len(out):,} bytes, {info}")


def test_jpeg_and_transparent_png_become_pdf():
    Print("HEADER", "Testing JPEG and RGBA PNG -> PDF")
    pipeline = make_pipeline()

    jpeg_out = pipeline.normalize(make_image_bytes((30, 20), 'JPEG'), "image/jpeg")
    assert jpeg_out.startswith(b"%PDF-")

    rgba = make_image_bytes((25, 25), 'PNG', mode='RGBA', color=(0, 0, 255, 128))
    rgba_out = pipeline.normalize(rgba, "image/png")
    assert rgba_out.startswith(b"%PDF-")
    assert embedded_image_info(rgba_out)['width'] == 25

    palette = Image.new('P', (10, 12))
    buffer = io.BytesIO()
    palette.save(buffer, format='PNG')
    assert pipeline.normalize(buffer.getvalue(), "image/pjpeg").startswith(b"%PDF-")
    Print("SUCCESS", "JPEG, RGBA and palette images normalized")


def test_large_image_downscaled_to_ceiling():
    Print("HEADER", "Testing 2000 px ceiling")
    pipeline = make_pipeline()

    out = pipeline.normalize(make_image_bytes((3000, 1500), 'PNG'), "image/png")
    info = embedded_image_info(out)
    assert (info['width'], info['height']) == (2000, 1000)

    portrait = pipeline.normalize(make_image_bytes((1001, 4000), 'JPEG'), "image/jpeg")
    info = embedded_image_info(portrait)
    assert info['height'] == 2000
    assert info['width'] == 501  # 1001 * 0.5 = 500.5, rounded half-up

    Print("SUCCESS", "Oversized images scaled so the longer side is 2000 px")


def test_image_at_ceiling_not_resized():
    Print("HEADER", "Testing resize idempotence on the image path")
    pipeline = make_pipeline()

    out = pipeline.normalize(make_image_bytes((2000, 700), 'PNG'), "image/png")
    info = embedded_image_info(out)
    assert (info['width'], info['height']) == (2000, 700)
    Print("SUCCESS", "Image at the ceiling keeps its dimensions")


def test_malformed_png_rejected():
    Print("HEADER", "Testing undecodable image input")
    pipeline = make_pipeline()

    for bad in (MALFORMED_PNG, b"definitely not an image", make_image_bytes()[:40], b""):
        try:
            pipeline.normalize(bad, "image/png")
        except DecodeError as e:
            assert isinstance(e, InvalidArgumentError)
            assert isinstance(e, ValueError)
            assert e.code == "InvalidArg"
            assert e.kind == "DecodeError"
            assert "image" in str(e)
            Print("DEBUG", f"Rejected: {e}")
        else:
            raise AssertionError(f"Expected DecodeError for {bad[:16]!r}")

    Print("SUCCESS", "Undecodable images raise DecodeError")


def test_pdf_path_never_grows():
    Print("HEADER", "Testing PDF path size gate")

    # Compressor output larger than the input: original kept
    bloated = ShrinkingCompressor(output=b"%PDF-1.4\n" + b"x" * 100)
    out = make_pipeline(compressor=bloated).normalize(TINY_PDF, "application/pdf")
    assert out == TINY_PDF
    assert bloated.calls == 1

    # Smaller output: compressed bytes used
    shrinking = ShrinkingCompressor()
    out = make_pipeline(compressor=shrinking).normalize(TINY_PDF, "application/x-pdf")
    assert out == b"%PDF-1.4\n"
    assert out.startswith(b"%PDF") and len(out) <= len(TINY_PDF)

    # No compressor output at all
    out = make_pipeline(compressor=ShrinkingCompressor(output=None)).normalize(TINY_PDF, "application/pdf")
    assert out == TINY_PDF

    Print("SUCCESS", "PDF output is never larger than the input")


def test_pdf_without_header_rejected():
    Print("HEADER", "Testing headerless PDF input")
    compressor = ShrinkingCompressor()
    pipeline = make_pipeline(compressor=compressor)

    for bad in (b"Not a PDF", b"", b"%PDF", b" %PDF-1.4\n", b"%pdf-1.4\n"):
        try:
            pipeline.normalize(bad, "application/pdf")
        except InvalidFormat as e:
            assert e.code == "InvalidArg"
            assert e.kind == "InvalidFormat"
        else:
            raise AssertionError(f"Expected InvalidFormat for {bad!r}")

    assert compressor.calls == 0, "compressor must not run on rejected input"
    Print("SUCCESS", "Headerless PDFs raise InvalidFormat")


def test_unrecognized_mime_passes_through():
    Print("HEADER", "Testing pass-through")
    pipeline = make_pipeline()

    for data, mime in ((b"plain text", "text/plain"),
                       (b"", "application/octet-stream"),
                       (b"Not a PDF", "application/msword"),
                       (make_image_bytes(fmt='GIF'), "image/gif")):
        out = pipeline.normalize(data, mime)
        assert out == data

    Print("SUCCESS", "Unrecognized media types returned unchanged")


def test_strict_mime_rejects_unrecognized():
    Print("HEADER", "Testing strict_mime")
    pipeline = make_pipeline(strict_mime=True)

    try:
        pipeline.normalize(b"plain text", "text/plain")
    except UnsupportedMediaType as e:
        assert e.code == "InvalidArg"
    else:
        raise AssertionError("Expected UnsupportedMediaType")

    assert pipeline.normalize(make_image_bytes(), "image/png").startswith(b"%PDF-")
    Print("SUCCESS", "strict_mime rejects unrecognized types only")


def test_uninitialized_pipeline_raises():
    pipeline = NormalizationPipeline()
    try:
        pipeline.normalize(TINY_PDF, "application/pdf")
    except RuntimeError as e:
        assert "initialize" in str(e)
    else:
        raise AssertionError("Expected RuntimeError")


def test_default_entry_point():
    Print("HEADER", "Testing normalize_cv_to_pdf")

    out = normalize_cv_to_pdf(TINY_PDF, "application/pdf")
    assert out[:4] == b"%PDF"
    assert len(out) <= len(TINY_PDF)

    assert normalize_cv_to_pdf(b"hello", "text/plain") == b"hello"
    assert normalize_cv_to_pdf(make_image_bytes(), "image/png").startswith(b"%PDF-")
    Print("SUCCESS", "Default pipeline works end to end")


def test_concurrent_normalization():
    Print("HEADER", "Testing concurrent calls")
    pipeline = make_pipeline(compressor="ghostscript")
    pipeline.optimizer.compressor.binary_path = "docnorm-missing-gs-binary"

    jobs = []
    for i in range(8):
        jobs.append((make_image_bytes((20 + i, 10 + i), 'PNG'), "image/png"))
        jobs.append((TINY_PDF + bytes([65 + i]), "application/pdf"))

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda job: pipeline.normalize(*job), jobs))

    for (data, mime), out in zip(jobs, results):
        assert out.startswith(b"%PDF-")
        if mime == "application/pdf":
            assert out == data

    Print("SUCCESS", f"{len(jobs)} concurrent calls completed")


def main():
    """Run all pipeline tests."""
    Print("HEADER", "Functional Test: Normalization Pipeline")
    print("=" * 60)

    tests = [
        test_classify_mime,
        test_png_becomes_single_page_pdf,
        test_jpeg_and_transparent_png_become_pdf,
        test_large_image_downscaled_to_ceiling,
        test_image_at_ceiling_not_resized,
        test_malformed_png_rejected,
        test_pdf_path_never_grows,
        test_pdf_without_header_rejected,
        test_unrecognized_mime_passes_through,
        test_strict_mime_rejects_unrecognized,
        test_uninitialized_pipeline_raises,
        test_default_entry_point,
        test_concurrent_normalization,
    ]

    failed = 0
    for test in tests:
        try:
            test()
            print(f"  ✓ {test.__name__}: PASSED")
        except Exception as e:
            failed += 1
            print(f"  ✗ {test.__name__}: FAILED ({e})")

    print("=" * 60)
    if failed:
        Print("FAILURE", f"{failed} test(s) failed")
        sys.exit(1)
    Print("COMPLETED", "All pipeline tests passed!")


if __name__ == "__main__":
    main()
