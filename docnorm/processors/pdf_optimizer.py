"""
Best-effort PDF optimization for Docnorm.

Compression is an optimization, never a correctness requirement. PDFOptimizer
wraps a PDFCompressor and guarantees:

1. The input is written to a uniquely named scratch directory, so concurrent
   calls never share files.
2. The compressor runs exactly once (no retries).
3. Any failure (compressor missing, crashed, timed out, raised
   CompressionUnavailable, or the scratch write failed) returns the
   original bytes.
4. Output is only used when it is strictly smaller than the input.
5. The scratch directory is removed before returning, on every path.
"""

import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from ..engines.compression.base import PDFCompressor
from ..errors import CompressionUnavailable
from ..utilities import Print


class PDFOptimizer:
    """
    Size-gated wrapper around an injectable PDFCompressor.

    Attributes:
        compressor: Strategy that turns an input path into compressed bytes
        temp_dir: Parent for scratch directories (None: system default)
    """

    def __init__(self, compressor: PDFCompressor, temp_dir: Optional[str] = None):
        self.compressor = compressor
        self.temp_dir = temp_dir

    def optimize(self, data: bytes) -> bytes:
        """
        Return the smaller of data and its compressed form.

        Never raises for compressor problems.
        """
        original_size = len(data)

        try:
            with tempfile.TemporaryDirectory(prefix="docnorm_", dir=self.temp_dir) as work_dir:
                input_path = Path(work_dir) / "input.pdf"
                input_path.write_bytes(data)
                compressed = self.compressor.compress(input_path)
        except CompressionUnavailable as e:
            Print("WARNING", f"PDF compression unavailable ({self.compressor.name}): {e}")
            return data
        except (OSError, subprocess.SubprocessError) as e:
            Print("WARNING", f"PDF compression skipped: {e}")
            return data
        except Exception as e:
            # Injected compressors may raise anything; the original still wins
            Print("WARNING", f"PDF compressor {self.compressor.name} failed: {type(e).__name__}: {e}")
            return data

        if compressed is None:
            Print("DEBUG", f"No compressed output from {self.compressor.name}, keeping original")
            return data

        if 0 < len(compressed) < original_size:
            saved = 1 - len(compressed) / original_size
            Print("INFO", f"Compressed PDF {original_size:,} -> {len(compressed):,} bytes ({saved:.1%} smaller)")
            return compressed

        Print("DEBUG", f"Compressed output not smaller ({len(compressed):,} >= {original_size:,}), keeping original")
        return data
