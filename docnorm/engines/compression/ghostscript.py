"""
Ghostscript PDF compressor for Docnorm

Rewrites a PDF through Ghostscript's pdfwrite device with the /screen preset
(72 DPI image downsampling, aggressive recompression).

Ghostscript is optional. A missing binary, a non-zero exit, a timeout, or an
absent/empty output file all end in None, and the caller keeps the original.

Requirements (optional):
- Ghostscript: brew install ghostscript (macOS) or apt-get install ghostscript (Linux)
"""

import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from . import register_compressor
from ...utilities import Print


@register_compressor("ghostscript")
class GhostscriptCompressorFactory:
    """Factory for creating Ghostscript compressor instances."""

    @staticmethod
    def create(config: dict) -> "GhostscriptCompressor":
        """
        Create a Ghostscript compressor instance.

        Args:
            config: Configuration dictionary with:
                - binary_path: Path to gs binary (default: 'gs')
                - pdf_settings: Distiller preset (default: '/screen')
                - compatibility_level: Output PDF version (default: '1.4')
                - timeout: Seconds before the subprocess is killed (default: 60)
                - temp_dir: Parent directory for scratch output (default: system temp)

        Returns:
            Initialized GhostscriptCompressor instance
        """
        return GhostscriptCompressor(config)


class GhostscriptCompressor:
    """Shells out to `gs -sDEVICE=pdfwrite` once per call."""

    def __init__(self, config: dict):
        self.binary_path = config.get('binary_path', 'gs')
        self.pdf_settings = config.get('pdf_settings', '/screen')
        self.compatibility_level = str(config.get('compatibility_level', '1.4'))
        self.timeout = config.get('timeout', 60)
        self.temp_dir = config.get('temp_dir')

    def build_command(self, input_path: Path, output_path: Path) -> List[str]:
        """Ghostscript argument vector for one input/output pair."""
        return [
            self.binary_path,
            '-sDEVICE=pdfwrite',
            f'-dCompatibilityLevel={self.compatibility_level}',
            f'-dPDFSETTINGS={self.pdf_settings}',
            '-dNOPAUSE',
            '-dQUIET',
            '-dBATCH',
            f'-sOutputFile={output_path}',
            str(input_path),
        ]

    def compress(self, input_path: Path) -> Optional[bytes]:
        with tempfile.TemporaryDirectory(prefix="docnorm_gs_", dir=self.temp_dir) as work_dir:
            output_path = Path(work_dir) / "compressed.pdf"
            cmd = self.build_command(Path(input_path), output_path)

            Print("DEBUG", f"Running: {' '.join(cmd)}")

            try:
                result = subprocess.run(
                    cmd,
                    capture_output=True,
                    timeout=self.timeout
                )
            except FileNotFoundError:
                Print("WARNING", f"Ghostscript not found at '{self.binary_path}', skipping PDF compression")
                return None
            except subprocess.TimeoutExpired:
                Print("WARNING", f"Ghostscript timed out after {self.timeout} seconds")
                return None
            except OSError as e:
                Print("WARNING", f"Could not run Ghostscript: {e}")
                return None

            if result.returncode != 0:
                stderr_text = result.stderr.decode('utf-8', errors='replace').strip()
                Print("WARNING", f"Ghostscript exited with status {result.returncode}")
                if stderr_text:
                    Print("DEBUG", f"Ghostscript: {stderr_text}")
                return None

            if not output_path.exists():
                Print("WARNING", f"Ghostscript did not produce expected output: {output_path}")
                return None

            compressed = output_path.read_bytes()
            if not compressed:
                Print("WARNING", "Ghostscript produced an empty file")
                return None

            Print("DEBUG", f"Ghostscript output: {len(compressed):,} bytes")
            return compressed

    @property
    def name(self) -> str:
        """Compressor identifier."""
        return "ghostscript"
