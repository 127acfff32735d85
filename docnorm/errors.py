"""
Exceptions raised by Docnorm.

Every error that reaches a caller carries two stable, machine-checkable
attributes next to its message:

- ``code``: the caller-facing condition (``"InvalidArg"`` for all bad input)
- ``kind``: the specific failure (``"DecodeError"``, ``"InvalidFormat"``, ...)

Invalid-argument errors subclass ``ValueError`` so generic callers can catch
them without importing this module.
"""

__all__ = [
    "DocnormError",
    "InvalidArgumentError",
    "DecodeError",
    "InvalidFormat",
    "EncodeError",
    "UnsupportedMediaType",
    "CompressionUnavailable",
]


class DocnormError(Exception):
    """Base class for all Docnorm errors."""

    code = "Error"
    kind = "DocnormError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(DocnormError, ValueError):
    """Input bytes or arguments cannot be processed."""

    code = "InvalidArg"
    kind = "InvalidArgument"


class DecodeError(InvalidArgumentError):
    """Raster bytes are not a recognized or parseable image."""

    kind = "DecodeError"


class InvalidFormat(InvalidArgumentError):
    """Input declared as PDF does not start with the %PDF- header."""

    kind = "InvalidFormat"


class EncodeError(InvalidArgumentError):
    """Encoding an image to the target format failed."""

    kind = "EncodeError"


class UnsupportedMediaType(InvalidArgumentError):
    """Raised for unrecognized media types when strict_mime is enabled."""

    kind = "UnsupportedMediaType"


class CompressionUnavailable(DocnormError, RuntimeError):
    """
    The external PDF compressor is missing, failed, or timed out.

    Absorbed by PDFOptimizer; normalization never surfaces it.
    """

    code = "CompressionUnavailable"
    kind = "CompressionUnavailable"
