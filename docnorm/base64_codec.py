"""Base64 helpers (standard alphabet, padded) with Docnorm's invalid-argument convention."""

import base64
import binascii

from .errors import InvalidArgumentError


def buffer_to_base64(data: bytes) -> str:
    """Encode bytes as a Base64 string."""
    return base64.b64encode(bytes(data)).decode('ascii')


def base64_to_buffer(text: str) -> bytes:
    """
    Decode a Base64 string.

    Characters outside the standard alphabet and bad padding are rejected
    rather than silently skipped.

    Raises:
        InvalidArgumentError: If text is not valid Base64
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidArgumentError(f"Failed to decode Base64: {e}") from e
