"""
Resize policy for Docnorm.

Pure arithmetic: given source dimensions and limits, decide the target box.
Nothing here touches pixels; the image codec does the resampling.

Two policies:

- Normalization uses a single ceiling on the longer side (2000 px by default)
  so every synthesized PDF has a predictable size.
- Image optimization takes independent max_width / max_height bounds chosen
  by the caller; the image is scaled to fit inside both.

Neither policy ever upscales. Dimensions are rounded half-up and never drop
below one pixel.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_MAX_SIDE = 2000


@dataclass(frozen=True)
class ResizeTarget:
    """Target pixel box for a downscale."""
    width: int
    height: int


def _scaled(length: int, ratio: float) -> int:
    return max(1, int(math.floor(length * ratio + 0.5)))


def calculate_target_size(width: int, height: int, max_side: int) -> Tuple[int, int]:
    """
    Fit (width, height) so the longer side is at most max_side.

    Returns the input unchanged when both sides already fit.
    """
    if width <= max_side and height <= max_side:
        return width, height

    if width >= height:
        ratio = max_side / width
        return max_side, _scaled(height, ratio)

    ratio = max_side / height
    return _scaled(width, ratio), max_side


def target_for_ceiling(width: int, height: int, ceiling: Optional[int] = DEFAULT_MAX_SIDE) -> Optional[ResizeTarget]:
    """
    Normalization policy: downscale only when the longer side exceeds ceiling.

    Returns None ("no resize") when the image already fits or the ceiling
    is 0/None.
    """
    if not ceiling or max(width, height) <= ceiling:
        return None

    target_w, target_h = calculate_target_size(width, height, ceiling)
    return ResizeTarget(target_w, target_h)


def target_for_bounds(
    width: int,
    height: int,
    max_width: Optional[int] = None,
    max_height: Optional[int] = None
) -> Optional[ResizeTarget]:
    """
    Optimize-image policy: fit inside max_width x max_height.

    0 or None leaves that axis unconstrained. With both bounds set the
    tighter one decides the scale; aspect ratio is always preserved.

    Returns None when no bound is set or the image already fits.
    """
    ratios = []
    if max_width and width > max_width:
        ratios.append(max_width / width)
    if max_height and height > max_height:
        ratios.append(max_height / height)

    if not ratios:
        return None

    ratio = min(ratios)
    target_w = min(_scaled(width, ratio), max_width) if max_width else _scaled(width, ratio)
    target_h = min(_scaled(height, ratio), max_height) if max_height else _scaled(height, ratio)
    return ResizeTarget(target_w, target_h)
