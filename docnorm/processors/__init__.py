"""
Processors for Docnorm

Policy and post-processing steps that sit between the engines.
"""

from .pdf_optimizer import PDFOptimizer
from .resize import (
    DEFAULT_MAX_SIDE,
    ResizeTarget,
    calculate_target_size,
    target_for_bounds,
    target_for_ceiling,
)

__all__ = [
    'DEFAULT_MAX_SIDE',
    'PDFOptimizer',
    'ResizeTarget',
    'calculate_target_size',
    'target_for_bounds',
    'target_for_ceiling',
]
