"""Image-level quantization pipeline."""

from .quantizer import ImageQuantizer, compute_input_range

__all__ = [
    'ImageQuantizer',
    'compute_input_range',
]
