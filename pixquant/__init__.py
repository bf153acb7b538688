"""Quantization of scientific pixel data into small display intervals."""

from .quantization import (
    Family, PixelEncoding, InputRange, QuantumDef, QuantumStrategy,
    InvalidArgument, get_strategy, apply,
)
from .render import ImageQuantizer

__version__ = '0.1.0'

__all__ = [
    'Family',
    'PixelEncoding',
    'InputRange',
    'QuantumDef',
    'QuantumStrategy',
    'InvalidArgument',
    'get_strategy',
    'apply',
    'ImageQuantizer',
]
