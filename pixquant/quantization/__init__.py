"""Quantization modules for the pixel quantization engine."""

from .errors import (
    InvalidArgument,
    MissingDefinition,
    UnsupportedBitResolution,
    UnsupportedPixelEncoding,
    UnsupportedFamily,
    UnsupportedStrategy,
)
from .definition import Family, PixelEncoding, InputRange, QuantumDef
from .transfer import (
    LinearMap, ExponentialMap, LogarithmicMap, PolynomialMap,
    fit_transfer, to_levels,
)
from .strategy import QuantumStrategy, apply
from .factory import (
    get_strategy,
    verify_def,
    verify_bit_resolution,
    verify_pixel_type,
    verify_family,
    bit_depth_to_resolution,
)

__all__ = [
    'InvalidArgument',
    'MissingDefinition',
    'UnsupportedBitResolution',
    'UnsupportedPixelEncoding',
    'UnsupportedFamily',
    'UnsupportedStrategy',
    'Family',
    'PixelEncoding',
    'InputRange',
    'QuantumDef',
    'LinearMap',
    'ExponentialMap',
    'LogarithmicMap',
    'PolynomialMap',
    'fit_transfer',
    'to_levels',
    'QuantumStrategy',
    'apply',
    'get_strategy',
    'verify_def',
    'verify_bit_resolution',
    'verify_pixel_type',
    'verify_family',
    'bit_depth_to_resolution',
]
