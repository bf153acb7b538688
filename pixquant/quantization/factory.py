"""Factory building the quantization strategy for a given context."""

import logging
import math
import numbers

from ..constants import SUPPORTED_BIT_RESOLUTIONS
from .definition import Family, InputRange, PixelEncoding, QuantumDef
from .errors import (
    InvalidArgument, MissingDefinition, UnsupportedBitResolution,
    UnsupportedFamily, UnsupportedPixelEncoding, UnsupportedStrategy,
)
from .strategy import QuantumStrategy

logger = logging.getLogger(__name__)


def bit_depth_to_resolution(depth: int) -> int:
    """
    Convert an output bit depth (1-8) to its bit resolution flag (2^depth - 1).

    Raises:
        UnsupportedBitResolution: If depth is not in [1, 8]
    """
    if isinstance(depth, bool) or not isinstance(depth, numbers.Integral) or not 1 <= depth <= 8:
        raise UnsupportedBitResolution(f"Unsupported bit depth: {depth}.")
    return (1 << int(depth)) - 1


def verify_bit_resolution(bit_resolution) -> int:
    """
    Verify that ``bit_resolution`` is one of the DEPTH_xBIT flags.

    Raises:
        UnsupportedBitResolution: If the check fails
    """
    if (isinstance(bit_resolution, bool)
            or not isinstance(bit_resolution, numbers.Integral)
            or int(bit_resolution) not in SUPPORTED_BIT_RESOLUTIONS):
        raise UnsupportedBitResolution(f"Unsupported bit resolution: {bit_resolution}.")
    return int(bit_resolution)


def verify_pixel_type(pixel_type) -> PixelEncoding:
    """
    Verify that ``pixel_type`` is a PixelEncoding or a pixel type name.

    Raises:
        UnsupportedPixelEncoding: If the check fails
    """
    if isinstance(pixel_type, PixelEncoding):
        return pixel_type
    if isinstance(pixel_type, str):
        return PixelEncoding.from_name(pixel_type)
    raise UnsupportedPixelEncoding(f"Unsupported pixel type: {pixel_type}.")


def verify_family(family) -> Family:
    """
    Verify that ``family`` is a Family or a family name.

    Raises:
        UnsupportedFamily: If the check fails
    """
    if isinstance(family, Family):
        return family
    if isinstance(family, str):
        return Family.from_name(family)
    raise UnsupportedFamily(f"Unsupported family: {family}.")


def verify_def(definition: QuantumDef, pixel_type) -> QuantumDef:
    """
    Verify that ``definition`` exists and is properly defined for ``pixel_type``.

    Returns:
        The definition with its family resolved to a Family member

    Raises:
        InvalidArgument: If any check fails
    """
    if definition is None:
        raise MissingDefinition("No quantum definition.")

    bit_resolution = verify_bit_resolution(definition.bit_resolution)
    verify_pixel_type(pixel_type)
    family = verify_family(definition.family)

    exponent = definition.exponent
    if family.uses_exponent:
        try:
            exponent = float(exponent)
        except (TypeError, ValueError):
            raise InvalidArgument(f"Unsupported exponent: {definition.exponent!r}.") from None
        if not math.isfinite(exponent) or exponent <= 0:
            raise InvalidArgument(f"Unsupported exponent: {exponent}. Must be finite and > 0.")

    return QuantumDef(family=family, bit_resolution=bit_resolution,
                      exponent=exponent,
                      noise_reduction=bool(definition.noise_reduction))


def _get_quantization(definition: QuantumDef, encoding: PixelEncoding,
                      input_range: InputRange):
    """Return the strategy for ``encoding``, or None when there is none."""
    if encoding is PixelEncoding.BIT:
        return None
    # Every numeric encoding shares one strategy, parameterised by the encoding
    return QuantumStrategy(definition, encoding, input_range)


def get_strategy(definition: QuantumDef, pixel_type, input_range) -> QuantumStrategy:
    """
    Return a strategy carrying out the quantization defined by ``definition``.

    Args:
        definition: Quantization request. Mustn't be None.
        pixel_type: PixelEncoding (or its name) of the source pixels
        input_range: (min, max) of the source values

    Returns:
        A QuantumStrategy suitable for the context

    Raises:
        MissingDefinition: If definition is None
        UnsupportedBitResolution: If the bit resolution is not a DEPTH_xBIT flag
        UnsupportedPixelEncoding: If the pixel type is unknown
        UnsupportedFamily: If the family is unknown
        UnsupportedStrategy: If no strategy handles the pixel type (1-bit)
        InvalidArgument: If the exponent or the input range is invalid
    """
    definition = verify_def(definition, pixel_type)
    encoding = verify_pixel_type(pixel_type)
    input_range = InputRange.of(input_range)

    strategy = _get_quantization(definition, encoding, input_range)
    if strategy is None:
        raise UnsupportedStrategy("Unsupported strategy")

    logger.debug("Created %r", strategy)
    return strategy
