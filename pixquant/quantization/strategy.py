"""Quantization strategy shared by every numeric pixel encoding."""

import logging

import numpy as np

from ..constants import MAX_LUT_SIZE
from .definition import Family, InputRange, PixelEncoding, QuantumDef
from .transfer import fit_transfer, to_levels

logger = logging.getLogger(__name__)


class QuantumStrategy:
    """
    Maps pixel values of one encoding onto the levels [0, bit_resolution].

    A strategy is immutable once built: the transfer function is fitted to the
    input range at construction and reused for every pixel. Instances can be
    shared between threads without locking.

    For integer encodings whose input range spans at most MAX_LUT_SIZE integer
    values, the levels of every value in the range are precomputed and
    ``apply`` indexes that table instead of evaluating the map.

    Use ``pixquant.quantization.get_strategy`` to build validated instances.
    """

    __slots__ = ('_definition', '_encoding', '_range', '_map', '_lut')

    def __init__(self, definition: QuantumDef, encoding: PixelEncoding,
                 input_range: InputRange):
        self._definition = definition
        self._encoding = encoding
        self._range = input_range
        self._map = fit_transfer(definition.family, input_range.min, input_range.max,
                                 definition.bit_resolution, definition.exponent)
        self._lut = self._build_lut()

    @property
    def definition(self) -> QuantumDef:
        return self._definition

    @property
    def family(self) -> Family:
        return self._definition.family

    @property
    def bit_resolution(self) -> int:
        return self._definition.bit_resolution

    @property
    def noise_reduction(self) -> bool:
        return self._definition.noise_reduction

    @property
    def encoding(self) -> PixelEncoding:
        return self._encoding

    @property
    def input_range(self) -> InputRange:
        return self._range

    @property
    def transfer(self):
        """The fitted transfer map."""
        return self._map

    @property
    def coefficients(self) -> tuple:
        """(a, b) or, for the exponential and polynomial families, (a, b, k)."""
        return self._map.coefficients

    @property
    def uses_lut(self) -> bool:
        return self._lut is not None

    def _build_lut(self):
        if not self._encoding.is_integer:
            return None
        lo, hi = float(self._range.min), float(self._range.max)
        if not (lo.is_integer() and hi.is_integer()):
            return None
        size = int(hi - lo) + 1
        if size > MAX_LUT_SIZE:
            return None

        logger.debug("Building %d-entry lookup table for %s", size, self._encoding.value)
        return self._quantize(lo + np.arange(size, dtype=np.float64))

    def _quantize(self, x) -> np.ndarray:
        # Out-of-range input is clamped, never rejected
        x = np.clip(np.asarray(x, dtype=np.float64), self._range.min, self._range.max)
        return to_levels(self._map(x), self.bit_resolution)

    def evaluate(self, x) -> int:
        """
        Quantize a single pixel value.

        Args:
            x: Raw pixel value

        Returns:
            Output level in [0, bit_resolution]
        """
        return int(self._quantize(x))

    def apply(self, buffer) -> np.ndarray:
        """
        Quantize every value of a pixel buffer.

        Args:
            buffer: Array or sequence of raw pixel values

        Returns:
            uint8 array with the shape of the buffer
        """
        data = self._encoding.read(buffer)
        if self._lut is not None and data.dtype == np.int64:
            lo, hi = int(self._range.min), int(self._range.max)
            return self._lut[np.clip(data, lo, hi) - lo]
        return self._quantize(data)

    def with_window(self, start: float, end: float) -> 'QuantumStrategy':
        """
        Build a strategy with the same settings over another input range.

        Raises:
            InvalidArgument: If the window is not a valid input range
        """
        return QuantumStrategy(self._definition, self._encoding, InputRange.of((start, end)))

    def __repr__(self) -> str:
        return (f"QuantumStrategy(family={self.family.name}, "
                f"bit_resolution={self.bit_resolution}, "
                f"encoding={self._encoding.value}, "
                f"input_range=[{self._range.min}, {self._range.max}], "
                f"noise_reduction={self.noise_reduction})")


def apply(strategy: QuantumStrategy, buffer) -> np.ndarray:
    """Quantize a pixel buffer with ``strategy``; see QuantumStrategy.apply."""
    return strategy.apply(buffer)
