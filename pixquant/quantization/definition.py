"""Data records describing a quantization context."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

import numpy as np

from ..constants import DEFAULT_EXPONENT, NOISE_REDUCTION
from .errors import InvalidArgument, UnsupportedFamily, UnsupportedPixelEncoding


class Family(Enum):
    """
    Transfer function families.

    The integer codes are stable and may be stored alongside rendering settings.

    LINEAR:      y = a*x + b
    EXPONENTIAL: y = a*exp(x^k) + b
    LOGARITHMIC: y = a*log(x) + b
    POLYNOMIAL:  y = a*x^k + b   (LINEAR is the k = 1 case)
    """

    LINEAR = 0
    EXPONENTIAL = 1
    LOGARITHMIC = 2
    POLYNOMIAL = 3

    @classmethod
    def from_name(cls, name: str) -> 'Family':
        """
        Convert a family name such as 'linear' or 'LOGARITHMIC' to a Family.

        Raises:
            UnsupportedFamily: If the name does not match a family
        """
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise UnsupportedFamily(f"Unsupported family: {name}.") from None

    @property
    def uses_exponent(self) -> bool:
        return self in (Family.EXPONENTIAL, Family.POLYNOMIAL)


_DTYPES = {
    'bit': np.dtype(np.bool_),
    'int8': np.dtype(np.int8),
    'uint8': np.dtype(np.uint8),
    'int16': np.dtype(np.int16),
    'uint16': np.dtype(np.uint16),
    'int32': np.dtype(np.int32),
    'uint32': np.dtype(np.uint32),
    'float': np.dtype(np.float32),
    'double': np.dtype(np.float64),
}


class PixelEncoding(Enum):
    """
    Numeric encoding of the source pixels.

    Each member also acts as the read adapter for its encoding: ``read``
    turns a pixel buffer into the array the strategy evaluates.
    """

    BIT = 'bit'
    INT8 = 'int8'
    UINT8 = 'uint8'
    INT16 = 'int16'
    UINT16 = 'uint16'
    INT32 = 'int32'
    UINT32 = 'uint32'
    FLOAT = 'float'
    DOUBLE = 'double'

    @property
    def dtype(self) -> np.dtype:
        return _DTYPES[self.value]

    @property
    def is_integer(self) -> bool:
        return self.dtype.kind in 'iu'

    @classmethod
    def from_name(cls, name: str) -> 'PixelEncoding':
        """
        Look up an encoding by its pixel type name ('uint16', 'float', ...).

        Raises:
            UnsupportedPixelEncoding: If the name is not a known pixel type
        """
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnsupportedPixelEncoding(f"Unsupported pixel type: {name}.") from None

    @classmethod
    def from_dtype(cls, dtype) -> 'PixelEncoding':
        """
        Infer the encoding of a numpy dtype.

        bool maps to BIT and float16 is widened to FLOAT. 64-bit integers have
        no encoding.

        Raises:
            UnsupportedPixelEncoding: If the dtype has no matching encoding
        """
        dtype = np.dtype(dtype)
        if dtype == np.float16:
            return cls.FLOAT
        for member in cls:
            if member.dtype == dtype:
                return member
        raise UnsupportedPixelEncoding(f"Unsupported pixel type: {dtype}.")

    def read(self, buffer) -> np.ndarray:
        """
        Read a pixel buffer for evaluation.

        Integer data of an integer encoding is returned as int64 so it can
        index a lookup table; everything else is returned as float64.

        Args:
            buffer: Array or sequence of numeric pixel values

        Returns:
            ndarray with the same shape as the buffer

        Raises:
            InvalidArgument: If the buffer is not numeric
        """
        data = np.asarray(buffer)
        if data.dtype.kind not in 'biuf':
            raise InvalidArgument(f"Pixel buffer is not numeric: dtype {data.dtype}")

        if self.is_integer and data.dtype.kind in 'biu':
            return data.astype(np.int64)
        return data.astype(np.float64)


class InputRange(NamedTuple):
    """Declared or observed (min, max) of the source pixel values."""

    min: float
    max: float

    @property
    def is_degenerate(self) -> bool:
        return self.min == self.max

    @classmethod
    def of(cls, value) -> 'InputRange':
        """
        Coerce a (min, max) pair to a validated InputRange.

        Raises:
            InvalidArgument: If the pair is malformed, not finite or min > max
        """
        try:
            lo, hi = value
            lo, hi = float(lo), float(hi)
        except (TypeError, ValueError):
            raise InvalidArgument(f"Invalid input range: {value!r}.") from None

        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise InvalidArgument(f"Invalid input range: [{lo}, {hi}] is not finite.")
        if lo > hi:
            raise InvalidArgument(f"Invalid input range: min {lo} > max {hi}.")
        return cls(lo, hi)


@dataclass(frozen=True)
class QuantumDef:
    """
    Quantization request.

    Attributes:
        family: Transfer function family (a Family or its name)
        bit_resolution: Largest output level, 2^n - 1 for n in 1..8
        exponent: k coefficient of the exponential and polynomial families
        noise_reduction: Whether the source is smoothed before quantization
    """

    family: Union[Family, str]
    bit_resolution: int
    exponent: float = DEFAULT_EXPONENT
    noise_reduction: bool = NOISE_REDUCTION
