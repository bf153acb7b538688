"""
Transfer functions mapping an input interval [min, max] onto [0, R].

Every map is fitted so that x = min gives y = 0 and x = max gives y = R,
where R is the bit resolution (2^n - 1). Maps return real values; rounding
and clamping to integer levels is done by ``to_levels``.

A map whose fitted denominator is zero or not finite (e.g. min == max)
degenerates to the constant 0.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..constants import EXP_ARG_LIMIT
from .definition import Family

_LOG2 = float(np.log(2.0))


def _is_usable(denom: float) -> bool:
    return bool(np.isfinite(denom)) and denom > 0


def _half_sum(x, shift):
    # (x + shift) / 2 without overflowing for operands near the float64 limit
    return x / 2 + shift / 2


@dataclass(frozen=True)
class LinearMap:
    """
    y = a*x + b

    a = R / (max - min), b = -a * min
    """

    a: float = 0.0
    b: float = 0.0

    @classmethod
    def fit(cls, lo: float, hi: float, resolution: int, exponent: float = 1.0) -> 'LinearMap':
        half_span = hi / 2 - lo / 2
        if not _is_usable(half_span):
            return cls()
        a = (resolution / 2) / half_span
        return cls(a=a, b=-a * lo)

    def __call__(self, x: np.ndarray) -> np.ndarray:
        return self.a * x + self.b

    @property
    def coefficients(self) -> Tuple[float, ...]:
        return (self.a, self.b)


@dataclass(frozen=True)
class PolynomialMap:
    """
    y = a*x^k + b

    a = R / (max^k - min^k), b = -a * min^k

    Negative domains are shifted by -min so that x^k is always defined.
    Inputs are divided by the shifted max before powering, which keeps x^k
    in [0, 1]; a and b refer to this scaled variable. ``scale`` holds half
    the shifted max and is compared against half the shifted input.
    """

    a: float = 0.0
    b: float = 0.0
    k: float = 1.0
    shift: float = 0.0
    scale: float = 1.0

    @classmethod
    def fit(cls, lo: float, hi: float, resolution: int, exponent: float = 1.0) -> 'PolynomialMap':
        k = float(exponent)
        shift = -lo if lo < 0 else 0.0
        scale = _half_sum(hi, shift)
        if not _is_usable(scale):
            return cls(k=k, shift=shift)

        with np.errstate(all='ignore'):
            u_lo = np.float64(_half_sum(lo, shift) / scale) ** k
            u_hi = np.float64(_half_sum(hi, shift) / scale) ** k
            denom = u_hi - u_lo
        if not _is_usable(denom):
            return cls(k=k, shift=shift, scale=scale)

        a = resolution / float(denom)
        return cls(a=a, b=-a * float(u_lo), k=k, shift=shift, scale=scale)

    def __call__(self, x: np.ndarray) -> np.ndarray:
        with np.errstate(all='ignore'):
            u = np.power(_half_sum(x, self.shift) / self.scale, self.k)
        return self.a * u + self.b

    @property
    def coefficients(self) -> Tuple[float, ...]:
        return (self.a, self.b, self.k)


@dataclass(frozen=True)
class ExponentialMap:
    """
    y = a*exp(x^k) + b

    Evaluated relative to g_max = max^k so the exponent never exceeds 0:

        y = a*exp(x^k - g_max) + b
        a = R / (1 - exp(min^k - g_max)), b = -a * exp(min^k - g_max)

    The exponent is formed in log space from r = x / max, as
    x^k - g_max = -exp(log_g_max + log(1 - r^k)), so it stays finite when
    x^k itself would overflow. It is clamped into [-EXP_ARG_LIMIT, 0].
    Negative domains are shifted by -min before powering; ``scale`` holds
    half the shifted max.
    """

    a: float = 0.0
    b: float = 0.0
    k: float = 1.0
    shift: float = 0.0
    scale: float = 1.0
    log_g_max: float = 0.0

    @classmethod
    def fit(cls, lo: float, hi: float, resolution: int, exponent: float = 1.0) -> 'ExponentialMap':
        k = float(exponent)
        shift = -lo if lo < 0 else 0.0
        scale = _half_sum(hi, shift)
        if not _is_usable(scale):
            return cls(k=k, shift=shift)

        log_g_max = k * (float(np.log(scale)) + _LOG2)
        fitted = cls(k=k, shift=shift, scale=scale, log_g_max=log_g_max)
        d = float(fitted._exp_arg(np.float64(lo)))
        denom = -np.expm1(d)
        if not _is_usable(denom):
            return fitted

        a = resolution / float(denom)
        return cls(a=a, b=-a * float(np.exp(d)), k=k, shift=shift,
                   scale=scale, log_g_max=log_g_max)

    def _exp_arg(self, x):
        with np.errstate(all='ignore'):
            r = _half_sum(x, self.shift) / self.scale
            # 1 - r^k, accurate as r approaches 1
            gap = np.maximum(-np.expm1(self.k * np.log(r)), 0.0)
            arg = np.where(gap == 0, 0.0, -np.exp(self.log_g_max + np.log(gap)))
        return np.maximum(arg, -EXP_ARG_LIMIT)

    def __call__(self, x: np.ndarray) -> np.ndarray:
        arg = self._exp_arg(x)
        with np.errstate(all='ignore'):
            return self.a * np.exp(arg) + self.b

    @property
    def coefficients(self) -> Tuple[float, ...]:
        return (self.a, self.b, self.k)


@dataclass(frozen=True)
class LogarithmicMap:
    """
    y = a*log(x) + b

    a = R / (log(max) - log(min)), b = -a * log(min)

    When min <= 0 the domain is shifted by 1 - min so every logarithm is
    taken of a value >= 1. The shifted value is formed as
    2*(1/2 + x/2 - min/2), which cannot overflow.
    """

    a: float = 0.0
    b: float = 0.0
    origin: float = 0.0
    shifted: bool = False

    @classmethod
    def fit(cls, lo: float, hi: float, resolution: int, exponent: float = 1.0) -> 'LogarithmicMap':
        degenerate = cls(origin=lo, shifted=lo <= 0)
        with np.errstate(all='ignore'):
            l_lo = degenerate._log(lo)
            l_hi = degenerate._log(hi)
            denom = l_hi - l_lo
        if not _is_usable(denom):
            return degenerate

        a = resolution / float(denom)
        return cls(a=a, b=-a * float(l_lo), origin=lo, shifted=lo <= 0)

    @property
    def shift(self) -> float:
        return 1.0 - self.origin if self.shifted else 0.0

    def _log(self, x):
        if not self.shifted:
            return np.log(x)
        return np.log(0.5 + (x / 2 - self.origin / 2)) + _LOG2

    def __call__(self, x: np.ndarray) -> np.ndarray:
        with np.errstate(all='ignore'):
            return self.a * self._log(x) + self.b

    @property
    def coefficients(self) -> Tuple[float, ...]:
        return (self.a, self.b)


TRANSFER_MAPS = {
    Family.LINEAR: LinearMap,
    Family.EXPONENTIAL: ExponentialMap,
    Family.LOGARITHMIC: LogarithmicMap,
    Family.POLYNOMIAL: PolynomialMap,
}


def fit_transfer(family: Family, lo: float, hi: float, resolution: int,
                 exponent: float = 1.0):
    """
    Fit the transfer function of a family to [lo, hi] -> [0, resolution].

    Args:
        family: Transfer function family
        lo: Input interval minimum
        hi: Input interval maximum
        resolution: Largest output level
        exponent: k coefficient (ignored by LINEAR and LOGARITHMIC)

    Returns:
        A callable map object with ``coefficients``
    """
    return TRANSFER_MAPS[family].fit(float(lo), float(hi), int(resolution), exponent)


def to_levels(y: np.ndarray, resolution: int) -> np.ndarray:
    """
    Round real map output half up and clamp it into [0, resolution].

    NaN becomes 0, +inf becomes ``resolution``.

    Returns:
        uint8 array of output levels
    """
    with np.errstate(invalid='ignore'):
        levels = np.floor(np.asarray(y, dtype=np.float64) + 0.5)
    levels = np.nan_to_num(levels, nan=0.0, posinf=resolution, neginf=0.0)
    return np.clip(levels, 0, resolution).astype(np.uint8)
