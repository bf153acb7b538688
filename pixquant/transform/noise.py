"""Noise reduction applied to pixel data before quantization."""

import logging
import warnings

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..constants import NOISE_FILTER_SIZE

logger = logging.getLogger(__name__)


def reduce_noise(image: np.ndarray, size: int = NOISE_FILTER_SIZE) -> np.ndarray:
    """
    Smooth pixel data with a median filter.

    Edges are padded by replicating the border values, so the output has the
    same shape as the input. 1D data uses a window of ``size`` samples; for
    arrays with two or more dimensions a ``size`` x ``size`` window is slid
    over the last two axes (each leading index is filtered independently).

    NaN pixels are left out of each window median. A pixel stays NaN only
    when its whole window is NaN.

    Args:
        image: Numeric pixel array
        size: Odd window size (default: 3)

    Returns:
        Filtered array as float64

    Raises:
        ValueError: If size is not an odd positive integer or the data is
                    not numeric
    """
    if not isinstance(size, int) or size < 1 or size % 2 == 0:
        raise ValueError(f"Filter size must be an odd positive integer, got {size}")

    data = np.asarray(image)
    if data.dtype.kind not in 'biuf':
        raise ValueError(f"Expected numeric pixel data, got dtype {data.dtype}")
    data = data.astype(np.float64)

    if data.ndim == 0 or size == 1 or data.size == 0:
        return data

    radius = size // 2
    has_nan = bool(np.isnan(data).any())
    if data.ndim == 1:
        padded = np.pad(data, radius, mode='edge')
        windows = sliding_window_view(padded, size)
        return _median(windows, -1, has_nan)

    # Pad only the last two axes
    pad_width = [(0, 0)] * (data.ndim - 2) + [(radius, radius), (radius, radius)]
    padded = np.pad(data, pad_width, mode='edge')
    windows = sliding_window_view(padded, (size, size), axis=(-2, -1))

    logger.debug("Median filtering %s array with %dx%d window", data.shape, size, size)
    return _median(windows, (-2, -1), has_nan)


def _median(windows: np.ndarray, axis, has_nan: bool) -> np.ndarray:
    if not has_nan:
        return np.median(windows, axis=axis)
    with warnings.catch_warnings():
        # All-NaN windows yield NaN
        warnings.simplefilter('ignore', RuntimeWarning)
        return np.nanmedian(windows, axis=axis)
