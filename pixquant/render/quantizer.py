"""Image Quantizer - Integrates range detection, noise reduction and quantization."""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..constants import DEFAULT_TILE_ROWS
from ..quantization import (
    InputRange, PixelEncoding, QuantumDef, QuantumStrategy,
    get_strategy, verify_pixel_type,
)
from ..transform import reduce_noise, split_into_row_tiles, merge_row_tiles

logger = logging.getLogger(__name__)


def compute_input_range(image: np.ndarray) -> InputRange:
    """
    Observed input range of an image, ignoring NaN and infinite values.

    Args:
        image: Numeric pixel array

    Returns:
        InputRange(min, max); (0, 0) if the image has no finite value
    """
    data = np.asarray(image)
    if data.dtype.kind == 'f':
        data = data[np.isfinite(data)]
    if data.size == 0:
        return InputRange(0.0, 0.0)
    return InputRange(float(data.min()), float(data.max()))


class ImageQuantizer:
    """
    Quantizer for scientific images.

    Pipeline:
    1. Pixel encoding detection (from the array dtype)
    2. Input range detection (observed min/max unless declared)
    3. Strategy construction
    4. Noise reduction (median filter, if the definition enables it)
    5. Quantization, in row bands on a thread pool when n_workers > 1
    """

    def __init__(self, definition: QuantumDef, n_workers: int = 1,
                 tile_rows: int = DEFAULT_TILE_ROWS):
        if n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {n_workers}")
        if tile_rows < 1:
            raise ValueError(f"tile_rows must be >= 1, got {tile_rows}")

        self.definition = definition
        self.n_workers = n_workers
        self.tile_rows = tile_rows

    def strategy_for(self, encoding, input_range) -> QuantumStrategy:
        """Strategy used for pixels of ``encoding`` over ``input_range``."""
        return get_strategy(self.definition, encoding, input_range)

    def quantize(self, image, encoding=None, input_range=None) -> np.ndarray:
        """
        Quantize an image.

        Args:
            image: Numeric pixel array
            encoding: PixelEncoding of the pixels. Inferred from the dtype if None.
            input_range: (min, max) of the pixels. Observed from the data if None.

        Returns:
            uint8 array of output levels, same shape as the image

        Raises:
            InvalidArgument: If no strategy can be built for the request
        """
        data = np.asarray(image)

        # Step 1: Pixel encoding
        if encoding is None:
            encoding = PixelEncoding.from_dtype(data.dtype)
        else:
            encoding = verify_pixel_type(encoding)

        # Step 2: Input range
        if input_range is None:
            input_range = compute_input_range(data)

        # Step 3: Strategy (fails fast before any pixel work)
        strategy = self.strategy_for(encoding, input_range)

        # Step 4: Noise reduction
        if strategy.noise_reduction:
            data = reduce_noise(data)

        # Step 5: Quantization
        return self._apply(strategy, data)

    def _apply(self, strategy: QuantumStrategy, data: np.ndarray) -> np.ndarray:
        if self.n_workers == 1 or data.ndim == 0 or data.shape[0] <= self.tile_rows:
            return strategy.apply(data)

        tiles = split_into_row_tiles(data, self.tile_rows)
        logger.debug("Quantizing %d tiles with %d workers", len(tiles), self.n_workers)

        with ThreadPoolExecutor(max_workers=self.n_workers) as executor:
            results = list(executor.map(strategy.apply, tiles))

        return merge_row_tiles(results)
