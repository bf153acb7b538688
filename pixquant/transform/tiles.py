"""Row tiling utilities for data-parallel quantization."""

from typing import List

import numpy as np

from ..constants import DEFAULT_TILE_ROWS


def split_into_row_tiles(image: np.ndarray, tile_rows: int = DEFAULT_TILE_ROWS) -> List[np.ndarray]:
    """
    Split an image into horizontal bands along its first axis.

    The last band holds the remaining rows when the row count is not a
    multiple of ``tile_rows``. Bands are views, returned in row order.

    Args:
        image: Array with at least one dimension
        tile_rows: Rows per band (default: 256)

    Returns:
        List of bands

    Raises:
        ValueError: If tile_rows < 1 or the image is 0-dimensional
    """
    if tile_rows < 1:
        raise ValueError(f"tile_rows must be >= 1, got {tile_rows}")

    image = np.asarray(image)
    if image.ndim == 0:
        raise ValueError("Expected at least 1D array, got 0D")

    n_rows = image.shape[0]
    return [image[start:start + tile_rows] for start in range(0, n_rows, tile_rows)]


def merge_row_tiles(tiles: List[np.ndarray]) -> np.ndarray:
    """
    Merge bands produced by split_into_row_tiles back into one array.

    Args:
        tiles: Bands in row order

    Returns:
        Concatenated array
    """
    if not tiles:
        raise ValueError("No tiles to merge")
    return np.concatenate(tiles, axis=0)
