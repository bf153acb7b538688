"""Transform modules applied around quantization."""

from .noise import reduce_noise
from .tiles import split_into_row_tiles, merge_row_tiles

__all__ = [
    'reduce_noise',
    'split_into_row_tiles',
    'merge_row_tiles',
]
