"""Constants for the pixel quantization engine."""

# Bit-depth flags for the quantized output interval.
# Each value is 2^n - 1, the largest level of an n-bit display interval.
DEPTH_1BIT = 1
DEPTH_2BIT = 3
DEPTH_3BIT = 7
DEPTH_4BIT = 15
DEPTH_5BIT = 31
DEPTH_6BIT = 63
DEPTH_7BIT = 127
DEPTH_8BIT = 255

SUPPORTED_BIT_RESOLUTIONS = (
    DEPTH_1BIT, DEPTH_2BIT, DEPTH_3BIT, DEPTH_4BIT,
    DEPTH_5BIT, DEPTH_6BIT, DEPTH_7BIT, DEPTH_8BIT,
)

# Default value of the noise reduction flag
NOISE_REDUCTION = True

# Default exponent for the exponential and polynomial families
DEFAULT_EXPONENT = 1.0

# Largest input interval (in integer steps) for which a lookup table is built.
# 65536 covers every 8-bit and 16-bit encoding.
MAX_LUT_SIZE = 1 << 16

# Bound on the (non-positive) argument passed to exp(); exp(-700) is a normal float64
EXP_ARG_LIMIT = 700.0

# Median window used by the noise reduction pre-step
NOISE_FILTER_SIZE = 3

# Rows per tile for tiled bulk application
DEFAULT_TILE_ROWS = 256
