"""Errors raised while building a quantization strategy."""


class InvalidArgument(ValueError):
    """A quantization request was rejected."""


class MissingDefinition(InvalidArgument):
    """No quantum definition was supplied."""


class UnsupportedBitResolution(InvalidArgument):
    """The bit resolution is not one of the 2^n - 1 (n in 1..8) flags."""


class UnsupportedPixelEncoding(InvalidArgument):
    """The pixel type is not a known encoding."""


class UnsupportedFamily(InvalidArgument):
    """The family is not one of the four transfer functions."""


class UnsupportedStrategy(InvalidArgument):
    """No strategy exists for an otherwise valid request (e.g. 1-bit pixels)."""
