"""Strategy Factory Verification."""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest
from pixquant.constants import SUPPORTED_BIT_RESOLUTIONS, NOISE_REDUCTION
from pixquant.quantization import (
    Family, PixelEncoding, InputRange, QuantumDef, QuantumStrategy,
    get_strategy, bit_depth_to_resolution,
    InvalidArgument, MissingDefinition, UnsupportedBitResolution,
    UnsupportedPixelEncoding, UnsupportedFamily, UnsupportedStrategy,
)

NUMERIC_ENCODINGS = [e for e in PixelEncoding if e is not PixelEncoding.BIT]


def test_supported_combinations():
    """Test every (bit resolution, encoding, family) combination."""
    print("=" * 60)
    print("Test 1: Supported Combinations")
    print("=" * 60)

    count = 0
    for resolution in SUPPORTED_BIT_RESOLUTIONS:
        for encoding in NUMERIC_ENCODINGS:
            for family in Family:
                qd = QuantumDef(family=family, bit_resolution=resolution, exponent=2.0)
                strategy = get_strategy(qd, encoding, (0, 100))
                assert isinstance(strategy, QuantumStrategy)
                assert strategy.encoding is encoding
                assert strategy.bit_resolution == resolution
                count += 1

    print(f"   ✓ {count} strategies created")
    print("✅ Supported combinations test passed")


def test_bit_encoding_unsupported():
    """Test that 1-bit pixels have no strategy, whatever the family."""
    print("\n" + "=" * 60)
    print("Test 2: 1-bit Encoding")
    print("=" * 60)

    for family in Family:
        qd = QuantumDef(family=family, bit_resolution=255)
        with pytest.raises(UnsupportedStrategy, match="Unsupported strategy"):
            get_strategy(qd, PixelEncoding.BIT, (0, 1))
        with pytest.raises(UnsupportedStrategy):
            get_strategy(qd, 'bit', (0, 1))
        print(f"   ✓ {family.name} rejected")

    print("✅ 1-bit encoding test passed")


def test_unsupported_bit_resolution():
    """Test bit resolutions that are not 2^n - 1 for n in 1..8."""
    print("\n" + "=" * 60)
    print("Test 3: Unsupported Bit Resolution")
    print("=" * 60)

    for resolution in (0, 2, 4, 16, 254, 256, 511, -1, 255.0, True, None, '255'):
        qd = QuantumDef(family=Family.LINEAR, bit_resolution=resolution)
        with pytest.raises(UnsupportedBitResolution, match="Unsupported bit resolution"):
            get_strategy(qd, PixelEncoding.UINT8, (0, 255))
        print(f"   ✓ {resolution!r} rejected")

    # numpy integers are accepted
    qd = QuantumDef(family=Family.LINEAR, bit_resolution=np.int64(127))
    assert get_strategy(qd, PixelEncoding.UINT8, (0, 255)).bit_resolution == 127

    print("✅ Unsupported bit resolution test passed")


def test_missing_definition():
    """Test that a missing definition is rejected first."""
    print("\n" + "=" * 60)
    print("Test 4: Missing Definition")
    print("=" * 60)

    with pytest.raises(MissingDefinition, match="No quantum definition"):
        get_strategy(None, PixelEncoding.UINT16, (0, 10))

    # Checked before the pixel type
    with pytest.raises(MissingDefinition):
        get_strategy(None, PixelEncoding.BIT, (0, 1))

    print("✅ Missing definition test passed")


def test_unsupported_pixel_encoding():
    """Test unknown pixel types."""
    print("\n" + "=" * 60)
    print("Test 5: Unsupported Pixel Encoding")
    print("=" * 60)

    qd = QuantumDef(family=Family.LINEAR, bit_resolution=255)
    for pixel_type in ('int64', 'complex', 42, None, np.dtype(np.uint8)):
        with pytest.raises(UnsupportedPixelEncoding, match="Unsupported pixel type"):
            get_strategy(qd, pixel_type, (0, 10))
        print(f"   ✓ {pixel_type!r} rejected")

    # Pixel type names are accepted
    assert get_strategy(qd, 'uint16', (0, 10)).encoding is PixelEncoding.UINT16
    assert get_strategy(qd, 'DOUBLE', (0, 10)).encoding is PixelEncoding.DOUBLE

    print("✅ Unsupported pixel encoding test passed")


def test_validation_order():
    """Test that the bit resolution is checked before the strategy lookup."""
    print("\n" + "=" * 60)
    print("Test 6: Validation Order")
    print("=" * 60)

    qd = QuantumDef(family=Family.LINEAR, bit_resolution=256)
    with pytest.raises(UnsupportedBitResolution):
        get_strategy(qd, PixelEncoding.BIT, (0, 1))

    qd = QuantumDef(family=Family.LINEAR, bit_resolution=255)
    with pytest.raises(UnsupportedPixelEncoding):
        get_strategy(qd, 'nibble', (0, 1))

    print("✅ Validation order test passed")


def test_family_names():
    """Test family lookup by name and integer code."""
    print("\n" + "=" * 60)
    print("Test 7: Family Names")
    print("=" * 60)

    assert [f.value for f in Family] == [0, 1, 2, 3]
    assert Family.from_name('linear') is Family.LINEAR
    assert Family.from_name(' Exponential ') is Family.EXPONENTIAL
    assert Family.from_name('LOGARITHMIC') is Family.LOGARITHMIC
    assert Family.from_name('polynomial') is Family.POLYNOMIAL

    with pytest.raises(UnsupportedFamily):
        Family.from_name('cubic')

    qd = QuantumDef(family='logarithmic', bit_resolution=15)
    strategy = get_strategy(qd, PixelEncoding.INT16, (1, 100))
    assert strategy.family is Family.LOGARITHMIC

    with pytest.raises(UnsupportedFamily):
        get_strategy(QuantumDef(family='gamma', bit_resolution=15), PixelEncoding.INT16, (1, 100))
    with pytest.raises(UnsupportedFamily):
        get_strategy(QuantumDef(family=2, bit_resolution=15), PixelEncoding.INT16, (1, 100))

    print("✅ Family names test passed")


def test_exponent_validation():
    """Test that the exponent is validated for power families only."""
    print("\n" + "=" * 60)
    print("Test 8: Exponent Validation")
    print("=" * 60)

    for family in (Family.EXPONENTIAL, Family.POLYNOMIAL):
        for exponent in (0, -1.5, float('nan'), float('inf'), None, 'two'):
            qd = QuantumDef(family=family, bit_resolution=255, exponent=exponent)
            with pytest.raises(InvalidArgument, match="Unsupported exponent"):
                get_strategy(qd, PixelEncoding.FLOAT, (0, 1))
        print(f"   ✓ {family.name} rejects invalid exponents")

    # The exponent is ignored by the other families
    for family in (Family.LINEAR, Family.LOGARITHMIC):
        qd = QuantumDef(family=family, bit_resolution=255, exponent=0)
        assert get_strategy(qd, PixelEncoding.FLOAT, (1, 2)) is not None

    print("✅ Exponent validation test passed")


def test_input_range_validation():
    """Test malformed input ranges."""
    print("\n" + "=" * 60)
    print("Test 9: Input Range Validation")
    print("=" * 60)

    qd = QuantumDef(family=Family.LINEAR, bit_resolution=255)
    for bad in ((10, 0), (0, float('inf')), (float('nan'), 1), 'ab', (1, 2, 3), None):
        with pytest.raises(InvalidArgument, match="Invalid input range"):
            get_strategy(qd, PixelEncoding.DOUBLE, bad)
        print(f"   ✓ {bad!r} rejected")

    strategy = get_strategy(qd, PixelEncoding.DOUBLE, InputRange(-1.0, 1.0))
    assert strategy.input_range == (-1.0, 1.0)
    assert get_strategy(qd, PixelEncoding.DOUBLE, (5, 5)).input_range.is_degenerate

    print("✅ Input range validation test passed")


def test_errors_are_value_errors():
    """Test that every validation error is an InvalidArgument and a ValueError."""
    print("\n" + "=" * 60)
    print("Test 10: Error Taxonomy")
    print("=" * 60)

    for error in (MissingDefinition, UnsupportedBitResolution, UnsupportedPixelEncoding,
                  UnsupportedFamily, UnsupportedStrategy):
        assert issubclass(error, InvalidArgument)
        assert issubclass(error, ValueError)
        print(f"   ✓ {error.__name__}")

    print("✅ Error taxonomy test passed")


def test_noise_reduction_flag():
    """Test that the noise reduction flag is carried by the strategy."""
    print("\n" + "=" * 60)
    print("Test 11: Noise Reduction Flag")
    print("=" * 60)

    qd = QuantumDef(family=Family.LINEAR, bit_resolution=255)
    assert qd.noise_reduction is NOISE_REDUCTION is True
    assert get_strategy(qd, PixelEncoding.UINT8, (0, 255)).noise_reduction is True

    qd = QuantumDef(family=Family.LINEAR, bit_resolution=255, noise_reduction=False)
    assert get_strategy(qd, PixelEncoding.UINT8, (0, 255)).noise_reduction is False

    print("✅ Noise reduction flag test passed")


def test_bit_depth_conversion():
    """Test bit depth to bit resolution conversion."""
    print("\n" + "=" * 60)
    print("Test 12: Bit Depth Conversion")
    print("=" * 60)

    resolutions = [bit_depth_to_resolution(n) for n in range(1, 9)]
    print(f"   depths 1-8 → {resolutions}")
    assert tuple(resolutions) == SUPPORTED_BIT_RESOLUTIONS

    for depth in (0, 9, 16, 2.0, True):
        with pytest.raises(UnsupportedBitResolution):
            bit_depth_to_resolution(depth)

    print("✅ Bit depth conversion test passed")


def test_encoding_from_dtype():
    """Test pixel encoding inference from numpy dtypes."""
    print("\n" + "=" * 60)
    print("Test 13: Encoding From Dtype")
    print("=" * 60)

    expected = {
        np.bool_: PixelEncoding.BIT,
        np.int8: PixelEncoding.INT8,
        np.uint8: PixelEncoding.UINT8,
        np.int16: PixelEncoding.INT16,
        np.uint16: PixelEncoding.UINT16,
        np.int32: PixelEncoding.INT32,
        np.uint32: PixelEncoding.UINT32,
        np.float16: PixelEncoding.FLOAT,
        np.float32: PixelEncoding.FLOAT,
        np.float64: PixelEncoding.DOUBLE,
    }
    for dtype, encoding in expected.items():
        assert PixelEncoding.from_dtype(dtype) is encoding
        print(f"   ✓ {np.dtype(dtype)} → {encoding.value}")

    for dtype in (np.int64, np.uint64, np.complex64):
        with pytest.raises(UnsupportedPixelEncoding):
            PixelEncoding.from_dtype(dtype)

    print("✅ Encoding from dtype test passed")


def main():
    """Run all factory tests."""
    print("\n" + "=" * 60)
    print("STRATEGY FACTORY VERIFICATION")
    print("=" * 60 + "\n")

    tests = [
        ("Supported Combinations", test_supported_combinations),
        ("1-bit Encoding", test_bit_encoding_unsupported),
        ("Unsupported Bit Resolution", test_unsupported_bit_resolution),
        ("Missing Definition", test_missing_definition),
        ("Unsupported Pixel Encoding", test_unsupported_pixel_encoding),
        ("Validation Order", test_validation_order),
        ("Family Names", test_family_names),
        ("Exponent Validation", test_exponent_validation),
        ("Input Range Validation", test_input_range_validation),
        ("Error Taxonomy", test_errors_are_value_errors),
        ("Noise Reduction Flag", test_noise_reduction_flag),
        ("Bit Depth Conversion", test_bit_depth_conversion),
        ("Encoding From Dtype", test_encoding_from_dtype),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except AssertionError as e:
            print(f"❌ {name} failed: {e}")
            results.append((name, False))

    # Summary
    print("\n" + "=" * 60)
    print("STRATEGY FACTORY SUMMARY")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"   {name}: {status}")
        if not passed:
            all_passed = False

    print("=" * 60 + "\n")
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
