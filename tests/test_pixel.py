import numpy as np
import pytest

from swiv.models.pixel import (
    Pixel,
    apply_transforms,
    coverage_blend,
    grayscale_channels,
    invert_channels,
    lerp_channels,
    pack_argb,
    pack_channels,
    unpack_argb,
)


def test_packed_value_matches_channels():
    pixel = Pixel(0x12, 0x34, 0x56, 0x78)
    assert pixel.argb == 0x12345678
    assert pixel.to_argb() == pack_argb(0x12, 0x34, 0x56, 0x78)


def test_from_argb_splits_channels():
    pixel = Pixel.from_argb(0xFF102030)
    assert (pixel.a, pixel.r, pixel.g, pixel.b) == (0xFF, 0x10, 0x20, 0x30)
    assert pixel == Pixel.opaque(0x10, 0x20, 0x30)


def test_channel_out_of_range_is_rejected():
    with pytest.raises(ValueError):
        Pixel(255, 256, 0, 0)


def test_lerp_endpoints_and_midpoint():
    black = Pixel.opaque(0, 0, 0)
    white = Pixel.opaque(255, 255, 255)
    assert black.lerp(white, 0.0) == black
    assert black.lerp(white, 1.0) == white
    # 127.5 rounds half away from zero
    assert black.lerp(white, 0.5) == Pixel.opaque(128, 128, 128)


def test_grayscale_uses_truncated_luminance():
    assert Pixel.opaque(255, 0, 0).to_grayscale() == Pixel.opaque(76, 76, 76)
    assert Pixel.opaque(255, 255, 255).to_grayscale() == Pixel.opaque(255, 255, 255)
    assert Pixel(10, 0, 0, 255).to_grayscale().a == 10


def test_inversion_keeps_alpha():
    assert Pixel(200, 0, 100, 255).to_inverted() == Pixel(200, 255, 155, 0)


def test_display_color_applies_grayscale_before_inversion():
    red = Pixel.opaque(255, 0, 0)
    assert red.to_display_color(True, True) == Pixel.opaque(179, 179, 179).argb
    assert red.to_display_color(False, False) == red.argb


def test_coverage_blend():
    assert coverage_blend(0xFF000000, 0xFFFFFFFF, 1.0) == 0xFF000000
    assert coverage_blend(0xFF000000, 0xFFFFFFFF, 0.0) == 0xFFFFFFFF
    assert coverage_blend(0xFF000000, 0xFFFFFFFF, 0.5) == 0xFF808080


def test_pack_and_unpack_channels_agree(rng):
    packed = rng.integers(0, 2**32, size=(5, 7), dtype=np.uint32)
    assert np.array_equal(pack_channels(unpack_argb(packed)), packed)


def test_vector_transforms_match_scalar(rng):
    channels = rng.integers(0, 256, size=(64, 4), dtype=np.uint8)
    gray = grayscale_channels(channels)
    inverted = invert_channels(channels)
    for row, g, i in zip(channels, gray, inverted):
        pixel = Pixel(*(int(c) for c in row))
        assert Pixel(*(int(c) for c in g)) == pixel.to_grayscale()
        assert Pixel(*(int(c) for c in i)) == pixel.to_inverted()


def test_vector_lerp_matches_scalar(rng):
    first = rng.integers(0, 256, size=(50, 4), dtype=np.uint8)
    second = rng.integers(0, 256, size=(50, 4), dtype=np.uint8)
    weights = np.concatenate([rng.random(46), [0.0, 0.25, 0.5, 1.0]])
    blended = lerp_channels(first, second, weights)
    for a, b, w, out in zip(first, second, weights, blended):
        expected = Pixel(*(int(c) for c in a)).lerp(Pixel(*(int(c) for c in b)), float(w))
        assert Pixel(*(int(c) for c in out)) == expected


def test_apply_transforms_runs_in_order():
    channels = np.array([[255, 255, 0, 0]], dtype=np.uint8)
    out = apply_transforms(channels, [grayscale_channels, invert_channels])
    assert out.tolist() == [[255, 179, 179, 179]]
    assert apply_transforms(channels, []) is channels
