import numpy as np
import pytest

from swiv.models.pixel import Pixel
from swiv.services.bmp_parser import parse_bmp, parse_header
from swiv.services.errors import (
    FormatError,
    InvalidDimensionsError,
    MagicMismatchError,
    TruncatedDataError,
    UnsupportedVariantError,
)

from conftest import make_bmp

RED, GREEN, BLUE, YELLOW, WHITE, BLACK = (
    (255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0), (255, 255, 255), (0, 0, 0),
)


def test_rows_are_flipped_and_padding_skipped():
    image = parse_bmp(make_bmp([[RED, GREEN], [BLUE, YELLOW]]))
    assert (image.width, image.height) == (2, 2)
    assert image.pixels == [Pixel.opaque(*c) for c in (RED, GREEN, BLUE, YELLOW)]


def test_odd_width_rows(rng):
    rows = rng.integers(0, 256, size=(4, 3, 3)).tolist()
    image = parse_bmp(make_bmp(rows))
    assert np.array_equal(image.channels[..., 1:], np.asarray(rows, dtype=np.uint8))
    assert np.all(image.channels[..., 0] == 255)


def test_last_row_without_padding_is_accepted():
    image = parse_bmp(make_bmp([[RED], [WHITE]], pad_last_row=False))
    assert image.pixels == [Pixel.opaque(*RED), Pixel.opaque(*WHITE)]


def test_data_offset_is_honoured():
    image = parse_bmp(make_bmp([[BLACK, WHITE]], data_offset=70))
    assert image.pixels == [Pixel.opaque(*BLACK), Pixel.opaque(*WHITE)]


def test_header_fields():
    header = parse_header(make_bmp([[RED, GREEN, BLUE]]))
    assert header.width == 3
    assert header.height == 1
    assert header.planes == 1
    assert header.bits_per_pixel == 24
    assert header.compression == 0
    assert header.data_offset == 54
    assert header.row_stride == 12


def test_compression_is_unsupported():
    with pytest.raises(UnsupportedVariantError) as excinfo:
        parse_bmp(make_bmp([[RED]], compression=1))
    assert excinfo.value.reason == "unsupported"


@pytest.mark.parametrize("bpp", [1, 8, 16, 32])
def test_other_bit_depths_are_unsupported(bpp):
    with pytest.raises(UnsupportedVariantError):
        parse_bmp(make_bmp([[RED]], bpp=bpp))


def test_magic_mismatch():
    with pytest.raises(MagicMismatchError):
        parse_bmp(make_bmp([[RED]], magic=b"MB"))


def test_truncated_header():
    with pytest.raises(TruncatedDataError):
        parse_bmp(make_bmp([[RED]])[:30])


def test_truncated_raster():
    data = make_bmp([[RED, GREEN], [BLUE, YELLOW]])
    with pytest.raises(TruncatedDataError):
        parse_bmp(data[:-9])


def test_huge_dimensions_do_not_allocate():
    with pytest.raises(TruncatedDataError):
        parse_bmp(make_bmp([[RED]], width=100_000, height=100_000))


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (1, -1)])
def test_non_positive_dimensions(width, height):
    with pytest.raises(InvalidDimensionsError):
        parse_bmp(make_bmp([[RED]], width=width, height=height))


def test_data_offset_inside_header():
    with pytest.raises(FormatError):
        parse_bmp(make_bmp([[RED]], data_offset=20))
