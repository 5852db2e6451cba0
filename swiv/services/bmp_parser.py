"""Декодер BMP (Windows bitmap): только 24 бита на пиксель без сжатия.

Строки хранятся снизу вверх, каждая дополнена до границы 4 байт; пиксели
записаны в порядке B, G, R.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from swiv.models.image_model import ImageData
from swiv.services.errors import (
    FormatError,
    InvalidDimensionsError,
    MagicMismatchError,
    TruncatedDataError,
    UnsupportedVariantError,
)
from swiv.services.sources import ImageSource, read_source

logger = logging.getLogger(__name__)

BMP_MAGIC = b"BM"
HEADER_SIZE = 54
SUPPORTED_BPP = 24
BI_RGB = 0

# file header (14 bytes) + BITMAPINFOHEADER (40 bytes), little-endian
_HEADER = struct.Struct("<2sIHHIIiiHHIIiiII")


@dataclass(frozen=True)
class BmpHeader:
    file_size: int
    data_offset: int
    width: int
    height: int
    planes: int
    bits_per_pixel: int
    compression: int
    compressed_size: int
    colors_used: int
    important_colors: int

    @property
    def row_stride(self) -> int:
        """Длина строки в байтах с выравниванием до 4."""
        return (self.width * 3 + 3) & ~3


def parse_header(data: bytes, path: Optional[Path] = None) -> BmpHeader:
    """Разбирает и проверяет заголовок BMP.

    Raises:
        MagicMismatchError: если файл не начинается с `BM`.
        TruncatedDataError: если заголовок короче 54 байт.
        UnsupportedVariantError: глубина не 24 бита или есть сжатие.
        InvalidDimensionsError: ширина или высота не положительны.
    """
    if data[:2] != BMP_MAGIC:
        raise MagicMismatchError("Файл не является BMP (неверная сигнатура)", path)
    if len(data) < HEADER_SIZE:
        raise TruncatedDataError(f"Заголовок BMP обрезан: {len(data)} из {HEADER_SIZE} байт", path)

    (
        _magic,
        file_size,
        _reserved1,
        _reserved2,
        data_offset,
        _dib_size,
        width,
        height,
        planes,
        bits_per_pixel,
        compression,
        compressed_size,
        _x_ppm,
        _y_ppm,
        colors_used,
        important_colors,
    ) = _HEADER.unpack_from(data, 0)

    header = BmpHeader(
        file_size=file_size,
        data_offset=data_offset,
        width=width,
        height=height,
        planes=planes,
        bits_per_pixel=bits_per_pixel,
        compression=compression,
        compressed_size=compressed_size,
        colors_used=colors_used,
        important_colors=important_colors,
    )
    logger.debug("BMP header: %s", header)

    if bits_per_pixel != SUPPORTED_BPP:
        raise UnsupportedVariantError(f"Неподдерживаемая глубина цвета: {bits_per_pixel} бит на пиксель", path)
    if compression != BI_RGB:
        raise UnsupportedVariantError(f"Неподдерживаемое сжатие: {compression}", path)
    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Недопустимые размеры: {width}x{height}", path)
    if data_offset < HEADER_SIZE:
        raise FormatError(f"Смещение пиксельных данных внутри заголовка: {data_offset}", path)
    return header


def parse_bmp(source: ImageSource, locked_aspect_ratio: bool = True) -> ImageData:
    """Декодирует 24-битный несжатый BMP.

    Args:
        source: Байты файла или путь к нему.
        locked_aspect_ratio: Начальное значение флага сохранения пропорций.

    Returns:
        `ImageData` со строками сверху вниз и непрозрачными пикселями.

    Raises:
        ImageIoError: если файл не читается.
        FormatError: при любом нарушении формата (см. `parse_header`).
    """
    data, path = read_source(source)
    header = parse_header(data, path)

    width, height = header.width, header.height
    row_bytes = width * 3
    stride = header.row_stride
    # The last row may come without its trailing padding
    required = stride * (height - 1) + row_bytes
    raster = data[header.data_offset:header.data_offset + stride * height]
    if len(raster) < required:
        raise TruncatedDataError(
            f"Пиксельные данные обрезаны: {len(raster)} из {required} байт", path
        )
    if len(raster) < stride * height:
        raster += bytes(stride * height - len(raster))

    rows = np.frombuffer(raster, dtype=np.uint8).reshape(height, stride)[:, :row_bytes]
    bgr = rows.reshape(height, width, 3)[::-1]

    channels = np.empty((height, width, 4), dtype=np.uint8)
    channels[..., 0] = 255
    channels[..., 1] = bgr[..., 2]
    channels[..., 2] = bgr[..., 1]
    channels[..., 3] = bgr[..., 0]

    logger.info("Decoded BMP %dx%d%s", width, height, f" from {path}" if path else "")
    return ImageData.from_channels(channels, locked_aspect_ratio=locked_aspect_ratio, source=path)
