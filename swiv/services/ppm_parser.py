"""Декодер PPM (P6): текстовый заголовок и двоичный растр R, G, B.

Заголовок: `P6 <width> <height> <maxval>`, токены разделены пробельными
символами, строки с `#` до конца строки считаются комментариями. Растр
начинается сразу после одного пробельного символа за maxval.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

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

PPM_MAGIC = b"P6"
SUPPORTED_MAXVAL = 255

_WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")
_COMMENT = ord("#")


def _read_token(data: bytes, pos: int) -> Tuple[bytes, int]:
    """Читает следующий токен заголовка начиная с `pos`.

    Пропускает пробелы и комментарии перед токеном и поглощает ровно один
    пробельный символ после него. Возвращает токен и позицию за ним.
    """
    size = len(data)
    while pos < size:
        byte = data[pos]
        if byte == _COMMENT:
            newline = data.find(b"\n", pos)
            pos = size if newline < 0 else newline + 1
        elif byte in _WHITESPACE:
            pos += 1
        else:
            break

    start = pos
    while pos < size and data[pos] not in _WHITESPACE and data[pos] != _COMMENT:
        pos += 1
    token = data[start:pos]

    if pos < size and data[pos] in _WHITESPACE:
        pos += 1
    return token, pos


def _parse_int(token: bytes, name: str, path: Optional[Path]) -> int:
    if not token:
        raise TruncatedDataError(f"Заголовок PPM обрезан: нет поля {name}", path)
    if not token.isdigit():
        raise FormatError(f"Поле {name} не является числом: {token!r}", path)
    return int(token)


def parse_ppm(source: ImageSource, locked_aspect_ratio: bool = True) -> ImageData:
    """Декодирует двоичный PPM с 8 битами на канал.

    Raises:
        ImageIoError: если файл не читается.
        MagicMismatchError: первый токен не `P6`.
        TruncatedDataError: заголовок или растр обрезаны.
        InvalidDimensionsError: ширина или высота равны нулю.
        UnsupportedVariantError: maxval отличен от 255.
        FormatError: прочие нарушения (нечисловые поля, лишние байты).
    """
    data, path = read_source(source)

    magic, pos = _read_token(data, 0)
    if magic != PPM_MAGIC:
        raise MagicMismatchError("Файл не является PPM (неверная сигнатура)", path)

    token, pos = _read_token(data, pos)
    width = _parse_int(token, "width", path)
    token, pos = _read_token(data, pos)
    height = _parse_int(token, "height", path)
    token, pos = _read_token(data, pos)
    maxval = _parse_int(token, "maxval", path)
    logger.debug("PPM header: width=%d height=%d maxval=%d raster_offset=%d", width, height, maxval, pos)

    if width <= 0 or height <= 0:
        raise InvalidDimensionsError(f"Недопустимые размеры: {width}x{height}", path)
    if maxval != SUPPORTED_MAXVAL:
        raise UnsupportedVariantError(f"Неподдерживаемая глубина: maxval={maxval}", path)

    expected = 3 * width * height
    available = len(data) - pos
    if available < expected:
        raise TruncatedDataError(f"Пиксельные данные обрезаны: {available} из {expected} байт", path)
    if available != expected:
        raise FormatError(
            f"Размер растра не совпадает с размерами изображения: {available} байт вместо {expected}", path
        )

    rgb = np.frombuffer(data, dtype=np.uint8, count=expected, offset=pos).reshape(height, width, 3)
    channels = np.empty((height, width, 4), dtype=np.uint8)
    channels[..., 0] = 255
    channels[..., 1:] = rgb

    logger.info("Decoded PPM %dx%d%s", width, height, f" from {path}" if path else "")
    return ImageData.from_channels(channels, locked_aspect_ratio=locked_aspect_ratio, source=path)
