"""Типизированные ошибки загрузки изображений.

Каждая ошибка несёт короткий машинно-читаемый `reason` и понятное сообщение.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class ImageLoadError(Exception):
    reason = "load"

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


class ImageIoError(ImageLoadError):
    """Файл не удалось прочитать."""
    reason = "io"


class FormatError(ImageLoadError):
    """Содержимое файла не соответствует формату."""
    reason = "format"


class MagicMismatchError(FormatError):
    reason = "magic"


class TruncatedDataError(FormatError):
    reason = "truncated"


class InvalidDimensionsError(FormatError):
    reason = "dimensions"


class UnsupportedVariantError(FormatError):
    """Глубина цвета, сжатие или maxval, которые не поддерживаются."""
    reason = "unsupported"


class UnsupportedExtensionError(FormatError):
    reason = "extension"
