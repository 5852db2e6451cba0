"""Чтение входных данных парсеров: байты из памяти или файл с диска."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Union

from swiv.services.errors import ImageIoError

ImageSource = Union[bytes, bytearray, memoryview, str, Path]


def read_source(source: ImageSource) -> Tuple[bytes, Optional[Path]]:
    """Возвращает содержимое источника и путь к нему (для байтов путь None).

    Raises:
        ImageIoError: если файл не удалось прочитать.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source), None

    path = Path(source)
    try:
        return path.read_bytes(), path
    except OSError as exc:
        raise ImageIoError(f"Не удалось прочитать файл: {exc.strerror or exc}", path) from exc
