"""Загрузка изображений с диска: выбор декодера по расширению файла.

Принципы:
- SRP: класс отвечает только за выбор парсера и чтение файла.
- OCP: новый формат добавляется записью в `SUPPORTED_EXTENSIONS` и в таблицу парсеров.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict

from swiv.config.constants import SUPPORTED_EXTENSIONS
from swiv.models.image_model import ImageData
from swiv.services.bmp_parser import parse_bmp
from swiv.services.errors import ImageIoError, UnsupportedExtensionError
from swiv.services.ppm_parser import parse_ppm
from swiv.services.sources import ImageSource

logger = logging.getLogger(__name__)

Parser = Callable[[ImageSource, bool], ImageData]

_PARSERS: Dict[str, Parser] = {
    "bmp": parse_bmp,
    "ppm": parse_ppm,
}


def _normalize_extension(extension: str) -> str:
    extension = extension.lower()
    return extension if extension.startswith(".") else f".{extension}"


class ImageService:
    def parser_for(self, extension: str) -> Parser:
        """Возвращает декодер для расширения (без учёта регистра).

        Raises:
            UnsupportedExtensionError: если расширение не поддерживается.
        """
        fmt = SUPPORTED_EXTENSIONS.get(_normalize_extension(extension))
        if fmt is None:
            raise UnsupportedExtensionError(f"Неподдерживаемое расширение: '{extension}'")
        return _PARSERS[fmt]

    def load_image(self, file_path: str | Path, locked_aspect_ratio: bool = True) -> ImageData:
        """Загружает изображение с диска.

        Args:
            file_path: Путь до файла изображения.
            locked_aspect_ratio: Сохранять пропорции при масштабировании.

        Returns:
            Декодированное `ImageData`.

        Raises:
            UnsupportedExtensionError: расширение не `.bmp` / `.ppm`.
            ImageIoError: файл не найден или не читается.
            FormatError: содержимое не соответствует формату.
        """
        path = Path(file_path)
        try:
            parser = self.parser_for(path.suffix)
        except UnsupportedExtensionError as exc:
            exc.path = path
            raise
        if not path.is_file():
            raise ImageIoError("Файл не найден", path)

        logger.info("Loading %s", path)
        return parser(path, locked_aspect_ratio)

    def decode(self, data: bytes, extension: str, locked_aspect_ratio: bool = True) -> ImageData:
        """Декодирует уже прочитанные байты, формат выбирается по расширению."""
        return self.parser_for(extension)(data, locked_aspect_ratio)
