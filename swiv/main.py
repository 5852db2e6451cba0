"""Точка входа в приложение: разбор аргументов, логирование, запуск окна."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from swiv.config.logging_config import configure_logging

logger = logging.getLogger(__name__)


def parse_hex_color(value: str) -> int:
    """Разбирает цвет `RRGGBB` (префиксы `0x` и `#` необязательны) в непрозрачный ARGB."""
    stripped = value.strip()
    if stripped.lower().startswith("0x"):
        stripped = stripped[2:]
    stripped = stripped.lstrip("#")
    if not stripped or len(stripped) > 6:
        raise argparse.ArgumentTypeError(f"Ожидалось от 1 до 6 шестнадцатеричных цифр, получено {value!r}")
    try:
        rgb = int(stripped, 16)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Некорректный цвет: {value!r}") from exc
    return 0xFF000000 | rgb


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="swiv", description="Simple image viewer for BMP and PPM files")
    parser.add_argument("--image", type=Path, metavar="FILE", help="Image to open (.bmp or .ppm)")
    parser.add_argument("--color", type=parse_hex_color, default=parse_hex_color("0"), metavar="RGB",
                        help="Background colour as hex RGB (default: 000000)")
    parser.add_argument("--no-aspect", action="store_true", help="Unlock the aspect ratio")
    parser.add_argument("--log-level", default="INFO", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Создаёт и запускает главное окно приложения."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    logger.info("Using image '%s' with background 0x%06X", args.image or "", args.color & 0xFFFFFF)

    # Tk is imported only once a window is actually needed
    from swiv.app import SwivApp

    app = SwivApp(image_path=args.image, bg_color=args.color, locked_aspect_ratio=not args.no_aspect)
    app.mainloop()


if __name__ == "__main__":
    main()
