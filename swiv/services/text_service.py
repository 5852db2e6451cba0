"""Растеризация подписей: текст -> ячейки пикселей с покрытием 0.0..1.0."""
from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

GlyphCell = Tuple[int, int, float]


class TextRenderer(Protocol):
    def render_glyphs(self, text: str, scale: int, origin: Tuple[int, int]) -> List[GlyphCell]:
        ...


class PillowTextRenderer:
    """Рисует текст шрифтом Pillow в маску `L` и отдаёт ненулевые ячейки.

    `origin` задаёт левый верхний угол строки (верх надстрочных элементов).
    """
    def __init__(self, font_path: Optional[str] = None) -> None:
        self._font_path = font_path
        self._fonts: Dict[int, ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}

    def _font(self, scale: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        font = self._fonts.get(scale)
        if font is None:
            if self._font_path:
                font = ImageFont.truetype(self._font_path, scale)
            else:
                font = ImageFont.load_default(size=scale)
            self._fonts[scale] = font
        return font

    def render_glyphs(self, text: str, scale: int, origin: Tuple[int, int]) -> List[GlyphCell]:
        if not text:
            return []
        font = self._font(scale)
        left, top, right, bottom = (int(v) for v in font.getbbox(text))
        if right <= left or bottom <= top:
            return []

        mask = Image.new("L", (right - left, bottom - top), 0)
        ImageDraw.Draw(mask).text((-left, -top), text, fill=255, font=font)
        coverage = np.asarray(mask)

        ox, oy = origin
        ys, xs = np.nonzero(coverage)
        return [
            (ox + left + int(x), oy + top + int(y), float(coverage[y, x]) / 255.0)
            for y, x in zip(ys, xs)
        ]
