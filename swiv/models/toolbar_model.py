"""Панель инструментов внизу окна: полоса фиксированной высоты с одной кнопкой.

Кнопка занимает квадрат 40×40 у левого края полосы и переключает инверсию.
Состояние нажатия хранится между перерисовками, наведение пересчитывается
на каждое движение указателя.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from swiv.config.constants import (
    BLACK,
    BUTTON_INSET,
    BUTTON_SIZE,
    GRAY,
    LABEL_COLOR,
    LABEL_OFFSET,
    LABEL_PRESSED,
    LABEL_RELEASED,
    LABEL_SCALE,
    TOOLBAR_HEIGHT,
    WHITE,
)
from swiv.models.pixel import coverage_blend
from swiv.services.text_service import PillowTextRenderer, TextRenderer

logger = logging.getLogger(__name__)


class ToolbarOverlay:
    height = TOOLBAR_HEIGHT

    def __init__(self, width: int, text_renderer: Optional[TextRenderer] = None) -> None:
        self.width = max(0, width)
        self.button_pressed = False
        self.buffer: np.ndarray = np.full(self.width * self.height, WHITE, dtype=np.uint32)
        self._text_renderer: TextRenderer = text_renderer or PillowTextRenderer()

    @property
    def label(self) -> str:
        return LABEL_PRESSED if self.button_pressed else LABEL_RELEASED

    def update(self, new_width: int) -> None:
        """Пересоздаёт буфер под новую ширину и заливает его белым."""
        self.width = max(0, new_width)
        self.buffer = np.full(self.width * self.height, WHITE, dtype=np.uint32)

    def reset(self) -> None:
        """Базовое состояние: белая полоса и подпись кнопки."""
        self.buffer.fill(WHITE)
        self._draw_label(self.label)

    def on_hover(self, x: int, y: int, surface_height: int) -> bool:
        """Подсвечивает кнопку серым, если указатель над ней.

        При нажатой кнопке подсветка не рисуется.
        """
        if self.button_pressed or not self._hit(x, y, surface_height):
            return False
        self.reset()
        self._fill_inset(GRAY)
        return True

    def on_click(self, x: int, y: int, surface_height: int) -> bool:
        """Переключает кнопку при попадании; возвращает True, если состояние изменилось."""
        if not self._hit(x, y, surface_height):
            return False
        self.button_pressed = not self.button_pressed
        logger.debug("Toolbar button %s", "pressed" if self.button_pressed else "released")
        self.reset()
        self._fill_inset(BLACK if self.button_pressed else GRAY)
        return True

    # ---- Internals ----
    def _hit(self, x: int, y: int, surface_height: int) -> bool:
        strip_top = surface_height - self.height
        if y < strip_top:
            return False
        relative_y = y - strip_top
        return 0 <= x < BUTTON_SIZE and relative_y < BUTTON_SIZE

    def _fill_inset(self, color: int) -> None:
        lo, hi = BUTTON_INSET, BUTTON_SIZE - BUTTON_INSET
        cols = min(hi, self.width)
        if cols <= lo:
            return
        strip = self.buffer.reshape(self.height, self.width)
        strip[lo:min(hi, self.height), lo:cols] = color

    def _draw_label(self, text: str) -> None:
        if self.width == 0:
            return
        for px, py, coverage in self._text_renderer.render_glyphs(text, LABEL_SCALE, LABEL_OFFSET):
            if coverage <= 0.0 or not (0 <= px < self.width and 0 <= py < self.height):
                continue
            idx = py * self.width + px
            self.buffer[idx] = coverage_blend(LABEL_COLOR, int(self.buffer[idx]), coverage)
