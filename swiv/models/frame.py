"""Логический холст: размеры, цвет фона и плоский буфер упакованных пикселей.

Буфер всегда заполняет ресемплер; сам холст умеет только менять форму.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np

from swiv.config.constants import DEFAULT_BACKGROUND


class Frame:
    def __init__(self, width: int = 0, height: int = 0, background: int = DEFAULT_BACKGROUND) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.background = background & 0xFFFFFFFF
        self.buffer: np.ndarray = np.full(self.width * self.height, self.background, dtype=np.uint32)

    def __repr__(self) -> str:
        return f"Frame({self.width}x{self.height}, background=0x{self.background:08X})"

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def resize(self, new_width: int, new_height: int) -> bool:
        """Меняет размеры буфера без ресемплинга.

        Начало старого буфера сохраняется, хвост обрезается либо дополняется
        цветом фона.

        Returns:
            False, если размеры не изменились.
        """
        new_width = max(0, new_width)
        new_height = max(0, new_height)
        if (new_width, new_height) == (self.width, self.height):
            return False

        resized = np.full(new_width * new_height, self.background, dtype=np.uint32)
        keep = min(resized.size, self.buffer.size)
        resized[:keep] = self.buffer[:keep]

        self.width = new_width
        self.height = new_height
        self.buffer = resized
        return True
