"""Модели данных для изображений.

Принципы:
- SRP: структура данных и флаги отображения, без алгоритмов ресемплинга.
- Пиксельные данные после декодирования не изменяются: визуальные эффекты
  (оттенки серого, инверсия, поворот) применяются при выборке, а не в хранилище.
- Поворот задаётся перечислением из четырёх значений; арифметика поворота
  замкнута внутри этого множества.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from swiv.models.pixel import (
    DisplayTransform,
    Pixel,
    grayscale_channels,
    invert_channels,
)


class Rotation(Enum):
    DEG_0 = 0
    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270

    @classmethod
    def from_degrees(cls, degrees: int) -> "Rotation":
        """Возвращает поворот для угла, кратного 90 (по модулю 360).

        Raises:
            ValueError: если угол не кратен 90.
        """
        if degrees % 90 != 0:
            raise ValueError(f"Поддерживаются только углы, кратные 90: {degrees}")
        return cls(degrees % 360)

    @property
    def degrees(self) -> int:
        return self.value

    @property
    def radians(self) -> float:
        return math.radians(self.value)

    @property
    def swaps_axes(self) -> bool:
        return self in (Rotation.DEG_90, Rotation.DEG_270)

    def rotated(self, quarter_turns: int) -> "Rotation":
        return Rotation((self.value + 90 * quarter_turns) % 360)

    def clockwise(self) -> "Rotation":
        return self.rotated(1)

    def counter_clockwise(self) -> "Rotation":
        return self.rotated(-1)


@dataclass
class ImageData:
    """Декодированное изображение и его флаги отображения.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        channels: Массив uint8 формы (height, width, 4) в порядке A, R, G, B.
            Только для чтения.
        locked_aspect_ratio: Сохранять пропорции при масштабировании.
        is_grayscale: Показывать в оттенках серого.
        inverted: Инвертировать цвета.
        rotation: Поворот по часовой стрелке.
        source: Путь к исходному файлу, если есть.
    """
    width: int
    height: int
    channels: np.ndarray = field(repr=False)
    locked_aspect_ratio: bool = True
    is_grayscale: bool = False
    inverted: bool = False
    rotation: Rotation = Rotation.DEG_0
    source: Optional[Path] = None

    def __post_init__(self) -> None:
        expected = (self.height, self.width, 4)
        if self.channels.shape != expected or self.channels.dtype != np.uint8:
            raise ValueError(
                f"Ожидался массив uint8 формы {expected}, получен {self.channels.dtype} {self.channels.shape}"
            )
        self.channels.setflags(write=False)

    # ---- Constructors ----
    @classmethod
    def from_channels(
        cls,
        channels: np.ndarray,
        locked_aspect_ratio: bool = True,
        source: Optional[Path] = None,
    ) -> "ImageData":
        # the stored copy is frozen; the caller's array stays writable
        channels = np.array(channels, dtype=np.uint8, copy=True, order="C")
        if channels.ndim != 3 or channels.shape[2] != 4:
            raise ValueError(f"Ожидался массив (H, W, 4), получен {channels.shape}")
        height, width = channels.shape[:2]
        return cls(
            width=width,
            height=height,
            channels=channels,
            locked_aspect_ratio=locked_aspect_ratio,
            source=source,
        )

    @classmethod
    def solid(cls, width: int, height: int, fill: Pixel, locked_aspect_ratio: bool = True) -> "ImageData":
        """Создаёт изображение, залитое одним цветом."""
        channels = np.empty((height, width, 4), dtype=np.uint8)
        channels[...] = (fill.a, fill.r, fill.g, fill.b)
        return cls(width=width, height=height, channels=channels, locked_aspect_ratio=locked_aspect_ratio)

    @classmethod
    def empty(cls) -> "ImageData":
        """Пустое изображение 0×0, используется после неудачной загрузки."""
        return cls(width=0, height=0, channels=np.zeros((0, 0, 4), dtype=np.uint8))

    # ---- Pixel access ----
    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def pixels(self) -> List[Pixel]:
        """Пиксели построчно, сверху вниз (len == width * height)."""
        flat = self.channels.reshape(-1, 4)
        return [Pixel(int(a), int(r), int(g), int(b)) for a, r, g, b in flat]

    def pixel(self, x: int, y: int) -> Pixel:
        a, r, g, b = (int(c) for c in self.channels[y, x])
        return Pixel(a, r, g, b)

    def effective_dimensions(self) -> Tuple[int, int]:
        """Ширина и высота с учётом поворота на 90/270."""
        if self.rotation.swaps_axes:
            return self.height, self.width
        return self.width, self.height

    def rotated_coords(self, x: int, y: int) -> Tuple[int, int]:
        """Переводит координаты повёрнутого (эффективного) пространства в координаты хранилища."""
        eff_w, eff_h = self.effective_dimensions()
        if self.rotation is Rotation.DEG_90:
            return y, eff_w - 1 - x
        if self.rotation is Rotation.DEG_180:
            return eff_w - 1 - x, eff_h - 1 - y
        if self.rotation is Rotation.DEG_270:
            return eff_h - 1 - y, x
        return x, y

    def rotated_pixel(self, x: int, y: int) -> Pixel:
        sx, sy = self.rotated_coords(x, y)
        return self.pixel(sx, sy)

    def display_transforms(self) -> List[DisplayTransform]:
        """Конвейер преобразований отображения: сначала оттенки серого, затем инверсия."""
        transforms: List[DisplayTransform] = []
        if self.is_grayscale:
            transforms.append(grayscale_channels)
        if self.inverted:
            transforms.append(invert_channels)
        return transforms

    # ---- Display flags ----
    def toggle_grayscale(self) -> bool:
        self.is_grayscale = not self.is_grayscale
        return self.is_grayscale

    def toggle_aspect_lock(self) -> bool:
        self.locked_aspect_ratio = not self.locked_aspect_ratio
        return self.locked_aspect_ratio

    def rotate_clockwise(self) -> Rotation:
        self.rotation = self.rotation.clockwise()
        return self.rotation

    def rotate_counter_clockwise(self) -> Rotation:
        self.rotation = self.rotation.counter_clockwise()
        return self.rotation
