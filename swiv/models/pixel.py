"""Модель пикселя: каналы A/R/G/B и упакованное 32-битное значение ARGB.

Принципы:
- SRP: только значение пикселя и чистые операции над ним (упаковка, смешивание,
  оттенки серого, инверсия).
- Чистый код: неизменяемость (`frozen=True`); упакованное значение вычисляется
  один раз при создании и всегда совпадает с каналами.

Векторные функции (`*_channels`) повторяют ту же арифметику над массивами numpy
формы `(..., 4)` в порядке каналов A, R, G, B. Ими пользуется ресемплер.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable

import numpy as np

# Channel order inside (..., 4) arrays
A, R, G, B = 0, 1, 2, 3

DisplayTransform = Callable[[np.ndarray], np.ndarray]


def pack_argb(a: int, r: int, g: int, b: int) -> int:
    """Упаковывает каналы в `(a<<24)|(r<<16)|(g<<8)|b`."""
    return (a << 24) | (r << 16) | (g << 8) | b


def _round_half_up(value: float) -> int:
    # Non-negative inputs only: matches round-half-away-from-zero
    return int(math.floor(value + 0.5))


def _clamp_u8(value: int) -> int:
    return max(0, min(255, value))


@dataclass(frozen=True)
class Pixel:
    """Неизменяемый пиксель ARGB.

    Fields:
        a, r, g, b: Каналы 0..255.
        argb: Упакованное значение, вычисляется автоматически.
    """
    a: int
    r: int
    g: int
    b: int
    argb: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("a", "r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Канал {name} вне диапазона 0..255: {value}")
        object.__setattr__(self, "argb", pack_argb(self.a, self.r, self.g, self.b))

    @classmethod
    def from_argb(cls, argb: int) -> "Pixel":
        argb &= 0xFFFFFFFF
        return cls((argb >> 24) & 0xFF, (argb >> 16) & 0xFF, (argb >> 8) & 0xFF, argb & 0xFF)

    @classmethod
    def opaque(cls, r: int, g: int, b: int) -> "Pixel":
        return cls(255, r, g, b)

    def to_argb(self) -> int:
        return self.argb

    def lerp(self, other: "Pixel", weight: float) -> "Pixel":
        """Линейное смешивание: `round(self*(1-w) + other*w)` по каждому каналу."""
        def blend(x: int, y: int) -> int:
            return _clamp_u8(_round_half_up(x * (1.0 - weight) + y * weight))

        return Pixel(
            blend(self.a, other.a),
            blend(self.r, other.r),
            blend(self.g, other.g),
            blend(self.b, other.b),
        )

    def to_grayscale(self) -> "Pixel":
        """Яркость 0.299R + 0.587G + 0.114B с отбрасыванием дробной части."""
        gray = (299 * self.r + 587 * self.g + 114 * self.b) // 1000
        return Pixel(self.a, gray, gray, gray)

    def to_inverted(self) -> "Pixel":
        return Pixel(self.a, 255 - self.r, 255 - self.g, 255 - self.b)

    def to_display_color(self, is_grayscale: bool, is_inverted: bool) -> int:
        """Применяет оттенки серого, затем инверсию; возвращает упакованный цвет."""
        pixel = self
        if is_grayscale:
            pixel = pixel.to_grayscale()
        if is_inverted:
            pixel = pixel.to_inverted()
        return pixel.argb


def coverage_blend(fg_argb: int, bg_argb: int, coverage: float) -> int:
    """Смешивает цвет текста с фоном по покрытию глифа (0.0..1.0).

    Результат всегда непрозрачный.
    """
    alpha = int(max(0.0, min(1.0, coverage)) * 255)
    out = 0xFF000000
    for shift in (16, 8, 0):
        fg = (fg_argb >> shift) & 0xFF
        bg = (bg_argb >> shift) & 0xFF
        out |= ((fg * alpha + bg * (255 - alpha)) // 255) << shift
    return out


# ---------- Векторные версии ----------
def unpack_argb(packed: np.ndarray) -> np.ndarray:
    """Раскладывает массив uint32 ARGB в массив uint8 формы `(..., 4)`."""
    packed = np.asarray(packed, dtype=np.uint32)
    out = np.empty(packed.shape + (4,), dtype=np.uint8)
    out[..., A] = (packed >> 24) & 0xFF
    out[..., R] = (packed >> 16) & 0xFF
    out[..., G] = (packed >> 8) & 0xFF
    out[..., B] = packed & 0xFF
    return out


def pack_channels(channels: np.ndarray) -> np.ndarray:
    """Упаковывает массив `(..., 4)` в uint32 ARGB."""
    ch = np.asarray(channels).astype(np.uint32)
    return (ch[..., A] << 24) | (ch[..., R] << 16) | (ch[..., G] << 8) | ch[..., B]


def grayscale_channels(channels: np.ndarray) -> np.ndarray:
    ch = np.asarray(channels, dtype=np.uint8)
    wide = ch.astype(np.int64)
    gray = (299 * wide[..., R] + 587 * wide[..., G] + 114 * wide[..., B]) // 1000
    out = ch.copy()
    out[..., R] = gray
    out[..., G] = gray
    out[..., B] = gray
    return out


def invert_channels(channels: np.ndarray) -> np.ndarray:
    out = np.array(channels, dtype=np.uint8, copy=True)
    out[..., R:] = 255 - out[..., R:]
    return out


def lerp_channels(first: np.ndarray, second: np.ndarray, weight: np.ndarray) -> np.ndarray:
    """Векторный аналог `Pixel.lerp`; форма `weight` совпадает с формой пикселей без оси каналов."""
    w = np.asarray(weight, dtype=np.float64)
    if w.ndim:
        w = w[..., np.newaxis]
    mixed = first.astype(np.float64) * (1.0 - w) + second.astype(np.float64) * w
    return np.clip(np.floor(mixed + 0.5), 0, 255).astype(np.uint8)


def apply_transforms(channels: np.ndarray, transforms: Iterable[DisplayTransform]) -> np.ndarray:
    """Применяет упорядоченный конвейер преобразований пикселей."""
    for transform in transforms:
        channels = transform(channels)
    return channels
