"""Ресемплинг изображения в холст: ближайший сосед и билинейная интерполяция.

Принципы:
- SRP: сервис только вычисляет размеры назначения и заполняет буфер холста.
- Преобразования отображения (оттенки серого, инверсия) берутся из
  `ImageData.display_transforms()` и применяются к выборкам до смешивания,
  так что код интерполяции о них не знает.

Все вычисления векторизованы: сетки координат строятся один раз на вызов,
выборки собираются индексированием массивов numpy.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Tuple

import numpy as np

from swiv.models.frame import Frame
from swiv.models.image_model import ImageData
from swiv.models.pixel import apply_transforms, lerp_channels, pack_channels

logger = logging.getLogger(__name__)


class InterpolationType(Enum):
    NEAREST_NEIGHBOR = "nearest"
    BILINEAR = "bilinear"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def fit_dimensions(eff_w: int, eff_h: int, target_w: int, target_h: int, locked: bool) -> Tuple[int, int]:
    """Размеры назначения для заданной области.

    Без фиксации пропорций совпадают с запрошенными. С фиксацией масштаб
    `min(target_w/eff_w, target_h/eff_h)`, результат округляется и не
    превышает запрошенную область ни по одной оси.
    """
    target_w = max(0, target_w)
    target_h = max(0, target_h)
    if not locked:
        return target_w, target_h
    if eff_w <= 0 or eff_h <= 0:
        return 0, 0
    scale = min(target_w / eff_w, target_h / eff_h)
    return (
        min(target_w, _round_half_up(eff_w * scale)),
        min(target_h, _round_half_up(eff_h * scale)),
    )


def _quarter_turn_cos_sin(angle: float) -> Tuple[int, int]:
    # Only quarter turns exist, so cos/sin are exactly -1, 0 or 1
    return round(math.cos(angle)), round(math.sin(angle))


class ResampleService:
    def resample(
        self,
        image: ImageData,
        frame: Frame,
        target_width: int,
        target_height: int,
        interpolation: InterpolationType = InterpolationType.BILINEAR,
    ) -> bool:
        """Перерисовывает холст из изображения под размер области.

        Args:
            image: Источник пикселей и флагов отображения.
            frame: Холст; меняет размер и получает новые пиксели.
            target_width: Ширина доступной области, px.
            target_height: Высота доступной области, px.
            interpolation: Алгоритм выборки.

        Returns:
            True, если холст перерисован. Для пустого изображения холст не
            трогается и возвращается False.
        """
        if image.is_empty:
            logger.debug("Resample skipped: empty source image")
            return False

        eff_w, eff_h = image.effective_dimensions()
        dst_w, dst_h = fit_dimensions(eff_w, eff_h, target_width, target_height, image.locked_aspect_ratio)
        frame.resize(dst_w, dst_h)
        if dst_w == 0 or dst_h == 0:
            logger.debug("Resample skipped: zero-area destination %dx%d", dst_w, dst_h)
            return False

        x_ratio = eff_w / dst_w
        y_ratio = eff_h / dst_h

        if interpolation is InterpolationType.NEAREST_NEIGHBOR:
            channels = self._nearest_neighbor(image, dst_w, dst_h, x_ratio, y_ratio)
        else:
            channels = self._bilinear(image, dst_w, dst_h, x_ratio, y_ratio)

        frame.buffer[:] = pack_channels(channels).reshape(-1)
        logger.debug(
            "Resampled %dx%d (rotation=%d) -> %dx%d using %s",
            image.width, image.height, image.rotation.degrees, dst_w, dst_h, interpolation.value,
        )
        return True

    def _nearest_neighbor(
        self, image: ImageData, dst_w: int, dst_h: int, x_ratio: float, y_ratio: float
    ) -> np.ndarray:
        eff_w, eff_h = image.effective_dimensions()
        ex = np.clip(np.floor(np.arange(dst_w) * x_ratio), 0, eff_w - 1).astype(np.intp)
        ey = np.clip(np.floor(np.arange(dst_h) * y_ratio), 0, eff_h - 1).astype(np.intp)
        grid_x, grid_y = np.meshgrid(ex, ey)

        # rotated_coords is plain arithmetic, so it maps whole grids at once
        src_x, src_y = image.rotated_coords(grid_x, grid_y)
        samples = image.channels[src_y, src_x]
        return apply_transforms(samples, image.display_transforms())

    def _bilinear(
        self, image: ImageData, dst_w: int, dst_h: int, x_ratio: float, y_ratio: float
    ) -> np.ndarray:
        """Билинейная выборка с поворотом вокруг центра изображения.

        Точка выборки берётся в центре пикселя назначения, переводится в
        эффективное (повёрнутое) пространство, затем поворачивается на
        `-rotation` вокруг центра и попадает в координаты хранилища.
        Четыре соседа зажимаются в границы независимо друг от друга, веса
        равны дробной части.
        """
        eff_w, eff_h = image.effective_dimensions()
        offset_x = (np.arange(dst_w) + 0.5) * x_ratio - 0.5 - (eff_w - 1) / 2.0
        offset_y = (np.arange(dst_h) + 0.5) * y_ratio - 0.5 - (eff_h - 1) / 2.0
        grid_x, grid_y = np.meshgrid(offset_x, offset_y)

        cos, sin = _quarter_turn_cos_sin(-image.rotation.radians)
        src_x = grid_x * cos - grid_y * sin + (image.width - 1) / 2.0
        src_y = grid_x * sin + grid_y * cos + (image.height - 1) / 2.0

        floor_x = np.floor(src_x)
        floor_y = np.floor(src_y)
        weight_x = src_x - floor_x
        weight_y = src_y - floor_y

        x0 = np.clip(floor_x, 0, image.width - 1).astype(np.intp)
        x1 = np.clip(floor_x + 1, 0, image.width - 1).astype(np.intp)
        y0 = np.clip(floor_y, 0, image.height - 1).astype(np.intp)
        y1 = np.clip(floor_y + 1, 0, image.height - 1).astype(np.intp)

        transforms = image.display_transforms()
        channels = image.channels
        p00 = apply_transforms(channels[y0, x0], transforms)
        p10 = apply_transforms(channels[y0, x1], transforms)
        p01 = apply_transforms(channels[y1, x0], transforms)
        p11 = apply_transforms(channels[y1, x1], transforms)

        top = lerp_channels(p00, p10, weight_x)
        bottom = lerp_channels(p01, p11, weight_x)
        return lerp_channels(top, bottom, weight_y)
