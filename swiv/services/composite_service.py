"""Сборка итогового буфера окна: холст по центру и панель инструментов снизу.

Функции чистые и не владеют состоянием. Любая строка, которая не помещается
в буфер источника или назначения, пропускается; результат всегда имеет
размер `surface_w * surface_h`.
"""
from __future__ import annotations

import logging

import numpy as np

from swiv.models.frame import Frame
from swiv.models.pixel import R, unpack_argb

logger = logging.getLogger(__name__)


def composite(
    surface_w: int,
    surface_h: int,
    frame: Frame,
    toolbar_buffer: np.ndarray,
    bg_color: int,
) -> np.ndarray:
    """Собирает буфер ARGB32 размера `surface_w * surface_h`.

    Args:
        surface_w: Ширина поверхности окна, px.
        surface_h: Высота поверхности окна, px.
        frame: Холст с результатом ресемплинга.
        toolbar_buffer: Буфер полосы инструментов (может быть пустым).
        bg_color: Цвет фона в формате ARGB.

    Returns:
        Плоский массив uint32, строки сверху вниз.
    """
    if surface_w <= 0 or surface_h <= 0:
        logger.debug("Composite skipped: surface %dx%d has no area", surface_w, surface_h)
        return np.empty(0, dtype=np.uint32)

    out = np.full(surface_w * surface_h, bg_color & 0xFFFFFFFF, dtype=np.uint32)
    skipped = 0

    v_slack = max(0, (surface_h - frame.height) // 2)
    h_slack = max(0, (surface_w - frame.width) // 2)
    drawable_h = min(frame.height, surface_h)
    drawable_w = min(frame.width, surface_w)
    src = frame.buffer

    for row in range(drawable_h):
        src_start = row * frame.width
        src_end = src_start + drawable_w
        dest_start = (row + v_slack) * surface_w + h_slack
        dest_end = dest_start + drawable_w
        if dest_end > out.size or src_end > src.size:
            skipped += 1
            continue
        out[dest_start:dest_end] = src[src_start:src_end]

    toolbar = np.asarray(toolbar_buffer, dtype=np.uint32).reshape(-1)
    if toolbar.size:
        toolbar_rows = toolbar.size // surface_w
        toolbar_start = (surface_h - toolbar_rows) * surface_w
        toolbar_end = toolbar_start + toolbar.size
        if 0 <= toolbar_start and toolbar_end <= out.size:
            out[toolbar_start:toolbar_end] = toolbar
        else:
            logger.debug("Toolbar (%d px) does not fit surface %dx%d", toolbar.size, surface_w, surface_h)

    if skipped:
        logger.debug("Composite skipped %d frame row(s)", skipped)
    return out


def to_rgb_array(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Раскладывает буфер ARGB32 в массив uint8 формы (height, width, 3) для показа."""
    packed = np.asarray(buffer, dtype=np.uint32).reshape(height, width)
    return np.ascontiguousarray(unpack_argb(packed)[..., R:])
