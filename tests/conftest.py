from __future__ import annotations

import struct
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pytest

from swiv.models.image_model import ImageData

RGB = Tuple[int, int, int]

_BMP_HEADER = struct.Struct("<2sIHHIIiiHHIIiiII")


def make_bmp(
    rows: Sequence[Sequence[RGB]],
    *,
    bpp: int = 24,
    compression: int = 0,
    data_offset: int = 54,
    width: Optional[int] = None,
    height: Optional[int] = None,
    magic: bytes = b"BM",
    pad_last_row: bool = True,
) -> bytes:
    """Builds a 24-bit BMP from top-to-bottom rows of (r, g, b)."""
    h = len(rows) if height is None else height
    w = (len(rows[0]) if rows else 0) if width is None else width
    stride = (len(rows[0]) * 3 + 3) & ~3 if rows else 0

    raster = bytearray()
    for index, row in enumerate(reversed(rows)):
        line = bytearray()
        for r, g, b in row:
            line += bytes((b, g, r))
        is_last = index == len(rows) - 1
        if pad_last_row or not is_last:
            line += bytes(stride - len(line))
        raster += line

    gap = bytes(max(0, data_offset - _BMP_HEADER.size))
    header = _BMP_HEADER.pack(
        magic, _BMP_HEADER.size + len(gap) + len(raster), 0, 0, data_offset, 40,
        w, h, 1, bpp, compression, len(raster), 2835, 2835, 0, 0,
    )
    return header + gap + bytes(raster)


def make_ppm(width: int, height: int, raster: bytes, maxval: int = 255, magic: str = "P6",
             comment: Optional[str] = None) -> bytes:
    lines = [magic]
    if comment is not None:
        lines.append(f"# {comment}")
    lines.append(f"{width} {height}")
    lines.append(str(maxval))
    return ("\n".join(lines) + "\n").encode("ascii") + raster


def image_from_rgb(rows: Sequence[Sequence[RGB]], locked_aspect_ratio: bool = True) -> ImageData:
    rgb = np.asarray(rows, dtype=np.uint8)
    channels = np.empty(rgb.shape[:2] + (4,), dtype=np.uint8)
    channels[..., 0] = 255
    channels[..., 1:] = rgb
    return ImageData.from_channels(channels, locked_aspect_ratio=locked_aspect_ratio)


def random_image(rng: np.random.Generator, width: int, height: int, locked_aspect_ratio: bool = True) -> ImageData:
    channels = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    return ImageData.from_channels(channels, locked_aspect_ratio=locked_aspect_ratio)


class FakeTextRenderer:
    """Records captions and returns a fixed two-cell glyph next to the label origin."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, int, Tuple[int, int]]] = []

    def render_glyphs(self, text: str, scale: int, origin: Tuple[int, int]):
        self.calls.append((text, scale, origin))
        ox, oy = origin
        return [(ox, oy, 1.0), (ox + 1, oy, 0.5), (10_000, oy, 1.0)]


class FakeView:
    def __init__(self) -> None:
        self.presented: List[Tuple[np.ndarray, int, int]] = []
        self.errors: List[str] = []
        self.scheduled: Dict[str, Callable[[], None]] = {}
        self.cancelled: List[str] = []
        self.next_file: Optional[str] = None
        self._counter = 0
        self.on_resize = None
        self.on_pointer_move = None
        self.on_click = None
        self.on_key = None

    def present(self, buffer: np.ndarray, width: int, height: int) -> None:
        self.presented.append((buffer.copy(), width, height))

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> str:
        self._counter += 1
        handle = f"after#{self._counter}"
        self.scheduled[handle] = callback
        return handle

    def cancel(self, handle: str) -> None:
        self.cancelled.append(handle)
        self.scheduled.pop(handle, None)

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def ask_open_file(self) -> Optional[str]:
        return self.next_file

    def run_scheduled(self) -> None:
        pending, self.scheduled = self.scheduled, {}
        for callback in pending.values():
            callback()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def text_renderer() -> FakeTextRenderer:
    return FakeTextRenderer()


@pytest.fixture
def fake_view() -> FakeView:
    return FakeView()
