"""Контроллер приложения: связывает окно, изображение, холст и панель инструментов.

SOLID:
- SRP: контроллер только реагирует на события окна и вызывает сервисы.
- DIP: вид передаётся извне; контроллер знает лишь его колбэки и методы
  `present`, `schedule`, `cancel`, `show_error`, `ask_open_file`.
Единственный владелец `ImageData`: флаги отображения меняются только здесь.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

from swiv.config.constants import DEFAULT_BACKGROUND, RESIZE_DEBOUNCE_MS, TOOLBAR_HEIGHT
from swiv.models.frame import Frame
from swiv.models.image_model import ImageData
from swiv.models.toolbar_model import ToolbarOverlay
from swiv.services.composite_service import composite
from swiv.services.errors import FormatError, ImageIoError
from swiv.services.image_service import ImageService
from swiv.services.resample_service import InterpolationType, ResampleService
from swiv.services.text_service import TextRenderer

if TYPE_CHECKING:
    from swiv.ui.image_viewer import SurfaceView

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Оркестрация загрузки, ресемплинга и сборки кадра.

    Ответственности:
    - Загрузка изображений через `ImageService` с откатом при ошибках.
    - Быстрый ресемплинг при изменении размера и один качественный после паузы.
    - Переключение флагов отображения с клавиатуры и кнопки панели.
    """
    view: "SurfaceView"
    bg_color: int = DEFAULT_BACKGROUND
    locked_aspect_ratio: bool = True
    text_renderer: Optional[TextRenderer] = None
    image: ImageData = field(default_factory=ImageData.empty)

    _image_service: ImageService = field(default_factory=ImageService)
    _resample_service: ResampleService = field(default_factory=ResampleService)
    _frame: Frame = field(init=False)
    _toolbar: ToolbarOverlay = field(init=False)
    _surface_size: Tuple[int, int] = (0, 0)
    _pending_resample: Optional[str] = None
    _hover_drawn: bool = False

    def __post_init__(self) -> None:
        self._frame = Frame(background=self.bg_color)
        self._toolbar = ToolbarOverlay(0, self.text_renderer)

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def toolbar(self) -> ToolbarOverlay:
        return self._toolbar

    @property
    def canvas_area(self) -> Tuple[int, int]:
        """Область под холст: поверхность окна без полосы инструментов."""
        width, height = self._surface_size
        return width, max(0, height - TOOLBAR_HEIGHT)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий вида."""
        self.view.on_resize = self.handle_resize
        self.view.on_pointer_move = self.handle_pointer_move
        self.view.on_click = self.handle_click
        self.view.on_key = self.handle_key

    # ---- Loading ----
    def open_file(self, file_path: str | Path) -> bool:
        """Загружает изображение и перерисовывает окно.

        При ошибке чтения остаётся прежнее изображение; при ошибке формата
        показывается пустое изображение (только фон). Ошибка сообщается один раз.
        """
        try:
            image = self._image_service.load_image(file_path, self.locked_aspect_ratio)
        except ImageIoError as exc:
            logger.error("Could not read image: %s", exc)
            self.view.show_error(str(exc))
            return False
        except FormatError as exc:
            logger.warning("Could not decode image (%s): %s", exc.reason, exc)
            self.view.show_error(str(exc))
            image = ImageData.empty()

        self._set_image(image)
        return not image.is_empty

    def _set_image(self, image: ImageData) -> None:
        image.inverted = self._toolbar.button_pressed
        self.image = image
        self._frame = Frame(background=self.bg_color)
        self._refresh(InterpolationType.BILINEAR)

    # ---- Handlers ----
    def handle_resize(self, width: int, height: int) -> None:
        if (width, height) == self._surface_size:
            return
        self._surface_size = (width, height)
        if self._toolbar.width != width:
            self._toolbar.update(width)
            self._toolbar.reset()
            self._hover_drawn = False

        self._refresh(InterpolationType.NEAREST_NEIGHBOR)
        self._schedule_high_quality()

    def handle_pointer_move(self, x: int, y: int) -> None:
        _, surface_h = self._surface_size
        hovering = self._toolbar.on_hover(x, y, surface_h)
        if hovering:
            self._hover_drawn = True
            self.render()
        elif self._hover_drawn:
            # pointer left the button: drop the highlight
            self._hover_drawn = False
            if not self._toolbar.button_pressed:
                self._toolbar.reset()
            self.render()

    def handle_click(self, x: int, y: int) -> None:
        _, surface_h = self._surface_size
        if not self._toolbar.on_click(x, y, surface_h):
            return
        self._hover_drawn = False
        self.image.inverted = self._toolbar.button_pressed
        logger.info("Inversion %s", "on" if self.image.inverted else "off")
        self._refresh(InterpolationType.BILINEAR)

    def handle_key(self, keysym: str) -> None:
        if keysym == "g":
            logger.info("Grayscale %s", "on" if self.image.toggle_grayscale() else "off")
        elif keysym == "r":
            logger.info("Rotation %d", self.image.rotate_clockwise().degrees)
        elif keysym in ("R", "e"):
            logger.info("Rotation %d", self.image.rotate_counter_clockwise().degrees)
        elif keysym == "a":
            self.locked_aspect_ratio = self.image.toggle_aspect_lock()
            logger.info("Aspect lock %s", "on" if self.locked_aspect_ratio else "off")
        elif keysym == "o":
            path = self.view.ask_open_file()
            if path:
                self.open_file(path)
            return
        else:
            return
        self._refresh(InterpolationType.BILINEAR)

    # ---- Rendering ----
    def render(self) -> None:
        width, height = self._surface_size
        buffer = composite(width, height, self._frame, self._toolbar.buffer, self.bg_color)
        self.view.present(buffer, width, height)

    def _refresh(self, interpolation: InterpolationType) -> None:
        target_w, target_h = self.canvas_area
        self._resample_service.resample(self.image, self._frame, target_w, target_h, interpolation)
        self.render()

    def _schedule_high_quality(self) -> None:
        if self._pending_resample is not None:
            self.view.cancel(self._pending_resample)
        self._pending_resample = self.view.schedule(RESIZE_DEBOUNCE_MS, self._on_resize_settled)

    def _on_resize_settled(self) -> None:
        self._pending_resample = None
        self._refresh(InterpolationType.BILINEAR)
