from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import customtkinter as ctk

from swiv.config.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    WINDOW_TITLE,
)
from swiv.controllers.app_controller import AppController
from swiv.ui.image_viewer import SurfaceView

logger = logging.getLogger(__name__)


class SwivApp(ctk.CTk):
    def __init__(
        self,
        image_path: Optional[Path] = None,
        bg_color: int = DEFAULT_BACKGROUND,
        locked_aspect_ratio: bool = True,
    ) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")

        self.title(WINDOW_TITLE if image_path is None else f"{WINDOW_TITLE} - {image_path.name}")
        self.geometry(f"{DEFAULT_WINDOW_WIDTH}x{DEFAULT_WINDOW_HEIGHT}")
        self.minsize(MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self._viewer = SurfaceView(self)
        self._viewer.grid(row=0, column=0, sticky="nsew")

        self._controller = AppController(
            view=self._viewer,
            bg_color=bg_color,
            locked_aspect_ratio=locked_aspect_ratio,
        )
        self._controller.bind_events()

        if image_path is None:
            logger.info("No file provided; window shows the background only")
        else:
            self._controller.open_file(image_path)
