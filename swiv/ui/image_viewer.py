"""Виджет поверхности окна: показывает готовый буфер ARGB и пересылает события.

Принципы:
- SRP: отвечает только за представление и ввод; никакой обработки пикселей.
- Чистый код: публичное API (`present`, `schedule`, `cancel`, ...) отделено
  от внутренних обработчиков событий Tk.
"""
from __future__ import annotations

from tkinter import TclError, filedialog, messagebox
from typing import Callable, Optional

import customtkinter as ctk
import numpy as np
import tkinter as tk
from PIL import Image, ImageTk

from swiv.config.constants import SUPPORTED_EXTENSIONS
from swiv.services.composite_service import to_rgb_array


class SurfaceView(ctk.CTkFrame):
    """Канва, на которую выводится собранный кадр."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, corner_radius=0, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg="#000000")
        self._canvas.grid(row=0, column=0, sticky="nsew")
        self._tk_image: Optional[ImageTk.PhotoImage] = None

        self.on_resize: Optional[Callable[[int, int], None]] = None
        self.on_pointer_move: Optional[Callable[[int, int], None]] = None
        self.on_click: Optional[Callable[[int, int], None]] = None
        self.on_key: Optional[Callable[[str], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<ButtonPress-1>", self._on_mouse_press)
        self._canvas.bind("<KeyPress>", self._on_key_press)
        self._canvas.focus_set()

    # ---- Public API ----
    def present(self, buffer: np.ndarray, width: int, height: int) -> None:
        """Выводит буфер ARGB32 размера width*height в левый верхний угол канвы."""
        self._canvas.delete("all")
        if width <= 0 or height <= 0 or buffer.size != width * height:
            self._tk_image = None
            return
        image = Image.fromarray(to_rgb_array(buffer, width, height))
        self._tk_image = ImageTk.PhotoImage(image)
        self._canvas.create_image(0, 0, image=self._tk_image, anchor="nw")

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self.after(delay_ms, callback)

    def cancel(self, handle: str) -> None:
        self.after_cancel(handle)

    def show_error(self, message: str) -> None:
        messagebox.showerror("Ошибка загрузки", message, parent=self)

    def ask_open_file(self) -> Optional[str]:
        """Диалог выбора файла; None, если пользователь отменил выбор."""
        patterns = " ".join(f"*{ext}" for ext in SUPPORTED_EXTENSIONS)
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=(("Images", patterns), ("All files", "*.*")),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return None
        return file_path or None

    # ---- Internals ----
    def _on_canvas_resize(self, event: tk.Event) -> None:
        if self.on_resize:
            self.on_resize(int(event.width), int(event.height))

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self.on_pointer_move:
            self.on_pointer_move(int(event.x), int(event.y))

    def _on_mouse_press(self, event: tk.Event) -> None:
        self._canvas.focus_set()
        if self.on_click:
            self.on_click(int(event.x), int(event.y))

    def _on_key_press(self, event: tk.Event) -> None:
        if self.on_key:
            self.on_key(event.keysym)
