"""Константы приложения: геометрия окна и панели, цвета, тайминги."""

# Window
DEFAULT_WINDOW_WIDTH = 800
DEFAULT_WINDOW_HEIGHT = 600
MIN_WINDOW_WIDTH = 200
MIN_WINDOW_HEIGHT = 120
WINDOW_TITLE = "swiv"

# Packed ARGB colours
WHITE = 0xFFFFFFFF
GRAY = 0xFF808080
BLACK = 0xFF000000
DEFAULT_BACKGROUND = BLACK

# Toolbar strip (bottom of the window)
TOOLBAR_HEIGHT = 40
BUTTON_SIZE = 40
BUTTON_INSET = 5
LABEL_OFFSET = (50, 5)
LABEL_SCALE = 35
LABEL_COLOR = BLACK
LABEL_PRESSED = "Inverted"
LABEL_RELEASED = "Normal"

# Delay before the high-quality resample once resizing settles
RESIZE_DEBOUNCE_MS = 150

# Extension -> format name
SUPPORTED_EXTENSIONS = {
    ".bmp": "bmp",
    ".ppm": "ppm",
}
