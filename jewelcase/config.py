# jewelcase/config.py
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor

# Screen model: every panel is laid out in CSS-style pixels at this DPI.
DISPLAY_DPI = 96
# Stage rasterization ratio for export (96 * 3 = 288 effective DPI).
PIXEL_RATIO = 3
POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4

# Physical panel sizes, inches (width, height)
FRONT_COVER_SIZE = (4.75, 4.75)
BACK_CENTER_SIZE = (5.4, 4.625)
LEFT_SPINE_SIZE = (0.25, 4.625)
RIGHT_SPINE_SIZE = (0.25, 4.625)
TRAY_SIZE = (5.9, 4.625)

MARGIN_BETWEEN = 0.5    # gap between front cover and tray on the sheet
BLEED_INSET = 0.125     # safety zone inset on every panel edge

# key: (display name, width in, height in)
PAPER_SIZES = {
    "A4":     ("A4", 8.27, 11.69),
    "F4":     ("F4 / Folio", 8.5, 13.0),
    "Letter": ("Letter", 8.5, 11.0),
}
DEFAULT_PAPER = "A4"

CROP_MARK = {
    "length": 0.15,
    "offset": 0.1,
    "width_pt": 0.5,
    "color": (0, 0, 0),
}

FOLD_GUIDE = {
    "overhang": 0.15,           # extends past the tray top and bottom
    "width_pt": 0.3,
    "color": (180, 180, 180),
    "dash": (0.05, 0.05),       # inches on, inches off
}

DEFAULT_TITLE = "cd-jewel-case"
FILENAME_SUFFIX = "_jewel_case.pdf"

# Editor-only overlays. Anything drawn with these is stripped on export.
CUT_COLOR = QColor(Qt.red)
SAFE_COLOR = QColor(0, 120, 255)
DIVIDER_COLOR = QColor(120, 120, 120)
PANEL_BACKGROUND = QColor(Qt.white)

VALID_UNITS = ("in", "mm")
