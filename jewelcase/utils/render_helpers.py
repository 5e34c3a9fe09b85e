from contextlib import contextmanager

from PySide6.QtGui import QImage, QPainter
from PySide6.QtCore import QRectF, Qt
from PySide6.QtWidgets import QGraphicsLineItem, QGraphicsRectItem

from jewelcase.config import DISPLAY_DPI, PIXEL_RATIO


def is_overlay(item) -> bool:
    """Editor-only shapes: every line, and any rect that is dashed or
    stroked without a fill."""
    if isinstance(item, QGraphicsLineItem):
        return True
    if isinstance(item, QGraphicsRectItem):
        pen_style = item.pen().style()
        if pen_style == Qt.NoPen:
            return False
        dashed = pen_style != Qt.SolidLine
        stroke_only = item.brush().style() == Qt.NoBrush
        return dashed or stroke_only
    return False


def overlay_items(scene) -> list:
    return [item for item in scene.items() if is_overlay(item)]


@contextmanager
def export_mode(scene):
    """Hide overlay shapes for the duration of the block.

    Only shapes that were visible on entry are hidden, and every one of them
    is shown again on exit, including when the block raises.
    """
    hidden = [item for item in overlay_items(scene) if item.isVisible()]
    for item in hidden:
        item.hide()
    try:
        yield hidden
    finally:
        for item in hidden:
            item.show()


def render_scene_to_image(scene, pixel_ratio: float = PIXEL_RATIO) -> QImage:
    """Rasterize the scene rect at ``pixel_ratio`` device pixels per scene pixel."""
    rect = scene.sceneRect()
    width_px = round(rect.width() * pixel_ratio)
    height_px = round(rect.height() * pixel_ratio)

    image = QImage(width_px, height_px, QImage.Format_ARGB32)
    if image.isNull():
        raise MemoryError(f"Could not allocate a {width_px}x{height_px} raster")
    dpm = round(DISPLAY_DPI * pixel_ratio / 25.4 * 1000)  # dpi → dots/meter
    image.setDotsPerMeterX(dpm)
    image.setDotsPerMeterY(dpm)
    image.fill(Qt.transparent)

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        scene.render(painter, QRectF(0, 0, width_px, height_px), rect)
    finally:
        painter.end()
    return image


def rasterize_stage(scene, pixel_ratio: float = PIXEL_RATIO) -> QImage:
    """Clean export raster of a stage: overlays hidden, then restored."""
    with export_mode(scene):
        return render_scene_to_image(scene, pixel_ratio)
