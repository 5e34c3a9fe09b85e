from PySide6.QtWidgets import QGraphicsItem, QGraphicsRectItem, QGraphicsLineItem
from PySide6.QtGui     import QPen, QColor
from PySide6.QtCore    import QRectF, Qt

from jewelcase.config import CUT_COLOR, SAFE_COLOR, DIVIDER_COLOR

# draw on top of everything in the stage
OVERLAY_Z = 1e6


class PrintLines:
    """
    Editor-only guides for one panel: the cut line (panel edge, stroke
    without fill) and the safe area (dashed, inset by the bleed). Both are
    plain rect items so the export pass can find and hide them by their
    pen and brush alone.
    """

    def __init__(
        self,
        rect: QRectF,
        bleed_px: float,
        cut_color: QColor = CUT_COLOR,
        safe_color: QColor = SAFE_COLOR,
    ):
        self.cut_line = QGraphicsRectItem(rect)
        pen = QPen(cut_color)
        pen.setWidthF(1.0)
        pen.setCosmetic(True)
        self.cut_line.setPen(pen)
        self.cut_line.setBrush(Qt.NoBrush)

        self.safe_area = QGraphicsRectItem(rect.adjusted(bleed_px, bleed_px, -bleed_px, -bleed_px))
        pen = QPen(safe_color)
        pen.setStyle(Qt.DashLine)
        pen.setWidthF(1.0)
        pen.setCosmetic(True)
        self.safe_area.setPen(pen)
        self.safe_area.setBrush(Qt.NoBrush)

        for item in self.items:
            item.setZValue(OVERLAY_Z)
            item.setAcceptedMouseButtons(Qt.NoButton)

    @property
    def items(self) -> list:
        return [self.cut_line, self.safe_area]

    def add_to(self, scene) -> None:
        for item in self.items:
            scene.addItem(item)

    def toggle_safe_area(self, show: bool = None):
        show = (not self.safe_area.isVisible()) if show is None else show
        self.safe_area.setVisible(show)

    def toggle_cut_line(self, show: bool = None):
        show = (not self.cut_line.isVisible()) if show is None else show
        self.cut_line.setVisible(show)


def section_divider(x: float, height: float, color: QColor = DIVIDER_COLOR) -> QGraphicsItem:
    """Vertical line marking the boundary between two tray sections."""
    line = QGraphicsLineItem(x, 0, x, height)
    pen = QPen(color)
    pen.setWidthF(1.0)
    pen.setCosmetic(True)
    line.setPen(pen)
    line.setZValue(OVERLAY_Z)
    line.setAcceptedMouseButtons(Qt.NoButton)
    return line
