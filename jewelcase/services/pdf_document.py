# pdf_document.py
"""A one-page PDF addressed in inches, drawn with QPdfWriter.

The writer renders into an in-memory buffer at 72 dpi (one device unit per
point); ``save`` finishes the page and writes the bytes out.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from PySide6.QtCore import QBuffer, QIODevice, QLineF, QMarginsF, QRectF, QSizeF, Qt
from PySide6.QtGui import QColor, QImage, QPageLayout, QPageSize, QPainter, QPdfWriter, QPen

from jewelcase.config import POINTS_PER_INCH
from jewelcase.utils.unit_converter import inches_to_points


@dataclass(frozen=True)
class LineStyle:
    color: Tuple[int, int, int] = (0, 0, 0)
    width_pt: float = 0.5
    dash: Optional[Tuple[float, ...]] = None   # inches, on/off pairs

    def pen(self) -> QPen:
        pen = QPen(QColor(*self.color))
        pen.setWidthF(self.width_pt)
        pen.setCapStyle(Qt.FlatCap)
        if self.dash:
            # Qt measures dashes in multiples of the pen width
            pen.setDashPattern([inches_to_points(d) / self.width_pt for d in self.dash])
        return pen


class PdfDocument:
    def __init__(self, width_in: float, height_in: float, title: str = "", creator: str = "jewelcase"):
        self.width = width_in
        self.height = height_in
        self._buffer = QBuffer()
        self._buffer.open(QIODevice.WriteOnly)

        self._writer = QPdfWriter(self._buffer)
        self._writer.setResolution(int(POINTS_PER_INCH))
        self._writer.setPageSize(QPageSize(
            QSizeF(width_in, height_in), QPageSize.Unit.Inch, title or "Custom",
            QPageSize.SizeMatchPolicy.ExactMatch,
        ))
        self._writer.setPageMargins(QMarginsF(0, 0, 0, 0), QPageLayout.Unit.Point)
        self._writer.setTitle(title)
        self._writer.setCreator(creator)

        self._painter = QPainter(self._writer)
        self._painter.setRenderHint(QPainter.Antialiasing, True)
        self._painter.setRenderHint(QPainter.SmoothPixmapTransform, True)

    @staticmethod
    def _rect(x, y, w, h) -> QRectF:
        return QRectF(inches_to_points(x), inches_to_points(y), inches_to_points(w), inches_to_points(h))

    def add_image(self, image: QImage, x: float, y: float, width: float, height: float):
        """Place a raster at a physical position, scaled to the physical box."""
        if image is None or image.isNull():
            raise ValueError("cannot embed an empty image")
        if not self._painter.isActive():
            raise RuntimeError("document already saved")
        self._painter.drawImage(self._rect(x, y, width, height), image)

    def line(self, x1: float, y1: float, x2: float, y2: float, style: LineStyle = LineStyle()):
        self._painter.save()
        self._painter.setPen(style.pen())
        self._painter.drawLine(QLineF(
            inches_to_points(x1), inches_to_points(y1),
            inches_to_points(x2), inches_to_points(y2),
        ))
        self._painter.restore()

    def to_bytes(self) -> bytes:
        if self._painter.isActive():
            self._painter.end()
            self._buffer.close()
        return bytes(self._buffer.data().data())

    def save(self, path) -> Path:
        path = Path(path)
        path.write_bytes(self.to_bytes())
        return path
