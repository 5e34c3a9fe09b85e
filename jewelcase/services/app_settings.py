from PySide6.QtCore import QObject, Signal, Property

from jewelcase.config import DEFAULT_PAPER, PIXEL_RATIO, VALID_UNITS
from jewelcase.models.dimensions import PAPER_SIZES, PaperSize
from jewelcase.services.errors import InvalidPaperSize


class AppSettings(QObject):
    unit_changed = Signal(str)
    paper_size_changed = Signal(str)
    pixel_ratio_changed = Signal(int)

    def __init__(self, display_unit="in", paper_size=DEFAULT_PAPER, pixel_ratio=PIXEL_RATIO):
        super().__init__()
        self._display_unit = None
        self._paper_size = None
        self._pixel_ratio = pixel_ratio
        self.display_unit = display_unit
        self.paper_size = paper_size

    @Property(str)
    def display_unit(self):
        return self._display_unit

    @display_unit.setter
    def display_unit(self, unit):
        if unit not in VALID_UNITS:
            raise ValueError(f"Unsupported display unit: {unit}")
        if self._display_unit != unit:
            self._display_unit = unit
            self.unit_changed.emit(unit)

    @Property(str)
    def paper_size(self):
        return self._paper_size

    @paper_size.setter
    def paper_size(self, key):
        if key not in PAPER_SIZES:
            raise InvalidPaperSize(key)
        if self._paper_size != key:
            self._paper_size = key
            self.paper_size_changed.emit(key)

    @property
    def paper(self) -> PaperSize:
        return PAPER_SIZES[self._paper_size]

    @Property(int)
    def pixel_ratio(self):
        return self._pixel_ratio

    @pixel_ratio.setter
    def pixel_ratio(self, ratio):
        if ratio <= 0:
            raise ValueError("Pixel ratio must be positive.")
        if ratio != self._pixel_ratio:
            self._pixel_ratio = ratio
            self.pixel_ratio_changed.emit(ratio)
