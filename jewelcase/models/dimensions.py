# dimensions.py
"""Fixed physical geometry of a CD jewel case.

Every panel size is resolved to display pixels once, at import time, and
treated as a constant from then on.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Tuple

from jewelcase.config import (
    DISPLAY_DPI,
    FRONT_COVER_SIZE,
    BACK_CENTER_SIZE,
    LEFT_SPINE_SIZE,
    RIGHT_SPINE_SIZE,
    TRAY_SIZE,
    PAPER_SIZES as _PAPER_TABLE,
)
from jewelcase.utils.unit_converter import to_pixels, to_millimeters


class ScalePolicy(Enum):
    FILL_HEIGHT = auto()   # match panel height, width may clip
    COVER = auto()         # cover both axes, overflow on one


class AxisLock(Enum):
    NONE = auto()          # free on both axes
    HORIZONTAL = auto()    # horizontal drag only, y pinned to 0


class PanelId(Enum):
    FRONT_COVER = "front-cover"
    LEFT_SPINE = "left-spine"
    BACK_CENTER = "back-center"
    RIGHT_SPINE = "right-spine"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").title()


@dataclass(frozen=True)
class PanelSpec:
    name: str
    width_in: float
    height_in: float
    width_px: int
    height_px: int
    width_mm: float
    height_mm: float
    policy: ScalePolicy
    axis_lock: AxisLock

    @classmethod
    def new(cls, name: str, size: Tuple[float, float], policy: ScalePolicy,
            axis_lock: AxisLock, dpi: int = DISPLAY_DPI) -> "PanelSpec":
        w, h = size
        return cls(
            name=name,
            width_in=w,
            height_in=h,
            width_px=to_pixels(w, dpi),
            height_px=to_pixels(h, dpi),
            width_mm=to_millimeters(w),
            height_mm=to_millimeters(h),
            policy=policy,
            axis_lock=axis_lock,
        )


@dataclass(frozen=True)
class PaperSize:
    key: str
    name: str
    width: float    # inches
    height: float   # inches

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Paper size {self.key!r} must have positive dimensions, got {self.width}x{self.height}."
            )


PANEL_SPECS: Dict[PanelId, PanelSpec] = {
    PanelId.FRONT_COVER: PanelSpec.new("Front Cover", FRONT_COVER_SIZE, ScalePolicy.COVER, AxisLock.NONE),
    PanelId.LEFT_SPINE:  PanelSpec.new("Left Spine", LEFT_SPINE_SIZE, ScalePolicy.FILL_HEIGHT, AxisLock.HORIZONTAL),
    PanelId.BACK_CENTER: PanelSpec.new("Back Center", BACK_CENTER_SIZE, ScalePolicy.FILL_HEIGHT, AxisLock.HORIZONTAL),
    PanelId.RIGHT_SPINE: PanelSpec.new("Right Spine", RIGHT_SPINE_SIZE, ScalePolicy.FILL_HEIGHT, AxisLock.HORIZONTAL),
}

# Left spine + back center + right spine, printed as one strip.
TRAY_SPEC = PanelSpec.new("Tray", TRAY_SIZE, ScalePolicy.FILL_HEIGHT, AxisLock.HORIZONTAL)

TRAY_PANELS = (PanelId.LEFT_SPINE, PanelId.BACK_CENTER, PanelId.RIGHT_SPINE)


def _tray_origins() -> Dict[PanelId, int]:
    origins, x = {}, 0
    for pid in TRAY_PANELS:
        origins[pid] = x
        x += PANEL_SPECS[pid].width_px
    return origins


# Horizontal pixel offset of each strip inside the tray composite.
TRAY_ORIGINS: Dict[PanelId, int] = _tray_origins()

PAPER_SIZES: Dict[str, PaperSize] = {
    key: PaperSize(key, name, w, h) for key, (name, w, h) in _PAPER_TABLE.items()
}
