# drag_constraint.py
from __future__ import annotations

from typing import Tuple

from jewelcase.models.dimensions import AxisLock, PanelSpec
from jewelcase.services.panel_transform import PanelTransform


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def clamp_offset(
    x: float,
    y: float,
    panel_width: float,
    panel_height: float,
    rendered_width: float,
    rendered_height: float,
    axis_lock: AxisLock,
    origin_x: float = 0.0,
) -> Tuple[float, float]:
    """
    Clamp a candidate top-left offset so the rendered image never leaves a
    gap inside the panel.

    ``origin_x`` is the strip's horizontal position inside a multi-strip
    composite (0 for a standalone panel). It only applies to
    ``AxisLock.HORIZONTAL``.
    """
    if axis_lock is AxisLock.HORIZONTAL:
        # fill-height makes rendered_height == panel_height, so y has one legal value
        low = min(origin_x, origin_x + panel_width - rendered_width)
        return _clamp(x, low, origin_x), 0.0

    if axis_lock is AxisLock.NONE:
        x = _clamp(x, min(0.0, panel_width - rendered_width), 0.0)
        y = _clamp(y, min(0.0, panel_height - rendered_height), 0.0)
        return x, y

    raise ValueError(f"Unknown axis lock: {axis_lock}")


def clamp_for(spec: PanelSpec, transform: PanelTransform, x: float, y: float,
              origin_x: float = 0.0) -> Tuple[float, float]:
    return clamp_offset(
        x, y,
        spec.width_px, spec.height_px,
        transform.rendered_width, transform.rendered_height,
        spec.axis_lock,
        origin_x,
    )
