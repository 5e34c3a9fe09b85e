# panel_transform.py
"""Scale an image's natural size into a fixed panel.

Two policies:

* FILL_HEIGHT - ``scale = panel_h / natural_h``. The rendered height equals
  the panel height exactly; the width may overflow and is clipped. Used for
  the tray strips.
* COVER - ``scale = max(panel_w / natural_w, panel_h / natural_h)``. The
  smallest scale that leaves no gap on either axis. Used for the front cover.

A zero natural dimension means the asset is not decoded yet; the policies
answer ``scale = 1`` and the caller must not render until the load settles.
"""
from __future__ import annotations

from functools import lru_cache
from typing import NamedTuple

from jewelcase.models.dimensions import PanelSpec, ScalePolicy
from jewelcase.models.panel_part import ImageAsset


class PanelTransform(NamedTuple):
    scale: float
    rendered_width: float
    rendered_height: float


def fill_height_scale(natural_height: float, panel_height: float) -> float:
    if natural_height == 0:
        return 1.0
    return panel_height / natural_height


def cover_scale(natural_width: float, natural_height: float,
                panel_width: float, panel_height: float) -> float:
    if natural_width == 0 or natural_height == 0:
        return 1.0
    return max(panel_width / natural_width, panel_height / natural_height)


@lru_cache(maxsize=256)
def compute_transform(natural_width: float, natural_height: float,
                      panel_width: float, panel_height: float,
                      policy: ScalePolicy) -> PanelTransform:
    if policy is ScalePolicy.FILL_HEIGHT:
        scale = fill_height_scale(natural_height, panel_height)
    elif policy is ScalePolicy.COVER:
        scale = cover_scale(natural_width, natural_height, panel_width, panel_height)
    else:
        raise ValueError(f"Unknown scale policy: {policy}")
    return PanelTransform(scale, natural_width * scale, natural_height * scale)


def transform_for(spec: PanelSpec, asset: ImageAsset) -> PanelTransform:
    return compute_transform(asset.width, asset.height, spec.width_px, spec.height_px, spec.policy)
