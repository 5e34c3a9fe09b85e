# project_editor.py
"""Pure edit operations on ``ProjectState``.

Every function takes a state and returns a new one; parts are replaced
wholesale so observers can compare old and new parts by identity. Edits
aimed at the right spine while spine sync is on are ignored and the input
state is returned unchanged.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from jewelcase.models.dimensions import PanelId
from jewelcase.models.panel_part import ImageAsset
from jewelcase.models.project_state import ProjectState
from jewelcase.services import spine_sync
from jewelcase.services.drag_constraint import clamp_for
from jewelcase.services.panel_transform import transform_for

log = logging.getLogger(__name__)


def _refuse(state: ProjectState, panel_id: PanelId, what: str) -> bool:
    if spine_sync.accepts_edit(state, panel_id):
        return False
    log.debug("Ignoring %s on %s while spines are synced", what, panel_id.value)
    return True


def update_image(state: ProjectState, panel_id: PanelId, url: Optional[str]) -> ProjectState:
    """Point a panel at a new image URL (or clear it with ``None``).

    The part is reset to its unloaded form; offset and scale arrive with
    ``attach_asset`` once the decode settles.
    """
    if _refuse(state, panel_id, "image change"):
        return state
    part = state.part(panel_id).cleared()
    if url:
        part = replace(part, image_url=url)
    state = state.with_part(panel_id, part)
    return spine_sync.propagate(state, panel_id)


def attach_asset(state: ProjectState, panel_id: PanelId, asset: ImageAsset) -> ProjectState:
    """Install a decoded asset, fitting and centering it in the panel.

    An asset whose source no longer matches the panel's URL is stale and is
    dropped.
    """
    if _refuse(state, panel_id, "asset attach"):
        return state
    part = state.part(panel_id)
    if part.image_url != asset.source_url:
        log.debug("Dropping stale asset for %s", panel_id.value)
        return state

    spec = state.panel(panel_id).spec
    fit = transform_for(spec, asset)
    x = (spec.width_px - fit.rendered_width) / 2
    y = (spec.height_px - fit.rendered_height) / 2
    x, y = clamp_for(spec, fit, x, y)

    part = replace(part, asset=asset, scale=fit.scale, x=x, y=y)
    state = state.with_part(panel_id, part)
    return spine_sync.propagate(state, panel_id)


def fail_asset(state: ProjectState, panel_id: PanelId, url: str) -> ProjectState:
    """Revert a panel to empty after its decode of ``url`` failed."""
    if _refuse(state, panel_id, "asset failure"):
        return state
    part = state.part(panel_id)
    if part.image_url != url:
        return state
    state = state.with_part(panel_id, part.cleared())
    return spine_sync.propagate(state, panel_id)


def update_offset(state: ProjectState, panel_id: PanelId, x: float, y: float) -> ProjectState:
    """Move a panel's image, clamped so no panel background shows."""
    if _refuse(state, panel_id, "offset change"):
        return state
    panel = state.panel(panel_id)
    part = panel.part
    if not part.is_renderable:
        return state
    x, y = clamp_for(panel.spec, transform_for(panel.spec, part.asset), x, y)
    if (x, y) == (part.x, part.y):
        return state
    state = state.with_part(panel_id, replace(part, x=x, y=y))
    return spine_sync.propagate(state, panel_id)


def set_sync_enabled(state: ProjectState, enabled: bool) -> ProjectState:
    if enabled == state.sync_enabled:
        return state
    if enabled:
        return spine_sync.enable_sync(state)
    return spine_sync.disable_sync(state)
