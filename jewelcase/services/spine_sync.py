# spine_sync.py
"""Right spine mirrors left spine while sync is on.

Unsynced -> Synced copies the left part across right away. While Synced,
every left spine mutation is replayed onto the right spine and direct
right spine edits are refused. Synced -> Unsynced leaves both parts alone.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from jewelcase.models.dimensions import PanelId
from jewelcase.models.project_state import ProjectState

log = logging.getLogger(__name__)

SOURCE = PanelId.LEFT_SPINE
MIRROR = PanelId.RIGHT_SPINE


def mirror_left_spine(state: ProjectState) -> ProjectState:
    right = state.part(MIRROR)
    mirrored = state.part(SOURCE).with_identity_of(right)
    return state.with_part(MIRROR, mirrored)


def enable_sync(state: ProjectState) -> ProjectState:
    return mirror_left_spine(replace(state, sync_enabled=True))


def disable_sync(state: ProjectState) -> ProjectState:
    return replace(state, sync_enabled=False)


def accepts_edit(state: ProjectState, panel_id: PanelId) -> bool:
    return not (state.sync_enabled and panel_id is MIRROR)


def propagate(state: ProjectState, panel_id: PanelId) -> ProjectState:
    """Call after mutating ``panel_id``; re-mirrors when the left spine changed."""
    if state.sync_enabled and panel_id is SOURCE:
        state = mirror_left_spine(state)
        log.debug("Mirrored left spine onto right spine")
    return state


def is_mirrored(state: ProjectState) -> bool:
    return state.part(MIRROR).same_content(state.part(SOURCE))
