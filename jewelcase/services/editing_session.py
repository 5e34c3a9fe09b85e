# editing_session.py
from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Dict, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from jewelcase.models.dimensions import PanelId
from jewelcase.models.project_state import ProjectState, create_default_project_state
from jewelcase.services import project_editor, spine_sync
from jewelcase.services.errors import AssetLoadError
from jewelcase.services.image_loader import ImageLoader

log = logging.getLogger(__name__)


class EditingSession(QObject):
    """Owns the current ProjectState and publishes every change.

    All edits go through the pure functions in ``project_editor``; the
    session only holds the latest result and tells listeners about it.
    Image decodes are last-writer-wins per panel: a decode that settles
    after a newer request for the same panel is thrown away.
    """
    state_changed = Signal(object, object)     # old, new
    asset_failed = Signal(object, object)      # PanelId, AssetLoadError
    sync_changed = Signal(bool)

    def __init__(self, loader: Optional[ImageLoader] = None,
                 state: Optional[ProjectState] = None, parent=None):
        super().__init__(parent)
        self._loader = loader or ImageLoader()
        self._state = state or create_default_project_state()
        self._generations: Dict[PanelId, int] = defaultdict(int)

    @property
    def state(self) -> ProjectState:
        return self._state

    def _commit(self, new: ProjectState) -> ProjectState:
        old = self._state
        if new is old:
            return old
        self._state = new
        self.state_changed.emit(old, new)
        if new.sync_enabled != old.sync_enabled:
            self.sync_changed.emit(new.sync_enabled)
        return new

    # --- Panel edit interface ---

    def update_image(self, panel_id: PanelId, url: Optional[str]) -> ProjectState:
        if spine_sync.accepts_edit(self._state, panel_id):
            # any decode still running for this panel is now stale
            self._generations[panel_id] += 1
        return self._commit(project_editor.update_image(self._state, panel_id, url))

    def update_offset(self, panel_id: PanelId, x: float, y: float) -> ProjectState:
        return self._commit(project_editor.update_offset(self._state, panel_id, x, y))

    def set_sync_enabled(self, enabled: bool) -> ProjectState:
        return self._commit(project_editor.set_sync_enabled(self._state, enabled))

    # --- Async loading ---

    async def load_image(self, panel_id: PanelId, url: Optional[str]) -> ProjectState:
        """Set the panel's URL, decode it, and attach the result.

        A failed decode reverts the panel to empty and emits ``asset_failed``;
        it is not raised.
        """
        if not spine_sync.accepts_edit(self._state, panel_id):
            log.debug("Ignoring image load on %s while spines are synced", panel_id.value)
            return self._state

        self.update_image(panel_id, url)
        if not url:
            return self._state
        token = self._generations[panel_id]

        try:
            asset = await self._loader.load(url)
        except AssetLoadError as e:
            if token != self._generations[panel_id]:
                log.debug("Discarding stale load failure for %s", panel_id.value)
                return self._state
            log.warning("%s: %s", panel_id.label, e)
            self._commit(project_editor.fail_asset(self._state, panel_id, url))
            self.asset_failed.emit(panel_id, e)
            return self._state

        if token != self._generations[panel_id]:
            log.debug("Discarding stale decode for %s", panel_id.value)
            return self._state
        return self._commit(project_editor.attach_asset(self._state, panel_id, asset))

    async def load_images(self, urls: Mapping[PanelId, Optional[str]]) -> ProjectState:
        """Load several panels at once; each settles on its own."""
        await asyncio.gather(*(self.load_image(pid, url) for pid, url in urls.items()))
        return self._state
