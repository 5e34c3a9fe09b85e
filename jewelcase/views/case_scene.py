# case_scene.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Tuple, TYPE_CHECKING

from PySide6.QtCore    import Qt, QPointF, QRectF, Signal, Slot
from PySide6.QtGui     import QBrush, QPixmap
from PySide6.QtWidgets import QGraphicsItem, QGraphicsPixmapItem, QGraphicsRectItem, QGraphicsScene

from jewelcase.config import BLEED_INSET, DISPLAY_DPI, PANEL_BACKGROUND
from jewelcase.models.dimensions import (
    PanelId, PanelSpec, PANEL_SPECS, TRAY_PANELS, TRAY_ORIGINS, TRAY_SPEC,
)
from jewelcase.models.panel_part import PanelPart
from jewelcase.services import spine_sync
from jewelcase.services.drag_constraint import clamp_for
from jewelcase.services.panel_transform import transform_for
from jewelcase.views.overlays.print_lines import PrintLines, section_divider

if TYPE_CHECKING:
    from jewelcase.models.project_state import ProjectState
    from jewelcase.services.editing_session import EditingSession

log = logging.getLogger(__name__)


class PanelImageItem(QGraphicsPixmapItem):
    """The artwork of one panel. Clamps itself on every move so no panel
    background is ever exposed, and reports the final offset on release."""

    def __init__(self, panel_id: PanelId, spec: PanelSpec, part: PanelPart,
                 origin_x: float = 0.0, parent: Optional[QGraphicsItem] = None):
        super().__init__(QPixmap.fromImage(part.asset.image), parent)
        self.panel_id = panel_id
        self.spec = spec
        self.origin_x = origin_x
        self._fit = transform_for(spec, part.asset)

        self.setTransformationMode(Qt.SmoothTransformation)
        self.setScale(part.scale)
        if part.rotation:
            self.setTransformOriginPoint(self.boundingRect().center())
            self.setRotation(part.rotation)
        self.setFlag(QGraphicsItem.ItemSendsGeometryChanges, True)
        self.setPos(part.x, part.y)

    def set_editable(self, editable: bool):
        self.setFlag(QGraphicsItem.ItemIsMovable, editable)
        self.setCursor(Qt.OpenHandCursor if editable else Qt.ArrowCursor)

    def clamp(self, pos: QPointF) -> QPointF:
        # pos is local to the panel frame; the constraint works in tray coordinates
        x, y = clamp_for(self.spec, self._fit, pos.x() + self.origin_x, pos.y(), self.origin_x)
        return QPointF(x - self.origin_x, y)

    def itemChange(self, change, value):
        if change == QGraphicsItem.ItemPositionChange:
            return self.clamp(value)
        return super().itemChange(change, value)

    def mouseReleaseEvent(self, event):
        super().mouseReleaseEvent(event)
        scene = self.scene()
        if isinstance(scene, CaseScene) and self.flags() & QGraphicsItem.ItemIsMovable:
            scene.offset_committed.emit(self.panel_id, self.pos().x(), self.pos().y())


class CaseScene(QGraphicsScene):
    """
    One export stage: a fixed set of panels laid side by side, each a white
    frame that clips its artwork, with print lines drawn on top.
    """
    offset_committed = Signal(object, float, float)   # PanelId, x, y

    def __init__(self, name: str, panels: Iterable[Tuple[PanelId, float]],
                 width: float, height: float, parent=None):
        super().__init__(parent)
        self.name = name
        self.setSceneRect(QRectF(0, 0, width, height))

        self._origins: Dict[PanelId, float] = {}
        self._frames: Dict[PanelId, QGraphicsRectItem] = {}
        self._images: Dict[PanelId, PanelImageItem] = {}
        self._parts: Dict[PanelId, PanelPart] = {}
        self._print_lines: Dict[PanelId, PrintLines] = {}

        bleed_px = BLEED_INSET * DISPLAY_DPI
        for panel_id, origin_x in panels:
            spec = PANEL_SPECS[panel_id]
            frame = QGraphicsRectItem(0, 0, spec.width_px, spec.height_px)
            frame.setPos(origin_x, 0)
            frame.setPen(Qt.NoPen)
            frame.setBrush(QBrush(PANEL_BACKGROUND))
            frame.setFlag(QGraphicsItem.ItemClipsChildrenToShape, True)
            self.addItem(frame)

            lines = PrintLines(QRectF(origin_x, 0, spec.width_px, spec.height_px), bleed_px)
            lines.add_to(self)

            self._origins[panel_id] = origin_x
            self._frames[panel_id] = frame
            self._print_lines[panel_id] = lines

    @property
    def panel_ids(self) -> Tuple[PanelId, ...]:
        return tuple(self._frames)

    def image_item(self, panel_id: PanelId) -> Optional[PanelImageItem]:
        return self._images.get(panel_id)

    def show_guides(self, show: bool = True):
        for lines in self._print_lines.values():
            lines.toggle_cut_line(show)
            lines.toggle_safe_area(show)

    @Slot(object, object)
    def apply_state(self, old: Optional["ProjectState"], new: "ProjectState"):
        """Rebuild the artwork of every panel whose part was replaced."""
        for panel_id in self._frames:
            part = new.part(panel_id)
            if part is not self._parts.get(panel_id):
                self._set_part(panel_id, part)
            item = self._images.get(panel_id)
            if item is not None:
                item.set_editable(spine_sync.accepts_edit(new, panel_id))

    def sync_from_state(self, state: "ProjectState"):
        self.apply_state(None, state)

    def _set_part(self, panel_id: PanelId, part: PanelPart):
        old = self._images.pop(panel_id, None)
        if old is not None:
            old.setParentItem(None)
            self.removeItem(old)
        self._parts[panel_id] = part
        if not part.is_renderable:
            return
        log.debug("Placing %s artwork in %s stage", panel_id.value, self.name)
        self._images[panel_id] = PanelImageItem(
            panel_id, PANEL_SPECS[panel_id], part,
            origin_x=self._origins[panel_id],
            parent=self._frames[panel_id],
        )

    def bind(self, session: "EditingSession"):
        """Follow the session's state and send drag results back to it."""
        session.state_changed.connect(self.apply_state)
        self.offset_committed.connect(session.update_offset)
        self.sync_from_state(session.state)


def front_stage(parent=None) -> CaseScene:
    spec = PANEL_SPECS[PanelId.FRONT_COVER]
    return CaseScene("front cover", [(PanelId.FRONT_COVER, 0)], spec.width_px, spec.height_px, parent)


def tray_stage(parent=None) -> CaseScene:
    scene = CaseScene(
        "tray",
        [(pid, TRAY_ORIGINS[pid]) for pid in TRAY_PANELS],
        TRAY_SPEC.width_px, TRAY_SPEC.height_px,
        parent,
    )
    for pid in TRAY_PANELS[1:]:
        scene.addItem(section_divider(TRAY_ORIGINS[pid], TRAY_SPEC.height_px))
    return scene
