# project_state.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator

from jewelcase.models.dimensions import PanelId, PanelSpec, PANEL_SPECS
from jewelcase.models.panel_part import PanelPart

_FIELDS = {
    PanelId.FRONT_COVER: "front_cover",
    PanelId.LEFT_SPINE: "left_spine",
    PanelId.BACK_CENTER: "back_center",
    PanelId.RIGHT_SPINE: "right_spine",
}


@dataclass(frozen=True)
class Panel:
    panel_id: PanelId
    part: PanelPart

    @property
    def spec(self) -> PanelSpec:
        return PANEL_SPECS[self.panel_id]

    @property
    def width_px(self) -> int:
        return self.spec.width_px

    @property
    def height_px(self) -> int:
        return self.spec.height_px

    @classmethod
    def empty(cls, panel_id: PanelId) -> "Panel":
        return cls(panel_id, PanelPart.empty(panel_id.value, panel_id.label))


def _empty(panel_id):
    return field(default_factory=lambda: Panel.empty(panel_id))


@dataclass(frozen=True)
class ProjectState:
    """Front cover plus the three tray panels. Replaced, never mutated."""
    front_cover: Panel = _empty(PanelId.FRONT_COVER)
    left_spine: Panel = _empty(PanelId.LEFT_SPINE)
    back_center: Panel = _empty(PanelId.BACK_CENTER)
    right_spine: Panel = _empty(PanelId.RIGHT_SPINE)
    sync_enabled: bool = False

    def panel(self, panel_id: PanelId) -> Panel:
        return getattr(self, _FIELDS[panel_id])

    def part(self, panel_id: PanelId) -> PanelPart:
        return self.panel(panel_id).part

    def with_part(self, panel_id: PanelId, part: PanelPart) -> "ProjectState":
        return replace(self, **{_FIELDS[panel_id]: Panel(panel_id, part)})

    def panels(self) -> Iterator[Panel]:
        for panel_id in PanelId:
            yield self.panel(panel_id)


def create_default_project_state() -> ProjectState:
    return ProjectState()
