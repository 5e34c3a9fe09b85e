# export_manager.py
"""
Compose the front cover and tray stages onto one sheet of paper.

The sheet holds the front cover above the tray, the whole block centered on
the page, with fold guides behind the tray artwork and crop marks outside
every corner of both boxes. All geometry here is in inches.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Tuple

from jewelcase.config import (
    CROP_MARK,
    DEFAULT_TITLE,
    FILENAME_SUFFIX,
    FOLD_GUIDE,
    FRONT_COVER_SIZE,
    LEFT_SPINE_SIZE,
    BACK_CENTER_SIZE,
    MARGIN_BETWEEN,
    PIXEL_RATIO,
    TRAY_SIZE,
)
from jewelcase.models.dimensions import PAPER_SIZES, PaperSize
from jewelcase.services.errors import (
    ExportStageError,
    InvalidPaperSize,
    StageEmbedError,
    StageRasterizationError,
)
from jewelcase.services.pdf_document import LineStyle, PdfDocument
from jewelcase.utils.render_helpers import rasterize_stage

log = logging.getLogger(__name__)

CROP_MARK_STYLE = LineStyle(color=CROP_MARK["color"], width_pt=CROP_MARK["width_pt"])
FOLD_GUIDE_STYLE = LineStyle(
    color=FOLD_GUIDE["color"], width_pt=FOLD_GUIDE["width_pt"], dash=FOLD_GUIDE["dash"],
)

Point = Tuple[float, float]
Segment = Tuple[Point, Point]


class Box(NamedTuple):
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class SheetLayout:
    paper: PaperSize
    content_width: float
    content_height: float
    start_x: float
    start_y: float
    front: Box
    tray: Box
    fold_xs: Tuple[float, float]


def resolve_paper_size(key) -> PaperSize:
    try:
        return PAPER_SIZES[key]
    except (KeyError, TypeError):
        raise InvalidPaperSize(key) from None


def compute_sheet_layout(paper: PaperSize) -> SheetLayout:
    front_w, front_h = FRONT_COVER_SIZE
    tray_w, tray_h = TRAY_SIZE

    content_width = max(front_w, tray_w)
    content_height = front_h + MARGIN_BETWEEN + tray_h
    start_x = (paper.width - content_width) / 2
    start_y = (paper.height - content_height) / 2

    front = Box(start_x + (content_width - front_w) / 2, start_y, front_w, front_h)
    tray = Box(
        start_x + (content_width - tray_w) / 2,
        start_y + front_h + MARGIN_BETWEEN,
        tray_w, tray_h,
    )
    left_fold = tray.x + LEFT_SPINE_SIZE[0]
    right_fold = left_fold + BACK_CENTER_SIZE[0]

    return SheetLayout(
        paper=paper,
        content_width=content_width,
        content_height=content_height,
        start_x=start_x,
        start_y=start_y,
        front=front,
        tray=tray,
        fold_xs=(left_fold, right_fold),
    )


def crop_mark_segments(box: Box, length: float = CROP_MARK["length"],
                       offset: float = CROP_MARK["offset"]) -> List[Segment]:
    """Two segments per corner, each starting ``offset`` away from the box
    edge and running ``length`` further out."""
    x, y, w, h = box
    left, right = x, x + w
    top, bottom = y, y + h
    near, far = offset, offset + length
    return [
        # top-left
        ((left - far, top), (left - near, top)),
        ((left, top - far), (left, top - near)),
        # top-right
        ((right + near, top), (right + far, top)),
        ((right, top - far), (right, top - near)),
        # bottom-left
        ((left - far, bottom), (left - near, bottom)),
        ((left, bottom + near), (left, bottom + far)),
        # bottom-right
        ((right + near, bottom), (right + far, bottom)),
        ((right, bottom + near), (right, bottom + far)),
    ]


def fold_guide_segments(layout: SheetLayout, overhang: float = FOLD_GUIDE["overhang"]) -> List[Segment]:
    top = layout.tray.y - overhang
    bottom = layout.tray.y + layout.tray.height + overhang
    return [((x, top), (x, bottom)) for x in layout.fold_xs]


def sanitize_title(title: str) -> str:
    return re.sub(r"[^a-zA-Z0-9\-_]", "_", title).lower()


def export_filename(title: Optional[str] = None) -> str:
    return sanitize_title(title or DEFAULT_TITLE) + FILENAME_SUFFIX


@dataclass
class ExportRequest:
    paper_size: str
    title: str = DEFAULT_TITLE
    front_stage: Optional[object] = None     # CaseScene
    tray_stage: Optional[object] = None      # CaseScene


@dataclass
class ExportResult:
    path: Optional[Path]
    layout: SheetLayout
    warnings: List[ExportStageError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


class ExportManager:
    """
    Builds the print document for an ``ExportRequest``.

    A stage that fails to rasterize or embed is recorded in
    ``ExportResult.warnings`` and left out; the rest of the sheet is still
    produced. Only an unknown paper size aborts the export, and it does so
    before any stage is touched.
    """

    def __init__(
        self,
        document_factory: Callable[..., PdfDocument] = PdfDocument,
        rasterizer: Callable = rasterize_stage,
        pixel_ratio: float = PIXEL_RATIO,
    ):
        self.document_factory = document_factory
        self.rasterizer = rasterizer
        self.pixel_ratio = pixel_ratio

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "ExportManager":
        return cls(pixel_ratio=settings.pixel_ratio, **kwargs)

    def compose(self, request: ExportRequest):
        """Draw the whole sheet. Returns ``(document, layout, warnings)``."""
        paper = resolve_paper_size(request.paper_size)
        layout = compute_sheet_layout(paper)
        doc = self.document_factory(paper.width, paper.height, title=request.title or DEFAULT_TITLE)

        # fold guides first so the artwork sits on top of them
        for (x1, y1), (x2, y2) in fold_guide_segments(layout):
            doc.line(x1, y1, x2, y2, FOLD_GUIDE_STYLE)

        warnings: List[ExportStageError] = []
        stages = (
            ("front cover", request.front_stage, layout.front),
            ("tray", request.tray_stage, layout.tray),
        )
        for name, stage, box in stages:
            error = self._place_stage(doc, name, stage, box)
            if error is not None:
                log.warning("%s", error)
                warnings.append(error)

        for box in (layout.front, layout.tray):
            for (x1, y1), (x2, y2) in crop_mark_segments(box):
                doc.line(x1, y1, x2, y2, CROP_MARK_STYLE)

        return doc, layout, warnings

    def _place_stage(self, doc, name: str, stage, box: Box) -> Optional[ExportStageError]:
        if stage is None:
            log.debug("No %s stage, skipping", name)
            return None
        try:
            image = self.rasterizer(stage, self.pixel_ratio)
        except Exception as e:
            return StageRasterizationError(name, e)
        try:
            doc.add_image(image, box.x, box.y, box.width, box.height)
        except Exception as e:
            return StageEmbedError(name, e)
        return None

    def export(self, request: ExportRequest, directory=".") -> ExportResult:
        doc, layout, warnings = self.compose(request)
        path = Path(directory) / export_filename(request.title)
        doc.save(path)
        if warnings:
            log.warning("Exported %s with %d stage(s) missing", path, len(warnings))
        else:
            log.info("Exported %s", path)
        return ExportResult(path=path, layout=layout, warnings=warnings)
