import pytest
from PySide6.QtGui import QImage

from jewelcase.services.errors import (
    InvalidPaperSize, StageEmbedError, StageRasterizationError,
)
from jewelcase.services.export_manager import (
    CROP_MARK_STYLE,
    FOLD_GUIDE_STYLE,
    Box,
    ExportManager,
    ExportRequest,
    compute_sheet_layout,
    crop_mark_segments,
    export_filename,
    resolve_paper_size,
    sanitize_title,
)
from jewelcase.services.pdf_document import LineStyle
from jewelcase.utils.render_helpers import overlay_items
from jewelcase.views.case_scene import front_stage, tray_stage

from conftest import solid_image


class FakeDocument:
    """Records draw calls instead of producing a PDF."""

    def __init__(self, width, height, title=""):
        self.size = (width, height)
        self.title = title
        self.ops = []
        self.saved_to = None

    def line(self, x1, y1, x2, y2, style=LineStyle()):
        self.ops.append(("line", (x1, y1, x2, y2), style))

    def add_image(self, image, x, y, width, height):
        self.ops.append(("image", (x, y, width, height), image))

    def save(self, path):
        self.saved_to = path
        return path


class BrokenEmbedDocument(FakeDocument):
    def add_image(self, image, x, y, width, height):
        raise ValueError("image too large")


def stub_rasterizer(stage, pixel_ratio):
    return solid_image(30, 20)


def failing_rasterizer(stage, pixel_ratio):
    raise MemoryError("out of memory")


# ── Layout ──────────────────────────────────────────────────────────────────

def test_a4_layout():
    layout = compute_sheet_layout(resolve_paper_size("A4"))
    assert layout.content_width == pytest.approx(5.9)
    assert layout.content_height == pytest.approx(9.875)
    assert layout.start_x == pytest.approx(1.185)
    assert layout.start_y == pytest.approx(0.9075)

    assert layout.front.x == pytest.approx(1.76)
    assert layout.front.y == pytest.approx(0.9075)
    assert (layout.front.width, layout.front.height) == (4.75, 4.75)

    assert layout.tray.x == pytest.approx(1.185)
    assert layout.tray.y == pytest.approx(6.1575)
    assert (layout.tray.width, layout.tray.height) == (5.9, 4.625)

    assert layout.fold_xs == pytest.approx((1.435, 6.835))


@pytest.mark.parametrize("key, size", [("A4", (8.27, 11.69)), ("F4", (8.5, 13.0)), ("Letter", (8.5, 11.0))])
def test_paper_sizes(key, size):
    paper = resolve_paper_size(key)
    assert (paper.width, paper.height) == size


@pytest.mark.parametrize("key", ["Legal", "", None, "a4"])
def test_unknown_paper_size(key):
    with pytest.raises(InvalidPaperSize, match="Invalid paper size"):
        resolve_paper_size(key)


def test_crop_marks_sit_outside_the_box():
    segments = crop_mark_segments(Box(1.0, 2.0, 4.0, 3.0))
    assert len(segments) == 8
    (a, b) = segments[0]
    assert a == pytest.approx((0.75, 2.0))
    assert b == pytest.approx((0.9, 2.0))
    (a, b) = segments[1]
    assert a == pytest.approx((1.0, 1.75))
    assert b == pytest.approx((1.0, 1.9))
    # bottom-right vertical runs down from the corner
    (a, b) = segments[-1]
    assert a == pytest.approx((5.0, 5.1))
    assert b == pytest.approx((5.0, 5.25))

    for (x1, y1), (x2, y2) in segments:
        inside = lambda x, y: 1.0 < x < 5.0 and 2.0 < y < 5.0
        assert not inside(x1, y1) and not inside(x2, y2)


# ── Filenames ───────────────────────────────────────────────────────────────

def test_sanitize_title():
    assert sanitize_title("My Album #1!") == "my_album__1_"
    assert sanitize_title("best-of_2020") == "best-of_2020"


def test_export_filename_defaults():
    assert export_filename("Mixtape") == "mixtape_jewel_case.pdf"
    assert export_filename("") == "cd-jewel-case_jewel_case.pdf"


# ── Composition ─────────────────────────────────────────────────────────────

def test_invalid_paper_aborts_before_anything_runs():
    calls = []

    def factory(*args, **kwargs):
        calls.append("document")
        return FakeDocument(*args, **kwargs)

    def rasterizer(stage, ratio):
        calls.append("raster")
        return solid_image(1, 1)

    manager = ExportManager(document_factory=factory, rasterizer=rasterizer)
    with pytest.raises(InvalidPaperSize):
        manager.compose(ExportRequest("Tabloid", front_stage=object(), tray_stage=object()))
    assert calls == []


def test_draw_order_guides_images_marks():
    manager = ExportManager(document_factory=FakeDocument, rasterizer=stub_rasterizer)
    doc, layout, warnings = manager.compose(
        ExportRequest("Letter", "Title", front_stage=object(), tray_stage=object())
    )
    assert warnings == []
    assert doc.size == (8.5, 11.0)
    assert doc.title == "Title"

    kinds = [op[0] for op in doc.ops]
    assert kinds == ["line"] * 2 + ["image"] * 2 + ["line"] * 16

    assert all(op[2] is FOLD_GUIDE_STYLE for op in doc.ops[:2])
    assert all(op[2] is CROP_MARK_STYLE for op in doc.ops[4:])

    front_op, tray_op = doc.ops[2], doc.ops[3]
    assert front_op[1] == tuple(layout.front)
    assert tray_op[1] == tuple(layout.tray)


def test_fold_guides_overhang_the_tray():
    manager = ExportManager(document_factory=FakeDocument, rasterizer=stub_rasterizer)
    doc, layout, _ = manager.compose(ExportRequest("A4"))
    for (x1, y1, x2, y2), x in zip((op[1] for op in doc.ops[:2]), layout.fold_xs):
        assert x1 == x2 == x
        assert y1 == pytest.approx(layout.tray.y - 0.15)
        assert y2 == pytest.approx(layout.tray.y + layout.tray.height + 0.15)


def test_missing_stage_is_skipped_without_warning():
    manager = ExportManager(document_factory=FakeDocument, rasterizer=stub_rasterizer)
    doc, _, warnings = manager.compose(ExportRequest("A4", front_stage=object()))
    assert warnings == []
    assert [op[0] for op in doc.ops].count("image") == 1


def test_rasterize_failure_is_a_warning():
    def rasterizer(stage, ratio):
        if stage == "front":
            raise MemoryError("raster too big")
        return solid_image(10, 10)

    manager = ExportManager(document_factory=FakeDocument, rasterizer=rasterizer)
    doc, layout, warnings = manager.compose(ExportRequest("A4", front_stage="front", tray_stage="tray"))

    assert len(warnings) == 1
    assert isinstance(warnings[0], StageRasterizationError)
    assert warnings[0].stage == "front cover"
    assert "rasterize front cover" in str(warnings[0])
    images = [op for op in doc.ops if op[0] == "image"]
    assert [op[1] for op in images] == [tuple(layout.tray)]


def test_embed_failure_is_a_warning():
    manager = ExportManager(document_factory=BrokenEmbedDocument, rasterizer=stub_rasterizer)
    _, _, warnings = manager.compose(ExportRequest("A4", front_stage=object()))
    assert len(warnings) == 1
    assert isinstance(warnings[0], StageEmbedError)


def test_all_stages_failing_still_emits_marks():
    manager = ExportManager(document_factory=FakeDocument, rasterizer=failing_rasterizer)
    doc, _, warnings = manager.compose(ExportRequest("F4", front_stage=object(), tray_stage=object()))
    assert len(warnings) == 2
    assert [op[0] for op in doc.ops] == ["line"] * 18


def test_pixel_ratio_reaches_the_rasterizer():
    ratios = []

    def rasterizer(stage, ratio):
        ratios.append(ratio)
        return solid_image(1, 1)

    manager = ExportManager(document_factory=FakeDocument, rasterizer=rasterizer, pixel_ratio=2)
    manager.compose(ExportRequest("A4", front_stage=object()))
    assert ratios == [2]


def test_export_reports_path_and_warnings(tmp_path):
    manager = ExportManager(document_factory=FakeDocument, rasterizer=failing_rasterizer)
    result = manager.export(ExportRequest("A4", "Live at Home", front_stage=object()), tmp_path)
    assert result.path == tmp_path / "live_at_home_jewel_case.pdf"
    assert not result.ok


# ── Real PDF ────────────────────────────────────────────────────────────────

def test_export_writes_a_pdf(qapp, tmp_path):
    front, tray = front_stage(), tray_stage()
    result = ExportManager().export(
        ExportRequest("A4", "Greatest Hits", front_stage=front, tray_stage=tray), tmp_path,
    )
    assert result.ok
    assert result.path.name == "greatest_hits_jewel_case.pdf"
    data = result.path.read_bytes()
    assert data.startswith(b"%PDF")
    # overlays come back after the export
    assert all(item.isVisible() for item in overlay_items(front))


def test_pdf_document_rejects_empty_image(qapp):
    from jewelcase.services.pdf_document import PdfDocument

    doc = PdfDocument(8.5, 11.0, title="t")
    with pytest.raises(ValueError):
        doc.add_image(QImage(), 0, 0, 1, 1)
    assert doc.to_bytes().startswith(b"%PDF")
    with pytest.raises(RuntimeError):
        doc.add_image(solid_image(2, 2), 0, 0, 1, 1)
