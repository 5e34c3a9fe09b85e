import os
import sys

import pytest

# ── HEADLESS QT SETUP ───────────────────────────────────────────────────────
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
from PySide6.QtGui import QColor, QImage
from PySide6.QtWidgets import QApplication

_app = QApplication.instance() or QApplication(sys.argv[:1])

from jewelcase.models.panel_part import ImageAsset


def solid_image(width: int, height: int, color=QColor(200, 30, 30)) -> QImage:
    image = QImage(width, height, QImage.Format_RGB32)
    image.fill(color)
    return image


@pytest.fixture
def qapp():
    return _app


@pytest.fixture
def make_asset():
    """Factory: make_asset(width, height, url) -> ImageAsset."""
    def _make(width=800, height=600, url="cover.png"):
        return ImageAsset.from_image(solid_image(width, height), url)
    return _make


@pytest.fixture
def png_file(tmp_path):
    """Factory: png_file(name, width, height) -> path of a PNG on disk."""
    def _write(name="art.png", width=320, height=240, color=QColor(20, 120, 220)):
        path = tmp_path / name
        assert solid_image(width, height, color).save(str(path), "PNG")
        return path
    return _write
