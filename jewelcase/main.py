#!/usr/bin/env python3
import argparse
import asyncio
import logging
import os
import sys

from PySide6.QtWidgets import QApplication

from jewelcase.config import DEFAULT_PAPER, DEFAULT_TITLE, VALID_UNITS
from jewelcase.models.dimensions import PAPER_SIZES, PANEL_SPECS, TRAY_SPEC, PanelId
from jewelcase.services.app_settings import AppSettings
from jewelcase.services.editing_session import EditingSession
from jewelcase.services.errors import InvalidPaperSize
from jewelcase.services.export_manager import ExportManager, ExportRequest
from jewelcase.utils.unit_converter import format_dimension
from jewelcase.utils.valid_path import ValidPath
from jewelcase.views.case_scene import front_stage, tray_stage

log = logging.getLogger("jewelcase")

# --- Helpers ---------------------------------------------------------------

def _die(msg: str, code: int = 2):
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(code)


def _panel_table(unit: str) -> str:
    rows = [(spec.name, spec) for spec in PANEL_SPECS.values()] + [(TRAY_SPEC.name, TRAY_SPEC)]
    lines = []
    for name, spec in rows:
        size = f"{format_dimension(spec.width_in, unit)} x {format_dimension(spec.height_in, unit)}"
        lines.append(f"{name:<12} {size:<24} {spec.width_px}x{spec.height_px}px")
    return "\n".join(lines)


# --- Argparse --------------------------------------------------------------

def build_parser():
    p = argparse.ArgumentParser(
        prog="jewelcase",
        description="Lay out CD jewel case artwork and export a print-ready PDF",
    )
    p.add_argument("--front", help="front cover image (path, file:// or data: URL)")
    p.add_argument("--left-spine", help="left spine image")
    p.add_argument("--back", help="back center image")
    p.add_argument("--right-spine", help="right spine image")
    p.add_argument("--sync-spines", action="store_true",
                   help="mirror the left spine onto the right spine")
    p.add_argument("--offset", nargs=3, action="append", default=[],
                   metavar=("PANEL", "X", "Y"),
                   help="move a panel's image, in panel pixels (repeatable); "
                        f"PANEL is one of {', '.join(pid.value for pid in PanelId)}")
    p.add_argument("--paper", default=DEFAULT_PAPER,
                   help=f"paper size: {', '.join(PAPER_SIZES)} (default {DEFAULT_PAPER})")
    p.add_argument("--title", default=DEFAULT_TITLE, help="used for the PDF title and filename")
    p.add_argument("--export", "-e", dest="export_dir", default=".",
                   help="output directory (default: current directory)")
    p.add_argument("--unit", choices=VALID_UNITS, default="in", help="display unit for --info")
    p.add_argument("--info", action="store_true", help="print panel dimensions and exit")
    p.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return p


def _parse_offsets(raw):
    offsets = []
    for name, x, y in raw:
        try:
            offsets.append((PanelId(name), float(x), float(y)))
        except ValueError:
            _die(f"invalid --offset {name} {x} {y}")
    return offsets


# --- Main ------------------------------------------------------------------

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        settings = AppSettings(display_unit=args.unit, paper_size=args.paper)
    except InvalidPaperSize as e:
        _die(str(e))

    if args.info:
        print(_panel_table(settings.display_unit))
        return 0

    out_dir = ValidPath.output_dir(args.export_dir)
    if out_dir is None:
        _die(f"invalid export directory: {args.export_dir}")
    offsets = _parse_offsets(args.offset)

    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication(sys.argv[:1])

    session = EditingSession()
    failures = []
    session.asset_failed.connect(lambda pid, err: failures.append(err))

    if args.sync_spines:
        session.set_sync_enabled(True)
        if args.right_spine:
            log.warning("--right-spine is ignored while spines are synced")

    urls = {
        PanelId.FRONT_COVER: args.front,
        PanelId.LEFT_SPINE: args.left_spine,
        PanelId.BACK_CENTER: args.back,
        PanelId.RIGHT_SPINE: None if args.sync_spines else args.right_spine,
    }
    asyncio.run(session.load_images({pid: url for pid, url in urls.items() if url}))

    for panel_id, x, y in offsets:
        session.update_offset(panel_id, x, y)

    front, tray = front_stage(), tray_stage()
    front.bind(session)
    tray.bind(session)

    manager = ExportManager.from_settings(settings)
    result = manager.export(
        ExportRequest(settings.paper_size, args.title, front_stage=front, tray_stage=tray),
        out_dir,
    )
    print(result.path)
    return 1 if (failures or result.warnings) else 0


if __name__ == "__main__":
    sys.exit(main())
