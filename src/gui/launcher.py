"""Launcher for ``python -m gui`` / the ``cardioregistry-tour`` script."""

from __future__ import annotations

import argparse
import logging
import sys

from PyQt6.QtCore import QTimer

from config import settings
from gui.app.bootstrap import create_application
from gui.main_window import MainWindow


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="CardioRegistry shell with the guided tour")
    ap.add_argument("--role", default=settings.DEFAULT_ROLE, help="Viewer role (default: admin)")
    ap.add_argument("--data-dir", default=settings.DATA_DIR, help="Directory for preferences")
    ap.add_argument(
        "--reset-tour",
        action="store_true",
        help="Forget that the tour was completed so it starts again",
    )
    ap.add_argument("--log-level", default=settings.LOG_LEVEL)
    return ap


def main(argv: list[str] | None = None) -> int:  # pragma: no cover - runtime
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx = create_application(role=args.role, data_dir=args.data_dir)
    if args.reset_tour:
        ctx.preferences.reset()
    win = MainWindow(ctx.controller, event_bus=ctx.event_bus)
    win.show()
    # first-run tour once the window has its geometry
    QTimer.singleShot(0, ctx.controller.start_if_first_run)
    return ctx.qt_app.exec()


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
