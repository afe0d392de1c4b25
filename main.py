import sys
import os
import logging
from PySide6.QtWidgets import QApplication
from settings import SettingsManager
from clipboard_source import QtClipboardSource
from monitor import ClipboardMonitor
from rewriter import get_rewriter
from ui.tray import TrayIcon
from utils import get_app_dir, setup_logging

log = logging.getLogger(__name__)


def main():
    app_dir = get_app_dir()
    settings_file = os.path.join(app_dir, "settings.json")

    # load settings, writing defaults on first run
    settings = SettingsManager.load_or_create(settings_file)
    setup_logging(app_dir, settings["log_level"])
    log.info("starting clipboard helper (mode=%s)", settings["rewrite_mode"])

    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)

    source = QtClipboardSource()
    monitor = ClipboardMonitor(
        source,
        rewriter=get_rewriter(settings["rewrite_mode"]),
        interval_ms=settings["poll_interval_ms"],
        enabled=settings["monitoring_enabled"],
    )
    tray = TrayIcon(monitor, settings, settings_file)
    monitor.start()
    exit_code = app.exec()
    monitor.stop()
    log.info("clipboard helper exited")
    sys.exit(exit_code)

if __name__ == "__main__":
    main()
