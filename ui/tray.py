import os
import logging
from PySide6.QtWidgets import QApplication, QSystemTrayIcon, QMenu, QStyle
from PySide6.QtGui import QAction, QIcon
from PySide6.QtCore import QObject
from settings import SettingsManager
from utils import get_icon_path

log = logging.getLogger(__name__)


class TrayIcon(QObject):
    def __init__(self, monitor, settings, settings_path, parent=None):
        super().__init__(parent)
        self.monitor = monitor
        self.settings = settings
        self.settings_path = settings_path
        self.rewrite_count = 0

        self.tray_icon = QSystemTrayIcon(self)
        self.initUI()
        self.monitor.on_rewrite = self.on_rewrite

    def initUI(self):
        tray_menu = QMenu()
        self.toggle_action = QAction("enable monitoring", self)
        self.toggle_action.setCheckable(True)
        self.toggle_action.setChecked(self.monitor.enabled)
        self.toggle_action.toggled.connect(self.toggle_monitoring)
        tray_menu.addAction(self.toggle_action)

        tray_menu.addSeparator()

        exit_action = QAction("quit", self)
        exit_action.triggered.connect(self.exit_app)
        tray_menu.addAction(exit_action)

        # keep a reference, the tray does not own the menu
        self.tray_menu = tray_menu
        self.tray_icon.setContextMenu(tray_menu)
        self.update_icon()
        self.tray_icon.show()

    def get_icon(self):
        icon_name = "clipboard_fill.png" if self.monitor.enabled else "clipboard.png"
        icon_path = get_icon_path(icon_name)
        if os.path.exists(icon_path):
            return QIcon(icon_path)
        style = QApplication.style()
        if self.monitor.enabled:
            return style.standardIcon(QStyle.SP_DialogApplyButton)
        return style.standardIcon(QStyle.SP_DialogCancelButton)

    def update_icon(self):
        self.tray_icon.setIcon(self.get_icon())
        state = "on" if self.monitor.enabled else "off"
        self.tray_icon.setToolTip(f"clipboard helper: monitoring {state}, {self.rewrite_count} rewrites")

    def toggle_monitoring(self, checked):
        self.monitor.set_enabled(checked)
        self.settings["monitoring_enabled"] = self.monitor.enabled
        try:
            SettingsManager.save_settings(self.settings, self.settings_path)
        except OSError as e:
            log.error("failed to save settings: %s", e)
        self.update_icon()

    def on_rewrite(self, original, modified):
        self.rewrite_count += 1
        self.update_icon()

    def exit_app(self):
        self.monitor.stop()
        self.tray_icon.hide()
        QApplication.quit()
