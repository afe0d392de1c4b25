import logging
from PySide6.QtCore import QObject
from PySide6.QtWidgets import QApplication

log = logging.getLogger(__name__)


class ClipboardSource:
    """Plain-text clipboard with an opaque revision counter."""

    def change_count(self):
        raise NotImplementedError

    def text(self):
        raise NotImplementedError

    def set_text(self, text):
        raise NotImplementedError


class MemoryClipboardSource(ClipboardSource):
    # in-process clipboard; every write bumps the counter like a real pasteboard
    def __init__(self, text=None):
        self._text = text
        self._count = 0

    def change_count(self):
        return self._count

    def text(self):
        return self._text

    def set_text(self, text):
        self._text = text
        self._count += 1

    def copy(self, text):
        """Simulate an external copy from another application."""
        self.set_text(text)

    def clear(self):
        self._text = None
        self._count += 1


class QtClipboardSource(QObject, ClipboardSource):
    """Clipboard source backed by the Qt application clipboard.

    Qt has no portable change counter, so one is kept here: it is bumped on
    dataChanged and whenever a poll sees text different from the last known
    text (some platforms never signal external changes).
    """

    def __init__(self, clipboard=None, parent=None):
        super().__init__(parent)
        self.clipboard = clipboard or QApplication.clipboard()
        self._count = 0
        self._known_text = self._read_text()
        self.clipboard.dataChanged.connect(self.on_data_changed)

    def _read_text(self):
        mime = self.clipboard.mimeData()
        if mime is None or not mime.hasText():
            return None
        return self.clipboard.text()

    def on_data_changed(self):
        current = self._read_text()
        if current != self._known_text:
            self._known_text = current
            self._count += 1

    def change_count(self):
        # catch up with changes the platform did not signal
        self.on_data_changed()
        return self._count

    def text(self):
        return self._known_text

    def set_text(self, text):
        self._known_text = text
        self._count += 1
        self.clipboard.clear()
        self.clipboard.setText(text)
        log.debug("wrote %d chars to clipboard", len(text))
