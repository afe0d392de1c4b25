import logging
from PySide6.QtCore import QTimer
from rewriter import rewrite

log = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 500


class MonitorState:
    def __init__(self, enabled=True, last_change_count=None):
        self.enabled = enabled
        self.last_change_count = last_change_count

    def __repr__(self):
        return f"MonitorState(enabled={self.enabled}, last_change_count={self.last_change_count})"


class ClipboardMonitor:
    """Polls a clipboard source and writes back rewritten text.

    One tick reads the source's revision, and only when it moved does it read
    the text, run the rewriter and write the result back. The revision after
    our own write is remembered, so the output is never seen as a new copy.
    """

    def __init__(self, source, rewriter=rewrite, interval_ms=DEFAULT_INTERVAL_MS, enabled=True):
        self.source = source
        self.rewriter = rewriter
        self.interval_ms = interval_ms
        # changes made before the monitor existed are not ours to rewrite
        self.state = MonitorState(enabled, source.change_count())
        self.on_rewrite = None
        self._timer = None
        self._busy = False

    @property
    def enabled(self):
        return self.state.enabled

    def set_enabled(self, enabled):
        # toggling never touches last_change_count
        self.state.enabled = bool(enabled)
        log.info("monitoring %s", "enabled" if self.state.enabled else "disabled")

    def toggle(self):
        self.set_enabled(not self.state.enabled)
        return self.state.enabled

    def tick(self):
        """Run one check cycle. Returns the text written back, or None."""
        if not self.state.enabled or self._busy:
            return None
        self._busy = True
        try:
            return self._check()
        except Exception:
            log.exception("clipboard check failed, skipping tick")
            return None
        finally:
            self._busy = False

    def _check(self):
        revision = self.source.change_count()
        if revision == self.state.last_change_count:
            return None
        self.state.last_change_count = revision

        text = self.source.text()
        if not text:
            log.debug("no plain text on clipboard")
            return None

        modified = self.rewriter(text)
        if modified == text:
            return None

        self.source.set_text(modified)
        self.state.last_change_count = self.source.change_count()
        log.info("rewrote clipboard text (%d -> %d chars)", len(text), len(modified))
        if self.on_rewrite:
            self.on_rewrite(text, modified)
        return modified

    def start(self):
        if self._timer is not None:
            return
        self._timer = QTimer()
        self._timer.setInterval(self.interval_ms)
        self._timer.timeout.connect(self.tick)
        self._timer.start()
        log.info("clipboard monitor started (every %d ms)", self.interval_ms)

    def stop(self):
        if self._timer is None:
            return
        self._timer.stop()
        self._timer = None
        log.info("clipboard monitor stopped")

    def is_running(self):
        return self._timer is not None and self._timer.isActive()
