from clipboard_source import MemoryClipboardSource
from monitor import ClipboardMonitor
from rewriter import MARKER, get_rewriter

LINK = "https://figma.com/file/abc"


class FlakySource(MemoryClipboardSource):
    def __init__(self):
        super().__init__()
        self.fail = False

    def text(self):
        if self.fail:
            raise RuntimeError("pasteboard unavailable")
        return super().text()


def test_content_present_at_startup_is_left_alone():
    source = MemoryClipboardSource(LINK)
    monitor = ClipboardMonitor(source)
    assert monitor.tick() is None
    assert source.text() == LINK


def test_rewrite_is_written_back_once():
    source = MemoryClipboardSource()
    monitor = ClipboardMonitor(source)
    source.copy("see " + LINK)

    assert monitor.tick() == "see " + MARKER + LINK
    assert source.text() == "see " + MARKER + LINK
    revision = source.change_count()

    # our own write must not be observed as a new copy
    assert monitor.tick() is None
    assert source.change_count() == revision
    assert monitor.state.last_change_count == revision


def test_unchanged_text_is_not_written():
    source = MemoryClipboardSource()
    monitor = ClipboardMonitor(source)
    source.copy("no links here")
    revision = source.change_count()
    assert monitor.tick() is None
    assert source.change_count() == revision


def test_no_plain_text_is_skipped():
    source = MemoryClipboardSource()
    monitor = ClipboardMonitor(source)
    source.clear()
    assert monitor.tick() is None
    assert source.text() is None


def test_disabled_monitor_keeps_pending_change():
    source = MemoryClipboardSource()
    monitor = ClipboardMonitor(source)
    before = monitor.state.last_change_count
    source.copy(LINK)

    monitor.set_enabled(False)
    assert monitor.tick() is None
    assert source.text() == LINK
    assert monitor.state.last_change_count == before

    monitor.set_enabled(True)
    assert monitor.tick() == MARKER + LINK


def test_toggle_returns_new_state():
    monitor = ClipboardMonitor(MemoryClipboardSource())
    assert monitor.toggle() is False
    assert monitor.toggle() is True


def test_listener_called_after_write():
    source = MemoryClipboardSource()
    monitor = ClipboardMonitor(source)
    calls = []
    monitor.on_rewrite = lambda original, modified: calls.append((original, modified))
    source.copy(LINK)
    monitor.tick()
    assert calls == [(LINK, MARKER + LINK)]


def test_source_errors_skip_the_tick():
    source = FlakySource()
    monitor = ClipboardMonitor(source)
    source.copy(LINK)
    source.fail = True
    assert monitor.tick() is None

    source.fail = False
    source.copy(LINK)
    assert monitor.tick() == MARKER + LINK


def test_tick_is_not_reentrant():
    source = MemoryClipboardSource()
    inner = []

    def nested(text):
        inner.append(monitor.tick())
        return text.upper()

    monitor = ClipboardMonitor(source, rewriter=nested)
    source.copy("abc")
    assert monitor.tick() == "ABC"
    assert inner == [None]


def test_global_mode():
    source = MemoryClipboardSource()
    monitor = ClipboardMonitor(source, rewriter=get_rewriter("global"))
    source.copy("two links: " + LINK + " " + LINK)
    assert monitor.tick() == MARKER + "two links: " + LINK + " " + LINK


def test_stop_without_start_is_noop():
    monitor = ClipboardMonitor(MemoryClipboardSource())
    monitor.stop()
    monitor.stop()
    assert not monitor.is_running()


def test_start_stop_are_idempotent(qapp):
    monitor = ClipboardMonitor(MemoryClipboardSource(), interval_ms=20)
    monitor.start()
    timer = monitor._timer
    monitor.start()
    assert monitor._timer is timer
    assert monitor.is_running()
    monitor.stop()
    monitor.stop()
    assert not monitor.is_running()


def test_timer_drives_ticks(qtbot):
    source = MemoryClipboardSource()
    monitor = ClipboardMonitor(source, interval_ms=10)
    monitor.start()
    try:
        source.copy(LINK)
        qtbot.waitUntil(lambda: source.text() == MARKER + LINK, timeout=2000)
    finally:
        monitor.stop()
