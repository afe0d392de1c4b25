from PySide6.QtWidgets import QApplication

from clipboard_source import QtClipboardSource


def test_own_write_is_counted_once(qapp):
    source = QtClipboardSource()
    before = source.change_count()
    source.set_text("hello")
    after = source.change_count()
    assert after != before
    assert source.change_count() == after
    assert source.text() == "hello"


def test_external_copy_bumps_revision(qapp):
    source = QtClipboardSource()
    source.set_text("first")
    revision = source.change_count()

    QApplication.clipboard().setText("from another app")
    assert source.change_count() != revision
    assert source.text() == "from another app"
