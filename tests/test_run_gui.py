import sys
import threading

from adaptive_scroller import run_gui


def raise_and_capture():
    try:
        raise RuntimeError("layout exploded")
    except RuntimeError:
        return sys.exc_info()


def test_crash_log_records_traceback_and_engine_snapshot(monkeypatch, tmp_path):
    log_path = tmp_path / "crash.log"
    monkeypatch.setattr(run_gui, "CRASH_LOG_PATH", str(log_path))
    monkeypatch.setattr(run_gui, "_crash_snapshot", lambda: {"last_measured": 42})

    run_gui._append_crash_log("UNHANDLED EXCEPTION", raise_and_capture())

    text = log_path.read_text(encoding="utf-8")
    assert "UNHANDLED EXCEPTION" in text
    assert "RuntimeError: layout exploded" in text
    assert "metrics: {'last_measured': 42}" in text


def test_crash_handlers_only_replace_the_main_excepthook(monkeypatch, tmp_path):
    monkeypatch.setattr(run_gui, "CRASH_LOG_PATH", str(tmp_path / "crash.log"))
    monkeypatch.setattr(run_gui, "ENABLE_FATAL_CRASH_DUMPS", False)
    monkeypatch.setattr(run_gui, "_crash_snapshot", None)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(sys, "__excepthook__", lambda *exc_info: None)
    thread_hook = threading.excepthook

    run_gui.install_crash_handlers(snapshot=lambda: {"item_count": 3})
    sys.excepthook(*raise_and_capture())

    assert threading.excepthook is thread_hook
    assert "metrics: {'item_count': 3}" in (tmp_path / "crash.log").read_text(encoding="utf-8")
