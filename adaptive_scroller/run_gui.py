import logging
import os
import sys
import traceback
import warnings
import faulthandler
from datetime import datetime

from PySide6.QtWidgets import QApplication, QMessageBox

from adaptive_scroller.utils.settings import load_scroller_config
from adaptive_scroller.widgets.adaptive_list_window import AdaptiveListWindow

CRASH_LOG_PATH = os.path.abspath('adaptive_scroller_crash.log')
FATAL_LOG_PATH = os.path.abspath('adaptive_scroller_fatal.log')
_fatal_log_handle = None
ENABLE_FATAL_CRASH_DUMPS = os.getenv('ADAPTIVE_SCROLLER_ENABLE_FAULTHANDLER', '0') == '1'

# Engine state written next to every crash; set once the window exists.
_crash_snapshot = None


def _append_crash_log(title: str, exc_info):
    """Append a timestamped traceback plus the engine snapshot to the crash log."""
    ts = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    try:
        with open(CRASH_LOG_PATH, 'a', encoding='utf-8') as f:
            f.write(f"\n{ts} | {title}\n")
            f.writelines(traceback.format_exception(*exc_info))
            if _crash_snapshot is not None:
                f.write(f"metrics: {_crash_snapshot()}\n")
    except OSError as log_error:
        print(f"[CRASH] Failed to write crash log: {log_error}")
        return
    print(f"[CRASH] Details written to: {CRASH_LOG_PATH}")


def install_crash_handlers(snapshot=None):
    """Log uncaught exceptions (PySide routes slot errors here too); fatal dumps are opt-in."""
    global _fatal_log_handle, _crash_snapshot
    _crash_snapshot = snapshot

    def _unhandled_exception(exc_type, exc_value, exc_traceback):
        _append_crash_log("UNHANDLED EXCEPTION", (exc_type, exc_value, exc_traceback))
        sys.__excepthook__(exc_type, exc_value, exc_traceback)

    sys.excepthook = _unhandled_exception

    if ENABLE_FATAL_CRASH_DUMPS and _fatal_log_handle is None:
        try:
            _fatal_log_handle = open(FATAL_LOG_PATH, 'a', encoding='utf-8', buffering=1)
            faulthandler.enable(file=_fatal_log_handle)
            print(f"[CRASH] Fatal trace dumps enabled: {FATAL_LOG_PATH}")
        except OSError as e:
            print(f"[WARNING] Could not enable faulthandler: {e}")


def suppress_warnings():
    """Suppress all warnings when not in a development environment."""
    environment = os.getenv('ADAPTIVE_SCROLLER_ENVIRONMENT')
    if environment == 'development':
        logging.basicConfig(level=logging.DEBUG)
        print('Running in development environment.')
        return
    logging.basicConfig(level=logging.ERROR)
    warnings.simplefilter('ignore')


def run_gui():
    app = QApplication.instance() or QApplication([])
    # The application name is shown in the taskbar.
    app.setApplicationName('Adaptive Scroller')
    # The application display name is shown in the title bar.
    app.setApplicationDisplayName('Adaptive Scroller')
    app.setStyle('Fusion')

    global _crash_snapshot
    main_window = AdaptiveListWindow(load_scroller_config())
    _crash_snapshot = main_window.calculator.snapshot
    main_window.show()
    return int(app.exec())


def main():
    suppress_warnings()
    install_crash_handlers()
    try:
        return run_gui()
    except Exception as exception:
        _append_crash_log("TOP-LEVEL EXCEPTION", sys.exc_info())
        error_message_box = QMessageBox()
        error_message_box.setWindowTitle('Error')
        error_message_box.setIcon(QMessageBox.Icon.Critical)
        error_message_box.setText(str(exception))
        error_message_box.setDetailedText(traceback.format_exc())
        error_message_box.exec()
        return 1


if __name__ == '__main__':
    sys.exit(main())
