from PySide6.QtCore import QEvent, QObject, Signal
from PySide6.QtWidgets import QWidget

INDEX_PROPERTY = "adaptive_scroller_index"


class SizeReportingFilter(QObject):
    """Reports the height of watched item widgets whenever they are resized.

    Connect `size_reported` to `OffsetCalculator.update_item_height`. Resize
    events are delivered on the GUI thread, so reports reach the engine one at
    a time; repeated reports for an index are ignored by the engine itself.
    """

    size_reported = Signal(int, float)

    def watch(self, widget: QWidget, index: int):
        widget.setProperty(INDEX_PROPERTY, int(index))
        widget.installEventFilter(self)

    def unwatch(self, widget: QWidget):
        widget.removeEventFilter(self)
        widget.setProperty(INDEX_PROPERTY, None)

    def report_now(self, widget: QWidget) -> bool:
        """Report the current height immediately (e.g. right after a layout pass)."""
        index = widget.property(INDEX_PROPERTY)
        if index is None or widget.height() <= 0:
            return False
        self.size_reported.emit(int(index), float(widget.height()))
        return True

    def eventFilter(self, watched, event):
        if event.type() == QEvent.Type.Resize:
            index = watched.property(INDEX_PROPERTY)
            height = event.size().height()
            if index is not None and height > 0:
                self.size_reported.emit(int(index), float(height))
        return super().eventFilter(watched, event)
