from PySide6.QtCore import QEasingCurve, QPropertyAnimation
from PySide6.QtWidgets import QAbstractScrollArea

from adaptive_scroller.utils.flow_log import FlowLogMixin
from adaptive_scroller.utils.settings import DEFAULT_SETTINGS


def easing_curve_type(name: str | None) -> QEasingCurve.Type:
    """Map a QEasingCurve.Type name such as "InOutCubic" to the enum value."""
    fallback = getattr(QEasingCurve.Type, DEFAULT_SETTINGS['scroll_animation_curve'])
    if not name:
        return fallback
    curve_type = getattr(QEasingCurve.Type, str(name).strip(), None)
    if isinstance(curve_type, QEasingCurve.Type):
        return curve_type
    return fallback


class ScrollAreaHost(FlowLogMixin):
    """ScrollHost backed by the vertical scroll bar of a QAbstractScrollArea."""

    def __init__(self, scroll_area: QAbstractScrollArea):
        self._area = scroll_area
        self._animation: QPropertyAnimation | None = None
        self._flow_log_last = {}

    @property
    def animation(self) -> QPropertyAnimation | None:
        return self._animation

    def has_layout(self) -> bool:
        return self._area.viewport().height() > 0

    def current_max_extent(self) -> float:
        return float(self._area.verticalScrollBar().maximum())

    def stop_animation(self):
        if self._animation is not None:
            self._animation.stop()
            self._animation.deleteLater()
            self._animation = None

    def move_to(self, offset: float, *, animated: bool = False,
                duration_ms: int | None = None, curve: str | None = None):
        scroll_bar = self._area.verticalScrollBar()
        self.stop_animation()
        target = max(scroll_bar.minimum(), min(int(round(offset)), scroll_bar.maximum()))
        if target != int(round(offset)):
            self._log_flow("HOST", f"Offset {offset:.0f} clamped to scroll range -> {target}",
                           throttle_key="host_clamp", every_s=0.5)

        if not animated or not duration_ms:
            scroll_bar.setValue(target)
            return

        animation = QPropertyAnimation(scroll_bar, b"value", self._area)
        animation.setDuration(int(duration_ms))
        animation.setStartValue(scroll_bar.value())
        animation.setEndValue(target)
        animation.setEasingCurve(QEasingCurve(easing_curve_type(curve)))
        animation.start()
        self._animation = animation
