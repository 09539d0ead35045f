from PySide6.QtCore import QEasingCurve, QEvent, QPropertyAnimation
from PySide6.QtWidgets import QApplication, QScrollArea, QWidget

from adaptive_scroller.widgets.scroll_area_host import ScrollAreaHost, easing_curve_type


def make_area(qapp, content_height=2000):
    area = QScrollArea()
    content = QWidget()
    content.setFixedSize(200, content_height)
    area.setWidget(content)
    area.resize(240, 300)
    area.show()
    qapp.processEvents()
    return area


def test_easing_curve_names_resolve_with_fallback():
    assert easing_curve_type("OutBounce") == QEasingCurve.Type.OutBounce
    assert easing_curve_type("NotACurve") == QEasingCurve.Type.InOutCubic
    assert easing_curve_type(None) == QEasingCurve.Type.InOutCubic


def test_host_reports_layout_and_extent(qapp):
    area = make_area(qapp)
    host = ScrollAreaHost(area)

    assert host.has_layout() is True
    assert host.current_max_extent() > 0
    assert host.current_max_extent() == float(area.verticalScrollBar().maximum())


def test_jump_sets_value_and_clamps_to_range(qapp):
    area = make_area(qapp)
    host = ScrollAreaHost(area)
    scroll_bar = area.verticalScrollBar()

    host.move_to(420.4)
    assert scroll_bar.value() == 420

    host.move_to(10_000_000.0)
    assert scroll_bar.value() == scroll_bar.maximum()

    host.move_to(-50.0)
    assert scroll_bar.value() == 0


def test_animated_move_uses_property_animation(qapp):
    area = make_area(qapp)
    host = ScrollAreaHost(area)

    host.move_to(600.0, animated=True, duration_ms=250, curve="OutQuad")

    animation = host.animation
    assert animation is not None
    assert animation.duration() == 250
    assert animation.endValue() == 600
    assert animation.easingCurve().type() == QEasingCurve.Type.OutQuad

    host.move_to(100.0)
    assert host.animation is None
    assert area.verticalScrollBar().value() == 100


def test_zero_duration_animation_degrades_to_jump(qapp):
    area = make_area(qapp)
    host = ScrollAreaHost(area)

    host.move_to(300.0, animated=True, duration_ms=0)

    assert host.animation is None
    assert area.verticalScrollBar().value() == 300


def test_repeated_animated_moves_do_not_accumulate_animations(qapp):
    area = make_area(qapp)
    host = ScrollAreaHost(area)

    for step in range(50):
        host.move_to(float(step * 10), animated=True, duration_ms=200)
    QApplication.sendPostedEvents(None, QEvent.Type.DeferredDelete)

    assert len(area.findChildren(QPropertyAnimation)) <= 1
