from PySide6.QtTest import QTest

from adaptive_scroller.utils.settings import ScrollerConfig
from adaptive_scroller.widgets.adaptive_list_window import AdaptiveListWindow


def make_window(qapp, item_count=200, batch_size=20):
    config = ScrollerConfig(demo_item_count=item_count, demo_batch_size=batch_size)
    window = AdaptiveListWindow(config, seed=1)
    window.show()
    qapp.processEvents()
    return window


def test_window_builds_first_batch_and_measures_it(qapp):
    window = make_window(qapp)

    assert window.built_count >= 20
    assert window.calculator.item_count == 200
    assert window.calculator.measured_count > 0
    assert "measured" in window.status_label.text()
    window.close()


def test_requested_index_is_built_before_scrolling(qapp):
    window = make_window(qapp)
    window.index_spin_box.setValue(150)

    window.scroll_to_requested_index()
    assert window.built_count > 150
    # The offset is only requested once the deferred scroll runs.
    assert window.calculator.snapshot()["previous_index"] == 0

    QTest.qWait(50)

    assert window.calculator.snapshot()["previous_index"] == 150
    window.close()


def test_last_button_jumps_through_policy(qapp):
    window = make_window(qapp)

    window.jump_to_last()

    assert window.calculator.snapshot()["bottom_index"] == 199
    window.close()


def test_build_stops_at_item_count(qapp):
    window = make_window(qapp, item_count=30, batch_size=20)

    window.scroll_to_requested_index()
    window.index_spin_box.setValue(29)
    window.scroll_to_requested_index()

    assert window.built_count == 30
    window.close()


def test_reset_metrics_remeasures_built_cards(qapp):
    window = make_window(qapp)
    built = window.built_count

    window.reset_metrics()

    assert window.calculator.last_measured == 0
    assert 0 < window.calculator.measured_count <= built
    window.close()
