import random

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (QHBoxLayout, QLabel, QMainWindow, QPushButton,
                               QScrollArea, QSpinBox, QVBoxLayout, QWidget)

from adaptive_scroller.models.offset_calculator import OffsetCalculator
from adaptive_scroller.utils.settings import ScrollerConfig, load_scroller_config
from adaptive_scroller.widgets.scroll_area_host import ScrollAreaHost
from adaptive_scroller.widgets.scroll_target_policy import ScrollTargetPolicy
from adaptive_scroller.widgets.size_reporting import SizeReportingFilter

CARD_COLORS = ('#bbdefb', '#c8e6c9', '#ffe0b2', '#f8bbd0', '#d1c4e9', '#b2ebf2', '#fff9c4')


class AdaptiveListWindow(QMainWindow):
    """Demo window: a lazily built list of variable-height cards with index navigation."""

    def __init__(self, config: ScrollerConfig | None = None, *, seed: int | None = None):
        super().__init__()
        self.config = config or load_scroller_config()
        self._random = random.Random(seed)
        self._cards: list[QLabel] = []

        self.calculator = OffsetCalculator(
            self.config.demo_item_count,
            default_item_height=self.config.default_item_height,
            scroll_offset_start_index=self.config.scroll_offset_start_index,
        )
        self.size_filter = SizeReportingFilter(self)
        self.size_filter.size_reported.connect(self._on_size_reported)

        self.setWindowTitle('Adaptive Scroller')
        central = QWidget(self)
        layout = QVBoxLayout(central)

        controls = QHBoxLayout()
        self.index_spin_box = QSpinBox()
        self.index_spin_box.setRange(0, max(0, self.config.demo_item_count - 1))
        self.index_spin_box.setPrefix('Index ')
        self.jump_button = QPushButton('Jump')
        self.last_button = QPushButton('Last')
        self.reset_button = QPushButton('Reset metrics')
        controls.addWidget(self.index_spin_box, stretch=1)
        controls.addWidget(self.jump_button)
        controls.addWidget(self.last_button)
        controls.addWidget(self.reset_button)
        layout.addLayout(controls)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(True)
        self._list_widget = QWidget()
        self._list_layout = QVBoxLayout(self._list_widget)
        self._list_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        self.scroll_area.setWidget(self._list_widget)
        layout.addWidget(self.scroll_area, stretch=1)

        self.status_label = QLabel()
        layout.addWidget(self.status_label)
        self.setCentralWidget(central)

        self.host = ScrollAreaHost(self.scroll_area)
        self.policy = ScrollTargetPolicy(
            self.calculator,
            self.host,
            large_scroll_threshold_in_items=self.config.large_scroll_threshold_in_items,
            duration_ms=self.config.scroll_animation_duration_ms,
            curve=self.config.scroll_animation_curve,
        )

        self.jump_button.clicked.connect(self.scroll_to_requested_index)
        self.last_button.clicked.connect(self.jump_to_last)
        self.reset_button.clicked.connect(self.reset_metrics)
        scroll_bar = self.scroll_area.verticalScrollBar()
        scroll_bar.valueChanged.connect(self._grow_if_near_bottom)
        scroll_bar.rangeChanged.connect(lambda _min, _max: self._grow_if_near_bottom())

        self.resize(480, 720)
        self._build_next_batch()
        self._update_status()

    @property
    def built_count(self) -> int:
        return len(self._cards)

    def _make_card(self, index: int) -> QLabel:
        lines = self._random.randint(1, 3)
        card = QLabel('\n'.join(f'Item {index}' for _ in range(lines)))
        card.setWordWrap(True)
        card.setStyleSheet(
            f'background: {CARD_COLORS[index % len(CARD_COLORS)]};'
            'border-radius: 6px; padding: 16px; font-size: 16px;'
        )
        return card

    def _build_next_batch(self) -> int:
        start = len(self._cards)
        end = min(self.config.demo_item_count, start + self.config.demo_batch_size)
        for index in range(start, end):
            card = self._make_card(index)
            self.size_filter.watch(card, index)
            self._list_layout.addWidget(card)
            self._cards.append(card)
        return end - start

    def _ensure_built(self, index: int):
        while len(self._cards) <= index and self._build_next_batch():
            pass

    def _grow_if_near_bottom(self, _value=None):
        scroll_bar = self.scroll_area.verticalScrollBar()
        viewport_height = self.scroll_area.viewport().height()
        if scroll_bar.value() >= scroll_bar.maximum() - viewport_height:
            self._build_next_batch()

    def _on_size_reported(self, index: int, height: float):
        if self.calculator.update_item_height(index, height):
            self._update_status()

    def _update_status(self):
        self.status_label.setText(
            f'avg height {self.calculator.average_item_height:.1f}px | '
            f'measured {self.calculator.measured_count} | '
            f'exact up to #{self.calculator.last_measured} | '
            f'built {len(self._cards)}/{self.calculator.item_count}'
        )

    def scroll_to_requested_index(self):
        index = self.index_spin_box.value()
        # Build the target and let Qt lay it out before asking for an offset.
        self._ensure_built(index)
        QTimer.singleShot(0, lambda: self._finish_scroll(index))

    def _finish_scroll(self, index: int):
        self.policy.scroll_to_index(index)
        self._update_status()

    def jump_to_last(self):
        self.policy.jump_to_index(self.calculator.item_count - 1)
        self._update_status()

    def reset_metrics(self):
        self.calculator.reset()
        for card in self._cards:
            self.size_filter.report_now(card)
        self._update_status()
