from dataclasses import dataclass

from adaptive_scroller.models.average_estimator import AverageEstimator
from adaptive_scroller.models.item_metrics import ItemState, MetricsStore
from adaptive_scroller.utils.flow_log import FlowLogMixin

DEFAULT_ITEM_HEIGHT = 60.0
SCROLL_OFFSET_START_INDEX = 1


@dataclass(frozen=True)
class ScrollOffsetResult:
    target_offset: float
    distance: int


class OffsetCalculator(FlowLogMixin):
    """Estimates the pixel offset of any list index from partial measurements.

    Items report their heights as they get laid out. Exact offsets are cached
    for the contiguous measured block starting at index 0 (the high-water
    mark), and everything past that block is projected with the running
    average height. Each catch-up pass retires items permanently, so the
    estimate converges to exact values as the user scrolls while a jump of
    any size costs O(1) beyond the catch-up work.
    """

    def __init__(self, item_count: int, default_item_height: float = DEFAULT_ITEM_HEIGHT,
                 scroll_offset_start_index: int = SCROLL_OFFSET_START_INDEX):
        self.item_count = max(0, int(item_count))
        self.scroll_offset_start_index = max(0, int(scroll_offset_start_index))
        self._estimator = AverageEstimator(default_item_height)
        self._store = MetricsStore(self.item_count, self._estimator)
        self._flow_log_last = {}

        self._last_measured = 0
        self._previous_index = 0
        self._bottom_index = 0

        if self.item_count == 0:
            self._log_flow("METRICS", f"Created with item_count={item_count}; offsets will all be 0",
                           level="WARN")

    @property
    def average_item_height(self) -> float:
        return self._estimator.average

    @property
    def measured_count(self) -> int:
        return self._estimator.count

    @property
    def last_measured(self) -> int:
        return self._last_measured

    @property
    def store(self) -> MetricsStore:
        return self._store

    def snapshot(self) -> dict:
        return {
            "item_count": self.item_count,
            "average_item_height": self.average_item_height,
            "measured_count": self.measured_count,
            "last_measured": self._last_measured,
            "previous_index": self._previous_index,
            "bottom_index": self._bottom_index,
        }

    def update_item_height(self, index: int, measured_height: float) -> bool:
        applied = self._store.update_height(index, measured_height)
        if applied and index == 0:
            # Index 0 starts at offset 0 and sits at the initial mark, so it is exact once measured.
            first = self._store[0]
            first.state = ItemState.CALCULATED
            first.cached_offset = 0.0
        return applied

    def set_default_item_height(self, height: float):
        self._estimator.set_default(height)

    def reset_item(self, index: int) -> bool:
        """Forget one item's measurement so its next report counts again."""
        if not self._store.in_range(index):
            return False
        retracted = self._store.reset_item(index)
        if index <= self._last_measured:
            old_mark = self._last_measured
            self._last_measured = max(0, index - 1)
            # Offsets past the reset item are no longer exact; the next catch-up recomputes them.
            for stale in range(index + 1, old_mark + 1):
                record = self._store[stale]
                if record.state is ItemState.CALCULATED:
                    record.state = ItemState.CHANGED
        return retracted

    def reset(self):
        """Drop every measurement; needed when the list's data changes wholesale."""
        self._store.reset_all()
        self._last_measured = 0
        self._previous_index = 0
        self._bottom_index = 0
        self._log_flow("METRICS", f"Reset all {self.item_count} items")

    def _contribution(self, index: int) -> float:
        # Leading items up to the start index never push later items down.
        if index > self.scroll_offset_start_index:
            return self._store[index].measured_height
        return 0.0

    def _catch_up(self, target_index: int) -> float:
        """Cache exact offsets past the high-water mark, up to the target.

        Returns the offset at which the item after the high-water mark starts.
        """
        start = self._last_measured
        anchor = self._store[start]
        if anchor.state is ItemState.CALCULATED:
            running = anchor.cached_offset + self._contribution(start)
            index = start + 1
        else:
            # Index 0 is still unmeasured, nothing past it can be exact.
            return 0.0

        while index <= target_index:
            record = self._store[index]
            if record.state is ItemState.INITIAL:
                break
            record.state = ItemState.CALCULATED
            record.cached_offset = running
            running += self._contribution(index)
            self._last_measured = index
            index += 1
        return running

    def calculate_scroll_offset(self, target_index: int,
                                current_max_scroll_extent: float) -> ScrollOffsetResult:
        """Return the offset that brings `target_index` to the top of the viewport.

        1. Targets inside the measured block are answered from the cache.
        2. Otherwise the catch-up pass advances the high-water mark toward the
           target, and the rest of the list is estimated in O(1) with the
           running average.
        3. The last item and the item right above a previous bottom target are
           resolved against the host's current maximum extent.
        """
        if target_index < 0 or target_index >= self.item_count:
            return ScrollOffsetResult(target_offset=0.0, distance=0)

        distance = abs(target_index - self._previous_index)
        self._previous_index = target_index

        if target_index <= self._last_measured:
            return ScrollOffsetResult(
                target_offset=self._store[target_index].cached_offset, distance=distance)

        running_offset = self._catch_up(target_index)
        last_index = self.item_count - 1

        if target_index <= self._last_measured:
            if target_index == last_index:
                self._bottom_index = target_index
            return ScrollOffsetResult(
                target_offset=self._store[target_index].cached_offset, distance=distance)

        remaining = last_index - self._last_measured
        total_estimate = running_offset + remaining * self._estimator.average
        host_extent = float(current_max_scroll_extent)

        self._log_flow(
            "METRICS",
            f"Estimate target={target_index} mark={self._last_measured} "
            f"avg={self._estimator.average:.1f} total={total_estimate:.0f} host={host_extent:.0f}",
            throttle_key="metrics_estimate",
            every_s=0.25,
        )

        if target_index == last_index:
            self._bottom_index = target_index
            # A larger estimate makes the host extend its scrollable region.
            target_offset = total_estimate if total_estimate > host_extent else host_extent
            last_record = self._store[target_index]
            if last_record.state is not ItemState.CALCULATED:
                last_record.cached_offset = target_offset
            return ScrollOffsetResult(target_offset=target_offset, distance=distance)

        if target_index == self._bottom_index - 1:
            # Walking up from the bottom: anchor to the host extent, not the estimate.
            self._bottom_index = target_index
            gap = self.item_count - target_index - 1
            return ScrollOffsetResult(
                target_offset=host_extent - gap * self._estimator.average, distance=distance)

        return ScrollOffsetResult(target_offset=total_estimate, distance=distance)
