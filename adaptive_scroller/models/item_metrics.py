import math
from dataclasses import dataclass
from enum import Enum

from adaptive_scroller.models.average_estimator import AverageEstimator

UNMEASURED_HEIGHT = -1.0


class ItemState(Enum):
    INITIAL = 'initial'  # No height reported yet
    CHANGED = 'changed'  # Height reported, offset not cached yet
    CALCULATED = 'calculated'  # Offset cached and exact


@dataclass
class ItemMetrics:
    measured_height: float = UNMEASURED_HEIGHT
    cached_offset: float = 0.0
    state: ItemState = ItemState.INITIAL

    def clear(self):
        self.measured_height = UNMEASURED_HEIGHT
        self.cached_offset = 0.0
        self.state = ItemState.INITIAL


class MetricsStore:
    """Fixed-size, index-addressed metrics records for one list.

    Records are allocated once for the whole list and never resized. Every
    first height report for an index is forwarded to the estimator, so the
    running average always covers exactly the measured records.
    """

    def __init__(self, item_count: int, estimator: AverageEstimator):
        self._estimator = estimator
        self._records = [ItemMetrics() for _ in range(max(0, int(item_count)))]

    def __len__(self):
        return len(self._records)

    def __getitem__(self, index: int) -> ItemMetrics:
        return self._records[index]

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self._records)

    def update_height(self, index: int, height: float) -> bool:
        """Record the first reported height of an item; later reports are ignored."""
        if not self.in_range(index):
            return False
        record = self._records[index]
        if record.state is not ItemState.INITIAL:
            return False
        height = float(height)
        if not math.isfinite(height) or height < 0:
            return False

        record.measured_height = height
        record.state = ItemState.CHANGED
        self._estimator.accumulate(height)
        return True

    def reset_item(self, index: int) -> bool:
        """Re-arm one record and retract its height from the average.

        Returns True only when a measured height was retracted.
        """
        if not self.in_range(index):
            return False
        record = self._records[index]
        was_measured = record.state is not ItemState.INITIAL
        if was_measured:
            self._estimator.retract(record.measured_height)
        record.clear()
        return was_measured

    def reset_all(self):
        for record in self._records:
            record.clear()
        self._estimator.reset()
