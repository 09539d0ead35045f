from typing import Protocol

from adaptive_scroller.models.offset_calculator import OffsetCalculator
from adaptive_scroller.utils.flow_log import FlowLogMixin
from adaptive_scroller.utils.settings import DEFAULT_SETTINGS


class ScrollHost(Protocol):
    """Scroll primitive the policy drives; implemented by ScrollAreaHost for Qt."""

    def has_layout(self) -> bool: ...

    def current_max_extent(self) -> float: ...

    def move_to(self, offset: float, *, animated: bool = False,
                duration_ms: int | None = None, curve: str | None = None): ...


class ScrollTargetPolicy(FlowLogMixin):
    """Turns index requests into host moves: jump for far targets, animate for near ones."""

    def __init__(
        self,
        calculator: OffsetCalculator,
        host: ScrollHost,
        *,
        large_scroll_threshold_in_items: int = DEFAULT_SETTINGS['large_scroll_threshold_in_items'],
        duration_ms: int = DEFAULT_SETTINGS['scroll_animation_duration_ms'],
        curve: str = DEFAULT_SETTINGS['scroll_animation_curve'],
    ):
        self._calculator = calculator
        self._host = host
        self.large_scroll_threshold_in_items = max(0, int(large_scroll_threshold_in_items))
        self.duration_ms = max(0, int(duration_ms))
        self.curve = curve
        self._flow_log_last = {}

    @property
    def calculator(self) -> OffsetCalculator:
        return self._calculator

    def _skipped(self, index: int) -> dict:
        return {"handled": False, "mode": "none", "index": index, "offset": 0.0, "distance": 0}

    def _resolve(self, index: int) -> tuple[float, int]:
        max_extent = float(self._host.current_max_extent())
        result = self._calculator.calculate_scroll_offset(index, max_extent)
        offset = max(0.0, result.target_offset)
        if max_extent > 0:
            offset = min(offset, max_extent)
        return offset, result.distance

    def jump_to_index(self, index: int) -> dict:
        """Move straight to the item without animation; ideal for "go to last"."""
        if not self._host.has_layout():
            self._log_flow("POLICY", f"Jump to {index} skipped: host has no layout yet")
            return self._skipped(index)

        offset, distance = self._resolve(index)
        self._host.move_to(offset, animated=False)
        self._log_flow("POLICY", f"Jump index={index} offset={offset:.0f} distance={distance}")
        return {"handled": True, "mode": "jump", "index": index, "offset": offset, "distance": distance}

    def scroll_to_index(self, index: int, duration_ms: int | None = None, curve: str | None = None) -> dict:
        """Animate to nearby items, jump when the item distance is above the threshold."""
        if not self._host.has_layout():
            self._log_flow("POLICY", f"Scroll to {index} skipped: host has no layout yet")
            return self._skipped(index)

        offset, distance = self._resolve(index)
        if distance > self.large_scroll_threshold_in_items:
            self._host.move_to(offset, animated=False)
            mode = "jump"
        else:
            self._host.move_to(
                offset,
                animated=True,
                duration_ms=self.duration_ms if duration_ms is None else max(0, int(duration_ms)),
                curve=curve or self.curve,
            )
            mode = "animate"
        self._log_flow("POLICY", f"Scroll index={index} mode={mode} offset={offset:.0f} distance={distance}")
        return {"handled": True, "mode": mode, "index": index, "offset": offset, "distance": distance}
