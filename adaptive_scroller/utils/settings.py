import math
from dataclasses import dataclass

from PySide6.QtCore import QSettings, Signal

# Defaults for settings that are accessed from multiple places.
DEFAULT_SETTINGS = {
    # Seed estimate used for every unmeasured item until real heights arrive.
    'default_item_height': 60.0,
    # Leading items assumed always on-screen; their heights never shift offsets.
    'scroll_offset_start_index': 1,
    # Scrolls farther than this many items jump instead of animating.
    'large_scroll_threshold_in_items': 50,
    'scroll_animation_duration_ms': 300,
    'scroll_animation_curve': 'InOutCubic',  # Any QEasingCurve.Type name
    'demo_item_count': 10000,
    'demo_batch_size': 40,  # Cards built per lazy batch in the demo window
    'minimal_trace_logs': True,  # Only WARN flow logs when enabled
}


class Settings(QSettings):
    # Signal that shows that the setting with the given string was changes
    change = Signal(str, object, name='settingsChanged')

    def __init__(self):
        super().__init__('adaptive_scroller', 'adaptive_scroller')

    def setValue(self, key, value):
        super().setValue(key, value)
        self.change.emit(key, value)

# Common shared instance to ensure the Signal is also shared
settings = Settings()


@dataclass(frozen=True)
class ScrollerConfig:
    """Validated snapshot of the scroll-related settings."""

    default_item_height: float = DEFAULT_SETTINGS['default_item_height']
    scroll_offset_start_index: int = DEFAULT_SETTINGS['scroll_offset_start_index']
    large_scroll_threshold_in_items: int = DEFAULT_SETTINGS['large_scroll_threshold_in_items']
    scroll_animation_duration_ms: int = DEFAULT_SETTINGS['scroll_animation_duration_ms']
    scroll_animation_curve: str = DEFAULT_SETTINGS['scroll_animation_curve']
    demo_item_count: int = DEFAULT_SETTINGS['demo_item_count']
    demo_batch_size: int = DEFAULT_SETTINGS['demo_batch_size']


def _read(key, value_type):
    default = DEFAULT_SETTINGS[key]
    try:
        return value_type(settings.value(key, defaultValue=default, type=value_type))
    except Exception:
        return default


def load_scroller_config() -> ScrollerConfig:
    default_item_height = _read('default_item_height', float)
    if not math.isfinite(default_item_height) or default_item_height <= 0:
        default_item_height = DEFAULT_SETTINGS['default_item_height']

    curve = str(_read('scroll_animation_curve', str) or '').strip()
    if not curve:
        curve = DEFAULT_SETTINGS['scroll_animation_curve']

    return ScrollerConfig(
        default_item_height=default_item_height,
        scroll_offset_start_index=max(0, _read('scroll_offset_start_index', int)),
        large_scroll_threshold_in_items=max(0, _read('large_scroll_threshold_in_items', int)),
        scroll_animation_duration_ms=max(0, min(_read('scroll_animation_duration_ms', int), 5000)),
        scroll_animation_curve=curve,
        demo_item_count=max(1, min(_read('demo_item_count', int), 1_000_000)),
        demo_batch_size=max(1, min(_read('demo_batch_size', int), 1000)),
    )
