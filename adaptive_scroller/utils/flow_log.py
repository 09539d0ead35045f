import time

from adaptive_scroller.utils.settings import settings


class FlowLogMixin:
    """Adds throttled `[TRACE]` console logging to engine and policy classes."""

    _flow_log_last: dict

    def _log_flow(self, component: str, message: str, *, level: str = "DEBUG",
                  throttle_key: str | None = None, every_s: float | None = None):
        """Timestamped, optionally throttled flow logging for scroll diagnostics."""
        # Set `minimal_trace_logs` to False in settings to see every flow log.
        try:
            minimal_trace = bool(settings.value("minimal_trace_logs", True, type=bool))
        except Exception:
            minimal_trace = True
        if minimal_trace and level != "WARN":
            return

        if not hasattr(self, "_flow_log_last"):
            self._flow_log_last = {}
        now = time.time()
        if throttle_key and every_s is not None:
            last = self._flow_log_last.get(throttle_key, 0.0)
            if (now - last) < every_s:
                return
            self._flow_log_last[throttle_key] = now
        ts = time.strftime("%H:%M:%S", time.localtime(now)) + f".{int((now % 1) * 1000):03d}"
        print(f"[{ts}][TRACE][{component}][{level}] {message}")
