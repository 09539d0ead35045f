class AverageEstimator:
    """Running mean of reported item heights, seeded with a default estimate.

    The mean is updated with the plain incremental formula
    ``(average * count + height) / (count + 1)`` rather than Welford's method.
    Heights are small positive pixel values and the count is bounded by the
    list length, so the accumulated rounding error stays far below a pixel.
    """

    def __init__(self, default_height: float = 60.0):
        self._default_height = float(default_height)
        self._average = self._default_height
        self._count = 0

    @property
    def average(self) -> float:
        return self._average

    @property
    def count(self) -> int:
        return self._count

    @property
    def default_height(self) -> float:
        return self._default_height

    def accumulate(self, height: float):
        self._average = (self._average * self._count + height) / (self._count + 1)
        self._count += 1

    def retract(self, height: float):
        """Remove one previously accumulated height from the mean."""
        if self._count <= 1:
            self._count = 0
            self._average = self._default_height
            return
        self._average = (self._average * self._count - height) / (self._count - 1)
        self._count -= 1

    def set_default(self, height: float):
        """Replace the seed; the live average only follows while nothing is measured."""
        self._default_height = float(height)
        if self._count == 0:
            self._average = self._default_height

    def reset(self):
        self._count = 0
        self._average = self._default_height
