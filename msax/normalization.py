import logging
import warnings

import numpy as np
from tqdm.auto import tqdm

logger = logging.getLogger(__name__)


class RollingWindow():
    """Mean and sample variance of the last ``window_size`` pushed values, updated in O(1) per push."""

    def __init__(self, window_size: int):
        if window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {window_size}")
        self.window_size = window_size
        self.values = np.zeros(window_size)
        self.count = 0
        self.head = 0
        self.last = None
        self.run = 0
        self._mean = 0.0
        self._m2 = 0.0

    def push(self, value):
        value = float(value)
        self.run = self.run + 1 if self.count and value == self.last else 1
        self.last = value

        if self.count < self.window_size:
            self.count += 1
            delta = value - self._mean
            self._mean += delta / self.count
            self._m2 += delta * (value - self._mean)
        else:
            # ring buffer: the oldest value leaves the window
            old = float(self.values[self.head])
            old_mean = self._mean
            self._mean = old_mean + (value - old) / self.window_size
            self._m2 += (value - old) * (value - self._mean + old - old_mean)

        self.values[self.head] = value
        self.head = (self.head + 1) % self.window_size

        # a constant window has exactly zero variance
        if self.run >= self.count:
            self._mean = value
            self._m2 = 0.0
        return self

    def __len__(self):
        return self.count

    def mean(self):
        if self.count == 0:
            raise ValueError("mean of an empty window")
        return self._mean

    def variance(self):
        if self.count < 2:
            return 0.0
        return max(self._m2, 0.0) / (self.count - 1)

    def std(self):
        return np.sqrt(self.variance())


def sliding_window_normalize(time_series, window_size: int, verbose: bool = False):
    """Z-normalize every point against a moving window of ``window_size`` points.

    The first ``window_size // 2`` points use the statistics of the first window,
    the points in the middle use a window lagging ``(window_size + 1) // 2`` behind
    the newest pushed value, and the last ``(window_size + 1) // 2`` points use the
    statistics of the last window.

    A window with zero variance yields ``inf``/``nan`` at the points it normalizes.
    """
    x = np.asarray(time_series, dtype=float)
    n = len(x)
    if window_size < 1:
        raise ValueError(f"window_size must be at least 1, got {window_size}")
    if window_size > n:
        raise ValueError(f"window_size ({window_size}) exceeds the length of the time series ({n})")

    normalized = np.empty(n)
    window = RollingWindow(window_size)
    for value in x[:window_size]:
        window.push(value)

    half = window_size // 2
    lag = (window_size + 1) // 2
    with np.errstate(divide="ignore", invalid="ignore"):
        normalized[:half] = (x[:half] - window.mean()) / window.std()

        for i in tqdm(range(window_size, n), desc="normalizing", leave=False, disable=not verbose):
            window.push(x[i])
            j = i - lag
            normalized[j] = (x[j] - window.mean()) / window.std()

        normalized[n - lag:] = (x[n - lag:] - window.mean()) / window.std()

    if not np.all(np.isfinite(normalized)):
        warnings.warn("zero variance window: the normalized series contains non-finite values", RuntimeWarning)

    logger.debug("normalized %d points with a window of %d", n, window_size)
    return normalized
