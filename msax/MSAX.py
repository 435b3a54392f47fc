import logging
import numbers

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted
from tqdm.auto import tqdm

from msax.normalization import sliding_window_normalize
from msax.paa import piecewise_aggregate
from msax.symbols import gaussian_breakpoints, discretize, symbols_to_text

logger = logging.getLogger(__name__)


def check_parameters(alphabet_size, frame_size, window_size, n=None):
    for name, value in [("alphabet_size", alphabet_size), ("frame_size", frame_size), ("window_size", window_size)]:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise ValueError(f"{name} must be at least 1, got {value}")

    if n is not None:
        if n < 1:
            raise ValueError("the time series is empty")
        if window_size > n:
            raise ValueError(f"window_size ({window_size}) exceeds the length of the time series ({n})")


def run(time_series, alphabet_size: int, frame_size: int, window_size: int, verbose: bool = False):
    """Convert ``time_series`` into a sequence of symbols in ``[0, alphabet_size)``.

    The series is z-normalized against a moving window of ``window_size`` points,
    reduced to the means of frames of ``frame_size`` points and every mean is mapped
    to the equiprobable interval of the standard normal distribution it falls in.
    """
    time_series = np.asarray(time_series, dtype=float)
    if time_series.ndim != 1:
        raise ValueError(f"time_series must be one-dimensional, got shape {time_series.shape}")
    check_parameters(alphabet_size, frame_size, window_size, n=len(time_series))

    normalized = sliding_window_normalize(time_series, window_size, verbose=verbose)
    aggregated = piecewise_aggregate(normalized, frame_size)
    breakpoints = gaussian_breakpoints(alphabet_size)
    logger.debug("%d points reduced to %d frames, %d breakpoints", len(normalized), len(aggregated),
                 len(breakpoints))

    return discretize(aggregated, breakpoints)


class MSAX(BaseEstimator, TransformerMixin):

    def __init__(self, alphabet_size=8, frame_size=10, window_size=100, symbols=None, verbose=False):
        check_parameters(alphabet_size, frame_size, window_size)
        if symbols is not None and alphabet_size > len(symbols):
            raise ValueError(f"alphabet_size must be at most {len(symbols)}")

        self.alphabet_size = alphabet_size
        self.frame_size = frame_size
        self.window_size = window_size
        self.symbols = symbols
        self.verbose = verbose

    def fit(self, X=None, y=None):
        self.breakpoints_ = gaussian_breakpoints(self.alphabet_size)
        return self

    def transform(self, X):
        check_is_fitted(self, "breakpoints_")

        if isinstance(X, dict):
            symbol_X = dict()
            for k, series in tqdm(X.items(), desc="converting series to symbols", leave=False,
                                  disable=not self.verbose):
                symbol_X[k] = self._series2symb(series)
            return symbol_X

        return self._series2symb(X, verbose=self.verbose)

    def _series2symb(self, series, verbose=False):
        series = np.asarray(series, dtype=float)
        if series.ndim != 1:
            raise ValueError(f"a series must be one-dimensional, got shape {series.shape}")
        check_parameters(self.alphabet_size, self.frame_size, self.window_size, n=len(series))

        normalized = sliding_window_normalize(series, self.window_size, verbose=verbose)
        aggregated = piecewise_aggregate(normalized, self.frame_size)

        return discretize(aggregated, self.breakpoints_)

    def to_text(self, symbols):
        return symbols_to_text(symbols, alphabet=self.symbols)
