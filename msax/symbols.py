from functools import lru_cache

import numpy as np
from scipy.stats import norm


@lru_cache(maxsize=None)
def _gaussian_breakpoints(alphabet_size):
    breakpoints = np.array(norm.ppf(np.arange(1, alphabet_size) / alphabet_size), dtype=float)
    breakpoints.flags.writeable = False
    return breakpoints


def gaussian_breakpoints(alphabet_size: int):
    """Quantiles of the standard normal distribution at ``i / alphabet_size``, ``i = 1 .. alphabet_size - 1``.

    They split the real line into ``alphabet_size`` equiprobable intervals.
    """
    if alphabet_size < 1:
        raise ValueError(f"alphabet_size must be at least 1, got {alphabet_size}")

    return _gaussian_breakpoints(int(alphabet_size)).copy()


def discretize(values, breakpoints):
    """Map every value to the index of the first breakpoint it is strictly lower than.

    Values greater than or equal to every breakpoint (``nan`` included) get ``len(breakpoints)``.
    """
    values = np.asarray(values, dtype=float)
    breakpoints = np.asarray(breakpoints, dtype=float)
    if np.any(np.diff(breakpoints) < 0):
        raise ValueError("breakpoints must be sorted in non-decreasing order")

    return np.searchsorted(breakpoints, values, side="right").astype(np.int64)


def symbols_to_text(symbols, alphabet=None):
    if alphabet is None:
        return "".join([chr(ord("a") + int(c)) for c in symbols])

    return "".join([alphabet[int(c)] for c in symbols])


def inverse_symbols_to_text(text, alphabet=None, alphabet_size=None):
    if alphabet is None:
        symbols = [ord(ch) - ord("a") for ch in text]
    else:
        alphabet = list(alphabet)
        symbols = []
        for ch in text:
            if ch not in alphabet:
                raise ValueError(f"'{ch}' is not a symbol of {alphabet}")
            symbols.append(alphabet.index(ch))

    if alphabet_size is not None:
        for ch, c in zip(text, symbols):
            if not 0 <= c < alphabet_size:
                raise ValueError(f"'{ch}' is outside an alphabet of size {alphabet_size}")

    return np.array(symbols, dtype=np.int64)
